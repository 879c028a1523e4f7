"""
Configuration Validation Module

Validates critical configuration values at startup to fail-fast
with clear error messages instead of runtime failures.
"""

import sys
from urllib.parse import urlparse


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""
    pass


def validate_api_base_url(api_base_url: str | None) -> None:
    """
    Validate the marketplace API base URL.

    Raises:
        ConfigValidationError: If URL is missing or not http(s)
    """
    if not api_base_url or len(api_base_url.strip()) == 0:
        raise ConfigValidationError(
            "API_BASE_URL is required!\n"
            "Add to .env: API_BASE_URL=http://localhost:5000/api"
        )

    parsed = urlparse(api_base_url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ConfigValidationError(
            f"API_BASE_URL must be an absolute http(s) URL (got: {api_base_url})"
        )


def validate_api_timeout(timeout_seconds: float) -> None:
    """
    Validate request timeout.

    Raises:
        ConfigValidationError: If timeout is not positive or unreasonably large
    """
    if timeout_seconds <= 0:
        raise ConfigValidationError(
            f"API_TIMEOUT_SECONDS must be positive (got: {timeout_seconds})"
        )
    if timeout_seconds > 300:
        raise ConfigValidationError(
            f"API_TIMEOUT_SECONDS is too large (got: {timeout_seconds}, maximum: 300)"
        )


def validate_startup_config(config_module) -> None:
    """
    Validate all critical configuration at startup.

    Args:
        config_module: The config module to validate

    Raises:
        ConfigValidationError: If any validation fails
    """
    validate_api_base_url(getattr(config_module, 'API_BASE_URL', None))
    validate_api_timeout(getattr(config_module, 'API_TIMEOUT_SECONDS', 0))


def validate_or_exit(config_module) -> None:
    """
    Validate configuration and exit with error code 1 if validation fails.

    This is the main entry point for startup validation.

    Args:
        config_module: The config module to validate
    """
    try:
        validate_startup_config(config_module)
    except ConfigValidationError as e:
        print(f"\n ERROR: Configuration Validation Failed\n", file=sys.stderr)
        print(str(e), file=sys.stderr)
        print("\nStartup aborted. Please fix configuration and try again.\n", file=sys.stderr)
        sys.exit(1)
