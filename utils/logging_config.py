"""
Logging for the storefront client.

Services log every cart, wishlist and coupon round trip (request failures at
WARNING, completed mutations at INFO or DEBUG). Those lines can carry the
user's bearer token, coupon payloads and customer contact details echoed
back by the API, so both handlers run them through SecretMaskingFilter
before anything is written.
"""

import logging
import logging.handlers
import re
from pathlib import Path
from typing import Pattern

import config

LOG_FORMAT = '%(asctime)s | %(name)-25s | %(levelname)-8s | %(message)s'
LOG_FILE_NAME = "storefront.log"


class SecretMaskingFilter(logging.Filter):
    """
    Replaces credentials and customer contact data with [REDACTED_*] markers.

    Covers the Authorization header value, token=/token: pairs from config
    dumps and API payloads, passwords, e-mail addresses and phone numbers
    from delivery addresses. Records are rewritten, never dropped.
    """

    PATTERNS: list[tuple[Pattern, str]] = [
        (re.compile(r'(Bearer\s+)([A-Za-z0-9_\-\.]+)', re.IGNORECASE), r'\1[REDACTED_BEARER_TOKEN]'),
        (re.compile(r'(token["\']?\s*[:=]\s*["\']?)([A-Za-z0-9_\-\.:]{16,})(["\']?)', re.IGNORECASE), r'\1[REDACTED_TOKEN]\3'),
        (re.compile(r'(password["\']?\s*[:=]\s*["\']?)([^\s"\']+)(["\']?)', re.IGNORECASE), r'\1[REDACTED_PASSWORD]\3'),
        (re.compile(r'\b([a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,})\b'), '[REDACTED_EMAIL]'),
        (re.compile(r'(?<![\w-])(\+?\d{1,3}[-.\s]?)?\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}\b'), '[REDACTED_PHONE]'),
    ]

    @classmethod
    def mask(cls, text: str) -> str:
        for pattern, replacement in cls.PATTERNS:
            text = pattern.sub(replacement, text)
        return text

    def filter(self, record: logging.LogRecord) -> bool:
        if record.msg:
            record.msg = self.mask(str(record.msg))
        if record.args:
            record.args = tuple(self.mask(arg) if isinstance(arg, str) else arg for arg in record.args)
        return True


def setup_logging():
    """
    Route the root logger to the console and to <LOG_DIR>/storefront.log.

    Called once by run.main() before the config is validated, so validation
    problems are logged too. The file rotates at midnight and keeps
    LOG_RETENTION_DAYS files. aiohttp's own loggers are held at WARNING so
    DEBUG runs show the storefront's lines rather than connection chatter.
    """
    log_dir = Path(getattr(config, "LOG_DIR", "logs"))
    log_dir.mkdir(parents=True, exist_ok=True)

    log_level_str = getattr(config, "LOG_LEVEL", "INFO")
    log_level = getattr(logging, log_level_str.upper(), logging.INFO)
    retention_days = getattr(config, "LOG_RETENTION_DAYS", 5)
    mask_secrets = getattr(config, "LOG_MASK_SECRETS", True)

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S')
    handlers = [
        logging.handlers.TimedRotatingFileHandler(
            filename=log_dir / LOG_FILE_NAME,
            when="midnight",
            interval=1,
            backupCount=retention_days,
            encoding="utf-8"
        ),
        logging.StreamHandler(),
    ]

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    for handler in handlers:
        handler.setFormatter(formatter)
        handler.setLevel(log_level)
        if mask_secrets:
            handler.addFilter(SecretMaskingFilter())
        root_logger.addHandler(handler)

    logging.getLogger("aiohttp").setLevel(max(log_level, logging.WARNING))

    logging.info(
        f"Storefront logging ready: level={log_level_str}, retention={retention_days}d, "
        f"masking={'on' if mask_secrets else 'off'}, file={log_dir / LOG_FILE_NAME}"
    )
