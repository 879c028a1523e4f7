"""
Error Handler Utility for storefront callers

Provides centralized error handling with:
- Localized error messages (the "toast" a user sees)
- Server messages surfaced verbatim when the API sent one
- Logging for debugging

Usage:
    from utils.error_handler import handle_service_error

    try:
        await cart_service.add_item(product, 2, RentalDuration.DAILY, selection)
    except RentalShopException as e:
        show_toast(handle_service_error(e))
"""

import functools
import logging
from typing import Callable

from enums.message_entity import MessageEntity
from exceptions import (
    RentalShopException,
    ServerRejectionException,
    AuthRequiredException,
    MalformedResponseException,
    DurationUnavailableException,
    InvalidQuantityException,
    MissingRentalDatesException,
    InvalidRentalRangeException,
    CartItemNotFoundException,
    QuantityExceedsStockException,
    EmptyCouponCodeException,
    EmptyOrderException,
    BelowMinimumOrderException,
    CouponApplyInProgressException,
    InvalidOrExpiredCouponException,
    AlreadyInWishlistException,
    InvalidProductException,
)
from utils.localizator import Localizator
from utils.money import format_currency

logger = logging.getLogger(__name__)

# Map exception types to localization keys
ERROR_MAPPING = {
    # API exceptions
    AuthRequiredException: "error_auth_required",
    ServerRejectionException: "error_server_rejection",
    MalformedResponseException: "error_malformed_response",

    # Pricing exceptions
    DurationUnavailableException: "error_duration_unavailable",
    InvalidQuantityException: "error_invalid_quantity",

    # Rental date exceptions
    MissingRentalDatesException: "error_missing_rental_dates",
    InvalidRentalRangeException: "error_invalid_rental_range",

    # Cart exceptions
    CartItemNotFoundException: "error_cart_item_not_found",
    QuantityExceedsStockException: "error_quantity_exceeds_stock",

    # Coupon exceptions
    EmptyCouponCodeException: "error_empty_coupon_code",
    EmptyOrderException: "error_empty_order",
    BelowMinimumOrderException: "error_below_minimum",
    CouponApplyInProgressException: "error_coupon_apply_in_progress",
    InvalidOrExpiredCouponException: "error_invalid_coupon",

    # Wishlist exceptions
    AlreadyInWishlistException: "error_already_in_wishlist",
    InvalidProductException: "error_invalid_product",
}


def _localization_key(exception: RentalShopException) -> str | None:
    for cls in type(exception).__mro__:
        if cls in ERROR_MAPPING:
            return ERROR_MAPPING[cls]
    return None


def handle_service_error(
    exception: RentalShopException,
    entity: MessageEntity = MessageEntity.USER,
    lang: str | None = None,
) -> str:
    """
    Convert a storefront exception to a localized user-facing message.

    Args:
        exception: The custom exception raised by a service
        entity: Localization section
        lang: Optional language code, defaults to config.LANGUAGE

    Returns:
        Localized error message string

    Example:
        try:
            await coupon_service.apply("SAVE10", Decimal("300"))
        except BelowMinimumOrderException as e:
            handle_service_error(e)  # "Add ₹200 more to use SAVE10"
    """
    logger.warning(f"Service error handled: {type(exception).__name__} - {str(exception)}")

    # Server text wins when the API explained itself
    if isinstance(exception, InvalidOrExpiredCouponException) and exception.reason:
        return exception.reason
    if isinstance(exception, ServerRejectionException) and not isinstance(exception, AuthRequiredException):
        if exception.server_message:
            return exception.server_message

    localization_key = _localization_key(exception)
    if not localization_key:
        # Unknown exception type - use generic error message
        logger.error(f"Unmapped exception type: {type(exception).__name__}")
        return Localizator.get_text(entity, "error_unexpected", lang=lang)

    # Get exception attributes for formatting
    exception_data = {}
    if hasattr(exception, 'available'):
        exception_data['available'] = exception.available
    if hasattr(exception, 'requested'):
        exception_data['requested'] = exception.requested
    if hasattr(exception, 'duration'):
        exception_data['duration'] = exception.duration
    if hasattr(exception, 'code'):
        exception_data['code'] = exception.code
    if hasattr(exception, 'amount_short'):
        exception_data['amount_short'] = format_currency(exception.amount_short, lang=lang)

    try:
        return Localizator.get_text(entity, localization_key, lang=lang).format(**exception_data)
    except KeyError as e:
        # Missing formatting parameter - log and return without formatting
        logger.error(f"Missing format parameter in error message: {e}")
        return Localizator.get_text(entity, localization_key, lang=lang)


def handle_unexpected_error(
    exception: Exception,
    entity: MessageEntity = MessageEntity.USER,
    lang: str | None = None,
) -> str:
    """
    Handle unexpected exceptions (non-RentalShopException).

    Note:
        Also logs the full exception for debugging
    """
    logger.error(f"Unexpected error: {type(exception).__name__} - {str(exception)}", exc_info=True)
    return Localizator.get_text(entity, "error_unexpected", lang=lang)


def safe_service_call(notify: Callable[[str], object], entity: MessageEntity = MessageEntity.USER):
    """
    Decorator for async entry points: any exception becomes a message passed to notify.

    Usage:
        @safe_service_call(notify=print)
        async def add_to_cart(shop, product):
            await shop.add_to_cart(product, 1, RentalDuration.DAILY)

    The wrapped call returns None when it failed.
    """
    def decorator(handler_func):
        @functools.wraps(handler_func)
        async def wrapper(*args, **kwargs):
            try:
                return await handler_func(*args, **kwargs)
            except RentalShopException as e:
                notify(handle_service_error(e, entity))
            except Exception as e:
                notify(handle_unexpected_error(e, entity))
            return None

        return wrapper
    return decorator
