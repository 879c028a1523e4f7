"""
Coupon-related exceptions.
"""

from decimal import Decimal

from .base import RentalShopException, ValidationException


class CouponException(RentalShopException):
    """Base exception for coupon errors."""
    pass


class EmptyCouponCodeException(CouponException, ValidationException):
    """Raised when applying a blank coupon code."""

    def __init__(self):
        super().__init__("Coupon code is empty")


class EmptyOrderException(CouponException, ValidationException):
    """Raised when applying a coupon to a zero-amount order."""

    def __init__(self, code: str):
        super().__init__(
            f"Coupon {code} cannot be applied to an empty order",
            details={'code': code}
        )
        self.code = code


class BelowMinimumOrderException(CouponException, ValidationException):
    """Raised when the order total is below the coupon's minimum order amount."""

    def __init__(self, code: str, min_order_amount: Decimal, order_amount: Decimal):
        amount_short = min_order_amount - order_amount
        super().__init__(
            f"Coupon {code} requires a minimum order of {min_order_amount} ({amount_short} short)",
            details={'code': code, 'min_order_amount': min_order_amount, 'order_amount': order_amount}
        )
        self.code = code
        self.min_order_amount = min_order_amount
        self.order_amount = order_amount
        self.amount_short = amount_short


class CouponApplyInProgressException(CouponException, ValidationException):
    """Raised when a coupon is applied while another apply is still running."""

    def __init__(self, code: str):
        super().__init__(
            f"Another coupon is being applied, ignoring {code}",
            details={'code': code}
        )
        self.code = code


class InvalidOrExpiredCouponException(CouponException):
    """Raised when the server rejects a coupon code (4xx)."""

    def __init__(self, code: str, reason: str | None = None, status_code: int | None = None):
        super().__init__(
            reason or f"Coupon {code} is invalid or expired",
            details={'code': code, 'status_code': status_code}
        )
        self.code = code
        self.reason = reason
        self.status_code = status_code
