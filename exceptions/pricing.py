"""
Pricing-related exceptions.
"""

from .base import ValidationException


class PricingException(ValidationException):
    """Base exception for pricing errors."""
    pass


class DurationUnavailableException(PricingException):
    """Raised when a product has no rate for the selected duration bucket."""

    def __init__(self, product_id: str, duration: str):
        super().__init__(
            f"Product {product_id} cannot be rented {duration}",
            details={'product_id': product_id, 'duration': duration}
        )
        self.product_id = product_id
        self.duration = duration


class InvalidQuantityException(PricingException):
    """Raised when quantity is not a positive integer."""

    def __init__(self, quantity):
        super().__init__(
            f"Quantity must be a positive integer (got: {quantity!r})",
            details={'quantity': quantity}
        )
        self.quantity = quantity
