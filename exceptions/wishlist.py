"""
Wishlist-related exceptions.
"""

from .base import RentalShopException, ValidationException


class WishlistException(RentalShopException):
    """Base exception for wishlist errors."""
    pass


class AlreadyInWishlistException(WishlistException, ValidationException):
    """Raised when adding a product that is already wishlisted."""

    def __init__(self, product_id: str):
        super().__init__(
            f"Product {product_id} is already in wishlist",
            details={'product_id': product_id}
        )
        self.product_id = product_id


class InvalidProductException(WishlistException, ValidationException):
    """Raised when a product reference has no id."""

    def __init__(self):
        super().__init__("Invalid product")
