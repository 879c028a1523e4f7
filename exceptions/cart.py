"""
Cart-related exceptions.
"""

from .base import RentalShopException, ValidationException


class CartException(RentalShopException):
    """Base exception for cart-related errors."""
    pass


class CartItemNotFoundException(CartException, ValidationException):
    """Raised when a cart line is not in the local cart."""

    def __init__(self, cart_item_id: str):
        super().__init__(
            f"Cart item {cart_item_id} not found",
            details={'cart_item_id': cart_item_id}
        )
        self.cart_item_id = cart_item_id


class QuantityExceedsStockException(CartException, ValidationException):
    """Raised when requested quantity is above the product's stock."""

    def __init__(self, product_id: str, requested: int, available: int):
        super().__init__(
            f"Only {available} units of product {product_id} available (requested: {requested})",
            details={'product_id': product_id, 'requested': requested, 'available': available}
        )
        self.product_id = product_id
        self.requested = requested
        self.available = available
