"""
Custom exceptions for the rental storefront.

This module provides a hierarchy of custom exceptions for consistent error handling
throughout the application.

Exception Hierarchy:
--------------------
RentalShopException (base)
├── ValidationException            (client-side precondition, no request sent)
│   ├── PricingException
│   │   ├── DurationUnavailableException
│   │   └── InvalidQuantityException
│   └── RentalDatesException
│       ├── MissingRentalDatesException
│       └── InvalidRentalRangeException
├── ApiException
│   ├── ServerRejectionException   (4xx/5xx or transport failure)
│   │   └── AuthRequiredException  (401)
│   └── MalformedResponseException
├── CartException
│   ├── CartItemNotFoundException      (+ ValidationException)
│   └── QuantityExceedsStockException  (+ ValidationException)
├── CouponException
│   ├── EmptyCouponCodeException       (+ ValidationException)
│   ├── EmptyOrderException            (+ ValidationException)
│   ├── BelowMinimumOrderException     (+ ValidationException)
│   ├── CouponApplyInProgressException (+ ValidationException)
│   └── InvalidOrExpiredCouponException
└── WishlistException
    ├── AlreadyInWishlistException     (+ ValidationException)
    └── InvalidProductException        (+ ValidationException)

Usage:
------
Services raise specific exceptions:
    raise QuantityExceedsStockException(product_id="p1", requested=5, available=2)

Callers convert them into user-facing messages:
    try:
        await cart_service.add_item(product, 5, RentalDuration.DAILY, selection)
    except RentalShopException as e:
        show_toast(handle_service_error(e))
"""

from .base import RentalShopException, ValidationException
from .api import (
    ApiException,
    ServerRejectionException,
    AuthRequiredException,
    MalformedResponseException,
)
from .pricing import PricingException, DurationUnavailableException, InvalidQuantityException
from .rental import RentalDatesException, MissingRentalDatesException, InvalidRentalRangeException
from .cart import CartException, CartItemNotFoundException, QuantityExceedsStockException
from .coupon import (
    CouponException,
    EmptyCouponCodeException,
    EmptyOrderException,
    BelowMinimumOrderException,
    CouponApplyInProgressException,
    InvalidOrExpiredCouponException,
)
from .wishlist import WishlistException, AlreadyInWishlistException, InvalidProductException

__all__ = [
    # Base
    'RentalShopException',
    'ValidationException',

    # API
    'ApiException',
    'ServerRejectionException',
    'AuthRequiredException',
    'MalformedResponseException',

    # Pricing
    'PricingException',
    'DurationUnavailableException',
    'InvalidQuantityException',

    # Rental dates
    'RentalDatesException',
    'MissingRentalDatesException',
    'InvalidRentalRangeException',

    # Cart
    'CartException',
    'CartItemNotFoundException',
    'QuantityExceedsStockException',

    # Coupon
    'CouponException',
    'EmptyCouponCodeException',
    'EmptyOrderException',
    'BelowMinimumOrderException',
    'CouponApplyInProgressException',
    'InvalidOrExpiredCouponException',

    # Wishlist
    'WishlistException',
    'AlreadyInWishlistException',
    'InvalidProductException',
]
