"""
Models Package

pydantic DTOs and immutable snapshots exchanged between repositories,
services and callers. Nothing here talks to the network.
"""

from models.auth import AuthContextDTO
from models.product import ProductDTO
from models.rental import DateRangeState, RentalSelectionDTO, RentalQuoteDTO
from models.coupon import CouponDTO, CouponEligibilityDTO, CouponValidationDTO, AppliedCouponDTO
from models.cart import CartLineDTO, CartSnapshot
from models.wishlist import WishlistSnapshot
from models.checkout import CheckoutSummaryDTO
from models.sync import SyncResult

__all__ = [
    'AuthContextDTO',
    'ProductDTO',
    'DateRangeState',
    'RentalSelectionDTO',
    'RentalQuoteDTO',
    'CouponDTO',
    'CouponEligibilityDTO',
    'CouponValidationDTO',
    'AppliedCouponDTO',
    'CartLineDTO',
    'CartSnapshot',
    'WishlistSnapshot',
    'CheckoutSummaryDTO',
    'SyncResult',
]
