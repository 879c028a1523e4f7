from decimal import Decimal

from enums.delivery_type import DeliveryType
from models.cart import CartSnapshot
from models.checkout import CheckoutSummaryDTO
from utils.money import ZERO, to_amount


class CheckoutService:

    @staticmethod
    def summarize(
        cart: CartSnapshot,
        delivery_type: DeliveryType | None = None,
        delivery_cost: Decimal = ZERO,
    ) -> CheckoutSummaryDTO:
        """
        Build the order summary shown before payment.

        Delivery cost only counts for SHIPPING; self pickup is free. The
        discount is the server-computed amount stored with the applied coupon.
        The payable total never goes below zero.

        Example:
            subtotal 2000, coupon 300, shipping 150 → total 1850
        """
        subtotal = cart.total_amount
        discount = cart.discount_amount
        effective_delivery = to_amount(delivery_cost) if delivery_type == DeliveryType.SHIPPING else ZERO
        total = max(subtotal - discount + effective_delivery, ZERO)
        return CheckoutSummaryDTO(
            subtotal=subtotal,
            discount_amount=discount,
            delivery_type=delivery_type,
            delivery_cost=effective_delivery,
            total=total,
            coupon_code=cart.applied_coupon.code if cart.applied_coupon is not None else None,
        )
