from decimal import Decimal

from pydantic import BaseModel, ConfigDict

from enums.delivery_type import DeliveryType


class CheckoutSummaryDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    subtotal: Decimal
    discount_amount: Decimal
    delivery_type: DeliveryType | None = None
    delivery_cost: Decimal
    total: Decimal
    coupon_code: str | None = None
