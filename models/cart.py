# the cart is owned by the server. The client keeps a snapshot of the last
# fetch; every mutation goes through the server first and the snapshot is
# rebuilt from the response (or the line is filtered out after a delete).
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from enums.rental_duration import RentalDuration
from models.coupon import AppliedCouponDTO
from models.product import ProductDTO
from utils.money import to_amount, ZERO


class CartLineDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    product_id: str
    product: ProductDTO | None = None
    quantity: int = Field(ge=1)
    unit_price: Decimal
    rental_start: datetime
    rental_end: datetime
    duration: RentalDuration | None = None

    @field_validator("id", "product_id", mode="before")
    @classmethod
    def id_to_str(cls, v):
        if v is None:
            return v
        return str(v)

    @field_validator("unit_price", mode="before")
    @classmethod
    def normalize_price(cls, v) -> Decimal:
        return to_amount(v)

    @property
    def total_price(self) -> Decimal:
        return self.unit_price * self.quantity


class CartSnapshot(BaseModel):
    """Immutable view of the cart. Helpers return new snapshots."""
    model_config = ConfigDict(frozen=True)

    lines: tuple[CartLineDTO, ...] = ()
    applied_coupon: AppliedCouponDTO | None = None

    @property
    def total_amount(self) -> Decimal:
        return sum((line.total_price for line in self.lines), ZERO)

    @property
    def discount_amount(self) -> Decimal:
        if self.applied_coupon is None:
            return ZERO
        return self.applied_coupon.discount_amount

    @property
    def amount_after_discount(self) -> Decimal:
        return max(self.total_amount - self.discount_amount, ZERO)

    @property
    def is_empty(self) -> bool:
        return len(self.lines) == 0

    def find_line(self, line_id: str) -> CartLineDTO | None:
        for line in self.lines:
            if line.id == line_id:
                return line
        return None

    def with_lines(self, lines) -> 'CartSnapshot':
        return self.model_copy(update={"lines": tuple(lines)})

    def without_line(self, line_id: str) -> 'CartSnapshot':
        return self.with_lines(line for line in self.lines if line.id != line_id)

    def with_coupon(self, applied_coupon: AppliedCouponDTO | None) -> 'CartSnapshot':
        if applied_coupon is not None and applied_coupon.is_removal:
            applied_coupon = None
        return self.model_copy(update={"applied_coupon": applied_coupon})
