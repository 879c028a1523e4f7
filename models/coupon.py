from datetime import datetime, timezone
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, field_validator

from enums.coupon_ineligibility import CouponIneligibility
from enums.discount_type import DiscountType
from utils.money import to_amount, ZERO


class CouponDTO(BaseModel):
    """
    Coupon as listed by GET /coupons/available.

    The server owns current_usage_count and the discount arithmetic;
    the client only reads these fields for eligibility pre-checks.
    user_id None means the coupon is available to everyone.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    code: str
    description: str = ""
    discount_type: DiscountType
    discount_value: Decimal
    min_order_amount: Decimal | None = None
    max_usage_count: int | None = None
    current_usage_count: int = 0
    expiry_date: datetime | None = None
    is_welcome_coupon: bool = False
    user_id: str | None = None
    is_applicable: bool | None = None
    not_applicable_reason: str | None = None

    @field_validator("id", "user_id", mode="before")
    @classmethod
    def id_to_str(cls, v):
        if v is None:
            return v
        return str(v)

    @field_validator("code", mode="before")
    @classmethod
    def normalize_code(cls, v: str) -> str:
        return str(v).strip().upper()

    @field_validator("discount_value", mode="before")
    @classmethod
    def normalize_value(cls, v) -> Decimal:
        return to_amount(v)

    @field_validator("min_order_amount", mode="before")
    @classmethod
    def normalize_min_order(cls, v) -> Decimal | None:
        if v is None:
            return None
        return to_amount(v)

    def is_expired(self, now: datetime | None = None) -> bool:
        if self.expiry_date is None:
            return False
        # naive datetimes are local time
        now = (now or datetime.now(timezone.utc)).astimezone()
        return self.expiry_date.astimezone() < now

    @property
    def is_usage_exhausted(self) -> bool:
        return self.max_usage_count is not None and self.current_usage_count >= self.max_usage_count

    @classmethod
    def from_api(cls, payload: dict) -> 'CouponDTO':
        return cls(
            id=payload["id"],
            code=payload["code"],
            description=payload.get("description") or "",
            discount_type=payload["discountType"],
            discount_value=payload.get("discountValue"),
            min_order_amount=payload.get("minOrderAmount"),
            max_usage_count=payload.get("maxUsageCount"),
            current_usage_count=payload.get("currentUsageCount") or 0,
            expiry_date=payload.get("expiryDate"),
            is_welcome_coupon=bool(payload.get("isWelcomeCoupon", False)),
            user_id=payload.get("userId"),
            is_applicable=payload.get("isApplicable"),
            not_applicable_reason=payload.get("notApplicableReason"),
        )


class CouponEligibilityDTO(BaseModel):
    """Client-side verdict for one listed coupon against the current order total."""
    model_config = ConfigDict(frozen=True)

    coupon: CouponDTO
    is_applicable: bool
    reason: CouponIneligibility | None = None
    message: str | None = None
    amount_short: Decimal | None = None


class CouponValidationDTO(BaseModel):
    """POST /coupons/validate result. discount_amount is computed by the server."""
    model_config = ConfigDict(frozen=True)

    coupon_id: str
    code: str
    description: str = ""
    discount_type: DiscountType
    discount_value: Decimal
    discount_amount: Decimal

    @classmethod
    def from_api(cls, payload: dict) -> 'CouponValidationDTO':
        coupon = payload.get("coupon") or {}
        return cls(
            coupon_id=str(coupon["id"]),
            code=str(coupon["code"]).upper(),
            description=coupon.get("description") or "",
            discount_type=coupon["discountType"],
            discount_value=to_amount(coupon.get("discountValue")),
            discount_amount=to_amount(payload.get("discountAmount")),
        )


class AppliedCouponDTO(BaseModel):
    """
    The single coupon slot of a cart.

    An empty code with a zero discount is the "remove coupon" signal.
    """
    model_config = ConfigDict(frozen=True)

    code: str
    discount_amount: Decimal = ZERO
    coupon_id: str | None = None

    @property
    def is_removal(self) -> bool:
        return not self.code and self.discount_amount == ZERO
