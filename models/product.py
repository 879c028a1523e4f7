# a product as the renter sees it. Rates are per rental unit of the bucket;
# a zero rate means the bucket is not offered. Stock is the vendor's total
# quantity on hand, the backend re-checks it on every cart write.
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, field_validator

from enums.rental_duration import RentalDuration
from utils.money import to_amount, ZERO


class ProductDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str = ""
    category: str = "General"
    description: str = ""
    price_per_hour: Decimal = ZERO
    price_per_day: Decimal = ZERO
    price_per_week: Decimal = ZERO
    quantity_on_hand: int = 0
    vendor_id: str | None = None
    is_published: bool = True

    @field_validator("id", "vendor_id", mode="before")
    @classmethod
    def id_to_str(cls, v):
        if v is None:
            return v
        return str(v)

    @field_validator("price_per_hour", "price_per_day", "price_per_week", mode="before")
    @classmethod
    def normalize_rate(cls, v) -> Decimal:
        return to_amount(v)

    @field_validator("quantity_on_hand", mode="before")
    @classmethod
    def normalize_quantity(cls, v) -> int:
        if v is None:
            return 0
        return max(int(v), 0)

    def rate_for(self, duration: RentalDuration) -> Decimal:
        if duration == RentalDuration.HOURLY:
            return self.price_per_hour
        elif duration == RentalDuration.DAILY:
            return self.price_per_day
        else:
            return self.price_per_week

    def duration_for_price(self, unit_price: Decimal) -> RentalDuration | None:
        """First bucket whose non-zero rate equals unit_price, or None."""
        for duration in RentalDuration:
            rate = self.rate_for(duration)
            if rate > ZERO and rate == unit_price:
                return duration
        return None

    @classmethod
    def from_api(cls, payload: dict) -> 'ProductDTO':
        """
        Build a ProductDTO from a backend product object.

        Pricing arrives either as a list of entries
            [{"type": "DAY", "price": "1000.00"}, ...]
        or as an object
            {"pricePerDay": "1000.00", "pricePerWeek": 5000, ...}
        Stock arrives as inventory.totalQty, inventory.quantityOnHand or a
        top-level quantityOnHand.
        """
        rates = {
            RentalDuration.HOURLY: None,
            RentalDuration.DAILY: None,
            RentalDuration.WEEKLY: None,
        }
        pricing = payload.get("pricing")
        if isinstance(pricing, list):
            for entry in pricing:
                try:
                    duration = RentalDuration.from_pricing_type(entry.get("type"))
                except ValueError:
                    # Monthly and other rate types are not sold by the storefront
                    continue
                rates[duration] = entry.get("price")
        elif isinstance(pricing, dict):
            rates[RentalDuration.HOURLY] = pricing.get("pricePerHour")
            rates[RentalDuration.DAILY] = pricing.get("pricePerDay")
            rates[RentalDuration.WEEKLY] = pricing.get("pricePerWeek")
        else:
            rates[RentalDuration.HOURLY] = payload.get("pricePerHour")
            rates[RentalDuration.DAILY] = payload.get("pricePerDay")
            rates[RentalDuration.WEEKLY] = payload.get("pricePerWeek")

        inventory = payload.get("inventory") or {}
        quantity = inventory.get("totalQty")
        if quantity is None:
            quantity = inventory.get("quantityOnHand")
        if quantity is None:
            quantity = payload.get("quantityOnHand")

        return cls(
            id=payload["id"],
            name=payload.get("name") or "",
            category=payload.get("category") or "General",
            description=payload.get("description") or "",
            price_per_hour=rates[RentalDuration.HOURLY],
            price_per_day=rates[RentalDuration.DAILY],
            price_per_week=rates[RentalDuration.WEEKLY],
            quantity_on_hand=quantity,
            vendor_id=payload.get("vendorId"),
            is_published=payload.get("isPublished", True) is not False,
        )
