import math
from datetime import datetime, timedelta
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, model_validator

from enums.date_field import DateField
from enums.rental_duration import RentalDuration

DAY = timedelta(days=1)


def rental_days_between(delivery_date: datetime, pickup_date: datetime) -> int:
    """Whole chargeable days, any started day counts: ceil((pickup - delivery) / 1 day)."""
    return math.ceil((pickup_date - delivery_date) / DAY)


class DateRangeState(BaseModel):
    """
    Two-step delivery/pickup picker state.

    active_field tracks which date the next calendar click changes;
    selecting a delivery date moves it to PICKUP.
    """
    model_config = ConfigDict(frozen=True)

    delivery_date: datetime | None = None
    pickup_date: datetime | None = None
    active_field: DateField = DateField.DELIVERY

    @property
    def is_complete(self) -> bool:
        return self.delivery_date is not None and self.pickup_date is not None


class RentalSelectionDTO(BaseModel):
    """A complete, ordered rental date range with the chosen pricing bucket."""
    model_config = ConfigDict(frozen=True)

    delivery_date: datetime
    pickup_date: datetime
    duration: RentalDuration = RentalDuration.DAILY

    @model_validator(mode="after")
    def pickup_after_delivery(self) -> 'RentalSelectionDTO':
        if self.pickup_date <= self.delivery_date:
            raise ValueError("pickup_date must be strictly after delivery_date")
        return self

    @property
    def rental_days(self) -> int:
        return rental_days_between(self.delivery_date, self.pickup_date)


class RentalQuoteDTO(BaseModel):
    """Price of one cart line before it is added. discount_percent is informational."""
    product_id: str
    duration: RentalDuration
    unit_price: Decimal
    quantity: int
    line_total: Decimal
    rental_days: int
    discount_percent: int
