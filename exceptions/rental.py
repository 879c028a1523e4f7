"""
Rental date range exceptions.
"""

from datetime import datetime

from .base import ValidationException


class RentalDatesException(ValidationException):
    """Base exception for rental date errors."""
    pass


class MissingRentalDatesException(RentalDatesException):
    """Raised when delivery or pickup date is not selected."""

    def __init__(self, missing: list[str]):
        super().__init__(
            f"Rental dates not selected: {', '.join(missing)}",
            details={'missing': missing}
        )
        self.missing = missing


class InvalidRentalRangeException(RentalDatesException):
    """Raised when pickup date is not strictly after delivery date."""

    def __init__(self, delivery_date: datetime, pickup_date: datetime):
        super().__init__(
            f"Pickup date {pickup_date.isoformat()} must be after delivery date {delivery_date.isoformat()}",
            details={'delivery_date': delivery_date, 'pickup_date': pickup_date}
        )
        self.delivery_date = delivery_date
        self.pickup_date = pickup_date
