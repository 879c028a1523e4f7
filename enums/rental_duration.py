from enum import Enum


class RentalDuration(str, Enum):
    """
    Pricing bucket a product may be rented in.

    The value is what the storefront uses; `pricing_type` is the tag the
    backend stores on each product pricing entry (HOUR/DAY/WEEK).
    """
    HOURLY = "hourly"
    DAILY = "daily"
    WEEKLY = "weekly"

    @property
    def pricing_type(self) -> str:
        return _PRICING_TYPES[self]

    @classmethod
    def from_pricing_type(cls, value: str) -> 'RentalDuration':
        """
        Convert backend pricing type (HOUR/DAY/WEEK) to RentalDuration.

        Raises:
            ValueError: If value is not a known pricing type
        """
        normalized = (value or "").strip().upper()
        for duration, pricing_type in _PRICING_TYPES.items():
            if pricing_type == normalized:
                return duration
        raise ValueError(
            f"Invalid pricing type '{value}'. Valid types: {', '.join(_PRICING_TYPES.values())}"
        )


_PRICING_TYPES = {
    RentalDuration.HOURLY: "HOUR",
    RentalDuration.DAILY: "DAY",
    RentalDuration.WEEKLY: "WEEK",
}
