from enum import Enum


class DateField(str, Enum):
    """Which date the next calendar interaction changes."""
    DELIVERY = "delivery"
    PICKUP = "pickup"
