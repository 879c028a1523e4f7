from enum import Enum


class DeliveryType(str, Enum):
    PICKUP = "pickup"
    SHIPPING = "shipping"
