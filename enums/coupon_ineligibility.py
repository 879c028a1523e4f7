from enum import Enum


class CouponIneligibility(str, Enum):
    EXPIRED = "expired"
    USAGE_LIMIT_REACHED = "usage_limit_reached"
    BELOW_MINIMUM = "below_minimum"
    REJECTED_BY_SERVER = "rejected_by_server"
