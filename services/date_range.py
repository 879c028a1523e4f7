import logging
from datetime import date, datetime

from enums.date_field import DateField
from enums.rental_duration import RentalDuration
from exceptions.rental import InvalidRentalRangeException, MissingRentalDatesException
from models.rental import DAY, DateRangeState, RentalSelectionDTO, rental_days_between

logger = logging.getLogger(__name__)


def _local_date(value: datetime) -> date:
    # aware datetimes are compared in the machine's local zone, naive ones are local already
    if value.tzinfo is not None:
        return value.astimezone().date()
    return value.date()


def _ordinal(day: int) -> str:
    if 11 <= day % 100 <= 13:
        return "th"
    return {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")


class DateRangeResolver:
    """
    Two-step delivery/pickup date picker.

    Every transition takes a DateRangeState and returns a new one; nothing
    here keeps state. Rejected selections return the input state unchanged.
    """

    @staticmethod
    def initial(delivery_date: datetime | None = None, pickup_date: datetime | None = None) -> DateRangeState:
        state = DateRangeState()
        if delivery_date is not None:
            state = DateRangeResolver.select_delivery(state, delivery_date)
        if pickup_date is not None:
            state = DateRangeResolver.select_pickup(state, pickup_date)
        return state.model_copy(update={"active_field": DateField.DELIVERY})

    @staticmethod
    def select_delivery(state: DateRangeState, delivery_date: datetime) -> DateRangeState:
        """
        Set the delivery date and move focus to pickup.

        An existing pickup date on or before the new delivery date is moved
        to delivery_date + 1 day, so the range stays strictly ordered.
        """
        pickup_date = state.pickup_date
        if pickup_date is not None and pickup_date <= delivery_date:
            pickup_date = delivery_date + DAY
            logger.debug(f"Pickup date advanced to {pickup_date.isoformat()}")
        return state.model_copy(update={
            "delivery_date": delivery_date,
            "pickup_date": pickup_date,
            "active_field": DateField.PICKUP,
        })

    @staticmethod
    def select_pickup(state: DateRangeState, pickup_date: datetime) -> DateRangeState:
        if DateRangeResolver.is_pickup_date_disabled(pickup_date, state.delivery_date):
            logger.debug(f"Ignoring pickup date {pickup_date.isoformat()}: not after delivery date")
            return state
        return state.model_copy(update={"pickup_date": pickup_date})

    @staticmethod
    def select_date(state: DateRangeState, selected: datetime, now: datetime | None = None) -> DateRangeState:
        """Calendar click: apply the disabled-date policy, then set whichever field is active."""
        if state.active_field == DateField.DELIVERY:
            if DateRangeResolver.is_delivery_date_disabled(selected, now):
                logger.debug(f"Ignoring delivery date {selected.isoformat()}: in the past")
                return state
            return DateRangeResolver.select_delivery(state, selected)
        return DateRangeResolver.select_pickup(state, selected)

    @staticmethod
    def focus(state: DateRangeState, field: DateField) -> DateRangeState:
        return state.model_copy(update={"active_field": field})

    @staticmethod
    def is_delivery_date_disabled(value: datetime, now: datetime | None = None) -> bool:
        """Delivery cannot be before today (local midnight)."""
        return _local_date(value) < _local_date(now or datetime.now())

    @staticmethod
    def is_pickup_date_disabled(value: datetime, delivery_date: datetime | None) -> bool:
        return delivery_date is None or value <= delivery_date

    @staticmethod
    def rental_days(delivery_date: datetime, pickup_date: datetime) -> int:
        return rental_days_between(delivery_date, pickup_date)

    @staticmethod
    def format_rental_days(days: int) -> str:
        return f"{days:02d}"

    @staticmethod
    def chargeable_period(delivery_date: datetime | None, pickup_date: datetime | None) -> str:
        """
        Human-readable rental span.

        Example:
            Feb 10 → Feb 13: "10th Feb – 13th Feb"
            Either date unset: ""
        """
        if delivery_date is None or pickup_date is None:
            return ""

        def fmt(value: datetime) -> str:
            return f"{value.day}{_ordinal(value.day)} {value.strftime('%b')}"

        return f"{fmt(delivery_date)} – {fmt(pickup_date)}"

    @staticmethod
    def to_selection(state: DateRangeState, duration: RentalDuration = RentalDuration.DAILY) -> RentalSelectionDTO:
        """
        Turn a picker state into a RentalSelectionDTO.

        Raises:
            MissingRentalDatesException: If delivery or pickup date is not set
            InvalidRentalRangeException: If pickup is not after delivery
        """
        missing = []
        if state.delivery_date is None:
            missing.append(DateField.DELIVERY.value)
        if state.pickup_date is None:
            missing.append(DateField.PICKUP.value)
        if missing:
            raise MissingRentalDatesException(missing)
        if state.pickup_date <= state.delivery_date:
            raise InvalidRentalRangeException(state.delivery_date, state.pickup_date)
        return RentalSelectionDTO(
            delivery_date=state.delivery_date,
            pickup_date=state.pickup_date,
            duration=duration,
        )
