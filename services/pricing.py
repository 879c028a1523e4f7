import logging
from decimal import Decimal

from enums.message_entity import MessageEntity
from enums.rental_duration import RentalDuration
from exceptions.pricing import DurationUnavailableException, InvalidQuantityException
from models.product import ProductDTO
from models.rental import RentalQuoteDTO, RentalSelectionDTO
from utils.localizator import Localizator
from utils.money import ZERO

logger = logging.getLogger(__name__)

# (minimum rental days, discount percent), highest tier first
DISCOUNT_TIERS = (
    (7, 12),
    (5, 8),
    (3, 5),
)


class PricingService:
    """Service for rental pricing calculations."""

    @staticmethod
    def price_for(product: ProductDTO, duration: RentalDuration) -> Decimal:
        """
        Get the unit price of one rental unit in the given bucket.

        Args:
            product: Product being rented
            duration: Pricing bucket (hourly/daily/weekly)

        Returns:
            The product's configured rate, unrounded

        Raises:
            DurationUnavailableException: If the product has no rate for this bucket
        """
        rate = product.rate_for(duration)
        if rate is None or rate <= ZERO:
            raise DurationUnavailableException(product.id, duration.value)
        return rate

    @staticmethod
    def validate_quantity(quantity) -> int:
        # bool is an int subclass and never a valid quantity
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            raise InvalidQuantityException(quantity)
        return quantity

    @staticmethod
    def line_total(product: ProductDTO, duration: RentalDuration, quantity: int) -> Decimal:
        """
        Price of a cart line: unit price × quantity.

        The rental length does not enter the line total, one unit of the
        bucket is charged per item.
        """
        PricingService.validate_quantity(quantity)
        return PricingService.price_for(product, duration) * quantity

    @staticmethod
    def discount_for_days(days: int) -> int:
        """
        Long-rental discount percentage for a number of rental days.

        Stepwise: 7+ days → 12, 5+ → 8, 3+ → 5, otherwise 0.
        Informational only, never subtracted from a total.
        """
        for min_days, percent in DISCOUNT_TIERS:
            if days >= min_days:
                return percent
        return 0

    @staticmethod
    def next_discount_tier(days: int) -> tuple[int, int] | None:
        """Return (days still needed, percent) of the next higher tier, or None at the top tier."""
        for min_days, percent in reversed(DISCOUNT_TIERS):
            if days < min_days:
                return min_days - days, percent
        return None

    @staticmethod
    def available_durations(product: ProductDTO) -> list[RentalDuration]:
        return [duration for duration in RentalDuration if product.rate_for(duration) > ZERO]

    @staticmethod
    def infer_duration(product: ProductDTO, unit_price: Decimal) -> RentalDuration | None:
        """
        Find the bucket a server-side unit price was taken from.

        Cart lines only carry the unit price; the first bucket whose rate
        matches it is assumed. Returns None when no rate matches (e.g. the
        vendor changed the price after the line was added).
        """
        return product.duration_for_price(unit_price)

    @staticmethod
    def quote(
        product: ProductDTO,
        duration: RentalDuration,
        quantity: int,
        selection: RentalSelectionDTO | None = None,
    ) -> RentalQuoteDTO:
        unit_price = PricingService.price_for(product, duration)
        line_total = PricingService.line_total(product, duration, quantity)
        rental_days = selection.rental_days if selection is not None else 0
        return RentalQuoteDTO(
            product_id=product.id,
            duration=duration,
            unit_price=unit_price,
            quantity=quantity,
            line_total=line_total,
            rental_days=rental_days,
            discount_percent=PricingService.discount_for_days(rental_days),
        )

    @staticmethod
    def format_discount_hint(days: int, lang: str | None = None) -> str:
        """
        Format the discount banner shown under the date picker.

        Example (en):
            4 days → "Rent 1 more day(s) to save 8%"
            7 days → "You save 12% on a 7 day rental"
        """
        percent = PricingService.discount_for_days(days)
        if percent == max(p for _, p in DISCOUNT_TIERS):
            return Localizator.get_text(MessageEntity.USER, "discount_current_hint", lang=lang).format(
                percent=percent, days=days
            )
        more_days, next_percent = PricingService.next_discount_tier(days)
        return Localizator.get_text(MessageEntity.USER, "discount_next_tier_hint", lang=lang).format(
            more_days=more_days, percent=next_percent
        )
