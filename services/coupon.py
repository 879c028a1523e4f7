import logging
from datetime import datetime
from decimal import Decimal

from api import ApiClient
from enums.coupon_ineligibility import CouponIneligibility
from enums.message_entity import MessageEntity
from exceptions.api import AuthRequiredException, ServerRejectionException
from exceptions.coupon import (
    BelowMinimumOrderException,
    CouponApplyInProgressException,
    EmptyCouponCodeException,
    EmptyOrderException,
    InvalidOrExpiredCouponException,
)
from models.auth import AuthContextDTO
from models.coupon import AppliedCouponDTO, CouponDTO, CouponEligibilityDTO, CouponValidationDTO
from repositories.coupon import CouponRepository
from services.cart import CartService
from utils.localizator import Localizator
from utils.money import ZERO, format_currency, to_amount

logger = logging.getLogger(__name__)


class CouponService:
    """
    Coupon listing, eligibility pre-checks and single-slot application.

    The server is the only authority on discount amounts and usage counts.
    This service never computes a discount; it only decides whether asking
    the server makes sense and shows how far an order is from a minimum.
    """

    def __init__(self, client: ApiClient, auth: AuthContextDTO | None = None):
        self.client = client
        self.auth = auth if auth is not None else AuthContextDTO(token=client.token)
        self._known_coupons: dict[str, CouponDTO] = {}
        self._is_applying = False

    @property
    def is_applying(self) -> bool:
        return self._is_applying

    def _require_auth(self, path: str):
        if not self.auth.is_authenticated:
            raise AuthRequiredException(path=path)

    @staticmethod
    def normalize_code(code: str | None) -> str:
        return (code or "").strip().upper()

    async def list_available(self, order_total: Decimal, now: datetime | None = None) -> list[CouponEligibilityDTO]:
        """
        Get the user's coupons with an eligibility verdict for order_total.

        The listing is remembered so apply() can reject a code that is below
        its minimum without a round trip.
        """
        self._require_auth("/coupons/available")
        order_total = to_amount(order_total)
        coupons = await CouponRepository.get_available(self.client)
        self._known_coupons = {coupon.code: coupon for coupon in coupons}
        logger.debug(f"{len(coupons)} coupons available")
        return [CouponService.check_eligibility(coupon, order_total, now) for coupon in coupons]

    @staticmethod
    def check_eligibility(
        coupon: CouponDTO,
        order_total: Decimal,
        now: datetime | None = None,
        lang: str | None = None,
    ) -> CouponEligibilityDTO:
        """
        Client-side eligibility of a listed coupon.

        Checked in order: expiry, usage cap, minimum order amount, then the
        server's own verdict. amount_short is filled whenever the order is
        below the minimum, even if another reason comes first.
        """
        order_total = to_amount(order_total)
        amount_short = None
        if coupon.min_order_amount is not None and order_total < coupon.min_order_amount:
            amount_short = coupon.min_order_amount - order_total

        reason = None
        message = None
        if coupon.is_expired(now):
            reason = CouponIneligibility.EXPIRED
            message = Localizator.get_text(MessageEntity.USER, "coupon_expired", lang=lang)
        elif coupon.is_usage_exhausted:
            reason = CouponIneligibility.USAGE_LIMIT_REACHED
            message = Localizator.get_text(MessageEntity.USER, "coupon_usage_limit_reached", lang=lang)
        elif amount_short is not None:
            reason = CouponIneligibility.BELOW_MINIMUM
            message = Localizator.get_text(MessageEntity.USER, "coupon_amount_short", lang=lang).format(
                amount=format_currency(amount_short, lang=lang)
            )
        elif coupon.is_applicable is False:
            reason = CouponIneligibility.REJECTED_BY_SERVER
            message = coupon.not_applicable_reason or Localizator.get_text(
                MessageEntity.USER, "coupon_rejected", lang=lang
            )

        return CouponEligibilityDTO(
            coupon=coupon,
            is_applicable=reason is None,
            reason=reason,
            message=message,
            amount_short=amount_short,
        )

    async def validate(self, code: str, order_amount: Decimal) -> CouponValidationDTO:
        """
        Ask the server for the discount of code on an order of order_amount.

        Raises (before any request is sent):
            EmptyCouponCodeException: If code is blank
            EmptyOrderException: If order_amount is zero
            AuthRequiredException: If nobody is logged in
            BelowMinimumOrderException: If the last listing shows a higher minimum

        Raises (from the server):
            InvalidOrExpiredCouponException: On a 4xx rejection, with the server's message
            ServerRejectionException: On 5xx or transport failure
        """
        code = CouponService.normalize_code(code)
        if not code:
            raise EmptyCouponCodeException()
        order_amount = to_amount(order_amount)
        if order_amount <= ZERO:
            raise EmptyOrderException(code)
        self._require_auth("/coupons/validate")

        known = self._known_coupons.get(code)
        if known is not None and known.min_order_amount is not None and order_amount < known.min_order_amount:
            raise BelowMinimumOrderException(code, known.min_order_amount, order_amount)

        try:
            return await CouponRepository.validate(code, order_amount, self.client)
        except AuthRequiredException:
            raise
        except ServerRejectionException as e:
            if not e.is_client_error:
                raise
            logger.info(f"Coupon {code} rejected: {e.status_code} {e.server_message or ''}")
            raise InvalidOrExpiredCouponException(code, reason=e.server_message, status_code=e.status_code) from e

    async def apply(self, code: str, order_amount: Decimal, cart: CartService | None = None) -> AppliedCouponDTO:
        """
        Validate code and put it in the cart's coupon slot.

        A previously applied coupon is replaced. While one apply is running
        another raises CouponApplyInProgressException instead of queuing.
        """
        if self._is_applying:
            raise CouponApplyInProgressException(CouponService.normalize_code(code))
        self._is_applying = True
        try:
            validation = await self.validate(code, order_amount)
            applied = AppliedCouponDTO(
                code=validation.code,
                discount_amount=validation.discount_amount,
                coupon_id=validation.coupon_id,
            )
            if cart is not None:
                await cart.apply_coupon(applied)
            logger.info(f"Coupon {applied.code} applied, discount {applied.discount_amount}")
            return applied
        finally:
            self._is_applying = False

    async def redeem(self, coupon_id: str):
        """Record a use of the coupon on the server (done once, when the order is placed)."""
        self._require_auth("/coupons/apply")
        data = await CouponRepository.apply(coupon_id, self.client)
        logger.info(f"Coupon {coupon_id} redeemed")
        return data
