import logging
from datetime import datetime
from decimal import Decimal

from api import ApiClient
from enums.rental_duration import RentalDuration
from enums.sync_strategy import SyncStrategy
from exceptions.api import AuthRequiredException
from exceptions.cart import CartItemNotFoundException, QuantityExceedsStockException
from exceptions.rental import InvalidRentalRangeException, MissingRentalDatesException
from models.auth import AuthContextDTO
from models.cart import CartSnapshot
from models.coupon import AppliedCouponDTO
from models.product import ProductDTO
from models.rental import DateRangeState, RentalSelectionDTO
from models.sync import SyncResult
from repositories.cart import CartRepository
from services.date_range import DateRangeResolver
from services.pricing import PricingService
from services.sync import SyncedCollection, SyncOperation

logger = logging.getLogger(__name__)


class CartService:
    """
    Client mirror of the server-side cart.

    Every server mutation is pessimistic: the request goes out first and the
    local snapshot changes only once it succeeded (add and update re-fetch
    the whole cart, remove and clear filter locally). The applied coupon is
    client state only and survives re-fetches.
    """

    def __init__(self, client: ApiClient, auth: AuthContextDTO | None = None):
        self.client = client
        self.auth = auth if auth is not None else AuthContextDTO(token=client.token)
        self._cart: SyncedCollection[CartSnapshot] = SyncedCollection("cart", CartSnapshot())

    @property
    def snapshot(self) -> CartSnapshot:
        return self._cart.snapshot

    @property
    def is_busy(self) -> bool:
        return self._cart.is_busy

    def get_total_amount(self) -> Decimal:
        return self._cart.snapshot.total_amount

    async def _refetch(self, snapshot: CartSnapshot, _response) -> CartSnapshot:
        lines = await CartRepository.get(self.client)
        return snapshot.with_lines(lines)

    async def fetch_cart(self) -> SyncResult[CartSnapshot]:
        """
        Replace local lines with the server's.

        On failure the local lines are dropped (the applied coupon is kept)
        and the error is reported; nothing is retried.
        """
        return await self._cart.mutate(SyncOperation(
            name="fetch_cart",
            remote=lambda: CartRepository.get(self.client),
            reconcile=self._replace_lines,
            on_error=lambda before, current, error: (before.with_lines(()), error),
        ))

    @staticmethod
    async def _replace_lines(snapshot: CartSnapshot, lines) -> CartSnapshot:
        return snapshot.with_lines(lines)

    async def add_item(
        self,
        product: ProductDTO,
        quantity: int,
        duration: RentalDuration,
        selection: RentalSelectionDTO | DateRangeState | None,
    ) -> SyncResult[CartSnapshot]:
        """
        Add a rental line and re-fetch the cart.

        The line runs from the selection's delivery date to its pickup date;
        the duration bucket only picks the unit price.

        Raises (before any request is sent):
            AuthRequiredException: If nobody is logged in
            MissingRentalDatesException: If a date is not selected
            InvalidRentalRangeException: If pickup is not after delivery
            InvalidQuantityException: If quantity is not a positive integer
            QuantityExceedsStockException: If quantity is above stock
            DurationUnavailableException: If the product has no rate for duration
        """
        if not self.auth.is_authenticated:
            raise AuthRequiredException(path="/cart/items")
        if selection is None:
            raise MissingRentalDatesException(["delivery", "pickup"])
        if isinstance(selection, DateRangeState):
            selection = DateRangeResolver.to_selection(selection, duration)

        PricingService.validate_quantity(quantity)
        if quantity > product.quantity_on_hand:
            raise QuantityExceedsStockException(product.id, quantity, product.quantity_on_hand)
        unit_price = PricingService.price_for(product, duration)

        result = await self._cart.mutate(SyncOperation(
            name="add_item",
            remote=lambda: CartRepository.add_item(
                product.id,
                quantity,
                selection.delivery_date,
                selection.pickup_date,
                unit_price,
                self.client,
            ),
            strategy=SyncStrategy.PESSIMISTIC,
            reconcile=self._refetch,
        ))
        if result.ok:
            logger.info(f"Added {quantity} x product {product.id} ({duration.value}) to cart")
        return result

    async def remove_item(self, line_id: str) -> SyncResult[CartSnapshot]:
        if self._cart.snapshot.find_line(line_id) is None:
            raise CartItemNotFoundException(line_id)
        return await self._cart.mutate(SyncOperation(
            name="remove_item",
            remote=lambda: CartRepository.remove_item(line_id, self.client),
            strategy=SyncStrategy.PESSIMISTIC,
            apply_local=lambda snapshot: snapshot.without_line(line_id),
        ))

    async def update_item(
        self,
        line_id: str,
        quantity: int | None = None,
        rental_start: datetime | None = None,
        rental_end: datetime | None = None,
    ) -> SyncResult[CartSnapshot]:
        """
        Change quantity and/or rental window of a line.

        The change is sent right away (PATCH) and the cart is re-fetched, so
        the local copy never holds edits the server has not seen.
        """
        line = self._cart.snapshot.find_line(line_id)
        if line is None:
            raise CartItemNotFoundException(line_id)

        if quantity is not None:
            PricingService.validate_quantity(quantity)
            if line.product is not None and quantity > line.product.quantity_on_hand:
                raise QuantityExceedsStockException(line.product_id, quantity, line.product.quantity_on_hand)

        new_start = rental_start or line.rental_start
        new_end = rental_end or line.rental_end
        if new_end <= new_start:
            raise InvalidRentalRangeException(new_start, new_end)

        if quantity is None and rental_start is None and rental_end is None:
            return SyncResult(snapshot=self._cart.snapshot)

        return await self._cart.mutate(SyncOperation(
            name="update_item",
            remote=lambda: CartRepository.update_item(
                line_id,
                self.client,
                quantity=quantity,
                rental_start=rental_start,
                rental_end=rental_end,
            ),
            strategy=SyncStrategy.PESSIMISTIC,
            reconcile=self._refetch,
        ))

    async def clear_cart(self) -> SyncResult[CartSnapshot]:
        return await self._cart.mutate(SyncOperation(
            name="clear_cart",
            remote=lambda: CartRepository.clear(self.client),
            strategy=SyncStrategy.PESSIMISTIC,
            apply_local=lambda snapshot: CartSnapshot(),
        ))

    async def apply_coupon(self, applied_coupon: AppliedCouponDTO) -> SyncResult[CartSnapshot]:
        """Fill the single coupon slot. An empty code with zero discount empties it."""
        return await self._cart.mutate(SyncOperation(
            name="apply_coupon",
            remote=None,
            apply_local=lambda snapshot: snapshot.with_coupon(applied_coupon),
        ))

    async def remove_coupon(self) -> SyncResult[CartSnapshot]:
        return await self.apply_coupon(AppliedCouponDTO(code=""))
