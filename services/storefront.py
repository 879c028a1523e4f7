import logging
from datetime import datetime

from pydantic import BaseModel, ConfigDict

from api import ApiClient
from enums.date_field import DateField
from enums.delivery_type import DeliveryType
from enums.rental_duration import RentalDuration
from models.auth import AuthContextDTO
from models.cart import CartSnapshot
from models.checkout import CheckoutSummaryDTO
from models.coupon import AppliedCouponDTO
from models.product import ProductDTO
from models.rental import DateRangeState, RentalQuoteDTO
from models.sync import SyncResult
from models.wishlist import WishlistSnapshot
from repositories.product import ProductRepository
from services.cart import CartService
from services.checkout import CheckoutService
from services.coupon import CouponService
from services.date_range import DateRangeResolver
from services.pricing import PricingService
from services.wishlist import WishlistService
from utils.money import ZERO

logger = logging.getLogger(__name__)


class StorefrontState(BaseModel):
    """Everything a screen needs to render, captured at one point in time."""
    model_config = ConfigDict(frozen=True)

    auth: AuthContextDTO
    date_range: DateRangeState
    cart: CartSnapshot
    wishlist: WishlistSnapshot
    is_cart_busy: bool = False
    is_applying_coupon: bool = False


class RentalStorefront:
    """
    Application state of one storefront session.

    Owns the API client and the cart, wishlist and coupon services, plus the
    date picker state. Create one per user session and pass it to whatever
    renders; there is no module-level state.

    Usage:
        async with RentalStorefront(auth=AuthContextDTO(user_id="u1", token=token)) as shop:
            await shop.cart.fetch_cart()
            print(shop.state().cart.total_amount)
    """

    def __init__(self, client: ApiClient | None = None, auth: AuthContextDTO | None = None):
        self.client = client or ApiClient(token=auth.token if auth is not None else None)
        self.auth = auth if auth is not None else AuthContextDTO(token=self.client.token)
        self.date_range = DateRangeResolver.initial()
        self.cart = CartService(self.client, self.auth)
        self.wishlist = WishlistService(self.client, self.auth)
        self.coupons = CouponService(self.client, self.auth)

    async def __aenter__(self) -> 'RentalStorefront':
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.client.close()

    def set_auth(self, auth: AuthContextDTO):
        """Switch user (login/logout). Local cart and wishlist are kept until re-fetched."""
        self.auth = auth
        self.client.set_token(auth.token)
        self.cart.auth = auth
        self.wishlist.auth = auth
        self.coupons.auth = auth
        logger.info(f"Storefront session {'authenticated' if auth.is_authenticated else 'anonymous'}")

    def state(self) -> StorefrontState:
        return StorefrontState(
            auth=self.auth,
            date_range=self.date_range,
            cart=self.cart.snapshot,
            wishlist=self.wishlist.snapshot,
            is_cart_busy=self.cart.is_busy,
            is_applying_coupon=self.coupons.is_applying,
        )

    async def load(self) -> StorefrontState:
        """Fetch cart and wishlist. Failures are recorded in the snapshots, not raised."""
        await self.cart.fetch_cart()
        await self.wishlist.fetch_wishlist()
        return self.state()

    async def list_products(self, category: str | None = None) -> list[ProductDTO]:
        return await ProductRepository.get_all(self.client, category)

    async def get_product(self, product_id: str) -> ProductDTO:
        return await ProductRepository.get_by_id(product_id, self.client)

    def select_date(self, selected: datetime, now: datetime | None = None) -> DateRangeState:
        self.date_range = DateRangeResolver.select_date(self.date_range, selected, now)
        return self.date_range

    def focus(self, field: DateField) -> DateRangeState:
        self.date_range = DateRangeResolver.focus(self.date_range, field)
        return self.date_range

    def quote(self, product: ProductDTO, duration: RentalDuration, quantity: int) -> RentalQuoteDTO:
        selection = DateRangeResolver.to_selection(self.date_range, duration)
        return PricingService.quote(product, duration, quantity, selection)

    async def add_to_cart(self, product: ProductDTO, quantity: int, duration: RentalDuration) -> SyncResult[CartSnapshot]:
        return await self.cart.add_item(product, quantity, duration, self.date_range)

    async def apply_coupon(self, code: str) -> AppliedCouponDTO:
        return await self.coupons.apply(code, self.cart.get_total_amount(), cart=self.cart)

    def checkout_summary(self, delivery_type: DeliveryType | None = None, delivery_cost=ZERO) -> CheckoutSummaryDTO:
        return CheckoutService.summarize(self.cart.snapshot, delivery_type, delivery_cost)
