import logging

from api import ApiClient
from enums.sync_strategy import SyncStrategy
from exceptions.api import AuthRequiredException, ServerRejectionException
from exceptions.base import RentalShopException
from exceptions.wishlist import AlreadyInWishlistException, InvalidProductException
from models.auth import AuthContextDTO
from models.product import ProductDTO
from models.sync import SyncResult
from models.wishlist import WishlistSnapshot
from repositories.wishlist import WishlistRepository
from services.sync import SyncedCollection, SyncOperation

logger = logging.getLogger(__name__)


def _keep_local_on_auth(before: WishlistSnapshot, current: WishlistSnapshot, error: RentalShopException):
    # 401: the user is not logged in, the change stays in this process only
    if isinstance(error, AuthRequiredException):
        return current.model_copy(update={"is_local_only": True}), None
    return before, error


def _keep_removed_on_missing(before: WishlistSnapshot, current: WishlistSnapshot, error: RentalShopException):
    if isinstance(error, ServerRejectionException) and error.status_code == 404:
        return current, None
    return _keep_local_on_auth(before, current, error)


class WishlistService:
    """
    Wishlist mirror, fully optimistic.

    Each mutation changes the local snapshot first, then calls the server;
    a failure restores the snapshot taken before the mutation. Without a
    logged-in user the wishlist lives only in this process.
    """

    def __init__(self, client: ApiClient, auth: AuthContextDTO | None = None):
        self.client = client
        self.auth = auth if auth is not None else AuthContextDTO(token=client.token)
        self._wishlist: SyncedCollection[WishlistSnapshot] = SyncedCollection("wishlist", WishlistSnapshot())

    @property
    def snapshot(self) -> WishlistSnapshot:
        return self._wishlist.snapshot

    @property
    def _is_local_only(self) -> bool:
        return not self.auth.is_authenticated or self._wishlist.snapshot.is_local_only

    def is_in_wishlist(self, product_id: str) -> bool:
        return self._wishlist.snapshot.contains(product_id)

    async def fetch_wishlist(self) -> SyncResult[WishlistSnapshot]:
        if not self.auth.is_authenticated:
            snapshot = self._wishlist.snapshot.model_copy(update={"is_initialized": True, "is_local_only": True})
            return SyncResult(snapshot=self._wishlist.replace(snapshot))

        async def reconcile(snapshot: WishlistSnapshot, products: list[ProductDTO]) -> WishlistSnapshot:
            fresh = WishlistSnapshot(is_initialized=True)
            for product in products:
                fresh = fresh.with_item(product)
            return fresh

        def on_error(before: WishlistSnapshot, current: WishlistSnapshot, error: RentalShopException):
            if isinstance(error, AuthRequiredException):
                return before.model_copy(update={"is_initialized": True, "is_local_only": True}), None
            return before.model_copy(update={"is_initialized": True, "error": error.message}), error

        return await self._wishlist.mutate(SyncOperation(
            name="fetch_wishlist",
            remote=lambda: WishlistRepository.get(self.client),
            reconcile=reconcile,
            on_error=on_error,
        ))

    async def add_item(self, product: ProductDTO | None) -> SyncResult[WishlistSnapshot]:
        """
        Raises (before any request is sent):
            InvalidProductException: If product has no id
            AlreadyInWishlistException: If product is already wishlisted
        """
        if product is None or not product.id:
            raise InvalidProductException()
        if self.is_in_wishlist(product.id):
            raise AlreadyInWishlistException(product.id)

        if self._is_local_only:
            snapshot = self._wishlist.snapshot.with_item(product).model_copy(update={"is_local_only": True})
            return SyncResult(snapshot=self._wishlist.replace(snapshot))

        return await self._wishlist.mutate(SyncOperation(
            name="add_item",
            remote=lambda: WishlistRepository.add(product.id, self.client),
            strategy=SyncStrategy.OPTIMISTIC,
            apply_local=lambda snapshot: snapshot.with_item(product),
            on_error=_keep_local_on_auth,
        ))

    async def remove_item(self, product_id: str) -> SyncResult[WishlistSnapshot]:
        if not product_id:
            raise InvalidProductException()
        if not self.is_in_wishlist(product_id):
            logger.debug(f"Product {product_id} not in wishlist, nothing to remove")
            return SyncResult(snapshot=self._wishlist.snapshot)

        if self._is_local_only:
            return SyncResult(snapshot=self._wishlist.replace(self._wishlist.snapshot.without_item(product_id)))

        return await self._wishlist.mutate(SyncOperation(
            name="remove_item",
            remote=lambda: WishlistRepository.remove(product_id, self.client),
            strategy=SyncStrategy.OPTIMISTIC,
            apply_local=lambda snapshot: snapshot.without_item(product_id),
            on_error=_keep_removed_on_missing,
        ))

    async def clear_wishlist(self) -> SyncResult[WishlistSnapshot]:
        """Remove every item, the wishlist itself stays."""
        def clear(snapshot: WishlistSnapshot) -> WishlistSnapshot:
            return snapshot.model_copy(update={"items": (), "error": None})

        if self._is_local_only:
            return SyncResult(snapshot=self._wishlist.replace(clear(self._wishlist.snapshot)))

        return await self._wishlist.mutate(SyncOperation(
            name="clear_wishlist",
            remote=lambda: WishlistRepository.clear(self.client),
            strategy=SyncStrategy.OPTIMISTIC,
            apply_local=clear,
            on_error=_keep_local_on_auth,
        ))

    async def delete_wishlist(self) -> SyncResult[WishlistSnapshot]:
        """Delete the wishlist entity; the next fetch starts from scratch."""
        if self._is_local_only:
            return SyncResult(snapshot=self._wishlist.replace(WishlistSnapshot(is_local_only=True)))

        return await self._wishlist.mutate(SyncOperation(
            name="delete_wishlist",
            remote=lambda: WishlistRepository.delete(self.client),
            strategy=SyncStrategy.OPTIMISTIC,
            apply_local=lambda snapshot: WishlistSnapshot(),
            on_error=_keep_local_on_auth,
        ))

    async def check_in_wishlist(self, product_id: str) -> bool:
        """Ask the server; falls back to the local set when not logged in."""
        if self._is_local_only:
            return self.is_in_wishlist(product_id)
        try:
            return await WishlistRepository.check(product_id, self.client)
        except AuthRequiredException:
            self._wishlist.replace(self._wishlist.snapshot.model_copy(update={"is_local_only": True}))
            return self.is_in_wishlist(product_id)
