from pydantic import BaseModel, ConfigDict

from models.product import ProductDTO


class WishlistSnapshot(BaseModel):
    """
    Immutable wishlist state.

    is_local_only is set when the server answered 401 (or nobody is logged in):
    the items then live only in this process and are never pushed to the server.
    """
    model_config = ConfigDict(frozen=True)

    items: tuple[ProductDTO, ...] = ()
    is_initialized: bool = False
    is_local_only: bool = False
    error: str | None = None

    @property
    def product_ids(self) -> list[str]:
        return [item.id for item in self.items]

    def contains(self, product_id: str) -> bool:
        return any(item.id == product_id for item in self.items)

    def with_item(self, product: ProductDTO) -> 'WishlistSnapshot':
        if self.contains(product.id):
            return self
        return self.model_copy(update={"items": self.items + (product,), "error": None})

    def without_item(self, product_id: str) -> 'WishlistSnapshot':
        return self.model_copy(update={
            "items": tuple(item for item in self.items if item.id != product_id),
            "error": None,
        })
