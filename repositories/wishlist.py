from api import ApiClient
from exceptions.api import MalformedResponseException
from models.product import ProductDTO


class WishlistRepository:

    @staticmethod
    async def get(client: ApiClient) -> list[ProductDTO]:
        path = "/wishlist"
        data = await client.get(path)
        if isinstance(data, dict):
            data = data.get("items") or []
        try:
            return [ProductDTO.from_api(product) for product in data or []]
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise MalformedResponseException(path, str(e))

    @staticmethod
    async def add(product_id: str, client: ApiClient) -> None:
        await client.post("/wishlist/items", json={"productId": product_id})

    @staticmethod
    async def remove(product_id: str, client: ApiClient) -> None:
        await client.delete(f"/wishlist/items/{product_id}")

    @staticmethod
    async def clear(client: ApiClient) -> None:
        """Remove every item but keep the wishlist itself."""
        await client.delete("/wishlist/clear")

    @staticmethod
    async def delete(client: ApiClient) -> None:
        await client.delete("/wishlist")

    @staticmethod
    async def check(product_id: str, client: ApiClient) -> bool:
        path = f"/wishlist/check/{product_id}"
        data = await client.get(path)
        try:
            return bool(data["isInWishlist"])
        except (KeyError, TypeError) as e:
            raise MalformedResponseException(path, str(e))
