from api import ApiClient
from exceptions.api import MalformedResponseException
from models.product import ProductDTO


class ProductRepository:
    """Repository for catalogue reads. Products are created and edited by vendors elsewhere."""

    @staticmethod
    async def get_all(client: ApiClient, category: str | None = None) -> list[ProductDTO]:
        """
        Get published products.

        Args:
            client: API client
            category: Optional category filter, passed through to the API

        Returns:
            List of ProductDTO in the order the API returns them
        """
        path = "/products"
        params = {"category": category} if category else None
        data = await client.get(path, params=params)
        if isinstance(data, dict):
            data = data.get("products") or []
        try:
            return [ProductDTO.from_api(product) for product in data]
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise MalformedResponseException(path, str(e))

    @staticmethod
    async def get_by_id(product_id: str, client: ApiClient) -> ProductDTO:
        path = f"/products/{product_id}"
        data = await client.get(path)
        try:
            return ProductDTO.from_api(data)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise MalformedResponseException(path, str(e))
