from datetime import datetime
from decimal import Decimal

from api import ApiClient
from exceptions.api import MalformedResponseException
from models.cart import CartLineDTO
from models.product import ProductDTO
from utils.money import to_amount, to_wire


class CartRepository:
    """
    Repository for the server-side cart.

    GET /cart answers with {"id": ..., "items": [...]} or null for a user
    without a cart. Each item carries the embedded product, the unit price
    as a decimal string and the rental window as ISO timestamps.
    """

    @staticmethod
    async def get(client: ApiClient) -> list[CartLineDTO]:
        path = "/cart"
        data = await client.get(path)
        try:
            if not data or not data.get("items"):
                return []
            return [CartRepository._to_line(item) for item in data["items"]]
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise MalformedResponseException(path, str(e))

    @staticmethod
    def _to_line(item: dict) -> CartLineDTO:
        product = ProductDTO.from_api(item["product"]) if item.get("product") else None
        product_id = item.get("productId") or (product.id if product else None)
        if not product_id:
            raise KeyError("productId")
        unit_price = to_amount(item.get("unitPrice"))
        return CartLineDTO(
            id=item["id"],
            product_id=product_id,
            product=product,
            quantity=item["quantity"],
            unit_price=unit_price,
            rental_start=item["rentalStart"],
            rental_end=item["rentalEnd"],
            duration=product.duration_for_price(unit_price) if product else None,
        )

    @staticmethod
    async def add_item(
        product_id: str,
        quantity: int,
        rental_start: datetime,
        rental_end: datetime,
        unit_price: Decimal,
        client: ApiClient,
    ) -> None:
        """
        Add a line to the cart.

        The server re-checks stock and answers with the created line; callers
        re-fetch the whole cart instead of merging the response.
        """
        await client.post("/cart/items", json={
            "productId": product_id,
            "quantity": quantity,
            "rentalStart": rental_start.isoformat(),
            "rentalEnd": rental_end.isoformat(),
            "unitPrice": to_wire(unit_price),
        })

    @staticmethod
    async def update_item(
        cart_item_id: str,
        client: ApiClient,
        quantity: int | None = None,
        rental_start: datetime | None = None,
        rental_end: datetime | None = None,
    ) -> None:
        payload = {}
        if quantity is not None:
            payload["quantity"] = quantity
        if rental_start is not None:
            payload["rentalStart"] = rental_start.isoformat()
        if rental_end is not None:
            payload["rentalEnd"] = rental_end.isoformat()
        await client.patch(f"/cart/items/{cart_item_id}", json=payload)

    @staticmethod
    async def remove_item(cart_item_id: str, client: ApiClient) -> None:
        await client.delete(f"/cart/items/{cart_item_id}")

    @staticmethod
    async def clear(client: ApiClient) -> None:
        await client.delete("/cart")
