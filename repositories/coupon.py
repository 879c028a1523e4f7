from decimal import Decimal

from api import ApiClient
from exceptions.api import MalformedResponseException
from models.coupon import CouponDTO, CouponValidationDTO
from utils.money import to_wire


class CouponRepository:
    """Repository for coupon endpoints. All of them need an authenticated user."""

    @staticmethod
    async def get_available(client: ApiClient) -> list[CouponDTO]:
        path = "/coupons/available"
        data = await client.get(path)
        try:
            return [CouponDTO.from_api(coupon) for coupon in data or []]
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise MalformedResponseException(path, str(e))

    @staticmethod
    async def validate(code: str, order_amount: Decimal, client: ApiClient) -> CouponValidationDTO:
        """
        Ask the server whether code applies to an order of order_amount.

        The server computes the discount; nothing here does arithmetic on it.
        """
        path = "/coupons/validate"
        data = await client.post(path, json={"code": code, "orderAmount": to_wire(order_amount)})
        try:
            return CouponValidationDTO.from_api(data)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise MalformedResponseException(path, str(e))

    @staticmethod
    async def apply(coupon_id: str, client: ApiClient) -> dict | None:
        return await client.post("/coupons/apply", json={"couponId": coupon_id})
