"""
Unit Tests: repositories

Backend payload shapes → DTOs, request bodies sent to the API, and
malformed payload handling. ApiClient methods are replaced with AsyncMocks.
"""

from datetime import datetime
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from enums.discount_type import DiscountType
from enums.rental_duration import RentalDuration
from exceptions.api import MalformedResponseException
from repositories.cart import CartRepository
from repositories.coupon import CouponRepository
from repositories.product import ProductRepository
from repositories.wishlist import WishlistRepository

PRODUCT_WITH_PRICING_LIST = {
    "id": "p1",
    "name": "Projector",
    "category": "Electronics",
    "pricing": [
        {"type": "HOUR", "price": "150.00"},
        {"type": "DAY", "price": "1000.00"},
        {"type": "MONTH", "price": "15000.00"},
    ],
    "inventory": {"totalQty": 4},
    "vendorId": "v1",
    "isPublished": True,
}

PRODUCT_WITH_PRICING_OBJECT = {
    "id": "p2",
    "name": "Tent",
    "pricing": {"pricePerDay": 500, "pricePerWeek": "2500.5"},
    "inventory": {"quantityOnHand": 7},
}


class TestProductRepository:

    @pytest.mark.asyncio
    async def test_pricing_list_shape(self, client):
        client.get = AsyncMock(return_value=[PRODUCT_WITH_PRICING_LIST])

        products = await ProductRepository.get_all(client)

        product = products[0]
        assert product.price_per_hour == Decimal("150.00")
        assert product.price_per_day == Decimal("1000.00")
        # unsupported MONTH entry is skipped, weekly stays unoffered
        assert product.price_per_week == Decimal("0")
        assert product.quantity_on_hand == 4

    @pytest.mark.asyncio
    async def test_pricing_object_shape(self, client):
        client.get = AsyncMock(return_value=PRODUCT_WITH_PRICING_OBJECT)

        product = await ProductRepository.get_by_id("p2", client)

        client.get.assert_awaited_once_with("/products/p2")
        assert product.price_per_day == Decimal("500")
        assert product.price_per_week == Decimal("2500.5")
        assert product.quantity_on_hand == 7
        assert product.category == "General"

    @pytest.mark.asyncio
    async def test_category_filter(self, client):
        client.get = AsyncMock(return_value={"products": []})
        assert await ProductRepository.get_all(client, "Tools") == []
        client.get.assert_awaited_once_with("/products", params={"category": "Tools"})

    @pytest.mark.asyncio
    async def test_malformed_price(self, client):
        client.get = AsyncMock(return_value=[{"id": "p3", "pricePerDay": "abc"}])
        with pytest.raises(MalformedResponseException):
            await ProductRepository.get_all(client)


class TestCartRepository:

    @pytest.mark.asyncio
    async def test_get_normalizes_lines(self, client):
        client.get = AsyncMock(return_value={
            "id": "cart1",
            "items": [{
                "id": 11,
                "productId": "p1",
                "quantity": 2,
                "unitPrice": "1000.00",
                "rentalStart": "2026-02-10T10:00:00.000Z",
                "rentalEnd": "2026-02-13T10:00:00.000Z",
                "product": PRODUCT_WITH_PRICING_LIST,
            }],
        })

        lines = await CartRepository.get(client)

        line = lines[0]
        assert line.id == "11"
        assert line.total_price == Decimal("2000.00")
        assert line.duration == RentalDuration.DAILY
        assert line.product.name == "Projector"
        assert line.rental_end.day == 13

    @pytest.mark.asyncio
    async def test_no_cart(self, client):
        client.get = AsyncMock(return_value=None)
        assert await CartRepository.get(client) == []

    @pytest.mark.asyncio
    async def test_line_without_rental_dates_is_malformed(self, client):
        client.get = AsyncMock(return_value={"items": [{"id": 1, "productId": "p1", "quantity": 1}]})
        with pytest.raises(MalformedResponseException):
            await CartRepository.get(client)

    @pytest.mark.asyncio
    async def test_non_dict_pricing_entry_is_malformed(self, client):
        client.get = AsyncMock(return_value={"items": [{
            "id": 12,
            "productId": "p1",
            "quantity": 1,
            "unitPrice": "1000.00",
            "rentalStart": "2026-02-10T10:00:00.000Z",
            "rentalEnd": "2026-02-13T10:00:00.000Z",
            "product": {"id": "p1", "pricing": [None]},
        }]})
        with pytest.raises(MalformedResponseException):
            await CartRepository.get(client)

    @pytest.mark.asyncio
    async def test_items_not_a_dict_is_malformed(self, client):
        client.get = AsyncMock(return_value=["unexpected"])
        with pytest.raises(MalformedResponseException):
            await CartRepository.get(client)

    @pytest.mark.asyncio
    async def test_line_without_product_id_is_malformed(self, client):
        client.get = AsyncMock(return_value={"items": [{
            "id": 13,
            "quantity": 1,
            "unitPrice": "1000.00",
            "rentalStart": "2026-02-10T10:00:00.000Z",
            "rentalEnd": "2026-02-13T10:00:00.000Z",
        }]})
        with pytest.raises(MalformedResponseException) as exc_info:
            await CartRepository.get(client)
        assert "productId" in exc_info.value.reason

    @pytest.mark.asyncio
    async def test_unmatched_unit_price_has_no_duration(self, client):
        client.get = AsyncMock(return_value={"items": [{
            "id": 14,
            "productId": "p1",
            "quantity": 1,
            "unitPrice": "999.00",
            "rentalStart": "2026-02-10T10:00:00.000Z",
            "rentalEnd": "2026-02-13T10:00:00.000Z",
            "product": PRODUCT_WITH_PRICING_LIST,
        }]})
        lines = await CartRepository.get(client)
        assert lines[0].duration is None

    @pytest.mark.asyncio
    async def test_add_item_body(self, client):
        client.post = AsyncMock(return_value={})

        await CartRepository.add_item(
            "p1", 2, datetime(2026, 2, 10, 10, 0), datetime(2026, 2, 13, 10, 0), Decimal("1000.00"), client
        )

        client.post.assert_awaited_once_with("/cart/items", json={
            "productId": "p1",
            "quantity": 2,
            "rentalStart": "2026-02-10T10:00:00",
            "rentalEnd": "2026-02-13T10:00:00",
            "unitPrice": "1000.00",
        })

    @pytest.mark.asyncio
    async def test_update_item_sends_only_changed_fields(self, client):
        client.patch = AsyncMock(return_value={})
        await CartRepository.update_item("11", client, quantity=3)
        client.patch.assert_awaited_once_with("/cart/items/11", json={"quantity": 3})


class TestCouponRepository:

    @pytest.mark.asyncio
    async def test_available(self, client):
        client.get = AsyncMock(return_value=[{
            "id": "c1",
            "code": "welcome-abc123",
            "discountType": "FIXED_AMOUNT",
            "discountValue": "200",
            "minOrderAmount": 500,
            "maxUsageCount": 1,
            "currentUsageCount": 0,
            "expiryDate": None,
            "isWelcomeCoupon": True,
            "userId": "u1",
        }])

        coupons = await CouponRepository.get_available(client)

        coupon = coupons[0]
        assert coupon.code == "WELCOME-ABC123"
        assert coupon.discount_type == DiscountType.FIXED_AMOUNT
        assert coupon.min_order_amount == Decimal("500")
        assert coupon.is_welcome_coupon

    @pytest.mark.asyncio
    async def test_validate_sends_amount_as_string(self, client):
        client.post = AsyncMock(return_value={
            "coupon": {
                "id": "c1",
                "code": "SAVE10",
                "description": "10% off",
                "discountType": "PERCENTAGE",
                "discountValue": 10,
            },
            "discountAmount": 29.9,
        })

        validation = await CouponRepository.validate("SAVE10", Decimal("299"), client)

        client.post.assert_awaited_once_with("/coupons/validate", json={"code": "SAVE10", "orderAmount": "299"})
        assert validation.discount_amount == Decimal("29.9")
        assert validation.coupon_id == "c1"


class TestWishlistRepository:

    @pytest.mark.asyncio
    async def test_get_flat_products(self, client):
        client.get = AsyncMock(return_value=[
            {"id": "p1", "name": "Projector", "pricePerDay": 1000, "quantityOnHand": 2},
        ])
        products = await WishlistRepository.get(client)
        assert products[0].price_per_day == Decimal("1000")
        assert products[0].quantity_on_hand == 2

    @pytest.mark.asyncio
    async def test_check(self, client):
        client.get = AsyncMock(return_value={"isInWishlist": True})
        assert await WishlistRepository.check("p1", client) is True
        client.get.assert_awaited_once_with("/wishlist/check/p1")

    @pytest.mark.asyncio
    async def test_clear_and_delete_paths(self, client):
        client.delete = AsyncMock(return_value=None)
        await WishlistRepository.clear(client)
        await WishlistRepository.delete(client)
        assert [call.args[0] for call in client.delete.await_args_list] == ["/wishlist/clear", "/wishlist"]
