"""
Tests for Error Handler Utility

Tests the centralized error handling system that converts
custom exceptions to localized user-friendly messages.
"""

from decimal import Decimal
from unittest.mock import patch

import pytest

from enums.message_entity import MessageEntity
from exceptions import (
    AuthRequiredException,
    BelowMinimumOrderException,
    CartItemNotFoundException,
    DurationUnavailableException,
    EmptyOrderException,
    InvalidOrExpiredCouponException,
    MalformedResponseException,
    MissingRentalDatesException,
    QuantityExceedsStockException,
    RentalShopException,
    ServerRejectionException,
)
from utils.error_handler import handle_service_error, handle_unexpected_error, safe_service_call


class TestErrorHandler:
    """Test error handling utility"""

    def test_quantity_exceeds_stock_with_formatting(self):
        exc = QuantityExceedsStockException(product_id="p1", requested=5, available=2)
        assert handle_service_error(exc, lang="en") == "Only 2 units available"

    def test_below_minimum_formats_currency(self):
        exc = BelowMinimumOrderException("SAVE10", Decimal("500"), Decimal("300"))
        assert handle_service_error(exc, lang="en") == "Add ₹200 more to use SAVE10"

    def test_duration_unavailable(self):
        exc = DurationUnavailableException("p1", "hourly")
        assert handle_service_error(exc, lang="en") == "This product can't be rented hourly"

    @pytest.mark.parametrize("exc,expected", [
        (EmptyOrderException("WELCOME-ABC123"), "Add items to your cart before applying a coupon"),
        (MissingRentalDatesException(["pickup"]), "Please select your delivery and pickup dates"),
        (CartItemNotFoundException("l1"), "This item is no longer in your cart"),
        (AuthRequiredException(), "Please login to continue"),
        (MalformedResponseException("/cart", "bad"), "Unexpected response from the server"),
    ])
    def test_mapped_messages(self, exc, expected):
        assert handle_service_error(exc, MessageEntity.USER, lang="en") == expected

    def test_server_message_is_surfaced(self):
        exc = ServerRejectionException(400, "Product is not available for the selected dates")
        assert handle_service_error(exc) == "Product is not available for the selected dates"

    def test_server_rejection_without_message(self):
        assert handle_service_error(ServerRejectionException(None), lang="en") == "Something went wrong"

    def test_invalid_coupon_uses_server_reason(self):
        exc = InvalidOrExpiredCouponException("OLD", reason="Coupon has expired", status_code=400)
        assert handle_service_error(exc) == "Coupon has expired"

    def test_invalid_coupon_without_reason(self):
        assert handle_service_error(InvalidOrExpiredCouponException("OLD"), lang="en") == "Invalid coupon code"

    @patch('utils.error_handler.Localizator')
    def test_unmapped_exception(self, mock_localizator):
        mock_localizator.get_text.return_value = "Something went wrong. Please try again."

        result = handle_service_error(RentalShopException("weird"))

        mock_localizator.get_text.assert_called_with(MessageEntity.USER, "error_unexpected", lang=None)
        assert result == "Something went wrong. Please try again."

    def test_unexpected_error(self):
        assert handle_unexpected_error(RuntimeError("boom"), lang="en") == "Something went wrong. Please try again."


class TestSafeServiceCall:

    @pytest.mark.asyncio
    async def test_passes_result_through(self):
        messages = []

        @safe_service_call(notify=messages.append)
        async def ok():
            return 42

        assert await ok() == 42
        assert messages == []

    @pytest.mark.asyncio
    async def test_domain_error_becomes_message(self):
        messages = []

        @safe_service_call(notify=messages.append)
        async def fails():
            raise QuantityExceedsStockException("p1", 3, 1)

        assert await fails() is None
        assert messages == ["Only 1 units available"]

    @pytest.mark.asyncio
    async def test_unexpected_error_becomes_generic_message(self):
        messages = []

        @safe_service_call(notify=messages.append)
        async def crashes():
            raise KeyError("x")

        await crashes()
        assert messages == ["Something went wrong. Please try again."]
