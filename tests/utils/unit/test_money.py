"""
Unit Tests: utils/money.py

Normalization of API amounts, wire format and display rounding.
"""

from decimal import Decimal
from unittest.mock import patch

import pytest

from enums.currency import Currency
from utils.money import format_currency, round_for_display, to_amount, to_wire


class TestToAmount:

    @pytest.mark.parametrize("value,expected", [
        ("1000.00", Decimal("1000.00")),
        (" 49.5 ", Decimal("49.5")),
        (1000, Decimal("1000")),
        (99.9, Decimal("99.9")),
        (Decimal("12.34"), Decimal("12.34")),
        (None, Decimal("0")),
        ("", Decimal("0")),
    ])
    def test_normalizes(self, value, expected):
        assert to_amount(value) == expected

    def test_float_has_no_binary_noise(self):
        assert str(to_amount(0.1)) == "0.1"

    @pytest.mark.parametrize("value", ["abc", "NaN", "Infinity", True, [1]])
    def test_rejects(self, value):
        with pytest.raises(ValueError):
            to_amount(value)


class TestWireAndDisplay:

    def test_to_wire_has_no_exponent(self):
        assert to_wire(Decimal("1E+3")) == "1000"
        assert to_wire(Decimal("29.90")) == "29.90"

    @pytest.mark.parametrize("amount,expected", [
        (Decimal("2499.5"), Decimal("2500")),
        (Decimal("2499.49"), Decimal("2499")),
        (Decimal("0.5"), Decimal("1")),
    ])
    def test_round_half_up(self, amount, expected):
        assert round_for_display(amount) == expected

    def test_format_inr(self):
        with patch('config.CURRENCY', Currency.INR):
            assert format_currency(Decimal("123456.5"), lang="en") == "₹123,457"

    def test_format_negative(self):
        with patch('config.CURRENCY', Currency.USD):
            assert format_currency(Decimal("-20"), lang="en") == "-$20"
