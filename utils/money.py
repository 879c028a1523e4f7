"""
Monetary value helpers.

The backend sends prices as decimal strings in some places and as JSON
numbers in others. Every amount is normalized to Decimal at the API boundary
with to_amount() and stays unrounded from then on. Rounding only happens for
display: half-up to whole currency units, matching the storefront's
"no fraction digits" currency formatting.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP


ZERO = Decimal("0")


def to_amount(value) -> Decimal:
    """
    Normalize an API monetary value to Decimal.

    Examples:
        "1000.00" → Decimal("1000.00")
        1000 → Decimal("1000")
        99.9 → Decimal("99.9")   # via str(), no binary float noise
        None / "" → Decimal("0")

    Raises:
        ValueError: If value is not a number
    """
    if value is None:
        return ZERO
    if isinstance(value, bool):
        raise ValueError(f"Invalid monetary value: {value!r}")
    if isinstance(value, Decimal):
        return value
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        return Decimal(str(value))
    if isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            return ZERO
        try:
            amount = Decimal(stripped)
        except InvalidOperation:
            raise ValueError(f"Invalid monetary value: {value!r}")
        if not amount.is_finite():
            raise ValueError(f"Invalid monetary value: {value!r}")
        return amount
    raise ValueError(f"Invalid monetary value: {value!r}")


def to_wire(amount: Decimal) -> str:
    """Serialize an amount for a request body (decimal string, no exponent)."""
    return format(amount, "f")


def round_for_display(amount: Decimal) -> Decimal:
    return amount.quantize(Decimal("1"), rounding=ROUND_HALF_UP)


def format_currency(amount: Decimal, lang: str | None = None) -> str:
    """
    Format amount for display with currency symbol and no fraction digits.

    Example (INR):
        Decimal("2499.5") → "₹2,500"
    """
    from utils.localizator import Localizator

    symbol = Localizator.get_currency_symbol(lang=lang)
    rounded = round_for_display(amount)
    sign = "-" if rounded < 0 else ""
    return f"{sign}{symbol}{abs(rounded):,.0f}"
