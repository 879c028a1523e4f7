"""
Pytest configuration and fixtures for tests.

This file is automatically loaded by pytest and provides shared fixtures
and configuration for all tests.
"""

import os
import sys
from datetime import datetime
from decimal import Decimal

import pytest

# Required settings must exist before config is imported anywhere
os.environ.setdefault("RUNTIME_ENVIRONMENT", "TEST")
os.environ.setdefault("API_BASE_URL", "http://api.test/api")
os.environ.setdefault("CURRENCY", "INR")
os.environ.setdefault("LANGUAGE", "en")

# Add parent directory to Python path so tests can import modules
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from api import ApiClient
from models.auth import AuthContextDTO
from models.cart import CartLineDTO
from models.product import ProductDTO
from models.rental import RentalSelectionDTO


# ============================================================================
# Product Fixtures
# ============================================================================

@pytest.fixture
def camera():
    """Daily and weekly rates only, 5 in stock."""
    return ProductDTO(
        id="p-camera",
        name="Mirrorless Camera",
        category="Cameras",
        price_per_hour=Decimal("0"),
        price_per_day=Decimal("1000"),
        price_per_week=Decimal("5000"),
        quantity_on_hand=5,
        vendor_id="v1",
    )


@pytest.fixture
def drill():
    """All three buckets, 2 in stock."""
    return ProductDTO(
        id="p-drill",
        name="Hammer Drill",
        category="Tools",
        price_per_hour=Decimal("49.50"),
        price_per_day=Decimal("299"),
        price_per_week=Decimal("1499"),
        quantity_on_hand=2,
        vendor_id="v2",
    )


@pytest.fixture
def february_selection():
    """Feb 10 → Feb 13: three rental days."""
    return RentalSelectionDTO(
        delivery_date=datetime(2026, 2, 10, 10, 0),
        pickup_date=datetime(2026, 2, 13, 10, 0),
    )


def make_line(line_id: str, product: ProductDTO, quantity: int, unit_price=None) -> CartLineDTO:
    return CartLineDTO(
        id=line_id,
        product_id=product.id,
        product=product,
        quantity=quantity,
        unit_price=unit_price if unit_price is not None else product.price_per_day,
        rental_start=datetime(2026, 2, 10, 10, 0),
        rental_end=datetime(2026, 2, 13, 10, 0),
    )


@pytest.fixture
def line_factory():
    return make_line


# ============================================================================
# Session Fixtures
# ============================================================================

@pytest.fixture
def auth():
    return AuthContextDTO(user_id="u1", token="test-token")


@pytest.fixture
def anonymous():
    return AuthContextDTO()


@pytest.fixture
def client():
    """ApiClient that never opens a session; repositories are patched in service tests."""
    return ApiClient(base_url="http://api.test/api", token="test-token")
