"""
Pytest configuration and fixtures for the Odin POS backend.
"""

from datetime import datetime
from datetime import timezone as dt_timezone
from decimal import Decimal

import pytest
from rest_framework.test import APIClient

from apps.core.principal import Principal

ADMIN_EMAIL = "admin@odin.com"
SUPERVISOR_EMAIL = "supervisor@odin.com"
CASHIER_EMAIL = "cashier@odin.com"


def utc(*args):
    """Shorthand for an aware UTC datetime."""
    return datetime(*args, tzinfo=dt_timezone.utc)


def client_for(role, email=""):
    """API client that sends the role headers on every request."""
    client = APIClient()
    client.credentials(HTTP_X_USER_ROLE=role, HTTP_X_USER_EMAIL=email)
    return client


@pytest.fixture
def api_client():
    """
    Fixture for Django REST framework API client without role headers.
    """
    return APIClient()


@pytest.fixture
def admin_api_client():
    return client_for("Admin", ADMIN_EMAIL)


@pytest.fixture
def supervisor_api_client():
    return client_for("Supervisor", SUPERVISOR_EMAIL)


@pytest.fixture
def cashier_api_client():
    return client_for("Cashier", CASHIER_EMAIL)


@pytest.fixture
def cashier():
    """Principal for direct calls into the sale engine."""
    return Principal(role="Cashier", email=CASHIER_EMAIL)


@pytest.fixture
def make_product(db):
    """
    Factory fixture for catalog products.

    Usage:
        product = make_product(name="Soda", price="1.25", stock=10)
    """
    from apps.inventory.models import Product

    def _make_product(name="Widget", price="100.00", stock=5, **kwargs):
        return Product.objects.create(name=name, price=Decimal(price), stock=stock, **kwargs)

    return _make_product


@pytest.fixture
def make_sale(db):
    """
    Factory fixture that stores a sale directly, bypassing the engine, so
    tests control ``created_at`` exactly.

    ``lines`` is a list of (name, price, qty) tuples.
    """
    import uuid

    from apps.sales.models import Sale, SaleItem

    def _make_sale(created_at, lines=(("Widget", "10.00", 1),), payment_method="Cash"):
        items = [
            SaleItem(product_id=uuid.uuid4(), name=name, price=Decimal(price), qty=qty, position=i)
            for i, (name, price, qty) in enumerate(lines)
        ]
        total = sum((item.line_total for item in items), Decimal("0.00"))
        cash = total if payment_method == Sale.CASH else Decimal("0.00")
        sale = Sale.objects.create(
            created_at=created_at,
            payment_method=payment_method,
            cash_received=cash,
            change=Decimal("0.00"),
            created_by_email=CASHIER_EMAIL,
            total=total,
        )
        for item in items:
            item.sale = sale
        SaleItem.objects.bulk_create(items)
        return sale

    return _make_sale
