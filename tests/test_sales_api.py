"""
Tests for the sales HTTP API.

- POST /api/sales request/response contract
- Plain-text rejection bodies
- GET /api/sales history and date filters
"""

import json
import uuid
from datetime import datetime
from datetime import timezone as dt_timezone
from unittest import mock

from django.db import DatabaseError
from django.urls import reverse

import pytest
from rest_framework import status

from apps.inventory.models import Product
from apps.sales.models import Sale

SALE_KEYS = {
    "id",
    "createdAt",
    "paymentMethod",
    "cashReceived",
    "change",
    "createdByEmail",
    "total",
    "items",
}
ITEM_KEYS = {"id", "saleId", "productId", "name", "price", "qty", "lineTotal"}


def utc(*args):
    return datetime(*args, tzinfo=dt_timezone.utc)


def sale_payload(*lines, payment_method="Cash", cash_received=0, email="cashier@odin.com"):
    return {
        "items": [{"productId": str(product_id), "qty": qty} for product_id, qty in lines],
        "paymentMethod": payment_method,
        "cashReceived": cash_received,
        "createdByEmail": email,
    }


@pytest.mark.django_db
class TestCreateSaleAPI:
    """Test POST /api/sales."""

    def test_create_cash_sale_returns_full_receipt(self, cashier_api_client, make_product):
        product = make_product(name="Headphones", price="100.00", stock=5)

        url = reverse("sales:sale_list_create")
        response = cashier_api_client.post(
            url, sale_payload((product.id, 2), cash_received=250), format="json"
        )

        assert response.status_code == status.HTTP_200_OK
        body = json.loads(response.content)
        assert set(body) == SALE_KEYS
        assert body["paymentMethod"] == "Cash"
        assert body["total"] == 200.0
        assert body["cashReceived"] == 250.0
        assert body["change"] == 50.0
        assert body["createdByEmail"] == "cashier@odin.com"
        assert body["createdAt"].endswith("Z")

        assert len(body["items"]) == 1
        item = body["items"][0]
        assert set(item) == ITEM_KEYS
        assert item["saleId"] == body["id"]
        assert item["productId"] == str(product.id)
        assert item["name"] == "Headphones"
        assert item["price"] == 100.0
        assert item["qty"] == 2
        assert item["lineTotal"] == 200.0

        product.refresh_from_db()
        assert product.stock == 3

    def test_card_sale_zeroes_cash_fields(self, cashier_api_client, make_product):
        product = make_product(price="9.99", stock=5)

        url = reverse("sales:sale_list_create")
        response = cashier_api_client.post(
            url, sale_payload((product.id, 1), payment_method="Card", cash_received=50)
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data["cashReceived"] == 0
        assert response.data["change"] == 0

    def test_missing_payment_method_defaults_to_cash(self, cashier_api_client, make_product):
        product = make_product(price="10.00", stock=5)
        payload = sale_payload((product.id, 1), cash_received=10)
        del payload["paymentMethod"]

        url = reverse("sales:sale_list_create")
        response = cashier_api_client.post(url, payload)

        assert response.status_code == status.HTTP_200_OK
        assert response.data["paymentMethod"] == "Cash"

    def test_caller_supplied_price_is_ignored(self, cashier_api_client, make_product):
        product = make_product(price="10.00", stock=5)
        payload = sale_payload((product.id, 1), payment_method="Card")
        payload["items"][0]["price"] = "0.01"

        url = reverse("sales:sale_list_create")
        response = cashier_api_client.post(url, payload)

        assert response.status_code == status.HTTP_200_OK
        assert json.loads(response.content)["total"] == 10.0

    @pytest.mark.parametrize("role", ["Admin", "Supervisor", "Cashier"])
    def test_every_staff_role_can_sell(self, api_client, make_product, role):
        product = make_product(price="1.00", stock=5)
        api_client.credentials(HTTP_X_USER_ROLE=role, HTTP_X_USER_EMAIL="someone@odin.com")

        url = reverse("sales:sale_list_create")
        response = api_client.post(url, sale_payload((product.id, 1), payment_method="Card"))

        assert response.status_code == status.HTTP_200_OK

    def test_rejection_is_plain_text(self, cashier_api_client):
        url = reverse("sales:sale_list_create")
        response = cashier_api_client.post(url, sale_payload())

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response["Content-Type"].startswith("text/plain")
        assert response.content.decode() == "Items required"

    def test_unknown_product_reason(self, cashier_api_client):
        missing_id = uuid.uuid4()

        url = reverse("sales:sale_list_create")
        response = cashier_api_client.post(url, sale_payload((missing_id, 1)))

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.content.decode() == f"Product not found: {missing_id}"

    def test_insufficient_stock_reason_and_no_side_effects(
        self, cashier_api_client, make_product
    ):
        product = make_product(name="Widget", stock=1)

        url = reverse("sales:sale_list_create")
        response = cashier_api_client.post(
            url, sale_payload((product.id, 2), payment_method="Card")
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.content.decode() == "Not enough stock for: Widget"
        assert Product.objects.get(pk=product.pk).stock == 1
        assert Sale.objects.count() == 0

    def test_insufficient_cash_reason(self, cashier_api_client, make_product):
        product = make_product(price="100.00", stock=5)

        url = reverse("sales:sale_list_create")
        response = cashier_api_client.post(url, sale_payload((product.id, 2), cash_received=100))

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.content.decode() == "CashReceived must be >= Total"

    @pytest.mark.parametrize("raw_cash", [999.999, "abc", 10**13])
    def test_card_sale_does_not_validate_cash(self, cashier_api_client, make_product, raw_cash):
        product = make_product(price="9.99", stock=5)

        url = reverse("sales:sale_list_create")
        response = cashier_api_client.post(
            url, sale_payload((product.id, 1), payment_method="Card", cash_received=raw_cash)
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data["cashReceived"] == 0
        assert Product.objects.get(pk=product.pk).stock == 4

    def test_non_numeric_cash_is_a_plain_text_rejection(self, cashier_api_client, make_product):
        product = make_product(price="9.99", stock=5)

        url = reverse("sales:sale_list_create")
        response = cashier_api_client.post(url, sale_payload((product.id, 1), cash_received="abc"))

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response["Content-Type"].startswith("text/plain")
        assert response.content.decode() == "CashReceived must be a valid amount"

    def test_oversized_total_is_rejected_and_history_still_loads(
        self, cashier_api_client, make_product
    ):
        product = make_product(name="Yacht", price="9999999999.99", stock=1000)

        url = reverse("sales:sale_list_create")
        response = cashier_api_client.post(
            url, sale_payload((product.id, 1000), payment_method="Card")
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.content.decode() == "Total exceeds the maximum sale amount"
        assert Product.objects.get(pk=product.pk).stock == 1000
        assert Sale.objects.count() == 0
        assert cashier_api_client.get(url).status_code == status.HTTP_200_OK

    def test_malformed_product_id_is_a_validation_error(self, cashier_api_client):
        url = reverse("sales:sale_list_create")
        response = cashier_api_client.post(
            url,
            {"items": [{"productId": "not-a-uuid", "qty": 1}], "createdByEmail": "a@b.com"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "items" in response.data

    def test_missing_role_header_is_unauthorized(self, api_client, make_product):
        product = make_product()

        url = reverse("sales:sale_list_create")
        response = api_client.post(url, sale_payload((product.id, 1), payment_method="Card"))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.content.decode() == "Missing X-User-Role"
        assert Sale.objects.count() == 0


@pytest.mark.django_db
class TestListSalesAPI:
    """Test GET /api/sales."""

    def test_sales_are_listed_newest_first_with_items(self, cashier_api_client, make_sale):
        older = make_sale(utc(2026, 2, 3, 10, 0))
        newer = make_sale(utc(2026, 2, 4, 10, 0), lines=[("A", "1.00", 1), ("B", "2.00", 2)])

        url = reverse("sales:sale_list_create")
        response = cashier_api_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert [sale["id"] for sale in response.data] == [str(newer.id), str(older.id)]
        assert [item["name"] for item in response.data[0]["items"]] == ["A", "B"]
        assert response.data[0]["total"] == newer.total

    def test_bare_to_date_covers_the_whole_day(self, cashier_api_client, make_sale):
        make_sale(utc(2026, 2, 3, 23, 0))
        late = make_sale(utc(2026, 2, 4, 23, 59, 59, 999999))
        make_sale(utc(2026, 2, 5, 0, 0))

        url = reverse("sales:sale_list_create")
        response = cashier_api_client.get(url, {"from": "2026-02-04", "to": "2026-02-04"})

        assert response.status_code == status.HTTP_200_OK
        assert [sale["id"] for sale in response.data] == [str(late.id)]

    def test_datetime_bounds_are_inclusive(self, cashier_api_client, make_sale):
        at_start = make_sale(utc(2026, 2, 4, 9, 0))
        at_end = make_sale(utc(2026, 2, 4, 17, 0))
        make_sale(utc(2026, 2, 4, 17, 0, 1))

        url = reverse("sales:sale_list_create")
        response = cashier_api_client.get(
            url, {"from": "2026-02-04T09:00:00Z", "to": "2026-02-04T17:00:00Z"}
        )

        assert [sale["id"] for sale in response.data] == [str(at_end.id), str(at_start.id)]

    @pytest.mark.parametrize("param", ["from", "to"])
    def test_unparseable_bound_is_rejected(self, cashier_api_client, param):
        url = reverse("sales:sale_list_create")
        response = cashier_api_client.get(url, {param: "yesterday"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response["Content-Type"].startswith("text/plain")


@pytest.mark.django_db
class TestStorageFailure:
    def test_database_error_is_an_opaque_500(self, cashier_api_client, make_product):
        product = make_product()

        with mock.patch("apps.sales.views.create_sale", side_effect=DatabaseError("disk full")):
            response = cashier_api_client.post(
                reverse("sales:sale_list_create"),
                sale_payload((product.id, 1), payment_method="Card"),
            )

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.content.decode() == "Internal server error"
