"""
Tests for the product catalog API.

- Product list, detail, create, update and delete
- Barcode/code lookup
"""

import json
import uuid
from decimal import Decimal

from django.urls import reverse

import pytest
from rest_framework import status

from apps.inventory.models import Product
from apps.sales.models import SaleItem
from apps.sales.services import CartLine, CartRequest, create_sale


@pytest.mark.django_db
class TestProductCRUD:
    """Test product CRUD operations."""

    def test_list_products_ordered_by_name(self, cashier_api_client, make_product):
        make_product(name="Zucchini")
        make_product(name="Apple")
        make_product(name="Mango", is_active=False)

        response = cashier_api_client.get(reverse("inventory:product_list"))

        assert response.status_code == status.HTTP_200_OK
        assert [p["name"] for p in response.data] == ["Apple", "Mango", "Zucchini"]

    def test_product_fields_are_camel_case(self, cashier_api_client, make_product):
        product = make_product(name="Soda", price="1.25", stock=7, barcode="7501", code="SODA")

        response = cashier_api_client.get(
            reverse("inventory:product_detail", kwargs={"id": product.id})
        )

        assert response.status_code == status.HTTP_200_OK
        body = json.loads(response.content)
        assert body["id"] == str(product.id)
        assert body["price"] == 1.25
        assert body["taxType"] == "Exempt"
        assert body["taxPercent"] == 0.0
        assert body["stock"] == 7
        assert body["isActive"] is True
        assert body["barcode"] == "7501"
        assert body["code"] == "SODA"
        assert "createdAt" in body and "updatedAt" in body

    def test_detail_of_unknown_product_is_404(self, cashier_api_client):
        response = cashier_api_client.get(
            reverse("inventory:product_detail", kwargs={"id": uuid.uuid4()})
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_create_product(self, supervisor_api_client):
        data = {
            "name": "  Chips  ",
            "price": "2.50",
            "stock": 12,
            "code": "CH-1",
            "barcode": "12345",
            "taxType": "Percent",
            "taxPercent": "18.00",
        }

        response = supervisor_api_client.post(reverse("inventory:product_list"), data)

        assert response.status_code == status.HTTP_201_CREATED
        product = Product.objects.get(pk=response.data["id"])
        assert product.name == "Chips"
        assert product.price == Decimal("2.50")
        assert product.tax_type == "Percent"
        assert product.tax_percent == Decimal("18.00")
        assert product.is_exempt is False
        assert product.stock == 12
        assert product.is_active is True

    def test_admin_dashboard_payload_round_trips(self, admin_api_client):
        data = {
            "name": "Mofongo",
            "code": "MOF-1",
            "barcode": "",
            "description": "Plantain mash",
            "price": 350,
            "promoPrice": 300,
            "taxType": "Percent",
            "taxPercent": 18,
            "ecommerceName": "Mofongo Deluxe",
            "ecommercePrice": 375,
            "ecommerceCategory": "Platos",
            "subcategory": "Fritos",
            "itemType": "Normal",
            "displayOrder": 3,
            "showOnIpad": False,
            "imageUrl": "https://cdn.example.com/mofongo.png",
            "commissionType": "Fixed",
            "commissionValue": 15,
            "integrationCode": "EXT-77",
            "maxOrderQty": 4,
            "nextOrderTimeMinutes": 10,
            "prepTimeMinutes": 25,
            "mealHour": "Lunch",
            "stock": 20,
            "isActive": True,
        }

        response = admin_api_client.post(reverse("inventory:product_list"), data, format="json")

        assert response.status_code == status.HTTP_201_CREATED
        body = json.loads(response.content)
        for key, value in data.items():
            assert body[key] == value, key

        product = Product.objects.get(pk=body["id"])
        assert product.promo_price == Decimal("300.00")
        assert product.ecommerce_name == "Mofongo Deluxe"
        assert product.commission_type == Product.COMMISSION_FIXED
        assert product.show_on_ipad is False
        assert product.prep_time_minutes == 25

    def test_new_product_defaults(self, admin_api_client):
        response = admin_api_client.post(reverse("inventory:product_list"), {"name": "Water"})

        assert response.status_code == status.HTTP_201_CREATED
        body = json.loads(response.content)
        assert body["taxType"] == "Exempt"
        assert body["commissionType"] == "Percent"
        assert body["itemType"] == "Normal"
        assert body["showOnIpad"] is True
        assert body["promoPrice"] == 0.0
        assert body["maxOrderQty"] == 0

    def test_null_text_fields_are_stored_blank(self, admin_api_client):
        data = {"name": "Soda", "ecommerceName": None, "mealHour": None, "taxType": None}

        response = admin_api_client.post(reverse("inventory:product_list"), data, format="json")

        assert response.status_code == status.HTTP_201_CREATED
        product = Product.objects.get(pk=response.data["id"])
        assert product.ecommerce_name == ""
        assert product.meal_hour == ""
        assert product.tax_type == ""

    @pytest.mark.parametrize(
        "field,value",
        [("taxPercent", 101), ("promoPrice", -1), ("prepTimeMinutes", -5), ("maxOrderQty", -1)],
    )
    def test_out_of_range_values_are_rejected(self, admin_api_client, field, value):
        response = admin_api_client.post(
            reverse("inventory:product_list"), {"name": "Soda", field: value}, format="json"
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert field in response.data

    @pytest.mark.parametrize(
        "tax_type,tax_percent,exempt",
        [("Exempt", "18.00", True), ("Percent", "0.00", True), ("Percent", "18.00", False)],
    )
    def test_is_exempt(self, make_product, tax_type, tax_percent, exempt):
        product = make_product(tax_type=tax_type, tax_percent=Decimal(tax_percent))

        assert product.is_exempt is exempt

    def test_create_requires_name(self, admin_api_client):
        response = admin_api_client.post(
            reverse("inventory:product_list"), {"name": "   ", "price": "1.00"}
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.content.decode() == "Name is required"
        assert Product.objects.count() == 0

    def test_create_rejects_negative_stock(self, admin_api_client):
        response = admin_api_client.post(
            reverse("inventory:product_list"), {"name": "Soda", "stock": -1}
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "stock" in response.data

    def test_update_product(self, admin_api_client, make_product):
        product = make_product(name="Soda", price="1.00", stock=3)

        response = admin_api_client.put(
            reverse("inventory:product_detail", kwargs={"id": product.id}),
            {"name": "Soda Zero", "price": "1.10", "stock": 10, "isActive": False},
        )

        assert response.status_code == status.HTTP_200_OK
        product.refresh_from_db()
        assert product.name == "Soda Zero"
        assert product.price == Decimal("1.10")
        assert product.stock == 10
        assert product.is_active is False

    def test_update_requires_name(self, admin_api_client, make_product):
        product = make_product(name="Soda")

        response = admin_api_client.put(
            reverse("inventory:product_detail", kwargs={"id": product.id}),
            {"price": "1.10", "stock": 10},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.content.decode() == "Name is required"

    def test_delete_keeps_sales_history(self, admin_api_client, make_product, cashier):
        product = make_product(name="Soda", price="1.00", stock=3)
        create_sale(
            CartRequest(
                items=[CartLine(product_id=product.id, qty=1)],
                payment_method="Card",
                created_by_email="cashier@odin.com",
            ),
            cashier,
        )

        response = admin_api_client.delete(
            reverse("inventory:product_detail", kwargs={"id": product.id})
        )

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not Product.objects.filter(pk=product.id).exists()
        item = SaleItem.objects.get(product_id=product.id)
        assert item.name == "Soda"

    def test_delete_unknown_product_is_404(self, admin_api_client):
        response = admin_api_client.delete(
            reverse("inventory:product_detail", kwargs={"id": uuid.uuid4()})
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.django_db
class TestProductLookup:
    """Test barcode/code lookup for the POS scanner."""

    def test_lookup_by_barcode(self, cashier_api_client, make_product):
        product = make_product(name="Soda", barcode="7501")

        response = cashier_api_client.get(reverse("inventory:product_lookup"), {"barcode": "7501"})

        assert response.status_code == status.HTTP_200_OK
        assert response.data["id"] == str(product.id)

    def test_lookup_by_code(self, cashier_api_client, make_product):
        product = make_product(name="Soda", code="SODA")

        response = cashier_api_client.get(reverse("inventory:product_lookup"), {"code": " SODA "})

        assert response.status_code == status.HTTP_200_OK
        assert response.data["id"] == str(product.id)

    def test_lookup_with_both_requires_both_to_match(self, cashier_api_client, make_product):
        make_product(name="Soda", code="SODA", barcode="7501")

        response = cashier_api_client.get(
            reverse("inventory:product_lookup"), {"code": "SODA", "barcode": "9999"}
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_lookup_ignores_inactive_products(self, cashier_api_client, make_product):
        make_product(name="Soda", barcode="7501", is_active=False)

        response = cashier_api_client.get(reverse("inventory:product_lookup"), {"barcode": "7501"})

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_lookup_requires_a_key(self, cashier_api_client):
        response = cashier_api_client.get(reverse("inventory:product_lookup"), {"barcode": " "})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.content.decode() == "barcode or code is required"
