"""
Tests for the daily closeout report.
"""

import json
from datetime import date, datetime
from datetime import timezone as dt_timezone
from decimal import Decimal

from django.urls import reverse

import pytest
from rest_framework import status

from apps.reporting.services import closeout
from apps.sales.services import list_sales


def utc(*args):
    return datetime(*args, tzinfo=dt_timezone.utc)


@pytest.mark.django_db
class TestCloseoutService:
    """Test closeout aggregation for one UTC day."""

    def test_closeout_matches_the_sales_history_for_the_day(self, make_sale):
        make_sale(utc(2026, 2, 3, 23, 59, 59), lines=[("Late", "4.00", 1)])
        make_sale(utc(2026, 2, 4, 0, 0), lines=[("A", "1.10", 3)], payment_method="Card")
        make_sale(utc(2026, 2, 4, 8, 30), lines=[("B", "7.35", 2), ("C", "0.05", 9)])
        make_sale(utc(2026, 2, 4, 15, 0), lines=[("D", "19.99", 1)], payment_method="Card")
        make_sale(utc(2026, 2, 4, 23, 59, 59, 999999), lines=[("E", "2.50", 4)])
        make_sale(utc(2026, 2, 5, 0, 0), lines=[("Early", "9.00", 1)])
        day = date(2026, 2, 4)

        report = closeout(day)
        sales = list(list_sales(day, day))

        assert report.sales_count == len(sales) == 4
        assert report.items_qty == sum(item.qty for sale in sales for item in sale.items.all())
        assert report.total == sum((sale.total for sale in sales), Decimal("0.00"))
        assert report.total_cash == sum(
            (sale.total for sale in sales if sale.payment_method == "Cash"), Decimal("0.00")
        )
        assert report.total_card == sum(
            (sale.total for sale in sales if sale.payment_method == "Card"), Decimal("0.00")
        )
        assert report.total_cash + report.total_card == report.total

    def test_totals_split_by_payment_method(self, make_sale):
        make_sale(utc(2026, 2, 4, 9, 0), lines=[("A", "10.50", 2)], payment_method="Cash")
        make_sale(utc(2026, 2, 4, 12, 0), lines=[("B", "3.25", 1)], payment_method="Card")
        make_sale(
            utc(2026, 2, 4, 18, 0),
            lines=[("C", "0.10", 3), ("D", "1.00", 1)],
            payment_method="Cash",
        )

        report = closeout(date(2026, 2, 4))

        assert report.sales_count == 3
        assert report.items_qty == 7
        assert report.total == Decimal("25.55")
        assert report.total_cash == Decimal("22.30")
        assert report.total_card == Decimal("3.25")
        assert report.total_cash + report.total_card == report.total

    def test_day_bounds_are_inclusive_and_utc(self, make_sale):
        make_sale(utc(2026, 2, 3, 23, 59, 59, 999999))
        make_sale(utc(2026, 2, 4, 0, 0))
        make_sale(utc(2026, 2, 4, 23, 59, 59, 999999))
        make_sale(utc(2026, 2, 5, 0, 0))

        report = closeout(date(2026, 2, 4))

        assert report.sales_count == 2

    def test_empty_day_reports_zeroes(self, make_sale):
        make_sale(utc(2026, 2, 3, 12, 0))

        report = closeout(date(2026, 2, 4))

        assert report.sales_count == 0
        assert report.items_qty == 0
        assert report.total == Decimal("0.00")
        assert report.total_cash == Decimal("0.00")
        assert report.total_card == Decimal("0.00")

    def test_as_dict_uses_client_keys(self, make_sale):
        make_sale(utc(2026, 2, 4, 9, 0))

        data = closeout(date(2026, 2, 4)).as_dict()

        assert set(data) == {"date", "salesCount", "itemsQty", "total", "totalCash", "totalCard"}
        assert data["date"] == "2026-02-04"


@pytest.mark.django_db
class TestCloseoutAPI:
    """Test GET /api/reports/closeout."""

    def test_supervisor_gets_closeout(self, supervisor_api_client, make_sale):
        make_sale(utc(2026, 2, 4, 9, 0), lines=[("A", "10.00", 2)], payment_method="Card")

        url = reverse("reporting:closeout")
        response = supervisor_api_client.get(url, {"date": "2026-02-04"})

        assert response.status_code == status.HTTP_200_OK
        body = json.loads(response.content)
        assert body == {
            "date": "2026-02-04",
            "salesCount": 1,
            "itemsQty": 2,
            "total": 20.0,
            "totalCash": 0.0,
            "totalCard": 20.0,
        }

    def test_missing_date(self, admin_api_client):
        url = reverse("reporting:closeout")
        response = admin_api_client.get(url)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.content.decode() == "date is required. Example: 2026-02-04"

    @pytest.mark.parametrize("value", ["04/02/2026", "2026-02-30", "today"])
    def test_invalid_date(self, admin_api_client, value):
        url = reverse("reporting:closeout")
        response = admin_api_client.get(url, {"date": value})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.content.decode() == "Invalid date format. Use YYYY-MM-DD"

    def test_cashier_is_forbidden(self, cashier_api_client):
        url = reverse("reporting:closeout")
        response = cashier_api_client.get(url, {"date": "2026-02-04"})

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.content.decode() == "Forbidden"
