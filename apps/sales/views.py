"""
Views for the sales API.

- POST /api/sales: check out a cart
- GET /api/sales: sales history, optionally within a date range
"""

import logging

from django.utils.dateparse import parse_date, parse_datetime

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.core.exceptions import PosError

from .serializers import SaleCreateSerializer, SaleSerializer
from .services import create_sale, list_sales

logger = logging.getLogger(__name__)


def parse_date_bound(raw, param):
    """
    Parse a ``from``/``to`` query value as an ISO datetime or a bare date.

    Returns None when the parameter is absent or blank.
    """
    raw = (raw or "").strip()
    if not raw:
        return None

    try:
        value = parse_date(raw) or parse_datetime(raw)
    except ValueError:
        value = None

    if value is None:
        raise PosError(f"Invalid {param} date. Use YYYY-MM-DD or an ISO-8601 datetime")
    return value


class SaleListCreateView(APIView):
    """
    GET: list sales newest first, filtered by the optional ``from`` and
    ``to`` query parameters (inclusive; a bare ``to`` date covers the day).

    POST: create a sale from a cart. Rejections come back as a plain-text
    400 with the reason to show the cashier.
    """

    def get(self, request):
        from_time = parse_date_bound(request.query_params.get("from"), "from")
        to_time = parse_date_bound(request.query_params.get("to"), "to")

        sales = list_sales(from_time=from_time, to_time=to_time)
        return Response(SaleSerializer(sales, many=True).data)

    def post(self, request):
        serializer = SaleCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        sale = create_sale(serializer.to_cart(), request.principal)
        return Response(SaleSerializer(sale).data, status=status.HTTP_200_OK)
