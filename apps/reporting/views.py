"""
Views for the reporting API.

- GET /api/reports/closeout?date=YYYY-MM-DD: daily closeout
"""

from django.utils.dateparse import parse_date

from rest_framework.decorators import api_view
from rest_framework.response import Response

from apps.core.exceptions import PosError

from .services import closeout


@api_view(["GET"])
def closeout_report(request):
    """
    Daily closeout for one UTC calendar day.

    Returns:
        {date, salesCount, itemsQty, total, totalCash, totalCard}
    """
    raw = request.query_params.get("date", "").strip()
    if not raw:
        raise PosError("date is required. Example: 2026-02-04")

    try:
        day = parse_date(raw)
    except ValueError:
        day = None
    if day is None:
        raise PosError("Invalid date format. Use YYYY-MM-DD")

    return Response(closeout(day).as_dict())
