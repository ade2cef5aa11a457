"""
Reporting services for the Odin POS backend.

- Daily closeout: sales count, units sold and totals split by payment method
  for one UTC calendar day
"""

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from django.db.models import Count, Q, Sum

from apps.sales.models import Sale, SaleItem
from apps.sales.services import to_utc_bound

logger = logging.getLogger(__name__)

ZERO = Decimal("0.00")


@dataclass(frozen=True)
class CloseoutReport:
    date: date
    sales_count: int
    items_qty: int
    total: Decimal
    total_cash: Decimal
    total_card: Decimal

    def as_dict(self):
        return {
            "date": self.date.isoformat(),
            "salesCount": self.sales_count,
            "itemsQty": self.items_qty,
            "total": self.total,
            "totalCash": self.total_cash,
            "totalCard": self.total_card,
        }


def closeout(day: date) -> CloseoutReport:
    """
    Aggregate every sale created within ``day`` (00:00:00 to 23:59:59.999999
    UTC, both inclusive).

    Sales and their items are committed together, so the counts never include
    a sale without its lines.
    """
    day_start = to_utc_bound(day)
    day_end = to_utc_bound(day, end_of_day=True)
    sales = Sale.objects.filter(created_at__gte=day_start, created_at__lte=day_end)

    totals = sales.aggregate(
        sales_count=Count("id"),
        total_all=Sum("total"),
        total_cash=Sum("total", filter=Q(payment_method=Sale.CASH)),
        total_card=Sum("total", filter=Q(payment_method=Sale.CARD)),
    )
    items_qty = SaleItem.objects.filter(
        sale__created_at__gte=day_start, sale__created_at__lte=day_end
    ).aggregate(qty=Sum("qty"))["qty"]

    report = CloseoutReport(
        date=day,
        sales_count=totals["sales_count"],
        items_qty=items_qty or 0,
        total=totals["total_all"] or ZERO,
        total_cash=totals["total_cash"] or ZERO,
        total_card=totals["total_card"] or ZERO,
    )
    logger.debug(f"Closeout for {day}: {report.sales_count} sale(s), total {report.total}")
    return report
