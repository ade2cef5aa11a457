"""
Sale engine for the Odin POS backend.

Turns a cart into a committed sale:
- validates the cart against the live catalog, line by line in cart order
- decrements stock through guarded updates
- prices every line from the catalog and reconciles the payment
- stores the sale and its items in one transaction

Also provides the read side used by the sales history screen.
"""

import logging
import uuid
from dataclasses import dataclass, field
from datetime import date, datetime, time
from datetime import timezone as dt_timezone
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, List, Optional, Union

from django.db.models import prefetch_related_objects
from django.utils import timezone

from apps.core.principal import Principal

from .exceptions import (
    AmountOutOfRangeError,
    EmptyCartError,
    InsufficientCashError,
    InsufficientStockError,
    InvalidPaymentMethodError,
    InvalidQuantityError,
    MissingCreatorError,
    ProductInactiveError,
    ProductNotFoundError,
    SaleError,
)
from .models import Sale, SaleItem
from .unit_of_work import SaleUnitOfWork

logger = logging.getLogger(__name__)

ZERO = Decimal("0.00")
CENT = Decimal("0.01")


def _amount_limit(field_name):
    """Smallest value that no longer fits the Sale money column."""
    money_field = Sale._meta.get_field(field_name)
    return Decimal(10) ** (money_field.max_digits - money_field.decimal_places)


MAX_TOTAL = _amount_limit("total")
MAX_CASH_RECEIVED = _amount_limit("cash_received")

DateBound = Union[date, datetime]


@dataclass(frozen=True)
class CartLine:
    product_id: uuid.UUID
    qty: int


@dataclass(frozen=True)
class CartRequest:
    """A checkout as submitted by the POS terminal."""

    items: List[CartLine] = field(default_factory=list)
    payment_method: Optional[str] = None
    # Raw caller value; only read for Cash payments
    cash_received: Any = None
    created_by_email: Optional[str] = None


def normalize_payment_method(payment_method: Optional[str]) -> str:
    """Blank means Cash; anything else must be exactly Cash or Card."""
    method = (payment_method or "").strip() or Sale.CASH
    if method not in (Sale.CASH, Sale.CARD):
        raise InvalidPaymentMethodError()
    return method


def _check_lines(cart, products):
    """
    Run the per-line checks in cart order.

    Repeated lines for one product are checked against what the earlier
    lines left, so their combined quantity can never exceed stock.
    """
    remaining = {}
    for line in cart.items:
        product = products.get(line.product_id)
        if product is None:
            raise ProductNotFoundError(line.product_id)
        if not product.is_active:
            raise ProductInactiveError(product.name)
        if line.qty <= 0:
            raise InvalidQuantityError()

        available = remaining.get(product.pk, product.stock)
        if line.qty > available:
            raise InsufficientStockError(product.name)
        remaining[product.pk] = available - line.qty


def parse_amount(raw):
    """
    Read a caller-supplied money value.

    Blank or missing means zero. Returns None for anything that is not a
    finite number (text, booleans, lists, NaN).
    """
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return ZERO
    if isinstance(raw, bool):
        return None
    try:
        amount = Decimal(str(raw).strip())
    except (InvalidOperation, ValueError):
        return None
    return amount if amount.is_finite() else None


def _check_total(total):
    if total >= MAX_TOTAL:
        raise AmountOutOfRangeError()


def _reconcile_payment(payment_method, cash_received, total):
    """
    Card payments ignore whatever cash value the caller sent. Cash is parsed
    here, rounded to cents and checked against the total.

    Returns:
        (cash_received, change) to store on the sale
    """
    if payment_method == Sale.CARD:
        return ZERO, ZERO

    cash = parse_amount(cash_received)
    if cash is None:
        raise InsufficientCashError("CashReceived must be a valid amount")
    if cash <= 0:
        raise InsufficientCashError("CashReceived required for Cash payment")
    # Checked before rounding too; quantize fails on values beyond the context precision
    if cash >= MAX_CASH_RECEIVED:
        raise AmountOutOfRangeError("CashReceived exceeds the maximum amount")
    cash = cash.quantize(CENT, rounding=ROUND_HALF_UP)
    if cash >= MAX_CASH_RECEIVED:
        raise AmountOutOfRangeError("CashReceived exceeds the maximum amount")

    if cash < total:
        raise InsufficientCashError("CashReceived must be >= Total")
    return cash, cash - total


def create_sale(cart: CartRequest, principal: Principal) -> Sale:
    """
    Validate a cart and commit it as a sale.

    Checks run fail-fast in this order: non-empty cart, creator email,
    payment method, then for each line (in cart order) product exists,
    product active, qty > 0, enough stock; then the total must fit the money
    columns and, for Cash, the cash received. Prices and names always come from
    the catalog; the cart only names products and quantities.

    Args:
        cart: Lines, payment method, cash received and creator email
        principal: Caller identity from the role middleware

    Returns:
        The committed Sale with its items

    Raises:
        SaleError: the sale was rejected and nothing was written
    """
    try:
        if not cart.items:
            raise EmptyCartError()

        created_by_email = (cart.created_by_email or "").strip()
        if not created_by_email:
            raise MissingCreatorError()

        payment_method = normalize_payment_method(cart.payment_method)
        product_ids = [line.product_id for line in cart.items]

        with SaleUnitOfWork(product_ids) as uow:
            products = uow.find_products_by_ids(product_ids)
            _check_lines(cart, products)

            items = []
            for line in cart.items:
                product = products[line.product_id]
                items.append(
                    SaleItem(
                        product_id=product.pk,
                        name=product.name,
                        price=product.price,
                        qty=line.qty,
                    )
                )

            total = sum((item.line_total for item in items), ZERO)
            _check_total(total)
            cash_received, change = _reconcile_payment(
                payment_method, cart.cash_received, total
            )

            for line in cart.items:
                uow.decrement_stock(products[line.product_id], line.qty)

            sale = Sale(
                created_at=timezone.now(),
                payment_method=payment_method,
                cash_received=cash_received,
                change=change,
                created_by_email=created_by_email,
                total=total,
            )
            uow.add_sale(sale, items)
            prefetch_related_objects([sale], "items")

    except SaleError as e:
        logger.warning(f"Sale rejected for {principal}: {e.message}")
        raise

    logger.info(
        f"Sale {sale.id} committed by {principal}: {len(items)} line(s), "
        f"total {sale.total} ({sale.payment_method})"
    )
    return sale


def to_utc_bound(value: DateBound, end_of_day: bool = False) -> datetime:
    """
    Turn a date or datetime into an aware UTC datetime.

    A bare date becomes the start of that day, or its last microsecond when
    ``end_of_day`` is set. Naive datetimes are taken to be UTC.
    """
    if isinstance(value, datetime):
        moment = value
    else:
        moment = datetime.combine(value, time.max if end_of_day else time.min)

    if timezone.is_naive(moment):
        moment = timezone.make_aware(moment, dt_timezone.utc)
    return moment.astimezone(dt_timezone.utc)


def list_sales(from_time: Optional[DateBound] = None, to_time: Optional[DateBound] = None):
    """
    Sales with their items, newest first.

    Both bounds are inclusive. A bare ``to`` date covers the whole day.
    """
    queryset = Sale.objects.prefetch_related("items").order_by("-created_at", "-id")

    if from_time is not None:
        queryset = queryset.filter(created_at__gte=to_utc_bound(from_time))
    if to_time is not None:
        queryset = queryset.filter(created_at__lte=to_utc_bound(to_time, end_of_day=True))

    return queryset
