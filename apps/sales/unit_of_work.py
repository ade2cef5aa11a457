"""
Transactional boundary for a single checkout.

``SaleUnitOfWork`` holds the per-product locks, owns the database transaction
and exposes the only store operations the sale engine may perform: load the
cart's products, decrement stock, and insert the sale with its items.
Leaving the block with an exception rolls everything back.
"""

import logging
from contextlib import ExitStack

from django.db import transaction
from django.db.models import F

from apps.core.locks import KeyedLock
from apps.inventory.models import Product

from .exceptions import InsufficientStockError
from .models import SaleItem

logger = logging.getLogger(__name__)

# One lock per product id for this process
product_locks = KeyedLock()


class SaleUnitOfWork:
    """
    Context manager wrapping one checkout.

    Locks are taken in sorted id order before the transaction opens and
    released only after it has committed or rolled back, so a second
    checkout for the same product always reads the committed stock.

    Usage:
        with SaleUnitOfWork(product_ids) as uow:
            products = uow.find_products_by_ids(product_ids)
            uow.decrement_stock(product, qty)
            uow.add_sale(sale, items)
    """

    def __init__(self, product_ids, using=None):
        self.product_ids = list(product_ids)
        self.using = using
        self._stack = None

    def __enter__(self):
        stack = ExitStack()
        try:
            stack.enter_context(product_locks.hold(self.product_ids))
            stack.enter_context(transaction.atomic(using=self.using))
        except BaseException:
            stack.close()
            raise
        self._stack = stack
        return self

    def __exit__(self, exc_type, exc, tb):
        stack, self._stack = self._stack, None
        return stack.__exit__(exc_type, exc, tb)

    def find_products_by_ids(self, product_ids):
        """
        Load and row-lock the given products.

        Rows are locked in primary key order so concurrent checkouts with
        overlapping carts cannot deadlock in the database either.

        Returns:
            dict mapping product id to Product; unknown ids are absent
        """
        queryset = (
            Product.objects.using(self.using)
            .select_for_update()
            .filter(pk__in=set(product_ids))
            .order_by("pk")
        )
        return {product.pk: product for product in queryset}

    def decrement_stock(self, product, qty):
        """
        Take ``qty`` units off a product's stock.

        The update only matches while enough stock remains, so a stale read
        can never push stock below zero.

        Raises:
            InsufficientStockError: if the guarded update matched no row
        """
        updated = (
            Product.objects.using(self.using)
            .filter(pk=product.pk, stock__gte=qty)
            .update(stock=F("stock") - qty)
        )
        if updated != 1:
            logger.warning(f"Guarded stock decrement failed for {product.name} ({product.pk})")
            raise InsufficientStockError(product.name)

    def add_sale(self, sale, items):
        """Insert the sale and its items in cart order."""
        sale.save(using=self.using, force_insert=True)
        for position, item in enumerate(items):
            item.sale = sale
            item.position = position
        SaleItem.objects.using(self.using).bulk_create(items)
        return sale

