"""
Sale models for the Odin POS backend.

A Sale is written once, inside the same transaction as its items and the
stock decrements, and never modified afterwards.
"""

import uuid
from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models


class Sale(models.Model):
    """
    A completed checkout.

    Totals are computed by the sale engine from the catalog prices at commit
    time; the caller never supplies prices.
    """

    # Payment method choices
    CASH = "Cash"
    CARD = "Card"

    PAYMENT_METHOD_CHOICES = [
        (CASH, "Cash"),
        (CARD, "Card"),
    ]

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
        help_text="Unique identifier for the sale",
    )

    created_at = models.DateTimeField(
        db_index=True,
        help_text="When the sale was committed (UTC)",
    )

    payment_method = models.CharField(
        max_length=10,
        choices=PAYMENT_METHOD_CHOICES,
        default=CASH,
        help_text="How the customer paid",
    )

    cash_received = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0.00"))],
        help_text="Cash handed over by the customer; 0 for card payments",
    )

    change = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0.00"))],
        help_text="Change returned to the customer",
    )

    created_by_email = models.CharField(
        max_length=254,
        help_text="Email of the cashier who rang up the sale",
    )

    total = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
        help_text="Sum of all line totals",
    )

    class Meta:
        db_table = "sales"
        ordering = ["-created_at"]
        verbose_name = "Sale"
        verbose_name_plural = "Sales"
        indexes = [
            models.Index(fields=["payment_method", "created_at"], name="sale_method_date_idx"),
        ]

    def __str__(self):
        return f"Sale {self.id} - {self.total} ({self.payment_method})"

    @property
    def items_qty(self):
        """Total number of units sold in this sale."""
        return sum(item.qty for item in self.items.all())


class SaleItem(models.Model):
    """
    One line of a sale.

    Product id, name and price are snapshots taken at sale time; there is no
    foreign key to the catalog so products can change or disappear freely.
    """

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
        help_text="Unique identifier for the sale item",
    )

    sale = models.ForeignKey(
        Sale,
        on_delete=models.CASCADE,
        related_name="items",
        help_text="Sale this item belongs to",
    )

    product_id = models.UUIDField(
        db_index=True,
        help_text="Id of the product at sale time",
    )

    name = models.CharField(
        max_length=255,
        help_text="Product name at sale time",
    )

    price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        help_text="Unit price at sale time",
    )

    qty = models.IntegerField(
        validators=[MinValueValidator(1)],
        help_text="Units sold",
    )

    position = models.PositiveIntegerField(
        default=0,
        help_text="Order of the line within the cart",
    )

    class Meta:
        db_table = "sale_items"
        ordering = ["position"]
        verbose_name = "Sale Item"
        verbose_name_plural = "Sale Items"
        constraints = [
            models.CheckConstraint(
                condition=models.Q(qty__gt=0),
                name="sale_item_qty_positive",
            ),
        ]

    def __str__(self):
        return f"{self.name} x {self.qty}"

    @property
    def line_total(self):
        return self.price * self.qty
