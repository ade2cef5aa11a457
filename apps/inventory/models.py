"""
Catalog models for the Odin POS backend.

Products are never cascaded into sales: sale items keep a snapshot of the
product id, name and price, so deleting or editing a product leaves the sales
history untouched.
"""

import uuid
from decimal import Decimal

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models


class Product(models.Model):
    """
    A sellable catalog item with its on-hand stock.

    Stock is only decreased by the sale engine through a guarded update; the
    ``stock >= 0`` check constraint is the storage-level backstop.

    Type fields (tax, commission, item) are free text as the admin dashboard
    sends them; the constants below are the values the POS understands.
    """

    TAX_EXEMPT = "Exempt"
    TAX_PERCENT = "Percent"

    COMMISSION_PERCENT = "Percent"
    COMMISSION_FIXED = "Fixed"

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
        help_text="Unique identifier for the product",
    )

    # General data
    name = models.CharField(
        max_length=255,
        help_text="Product name shown on the POS and receipts",
    )

    code = models.CharField(
        max_length=100,
        blank=True,
        default="",
        help_text="Internal product code",
    )

    barcode = models.CharField(
        max_length=100,
        blank=True,
        default="",
        help_text="Barcode for quick scanning",
    )

    description = models.TextField(
        blank=True,
        default="",
        help_text="Product description",
    )

    # Pricing
    price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0.00"))],
        help_text="Unit selling price",
    )

    promo_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0.00"))],
        help_text="Promotional price; 0 means no promotion",
    )

    # Tax
    tax_type = models.CharField(
        max_length=20,
        blank=True,
        default=TAX_EXEMPT,
        help_text="Exempt or Percent",
    )

    tax_percent = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0.00")), MaxValueValidator(Decimal("100.00"))],
        help_text="Tax percent applied when tax type is Percent; 0 means exempt",
    )

    # E-commerce
    ecommerce_name = models.CharField(
        max_length=255,
        blank=True,
        default="",
        help_text="Name shown in the online store",
    )

    ecommerce_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0.00"))],
        help_text="Price in the online store",
    )

    ecommerce_category = models.CharField(
        max_length=100,
        blank=True,
        default="",
        help_text="Category in the online store",
    )

    # Categorization and display
    subcategory = models.CharField(
        max_length=100,
        blank=True,
        default="",
        help_text="Item subcategory",
    )

    item_type = models.CharField(
        max_length=50,
        blank=True,
        default="Normal",
        help_text="Item type, e.g. Normal",
    )

    display_order = models.IntegerField(
        default=0,
        help_text="Position on the POS grid",
    )

    show_on_ipad = models.BooleanField(
        default=True,
        help_text="Whether the item is shown on the iPad terminal",
    )

    image_url = models.CharField(
        max_length=500,
        blank=True,
        default="",
        help_text="Product image URL",
    )

    # Commission
    commission_type = models.CharField(
        max_length=20,
        blank=True,
        default=COMMISSION_PERCENT,
        help_text="Percent or Fixed",
    )

    commission_value = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0.00"))],
        help_text="Commission percent or fixed amount per unit",
    )

    # Integration and ordering limits
    integration_code = models.CharField(
        max_length=100,
        blank=True,
        default="",
        help_text="Code used by external integrations",
    )

    max_order_qty = models.IntegerField(
        default=0,
        validators=[MinValueValidator(0)],
        help_text="Maximum quantity per order; 0 means no limit",
    )

    next_order_time_minutes = models.IntegerField(
        default=0,
        validators=[MinValueValidator(0)],
        help_text="Minutes before the item can be ordered again",
    )

    prep_time_minutes = models.IntegerField(
        default=0,
        validators=[MinValueValidator(0)],
        help_text="Preparation time in minutes",
    )

    meal_hour = models.CharField(
        max_length=50,
        blank=True,
        default="",
        help_text="Meal hour label, e.g. Breakfast",
    )

    # Inventory tracking
    stock = models.IntegerField(
        default=0,
        validators=[MinValueValidator(0)],
        help_text="Units currently in stock",
    )

    # Status
    is_active = models.BooleanField(
        default=True,
        help_text="Whether this product can be sold",
    )

    # Timestamps
    created_at = models.DateTimeField(
        auto_now_add=True,
        help_text="When the product was created",
    )

    updated_at = models.DateTimeField(
        auto_now=True,
        help_text="When the product was last updated",
    )

    class Meta:
        db_table = "products"
        ordering = ["name"]
        verbose_name = "Product"
        verbose_name_plural = "Products"
        indexes = [
            models.Index(fields=["barcode"], name="product_barcode_idx"),
            models.Index(fields=["code"], name="product_code_idx"),
            models.Index(fields=["is_active"], name="product_active_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(stock__gte=0),
                name="product_stock_non_negative",
            ),
        ]

    def __str__(self):
        return f"{self.name} ({self.stock} in stock)"

    @property
    def is_exempt(self):
        """Check if the product carries no tax."""
        return self.tax_type == self.TAX_EXEMPT or self.tax_percent == 0
