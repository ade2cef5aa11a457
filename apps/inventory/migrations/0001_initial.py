import decimal
import uuid

import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Product",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        help_text="Unique identifier for the product",
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "name",
                    models.CharField(
                        help_text="Product name shown on the POS and receipts", max_length=255
                    ),
                ),
                (
                    "code",
                    models.CharField(
                        blank=True, default="", help_text="Internal product code", max_length=100
                    ),
                ),
                (
                    "barcode",
                    models.CharField(
                        blank=True,
                        default="",
                        help_text="Barcode for quick scanning",
                        max_length=100,
                    ),
                ),
                (
                    "description",
                    models.TextField(blank=True, default="", help_text="Product description"),
                ),
                (
                    "price",
                    models.DecimalField(
                        decimal_places=2,
                        default=decimal.Decimal("0.00"),
                        help_text="Unit selling price",
                        max_digits=12,
                        validators=[django.core.validators.MinValueValidator(decimal.Decimal("0.00"))],
                    ),
                ),
                (
                    "tax_rate",
                    models.DecimalField(
                        decimal_places=2,
                        default=decimal.Decimal("0.00"),
                        help_text="Tax rate percent; 0 means exempt",
                        max_digits=5,
                        validators=[django.core.validators.MinValueValidator(decimal.Decimal("0.00"))],
                    ),
                ),
                (
                    "stock",
                    models.IntegerField(
                        default=0,
                        help_text="Units currently in stock",
                        validators=[django.core.validators.MinValueValidator(0)],
                    ),
                ),
                (
                    "is_active",
                    models.BooleanField(default=True, help_text="Whether this product can be sold"),
                ),
                (
                    "created_at",
                    models.DateTimeField(
                        auto_now_add=True, help_text="When the product was created"
                    ),
                ),
                (
                    "updated_at",
                    models.DateTimeField(
                        auto_now=True, help_text="When the product was last updated"
                    ),
                ),
            ],
            options={
                "verbose_name": "Product",
                "verbose_name_plural": "Products",
                "db_table": "products",
                "ordering": ["name"],
                "indexes": [
                    models.Index(fields=["barcode"], name="product_barcode_idx"),
                    models.Index(fields=["code"], name="product_code_idx"),
                    models.Index(fields=["is_active"], name="product_active_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("stock__gte", 0)),
                        name="product_stock_non_negative",
                    )
                ],
            },
        ),
    ]
