import decimal
import uuid

import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Sale",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        help_text="Unique identifier for the sale",
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "created_at",
                    models.DateTimeField(
                        db_index=True, help_text="When the sale was committed (UTC)"
                    ),
                ),
                (
                    "payment_method",
                    models.CharField(
                        choices=[("Cash", "Cash"), ("Card", "Card")],
                        default="Cash",
                        help_text="How the customer paid",
                        max_length=10,
                    ),
                ),
                (
                    "cash_received",
                    models.DecimalField(
                        decimal_places=2,
                        default=decimal.Decimal("0.00"),
                        help_text="Cash handed over by the customer; 0 for card payments",
                        max_digits=12,
                        validators=[django.core.validators.MinValueValidator(decimal.Decimal("0.00"))],
                    ),
                ),
                (
                    "change",
                    models.DecimalField(
                        decimal_places=2,
                        default=decimal.Decimal("0.00"),
                        help_text="Change returned to the customer",
                        max_digits=12,
                        validators=[django.core.validators.MinValueValidator(decimal.Decimal("0.00"))],
                    ),
                ),
                (
                    "created_by_email",
                    models.CharField(
                        help_text="Email of the cashier who rang up the sale", max_length=254
                    ),
                ),
                (
                    "total",
                    models.DecimalField(
                        decimal_places=2,
                        default=decimal.Decimal("0.00"),
                        help_text="Sum of all line totals",
                        max_digits=12,
                    ),
                ),
            ],
            options={
                "verbose_name": "Sale",
                "verbose_name_plural": "Sales",
                "db_table": "sales",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(
                        fields=["payment_method", "created_at"], name="sale_method_date_idx"
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="SaleItem",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        help_text="Unique identifier for the sale item",
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "product_id",
                    models.UUIDField(db_index=True, help_text="Id of the product at sale time"),
                ),
                (
                    "name",
                    models.CharField(help_text="Product name at sale time", max_length=255),
                ),
                (
                    "price",
                    models.DecimalField(
                        decimal_places=2, help_text="Unit price at sale time", max_digits=12
                    ),
                ),
                (
                    "qty",
                    models.IntegerField(
                        help_text="Units sold",
                        validators=[django.core.validators.MinValueValidator(1)],
                    ),
                ),
                (
                    "position",
                    models.PositiveIntegerField(
                        default=0, help_text="Order of the line within the cart"
                    ),
                ),
                (
                    "sale",
                    models.ForeignKey(
                        help_text="Sale this item belongs to",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="items",
                        to="sales.sale",
                    ),
                ),
            ],
            options={
                "verbose_name": "Sale Item",
                "verbose_name_plural": "Sale Items",
                "db_table": "sale_items",
                "ordering": ["position"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("qty__gt", 0)), name="sale_item_qty_positive"
                    )
                ],
            },
        ),
    ]
