import decimal

import django.core.validators
from django.db import migrations, models


def money_field(help_text):
    return models.DecimalField(
        decimal_places=2,
        default=decimal.Decimal("0.00"),
        help_text=help_text,
        max_digits=12,
        validators=[django.core.validators.MinValueValidator(decimal.Decimal("0.00"))],
    )


def count_field(help_text):
    return models.IntegerField(
        default=0,
        help_text=help_text,
        validators=[django.core.validators.MinValueValidator(0)],
    )


class Migration(migrations.Migration):

    dependencies = [
        ("inventory", "0001_initial"),
    ]

    operations = [
        migrations.RenameField(
            model_name="product",
            old_name="tax_rate",
            new_name="tax_percent",
        ),
        migrations.AlterField(
            model_name="product",
            name="tax_percent",
            field=models.DecimalField(
                decimal_places=2,
                default=decimal.Decimal("0.00"),
                help_text="Tax percent applied when tax type is Percent; 0 means exempt",
                max_digits=5,
                validators=[
                    django.core.validators.MinValueValidator(decimal.Decimal("0.00")),
                    django.core.validators.MaxValueValidator(decimal.Decimal("100.00")),
                ],
            ),
        ),
        migrations.AddField(
            model_name="product",
            name="tax_type",
            field=models.CharField(
                blank=True, default="Exempt", help_text="Exempt or Percent", max_length=20
            ),
        ),
        migrations.AddField(
            model_name="product",
            name="promo_price",
            field=money_field("Promotional price; 0 means no promotion"),
        ),
        migrations.AddField(
            model_name="product",
            name="ecommerce_name",
            field=models.CharField(
                blank=True, default="", help_text="Name shown in the online store", max_length=255
            ),
        ),
        migrations.AddField(
            model_name="product",
            name="ecommerce_price",
            field=money_field("Price in the online store"),
        ),
        migrations.AddField(
            model_name="product",
            name="ecommerce_category",
            field=models.CharField(
                blank=True, default="", help_text="Category in the online store", max_length=100
            ),
        ),
        migrations.AddField(
            model_name="product",
            name="subcategory",
            field=models.CharField(
                blank=True, default="", help_text="Item subcategory", max_length=100
            ),
        ),
        migrations.AddField(
            model_name="product",
            name="item_type",
            field=models.CharField(
                blank=True, default="Normal", help_text="Item type, e.g. Normal", max_length=50
            ),
        ),
        migrations.AddField(
            model_name="product",
            name="display_order",
            field=models.IntegerField(default=0, help_text="Position on the POS grid"),
        ),
        migrations.AddField(
            model_name="product",
            name="show_on_ipad",
            field=models.BooleanField(
                default=True, help_text="Whether the item is shown on the iPad terminal"
            ),
        ),
        migrations.AddField(
            model_name="product",
            name="image_url",
            field=models.CharField(
                blank=True, default="", help_text="Product image URL", max_length=500
            ),
        ),
        migrations.AddField(
            model_name="product",
            name="commission_type",
            field=models.CharField(
                blank=True, default="Percent", help_text="Percent or Fixed", max_length=20
            ),
        ),
        migrations.AddField(
            model_name="product",
            name="commission_value",
            field=money_field("Commission percent or fixed amount per unit"),
        ),
        migrations.AddField(
            model_name="product",
            name="integration_code",
            field=models.CharField(
                blank=True,
                default="",
                help_text="Code used by external integrations",
                max_length=100,
            ),
        ),
        migrations.AddField(
            model_name="product",
            name="max_order_qty",
            field=count_field("Maximum quantity per order; 0 means no limit"),
        ),
        migrations.AddField(
            model_name="product",
            name="next_order_time_minutes",
            field=count_field("Minutes before the item can be ordered again"),
        ),
        migrations.AddField(
            model_name="product",
            name="prep_time_minutes",
            field=count_field("Preparation time in minutes"),
        ),
        migrations.AddField(
            model_name="product",
            name="meal_hour",
            field=models.CharField(
                blank=True, default="", help_text="Meal hour label, e.g. Breakfast", max_length=50
            ),
        ),
    ]
