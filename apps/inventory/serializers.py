"""
Serializers for the product catalog.

Field names are camelCase to match the admin dashboard and POS clients.
"""

from rest_framework import serializers

from .models import Product

# The admin dashboard sends null for text fields it never filled in
NULLABLE_TEXT_FIELDS = (
    "code",
    "barcode",
    "description",
    "ecommerceName",
    "ecommerceCategory",
    "subcategory",
    "itemType",
    "taxType",
    "commissionType",
    "integrationCode",
    "mealHour",
    "imageUrl",
)


def money(source):
    return serializers.DecimalField(
        source=source, max_digits=12, decimal_places=2, min_value=0, required=False
    )


class ProductSerializer(serializers.ModelSerializer):
    """Serializer for Product create, update and read."""

    # Blank names are rejected by the views with a plain-text reason
    name = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")
    promoPrice = money("promo_price")
    taxType = serializers.CharField(
        source="tax_type", max_length=20, required=False, allow_blank=True
    )
    taxPercent = serializers.DecimalField(
        source="tax_percent",
        max_digits=5,
        decimal_places=2,
        min_value=0,
        max_value=100,
        required=False,
    )
    ecommerceName = serializers.CharField(
        source="ecommerce_name", max_length=255, required=False, allow_blank=True
    )
    ecommercePrice = money("ecommerce_price")
    ecommerceCategory = serializers.CharField(
        source="ecommerce_category", max_length=100, required=False, allow_blank=True
    )
    itemType = serializers.CharField(
        source="item_type", max_length=50, required=False, allow_blank=True
    )
    displayOrder = serializers.IntegerField(source="display_order", required=False)
    showOnIpad = serializers.BooleanField(source="show_on_ipad", required=False)
    imageUrl = serializers.CharField(
        source="image_url", max_length=500, required=False, allow_blank=True
    )
    commissionType = serializers.CharField(
        source="commission_type", max_length=20, required=False, allow_blank=True
    )
    commissionValue = money("commission_value")
    integrationCode = serializers.CharField(
        source="integration_code", max_length=100, required=False, allow_blank=True
    )
    maxOrderQty = serializers.IntegerField(source="max_order_qty", min_value=0, required=False)
    nextOrderTimeMinutes = serializers.IntegerField(
        source="next_order_time_minutes", min_value=0, required=False
    )
    prepTimeMinutes = serializers.IntegerField(
        source="prep_time_minutes", min_value=0, required=False
    )
    mealHour = serializers.CharField(
        source="meal_hour", max_length=50, required=False, allow_blank=True
    )
    isActive = serializers.BooleanField(source="is_active", required=False)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "code",
            "barcode",
            "description",
            "price",
            "promoPrice",
            "taxType",
            "taxPercent",
            "ecommerceName",
            "ecommercePrice",
            "ecommerceCategory",
            "subcategory",
            "itemType",
            "displayOrder",
            "showOnIpad",
            "imageUrl",
            "commissionType",
            "commissionValue",
            "integrationCode",
            "maxOrderQty",
            "nextOrderTimeMinutes",
            "prepTimeMinutes",
            "mealHour",
            "stock",
            "isActive",
            "createdAt",
            "updatedAt",
        ]
        read_only_fields = ["id", "createdAt", "updatedAt"]

    def to_internal_value(self, data):
        if hasattr(data, "get") and any(data.get(key, "") is None for key in NULLABLE_TEXT_FIELDS):
            data = data.copy()
            for key in NULLABLE_TEXT_FIELDS:
                if key in data and data[key] is None:
                    data[key] = ""
        return super().to_internal_value(data)
