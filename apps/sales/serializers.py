"""
Serializers for the sales API.

Requests and responses use the camelCase names the POS terminal sends and
reads. Request serializers only type-check the payload; every business rule
lives in ``apps.sales.services`` so the rejection order stays the same for
HTTP callers and direct callers.
"""

from rest_framework import serializers

from .models import Sale, SaleItem
from .services import CartLine, CartRequest


class CartLineSerializer(serializers.Serializer):
    productId = serializers.UUIDField()
    qty = serializers.IntegerField()


class SaleCreateSerializer(serializers.Serializer):
    """Checkout payload posted by the POS terminal."""

    items = CartLineSerializer(many=True, required=False, allow_null=True)
    paymentMethod = serializers.CharField(
        required=False, allow_blank=True, allow_null=True, default=""
    )
    # Passed through untouched; only Cash sales parse it
    cashReceived = serializers.JSONField(required=False, allow_null=True, default=None)
    createdByEmail = serializers.CharField(
        required=False, allow_blank=True, allow_null=True, default=""
    )

    def to_cart(self):
        """Build the engine's cart request from validated data."""
        data = self.validated_data
        return CartRequest(
            items=[
                CartLine(product_id=line["productId"], qty=line["qty"])
                for line in data.get("items") or []
            ],
            payment_method=data.get("paymentMethod"),
            cash_received=data.get("cashReceived"),
            created_by_email=data.get("createdByEmail"),
        )


class SaleItemSerializer(serializers.ModelSerializer):
    """Sale line as shown on receipts and in the sales history."""

    saleId = serializers.UUIDField(source="sale_id", read_only=True)
    productId = serializers.UUIDField(source="product_id", read_only=True)
    lineTotal = serializers.DecimalField(
        source="line_total", max_digits=14, decimal_places=2, read_only=True
    )

    class Meta:
        model = SaleItem
        fields = ["id", "saleId", "productId", "name", "price", "qty", "lineTotal"]
        read_only_fields = fields


class SaleSerializer(serializers.ModelSerializer):
    """Full sale with its items in cart order."""

    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    paymentMethod = serializers.CharField(source="payment_method", read_only=True)
    cashReceived = serializers.DecimalField(
        source="cash_received", max_digits=12, decimal_places=2, read_only=True
    )
    createdByEmail = serializers.CharField(source="created_by_email", read_only=True)
    items = SaleItemSerializer(many=True, read_only=True)

    class Meta:
        model = Sale
        fields = [
            "id",
            "createdAt",
            "paymentMethod",
            "cashReceived",
            "change",
            "createdByEmail",
            "total",
            "items",
        ]
        read_only_fields = fields
