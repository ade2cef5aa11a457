"""
Django admin configuration for catalog models.
"""

from django.contrib import admin

from .models import Product


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    """Admin interface for Product model."""

    list_display = [
        "name",
        "code",
        "barcode",
        "price",
        "tax_type",
        "tax_percent",
        "stock",
        "is_active",
    ]
    list_filter = ["is_active", "show_on_ipad", "tax_type", "created_at"]
    search_fields = ["name", "code", "barcode", "ecommerce_name", "integration_code"]
    readonly_fields = ["id", "created_at", "updated_at"]
    ordering = ["name"]
