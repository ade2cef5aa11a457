"""
Django admin configuration for sales models.

Sales are immutable, so the admin is read-only.
"""

from django.contrib import admin

from .models import Sale, SaleItem


class SaleItemInline(admin.TabularInline):
    """Inline admin for sale items."""

    model = SaleItem
    extra = 0
    fields = ["position", "product_id", "name", "price", "qty"]
    readonly_fields = fields
    can_delete = False


@admin.register(Sale)
class SaleAdmin(admin.ModelAdmin):
    """Read-only admin interface for Sale model."""

    list_display = ["id", "created_at", "payment_method", "total", "created_by_email"]
    list_filter = ["payment_method", "created_at"]
    search_fields = ["id", "created_by_email"]
    readonly_fields = [
        "id",
        "created_at",
        "payment_method",
        "cash_received",
        "change",
        "created_by_email",
        "total",
    ]
    date_hierarchy = "created_at"
    inlines = [SaleItemInline]

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
