"""
URL configuration for inventory app.
"""

from django.urls import path

from . import views

app_name = "inventory"

urlpatterns = [
    path("api/products", views.ProductListCreateView.as_view(), name="product_list"),
    # Lookup must come before the detail route
    path("api/products/lookup", views.lookup_product, name="product_lookup"),
    path("api/products/<uuid:id>", views.ProductDetailView.as_view(), name="product_detail"),
]
