"""
URL configuration for sales app.
"""

from django.urls import path

from . import views

app_name = "sales"

urlpatterns = [
    path("api/sales", views.SaleListCreateView.as_view(), name="sale_list_create"),
]
