"""
Views for the product catalog.

- Product list, detail, create, update and delete
- Barcode/code lookup for the POS scanner

Write access (Admin or Supervisor) is enforced by the role middleware.
"""

import logging

from rest_framework import generics, status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from apps.core.exceptions import NotFoundError, PosError

from .models import Product
from .serializers import ProductSerializer

logger = logging.getLogger(__name__)


class RequireNameMixin:
    """Reject blank product names with the reason the clients display."""

    def perform_create(self, serializer):
        self._check_name(serializer)
        product = serializer.save()
        logger.info(f"Product created: {product.name} ({product.id})")

    def perform_update(self, serializer):
        self._check_name(serializer)
        serializer.save()

    @staticmethod
    def _check_name(serializer):
        if serializer.partial and "name" not in serializer.validated_data:
            return
        name = serializer.validated_data.get("name", "").strip()
        if not name:
            raise PosError("Name is required")
        serializer.validated_data["name"] = name


class ProductListCreateView(RequireNameMixin, generics.ListCreateAPIView):
    """
    GET: list every product ordered by name.
    POST: create a product; name is required.
    """

    serializer_class = ProductSerializer
    queryset = Product.objects.order_by("name")


class ProductDetailView(RequireNameMixin, generics.RetrieveUpdateDestroyAPIView):
    """
    GET/PUT/DELETE a single product.

    Deleting a product never touches sales: items keep their own snapshot.
    """

    serializer_class = ProductSerializer
    queryset = Product.objects.all()
    lookup_field = "id"

    def perform_destroy(self, instance):
        logger.info(f"Product deleted: {instance.name} ({instance.id})")
        instance.delete()


@api_view(["GET"])
def lookup_product(request):
    """
    Look up an active product by barcode and/or code for quick scanning.

    Query parameters:
    - barcode: barcode value
    - code: internal product code

    At least one is required; when both are given both must match.
    """
    barcode_value = request.query_params.get("barcode", "").strip()
    code_value = request.query_params.get("code", "").strip()

    if not barcode_value and not code_value:
        raise PosError("barcode or code is required")

    queryset = Product.objects.filter(is_active=True)
    if barcode_value:
        queryset = queryset.filter(barcode=barcode_value)
    if code_value:
        queryset = queryset.filter(code=code_value)

    product = queryset.order_by("name").first()
    if product is None:
        raise NotFoundError("Product not found")

    return Response(ProductSerializer(product).data, status=status.HTTP_200_OK)
