"""
Health check views for monitoring and deployment verification.

This module provides health check endpoints used by:
- Load balancers for health checks
- Container orchestrator readiness probes
- Monitoring systems for uptime checks
"""

import logging

from django.conf import settings
from django.db import DatabaseError, connection
from django.http import JsonResponse
from django.views.decorators.cache import never_cache
from django.views.decorators.http import require_GET

logger = logging.getLogger(__name__)


@never_cache
@require_GET
def health_check(request) -> JsonResponse:
    """
    Basic health check endpoint.

    Returns 200 OK if the application is running.

    Returns:
        JsonResponse: {"status": "ok", "name": "Odin PoS API"}
    """
    return JsonResponse(
        {
            "status": "ok",
            "name": getattr(settings, "API_NAME", "Odin PoS API"),
        }
    )


@never_cache
@require_GET
def readiness_probe(request) -> JsonResponse:
    """
    Readiness probe endpoint.

    Checks database connectivity to ensure the app is ready to take sales.

    Returns:
        JsonResponse: {"status": "ready"} or 503 if not ready
    """
    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
            cursor.fetchone()

        return JsonResponse({"status": "ready"})
    except DatabaseError as e:
        logger.error(f"Readiness probe failed: {e}")
        return JsonResponse({"status": "not_ready", "reason": str(e)}, status=503)
