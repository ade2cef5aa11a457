"""
CORS middleware for the browser clients.

The admin dashboard and the POS terminal run on their own dev servers and
call the API cross-origin with custom role headers, so preflight requests
must be answered before role checks run.
"""

from django.conf import settings
from django.http import HttpResponse

ALLOWED_METHODS = "GET, POST, PUT, DELETE, OPTIONS"


class CorsMiddleware:
    """
    Middleware to add CORS headers for configured origins.

    Origins come from ``ODIN_CORS_ALLOWED_ORIGINS``. Requests from other
    origins get no CORS headers and are left to the browser to block.
    """

    def __init__(self, get_response):
        self.get_response = get_response
        self.allowed_origins = set(getattr(settings, "ODIN_CORS_ALLOWED_ORIGINS", []))

    def __call__(self, request):
        origin = request.headers.get("Origin")
        is_preflight = (
            request.method == "OPTIONS" and "Access-Control-Request-Method" in request.headers
        )

        if is_preflight and origin in self.allowed_origins:
            response = HttpResponse(status=204)
        else:
            response = self.get_response(request)

        if origin and origin in self.allowed_origins:
            response["Access-Control-Allow-Origin"] = origin
            response["Access-Control-Allow-Headers"] = (
                "Content-Type, X-User-Role, X-User-Email"
            )
            response["Access-Control-Allow-Methods"] = ALLOWED_METHODS
            response["Vary"] = "Origin"

        return response
