"""
Role-based access control middleware.

This middleware ensures that:
1. Every API call outside the public endpoints carries an X-User-Role header
2. User administration is reserved to Admins
3. Reports are reserved to Admins and Supervisors
4. Sales are open to Admins, Supervisors and Cashiers
5. Product writes are reserved to Admins and Supervisors

The caller identity is attached to the request as ``request.principal`` so
views can pass it on explicitly.
"""

import logging

from django.conf import settings
from django.http import HttpResponse

from apps.core.models import User
from apps.core.principal import Principal

logger = logging.getLogger(__name__)


class RoleBasedAccessMiddleware:
    """
    Middleware to enforce role-based access control from request headers.

    Login happens upstream; this layer trusts the role and email the client
    sends and only decides whether that role may call the requested path.
    """

    def __init__(self, get_response):
        self.get_response = get_response

        self.role_header = getattr(settings, "ODIN_ROLE_HEADER", "X-User-Role")
        self.email_header = getattr(settings, "ODIN_EMAIL_HEADER", "X-User-Email")

        # Exact paths that don't require role checking
        self.exempt_paths = {
            "/",
            "/favicon.ico",
            "/api/auth/login",
            "/api/auth/register",
        }

        # Path prefixes that don't require role checking
        self.exempt_prefixes = [
            "/api/health",  # health check
            "/metrics",  # Prometheus metrics
            "/admin",  # Django admin has its own session auth
            "/static",  # static files
        ]

        self.admin_only_prefixes = ["/api/admin/users", "/api/auth/users"]
        self.supervisor_prefixes = ["/api/reports", "/api/audit"]
        self.sales_prefixes = ["/api/sales"]
        self.product_prefixes = ["/api/products"]

    def __call__(self, request):
        request.principal = Principal.from_headers(
            request.headers.get(self.role_header), request.headers.get(self.email_header)
        )

        # Preflight requests never carry the custom headers
        if request.method == "OPTIONS":
            return self.get_response(request)

        path = request.path.lower().rstrip("/") or "/"
        if self._is_exempt(path):
            return self.get_response(request)

        principal = request.principal
        if not principal.role:
            return self._deny(401, "Missing X-User-Role")

        if not self._is_allowed(principal, request.method, path):
            logger.warning("Role %s denied %s %s", principal.role, request.method, path)
            return self._deny(403, "Forbidden")

        return self.get_response(request)

    def _is_exempt(self, path):
        if path in self.exempt_paths:
            return True
        return any(path.startswith(prefix) for prefix in self.exempt_prefixes)

    def _is_allowed(self, principal, method, path):
        if self._matches(path, self.admin_only_prefixes):
            return principal.is_admin

        if self._matches(path, self.supervisor_prefixes):
            return principal.has_role(User.ADMIN, User.SUPERVISOR)

        if self._matches(path, self.sales_prefixes):
            return principal.has_role(User.ADMIN, User.SUPERVISOR, User.CASHIER)

        if self._matches(path, self.product_prefixes) and method.upper() != "GET":
            return principal.has_role(User.ADMIN, User.SUPERVISOR)

        return True

    @staticmethod
    def _matches(path, prefixes):
        return any(path.startswith(prefix) for prefix in prefixes)

    @staticmethod
    def _deny(status, message):
        return HttpResponse(message, status=status, content_type="text/plain; charset=utf-8")
