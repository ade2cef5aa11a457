"""
Request-scoped caller identity.

The role middleware builds a ``Principal`` from the ``X-User-Role`` and
``X-User-Email`` headers and attaches it to the request. Views hand it to
services explicitly; nothing reads it from global state.
"""

from dataclasses import dataclass

from apps.core.models import User

KNOWN_ROLES = frozenset(role for role, _label in User.ROLE_CHOICES)


@dataclass(frozen=True)
class Principal:
    """Authenticated caller as asserted by the upstream login flow."""

    role: str
    email: str = ""

    @classmethod
    def from_headers(cls, role, email):
        return cls(role=(role or "").strip(), email=(email or "").strip())

    @property
    def is_admin(self):
        return self.role == User.ADMIN

    @property
    def is_supervisor(self):
        return self.role == User.SUPERVISOR

    @property
    def is_cashier(self):
        return self.role == User.CASHIER

    def has_role(self, *roles):
        return self.role in roles

    def __str__(self):
        return f"{self.email or '<anonymous>'} ({self.role or 'no role'})"
