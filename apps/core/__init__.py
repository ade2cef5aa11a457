"""
Core app for the Odin POS backend.

Holds the user model, the header-based request principal, role-based access
middleware, API error rendering and health checks.
"""
