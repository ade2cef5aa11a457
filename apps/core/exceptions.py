"""
API error types and the DRF exception handler.

Domain errors carry a human-readable reason and an HTTP status. The POS
clients read error bodies with ``res.text()``, so domain errors are rendered
as plain text rather than JSON.
"""

import logging

from django.db import DatabaseError
from django.http import HttpResponse

from rest_framework import status
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)

PLAIN_TEXT = "text/plain; charset=utf-8"


class PosError(Exception):
    """Base class for errors reported to API callers with a reason string."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Bad request"

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(PosError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


def plain_text_response(message, status_code):
    return HttpResponse(message, status=status_code, content_type=PLAIN_TEXT)


def api_exception_handler(exc, context):
    """
    Render domain errors as plain text, keep DRF's handling for the rest and
    turn storage failures into an opaque 500.
    """
    if isinstance(exc, PosError):
        return plain_text_response(exc.message, exc.status_code)

    response = exception_handler(exc, context)
    if response is not None:
        return response

    if isinstance(exc, DatabaseError):
        view = context.get("view")
        logger.error(
            f"Storage failure in {view.__class__.__name__ if view else 'unknown view'}: {exc}",
            exc_info=exc,
        )
        return plain_text_response("Internal server error", status.HTTP_500_INTERNAL_SERVER_ERROR)

    return None
