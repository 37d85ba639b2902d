"""
Shared error base for the order/payment engine and its DRF rendering.

Every caller-facing failure is a CafePOSError subclass carrying a stable
`kind` (the name the UI switches on) and the HTTP status it maps to. Each app
declares its own subclasses in its exceptions.py.
"""

import logging
from contextlib import contextmanager

from django.db import InterfaceError, OperationalError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class CafePOSError(Exception):
    """Base exception for recoverable, caller-facing engine errors."""

    kind = "CafePOSError"
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "The operation could not be completed."

    def __init__(self, message=None, **details):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    def as_dict(self):
        payload = {"error": self.kind, "detail": self.message}
        for key, value in self.details.items():
            payload[key] = str(value) if value is not None else None
        return payload


class StoreUnavailable(CafePOSError):
    """Raised when the database cannot be reached; nothing was changed."""

    kind = "StoreUnavailable"
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_message = "The data store is unavailable. Please retry."


@contextmanager
def store_guard(operation=""):
    """
    Translate connection-level database failures into StoreUnavailable.

    Integrity and programming errors are left alone: those are either handled
    by the calling service (insert-if-absent) or are real bugs.
    """
    try:
        yield
    except (OperationalError, InterfaceError) as exc:
        logger.error(f"Store unavailable during {operation or 'operation'}: {exc}", exc_info=True)
        raise StoreUnavailable() from exc


def api_exception_handler(exc, context):
    """
    DRF exception handler that renders engine errors with their kind.

    Anything that is not a CafePOSError goes through DRF's default handling.
    """
    if isinstance(exc, CafePOSError):
        request = context.get("request")
        logger.info(
            f"{exc.kind} on {request.method if request else ''} "
            f"{request.path if request else ''}: {exc.message}"
        )
        return Response(exc.as_dict(), status=exc.status_code)

    return exception_handler(exc, context)
