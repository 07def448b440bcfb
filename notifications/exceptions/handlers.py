"""DRF exception handler for the notification API."""

from datetime import UTC, datetime
from typing import Any

from django.core.exceptions import PermissionDenied
from django.http import Http404

import structlog
from pydantic import ValidationError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from notifications.auth.context import get_current_user
from notifications.exceptions.notification_exceptions import (
    InvalidPushTokenError,
    NotificationError,
    NotificationNotFoundError,
)
from notifications.logging.context import get_request_id

logger = structlog.get_logger(__name__)


def custom_exception_handler(
    exc: Exception, context: dict[str, Any]
) -> Response | None:
    """Translate exceptions raised by views into the standard error body.

    Body format: ``{status, message, request_id, timestamp}``. DRF's own
    exceptions keep their status codes; notification and Django exceptions
    are mapped here; anything else becomes a 500.

    Args:
        exc: The exception that was raised.
        context: DRF context containing the view and request.

    Returns:
        The error response.
    """
    view = context.get("view")
    request = getattr(view, "request", None) if view else None
    request_id = get_request_id()

    response = exception_handler(exc, context)

    if response is None:
        if isinstance(exc, (NotificationNotFoundError, Http404)):
            response = _error_response(
                status.HTTP_404_NOT_FOUND,
                str(exc) if isinstance(exc, NotificationNotFoundError)
                else "The requested resource was not found.",
                request_id,
            )
        elif isinstance(exc, PermissionDenied):
            response = _error_response(
                status.HTTP_403_FORBIDDEN,
                "You do not have permission to perform this action.",
                request_id,
            )
        elif isinstance(exc, ValidationError):
            response = Response(
                {
                    "error": "bad_request",
                    "message": "Invalid request parameters",
                    "errors": exc.errors(
                        include_url=False, include_context=False, include_input=False
                    ),
                    "request_id": request_id,
                },
                status=status.HTTP_400_BAD_REQUEST,
            )
        elif isinstance(exc, InvalidPushTokenError):
            response = _error_response(
                status.HTTP_400_BAD_REQUEST, str(exc), request_id
            )
        elif isinstance(exc, NotificationError):
            response = _error_response(
                status.HTTP_422_UNPROCESSABLE_ENTITY, str(exc), request_id
            )
        else:
            response = _error_response(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                "An internal server error occurred.",
                request_id,
            )

    if request_id:
        response["X-Request-ID"] = request_id

    _log_exception(exc, request, response)
    return response


def _error_response(
    status_code: int, message: str, request_id: str | None
) -> Response:
    return Response(
        {
            "status": status_code,
            "message": message,
            "request_id": request_id,
            "timestamp": datetime.now(UTC).isoformat(),
        },
        status=status_code,
    )


def _log_exception(exc: Exception, request: Any, response: Response) -> None:
    """Log client errors as warnings and server errors with a stack trace."""
    caller = get_current_user()
    fields = {
        "user_id": caller.user_id if caller else None,
        "error_type": type(exc).__name__,
        "error": str(exc),
        "path": getattr(request, "path", "unknown"),
        "method": getattr(request, "method", "unknown"),
        "status_code": response.status_code,
    }
    if response.status_code < 500:
        logger.warning("request_failed", **fields)
    else:
        logger.error("request_errored", exc_info=exc, **fields)
