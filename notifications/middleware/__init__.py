"""Middleware components for the notification service."""

from notifications.middleware.process_time import ProcessTimeMiddleware
from notifications.middleware.request_id import RequestIDMiddleware
from notifications.middleware.security_context import SecurityContextMiddleware

__all__ = [
    "ProcessTimeMiddleware",
    "RequestIDMiddleware",
    "SecurityContextMiddleware",
]
