"""Constants package for the notifications app."""

from notifications.constants.http import (
    ADMIN_SCOPE,
    PROCESS_TIME_HEADER,
    REQUEST_ID_HEADER,
    SLOW_REQUEST_THRESHOLD,
    USER_SCOPE,
)
from notifications.constants.templates import DEFAULT_TEMPLATES

__all__ = [
    "ADMIN_SCOPE",
    "DEFAULT_TEMPLATES",
    "PROCESS_TIME_HEADER",
    "REQUEST_ID_HEADER",
    "SLOW_REQUEST_THRESHOLD",
    "USER_SCOPE",
]
