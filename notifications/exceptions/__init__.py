"""Exception handling utilities for the notification service."""

from notifications.exceptions.handlers import custom_exception_handler
from notifications.exceptions.notification_exceptions import (
    InvalidPushTokenError,
    NotificationError,
    NotificationNotFoundError,
    PushProviderNotInitializedError,
    TemplateNotFoundError,
)

__all__ = [
    "InvalidPushTokenError",
    "NotificationError",
    "NotificationNotFoundError",
    "PushProviderNotInitializedError",
    "TemplateNotFoundError",
    "custom_exception_handler",
]
