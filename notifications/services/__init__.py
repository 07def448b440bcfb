"""Service layer for the notification app."""

from notifications.services.health_service import HealthService, health_service
from notifications.services.notification_service import (
    NotificationService,
    notification_service,
)
from notifications.services.preference_service import (
    PreferenceService,
    preference_service,
)

__all__ = [
    "HealthService",
    "NotificationService",
    "PreferenceService",
    "health_service",
    "notification_service",
    "preference_service",
]
