"""Enumerations for the notifications app."""

from notifications.enums.health_status import HealthStatus
from notifications.enums.notification import (
    PRIORITY_RANK,
    DeliveryMethod,
    DeliveryStatus,
    NotificationCategory,
    NotificationKind,
    NotificationPriority,
)

__all__ = [
    "PRIORITY_RANK",
    "DeliveryMethod",
    "DeliveryStatus",
    "HealthStatus",
    "NotificationCategory",
    "NotificationKind",
    "NotificationPriority",
]
