"""Database models for the notifications app."""

from notifications.models.activity import DailyBiteBreakdown, Device
from notifications.models.notification_history import NotificationHistory
from notifications.models.notification_preference import UserNotificationPreference
from notifications.models.notification_template import NotificationTemplate
from notifications.models.throttle_log import NotificationThrottleLog
from notifications.models.user import User

__all__ = [
    "DailyBiteBreakdown",
    "Device",
    "NotificationHistory",
    "NotificationTemplate",
    "NotificationThrottleLog",
    "User",
    "UserNotificationPreference",
]
