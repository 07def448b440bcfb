"""Per-user notification preferences."""

from datetime import time

from django.db import models

from notifications.enums import NotificationCategory

DEFAULT_QUIET_HOURS_START = time(22, 0)
DEFAULT_QUIET_HOURS_END = time(7, 0)
DEFAULT_MAX_DAILY_NOTIFICATIONS = 10
DEFAULT_WEEKLY_DIGEST_TIME = time(9, 0)

CATEGORY_FLAGS = {
    NotificationCategory.HEALTH.value: "health_alerts_enabled",
    NotificationCategory.ACHIEVEMENT.value: "achievement_enabled",
    NotificationCategory.ENGAGEMENT.value: "engagement_enabled",
    NotificationCategory.SYSTEM.value: "system_alerts_enabled",
}


class UserNotificationPreference(models.Model):
    """Notification settings and push token for one user.

    Attributes:
        enabled: Global switch; False blocks every notification.
        quiet_hours_start/quiet_hours_end: Local time-of-day window in which
            non-critical notifications are suppressed; may cross midnight.
        max_daily_notifications: Overall per-day cap across all types.
        weekly_digest_day: 0 = Sunday ... 6 = Saturday.
        fcm_token: Current Firebase registration token, cleared when FCM
            reports it invalid.
    """

    user = models.OneToOneField(
        "notifications.User",
        on_delete=models.CASCADE,
        related_name="notification_preference",
        db_column="user_id",
    )
    enabled = models.BooleanField(default=True)
    quiet_hours_start = models.TimeField(default=DEFAULT_QUIET_HOURS_START)
    quiet_hours_end = models.TimeField(default=DEFAULT_QUIET_HOURS_END)
    health_alerts_enabled = models.BooleanField(default=True)
    achievement_enabled = models.BooleanField(default=True)
    engagement_enabled = models.BooleanField(default=True)
    system_alerts_enabled = models.BooleanField(default=True)
    max_daily_notifications = models.PositiveIntegerField(
        default=DEFAULT_MAX_DAILY_NOTIFICATIONS
    )
    weekly_digest_enabled = models.BooleanField(default=True)
    weekly_digest_day = models.PositiveSmallIntegerField(default=0)
    weekly_digest_time = models.TimeField(default=DEFAULT_WEEKLY_DIGEST_TIME)
    fcm_token = models.TextField(null=True, blank=True)
    fcm_token_updated_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        """Django model metadata."""

        db_table = "user_notification_preferences"
        managed = False

    def __str__(self) -> str:
        """Return string representation of preferences."""
        state = "enabled" if self.enabled else "disabled"
        return f"Notification preferences for user {self.user_id} ({state})"

    def category_enabled(self, category: str) -> bool:
        """Return whether the toggle for ``category`` is on.

        Unknown categories have no toggle and are allowed.
        """
        flag = CATEGORY_FLAGS.get(category)
        return True if flag is None else bool(getattr(self, flag))

    @property
    def has_push_token(self) -> bool:
        return bool(self.fcm_token)
