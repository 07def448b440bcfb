"""Per user, type and day notification counters."""

from typing import ClassVar

from django.db import models


class NotificationThrottleLog(models.Model):
    """How many notifications of ``notification_type`` a user got on a day."""

    user = models.ForeignKey(
        "notifications.User",
        on_delete=models.CASCADE,
        related_name="throttle_logs",
        db_column="user_id",
    )
    notification_type = models.CharField(max_length=64)
    notification_date = models.DateField()
    count = models.PositiveIntegerField(default=0)

    class Meta:
        """Django model metadata."""

        db_table = "notification_throttle_log"
        managed = False
        unique_together: ClassVar[list[list[str]]] = [
            ["user", "notification_type", "notification_date"]
        ]

    def __str__(self) -> str:
        """Return string representation of the counter."""
        return (
            f"{self.notification_type} x{self.count} "
            f"on {self.notification_date} (user {self.user_id})"
        )
