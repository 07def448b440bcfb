"""Business telemetry tables read by the trigger rules."""

from typing import ClassVar

from django.db import models


class Device(models.Model):
    """A paired smart utensil."""

    user = models.ForeignKey(
        "notifications.User",
        on_delete=models.CASCADE,
        related_name="devices",
        db_column="user_id",
    )
    device_name = models.CharField(max_length=255, default="", blank=True)
    last_sync_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        """Django model metadata."""

        db_table = "devices"
        managed = False
        indexes: ClassVar[list] = [models.Index(fields=["last_sync_at"])]

    def __str__(self) -> str:
        """Return string representation of device."""
        return f"Device {self.pk} for user {self.user_id}"


class DailyBiteBreakdown(models.Model):
    """Per-user daily aggregate of recorded bites."""

    user = models.ForeignKey(
        "notifications.User",
        on_delete=models.CASCADE,
        related_name="daily_breakdowns",
        db_column="user_id",
    )
    date = models.DateField()
    total_bites = models.IntegerField(default=0)
    avg_pace_bpm = models.FloatField(null=True, blank=True)

    class Meta:
        """Django model metadata."""

        db_table = "daily_bite_breakdown"
        managed = False
        unique_together: ClassVar[list[list[str]]] = [["user", "date"]]

    def __str__(self) -> str:
        """Return string representation of the daily breakdown."""
        return f"{self.date}: {self.total_bites} bites (user {self.user_id})"
