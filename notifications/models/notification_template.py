"""Notification template model."""

from typing import ClassVar

from django.db import models

from notifications.enums import NotificationCategory, NotificationPriority


class NotificationTemplate(models.Model):
    """Format and routing metadata for one notification type.

    ``title_template`` and ``body_template`` contain ``{{key}}`` placeholders.
    ``max_per_day`` caps how many notifications of this type a user may
    receive per calendar day; ``None`` leaves only the overall daily cap.
    """

    type = models.CharField(max_length=64, unique=True)
    category = models.CharField(
        max_length=20,
        choices=[(c.value, c.value) for c in NotificationCategory],
    )
    priority = models.CharField(
        max_length=10,
        choices=[(p.value, p.value) for p in NotificationPriority],
        default=NotificationPriority.MEDIUM.value,
    )
    title_template = models.CharField(max_length=255)
    body_template = models.TextField()
    action_type = models.CharField(max_length=64, null=True, blank=True)
    action_data = models.JSONField(default=dict, blank=True)
    max_per_day = models.PositiveIntegerField(null=True, blank=True, default=1)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        """Django model metadata."""

        db_table = "notification_templates"
        managed = False
        ordering: ClassVar[list[str]] = ["category", "type"]

    def __str__(self) -> str:
        """Return string representation of template."""
        return f"{self.type} ({self.category}, {self.priority})"
