"""Notification ledger model.

One row per scheduled notification. Rows are inserted by the notification
service and afterwards only their delivery status and client feedback
timestamps change.
"""

from typing import ClassVar

from django.db import models

from notifications.enums import DeliveryMethod, DeliveryStatus, NotificationPriority


class NotificationHistory(models.Model):
    """A single notification instance and its delivery outcome.

    Attributes:
        scheduled_for: Delivery time; NULL means deliver immediately.
        delivery_status: pending -> sent | failed; sent -> delivered.
        action_data: Template default action data merged with call data.
        trigger_source: Provenance of the notification, e.g. ``{"date": ...}``.
        opened_at/action_taken_at: Client-reported, set at most once.
    """

    # Allowed source states for each target status.
    TRANSITIONS: ClassVar[dict[str, tuple[str, ...]]] = {
        DeliveryStatus.SENT.value: (DeliveryStatus.PENDING.value,),
        DeliveryStatus.FAILED.value: (DeliveryStatus.PENDING.value,),
        DeliveryStatus.DELIVERED.value: (DeliveryStatus.SENT.value,),
    }

    user = models.ForeignKey(
        "notifications.User",
        on_delete=models.CASCADE,
        related_name="notifications",
        db_column="user_id",
    )
    template = models.ForeignKey(
        "notifications.NotificationTemplate",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="instances",
        db_column="template_id",
    )
    type = models.CharField(max_length=64)
    priority = models.CharField(
        max_length=10,
        choices=[(p.value, p.value) for p in NotificationPriority],
    )
    title = models.CharField(max_length=255)
    body = models.TextField()
    action_type = models.CharField(max_length=64, null=True, blank=True)
    action_data = models.JSONField(default=dict, blank=True)
    delivery_method = models.CharField(
        max_length=20, default=DeliveryMethod.PUSH.value
    )
    trigger_source = models.JSONField(default=dict, blank=True)
    scheduled_for = models.DateTimeField(null=True, blank=True)
    delivery_status = models.CharField(
        max_length=20,
        choices=[(s.value, s.value) for s in DeliveryStatus],
        default=DeliveryStatus.PENDING.value,
    )
    sent_at = models.DateTimeField(null=True, blank=True)
    delivered_at = models.DateTimeField(null=True, blank=True)
    error_message = models.TextField(null=True, blank=True)
    opened_at = models.DateTimeField(null=True, blank=True)
    action_taken_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Django model metadata."""

        db_table = "notification_history"
        managed = False
        ordering: ClassVar[list[str]] = ["-created_at"]
        indexes: ClassVar[list] = [
            models.Index(fields=["user", "-created_at"]),
            models.Index(fields=["delivery_status", "scheduled_for"]),
            models.Index(fields=["created_at"]),
        ]

    def __str__(self) -> str:
        """Return string representation of the ledger row."""
        return f"{self.type} for user {self.user_id} [{self.delivery_status}]"

    def __repr__(self) -> str:
        """Return detailed representation of the ledger row."""
        return (
            f"<NotificationHistory(id={self.pk}, type={self.type}, "
            f"user={self.user_id}, status={self.delivery_status})>"
        )

    @property
    def is_terminal(self) -> bool:
        """True once delivery has succeeded or failed."""
        return self.delivery_status != DeliveryStatus.PENDING.value
