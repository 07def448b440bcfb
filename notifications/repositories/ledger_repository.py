"""Repository for the notification ledger (``notification_history``)."""

from datetime import datetime, timedelta
from typing import Any

from django.db.models import Case, IntegerField, Q, QuerySet, Value, When
from django.utils import timezone

import structlog

from notifications.enums import DeliveryStatus, NotificationPriority
from notifications.models import NotificationHistory

logger = structlog.get_logger(__name__)

_STATUS_TIMESTAMP = {
    DeliveryStatus.SENT: "sent_at",
    DeliveryStatus.FAILED: "sent_at",
    DeliveryStatus.DELIVERED: "delivered_at",
}


def _priority_rank() -> Case:
    return Case(
        *[When(priority=p.value, then=Value(p.rank)) for p in NotificationPriority],
        default=Value(0),
        output_field=IntegerField(),
    )


class LedgerRepository:
    """Durable record of every scheduled notification and its delivery state."""

    @staticmethod
    def insert(**fields: Any) -> NotificationHistory:
        """Create a ledger row. ``delivery_status`` defaults to pending."""
        return NotificationHistory.objects.create(**fields)

    @staticmethod
    def get(notification_id: int) -> NotificationHistory | None:
        return NotificationHistory.objects.filter(pk=notification_id).first()

    @staticmethod
    def update_status(
        notification_id: int,
        new_status: DeliveryStatus,
        error_message: str | None = None,
    ) -> bool:
        """Move a row to ``new_status`` if the transition is allowed.

        Allowed transitions are pending -> sent, pending -> failed and
        sent -> delivered. The check and the write happen in one UPDATE, so
        concurrent sweeps cannot both move the same row out of pending.

        Args:
            notification_id: Ledger row id
            new_status: Target status
            error_message: Provider error text, stored with failed rows

        Returns:
            True if the row changed
        """
        new_status = DeliveryStatus(new_status)
        sources = NotificationHistory.TRANSITIONS.get(new_status.value, ())
        changes: dict[str, Any] = {"delivery_status": new_status.value}
        timestamp_field = _STATUS_TIMESTAMP.get(new_status)
        if timestamp_field:
            changes[timestamp_field] = timezone.now()
        if error_message is not None:
            changes["error_message"] = error_message

        updated = NotificationHistory.objects.filter(
            pk=notification_id, delivery_status__in=sources
        ).update(**changes)
        if not updated:
            logger.warning(
                "status_transition_refused",
                notification_id=notification_id,
                target_status=new_status.value,
            )
        return updated > 0

    @staticmethod
    def get_pending(
        limit: int, now: datetime | None = None
    ) -> list[NotificationHistory]:
        """Return due pending rows, highest priority first, then oldest first.

        A row is due when ``scheduled_for`` is null or not in the future.
        """
        now = now or timezone.now()
        queryset = (
            NotificationHistory.objects.filter(
                delivery_status=DeliveryStatus.PENDING.value
            )
            .filter(Q(scheduled_for__isnull=True) | Q(scheduled_for__lte=now))
            .annotate(priority_rank=_priority_rank())
            .order_by("-priority_rank", "created_at", "id")
        )
        return list(queryset[:limit])

    @staticmethod
    def mark_opened(notification_id: int) -> bool:
        """Stamp ``opened_at`` the first time. Later calls leave it unchanged.

        Returns:
            True if the row exists
        """
        NotificationHistory.objects.filter(
            pk=notification_id, opened_at__isnull=True
        ).update(opened_at=timezone.now())
        return NotificationHistory.objects.filter(pk=notification_id).exists()

    @staticmethod
    def mark_action_taken(notification_id: int) -> bool:
        """Stamp ``action_taken_at`` the first time.

        Returns:
            True if the row exists
        """
        NotificationHistory.objects.filter(
            pk=notification_id, action_taken_at__isnull=True
        ).update(action_taken_at=timezone.now())
        return NotificationHistory.objects.filter(pk=notification_id).exists()

    @staticmethod
    def list_for_user(user_id: int) -> QuerySet[NotificationHistory]:
        """Return the user's ledger, newest first."""
        return NotificationHistory.objects.filter(user_id=user_id).order_by(
            "-created_at", "-id"
        )

    @staticmethod
    def exists_for_trigger(
        user_id: int, notification_type: str, trigger_source: dict[str, Any]
    ) -> bool:
        """Check whether a row of this type already carries the trigger keys."""
        lookups = {f"trigger_source__{key}": value for key, value in trigger_source.items()}
        return NotificationHistory.objects.filter(
            user_id=user_id, type=notification_type, **lookups
        ).exists()

    @staticmethod
    def delete_older_than(days: int, now: datetime | None = None) -> int:
        """Delete rows created more than ``days`` ago, whatever their status.

        Returns:
            Number of rows deleted
        """
        cutoff = (now or timezone.now()) - timedelta(days=days)
        deleted, _ = NotificationHistory.objects.filter(created_at__lt=cutoff).delete()
        return deleted
