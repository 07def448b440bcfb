"""Notification orchestration: policy, rendering, ledger and delivery.

``NotificationService.schedule`` is the single entry point used by the
trigger rules, the event endpoints and the background jobs. The pending sweep
(``process_pending``) delivers rows that were scheduled for later.
"""

from datetime import datetime
from typing import Any

from django.conf import settings
from django.db import transaction
from django.db.models import QuerySet
from django.db.utils import InterfaceError, OperationalError
from django.utils import timezone

import django_rq
import structlog

from notifications.enums import DeliveryMethod, DeliveryStatus
from notifications.models import NotificationHistory
from notifications.repositories import (
    LedgerRepository,
    TemplateRepository,
    ThrottleRepository,
)
from notifications.services.delivery_dispatcher import DeliveryDispatcher
from notifications.services.template_renderer import render
from notifications.services.throttle_gate import ThrottleGate
from notifications.timeutils import local_today, notification_tz

logger = structlog.get_logger(__name__)


class NotificationService:
    """Schedules, delivers and tracks push notifications."""

    def __init__(
        self,
        gate: ThrottleGate | None = None,
        dispatcher: DeliveryDispatcher | None = None,
    ) -> None:
        """Initialize notification service.

        Args:
            gate: Policy gate; a default ``ThrottleGate`` when omitted
            dispatcher: Delivery dispatcher; a default FCM-backed one when omitted
        """
        self.gate = gate or ThrottleGate()
        self.dispatcher = dispatcher or DeliveryDispatcher()

    @property
    def queue(self):
        return django_rq.get_queue("default")

    def schedule(
        self,
        user_id: int,
        notification_type: str,
        data: dict[str, Any] | None = None,
        trigger_source: dict[str, Any] | None = None,
        scheduled_for: datetime | None = None,
    ) -> NotificationHistory | None:
        """Create a notification and deliver it if it is due.

        Steps: active template lookup, policy gate, rendering, ledger insert,
        throttle increment, then synchronous delivery unless
        ``scheduled_for`` is in the future.

        Args:
            user_id: Recipient
            notification_type: Template type
            data: Placeholder values, also merged over the template's
                ``action_data``
            trigger_source: Provenance stored on the ledger row
            scheduled_for: Earliest delivery time; None means now. A naive
                value is read in the notification time zone

        Returns:
            The ledger row with its resulting status, or None when the
            template is missing or the gate denied the send
        """
        data = data or {}
        log = logger.bind(user_id=user_id, notification_type=notification_type)
        if scheduled_for is not None and timezone.is_naive(scheduled_for):
            scheduled_for = timezone.make_aware(scheduled_for, notification_tz())

        template = TemplateRepository.get_by_type(notification_type)
        if template is None:
            log.error("notification_template_not_found")
            return None

        if not self.gate.can_send(user_id, template, template.priority):
            log.info("notification_not_scheduled", reason="throttled")
            return None

        with transaction.atomic():
            instance = LedgerRepository.insert(
                user_id=user_id,
                template=template,
                type=template.type,
                priority=template.priority,
                title=render(template.title_template, data),
                body=render(template.body_template, data),
                action_type=template.action_type,
                action_data={**(template.action_data or {}), **data},
                delivery_method=DeliveryMethod.PUSH.value,
                trigger_source=trigger_source or {},
                scheduled_for=scheduled_for,
                delivery_status=DeliveryStatus.PENDING.value,
            )
            ThrottleRepository.increment(user_id, template.type, local_today())

        log.info(
            "notification_scheduled",
            notification_id=instance.id,
            priority=instance.priority,
            scheduled_for=scheduled_for.isoformat() if scheduled_for else None,
        )

        if scheduled_for is None or scheduled_for <= timezone.now():
            self.dispatcher.deliver(instance)
            instance.refresh_from_db()

        return instance

    def enqueue_schedule(
        self,
        user_id: int,
        notification_type: str,
        data: dict[str, Any] | None = None,
        trigger_source: dict[str, Any] | None = None,
        scheduled_for: datetime | None = None,
    ) -> str:
        """Queue ``schedule`` on an RQ worker.

        ``scheduled_for`` travels as ISO-8601 text and is parsed back by the job.

        Returns:
            The RQ job id
        """
        job = self.queue.enqueue(
            "notifications.jobs.notification_jobs.schedule_notification_job",
            user_id,
            notification_type,
            data or {},
            trigger_source,
            scheduled_for.isoformat() if scheduled_for else None,
        )
        logger.info(
            "notification_schedule_queued",
            user_id=user_id,
            notification_type=notification_type,
            job_id=job.id,
        )
        return job.id

    def process_pending(self, batch_size: int | None = None) -> int:
        """Deliver due pending rows, most urgent first.

        Args:
            batch_size: Maximum rows to handle in this sweep

        Returns:
            Number of rows processed; 0 when the database is unreachable
        """
        batch_size = batch_size or settings.NOTIFICATION_PENDING_BATCH_SIZE
        try:
            pending = LedgerRepository.get_pending(batch_size)
        except (OperationalError, InterfaceError) as e:
            logger.warning("pending_sweep_database_unavailable", error=str(e))
            return 0

        for instance in pending:
            self.dispatcher.deliver(instance)

        if pending:
            logger.info("pending_notifications_processed", count=len(pending))
        return len(pending)

    def get_notification(self, notification_id: int) -> NotificationHistory | None:
        return LedgerRepository.get(notification_id)

    def mark_opened(self, notification_id: int) -> NotificationHistory | None:
        """Record that the user opened the notification (first time only)."""
        if not LedgerRepository.mark_opened(notification_id):
            return None
        logger.info("notification_opened", notification_id=notification_id)
        return LedgerRepository.get(notification_id)

    def mark_action_taken(self, notification_id: int) -> NotificationHistory | None:
        """Record that the user acted on the notification (first time only)."""
        if not LedgerRepository.mark_action_taken(notification_id):
            return None
        logger.info("notification_action_taken", notification_id=notification_id)
        return LedgerRepository.get(notification_id)

    def get_user_history(self, user_id: int) -> QuerySet[NotificationHistory]:
        return LedgerRepository.list_for_user(user_id)

    def cleanup_old(self, days: int | None = None) -> int:
        """Delete ledger rows older than ``days`` (default from settings)."""
        days = days if days is not None else settings.NOTIFICATION_HISTORY_RETENTION_DAYS
        deleted = LedgerRepository.delete_older_than(days)
        logger.info("notification_history_cleaned", deleted=deleted, days=days)
        return deleted

    def cleanup_throttle_logs(self, days: int | None = None) -> int:
        """Delete throttle counters older than ``days`` (default from settings)."""
        days = days if days is not None else settings.NOTIFICATION_THROTTLE_RETENTION_DAYS
        deleted = ThrottleRepository.delete_older_than(days, local_today())
        logger.info("throttle_logs_cleaned", deleted=deleted, days=days)
        return deleted


notification_service = NotificationService()
