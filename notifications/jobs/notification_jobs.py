"""RQ jobs for scheduling notifications off the request thread."""

from typing import Any

from django.utils.dateparse import parse_datetime

import structlog

from notifications.services.notification_service import notification_service

logger = structlog.get_logger(__name__)


def schedule_notification_job(
    user_id: int,
    notification_type: str,
    data: dict[str, Any] | None = None,
    trigger_source: dict[str, Any] | None = None,
    scheduled_for: str | None = None,
) -> int | None:
    """Run ``NotificationService.schedule`` on a worker.

    Args:
        user_id: Recipient
        notification_type: Template type
        data: Placeholder values
        trigger_source: Provenance stored on the ledger row
        scheduled_for: ISO-8601 earliest delivery time, or None for now

    Returns:
        The ledger row id, or None when nothing was scheduled
    """
    instance = notification_service.schedule(
        user_id,
        notification_type,
        data or {},
        trigger_source=trigger_source,
        scheduled_for=parse_datetime(scheduled_for) if scheduled_for else None,
    )
    if instance is None:
        logger.info(
            "notification_job_skipped",
            user_id=user_id,
            notification_type=notification_type,
        )
        return None

    logger.info(
        "notification_job_completed",
        notification_id=instance.id,
        delivery_status=instance.delivery_status,
    )
    return instance.id
