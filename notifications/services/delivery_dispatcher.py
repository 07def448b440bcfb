"""Hands a ledger row to the push provider and records the outcome."""

import json

from django.db import DatabaseError

import structlog

from notifications.enums import DeliveryStatus, NotificationPriority
from notifications.models import NotificationHistory
from notifications.repositories import LedgerRepository, PreferenceRepository
from notifications.services.push_provider import FCMPushProvider, PushPayload

logger = structlog.get_logger(__name__)

NO_TOKEN_ERROR = "No delivery token"

URGENT_PRIORITIES = frozenset(
    {NotificationPriority.CRITICAL.value, NotificationPriority.HIGH.value}
)

# Android notification channel per type prefix; first match wins.
CHANNEL_RULES = (
    (("fast_eating", "tremor", "temperature"), "health_alerts"),
    (("daily_goal", "streak"), "achievements"),
    (("weekly", "device_inactive"), "engagement"),
    (("low_battery", "system"), "system_alerts"),
)


def channel_for_type(notification_type: str) -> str:
    for prefixes, channel in CHANNEL_RULES:
        if notification_type.startswith(prefixes):
            return channel
    return "default"


def build_payload(instance: NotificationHistory) -> PushPayload:
    """Build the push payload for a ledger row.

    FCM data values must be strings, so ``action_data`` travels as JSON.
    """
    urgent = instance.priority in URGENT_PRIORITIES
    critical = instance.priority == NotificationPriority.CRITICAL.value
    return PushPayload(
        title=instance.title,
        body=instance.body,
        data={
            "notification_id": str(instance.id),
            "type": instance.type,
            "priority": instance.priority,
            "action_type": instance.action_type or "",
            "action_data": json.dumps(instance.action_data or {}, default=str),
        },
        android_priority="high" if urgent else "normal",
        android_channel_id=channel_for_type(instance.type),
        sound="default" if critical else None,
        apns_priority="10" if urgent else "5",
    )


class DeliveryDispatcher:
    """Delivers one pending ledger row. Never raises."""

    def __init__(
        self,
        provider: FCMPushProvider | None = None,
        ledger: type[LedgerRepository] = LedgerRepository,
        preferences: type[PreferenceRepository] = PreferenceRepository,
    ) -> None:
        self.provider = provider or FCMPushProvider()
        self.ledger = ledger
        self.preferences = preferences

    def deliver(self, instance: NotificationHistory) -> None:
        """Send ``instance`` and move it to sent or failed.

        A failure caused by an invalid token also clears that token from the
        user's preferences.
        """
        log = logger.bind(
            notification_id=instance.id,
            user_id=instance.user_id,
            notification_type=instance.type,
        )
        try:
            preference = self.preferences.get(instance.user_id)
            token = preference.fcm_token if preference else None
            if not token:
                self.ledger.update_status(
                    instance.id, DeliveryStatus.FAILED, error_message=NO_TOKEN_ERROR
                )
                log.info("notification_not_delivered", reason="no_token")
                return

            result = self.provider.send(token, build_payload(instance))

            if result.success:
                self.ledger.update_status(instance.id, DeliveryStatus.SENT)
                log.info("notification_sent", message_id=result.message_id)
                return

            self.ledger.update_status(
                instance.id, DeliveryStatus.FAILED, error_message=result.error
            )
            if result.invalid_token:
                self.preferences.clear_token(instance.user_id, token)
                log.warning("push_token_invalidated")
            log.warning("notification_failed", error=result.error)
        except Exception as e:
            log.error("notification_delivery_errored", error=str(e), exc_info=e)
            try:
                self.ledger.update_status(
                    instance.id, DeliveryStatus.FAILED, error_message=str(e)
                )
            except DatabaseError as db_error:
                log.error("notification_status_write_failed", error=str(db_error))
