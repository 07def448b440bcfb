"""Policy gate deciding whether a notification may be sent now."""

from datetime import datetime, time

import structlog

from notifications.enums import NotificationPriority
from notifications.models import NotificationTemplate
from notifications.models.notification_preference import DEFAULT_MAX_DAILY_NOTIFICATIONS
from notifications.repositories import PreferenceRepository, ThrottleRepository
from notifications.timeutils import local_now

logger = structlog.get_logger(__name__)


def is_within_quiet_hours(current: time, start: time, end: time) -> bool:
    """Return True if ``current`` falls in the window ``[start, end)``.

    A window with ``start > end`` wraps midnight. ``start == end`` is empty.
    """
    if start == end:
        return False
    if start < end:
        return start <= current < end
    return current >= start or current < end


class ThrottleGate:
    """Read-only check of preferences, quiet hours and daily caps.

    Users without a preference row skip the preference checks but are still
    held to the per-type cap and the default daily cap.

    Incrementing the counters is the caller's job once the ledger row exists.
    """

    def __init__(
        self,
        preference_repository: type[PreferenceRepository] = PreferenceRepository,
        throttle_repository: type[ThrottleRepository] = ThrottleRepository,
    ) -> None:
        self.preferences = preference_repository
        self.throttle = throttle_repository

    def can_send(
        self,
        user_id: int,
        template: NotificationTemplate,
        priority: NotificationPriority | str | None = None,
        now: datetime | None = None,
    ) -> bool:
        """Decide whether ``template`` may be sent to the user at ``now``.

        Args:
            user_id: Recipient
            template: Active template being sent (category and per-type cap)
            priority: Effective priority; defaults to the template's
            now: Evaluation instant; defaults to the current time

        Returns:
            True if every check passes
        """
        priority = NotificationPriority(priority or template.priority)
        log = logger.bind(user_id=user_id, notification_type=template.type)
        local = local_now(now)

        preference = self.preferences.get(user_id)
        if preference is None:
            log.debug("throttle_no_preferences_allowing")
        elif not self._preference_allows(preference, template, priority, local, log):
            return False

        max_daily = (
            preference.max_daily_notifications
            if preference is not None
            else DEFAULT_MAX_DAILY_NOTIFICATIONS
        )
        return self._within_caps(user_id, template, max_daily, local.date(), log)

    @staticmethod
    def _preference_allows(preference, template, priority, local, log) -> bool:
        if not preference.enabled:
            log.info("notification_throttled", reason="disabled")
            return False

        if priority is not NotificationPriority.CRITICAL and is_within_quiet_hours(
            local.time(), preference.quiet_hours_start, preference.quiet_hours_end
        ):
            log.info("notification_throttled", reason="quiet_hours")
            return False

        if not preference.category_enabled(template.category):
            log.info(
                "notification_throttled",
                reason="category_disabled",
                category=template.category,
            )
            return False
        return True

    def _within_caps(self, user_id, template, max_daily, today, log) -> bool:
        """Per-type cap from the template, then the overall daily cap."""
        if template.max_per_day is not None:
            sent_of_type = self.throttle.count_for_type(user_id, template.type, today)
            if sent_of_type >= template.max_per_day:
                log.info(
                    "notification_throttled",
                    reason="type_limit",
                    count=sent_of_type,
                    limit=template.max_per_day,
                )
                return False

        sent_today = self.throttle.count_for_day(user_id, today)
        if sent_today >= max_daily:
            log.info(
                "notification_throttled",
                reason="daily_limit",
                count=sent_today,
                limit=max_daily,
            )
            return False

        return True
