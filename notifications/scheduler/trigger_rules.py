"""Rules that turn telemetry into scheduled notifications.

Each public method is one rule. Rules are safe to call directly (tests,
management commands) and are wrapped by ``NotificationScheduler`` for cron
execution.
"""

from datetime import datetime, timedelta

from django.conf import settings
from django.utils import timezone

import structlog

from notifications.enums import NotificationKind
from notifications.models import NotificationHistory
from notifications.repositories import ActivityRepository, LedgerRepository
from notifications.services.notification_service import (
    NotificationService,
    notification_service,
)
from notifications.timeutils import local_now, notification_tz

logger = structlog.get_logger(__name__)

DIGEST_WINDOW_DAYS = 7
CONSISTENT_WEEK_DAYS = 5


def digest_weekday(moment: datetime) -> int:
    """Weekday number with 0 = Sunday, as stored in ``weekly_digest_day``."""
    return (moment.weekday() + 1) % 7


def format_pace(avg_pace: float | None) -> str:
    return "N/A" if avg_pace is None else f"{avg_pace:.1f}"


def weekly_trend(days_tracked: int) -> str:
    if days_tracked >= CONSISTENT_WEEK_DAYS:
        return "Great consistency!"
    return "Keep it up!"


class TriggerRules:
    """Cron and event rules feeding ``NotificationService.schedule``."""

    def __init__(
        self,
        service: NotificationService | None = None,
        activity: type[ActivityRepository] = ActivityRepository,
        ledger: type[LedgerRepository] = LedgerRepository,
    ) -> None:
        self.service = service or notification_service
        self.activity = activity
        self.ledger = ledger

    def pending_sweep(self) -> int:
        """Deliver pending notifications whose time has come."""
        return self.service.process_pending(settings.NOTIFICATION_PENDING_BATCH_SIZE)

    def daily_goal_check(self, now: datetime | None = None) -> int:
        """Congratulate users who reached yesterday's bite goal.

        A user gets at most one ``daily_goal_reached`` per date, even if the
        rule runs twice.

        Returns:
            Number of notifications scheduled
        """
        day = local_now(now).date() - timedelta(days=1)
        trigger_source = {"date": day.isoformat()}
        scheduled = 0

        for breakdown in self.activity.daily_goal_candidates(day):
            goal = breakdown.user.daily_bite_goal
            if breakdown.total_bites < goal:
                continue
            if self.ledger.exists_for_trigger(
                breakdown.user_id, NotificationKind.DAILY_GOAL_REACHED.value, trigger_source
            ):
                logger.debug(
                    "daily_goal_already_notified",
                    user_id=breakdown.user_id,
                    date=day.isoformat(),
                )
                continue
            instance = self.service.schedule(
                breakdown.user_id,
                NotificationKind.DAILY_GOAL_REACHED.value,
                {"bites": breakdown.total_bites, "goal": goal},
                trigger_source=trigger_source,
            )
            if instance is not None:
                scheduled += 1

        logger.info("daily_goal_check_completed", date=day.isoformat(), scheduled=scheduled)
        return scheduled

    def weekly_digest(self, now: datetime | None = None) -> int:
        """Send the trailing-week summary to users whose digest day is today.

        If the user's digest time is still ahead today, the notification is
        held until then; otherwise it goes out immediately.

        Returns:
            Number of notifications scheduled
        """
        local = local_now(now)
        today = local.date()
        start = today - timedelta(days=DIGEST_WINDOW_DAYS - 1)
        scheduled = 0

        for preference in self.activity.digest_recipients(digest_weekday(local)):
            stats = self.activity.weekly_stats(preference.user_id, start, today)
            if stats["total_bites"] <= 0:
                continue

            send_at = datetime.combine(
                today, preference.weekly_digest_time, tzinfo=notification_tz()
            )
            instance = self.service.schedule(
                preference.user_id,
                NotificationKind.WEEKLY_SUMMARY.value,
                {
                    "bites": stats["total_bites"],
                    "pace": format_pace(stats["avg_pace"]),
                    "trend": weekly_trend(stats["days_tracked"]),
                },
                trigger_source={"week_ending": today.isoformat()},
                scheduled_for=send_at if send_at > local else None,
            )
            if instance is not None:
                scheduled += 1

        logger.info("weekly_digest_completed", scheduled=scheduled)
        return scheduled

    def inactivity_check(self, now: datetime | None = None) -> int:
        """Nudge users whose spoon has not synced recently.

        Returns:
            Number of notifications scheduled
        """
        now = now or timezone.now()
        days = settings.NOTIFICATION_INACTIVE_DEVICE_DAYS
        cutoff = now - timedelta(days=days)
        trigger_source = {"date": local_now(now).date().isoformat()}
        scheduled = 0

        for user_id in self.activity.inactive_device_users(cutoff):
            instance = self.service.schedule(
                user_id,
                NotificationKind.DEVICE_INACTIVE.value,
                {"days": days},
                trigger_source=trigger_source,
            )
            if instance is not None:
                scheduled += 1

        logger.info("inactivity_check_completed", scheduled=scheduled)
        return scheduled

    def history_retention(self) -> int:
        return self.service.cleanup_old(settings.NOTIFICATION_HISTORY_RETENTION_DAYS)

    def throttle_retention(self) -> int:
        return self.service.cleanup_throttle_logs(
            settings.NOTIFICATION_THROTTLE_RETENTION_DAYS
        )

    def evaluate_meal_pace(
        self, user_id: int, avg_pace_bpm: float, meal_id: int | None = None
    ) -> NotificationHistory | None:
        """Alert the user when a meal was eaten faster than the threshold.

        Returns:
            The scheduled notification, or None when the pace was fine or the
            alert was throttled
        """
        threshold = settings.NOTIFICATION_FAST_EATING_PACE_BPM
        if avg_pace_bpm <= threshold:
            return None

        trigger_source = {"meal_id": meal_id} if meal_id is not None else None
        return self.service.schedule(
            user_id,
            NotificationKind.FAST_EATING_ALERT.value,
            {"pace": round(avg_pace_bpm, 1)},
            trigger_source=trigger_source,
        )


trigger_rules = TriggerRules()
