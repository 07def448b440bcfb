"""Local-time helpers for notification policy.

Quiet hours, "today" for throttle counters and the scheduler's cron triggers
all use ``settings.NOTIFICATION_TIME_ZONE``.
"""

from datetime import date, datetime
from zoneinfo import ZoneInfo

from django.conf import settings
from django.utils import timezone


def notification_tz() -> ZoneInfo:
    """Return the configured notification time zone."""
    return ZoneInfo(settings.NOTIFICATION_TIME_ZONE)


def local_now(now: datetime | None = None) -> datetime:
    """Convert ``now`` (default: current time) to the notification time zone."""
    return timezone.localtime(now or timezone.now(), notification_tz())


def local_today(now: datetime | None = None) -> date:
    """Return the calendar date in the notification time zone."""
    return local_now(now).date()
