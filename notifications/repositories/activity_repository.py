"""Read-only queries over eating telemetry used by the trigger rules."""

from datetime import date, datetime
from typing import Any

from django.db.models import Avg, Count, Sum

from notifications.models import DailyBiteBreakdown, Device, UserNotificationPreference


class ActivityRepository:
    """Telemetry lookups. Preference filters mirror each rule's category."""

    @staticmethod
    def daily_goal_candidates(day: date) -> list[DailyBiteBreakdown]:
        """Return breakdown rows for ``day`` whose owners accept achievements.

        The goal comparison happens in Python because the goal lives inside the
        user's ``bite_goals`` JSON document.
        """
        return list(
            DailyBiteBreakdown.objects.filter(
                date=day,
                user__notification_preference__enabled=True,
                user__notification_preference__achievement_enabled=True,
            ).select_related("user")
        )

    @staticmethod
    def digest_recipients(weekday: int) -> list[UserNotificationPreference]:
        """Return preferences of users whose weekly digest falls on ``weekday``.

        Args:
            weekday: 0 = Sunday ... 6 = Saturday
        """
        return list(
            UserNotificationPreference.objects.filter(
                enabled=True,
                engagement_enabled=True,
                weekly_digest_enabled=True,
                weekly_digest_day=weekday,
            )
        )

    @staticmethod
    def weekly_stats(user_id: int, start: date, end: date) -> dict[str, Any]:
        """Aggregate a user's breakdown rows in ``[start, end]``.

        Returns:
            Dict with ``total_bites``, ``avg_pace`` (None without data) and
            ``days_tracked``
        """
        stats = DailyBiteBreakdown.objects.filter(
            user_id=user_id, date__gte=start, date__lte=end
        ).aggregate(
            total_bites=Sum("total_bites"),
            avg_pace=Avg("avg_pace_bpm"),
            days_tracked=Count("id"),
        )
        return {
            "total_bites": stats["total_bites"] or 0,
            "avg_pace": stats["avg_pace"],
            "days_tracked": stats["days_tracked"] or 0,
        }

    @staticmethod
    def inactive_device_users(cutoff: datetime) -> list[int]:
        """Return distinct ids of users with a device not synced since ``cutoff``.

        Devices that never synced are left out.
        """
        return list(
            Device.objects.filter(
                last_sync_at__lt=cutoff,
                user__notification_preference__enabled=True,
                user__notification_preference__engagement_enabled=True,
            )
            .values_list("user_id", flat=True)
            .distinct()
            .order_by("user_id")
        )
