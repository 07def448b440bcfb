"""Repository for per-user, per-type, per-day send counters."""

from datetime import date, timedelta

from django.db.models import F, Sum

from notifications.models import NotificationThrottleLog


class ThrottleRepository:
    """Counters over ``notification_throttle_log``."""

    @staticmethod
    def count_for_type(user_id: int, notification_type: str, day: date) -> int:
        """Return how many notifications of a type the user got on ``day``."""
        row = NotificationThrottleLog.objects.filter(
            user_id=user_id, notification_type=notification_type, notification_date=day
        ).first()
        return row.count if row else 0

    @staticmethod
    def count_for_day(user_id: int, day: date) -> int:
        """Return the user's total notification count across all types on ``day``."""
        total = NotificationThrottleLog.objects.filter(
            user_id=user_id, notification_date=day
        ).aggregate(total=Sum("count"))["total"]
        return total or 0

    @staticmethod
    def increment(user_id: int, notification_type: str, day: date) -> None:
        """Atomically add one to the (user, type, day) counter, creating it at 1."""
        row, created = NotificationThrottleLog.objects.get_or_create(
            user_id=user_id,
            notification_type=notification_type,
            notification_date=day,
            defaults={"count": 1},
        )
        if not created:
            NotificationThrottleLog.objects.filter(pk=row.pk).update(
                count=F("count") + 1
            )

    @staticmethod
    def delete_older_than(days: int, today: date) -> int:
        """Delete counters dated more than ``days`` before ``today``.

        Returns:
            Number of rows deleted
        """
        cutoff = today - timedelta(days=days)
        deleted, _ = NotificationThrottleLog.objects.filter(
            notification_date__lt=cutoff
        ).delete()
        return deleted
