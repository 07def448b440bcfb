"""Notification-related enumerations.

Priorities, categories, delivery statuses and the notification types the
scheduler and event handlers emit.
"""

from enum import Enum


class NotificationPriority(str, Enum):
    """Notification priority, ordered LOW < MEDIUM < HIGH < CRITICAL."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"

    @property
    def rank(self) -> int:
        """Return the ordinal used for ordering (higher is more urgent)."""
        return PRIORITY_RANK[self.value]


PRIORITY_RANK = {
    NotificationPriority.LOW.value: 1,
    NotificationPriority.MEDIUM.value: 2,
    NotificationPriority.HIGH.value: 3,
    NotificationPriority.CRITICAL.value: 4,
}


class NotificationCategory(str, Enum):
    """Template grouping matched against the per-category preference toggles."""

    HEALTH = "health"
    ACHIEVEMENT = "achievement"
    ENGAGEMENT = "engagement"
    SYSTEM = "system"


class DeliveryStatus(str, Enum):
    """Lifecycle of a ledger row.

    pending -> sent | failed, and optionally sent -> delivered.
    """

    PENDING = "pending"
    SENT = "sent"
    DELIVERED = "delivered"
    FAILED = "failed"


class DeliveryMethod(str, Enum):
    """Delivery channel recorded on the ledger row."""

    PUSH = "push"


class NotificationKind(str, Enum):
    """Template types emitted by the trigger rules and event handlers."""

    DAILY_GOAL_REACHED = "daily_goal_reached"
    WEEKLY_SUMMARY = "weekly_summary"
    DEVICE_INACTIVE = "device_inactive"
    FAST_EATING_ALERT = "fast_eating_alert"
    TREMOR_SPIKE_ALERT = "tremor_spike_alert"
    TEMPERATURE_ALERT = "temperature_alert"
    STREAK_MILESTONE = "streak_milestone"
    LOW_BATTERY = "low_battery"
    SYSTEM_ALERT = "system_alert"
