"""Time-driven trigger rules and the scheduler that runs them."""

from notifications.scheduler.notification_scheduler import NotificationScheduler
from notifications.scheduler.trigger_rules import TriggerRules

__all__ = ["NotificationScheduler", "TriggerRules"]
