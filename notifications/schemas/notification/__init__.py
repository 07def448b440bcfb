"""Notification schemas."""

from notifications.schemas.notification.meal_pace import (
    MealPaceEvent,
    MealPaceEventResponse,
)
from notifications.schemas.notification.notification_detail import NotificationDetail
from notifications.schemas.notification.schedule import (
    ScheduleNotificationRequest,
    ScheduleNotificationResponse,
)
from notifications.schemas.notification.template_info import (
    TemplateInfo,
    TemplateListResponse,
)

__all__ = [
    "MealPaceEvent",
    "MealPaceEventResponse",
    "NotificationDetail",
    "ScheduleNotificationRequest",
    "ScheduleNotificationResponse",
    "TemplateInfo",
    "TemplateListResponse",
]
