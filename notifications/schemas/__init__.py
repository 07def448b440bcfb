"""Pydantic schemas for the notification API."""

from notifications.schemas.health import (
    DependencyHealth,
    LivenessResponse,
    ReadinessResponse,
)
from notifications.schemas.notification import (
    MealPaceEvent,
    MealPaceEventResponse,
    NotificationDetail,
    ScheduleNotificationRequest,
    ScheduleNotificationResponse,
    TemplateInfo,
    TemplateListResponse,
)
from notifications.schemas.preference import (
    PreferenceResponse,
    PreferenceUpdateRequest,
    PushTokenRequest,
)

__all__ = [
    "DependencyHealth",
    "LivenessResponse",
    "MealPaceEvent",
    "MealPaceEventResponse",
    "NotificationDetail",
    "PreferenceResponse",
    "PreferenceUpdateRequest",
    "PushTokenRequest",
    "ReadinessResponse",
    "ScheduleNotificationRequest",
    "ScheduleNotificationResponse",
    "TemplateInfo",
    "TemplateListResponse",
]
