"""URL routing configuration for the notifications application."""

from django.urls import path

from .views import (
    LivenessCheckView,
    MealPaceEventView,
    NotificationActionView,
    NotificationHistoryView,
    NotificationOpenedView,
    PreferencesView,
    PushTokenView,
    ReadinessCheckView,
    ScheduleNotificationView,
    TemplateListView,
)

urlpatterns = [
    path("health/live", LivenessCheckView.as_view(), name="health-live"),
    path("health/ready", ReadinessCheckView.as_view(), name="health-ready"),
    path("preferences", PreferencesView.as_view(), name="preferences"),
    path("push-token", PushTokenView.as_view(), name="push-token"),
    path("history", NotificationHistoryView.as_view(), name="history"),
    path(
        "notifications/<int:notification_id>/opened",
        NotificationOpenedView.as_view(),
        name="notification-opened",
    ),
    path(
        "notifications/<int:notification_id>/action",
        NotificationActionView.as_view(),
        name="notification-action",
    ),
    path("notifications/schedule", ScheduleNotificationView.as_view(), name="schedule"),
    path("events/meal-pace", MealPaceEventView.as_view(), name="meal-pace-event"),
    path("templates", TemplateListView.as_view(), name="template-list"),
]
