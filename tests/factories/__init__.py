"""factory_boy factories for notification and telemetry models."""

from datetime import time

import factory
from factory.django import DjangoModelFactory
from faker import Faker

from notifications.enums import DeliveryStatus, NotificationCategory, NotificationPriority
from notifications.models import (
    DailyBiteBreakdown,
    Device,
    NotificationHistory,
    NotificationTemplate,
    NotificationThrottleLog,
    User,
    UserNotificationPreference,
)

fake = Faker()


def fcm_token() -> str:
    # Real FCM registration tokens are ~150 characters.
    return fake.pystr(min_chars=152, max_chars=152)


class UserFactory(DjangoModelFactory):
    class Meta:
        model = User

    email = factory.Sequence(lambda n: f"user{n}@example.com")
    name = factory.LazyAttribute(lambda _: fake.name())
    bite_goals = factory.LazyAttribute(lambda _: {"daily": 50})


class DeviceFactory(DjangoModelFactory):
    class Meta:
        model = Device

    user = factory.SubFactory(UserFactory)
    device_name = factory.LazyAttribute(lambda _: f"iSpoon {fake.color_name()}")
    last_sync_at = None


class DailyBiteBreakdownFactory(DjangoModelFactory):
    class Meta:
        model = DailyBiteBreakdown

    user = factory.SubFactory(UserFactory)
    date = factory.LazyAttribute(lambda _: fake.date_this_month())
    total_bites = 60
    avg_pace_bpm = 8.5


class NotificationTemplateFactory(DjangoModelFactory):
    class Meta:
        model = NotificationTemplate
        django_get_or_create = ("type",)

    type = factory.Sequence(lambda n: f"test_type_{n}")
    category = NotificationCategory.SYSTEM.value
    priority = NotificationPriority.MEDIUM.value
    title_template = "Hello {{name}}"
    body_template = "You have {{count}} updates"
    action_type = "open_app"
    action_data = factory.LazyFunction(lambda: {"screen": "home"})
    max_per_day = None
    is_active = True


class PreferenceFactory(DjangoModelFactory):
    class Meta:
        model = UserNotificationPreference

    user = factory.SubFactory(UserFactory)
    enabled = True
    # Empty window so results do not depend on the wall clock.
    quiet_hours_start = time(0, 0)
    quiet_hours_end = time(0, 0)
    max_daily_notifications = 10
    fcm_token = factory.LazyFunction(fcm_token)


class NotificationHistoryFactory(DjangoModelFactory):
    class Meta:
        model = NotificationHistory

    user = factory.SubFactory(UserFactory)
    type = "system_alert"
    priority = NotificationPriority.MEDIUM.value
    title = factory.LazyAttribute(lambda _: fake.sentence(nb_words=4))
    body = factory.LazyAttribute(lambda _: fake.sentence(nb_words=10))
    action_type = "open_settings"
    action_data = factory.LazyFunction(dict)
    delivery_status = DeliveryStatus.PENDING.value


class ThrottleLogFactory(DjangoModelFactory):
    class Meta:
        model = NotificationThrottleLog

    user = factory.SubFactory(UserFactory)
    notification_type = "system_alert"
    notification_date = factory.LazyAttribute(lambda _: fake.date_this_month())
    count = 1
