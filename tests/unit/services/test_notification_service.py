"""Tests for NotificationService."""

from datetime import UTC, datetime, timedelta
from unittest.mock import Mock, patch

from django.db.utils import OperationalError
from django.utils import timezone

import pytest

from notifications.enums import DeliveryStatus, NotificationPriority
from notifications.models import NotificationHistory, NotificationThrottleLog
from notifications.repositories import ThrottleRepository
from notifications.services.delivery_dispatcher import NO_TOKEN_ERROR
from notifications.services.notification_service import NotificationService
from notifications.timeutils import local_today
from tests.factories import (
    NotificationHistoryFactory,
    NotificationTemplateFactory,
    PreferenceFactory,
    ThrottleLogFactory,
    UserFactory,
)


@pytest.mark.django_db
class TestSchedule:
    @pytest.fixture
    def template(self):
        return NotificationTemplateFactory(
            type="low_battery",
            title_template="Battery {{level}}%",
            body_template="Charge soon, {{name}}",
            action_data={"screen": "device", "level": 0},
            max_per_day=None,
        )

    def test_creates_sent_row_and_increments_throttle(self, service, template, push_provider):
        preference = PreferenceFactory()

        instance = service.schedule(preference.user_id, "low_battery", {"level": 12})

        assert instance is not None
        assert instance.delivery_status == DeliveryStatus.SENT.value
        assert instance.title == "Battery 12%"
        assert instance.body == "Charge soon, {{name}}"
        assert instance.action_data == {"screen": "device", "level": 12}
        assert instance.template_id == template.id
        assert ThrottleRepository.count_for_type(
            preference.user_id, "low_battery", local_today()
        ) == 1
        push_provider.send.assert_called_once()

    def test_unknown_type_returns_none_without_row(self, service):
        preference = PreferenceFactory()

        assert service.schedule(preference.user_id, "no_such_type") is None
        assert NotificationHistory.objects.count() == 0

    def test_inactive_template_returns_none(self, service):
        NotificationTemplateFactory(type="retired", is_active=False)
        preference = PreferenceFactory()

        assert service.schedule(preference.user_id, "retired") is None
        assert NotificationHistory.objects.count() == 0

    def test_throttled_returns_none_without_row(self, service, template):
        preference = PreferenceFactory(enabled=False)

        assert service.schedule(preference.user_id, "low_battery", {"level": 5}) is None
        assert NotificationHistory.objects.count() == 0
        assert NotificationThrottleLog.objects.count() == 0

    def test_future_schedule_stays_pending(self, service, template, push_provider):
        preference = PreferenceFactory()
        later = timezone.now() + timedelta(hours=2)

        instance = service.schedule(
            preference.user_id, "low_battery", {"level": 9}, scheduled_for=later
        )

        assert instance.delivery_status == DeliveryStatus.PENDING.value
        assert instance.scheduled_for == later
        push_provider.send.assert_not_called()

    def test_delivery_failure_still_returns_instance(self, service, template, push_provider):
        preference = PreferenceFactory(fcm_token=None)

        instance = service.schedule(preference.user_id, "low_battery", {"level": 9})

        assert instance is not None
        assert instance.delivery_status == DeliveryStatus.FAILED.value
        push_provider.send.assert_not_called()

    def test_daily_cap_stops_scheduling(self, service, template):
        preference = PreferenceFactory(max_daily_notifications=2)

        results = [
            service.schedule(preference.user_id, "low_battery", {"level": n})
            for n in range(3)
        ]

        assert [r is not None for r in results] == [True, True, False]
        assert NotificationHistory.objects.filter(user=preference.user).count() == 2

    def test_trigger_source_is_stored(self, service, template):
        preference = PreferenceFactory()

        instance = service.schedule(
            preference.user_id, "low_battery", {"level": 1}, trigger_source={"meal_id": 4}
        )

        assert instance.trigger_source == {"meal_id": 4}

    def test_user_without_preferences_is_attempted(self, service, template, push_provider):
        user = UserFactory()

        instance = service.schedule(user.id, "low_battery", {"level": 7})

        assert instance is not None
        assert instance.delivery_status == DeliveryStatus.FAILED.value
        assert instance.error_message == NO_TOKEN_ERROR
        assert instance.sent_at is not None
        push_provider.send.assert_not_called()

    def test_user_without_preferences_still_hits_type_cap(self, service):
        NotificationTemplateFactory(
            type="fast_eating_alert", body_template="{{pace}} bpm", max_per_day=3
        )
        user = UserFactory()

        results = [
            service.schedule(user.id, "fast_eating_alert", {"pace": 20}) for _ in range(6)
        ]

        assert sum(r is not None for r in results) == 3
        assert NotificationHistory.objects.filter(user=user).count() == 3

    def test_naive_future_time_is_localised_and_held(self, service, template, push_provider):
        preference = PreferenceFactory()

        instance = service.schedule(
            preference.user_id,
            "low_battery",
            {"level": 3},
            scheduled_for=datetime(2099, 1, 1, 10, 0),
        )

        assert instance.delivery_status == DeliveryStatus.PENDING.value
        assert instance.scheduled_for == datetime(2099, 1, 1, 10, 0, tzinfo=UTC)
        push_provider.send.assert_not_called()

    def test_naive_past_time_is_delivered(self, service, template, push_provider):
        preference = PreferenceFactory()

        instance = service.schedule(
            preference.user_id,
            "low_battery",
            {"level": 3},
            scheduled_for=datetime(2020, 1, 1, 10, 0),
        )

        assert instance.delivery_status == DeliveryStatus.SENT.value
        push_provider.send.assert_called_once()


@pytest.mark.django_db
class TestProcessPending:
    def test_batches_by_priority_then_age(self, service, push_provider):
        preference = PreferenceFactory()
        priorities = [
            NotificationPriority.LOW,
            NotificationPriority.CRITICAL,
            NotificationPriority.MEDIUM,
            NotificationPriority.HIGH,
        ] * 3
        rows = [
            NotificationHistoryFactory(user=preference.user, priority=p.value)
            for p in priorities
        ]

        assert service.process_pending(5) == 5
        first = set(
            NotificationHistory.objects.exclude(
                delivery_status=DeliveryStatus.PENDING.value
            ).values_list("id", flat=True)
        )
        critical = {r.id for r in rows if r.priority == "CRITICAL"}
        high = [r.id for r in rows if r.priority == "HIGH"]
        assert critical | set(high[:2]) == first

        assert service.process_pending(5) == 5
        assert service.process_pending(5) == 2
        assert service.process_pending(5) == 0
        assert push_provider.send.call_count == 12

    def test_skips_rows_scheduled_for_later(self, service):
        preference = PreferenceFactory()
        NotificationHistoryFactory(
            user=preference.user, scheduled_for=timezone.now() + timedelta(minutes=30)
        )
        due = NotificationHistoryFactory(
            user=preference.user, scheduled_for=timezone.now() - timedelta(minutes=1)
        )

        assert service.process_pending(10) == 1
        due.refresh_from_db()
        assert due.delivery_status == DeliveryStatus.SENT.value

    def test_skips_non_pending_rows(self, service):
        preference = PreferenceFactory()
        NotificationHistoryFactory(
            user=preference.user, delivery_status=DeliveryStatus.FAILED.value
        )

        assert service.process_pending(10) == 0

    def test_database_errors_return_zero(self, service):
        with patch(
            "notifications.services.notification_service.LedgerRepository.get_pending",
            side_effect=OperationalError("connection refused"),
        ):
            assert service.process_pending(10) == 0


@pytest.mark.django_db
class TestInteractionsAndRetention:
    def test_mark_opened_sets_once(self, service):
        instance = NotificationHistoryFactory()

        first = service.mark_opened(instance.id)
        second = service.mark_opened(instance.id)

        assert first.opened_at is not None
        assert second.opened_at == first.opened_at

    def test_mark_action_taken_sets_once(self, service):
        instance = NotificationHistoryFactory()

        first = service.mark_action_taken(instance.id)
        second = service.mark_action_taken(instance.id)

        assert first.action_taken_at is not None
        assert second.action_taken_at == first.action_taken_at

    def test_interactions_on_missing_row_return_none(self, service):
        assert service.mark_opened(999) is None
        assert service.mark_action_taken(999) is None

    def test_cleanup_old_uses_created_at_cutoff(self, service):
        old = NotificationHistoryFactory(delivery_status=DeliveryStatus.SENT.value)
        recent = NotificationHistoryFactory()
        now = timezone.now()
        NotificationHistory.objects.filter(pk=old.pk).update(created_at=now - timedelta(days=91))
        NotificationHistory.objects.filter(pk=recent.pk).update(created_at=now - timedelta(days=89))

        assert service.cleanup_old(90) == 1
        assert list(NotificationHistory.objects.values_list("id", flat=True)) == [recent.id]

    def test_cleanup_throttle_logs(self, service):
        today = local_today()
        ThrottleLogFactory(notification_date=today - timedelta(days=31))
        keep = ThrottleLogFactory(notification_date=today - timedelta(days=29))

        assert service.cleanup_throttle_logs(30) == 1
        assert list(NotificationThrottleLog.objects.values_list("id", flat=True)) == [keep.id]

    def test_user_history_newest_first(self, service):
        preference = PreferenceFactory()
        older = NotificationHistoryFactory(user=preference.user)
        newer = NotificationHistoryFactory(user=preference.user)
        NotificationHistoryFactory()

        history = list(service.get_user_history(preference.user_id))

        assert [row.id for row in history] == [newer.id, older.id]


class TestEnqueueSchedule:
    def test_enqueues_job(self):
        service = NotificationService(gate=Mock(), dispatcher=Mock())
        queue = Mock()
        queue.enqueue.return_value = Mock(id="job-1")

        with patch(
            "notifications.services.notification_service.django_rq.get_queue",
            return_value=queue,
        ):
            job_id = service.enqueue_schedule(3, "low_battery", {"level": 4})

        assert job_id == "job-1"
        queue.enqueue.assert_called_once_with(
            "notifications.jobs.notification_jobs.schedule_notification_job",
            3,
            "low_battery",
            {"level": 4},
            None,
            None,
        )

    def test_forwards_scheduled_for_as_iso_text(self):
        service = NotificationService(gate=Mock(), dispatcher=Mock())
        queue = Mock()
        queue.enqueue.return_value = Mock(id="job-2")
        later = datetime(2099, 1, 1, 10, 0, tzinfo=UTC)

        with patch(
            "notifications.services.notification_service.django_rq.get_queue",
            return_value=queue,
        ):
            service.enqueue_schedule(3, "low_battery", scheduled_for=later)

        assert queue.enqueue.call_args.args[-1] == "2099-01-01T10:00:00+00:00"
