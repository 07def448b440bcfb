"""Tests for ActivityRepository."""

from datetime import date, timedelta

from django.utils import timezone

import pytest

from notifications.repositories import ActivityRepository
from tests.factories import DailyBiteBreakdownFactory, DeviceFactory, PreferenceFactory

DAY = date(2026, 3, 9)


@pytest.mark.django_db
class TestActivityRepository:
    def test_daily_goal_candidates_respect_preferences(self):
        opted_in = PreferenceFactory()
        opted_out = PreferenceFactory(achievement_enabled=False)
        DailyBiteBreakdownFactory(user=opted_in.user, date=DAY)
        DailyBiteBreakdownFactory(user=opted_out.user, date=DAY)
        DailyBiteBreakdownFactory(user=opted_in.user, date=DAY - timedelta(days=1))

        rows = ActivityRepository.daily_goal_candidates(DAY)

        assert [row.user_id for row in rows] == [opted_in.user_id]

    def test_weekly_stats(self):
        preference = PreferenceFactory()
        for offset, (bites, pace) in enumerate([(40, 10.0), (60, 12.0)]):
            DailyBiteBreakdownFactory(
                user=preference.user, date=DAY - timedelta(days=offset),
                total_bites=bites, avg_pace_bpm=pace,
            )
        DailyBiteBreakdownFactory(user=preference.user, date=DAY - timedelta(days=10))

        stats = ActivityRepository.weekly_stats(preference.user_id, DAY - timedelta(days=6), DAY)

        assert stats == {"total_bites": 100, "avg_pace": 11.0, "days_tracked": 2}

    def test_weekly_stats_without_data(self):
        preference = PreferenceFactory()

        stats = ActivityRepository.weekly_stats(preference.user_id, DAY, DAY)

        assert stats == {"total_bites": 0, "avg_pace": None, "days_tracked": 0}

    def test_digest_recipients(self):
        sunday = PreferenceFactory(weekly_digest_day=0)
        PreferenceFactory(weekly_digest_day=3)
        PreferenceFactory(weekly_digest_day=0, weekly_digest_enabled=False)

        recipients = ActivityRepository.digest_recipients(0)

        assert [p.user_id for p in recipients] == [sunday.user_id]

    def test_inactive_device_users_distinct(self):
        stale = PreferenceFactory()
        fresh = PreferenceFactory()
        now = timezone.now()
        DeviceFactory(user=stale.user, last_sync_at=now - timedelta(days=5))
        DeviceFactory(user=stale.user, last_sync_at=now - timedelta(days=4))
        DeviceFactory(user=fresh.user, last_sync_at=now - timedelta(hours=3))

        assert ActivityRepository.inactive_device_users(now - timedelta(days=3)) == [stale.user_id]

    def test_never_synced_devices_are_not_inactive(self):
        preference = PreferenceFactory()
        DeviceFactory(user=preference.user, last_sync_at=None)

        assert ActivityRepository.inactive_device_users(timezone.now()) == []
