"""Tests for PreferenceRepository."""

from datetime import time

import pytest

from notifications.models import UserNotificationPreference
from notifications.repositories import PreferenceRepository
from tests.factories import PreferenceFactory, UserFactory


@pytest.mark.django_db
class TestPreferenceRepository:
    def test_get_returns_none_when_missing(self):
        assert PreferenceRepository.get(UserFactory().id) is None

    def test_get_or_create_default_uses_model_defaults(self):
        user = UserFactory()

        preference = PreferenceRepository.get_or_create_default(user.id)

        assert preference.enabled is True
        assert preference.quiet_hours_start == time(22, 0)
        assert preference.quiet_hours_end == time(7, 0)
        assert preference.max_daily_notifications == 10
        assert PreferenceRepository.get_or_create_default(user.id).pk == preference.pk

    def test_upsert_creates_row(self):
        user = UserFactory()

        preference = PreferenceRepository.upsert(user.id, {"engagement_enabled": False})

        assert preference.engagement_enabled is False
        assert preference.enabled is True

    def test_upsert_ignores_none_values(self):
        preference = PreferenceFactory(max_daily_notifications=4)

        updated = PreferenceRepository.upsert(
            preference.user_id, {"max_daily_notifications": None, "enabled": False}
        )

        assert updated.max_daily_notifications == 4
        assert updated.enabled is False

    def test_setting_token_stamps_timestamp(self):
        user = UserFactory()

        preference = PreferenceRepository.upsert(user.id, {"fcm_token": "a" * 152})

        assert preference.fcm_token == "a" * 152
        assert preference.fcm_token_updated_at is not None

    def test_clear_token_only_clears_matching_token(self):
        preference = PreferenceFactory()

        assert PreferenceRepository.clear_token(preference.user_id, "other-token") is False
        assert PreferenceRepository.clear_token(preference.user_id, preference.fcm_token) is True
        assert UserNotificationPreference.objects.get(pk=preference.pk).fcm_token is None
