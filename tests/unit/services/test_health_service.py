"""Tests for HealthService."""

from unittest.mock import Mock, patch

from django.db.utils import OperationalError

import pytest

from notifications.enums import HealthStatus
from notifications.services.health_service import HealthService


@pytest.fixture
def provider():
    provider = Mock()
    provider.health_details.return_value = {"configured": True, "initialized": True}
    provider.initialize.return_value = True
    return provider


@pytest.mark.django_db
class TestHealthService:
    def test_liveness(self, provider):
        assert HealthService(provider=provider).get_liveness_status().status == "alive"

    def test_ready_when_all_dependencies_healthy(self, provider):
        readiness = HealthService(provider=provider).get_readiness_status()

        assert readiness.ready is True
        assert readiness.status == "ready"
        assert set(readiness.dependencies) == {"database", "cache", "push_provider"}

    def test_unconfigured_push_provider_degrades(self, provider):
        provider.health_details.return_value = {"configured": False, "initialized": False}

        readiness = HealthService(provider=provider).get_readiness_status()

        assert readiness.ready is True
        assert readiness.degraded is True
        assert readiness.dependencies["push_provider"].status == HealthStatus.DISABLED.value

    def test_database_down_is_not_ready(self, provider):
        with patch(
            "notifications.services.health_service.connection.ensure_connection",
            side_effect=OperationalError("refused"),
        ):
            readiness = HealthService(provider=provider).get_readiness_status()

        assert readiness.ready is False
        assert readiness.status == "not ready"
        assert readiness.dependencies["database"].healthy is False

    def test_results_are_cached(self, provider):
        service = HealthService(cache_ttl_seconds=60, provider=provider)

        service.check_push_provider_health()
        service.check_push_provider_health()

        provider.initialize.assert_called_once()
