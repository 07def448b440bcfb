"""Health checks for the database, cache and push provider."""

import time
from collections.abc import Callable

from django.core.cache import cache
from django.db import connection
from django.db.utils import OperationalError

import structlog

from notifications.enums import HealthStatus
from notifications.schemas.health import (
    DependencyHealth,
    LivenessResponse,
    ReadinessResponse,
)
from notifications.services.push_provider import FCMPushProvider

logger = structlog.get_logger(__name__)


class HealthService:
    """Dependency checks with short-lived result caching."""

    def __init__(
        self,
        cache_ttl_seconds: float = 5.0,
        provider: FCMPushProvider | None = None,
    ) -> None:
        """Initialize the health service.

        Args:
            cache_ttl_seconds: How long a check result is reused
            provider: Push provider to report on; defaults to the one used by
                ``notification_service``
        """
        self.cache_ttl_seconds = cache_ttl_seconds
        self._provider = provider
        self._results: dict[str, tuple[float, DependencyHealth]] = {}

    @property
    def provider(self) -> FCMPushProvider:
        if self._provider is None:
            from notifications.services.notification_service import (
                notification_service,
            )

            self._provider = notification_service.dispatcher.provider
        return self._provider

    def get_liveness_status(self) -> LivenessResponse:
        return LivenessResponse(status="alive")

    def get_readiness_status(self) -> ReadinessResponse:
        """Combine dependency checks into a readiness verdict.

        The database is required. A failing cache or an unconfigured push
        provider only marks the service degraded.
        """
        dependencies = {
            "database": self.check_database_health(),
            "cache": self.check_cache_health(),
            "push_provider": self.check_push_provider_health(),
        }

        if not dependencies["database"].healthy:
            return ReadinessResponse(
                ready=False,
                status="not ready",
                degraded=True,
                dependencies=dependencies,
            )

        degraded = not all(d.healthy for d in dependencies.values())
        return ReadinessResponse(
            ready=True,
            status="degraded" if degraded else "ready",
            degraded=degraded,
            dependencies=dependencies,
        )

    def _cached(self, name: str, check: Callable[[], DependencyHealth]) -> DependencyHealth:
        now = time.time()
        cached = self._results.get(name)
        if cached is not None and (now - cached[0]) < self.cache_ttl_seconds:
            return cached[1]
        result = check()
        self._results[name] = (now, result)
        return result

    def check_database_health(self) -> DependencyHealth:
        return self._cached("database", self._check_database)

    def check_cache_health(self) -> DependencyHealth:
        return self._cached("cache", self._check_cache)

    def check_push_provider_health(self) -> DependencyHealth:
        return self._cached("push_provider", self._check_push_provider)

    def _check_database(self) -> DependencyHealth:
        start_time = time.perf_counter()
        try:
            connection.ensure_connection()
        except OperationalError as e:
            logger.warning("database_health_check_failed", error=str(e))
            return DependencyHealth(
                healthy=False,
                status=HealthStatus.UNHEALTHY,
                message=f"Database connection failed: {e!s}",
                response_time_ms=(time.perf_counter() - start_time) * 1000,
            )
        return DependencyHealth(
            healthy=True,
            status=HealthStatus.HEALTHY,
            message="Database connection successful",
            response_time_ms=(time.perf_counter() - start_time) * 1000,
        )

    def _check_cache(self) -> DependencyHealth:
        start_time = time.perf_counter()
        try:
            cache.set("__health_check__", "ok", timeout=1)
            ok = cache.get("__health_check__") == "ok"
        except Exception as e:
            logger.warning("cache_health_check_failed", error=str(e))
            return DependencyHealth(
                healthy=False,
                status=HealthStatus.ERROR,
                message=f"Cache connection failed: {e!s}",
                response_time_ms=(time.perf_counter() - start_time) * 1000,
            )
        return DependencyHealth(
            healthy=ok,
            status=HealthStatus.HEALTHY if ok else HealthStatus.UNHEALTHY,
            message="Cache connection successful"
            if ok
            else "Cache health check failed: unexpected result",
            response_time_ms=(time.perf_counter() - start_time) * 1000,
        )

    def _check_push_provider(self) -> DependencyHealth:
        details = self.provider.health_details()
        if not details["configured"]:
            return DependencyHealth(
                healthy=False,
                status=HealthStatus.DISABLED,
                message="Push provider credentials not configured",
                details=details,
            )
        if self.provider.initialize():
            return DependencyHealth(
                healthy=True,
                status=HealthStatus.HEALTHY,
                message="Push provider initialized",
                details=self.provider.health_details(),
            )
        return DependencyHealth(
            healthy=False,
            status=HealthStatus.ERROR,
            message="Push provider failed to initialize",
            details=details,
        )


health_service = HealthService()
