"""Liveness and readiness response schemas."""

from pydantic import BaseModel, Field

from notifications.schemas.health.dependency_health import DependencyHealth


class LivenessResponse(BaseModel):
    status: str = Field(..., description="Liveness status")


class ReadinessResponse(BaseModel):
    """Readiness of the service and each of its dependencies.

    The push provider being unconfigured degrades the service but does not
    make it unready.
    """

    ready: bool = Field(..., description="Service is ready to serve requests")
    status: str = Field(..., description="'ready', 'degraded' or 'not ready'")
    degraded: bool = Field(..., description="Running with a dependency down")
    dependencies: dict[str, DependencyHealth] = Field(
        ..., description="Status of each dependency"
    )
