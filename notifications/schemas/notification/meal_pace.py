"""Schemas for the meal-pace event endpoint."""

from datetime import datetime

from pydantic import Field

from notifications.schemas.base_schema_model import BaseSchemaModel


class MealPaceEvent(BaseSchemaModel):
    """A finished meal reported by the telemetry pipeline."""

    user_id: int = Field(..., gt=0)
    avg_pace_bpm: float = Field(..., ge=0, description="Average bites per minute")
    meal_id: int | None = Field(None)
    ended_at: datetime | None = Field(None)


class MealPaceEventResponse(BaseSchemaModel):
    triggered: bool = Field(..., description="Whether an alert was scheduled")
    notification_id: int | None = Field(None)
