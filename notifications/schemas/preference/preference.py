"""Schemas for reading and updating notification preferences."""

from datetime import datetime, time

from pydantic import Field, field_validator

from notifications.schemas.base_schema_model import BaseSchemaModel


class PreferenceResponse(BaseSchemaModel):
    """The caller's preferences. The push token itself is never returned."""

    enabled: bool
    quiet_hours_start: time
    quiet_hours_end: time
    health_alerts_enabled: bool
    achievement_enabled: bool
    engagement_enabled: bool
    system_alerts_enabled: bool
    max_daily_notifications: int
    weekly_digest_enabled: bool
    weekly_digest_day: int
    weekly_digest_time: time
    has_push_token: bool = False
    fcm_token_updated_at: datetime | None = None


class PreferenceUpdateRequest(BaseSchemaModel):
    """Partial update; omitted fields keep their current value."""

    enabled: bool | None = None
    quiet_hours_start: time | None = None
    quiet_hours_end: time | None = None
    health_alerts_enabled: bool | None = None
    achievement_enabled: bool | None = None
    engagement_enabled: bool | None = None
    system_alerts_enabled: bool | None = None
    max_daily_notifications: int | None = Field(None, ge=1, le=100)
    weekly_digest_enabled: bool | None = None
    weekly_digest_day: int | None = Field(None, ge=0, le=6, description="0 = Sunday")
    weekly_digest_time: time | None = None


class PushTokenRequest(BaseSchemaModel):
    token: str = Field(..., min_length=1, max_length=512)
    platform: str | None = Field(None, description="ios or android")

    @field_validator("platform")
    @classmethod
    def validate_platform(cls, value: str | None) -> str | None:
        if value is not None and value.lower() not in ("ios", "android"):
            raise ValueError("platform must be 'ios' or 'android'")
        return value.lower() if value else value
