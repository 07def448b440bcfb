"""Request/response schemas for the internal schedule endpoint."""

from datetime import datetime
from typing import Any

from pydantic import ConfigDict, Field

from notifications.schemas.base_schema_model import BaseSchemaModel
from notifications.schemas.notification.notification_detail import NotificationDetail


class ScheduleNotificationRequest(BaseSchemaModel):
    """Ask the service to schedule a templated notification for a user.

    Attributes:
        user_id: Recipient.
        notification_type: Template type.
        data: Placeholder values, merged over the template's action data.
        trigger_source: Provenance stored on the ledger row.
        scheduled_for: Deliver no earlier than this time.
        wait: Run synchronously and return the result instead of queueing.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "userId": 42,
                "notificationType": "low_battery",
                "data": {"level": 12},
                "wait": True,
            }
        }
    )

    user_id: int = Field(..., gt=0, description="Recipient user id")
    notification_type: str = Field(..., min_length=1, max_length=50)
    data: dict[str, Any] = Field(default_factory=dict)
    trigger_source: dict[str, Any] | None = Field(None)
    scheduled_for: datetime | None = Field(None)
    wait: bool = Field(False)


class ScheduleNotificationResponse(BaseSchemaModel):
    scheduled: bool = Field(..., description="Whether a ledger row was created")
    notification: NotificationDetail | None = Field(None)
    job_id: str | None = Field(None, description="RQ job id when queued")
