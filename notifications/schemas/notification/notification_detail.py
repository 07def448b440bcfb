"""Schema for a ledger row as returned to clients."""

from datetime import datetime
from typing import Any

from pydantic import Field

from notifications.schemas.base_schema_model import BaseSchemaModel


class NotificationDetail(BaseSchemaModel):
    """A single notification from the user's history."""

    id: int = Field(..., description="Notification identifier")
    type: str = Field(..., description="Template type, e.g. daily_goal_reached")
    priority: str = Field(..., description="LOW, MEDIUM, HIGH or CRITICAL")
    title: str = Field(..., description="Rendered title")
    body: str = Field(..., description="Rendered body")
    action_type: str | None = Field(None, description="Client action to perform")
    action_data: dict[str, Any] | None = Field(
        None, description="Parameters for the client action"
    )
    delivery_method: str = Field(..., description="Delivery channel")
    delivery_status: str = Field(
        ..., description="pending, sent, delivered or failed"
    )
    error_message: str | None = Field(None, description="Delivery error, if any")
    scheduled_for: datetime | None = Field(
        None, description="Earliest delivery time for deferred notifications"
    )
    sent_at: datetime | None = Field(None, description="Delivery attempt time")
    delivered_at: datetime | None = Field(None, description="Device receipt time")
    opened_at: datetime | None = Field(None, description="First open time")
    action_taken_at: datetime | None = Field(None, description="First action time")
    created_at: datetime = Field(..., description="Creation time")
