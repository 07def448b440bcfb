"""Schemas for listing active notification templates."""

from typing import Any

from pydantic import Field

from notifications.schemas.base_schema_model import BaseSchemaModel


class TemplateInfo(BaseSchemaModel):
    type: str = Field(..., description="Template type key")
    category: str = Field(..., description="health, achievement, engagement or system")
    priority: str = Field(..., description="Default priority")
    title_template: str = Field(..., description="Title with {{placeholders}}")
    body_template: str = Field(..., description="Body with {{placeholders}}")
    action_type: str | None = Field(None)
    action_data: dict[str, Any] | None = Field(None)
    max_per_day: int | None = Field(None, description="Per-type daily cap")


class TemplateListResponse(BaseSchemaModel):
    """Active templates grouped by category."""

    categories: dict[str, list[TemplateInfo]] = Field(...)
    total: int = Field(..., ge=0)
