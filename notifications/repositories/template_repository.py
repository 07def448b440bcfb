"""Repository for notification templates."""

from typing import Any

from django.db.models import QuerySet

from notifications.models import NotificationTemplate


class TemplateRepository:
    """Lookups over ``notification_templates``. Only active rows are served."""

    @staticmethod
    def get_by_type(notification_type: str) -> NotificationTemplate | None:
        """Return the active template for a type, or None.

        Args:
            notification_type: Template type key, e.g. ``daily_goal_reached``

        Returns:
            The template, or None if it is missing or inactive
        """
        return NotificationTemplate.objects.filter(
            type=notification_type, is_active=True
        ).first()

    @staticmethod
    def list_active() -> QuerySet[NotificationTemplate]:
        """Return all active templates ordered by category then type."""
        return NotificationTemplate.objects.filter(is_active=True).order_by(
            "category", "type"
        )

    @staticmethod
    def upsert_many(templates: list[dict[str, Any]]) -> tuple[int, int]:
        """Create or update templates keyed by ``type``.

        Args:
            templates: Template definitions (see ``DEFAULT_TEMPLATES``)

        Returns:
            Tuple of (created_count, updated_count)
        """
        created_count = 0
        updated_count = 0
        for definition in templates:
            fields = {k: v for k, v in definition.items() if k != "type"}
            _, created = NotificationTemplate.objects.update_or_create(
                type=definition["type"], defaults=fields
            )
            if created:
                created_count += 1
            else:
                updated_count += 1
        return created_count, updated_count
