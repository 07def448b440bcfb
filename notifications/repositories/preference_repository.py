"""Repository for per-user notification preferences."""

from typing import Any

from django.utils import timezone

from notifications.models import UserNotificationPreference


class PreferenceRepository:
    """Upsert-style access to ``user_notification_preferences``."""

    @staticmethod
    def get(user_id: int) -> UserNotificationPreference | None:
        """Return the user's preferences, or None if never written."""
        return UserNotificationPreference.objects.filter(user_id=user_id).first()

    @staticmethod
    def get_or_create_default(user_id: int) -> UserNotificationPreference:
        """Return the user's preferences, creating a default row if needed."""
        preference, _ = UserNotificationPreference.objects.get_or_create(
            user_id=user_id
        )
        return preference

    @staticmethod
    def upsert(user_id: int, fields: dict[str, Any]) -> UserNotificationPreference:
        """Apply a partial update, creating the row with defaults first.

        ``None`` values are ignored, so callers can pass sparse payloads.
        Setting ``fcm_token`` also stamps ``fcm_token_updated_at``.

        Args:
            user_id: Owner of the preferences
            fields: Column values to change

        Returns:
            The saved preferences
        """
        changes = {k: v for k, v in fields.items() if v is not None}
        if "fcm_token" in changes:
            changes["fcm_token_updated_at"] = timezone.now()

        preference, created = UserNotificationPreference.objects.get_or_create(
            user_id=user_id, defaults=changes
        )
        if not created and changes:
            for name, value in changes.items():
                setattr(preference, name, value)
            preference.save(update_fields=[*changes, "updated_at"])
        return preference

    @staticmethod
    def clear_token(user_id: int, token: str | None = None) -> bool:
        """Remove the stored push token.

        When ``token`` is given, only that exact token is cleared, so a token
        the device re-registered in the meantime survives.

        Returns:
            True if a row was updated
        """
        queryset = UserNotificationPreference.objects.filter(
            user_id=user_id, fcm_token__isnull=False
        )
        if token is not None:
            queryset = queryset.filter(fcm_token=token)
        return (
            queryset.update(
                fcm_token=None,
                fcm_token_updated_at=timezone.now(),
                updated_at=timezone.now(),
            )
            > 0
        )
