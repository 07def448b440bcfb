"""Preference reads and updates for the authenticated user."""

import structlog

from notifications.exceptions import InvalidPushTokenError
from notifications.models import UserNotificationPreference
from notifications.repositories import PreferenceRepository
from notifications.schemas import PreferenceUpdateRequest
from notifications.services.push_provider import FCMPushProvider

logger = structlog.get_logger(__name__)


class PreferenceService:
    """Thin layer over ``PreferenceRepository`` used by the API views."""

    def get_preferences(self, user_id: int) -> UserNotificationPreference:
        """Return the user's preferences, creating defaults on first access."""
        return PreferenceRepository.get_or_create_default(user_id)

    def update_preferences(
        self, user_id: int, update: PreferenceUpdateRequest
    ) -> UserNotificationPreference:
        """Apply the fields present in ``update``."""
        changes = update.model_dump(exclude_none=True)
        preference = PreferenceRepository.upsert(user_id, changes)
        logger.info("preferences_updated", user_id=user_id, fields=sorted(changes))
        return preference

    def register_push_token(
        self, user_id: int, token: str, platform: str | None = None
    ) -> UserNotificationPreference:
        """Store the device's push token.

        Raises:
            InvalidPushTokenError: If the token is implausibly short
        """
        if not FCMPushProvider.is_valid_token(token):
            raise InvalidPushTokenError()
        preference = PreferenceRepository.upsert(user_id, {"fcm_token": token})
        logger.info("push_token_registered", user_id=user_id, platform=platform)
        return preference


preference_service = PreferenceService()
