"""Preference schemas."""

from notifications.schemas.preference.preference import (
    PreferenceResponse,
    PreferenceUpdateRequest,
    PushTokenRequest,
)

__all__ = ["PreferenceResponse", "PreferenceUpdateRequest", "PushTokenRequest"]
