"""Data-access layer wrapping the notification and telemetry tables."""

from notifications.repositories.activity_repository import ActivityRepository
from notifications.repositories.ledger_repository import LedgerRepository
from notifications.repositories.preference_repository import PreferenceRepository
from notifications.repositories.template_repository import TemplateRepository
from notifications.repositories.throttle_repository import ThrottleRepository

__all__ = [
    "ActivityRepository",
    "LedgerRepository",
    "PreferenceRepository",
    "TemplateRepository",
    "ThrottleRepository",
]
