"""Pytest configuration and shared fixtures."""

import os
from unittest.mock import Mock

import django
from django.test import Client

import pytest

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "spoon_service.settings_test")
django.setup()

from notifications.auth.oauth2 import OAuth2User  # noqa: E402
from notifications.constants import ADMIN_SCOPE, DEFAULT_TEMPLATES, USER_SCOPE  # noqa: E402
from notifications.repositories import TemplateRepository  # noqa: E402
from notifications.services.delivery_dispatcher import DeliveryDispatcher  # noqa: E402
from notifications.services.notification_service import NotificationService  # noqa: E402
from notifications.services.push_provider import PushResult  # noqa: E402


@pytest.fixture
def api_client():
    """Provide Django test client."""
    return Client()


@pytest.fixture
def seeded_templates(db):
    """Load the default template catalogue."""
    TemplateRepository.upsert_many(DEFAULT_TEMPLATES)


@pytest.fixture
def push_provider():
    """Push provider double that accepts every message."""
    provider = Mock()
    provider.send.return_value = PushResult(success=True, message_id="projects/x/messages/1")
    return provider


@pytest.fixture
def service(push_provider):
    """NotificationService delivering through the fake provider."""
    return NotificationService(dispatcher=DeliveryDispatcher(provider=push_provider))


def make_user(user_id=1, scopes=(USER_SCOPE,)):
    return OAuth2User(user_id=user_id, client_id="test-client", scopes=list(scopes))


def make_admin():
    return OAuth2User(user_id=None, client_id="telemetry-service", scopes=[ADMIN_SCOPE])
