"""Tests for TemplateRepository."""

import pytest

from notifications.constants import DEFAULT_TEMPLATES
from notifications.models import NotificationTemplate
from notifications.repositories import TemplateRepository
from tests.factories import NotificationTemplateFactory


@pytest.mark.django_db
class TestTemplateRepository:
    def test_get_by_type_ignores_inactive(self):
        NotificationTemplateFactory(type="retired", is_active=False)
        active = NotificationTemplateFactory(type="current")

        assert TemplateRepository.get_by_type("retired") is None
        assert TemplateRepository.get_by_type("current") == active
        assert TemplateRepository.get_by_type("missing") is None

    def test_list_active_orders_by_category_then_type(self):
        NotificationTemplateFactory(type="b_system", category="system")
        NotificationTemplateFactory(type="a_system", category="system")
        NotificationTemplateFactory(type="z_health", category="health")
        NotificationTemplateFactory(type="off", category="health", is_active=False)

        types = [t.type for t in TemplateRepository.list_active()]

        assert types == ["z_health", "a_system", "b_system"]

    def test_upsert_many_creates_then_updates(self):
        created, updated = TemplateRepository.upsert_many(DEFAULT_TEMPLATES)
        assert (created, updated) == (len(DEFAULT_TEMPLATES), 0)

        changed = [dict(DEFAULT_TEMPLATES[0], title_template="New title")]
        created, updated = TemplateRepository.upsert_many(changed)

        assert (created, updated) == (0, 1)
        template = NotificationTemplate.objects.get(type=DEFAULT_TEMPLATES[0]["type"])
        assert template.title_template == "New title"
        assert NotificationTemplate.objects.count() == len(DEFAULT_TEMPLATES)
