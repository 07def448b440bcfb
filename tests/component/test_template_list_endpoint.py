"""Component tests for the template list endpoint."""

from notifications.constants import DEFAULT_TEMPLATES
from notifications.repositories import TemplateRepository
from tests.base import BaseComponentTest
from tests.factories import NotificationTemplateFactory


class TestTemplateListEndpoint(BaseComponentTest):
    def setUp(self):
        super().setUp()
        TemplateRepository.upsert_many(DEFAULT_TEMPLATES)
        self.url = f"{self.base_url}/templates"

    def test_groups_active_templates_by_category(self):
        NotificationTemplateFactory(type="old_promo", category="engagement", is_active=False)
        self.authenticate_as(1)

        response = self.client.get(self.url)

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data["total"], len(DEFAULT_TEMPLATES))
        self.assertEqual(
            set(data["categories"]), {"health", "achievement", "engagement", "system"}
        )
        health_types = {t["type"] for t in data["categories"]["health"]}
        self.assertIn("fast_eating_alert", health_types)
        engagement_types = {t["type"] for t in data["categories"]["engagement"]}
        self.assertNotIn("old_promo", engagement_types)

    def test_admin_scope_allowed(self):
        self.authenticate_as(None, scopes=["notification:admin"])

        self.assertEqual(self.client.get(self.url).status_code, 200)

    def test_missing_scope_returns_403(self):
        self.authenticate_as(1, scopes=["some:other:scope"])

        response = self.client.get(self.url)

        self.assertEqual(response.status_code, 403)
        self.assertIn("notification:user", response.json()["detail"])
