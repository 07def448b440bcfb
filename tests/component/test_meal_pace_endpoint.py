"""Component tests for the meal-pace event endpoint."""

from notifications.constants import ADMIN_SCOPE, DEFAULT_TEMPLATES
from notifications.models import NotificationHistory
from notifications.repositories import TemplateRepository
from tests.base import BaseComponentTest
from tests.factories import PreferenceFactory


class TestMealPaceEndpoint(BaseComponentTest):
    def setUp(self):
        super().setUp()
        TemplateRepository.upsert_many(DEFAULT_TEMPLATES)
        self.preference = PreferenceFactory()
        self.url = f"{self.base_url}/events/meal-pace"
        self.authenticate_as(None, scopes=[ADMIN_SCOPE])

    def _post(self, body):
        return self.client.post(self.url, data=body, content_type="application/json")

    def test_fast_meal_triggers_alert(self):
        response = self._post(
            {"userId": self.preference.user_id, "avgPaceBpm": 19.4, "mealId": 3}
        )

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertTrue(data["triggered"])
        instance = NotificationHistory.objects.get(pk=data["notification_id"])
        self.assertEqual(instance.type, "fast_eating_alert")

    def test_normal_meal_does_not_trigger(self):
        response = self._post({"user_id": self.preference.user_id, "avg_pace_bpm": 11})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"triggered": False, "notification_id": None})
        self.assertEqual(NotificationHistory.objects.count(), 0)

    def test_requires_admin_scope(self):
        self.authenticate_as(self.preference.user_id)

        response = self._post({"user_id": self.preference.user_id, "avg_pace_bpm": 30})

        self.assertEqual(response.status_code, 403)
