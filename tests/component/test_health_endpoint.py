"""Component tests for the health endpoints."""

from unittest.mock import patch

from django.test import Client, TestCase

from notifications.schemas import DependencyHealth


class TestHealthEndpoints(TestCase):
    def setUp(self):
        self.client = Client()

    def test_liveness_needs_no_auth(self):
        response = self.client.get("/api/v1/notification/health/live")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"status": "alive"})

    def test_readiness_reports_dependencies(self):
        response = self.client.get("/api/v1/notification/health/ready")

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertTrue(data["ready"])
        # No Firebase credentials in tests.
        self.assertTrue(data["degraded"])
        self.assertEqual(data["dependencies"]["push_provider"]["status"], "disabled")

    @patch("notifications.views.health_service.check_database_health")
    def test_readiness_503_when_database_down(self, mock_db):
        mock_db.return_value = DependencyHealth(
            healthy=False, status="unhealthy", message="down"
        )

        response = self.client.get("/api/v1/notification/health/ready")

        self.assertEqual(response.status_code, 503)
        self.assertFalse(response.json()["ready"])
