"""Unit tests for ProcessTimeMiddleware."""

import unittest
from unittest.mock import patch

from django.http import HttpRequest, HttpResponse

from notifications.constants import PROCESS_TIME_HEADER
from notifications.middleware.process_time import ProcessTimeMiddleware


class TestProcessTimeMiddleware(unittest.TestCase):
    def _request(self):
        request = HttpRequest()
        request.method = "POST"
        request.path = "/api/v1/notification/push-token"
        return request

    def test_adds_header(self):
        middleware = ProcessTimeMiddleware(lambda _r: HttpResponse("OK"))

        response = middleware(self._request())

        self.assertGreaterEqual(float(response[PROCESS_TIME_HEADER]), 0.0)

    @patch("notifications.middleware.process_time.logger")
    @patch("notifications.middleware.process_time.time.perf_counter", side_effect=[0.0, 2.5])
    def test_logs_slow_requests(self, _clock, mock_logger):
        middleware = ProcessTimeMiddleware(lambda _r: HttpResponse("OK"))

        response = middleware(self._request())

        self.assertEqual(response[PROCESS_TIME_HEADER], "2.500000")
        mock_logger.warning.assert_called_once()
        self.assertEqual(mock_logger.warning.call_args.args[0], "slow_request")
