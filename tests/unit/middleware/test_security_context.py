"""Unit tests for SecurityContextMiddleware."""

import unittest

from django.http import HttpRequest, HttpResponse

from notifications.auth.context import get_current_user, set_current_user
from notifications.auth.oauth2 import OAuth2User
from notifications.middleware.security_context import SecurityContextMiddleware


class TestSecurityContextMiddleware(unittest.TestCase):
    def test_user_set_during_request_is_cleared(self):
        user = OAuth2User(user_id=5, client_id="app", scopes=[])
        seen = []

        def get_response(_request):
            set_current_user(user)
            seen.append(get_current_user())
            return HttpResponse("OK")

        SecurityContextMiddleware(get_response)(HttpRequest())

        self.assertEqual(seen, [user])
        self.assertIsNone(get_current_user())

    def test_stale_user_cleared_before_request(self):
        set_current_user(OAuth2User(user_id=9, client_id="app", scopes=[]))
        seen = []

        def get_response(_request):
            seen.append(get_current_user())
            return HttpResponse("OK")

        SecurityContextMiddleware(get_response)(HttpRequest())

        self.assertEqual(seen, [None])
