"""Clears the per-request caller identity."""

from collections.abc import Callable

from django.http import HttpRequest, HttpResponse

from notifications.auth.context import clear_current_user


class SecurityContextMiddleware:
    """Scope the authenticated caller to a single request.

    ``OAuth2Authentication`` stores the caller when DRF authenticates the
    view; this middleware guarantees it is removed afterwards.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        clear_current_user()
        try:
            return self.get_response(request)
        finally:
            clear_current_user()
