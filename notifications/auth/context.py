"""Thread-local holder for the authenticated caller of the current request."""

import threading
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from notifications.auth.oauth2 import OAuth2User

_security_context = threading.local()


def set_current_user(user: "OAuth2User") -> None:
    _security_context.user = user


def get_current_user() -> "OAuth2User | None":
    return getattr(_security_context, "user", None)


def clear_current_user() -> None:
    """Drop the caller so it cannot leak into the next request on this thread."""
    if hasattr(_security_context, "user"):
        delattr(_security_context, "user")
