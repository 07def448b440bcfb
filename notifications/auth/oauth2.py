"""OAuth2 bearer authentication for Django REST Framework.

Tokens are validated either by the auth service's introspection endpoint or
locally as HS-signed JWTs, depending on ``OAUTH2_INTROSPECTION_ENABLED``.
"""

from typing import Any, cast

from django.conf import settings
from django.core.cache import cache

import jwt
import requests
import structlog
from rest_framework import authentication, exceptions

from notifications.auth.context import set_current_user
from notifications.constants import ADMIN_SCOPE

logger = structlog.get_logger(__name__)


def _parse_scopes(raw: Any) -> list[str]:
    # Introspection returns a space-separated "scope"; our JWTs carry a list.
    if isinstance(raw, str):
        return raw.split()
    return list(raw or [])


def _parse_user_id(subject: Any) -> int | None:
    try:
        return int(subject)
    except (TypeError, ValueError):
        return None


class OAuth2User:
    """Caller identity built from token claims. Not a database user."""

    def __init__(self, user_id: int | None, client_id: str, scopes: list[str]):
        """Initialize OAuth2 user.

        Args:
            user_id: App user id from ``sub``; None for client-credential tokens
            client_id: OAuth2 client ID
            scopes: Granted scopes
        """
        self.id = user_id
        self.user_id = user_id
        self.client_id = client_id
        self.scopes = scopes
        self.is_authenticated = True

    def has_scope(self, scope: str) -> bool:
        return scope in self.scopes

    def has_any_scope(self, *scopes: str) -> bool:
        return any(scope in self.scopes for scope in scopes)

    @property
    def is_admin(self) -> bool:
        return self.has_scope(ADMIN_SCOPE)

    def __str__(self):
        """String representation."""
        return f"OAuth2User(user_id={self.user_id}, client_id={self.client_id})"


class OAuth2Authentication(authentication.BaseAuthentication):
    """Bearer token authentication via introspection or local JWT checks."""

    def authenticate(self, request):
        """Authenticate the request from its ``Authorization`` header.

        Returns:
            ``(user, token)``, or None when no bearer token was sent

        Raises:
            AuthenticationFailed: If the token is malformed or invalid
        """
        if not settings.OAUTH2_SERVICE_ENABLED:
            return None

        auth_header = request.headers.get("authorization")
        if not auth_header:
            return None

        parts = auth_header.split()
        if len(parts) != 2 or parts[0].lower() != "bearer":
            raise exceptions.AuthenticationFailed("Invalid authorization header format")

        token = parts[1]
        if settings.OAUTH2_INTROSPECTION_ENABLED:
            claims = self._introspect(token)
        else:
            claims = self._decode_jwt(token)

        user = OAuth2User(
            user_id=_parse_user_id(claims.get("user_id") or claims.get("sub")),
            client_id=claims.get("client_id") or "unknown",
            scopes=_parse_scopes(claims.get("scopes", claims.get("scope"))),
        )

        set_current_user(user)
        return (user, token)

    def _introspect(self, token: str) -> dict[str, Any]:
        """Validate a token with the auth service, caching active results."""
        cache_key = f"{settings.OAUTH2_TOKEN_CACHE_PREFIX}{token[:16]}"
        cached = cache.get(cache_key)
        if cached:
            return cast("dict[str, Any]", cached)

        try:
            response = requests.post(
                settings.OAUTH2_INTROSPECT_URL,
                data={"token": token, "token_type_hint": "access_token"},
                auth=(settings.OAUTH2_CLIENT_ID, settings.OAUTH2_CLIENT_SECRET),
                timeout=5,
            )
        except requests.RequestException as e:
            logger.error("token_introspection_unavailable", error=str(e))
            raise exceptions.AuthenticationFailed(
                "Token validation service unavailable"
            ) from e

        if response.status_code != 200:
            logger.warning("token_introspection_failed", status_code=response.status_code)
            raise exceptions.AuthenticationFailed("Token introspection failed")

        data = response.json()
        if not data.get("active", False):
            raise exceptions.AuthenticationFailed("Token is not active")

        cache.set(cache_key, data, timeout=settings.OAUTH2_TOKEN_CACHE_TTL)
        return cast("dict[str, Any]", data)

    def _decode_jwt(self, token: str) -> dict[str, Any]:
        """Verify a JWT access token with the shared secret."""
        if not settings.JWT_SECRET:
            logger.error("jwt_secret_missing")
            raise exceptions.AuthenticationFailed("JWT validation not configured")

        try:
            payload = jwt.decode(
                token,
                settings.JWT_SECRET,
                algorithms=["HS256", "HS384", "HS512"],
            )
        except jwt.ExpiredSignatureError as e:
            raise exceptions.AuthenticationFailed("Token has expired") from e
        except jwt.InvalidTokenError as e:
            logger.warning("jwt_invalid", error=str(e))
            raise exceptions.AuthenticationFailed("Invalid token") from e

        token_type = payload.get("type", "access_token")
        if token_type != "access_token":
            raise exceptions.AuthenticationFailed(f"Invalid token type: {token_type}")
        return payload

    def authenticate_header(self, _request):
        return "Bearer"
