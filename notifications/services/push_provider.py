"""Firebase Cloud Messaging push provider.

The Firebase Admin SDK is initialised lazily on the first send. Without
credentials the provider stays uninitialised and every send returns a failed
result, so the service can still start.
"""

import json
import threading
from dataclasses import dataclass, field
from typing import Any

from django.conf import settings

import firebase_admin
import structlog
from firebase_admin import credentials, exceptions, messaging

logger = structlog.get_logger(__name__)

NOT_INITIALIZED_ERROR = "Push provider not initialized"
MIN_TOKEN_LENGTH = 100


@dataclass
class PushPayload:
    """Platform-neutral push message."""

    title: str
    body: str
    data: dict[str, str] = field(default_factory=dict)
    android_priority: str = "normal"
    android_channel_id: str = "default"
    sound: str | None = None
    apns_priority: str = "5"
    badge: int = 1


@dataclass
class PushResult:
    """Outcome of a single send."""

    success: bool
    message_id: str | None = None
    error: str | None = None
    invalid_token: bool = False


def is_invalid_token_error(error: Exception) -> bool:
    """Return True if the error means the registration token is unusable."""
    if isinstance(error, (messaging.UnregisteredError, messaging.SenderIdMismatchError)):
        return True
    if isinstance(error, exceptions.InvalidArgumentError):
        return "registration token" in str(error).lower()
    return False


class FCMPushProvider:
    """Sends push notifications through FCM."""

    def __init__(self, credentials_value: str | None = None) -> None:
        self._credentials_value = credentials_value
        self._app: firebase_admin.App | None = None
        self._initialized = False
        self._lock = threading.Lock()

    @property
    def credentials_value(self) -> str:
        if self._credentials_value is not None:
            return self._credentials_value
        return getattr(settings, "FIREBASE_CREDENTIALS", "") or ""

    def initialize(self) -> bool:
        """Initialise the Firebase app once. Returns True when ready."""
        if self._initialized:
            return self._app is not None
        with self._lock:
            if self._initialized:
                return self._app is not None
            self._initialized = True

            raw = self.credentials_value.strip()
            if not raw:
                logger.warning("push_provider_not_configured")
                return False

            try:
                if raw.startswith("{"):
                    certificate = credentials.Certificate(json.loads(raw))
                else:
                    certificate = credentials.Certificate(raw)
                try:
                    self._app = firebase_admin.get_app()
                except ValueError:
                    self._app = firebase_admin.initialize_app(certificate)
            except (ValueError, OSError) as e:
                logger.error("push_provider_init_failed", error=str(e))
                self._app = None
                return False

            logger.info("push_provider_initialized")
            return True

    @property
    def is_initialized(self) -> bool:
        return self._app is not None

    @staticmethod
    def is_valid_token(token: str | None) -> bool:
        """Sanity-check an FCM registration token before storing it."""
        return bool(token) and len(token) > MIN_TOKEN_LENGTH

    def build_message(self, token: str, payload: PushPayload) -> messaging.Message:
        """Translate a payload into an FCM message with platform overrides."""
        return messaging.Message(
            token=token,
            notification=messaging.Notification(title=payload.title, body=payload.body),
            data=payload.data,
            android=messaging.AndroidConfig(
                priority=payload.android_priority,
                notification=messaging.AndroidNotification(
                    channel_id=payload.android_channel_id,
                    sound=payload.sound,
                ),
            ),
            apns=messaging.APNSConfig(
                headers={"apns-priority": payload.apns_priority},
                payload=messaging.APNSPayload(
                    aps=messaging.Aps(
                        sound=payload.sound,
                        badge=payload.badge,
                        content_available=True,
                    )
                ),
            ),
        )

    def send(self, token: str, payload: PushPayload) -> PushResult:
        """Send one push message.

        Args:
            token: Device registration token
            payload: Message content

        Returns:
            PushResult; ``invalid_token`` is set when the token should be
            discarded
        """
        if not self.initialize():
            return PushResult(success=False, error=NOT_INITIALIZED_ERROR)

        try:
            message_id = messaging.send(self.build_message(token, payload), app=self._app)
        except exceptions.FirebaseError as e:
            invalid = is_invalid_token_error(e)
            logger.warning(
                "push_send_failed",
                error=str(e),
                error_type=type(e).__name__,
                invalid_token=invalid,
            )
            return PushResult(success=False, error=str(e), invalid_token=invalid)
        except ValueError as e:
            logger.warning("push_message_rejected", error=str(e))
            return PushResult(success=False, error=str(e))

        logger.debug("push_sent", message_id=message_id)
        return PushResult(success=True, message_id=message_id)

    def health_details(self) -> dict[str, Any]:
        return {"configured": bool(self.credentials_value.strip()), "initialized": self.is_initialized}
