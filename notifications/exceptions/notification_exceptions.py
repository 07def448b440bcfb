"""Exceptions raised by the notification core."""


class NotificationError(Exception):
    """Base exception for notification scheduling and delivery errors."""

    def __init__(self, message: str, detail: str | None = None):
        """Initialize notification error.

        Args:
            message: Error message
            detail: Additional detail for logs or API responses
        """
        self.detail = detail
        super().__init__(message)


class TemplateNotFoundError(NotificationError):
    """No active template exists for a notification type."""

    def __init__(self, notification_type: str):
        """Initialize template not found error.

        Args:
            notification_type: Type that has no active template
        """
        self.notification_type = notification_type
        super().__init__(f"No active template for type '{notification_type}'")


class NotificationNotFoundError(NotificationError):
    """Ledger row does not exist."""

    def __init__(self, notification_id: int):
        """Initialize notification not found error.

        Args:
            notification_id: ID of the missing ledger row
        """
        self.notification_id = notification_id
        super().__init__(f"Notification with ID {notification_id} not found")


class PushProviderNotInitializedError(NotificationError):
    """Firebase Admin SDK could not be initialised."""

    def __init__(self, reason: str | None = None):
        """Initialize provider error.

        Args:
            reason: Why initialisation failed, if known
        """
        super().__init__("Push provider not initialized", detail=reason)


class InvalidPushTokenError(NotificationError):
    """Push token rejected by the format check before it is stored."""

    def __init__(self) -> None:
        super().__init__("Invalid push token format")
