"""Send a notification to one user, bypassing nothing but the scheduler."""

import json

from django.core.management.base import BaseCommand, CommandError

from notifications.enums import NotificationKind
from notifications.exceptions import PushProviderNotInitializedError
from notifications.services import notification_service


class Command(BaseCommand):
    """Schedule a templated notification for a user and report the outcome.

    The throttle gate still applies.
    """

    help = "Send a test push notification to a user"

    def add_arguments(self, parser):
        parser.add_argument("user_id", type=int)
        parser.add_argument(
            "--type",
            default=NotificationKind.SYSTEM_ALERT.value,
            help="Template type (default: system_alert)",
        )
        parser.add_argument(
            "--data",
            default='{"title": "Test notification", "body": "Hello from the notification service"}',
            help="JSON object with placeholder values",
        )

    def handle(self, *args, **options):
        try:
            data = json.loads(options["data"])
        except json.JSONDecodeError as e:
            raise CommandError(f"--data is not valid JSON: {e}") from e
        if not isinstance(data, dict):
            raise CommandError("--data must be a JSON object")

        provider = notification_service.dispatcher.provider
        if not provider.initialize():
            raise CommandError(str(PushProviderNotInitializedError("check FIREBASE_CREDENTIALS")))

        instance = notification_service.schedule(
            options["user_id"],
            options["type"],
            data,
            trigger_source={"source": "send_test_notification"},
        )
        if instance is None:
            raise CommandError("Notification was not scheduled (missing template or throttled)")

        self.stdout.write(
            f"Notification {instance.id}: {instance.delivery_status}"
            + (f" ({instance.error_message})" if instance.error_message else "")
        )
