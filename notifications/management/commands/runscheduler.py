"""Run the notification trigger rules on their cron schedule."""

import signal
import threading

from django.core.management.base import BaseCommand, CommandError

import structlog

from notifications.scheduler import NotificationScheduler
from notifications.scheduler.notification_scheduler import RULES

logger = structlog.get_logger(__name__)


class Command(BaseCommand):
    """Long-running scheduler process.

    Run exactly one instance: a second process would evaluate every rule
    twice and send duplicate notifications.
    """

    help = "Run the notification scheduler until SIGINT/SIGTERM"

    def add_arguments(self, parser):
        parser.add_argument(
            "--once",
            metavar="RULE",
            choices=sorted(RULES),
            help="Run a single rule immediately and exit",
        )

    def handle(self, *args, **options):
        scheduler = NotificationScheduler()

        if options["once"]:
            result = scheduler.run_rule(options["once"])
            if result is None:
                raise CommandError(f"Rule '{options['once']}' failed, see logs")
            self.stdout.write(self.style.SUCCESS(f"{options['once']}: {result}"))
            return

        stop_event = threading.Event()

        def _request_stop(signum, _frame):
            logger.info("scheduler_shutdown_requested", signal=signal.Signals(signum).name)
            stop_event.set()

        signal.signal(signal.SIGINT, _request_stop)
        signal.signal(signal.SIGTERM, _request_stop)

        scheduler.start()
        self.stdout.write(self.style.SUCCESS("Notification scheduler running"))
        try:
            stop_event.wait()
        finally:
            scheduler.stop(wait=True)
        self.stdout.write("Notification scheduler stopped")
