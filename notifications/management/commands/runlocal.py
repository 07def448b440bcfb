"""Development server that starts without touching the database."""

from django.core.management.commands.runserver import Command as RunServer


class Command(RunServer):
    """runserver without the migration check.

    The telemetry and notification tables belong to the main backend, so
    there are no local migrations to verify.
    """

    help = "Start the development server without migration checks"

    def check_migrations(self, *_args, **_kwargs):
        self.stdout.write(
            self.style.WARNING("Skipping migration checks (schema owned by the main backend)")
        )
