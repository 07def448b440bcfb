"""Upsert the default notification templates."""

from django.core.management.base import BaseCommand

from notifications.constants import DEFAULT_TEMPLATES
from notifications.repositories import TemplateRepository


class Command(BaseCommand):
    help = "Create or update the default notification templates"

    def handle(self, *args, **options):
        created, updated = TemplateRepository.upsert_many(DEFAULT_TEMPLATES)
        self.stdout.write(
            self.style.SUCCESS(f"Templates seeded: {created} created, {updated} updated")
        )
