"""ASGI entry point for the notification service."""

import os

from django.core.asgi import get_asgi_application

from notifications.logging import setup_logging

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "spoon_service.settings")

setup_logging()
application = get_asgi_application()
