"""WSGI entry point for the notification service."""

import os

from django.core.wsgi import get_wsgi_application

from notifications.logging import setup_logging

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "spoon_service.settings")

setup_logging()
application = get_wsgi_application()
