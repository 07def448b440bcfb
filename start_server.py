"""Gunicorn entry point for the notification service API.

The scheduler is a separate process (``manage.py runscheduler``) so that
scaling the API workers never duplicates trigger rules.
"""

import os
import sys

from gunicorn.app.wsgiapp import run


def main():
    """Start gunicorn bound to ``0.0.0.0:$PORT`` (default 8000)."""
    sys.argv = [
        "gunicorn",
        "spoon_service.wsgi:application",
        "--bind",
        f"0.0.0.0:{os.getenv('PORT', '8000')}",
        "--workers",
        os.getenv("GUNICORN_WORKERS", "4"),
        "--threads",
        "2",
        "--timeout",
        "60",
        "--access-logfile",
        "-",
        "--error-logfile",
        "-",
    ]
    run()


if __name__ == "__main__":
    main()
