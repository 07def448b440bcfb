"""Django settings for the smart-utensil notification service.

All deployment-specific values are read from environment variables so the
same settings module serves local development, containers and Kubernetes.
"""

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "insecure-dev-key-change-me")
DEBUG = _env_bool("DEBUG")
ALLOWED_HOSTS = os.getenv("ALLOWED_HOSTS", "localhost,127.0.0.1").split(",")

INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    "rest_framework",
    "django_rq",
    "notifications",
]

MIDDLEWARE = [
    "notifications.middleware.RequestIDMiddleware",
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "notifications.middleware.SecurityContextMiddleware",
    "notifications.middleware.ProcessTimeMiddleware",
]

ROOT_URLCONF = "spoon_service.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

WSGI_APPLICATION = "spoon_service.wsgi.application"
ASGI_APPLICATION = "spoon_service.asgi.application"

# Database
# The notification tables live in the main application database; this
# service reads and writes them but does not own their migrations.
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.postgresql",
        "NAME": os.getenv("POSTGRES_DB", "ispoon"),
        "USER": os.getenv("POSTGRES_USER", "postgres"),
        "PASSWORD": os.getenv("POSTGRES_PASSWORD", ""),
        "HOST": os.getenv("POSTGRES_HOST", "localhost"),
        "PORT": os.getenv("POSTGRES_PORT", "5432"),
        "CONN_MAX_AGE": int(os.getenv("POSTGRES_CONN_MAX_AGE", "60")),
        "OPTIONS": {
            "connect_timeout": int(os.getenv("POSTGRES_CONNECT_TIMEOUT", "5")),
        },
    }
}

REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.redis.RedisCache",
        "LOCATION": REDIS_URL,
    }
}

RQ_QUEUES = {
    "default": {
        "URL": REDIS_URL,
        "DEFAULT_TIMEOUT": 300,
    },
}

LANGUAGE_CODE = "en-us"
USE_I18N = True
USE_TZ = True
TIME_ZONE = "UTC"

STATIC_URL = "static/"
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [
        "notifications.auth.oauth2.OAuth2Authentication",
    ],
    "DEFAULT_PERMISSION_CLASSES": [
        "rest_framework.permissions.IsAuthenticated",
    ],
    "EXCEPTION_HANDLER": "notifications.exceptions.handlers.custom_exception_handler",
    "UNAUTHENTICATED_USER": None,
}

# OAuth2 / JWT
OAUTH2_SERVICE_ENABLED = _env_bool("OAUTH2_SERVICE_ENABLED", "true")
OAUTH2_INTROSPECTION_ENABLED = _env_bool("OAUTH2_INTROSPECTION_ENABLED")
OAUTH2_INTROSPECT_URL = os.getenv(
    "OAUTH2_INTROSPECT_URL", "http://localhost:8080/oauth2/introspect"
)
OAUTH2_CLIENT_ID = os.getenv("OAUTH2_CLIENT_ID", "")
OAUTH2_CLIENT_SECRET = os.getenv("OAUTH2_CLIENT_SECRET", "")
OAUTH2_TOKEN_CACHE_PREFIX = "spoon_token_"
OAUTH2_TOKEN_CACHE_TTL = int(os.getenv("OAUTH2_TOKEN_CACHE_TTL", "60"))
JWT_SECRET = os.getenv("JWT_SECRET", "")

# Firebase Cloud Messaging
# Either a JSON document (service account) or a path to the JSON file.
FIREBASE_CREDENTIALS = os.getenv("FIREBASE_CREDENTIALS", "")

# Notification policy
# Quiet hours and "today" for throttle counters are evaluated in this zone.
NOTIFICATION_TIME_ZONE = os.getenv("NOTIFICATION_TIME_ZONE", "UTC")
NOTIFICATION_PENDING_BATCH_SIZE = int(
    os.getenv("NOTIFICATION_PENDING_BATCH_SIZE", "100")
)
NOTIFICATION_HISTORY_RETENTION_DAYS = int(
    os.getenv("NOTIFICATION_HISTORY_RETENTION_DAYS", "90")
)
NOTIFICATION_THROTTLE_RETENTION_DAYS = int(
    os.getenv("NOTIFICATION_THROTTLE_RETENTION_DAYS", "30")
)
NOTIFICATION_INACTIVE_DEVICE_DAYS = int(
    os.getenv("NOTIFICATION_INACTIVE_DEVICE_DAYS", "3")
)
NOTIFICATION_FAST_EATING_PACE_BPM = float(
    os.getenv("NOTIFICATION_FAST_EATING_PACE_BPM", "15")
)

# Scheduler cron expressions (crontab syntax, evaluated in NOTIFICATION_TIME_ZONE)
NOTIFICATION_SCHEDULE = {
    "pending_sweep": os.getenv("CRON_PENDING_SWEEP", "* * * * *"),
    "daily_goal_check": os.getenv("CRON_DAILY_GOAL_CHECK", "0 23 * * *"),
    "weekly_digest": os.getenv("CRON_WEEKLY_DIGEST", "0 20 * * *"),
    "inactivity_check": os.getenv("CRON_INACTIVITY_CHECK", "0 14 * * *"),
    "history_retention": os.getenv("CRON_HISTORY_RETENTION", "0 3 * * *"),
    "throttle_retention": os.getenv("CRON_THROTTLE_RETENTION", "0 4 * * *"),
}

# Logging is configured by notifications.logging.setup_logging(); Django's
# own dictConfig is left minimal so structlog owns the root handlers.
LOGGING_CONFIG = None
