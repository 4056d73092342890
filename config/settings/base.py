"""
Base settings to build other settings files upon.
https://docs.djangoproject.com/en/dev/ref/settings
"""

import os

from dotenv import load_dotenv


load_dotenv()

# Django settings
# ---------------

_current_dir = os.path.dirname(os.path.realpath(__file__))
ROOT_DIR = os.path.abspath(os.path.join(_current_dir, "../.."))

SECRET_KEY = os.getenv("DJANGO_SECRET_KEY")

DEBUG = False

ALLOWED_HOSTS = os.getenv("ALLOWED_HOSTS", "localhost").split(",")

INSTALLED_APPS = [
    # Django apps.
    "django.contrib.contenttypes",
    "django.contrib.auth",
    # Query log apps.
    "querylog.apps.QueryLogAppConfig",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
    # Query log: wraps the database adapter for the whole request
    "querylog.timer.middleware.QueryLogMiddleware",
]

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.postgresql",
        "HOST": os.getenv("PGHOST", "localhost"),
        "PORT": os.getenv("PGPORT", "5432"),
        "NAME": os.getenv("PGDATABASE", "querylog"),
        "USER": os.getenv("PGUSER", "postgres"),
        "PASSWORD": os.getenv("PGPASSWORD", "password"),
    }
}

DEFAULT_AUTO_FIELD = "django.db.models.AutoField"

USE_TZ = True

TIME_ZONE = "Europe/Paris"

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "json": {"()": "querylog.logging.QueryLogJSONFormatter"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "json"},
        "null": {"class": "logging.NullHandler"},
    },
    "loggers": {
        "": {"handlers": ["console"], "level": "INFO"},
        "django": {
            "level": os.getenv("DJANGO_LOG_LEVEL", "INFO"),
        },
        # Silence `Invalid HTTP_HOST header` errors.
        # This should be done at the HTTP server level when possible.
        # https://docs.djangoproject.com/en/3.0/topics/logging/#django-security
        "django.security.DisallowedHost": {
            "handlers": ["null"],
            "propagate": False,
        },
        "querylog": {
            "level": os.getenv("QUERYLOG_LOG_LEVEL", "INFO"),
        },
    },
}

# Query log
# ---------

QUERYLOG_ENABLED = os.getenv("QUERYLOG_ENABLED", "True") == "True"

# Class wrapped by the proxy, built with the connection of QUERYLOG_DATABASE.
QUERYLOG_ADAPTER = os.getenv("QUERYLOG_ADAPTER", "querylog.backends.django.DjangoDatabaseAdapter")

QUERYLOG_DATABASE = os.getenv("QUERYLOG_DATABASE", "default")

# Queries lasting at least this many milliseconds are logged as warnings.
QUERYLOG_SLOW_QUERY_MS = float(os.getenv("QUERYLOG_SLOW_QUERY_MS", "100"))

QUERYLOG_SERVER_TIMING = os.getenv("QUERYLOG_SERVER_TIMING", "True") == "True"
