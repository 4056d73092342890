import os

from config.settings.base import *  # noqa: F403


SECRET_KEY = "foobar"
ALLOWED_HOSTS = ["testserver"]

# The query log does not depend on PostgreSQL, keep the suite self contained.
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

QUERYLOG_ENABLED = True
QUERYLOG_SERVER_TIMING = True
QUERYLOG_LOG_LEVEL = os.getenv("QUERYLOG_LOG_LEVEL", "DEBUG")
LOGGING["loggers"]["querylog"]["level"] = QUERYLOG_LOG_LEVEL  # noqa: F405
