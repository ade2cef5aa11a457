"""
Test settings.

Runs against an in-memory SQLite database so the suite needs no services.
Set TEST_DATABASE=postgres to run it against the PostgreSQL from the
environment instead (row locks are then exercised for real).
"""

import os

from .base import *  # noqa: F403,F405

SECRET_KEY = "test-secret-key-not-for-production"

DEBUG = False

ALLOWED_HOSTS = ["testserver", "localhost", "127.0.0.1"]

if os.getenv("TEST_DATABASE") == "postgres":
    DATABASES = {"default": postgres_database(engine="django.db.backends.postgresql")}  # noqa: F405
else:
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": ":memory:",
        }
    }

# Fast hashing for tests
PASSWORD_HASHERS = [
    "django.contrib.auth.hashers.MD5PasswordHasher",
]

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "handlers": {
        "console": {
            "level": "WARNING",
            "class": "logging.StreamHandler",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": "WARNING",
    },
}

SENTRY_DSN = ""
