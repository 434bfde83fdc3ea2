"""
Django settings for the homework planner.

Everything deployment-specific comes from HOMEWORK_* environment variables.
"""
import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent


def _env_bool(name: str, default: bool = False) -> bool:
    return os.environ.get(name, str(default)).strip().lower() in ("1", "true", "yes", "on")


SECRET_KEY = os.environ.get("HOMEWORK_SECRET_KEY", "dev-only-not-secret")
DEBUG = _env_bool("HOMEWORK_DEBUG")
ALLOWED_HOSTS = os.environ.get("HOMEWORK_ALLOWED_HOSTS", "localhost,127.0.0.1,testserver").split(",")

INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.auth",
    "rest_framework",
    "entries",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

ROOT_URLCONF = "homework.urls"
WSGI_APPLICATION = "homework.wsgi.application"
APPEND_SLASH = False

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": os.environ.get("HOMEWORK_DB_PATH", str(BASE_DIR / "homework.sqlite3")),
        "OPTIONS": {"timeout": 20},
    }
}

USE_TZ = True
TIME_ZONE = os.environ.get("HOMEWORK_TIMEZONE", "Europe/Rome")

REST_FRAMEWORK = {
    "DEFAULT_RENDERER_CLASSES": ["rest_framework.renderers.JSONRenderer"],
    "DEFAULT_PARSER_CLASSES": ["rest_framework.parsers.JSONParser"],
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_PERMISSION_CLASSES": ["rest_framework.permissions.AllowAny"],
    "UNAUTHENTICATED_USER": None,
    "TEST_REQUEST_DEFAULT_FORMAT": "json",
}

# Entries core
ENTRIES_TIMEZONE = TIME_ZONE
ENTRIES_EXAM_KEYWORDS = ("verifica", "prova", "test", "interrogazione")
ENTRIES_STUDY_SESSION_DAYS = 4
ENTRIES_TASK_PREVIEW_CHARS = 100

LOG_LEVEL = os.environ.get("HOMEWORK_LOG_LEVEL", "INFO").upper()

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "plain": {"format": "%(asctime)s %(levelname)s %(name)s: %(message)s"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "plain"},
    },
    "loggers": {
        "entries": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False},
        "django": {"handlers": ["console"], "level": "WARNING"},
    },
}
