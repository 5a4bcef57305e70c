"""
Django settings for medilogic project.

Every deployment-specific value is read from the environment:

    DJANGO_SECRET_KEY, DJANGO_DEBUG, DJANGO_ALLOWED_HOSTS,
    MEDILOGIC_DB_PATH, MEDILOGIC_LOG_LEVEL,
    MEDILOGIC_SUMMARY_API_KEY, MEDILOGIC_SUMMARY_MODEL,
    MEDILOGIC_SUMMARY_ENDPOINT, MEDILOGIC_SUMMARY_TIMEOUT
"""

from __future__ import annotations

import os
from pathlib import Path

BASE_DIR: Path = Path(__file__).resolve().parent.parent


def _env_bool(name: str, default: bool = False) -> bool:
    value: str | None = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


# ─────────────────────────────────────────────────────────────────────
# Core
# ─────────────────────────────────────────────────────────────────────

SECRET_KEY: str = os.environ.get(
    "DJANGO_SECRET_KEY", "django-insecure-medilogic-development-key"
)
DEBUG: bool = _env_bool("DJANGO_DEBUG", default=True)
ALLOWED_HOSTS: list[str] = [
    h.strip()
    for h in os.environ.get("DJANGO_ALLOWED_HOSTS", "localhost,127.0.0.1,testserver").split(",")
    if h.strip()
]

INSTALLED_APPS: list[str] = [
    "django.contrib.contenttypes",
    "django.contrib.auth",
    "django_filters",
    "rest_framework",
    "knowledge_base",
    "api",
]

MIDDLEWARE: list[str] = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

ROOT_URLCONF: str = "medilogic.urls"
WSGI_APPLICATION: str = "medilogic.wsgi.application"

DATABASES: dict = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": os.environ.get("MEDILOGIC_DB_PATH", str(BASE_DIR / "db.sqlite3")),
    }
}

CACHES: dict = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "medilogic",
    }
}

DEFAULT_AUTO_FIELD: str = "django.db.models.BigAutoField"
USE_TZ: bool = True
TIME_ZONE: str = "UTC"

# ─────────────────────────────────────────────────────────────────────
# Django REST Framework
# ─────────────────────────────────────────────────────────────────────

REST_FRAMEWORK: dict = {
    "DEFAULT_RENDERER_CLASSES": ["rest_framework.renderers.JSONRenderer"],
    "DEFAULT_PARSER_CLASSES": ["rest_framework.parsers.JSONParser"],
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_PERMISSION_CLASSES": ["rest_framework.permissions.AllowAny"],
    "UNAUTHENTICATED_USER": None,
}

# ─────────────────────────────────────────────────────────────────────
# External summary service
# ─────────────────────────────────────────────────────────────────────

MEDILOGIC_SUMMARY: dict = {
    "API_KEY": os.environ.get("MEDILOGIC_SUMMARY_API_KEY", ""),
    "MODEL": os.environ.get("MEDILOGIC_SUMMARY_MODEL", "gemini-2.0-flash"),
    "ENDPOINT": os.environ.get(
        "MEDILOGIC_SUMMARY_ENDPOINT",
        "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent",
    ),
    "TIMEOUT": float(os.environ.get("MEDILOGIC_SUMMARY_TIMEOUT", "15")),
}

# ─────────────────────────────────────────────────────────────────────
# Logging
# ─────────────────────────────────────────────────────────────────────

LOG_LEVEL: str = os.environ.get("MEDILOGIC_LOG_LEVEL", "INFO").upper()

LOGGING: dict = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "standard": {
            "format": "%(asctime)s %(levelname)s [%(name)s] %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "standard",
        },
    },
    "loggers": {
        "inference_engine": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False},
        "explanations": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False},
        "api": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False},
    },
    "root": {"handlers": ["console"], "level": "WARNING"},
}
