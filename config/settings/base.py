"""Base Django settings for Gradewise.

This base layer is environment-agnostic. Development/production-specific
settings extend from this module in `dev.py` and `prod.py`.
"""
from pathlib import Path
import os


# Base directory of the project (repository root)
BASE_DIR = Path(__file__).resolve().parent.parent.parent


# Security (overridden in dev/prod)
SECRET_KEY = os.environ.get("DJANGO_SECRET_KEY", "dev-insecure-key-change-me")
DEBUG = False
ALLOWED_HOSTS: list[str] = []


# Applications
INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.auth",
    # Third-party apps
    "rest_framework",
    # Local apps
    "gradeables",
]


# Database: SQLite-first. Gradeable state itself is held by external collaborators
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": BASE_DIR / "db.sqlite3",
    }
}


# Internationalisation. TIME_ZONE is also the default course timezone used
# to interpret gradeable dates given without an offset.
LANGUAGE_CODE = "en-ca"
TIME_ZONE = os.environ.get("GRADEWISE_TIME_ZONE", "America/New_York")
USE_I18N = True
USE_TZ = True


DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"


# Django REST Framework (representation only; no API views are exposed)
REST_FRAMEWORK = {
    "DATETIME_FORMAT": "iso-8601",
}


# Course data. The autograding build output for each gradeable is read from
# <GRADEWISE_COURSE_PATH>/config/build/build_<gradeable id>.json
GRADEWISE_COURSE_PATH = Path(os.environ.get("GRADEWISE_COURSE_PATH", BASE_DIR / "courses"))


# Logging
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {"format": "%(asctime)s %(levelname)s %(name)s: %(message)s"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "simple"},
    },
    "root": {"handlers": ["console"], "level": "WARNING"},
    "loggers": {
        "gradeables": {
            "level": os.environ.get("GRADEWISE_LOG_LEVEL", "INFO"),
        },
    },
}
