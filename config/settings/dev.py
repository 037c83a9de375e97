"""Development settings for Gradewise.

Extends base settings with developer-friendly defaults.
"""
from .base import *  # noqa
import os


DEBUG = True
ALLOWED_HOSTS = ["127.0.0.1", "localhost"]

# Development secret key fallback (safe only for local use)
SECRET_KEY = os.environ.get("DJANGO_SECRET_KEY", "dev-insecure-key-change-me")

LOGGING["loggers"]["gradeables"]["level"] = os.environ.get("GRADEWISE_LOG_LEVEL", "DEBUG")  # noqa: F405
