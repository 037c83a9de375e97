"""Production settings for Gradewise.

Expects the secret key and course location to come from the environment.
"""
from .base import *  # noqa
import os


DEBUG = False

SECRET_KEY = os.environ.get("DJANGO_SECRET_KEY")
if not SECRET_KEY:
    raise RuntimeError("DJANGO_SECRET_KEY must be set in production.")

if not os.environ.get("GRADEWISE_COURSE_PATH"):
    raise RuntimeError("GRADEWISE_COURSE_PATH must be set in production.")

_hosts = os.environ.get("DJANGO_ALLOWED_HOSTS", "localhost,127.0.0.1")
ALLOWED_HOSTS = [h.strip() for h in _hosts.split(",") if h.strip()]
