"""Loading of the per-gradeable autograding configuration document.

The document is produced by the course build step and lives at
``<course>/config/build/build_<gradeable id>.json``. It is optional: a
missing or unreadable file simply means there is no configuration.
"""
from __future__ import annotations

import logging
import os
from typing import Any

from .collaborators import CoursePathProvider, FileReader
from .markup import sanitize_html

logger = logging.getLogger(__name__)

NUMERIC_FIELDS = (
    ("max_submission_size", float),
    ("max_submissions", int),
)


def build_config_path(course_path: str, gradeable_id: str) -> str:
    return os.path.join(course_path, "config", "build", f"build_{gradeable_id}.json")


def load_autograding_config(course: CoursePathProvider, reader: FileReader, gradeable_id: str) -> dict[str, Any] | None:
    """Read and normalise the autograding config, or return None.

    Recognised keys are coerced (``max_submission_size`` to float,
    ``max_submissions`` to int, ``assignment_message`` to sanitized HTML);
    every other key passes through untouched. A numeric key that cannot
    be coerced is dropped on its own; the rest of the document is kept.
    """
    path = build_config_path(course.course_path, gradeable_id)
    try:
        details = reader.read_json(path)
    except Exception as exc:
        logger.warning("No autograding config for %s at %s: %s", gradeable_id, path, exc)
        return None

    if not isinstance(details, dict):
        logger.warning("Autograding config for %s is not an object; ignoring", gradeable_id)
        return None

    details = dict(details)
    for key, coerce in NUMERIC_FIELDS:
        if details.get(key) is None:
            continue
        try:
            details[key] = coerce(details[key])
        except (TypeError, ValueError):
            logger.warning("Dropping malformed %s in autograding config for %s: %r", key, gradeable_id, details[key])
            del details[key]

    if details.get("assignment_message") is not None:
        details["assignment_message"] = sanitize_html(details["assignment_message"])

    return details
