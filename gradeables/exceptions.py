"""Error kinds raised by gradeable configuration and grading order code."""
from __future__ import annotations

from django.core.exceptions import ValidationError


class InvalidArgument(ValueError):
    """A single setter received a malformed or out-of-range value."""


class OperationNotPermitted(Exception):
    """A disabled setter was called, or an immutable field was reassigned."""


class DateValidationFailed(ValidationError):
    """Aggregate date validation failure.

    ``errors`` maps each offending date field to one message. The Django
    ``message_dict`` view is available as well.
    """

    def __init__(self, errors: dict[str, str], message: str = "Date validation failed"):
        super().__init__({field: [msg] for field, msg in errors.items()})
        self.errors = dict(errors)
        self.summary = message

    def __str__(self) -> str:
        details = "; ".join(f"{k}: {v}" for k, v in self.errors.items())
        return f"{self.summary} ({details})"
