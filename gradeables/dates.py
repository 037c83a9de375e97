"""Helpers for turning user supplied date values into aware datetimes."""
from __future__ import annotations

from datetime import date, datetime, tzinfo

from django.utils import dateparse, timezone

DATE_FORMAT = "%Y-%m-%d %H:%M:%S%z"


def parse_datetime(value, tz: tzinfo) -> datetime:
    """Resolve ``value`` to an aware datetime in ``tz``.

    Accepts datetimes, dates (midnight) and strings in any format Django's
    ``dateparse`` understands. Raises ``ValueError`` for anything else.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        text = value.strip()
        parsed = dateparse.parse_datetime(text)
        if parsed is None:
            day = dateparse.parse_date(text)
            if day is None:
                raise ValueError(f"Unrecognised date-time value: {value!r}")
            parsed = datetime(day.year, day.month, day.day)
    else:
        raise ValueError(f"Unsupported date-time value: {value!r}")

    if timezone.is_naive(parsed):
        parsed = timezone.make_aware(parsed, tz)
    return parsed


def compare_nullable_gt(a, b) -> bool:
    """True only when both values are present and ``a > b``."""
    if a is None or b is None:
        return False
    return a > b


def format_datetime(value: datetime | None) -> str | None:
    if value is None:
        return None
    return value.strftime(DATE_FORMAT)
