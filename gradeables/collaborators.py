"""Interfaces to the systems a gradeable depends on.

Persistence, section membership and the file system live outside this
app. They are reached through the small protocols below; the stock
implementations cover configuration from Django settings and JSON files
on local disk.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable, Mapping, Protocol, Sequence, runtime_checkable

from django.conf import settings


@runtime_checkable
class CoursePathProvider(Protocol):
    @property
    def course_path(self) -> str: ...

    @property
    def timezone(self) -> str: ...


@runtime_checkable
class FileReader(Protocol):
    def read_json(self, path: str) -> Any: ...


@runtime_checkable
class SectionResolver(Protocol):
    def get_all_grading_sections(self, gradeable) -> Sequence[Any]: ...

    def get_grading_sections_for_user(self, gradeable, user) -> Sequence[Any]: ...


@runtime_checkable
class VersionLookup(Protocol):
    def get_active_versions(self, gradeable, submitter_ids: Iterable[str]) -> Mapping[str, int]: ...


class SettingsCoursePath:
    """Course location and timezone taken from Django settings."""

    def __init__(self, course_path: str | None = None, timezone: str | None = None):
        self._course_path = course_path
        self._timezone = timezone

    @property
    def course_path(self) -> str:
        if self._course_path is not None:
            return str(self._course_path)
        return str(settings.GRADEWISE_COURSE_PATH)

    @property
    def timezone(self) -> str:
        return self._timezone or settings.TIME_ZONE


class JsonFileReader:
    def read_json(self, path: str) -> Any:
        with Path(path).open("r", encoding="utf-8") as f:
            return json.load(f)
