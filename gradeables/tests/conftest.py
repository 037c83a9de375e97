import json

import pytest

from gradeables.collaborators import SettingsCoursePath
from gradeables.gradeable import GradeableConfig
from gradeables.types import GradeableType

COURSE_TIMEZONE = "America/New_York"


@pytest.fixture
def course(tmp_path):
    """A course rooted in a temporary directory, using Eastern time."""
    return SettingsCoursePath(course_path=str(tmp_path), timezone=COURSE_TIMEZONE)


@pytest.fixture
def write_build_config(tmp_path):
    """Write the autograding build output for a gradeable into the course."""

    def _write(gradeable_id: str, content) -> None:
        build_dir = tmp_path / "config" / "build"
        build_dir.mkdir(parents=True, exist_ok=True)
        if not isinstance(content, str):
            content = json.dumps(content)
        (build_dir / f"build_{gradeable_id}.json").write_text(content, encoding="utf-8")

    return _write


@pytest.fixture
def electronic_details():
    return {
        "id": "hw-01",
        "title": "Homework 1",
        "type": GradeableType.ELECTRONIC_FILE,
        "autograding_config_path": "/var/local/autograding/hw-01",
        "ta_grading": True,
        "team_assignment": False,
        "ta_view_start_date": "2024-01-01 00:00:00",
        "submission_open_date": "2024-01-02 00:00:00",
        "submission_due_date": "2024-01-10 23:59:59",
        "grade_start_date": "2024-01-12 00:00:00",
        "grade_released_date": "2024-01-20 00:00:00",
        "grade_locked_date": "2024-01-25 00:00:00",
        "team_lock_date": "2024-01-05 00:00:00",
        "late_days": 2,
    }


@pytest.fixture
def make_gradeable(course, electronic_details):
    """Build a GradeableConfig from the electronic defaults plus overrides."""

    def _make(components=(), file_reader=None, **overrides):
        details = dict(electronic_details)
        details.update(overrides)
        return GradeableConfig(details, components, course=course, file_reader=file_reader)

    return _make
