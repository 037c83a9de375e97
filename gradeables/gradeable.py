"""Static configuration of a gradeable.

A gradeable's dates and late-day allowance form one cross-field
invariant, so they can only be replaced together through
``GradeableConfig.set_dates``; the individual date attributes are
read-only. Values that only make sense for electronic gradeables are
ignored for the other types.
"""
from __future__ import annotations

import logging
import math
import re
from datetime import timedelta
from decimal import Decimal, localcontext
from typing import Any, Iterable, Mapping
from zoneinfo import ZoneInfo

from django.utils import timezone

from .autograding import load_autograding_config
from .collaborators import CoursePathProvider, FileReader, JsonFileReader, SettingsCoursePath
from .components import Component
from .dates import compare_nullable_gt, parse_datetime
from .exceptions import DateValidationFailed, InvalidArgument, OperationNotPermitted
from .serializers import GradeableSerializer
from .types import GradeableType

logger = logging.getLogger(__name__)

GRADEABLE_ID_RE = re.compile(r"[a-zA-Z0-9_-]*")

DATE_PROPERTIES = (
    "ta_view_start_date",
    "grade_start_date",
    "grade_released_date",
    "team_lock_date",
    "submission_open_date",
    "submission_due_date",
    "grade_locked_date",
)

INVALID_DATE_MESSAGE = "Invalid date-time value!"
DATE_SETTERS_DISABLED = 'Individual date setters are disabled, use "set_dates" instead'


class _DateAttribute:
    """Read-only view of one committed date (or the late-day count)."""

    def __set_name__(self, owner, name):
        self.name = name

    def __get__(self, instance, owner=None):
        if instance is None:
            return self
        return instance._dates[self.name]

    def __set__(self, instance, value):
        raise OperationNotPermitted(DATE_SETTERS_DISABLED)


class GradeableConfig:
    """All data describing the configuration of one gradeable.

    Construction order matters: flags that drive date validation
    (type, TA grading, team assignment) are set before ``set_dates``.
    """

    ta_view_start_date = _DateAttribute()
    grade_start_date = _DateAttribute()
    grade_released_date = _DateAttribute()
    grade_locked_date = _DateAttribute()
    team_lock_date = _DateAttribute()
    submission_open_date = _DateAttribute()
    submission_due_date = _DateAttribute()
    late_days = _DateAttribute()

    def __init__(
        self,
        details: Mapping[str, Any],
        components: Iterable[Component] = (),
        course: CoursePathProvider | None = None,
        file_reader: FileReader | None = None,
    ):
        self._course = course or SettingsCoursePath()
        self._file_reader = file_reader or JsonFileReader()

        self._dates: dict[str, Any] = {name: None for name in DATE_PROPERTIES}
        self._dates["late_days"] = 0
        self._components: tuple[Component, ...] = ()
        self._autograding_config = None

        # Defaults for properties irrelevant to the gradeable type
        self._autograding_config_path = ""
        self.vcs = False
        self.vcs_subdirectory = ""
        self._team_assignment = False
        self._team_size_max = 0
        self.ta_grading = False
        self.student_view = False
        self.student_submit = False
        self.student_download = False
        self.student_download_any_version = False
        self.peer_grading = False
        self._peer_grade_set = 0
        self.late_submission_allowed = True
        self._precision = 0.0

        self._set_id(details["id"])
        self.title = details["title"]
        self.instructions_url = details.get("instructions_url", "")
        self._set_type(details["type"])
        self.grade_by_registration = bool(details.get("grade_by_registration", True))
        self.min_grading_group = details.get("min_grading_group", 1)
        self.syllabus_bucket = details.get("syllabus_bucket", "homework")
        self.ta_instructions = details.get("ta_instructions", "")
        self.components = components

        if self.is_electronic():
            self.autograding_config_path = details.get("autograding_config_path")
            self._autograding_config = load_autograding_config(self._course, self._file_reader, self._id)
            self.vcs = bool(details.get("vcs", False))
            self.vcs_subdirectory = details.get("vcs_subdirectory", "")
            self._team_assignment = details.get("team_assignment") is True
            self.team_size_max = details.get("team_size_max", 0)
            self.ta_grading = bool(details.get("ta_grading", False))
            self.student_view = bool(details.get("student_view", False))
            self.student_submit = bool(details.get("student_submit", False))
            self.student_download = bool(details.get("student_download", False))
            self.student_download_any_version = bool(details.get("student_download_any_version", False))
            self.peer_grading = bool(details.get("peer_grading", False))
            self.peer_grade_set = details.get("peer_grade_set", 0)
            self.late_submission_allowed = bool(details.get("late_submission_allowed", True))
            self.precision = details.get("precision", 0.0)

        # Set dates last
        self.set_dates(details)

    def __repr__(self) -> str:
        return f"<GradeableConfig {self._id} ({self._type.label})>"

    # Identity

    @property
    def id(self) -> str:
        return self._id

    @id.setter
    def id(self, value):
        raise OperationNotPermitted("Cannot change Id of gradeable")

    def _set_id(self, value) -> None:
        if not isinstance(value, str) or not GRADEABLE_ID_RE.fullmatch(value):
            raise InvalidArgument("Gradeable id must be alpha-numeric/hyphen/underscore only")
        self._id = value

    @property
    def type(self) -> GradeableType:
        return self._type

    @type.setter
    def type(self, value):
        raise OperationNotPermitted("Cannot change gradeable type")

    def _set_type(self, value) -> None:
        try:
            self._type = GradeableType(value)
        except ValueError:
            raise InvalidArgument(f"Invalid gradeable type: {value!r}") from None

    def is_electronic(self) -> bool:
        return self._type == GradeableType.ELECTRONIC_FILE

    @property
    def team_assignment(self) -> bool:
        return self._team_assignment

    @team_assignment.setter
    def team_assignment(self, value):
        raise OperationNotPermitted("Cannot change teamness of gradeable")

    # Validated settings

    @property
    def title(self) -> str:
        return self._title

    @title.setter
    def title(self, value):
        if value is None or value == "":
            raise InvalidArgument("Gradeable title must not be blank")
        self._title = str(value)

    @property
    def min_grading_group(self) -> int:
        return self._min_grading_group

    @min_grading_group.setter
    def min_grading_group(self, group):
        # Group 0 is not a valid grading group
        if isinstance(group, int) and not isinstance(group, bool) and 0 < group <= 4:
            self._min_grading_group = group
        else:
            raise InvalidArgument("Grading group must be an integer between 1 and 4")

    @property
    def team_size_max(self) -> int:
        return self._team_size_max

    @team_size_max.setter
    def team_size_max(self, value):
        self._team_size_max = _non_negative_int(value, "Max team size must be a non-negative integer!")

    @property
    def peer_grade_set(self) -> int:
        return self._peer_grade_set

    @peer_grade_set.setter
    def peer_grade_set(self, value):
        self._peer_grade_set = _non_negative_int(value, "Peer grade set must be a non-negative integer!")

    @property
    def precision(self) -> float:
        return self._precision

    @precision.setter
    def precision(self, value):
        try:
            precision = float(value)
        except (TypeError, ValueError):
            raise InvalidArgument("Grading precision must be a non-negative number!") from None
        if isinstance(value, bool) or not math.isfinite(precision) or precision < 0:
            raise InvalidArgument("Grading precision must be a non-negative number!")
        self._precision = precision

    @property
    def autograding_config_path(self) -> str:
        return self._autograding_config_path

    @autograding_config_path.setter
    def autograding_config_path(self, path):
        if path is None or path == "":
            raise InvalidArgument("Autograding configuration file path cannot be blank")
        self._autograding_config_path = str(path)

    @property
    def autograding_config(self) -> dict[str, Any] | None:
        return self._autograding_config

    @autograding_config.setter
    def autograding_config(self, value):
        raise OperationNotPermitted("Cannot set the autograding config data")

    # Components

    @property
    def components(self) -> tuple[Component, ...]:
        return self._components

    @components.setter
    def components(self, components):
        components = tuple(components)
        for component in components:
            if not isinstance(component, Component):
                raise InvalidArgument("Object in components array wasn't a component")
        self._components = components

    def get_component(self, component_id):
        for component in self._components:
            if component.id == component_id:
                return component
        return None

    # Dates

    def set_dates(self, dates: Mapping[str, Any]) -> None:
        """Replace all dates and the late-day count as one unit.

        Electronic gradeables satisfy::

            ta_view_start_date <= submission_open_date <= submission_due_date
                <= grade_start_date <= grade_released_date
            submission_due_date + late_days <= grade_released_date   (no TA grading)

        Non-electronic gradeables only require
        ``ta_view_start_date <= grade_released_date``. Every violation is
        collected and raised together as ``DateValidationFailed``; nothing
        is committed unless the whole set is valid.
        """
        parsed = self._parse_dates(dates)
        self._assert_dates(parsed)

        committed = dict(self._dates)
        committed["ta_view_start_date"] = parsed["ta_view_start_date"]
        committed["grade_start_date"] = parsed["grade_start_date"]
        committed["grade_released_date"] = parsed["grade_released_date"]
        committed["grade_locked_date"] = parsed["grade_locked_date"]

        if self.is_electronic():
            if not self.ta_grading:
                # No manual grading, but the start date still needs a consistent value
                committed["grade_start_date"] = parsed["grade_released_date"]
            if self._team_assignment:
                committed["team_lock_date"] = parsed["team_lock_date"]
            committed["submission_open_date"] = parsed["submission_open_date"]
            committed["submission_due_date"] = parsed["submission_due_date"]
            committed["late_days"] = parsed["late_days"]

        self._dates = committed
        logger.debug("Committed dates for gradeable %s", self._id)

    def _parse_dates(self, dates: Mapping[str, Any]) -> dict[str, Any]:
        tz = ZoneInfo(self._course.timezone)
        parsed: dict[str, Any] = {}
        for name in DATE_PROPERTIES:
            value = dates.get(name)
            if value is None:
                parsed[name] = None
                continue
            try:
                parsed[name] = parse_datetime(value, tz)
            except ValueError:
                parsed[name] = None

        # No late days provided means zero of them
        late_days = dates.get("late_days")
        if late_days is None:
            parsed["late_days"] = 0
        else:
            try:
                parsed["late_days"] = int(late_days)
            except (TypeError, ValueError):
                parsed["late_days"] = None
        return parsed

    def _assert_dates(self, dates: dict[str, Any]) -> None:
        # compare_nullable_gt() is False when either side is missing; missing
        # values are reported by the presence checks instead.
        errors: dict[str, str] = {}

        ta_view_start_date = dates["ta_view_start_date"]
        grade_start_date = dates["grade_start_date"]
        grade_released_date = dates["grade_released_date"]
        team_lock_date = dates["team_lock_date"]
        submission_open_date = dates["submission_open_date"]
        submission_due_date = dates["submission_due_date"]
        late_days = dates["late_days"]

        late_interval = None
        if late_days is None or late_days < 0:
            errors["late_days"] = "Late day count must be a non-negative integer!"
        else:
            late_interval = timedelta(days=late_days)

        max_due = submission_due_date
        if submission_due_date is not None and late_interval is not None:
            max_due = submission_due_date + late_interval

        if ta_view_start_date is None:
            errors["ta_view_start_date"] = INVALID_DATE_MESSAGE
        if grade_released_date is None:
            errors["grade_released_date"] = INVALID_DATE_MESSAGE

        if self.is_electronic():
            if submission_open_date is None:
                errors["submission_open_date"] = INVALID_DATE_MESSAGE
            if submission_due_date is None:
                errors["submission_due_date"] = INVALID_DATE_MESSAGE

            if compare_nullable_gt(ta_view_start_date, submission_open_date):
                errors["ta_view_start_date"] = "TA Beta Testing Date must not be later than Submission Open Date"
            if compare_nullable_gt(submission_open_date, submission_due_date):
                errors["submission_open_date"] = "Submission Open Date must not be later than Submission Due Date"
            if self.ta_grading:
                if grade_start_date is None:
                    errors["grade_start_date"] = INVALID_DATE_MESSAGE
                if compare_nullable_gt(submission_due_date, grade_start_date):
                    errors["grade_start_date"] = "Manual Grading Open Date must be no earlier than Due Date"
                if compare_nullable_gt(grade_start_date, grade_released_date):
                    errors["grade_released_date"] = "Grades Released Date must be later than the Manual Grading Open Date"
            elif compare_nullable_gt(max_due, grade_released_date):
                errors["grade_released_date"] = "Grades Released Date must be later than the Due Date + Max Late Days"
            if self._team_assignment and team_lock_date is None:
                errors["team_lock_date"] = INVALID_DATE_MESSAGE
        elif compare_nullable_gt(ta_view_start_date, grade_released_date):
            errors["grade_released_date"] = "Grades Released Date must be later than the TA Beta Testing Date"

        if errors:
            logger.info("Date validation failed for gradeable %s: %s", self._id, ", ".join(sorted(errors)))
            raise DateValidationFailed(errors)

    # Points

    def round_point_value(self, points):
        """Round ``points`` to the nearest multiple of the grading precision.

        A precision of zero disables rounding. Halfway values round away
        from zero. Changing the precision does not re-round existing
        component or mark values.
        """
        if self._precision == 0.0:
            return points
        if not math.isfinite(float(points)):
            return float(points)

        value = Decimal(str(float(points)))
        precision = Decimal(str(self._precision))
        with localcontext() as ctx:
            # The quotient must fit in the context or divmod raises
            ctx.prec = max(ctx.prec, value.adjusted() - precision.adjusted() + 30)
            q, r = divmod(value, precision)
            if abs(r) * 2 >= precision:
                q += 1 if r > 0 else -1
            return float(q * precision)

    def to_dict(self) -> dict[str, Any]:
        """Plain representation, with dates shown in the course timezone."""
        with timezone.override(ZoneInfo(self._course.timezone)):
            return dict(GradeableSerializer(self).data)


def _non_negative_int(value, message: str) -> int:
    if isinstance(value, bool):
        raise InvalidArgument(message)
    if isinstance(value, int):
        if value < 0:
            raise InvalidArgument(message)
        return value
    if isinstance(value, str) and value.isdecimal():
        return int(value)
    raise InvalidArgument(message)
