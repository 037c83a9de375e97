from __future__ import annotations

import math

import pytest

from gradeables.components import GradeableComponent
from gradeables.exceptions import InvalidArgument, OperationNotPermitted
from gradeables.types import GradeableType


class CountingReader:
    def __init__(self):
        self.paths = []

    def read_json(self, path):
        self.paths.append(path)
        raise FileNotFoundError(path)


def test_id_with_hyphen_and_underscore_is_accepted(make_gradeable):
    g = make_gradeable(id="hw-01_v2")
    assert g.id == "hw-01_v2"


@pytest.mark.parametrize("bad_id", ["hw 01", "hw/01", "hw.01", "hw01\n", None])
def test_malformed_id_is_rejected(make_gradeable, bad_id):
    with pytest.raises(InvalidArgument):
        make_gradeable(id=bad_id)


def test_immutable_fields_cannot_be_reassigned(make_gradeable):
    g = make_gradeable(team_assignment=True)
    with pytest.raises(OperationNotPermitted):
        g.id = "other"
    with pytest.raises(OperationNotPermitted):
        g.type = GradeableType.CHECKPOINTS
    with pytest.raises(OperationNotPermitted):
        g.team_assignment = False
    with pytest.raises(OperationNotPermitted):
        g.autograding_config = {}
    assert g.id == "hw-01"
    assert g.type == GradeableType.ELECTRONIC_FILE
    assert g.team_assignment is True


def test_unknown_type_is_rejected(make_gradeable):
    with pytest.raises(InvalidArgument):
        make_gradeable(type=7)


def test_team_assignment_requires_literal_true(make_gradeable):
    assert make_gradeable(team_assignment="yes").team_assignment is False


def test_title(make_gradeable):
    g = make_gradeable(title=101)
    assert g.title == "101"
    with pytest.raises(InvalidArgument):
        g.title = ""
    assert g.title == "101"


@pytest.mark.parametrize("group", [1, 2, 3, 4])
def test_min_grading_group_in_range(make_gradeable, group):
    assert make_gradeable(min_grading_group=group).min_grading_group == group


@pytest.mark.parametrize("group", [0, 5, -1, "2", 1.0, True, None])
def test_min_grading_group_out_of_range(make_gradeable, group):
    g = make_gradeable()
    with pytest.raises(InvalidArgument):
        g.min_grading_group = group
    assert g.min_grading_group == 1


@pytest.mark.parametrize("attr", ["team_size_max", "peer_grade_set"])
def test_non_negative_counts(make_gradeable, attr):
    g = make_gradeable()
    setattr(g, attr, "3")
    assert getattr(g, attr) == 3
    setattr(g, attr, 0)
    assert getattr(g, attr) == 0
    for bad in (-1, "-1", "abc", 1.5, None, True):
        with pytest.raises(InvalidArgument):
            setattr(g, attr, bad)
    assert getattr(g, attr) == 0


def test_precision_must_be_non_negative(make_gradeable):
    g = make_gradeable(precision="0.5")
    assert g.precision == 0.5
    with pytest.raises(InvalidArgument):
        g.precision = -0.1
    with pytest.raises(InvalidArgument):
        g.precision = "fine"
    assert g.precision == 0.5


def test_autograding_config_path_cannot_be_blank(make_gradeable):
    g = make_gradeable()
    assert g.autograding_config_path == "/var/local/autograding/hw-01"
    with pytest.raises(InvalidArgument):
        g.autograding_config_path = ""


@pytest.mark.parametrize("path", [None, ""])
def test_electronic_gradeable_requires_autograding_config_path(make_gradeable, path):
    with pytest.raises(InvalidArgument, match="cannot be blank"):
        make_gradeable(autograding_config_path=path)


def test_electronic_gradeable_keeps_ta_instructions(make_gradeable):
    assert make_gradeable(ta_instructions="Grade style first").ta_instructions == "Grade style first"
    assert make_gradeable().ta_instructions == ""


def test_components_replace_whole_collection(make_gradeable):
    first = GradeableComponent(id=1, title="Style", max_value=5)
    second = GradeableComponent(id=2, title="Tests", max_value=10)
    g = make_gradeable(components=[first])
    assert g.components == (first,)

    g.components = [first, second]
    assert g.get_component(2) is second
    assert g.get_component(3) is None


def test_non_conforming_component_leaves_collection_untouched(make_gradeable):
    first = GradeableComponent(id=1, title="Style")
    g = make_gradeable(components=[first])
    with pytest.raises(InvalidArgument):
        g.components = [GradeableComponent(id=2, title="Tests"), {"id": 3, "title": "Not a component"}]
    assert g.components == (first,)


@pytest.mark.parametrize(
    "value, precision, expected",
    [
        (2.26, 0.5, 2.5),
        (2.2, 0.5, 2.0),
        (-2.26, 0.5, -2.5),
        (7.0, 0.25, 7.0),
        (0.34, 0.1, 0.3),
        ("1.76", 0.25, 1.75),
        (2.5, 1.0, 3.0),
        (-2.5, 1.0, -3.0),
        (0.25, 0.5, 0.5),
        (-0.25, 0.5, -0.5),
    ],
)
def test_round_point_value(make_gradeable, value, precision, expected):
    g = make_gradeable(precision=precision)
    assert g.round_point_value(value) == pytest.approx(expected)


def test_zero_precision_does_not_round(make_gradeable):
    g = make_gradeable(precision=0)
    assert g.round_point_value(2.2634) == 2.2634
    assert g.round_point_value(-1.01) == -1.01


@pytest.mark.parametrize(
    "value, precision, expected",
    [
        (1e30, 0.5, 1e30),
        (-1e30, 0.25, -1e30),
        (123456789012345678901234567890.7, 1.0, 123456789012345678901234567890.7),
        (1e-30, 0.5, 0.0),
    ],
)
def test_round_point_value_large_magnitudes(make_gradeable, value, precision, expected):
    g = make_gradeable(precision=precision)
    assert g.round_point_value(value) == pytest.approx(expected)


def test_round_point_value_passes_non_finite_through(make_gradeable):
    g = make_gradeable(precision=0.5)
    assert g.round_point_value(float("inf")) == float("inf")
    assert g.round_point_value(float("-inf")) == float("-inf")
    assert math.isnan(g.round_point_value(float("nan")))


@pytest.mark.parametrize("precision", [0.1, 0.25, 0.5, 1.0, 3.0])
@pytest.mark.parametrize("value", [0.3, 1.15, 2.49999, 2.5, -7.33, 10.05, 100.0])
def test_rounding_is_idempotent(make_gradeable, precision, value):
    g = make_gradeable(precision=precision)
    once = g.round_point_value(value)
    assert g.round_point_value(once) == once


def test_non_electronic_gradeable_skips_electronic_settings(course):
    from gradeables.gradeable import GradeableConfig

    reader = CountingReader()
    g = GradeableConfig(
        {
            "id": "cp-1",
            "title": "Checkpoint 1",
            "type": GradeableType.CHECKPOINTS,
            "ta_instructions": "Check the lab sheet",
            "precision": 0.5,
            "team_size_max": 4,
            "ta_view_start_date": "2024-02-01 00:00:00",
            "grade_released_date": "2024-02-10 00:00:00",
        },
        [],
        course=course,
        file_reader=reader,
    )
    assert reader.paths == []
    assert g.autograding_config is None
    assert g.ta_instructions == "Check the lab sheet"
    assert g.precision == 0.0
    assert g.team_size_max == 0
    assert g.is_electronic() is False
