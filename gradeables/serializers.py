"""Read-only representation of a gradeable configuration."""
from __future__ import annotations

from rest_framework import serializers

from .dates import DATE_FORMAT


class GradeableSerializer(serializers.Serializer):
    id = serializers.CharField(read_only=True)
    title = serializers.CharField(read_only=True)
    instructions_url = serializers.CharField(read_only=True, allow_blank=True)
    type = serializers.IntegerField(read_only=True)
    grade_by_registration = serializers.BooleanField(read_only=True)
    min_grading_group = serializers.IntegerField(read_only=True)
    syllabus_bucket = serializers.CharField(read_only=True)
    ta_instructions = serializers.CharField(read_only=True, allow_blank=True)
    autograding_config_path = serializers.CharField(read_only=True, allow_blank=True)
    autograding_config = serializers.JSONField(read_only=True)
    vcs = serializers.BooleanField(read_only=True)
    vcs_subdirectory = serializers.CharField(read_only=True, allow_blank=True)
    team_assignment = serializers.BooleanField(read_only=True)
    team_size_max = serializers.IntegerField(read_only=True)
    ta_grading = serializers.BooleanField(read_only=True)
    student_view = serializers.BooleanField(read_only=True)
    student_submit = serializers.BooleanField(read_only=True)
    student_download = serializers.BooleanField(read_only=True)
    student_download_any_version = serializers.BooleanField(read_only=True)
    peer_grading = serializers.BooleanField(read_only=True)
    peer_grade_set = serializers.IntegerField(read_only=True)
    late_submission_allowed = serializers.BooleanField(read_only=True)
    precision = serializers.FloatField(read_only=True)

    ta_view_start_date = serializers.DateTimeField(read_only=True, format=DATE_FORMAT)
    grade_start_date = serializers.DateTimeField(read_only=True, format=DATE_FORMAT)
    grade_released_date = serializers.DateTimeField(read_only=True, format=DATE_FORMAT)
    grade_locked_date = serializers.DateTimeField(read_only=True, format=DATE_FORMAT)
    team_lock_date = serializers.DateTimeField(read_only=True, format=DATE_FORMAT)
    submission_open_date = serializers.DateTimeField(read_only=True, format=DATE_FORMAT)
    submission_due_date = serializers.DateTimeField(read_only=True, format=DATE_FORMAT)
    late_days = serializers.IntegerField(read_only=True)

    components = serializers.SerializerMethodField()

    def get_components(self, obj) -> list:
        return [component.id for component in obj.components]
