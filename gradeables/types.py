from __future__ import annotations

from django.db import models


class GradeableType(models.IntegerChoices):
    ELECTRONIC_FILE = 0, "Electronic File"
    CHECKPOINTS = 1, "Checkpoints"
    NUMERIC_TEXT = 2, "Numeric/Text"
