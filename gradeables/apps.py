from django.apps import AppConfig


class GradeablesConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "gradeables"
    verbose_name = "Gradeables"
