import json

from django.core.management import BaseCommand, CommandError

from gradeables.collaborators import JsonFileReader, SettingsCoursePath
from gradeables.exceptions import DateValidationFailed, InvalidArgument
from gradeables.gradeable import GradeableConfig


class Command(BaseCommand):
    help = """Build a gradeable from a JSON details file and validate its configuration and dates.
    Prints the resulting configuration as JSON on stdout."""

    def add_arguments(self, parser):
        parser.add_argument('details', type=str, help='path to the gradeable details JSON file')
        parser.add_argument('--course-path', type=str, default=None, help='course directory holding config/build')
        parser.add_argument('--timezone', type=str, default=None, help='course timezone: applied to dates without an offset and used for printed dates')

    def handle(self, *args, **options):
        reader = JsonFileReader()
        try:
            details = reader.read_json(options['details'])
        except (OSError, ValueError) as e:
            raise CommandError(f"Cannot read {options['details']}: {e}")
        if not isinstance(details, dict):
            raise CommandError("Gradeable details must be a JSON object")

        course = SettingsCoursePath(course_path=options['course_path'], timezone=options['timezone'])
        try:
            gradeable = GradeableConfig(details, [], course=course, file_reader=reader)
        except KeyError as e:
            raise CommandError(f"Missing required field {e}")
        except InvalidArgument as e:
            raise CommandError(str(e))
        except DateValidationFailed as e:
            for field, message in e.errors.items():
                self.stderr.write(f"{field}: {message}")
            raise CommandError("Date validation failed")

        self.stdout.write(json.dumps(gradeable.to_dict(), indent=2, default=str))
