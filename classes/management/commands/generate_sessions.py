"""
Materialize upcoming sessions for recurring classes.
Run: python manage.py generate_sessions [--class-id N] [--academy-id N] [--weeks 4] [--seed-attendance]
Intended for a weekly cron job.
"""
from django.core.management.base import BaseCommand, CommandError
from django.core.exceptions import ValidationError

from classes.services.session_generator import SessionMaterializer
from core.exceptions import NotFoundError


class Command(BaseCommand):
    help = "Generate class sessions for the coming weeks, keeping sessions that already have attendance."

    def add_arguments(self, parser):
        parser.add_argument("--class-id", type=int, help="Only this class")
        parser.add_argument("--academy-id", type=int, help="Only classes of this academy")
        parser.add_argument("--weeks", type=int, default=None, help="Weeks ahead (default from settings)")
        parser.add_argument("--seed-attendance", action="store_true", help="Create PRESENT rows for enrolled students")

    def handle(self, *args, **options):
        try:
            result = SessionMaterializer().generate_sessions(
                class_id=options.get("class_id"),
                weeks_ahead=options.get("weeks"),
                seed_attendance=options["seed_attendance"] or None,
                academy_id=options.get("academy_id"),
            )
        except (ValidationError, NotFoundError) as e:
            raise CommandError(str(e))

        for skipped in result.skipped_sessions:
            self.stdout.write(
                f"Kept session {skipped['sessionId']} (class {skipped['classId']}, {skipped['date']}): "
                f"{skipped['attendanceCount']} attendance records"
            )
        for failed in result.failed_classes:
            self.stdout.write(self.style.ERROR(f"Class {failed['classId']} ({failed['className']}) failed: {failed['error']}"))

        self.stdout.write(self.style.SUCCESS(
            f"Generated {result.generated_count} sessions, skipped {len(result.skipped_sessions)}"
        ))
