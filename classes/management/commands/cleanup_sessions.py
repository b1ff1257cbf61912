"""
Delete old sessions together with their attendance records.
Run: python manage.py cleanup_sessions [--days 90]
"""
from django.core.management.base import BaseCommand, CommandError
from django.core.exceptions import ValidationError

from classes.services.session_generator import SessionMaterializer


class Command(BaseCommand):
    help = "Remove sessions older than the retention window."

    def add_arguments(self, parser):
        parser.add_argument("--days", type=int, default=None, help="Retention in days (default from settings)")

    def handle(self, *args, **options):
        try:
            deleted = SessionMaterializer().cleanup_old_sessions(days_old=options.get("days"))
        except ValidationError as e:
            raise CommandError(str(e))
        self.stdout.write(self.style.SUCCESS(f"Deleted {deleted} sessions"))
