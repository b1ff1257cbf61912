"""
Session materialization from recurring classes:
- Monday 16:00 class, window from Monday 2026-02-09 00:00 UTC, 2 weeks -> Feb 9 and Feb 16
- regenerating replaces sessions without attendance, keeps (and reports) sessions with attendance
- one failing class does not roll back the others
- lazy per-date session creation seeds attendance once
- old sessions are cleaned up with their attendance
"""
from datetime import date, datetime, time, timedelta, timezone as dt_timezone
from io import StringIO

from django.core.exceptions import ValidationError
from django.core.management import call_command
from django.test import TestCase, override_settings
from django.utils import timezone
from rest_framework.test import APIClient

from attendance.models import AttendanceRecord
from classes.models import ClassSession
from classes.repository import ScheduleRepository
from classes.services.session_generator import SessionMaterializer, candidate_dates
from core.dates import TimeOfDay
from core.exceptions import NotFoundError

from .helpers import auth_header, enroll, make_academy, make_class, make_coach, make_student, make_user

WINDOW_START = datetime(2026, 2, 9, 0, 0, tzinfo=dt_timezone.utc)


class FailingRepository(ScheduleRepository):
    """Blows up while creating sessions for one class."""

    def __init__(self, failing_class_id):
        self.failing_class_id = failing_class_id

    def create_session(self, recurring_class, *args, **kwargs):
        if recurring_class.id == self.failing_class_id:
            raise RuntimeError("court booking system unavailable")
        return super().create_session(recurring_class, *args, **kwargs)


@override_settings(TIME_ZONE="UTC")
class CandidateDatesTests(TestCase):
    def test_monday_class_in_two_week_window(self):
        dates = list(candidate_dates(1, TimeOfDay(16, 0), WINDOW_START, WINDOW_START + timedelta(weeks=2)))
        self.assertEqual(dates, [date(2026, 2, 9), date(2026, 2, 16)])

    def test_start_already_passed_on_first_day(self):
        start = datetime(2026, 2, 9, 17, 0, tzinfo=dt_timezone.utc)
        dates = list(candidate_dates(1, TimeOfDay(16, 0), start, start + timedelta(weeks=2)))
        self.assertEqual(dates, [date(2026, 2, 16), date(2026, 2, 23)])

    def test_sunday_class(self):
        dates = list(candidate_dates(0, TimeOfDay(9, 0), WINDOW_START, WINDOW_START + timedelta(weeks=1)))
        self.assertEqual(dates, [date(2026, 2, 15)])


@override_settings(TIME_ZONE="UTC")
class SessionMaterializerTests(TestCase):
    def setUp(self):
        self.academy = make_academy()
        self.coach = make_coach(self.academy)
        self.monday = make_class(self.academy, self.coach, name="Monday Juniors", day=1)
        self.students = [make_student(self.academy, name=n) for n in ("Ana", "Ben", "Cai")]
        self.enrollments = enroll(self.monday, *self.students)

    def _generate(self, **kwargs):
        kwargs.setdefault("window_start", WINDOW_START)
        kwargs.setdefault("weeks_ahead", 2)
        return SessionMaterializer().generate_sessions(**kwargs)

    def test_generates_dated_sessions(self):
        result = self._generate(class_id=self.monday.id)
        self.assertEqual(result.generated_count, 2)
        self.assertEqual([s["date"] for s in result.generated_sessions], ["2026-02-09", "2026-02-16"])
        session = ClassSession.objects.get(recurring_class=self.monday, date=date(2026, 2, 9))
        self.assertEqual(session.start_time, datetime(2026, 2, 9, 16, 0, tzinfo=dt_timezone.utc))
        self.assertEqual(session.end_time, datetime(2026, 2, 9, 17, 0, tzinfo=dt_timezone.utc))
        self.assertFalse(AttendanceRecord.objects.exists())

    def test_seed_attendance(self):
        result = self._generate(class_id=self.monday.id, seed_attendance=True)
        self.assertEqual(result.generated_sessions[0]["attendance"], {"generatedCount": 3})
        self.assertEqual(
            AttendanceRecord.objects.filter(status=AttendanceRecord.STATUS_PRESENT).count(), 6
        )

    def test_regeneration_keeps_sessions_with_attendance(self):
        self._generate(class_id=self.monday.id)
        first = ClassSession.objects.get(date=date(2026, 2, 9))
        second = ClassSession.objects.get(date=date(2026, 2, 16))
        AttendanceRecord.objects.create(
            session=first,
            enrollment=self.enrollments[0],
            student=self.students[0],
            status=AttendanceRecord.STATUS_ABSENT,
        )

        result = self._generate(class_id=self.monday.id)

        self.assertEqual(result.generated_count, 1)
        self.assertEqual(result.skipped_sessions, [{
            "sessionId": first.id,
            "classId": self.monday.id,
            "date": "2026-02-09",
            "reason": "attendance_exists",
            "attendanceCount": 1,
        }])
        self.assertTrue(ClassSession.objects.filter(id=first.id).exists())
        self.assertFalse(ClassSession.objects.filter(id=second.id).exists())
        self.assertEqual(ClassSession.objects.filter(recurring_class=self.monday).count(), 2)
        self.assertEqual(AttendanceRecord.objects.get().status, AttendanceRecord.STATUS_ABSENT)

    def test_all_classes_and_failure_isolation(self):
        tuesday = make_class(self.academy, self.coach, name="Tuesday Seniors", day=2)
        repository = FailingRepository(failing_class_id=tuesday.id)

        result = SessionMaterializer(repository).generate_sessions(window_start=WINDOW_START, weeks_ahead=2)

        self.assertEqual(result.generated_count, 2)
        self.assertEqual(len(result.failed_classes), 1)
        self.assertEqual(result.failed_classes[0]["classId"], tuesday.id)
        self.assertIn("court booking system unavailable", result.failed_classes[0]["error"])
        self.assertFalse(ClassSession.objects.filter(recurring_class=tuesday).exists())
        self.assertEqual(ClassSession.objects.filter(recurring_class=self.monday).count(), 2)

    def test_academy_scope(self):
        other = make_academy("other-academy")
        other_class = make_class(other, make_coach(other, name="Coach Other"), name="Other", day=1)
        self._generate(academy_id=self.academy.id)
        self.assertFalse(ClassSession.objects.filter(recurring_class=other_class).exists())

    def test_non_recurring_classes_skipped(self):
        self.monday.is_recurring = False
        self.monday.save()
        result = self._generate()
        self.assertEqual(result.generated_count, 0)

    def test_invalid_weeks(self):
        for weeks in (0, 53):
            with self.assertRaises(ValidationError):
                self._generate(weeks_ahead=weeks)

    @override_settings(SESSION_GENERATION_WEEKS_AHEAD=0)
    def test_explicit_window_end_ignores_weeks_ahead(self):
        result = SessionMaterializer().generate_sessions(
            class_id=self.monday.id, window_start=WINDOW_START, window_end=WINDOW_START + timedelta(days=7),
        )
        self.assertEqual([s["date"] for s in result.generated_sessions], ["2026-02-09"])

    def test_unknown_class(self):
        with self.assertRaises(NotFoundError):
            self._generate(class_id=999999)

    def test_get_or_create_session_for_date(self):
        materializer = SessionMaterializer()
        session, created = materializer.get_or_create_session_for_date(self.monday.id, date(2026, 3, 2))
        self.assertTrue(created)
        self.assertEqual(session.attendance_records.count(), 3)
        again, created = materializer.get_or_create_session_for_date(self.monday.id, date(2026, 3, 2))
        self.assertFalse(created)
        self.assertEqual(again.id, session.id)
        self.assertEqual(AttendanceRecord.objects.count(), 3)

    def test_cleanup_old_sessions(self):
        materializer = SessionMaterializer()
        today = timezone.localdate()
        old, _ = materializer.get_or_create_session_for_date(self.monday.id, today - timedelta(days=120))
        recent, _ = materializer.get_or_create_session_for_date(self.monday.id, today - timedelta(days=10))

        self.assertEqual(materializer.cleanup_old_sessions(days_old=90), 1)
        self.assertFalse(ClassSession.objects.filter(id=old.id).exists())
        self.assertTrue(ClassSession.objects.filter(id=recent.id).exists())
        self.assertEqual(AttendanceRecord.objects.filter(session_id=old.id).count(), 0)

    def test_management_commands(self):
        out = StringIO()
        call_command("generate_sessions", "--class-id", str(self.monday.id), "--weeks", "1", stdout=out)
        self.assertIn("Generated", out.getvalue())
        out = StringIO()
        call_command("cleanup_sessions", "--days", "365", stdout=out)
        self.assertIn("Deleted 0 sessions", out.getvalue())


@override_settings(TIME_ZONE="UTC")
class SessionAPITests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.academy = make_academy()
        self.admin = make_user(self.academy)
        self.coach = make_coach(self.academy)
        self.monday = make_class(self.academy, self.coach, day=1, start=time(16, 0), end=time(17, 0))
        enroll(self.monday, make_student(self.academy))

    def test_generate_endpoint(self):
        resp = self.client.post(
            "/api/sessions/generate", {"classId": self.monday.id, "weeksAhead": 3}, format="json",
            **auth_header(self.admin),
        )
        self.assertEqual(resp.status_code, 200, resp.data)
        self.assertEqual(resp.data["generatedCount"], 3)
        self.assertEqual(resp.data["failedClasses"], [])

    def test_generate_rejects_bad_weeks(self):
        resp = self.client.post("/api/sessions/generate", {"weeksAhead": 100}, format="json",
                                **auth_header(self.admin))
        self.assertEqual(resp.status_code, 400)

    def test_generate_for_other_academy_class_forbidden(self):
        other = make_academy("other-academy")
        foreign = make_class(other, make_coach(other, name="Coach Other"), name="Foreign")
        resp = self.client.post("/api/sessions/generate", {"classId": foreign.id}, format="json",
                                **auth_header(self.admin))
        self.assertEqual(resp.status_code, 403)

    def test_generate_attendance_endpoint(self):
        session, _ = SessionMaterializer().get_or_create_session_for_date(self.monday.id, date(2026, 2, 9))
        AttendanceRecord.objects.filter(session=session).delete()
        url = "/api/sessions/generate-attendance"
        resp = self.client.post(url, {"sessionId": session.id}, format="json", **auth_header(self.admin))
        self.assertEqual(resp.data, {"generatedCount": 1})
        resp = self.client.post(url, {"sessionId": session.id}, format="json", **auth_header(self.admin))
        self.assertEqual(resp.data, {"alreadyExists": True, "existingCount": 1})
        resp = self.client.post(url, {"sessionId": 999999}, format="json", **auth_header(self.admin))
        self.assertEqual(resp.status_code, 404)

    def test_sessions_list_and_week(self):
        SessionMaterializer().get_or_create_session_for_date(self.monday.id, date(2026, 2, 9))
        resp = self.client.get(f"/api/sessions/?classId={self.monday.id}&startDate=2026-02-01",
                               **auth_header(self.admin))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(len(resp.data), 1)
        self.assertEqual(len(resp.data[0]["attendance"]), 1)

        resp = self.client.get("/api/schedule/week?year=2026&weekNumber=7", **auth_header(self.admin))
        self.assertEqual(resp.status_code, 200)
        self.assertTrue(resp.data["startDate"].startswith("2026-02-09"))
