"""
Attendance aggregation, report endpoints and exports; weekly coach payouts.
"""
import io
from datetime import datetime, time, timedelta
from decimal import Decimal

import openpyxl
from django.test import SimpleTestCase, TestCase, override_settings
from django.utils import timezone
from rest_framework.test import APIClient

from attendance.models import AttendanceRecord
from attendance.services.aggregation import AttendanceStats, aggregate, summary_report
from classes.models import ClassSession
from coaches.models import Coach
from coaches.services import build_coach_reports
from core.dates import get_week_dates

from .helpers import auth_header, enroll, make_academy, make_class, make_coach, make_student, make_user


class AggregateTests(SimpleTestCase):
    ROWS = [
        {"student_id": 1, "session_id": 10, "status": "PRESENT"},
        {"student_id": 1, "session_id": 11, "status": "ABSENT"},
        {"student_id": 2, "session_id": 10, "status": "LATE"},
        {"student_id": 1, "session_id": 12, "status": "LATE"},
    ]

    def test_groups_by_key(self):
        stats = aggregate(self.ROWS, "student_id")
        self.assertEqual(list(stats), [1, 2])
        self.assertEqual(stats[1], AttendanceStats(total=3, present=1, late=1, absent=1))
        self.assertEqual(stats[2].attendance_rate, 100.0)
        self.assertEqual(stats[1].attendance_rate, 66.67)

    def test_callable_key_and_empty(self):
        self.assertEqual(aggregate([], "student_id"), {})
        by_session = aggregate(self.ROWS, lambda r: r["session_id"])
        self.assertEqual(by_session[10].total, 2)
        self.assertEqual(AttendanceStats().attendance_rate, 0.0)

    def test_summary(self):
        summary = summary_report(self.ROWS)
        self.assertEqual(summary["totalRecords"], 4)
        self.assertEqual(summary["totalSessions"], 3)
        self.assertEqual(summary["totalStudents"], 2)
        self.assertEqual(summary["attendanceRate"], 75.0)


class AttendanceReportAPITests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.academy = make_academy()
        self.admin = make_user(self.academy)
        coach = make_coach(self.academy)
        self.recurring_class = make_class(self.academy, coach, name="Juniors")
        self.ana = make_student(self.academy, name="Ana")
        self.ben = make_student(self.academy, name="Ben")
        enrollments = enroll(self.recurring_class, self.ana, self.ben)
        today = timezone.localdate()
        for offset, statuses in ((3, ("PRESENT", "ABSENT")), (10, ("LATE", "PRESENT")), (60, ("ABSENT", "ABSENT"))):
            day = today - timedelta(days=offset)
            session = ClassSession.objects.create(
                recurring_class=self.recurring_class,
                date=day,
                start_time=timezone.make_aware(datetime.combine(day, time(16, 0))),
                end_time=timezone.make_aware(datetime.combine(day, time(17, 0))),
            )
            for enrollment, status in zip(enrollments, statuses):
                AttendanceRecord.objects.create(
                    session=session, enrollment=enrollment, student=enrollment.student, status=status,
                )

    def test_student_report_month(self):
        resp = self.client.get("/api/reports/attendance?type=student&period=month", **auth_header(self.admin))
        self.assertEqual(resp.status_code, 200, resp.data)
        rows = {r["studentName"]: r for r in resp.data["data"]}
        self.assertEqual(rows["Ana"]["totalSessions"], 2)
        self.assertEqual(rows["Ana"]["attendanceRate"], 100.0)
        self.assertEqual(rows["Ben"]["absent"], 1)
        self.assertEqual(rows["Ben"]["attendanceRate"], 50.0)

    def test_class_and_summary_reports(self):
        resp = self.client.get("/api/reports/attendance?type=class&period=quarter", **auth_header(self.admin))
        self.assertEqual(resp.data["data"][0]["sessionsHeld"], 3)
        self.assertEqual(resp.data["data"][0]["totalSessions"], 6)

        resp = self.client.get("/api/reports/attendance?type=summary&period=week", **auth_header(self.admin))
        self.assertEqual(resp.data["data"]["totalRecords"], 2)

    def test_invalid_period_and_type(self):
        resp = self.client.get("/api/reports/attendance?period=decade", **auth_header(self.admin))
        self.assertEqual(resp.status_code, 400)
        resp = self.client.get("/api/reports/attendance?type=coach", **auth_header(self.admin))
        self.assertEqual(resp.status_code, 400)

    def test_other_academy_sees_nothing(self):
        other = make_user(make_academy("other-academy"), email="other@other.test")
        resp = self.client.get("/api/reports/attendance?type=summary", **auth_header(other))
        self.assertEqual(resp.data["data"]["totalRecords"], 0)

    def test_csv_export(self):
        resp = self.client.get("/api/reports/attendance/export?format=csv", **auth_header(self.admin))
        self.assertEqual(resp.status_code, 200)
        self.assertIn("attachment;", resp["Content-Disposition"])
        text = resp.content.decode("utf-8")
        self.assertTrue(text.startswith("\ufeffStudent ID,Student"))
        self.assertIn("Ana", text)

    def test_xlsx_export(self):
        resp = self.client.get("/api/reports/attendance/export?format=xlsx&period=quarter",
                               **auth_header(self.admin))
        self.assertEqual(resp.status_code, 200)
        wb = openpyxl.load_workbook(io.BytesIO(resp.content))
        ws = wb.active
        self.assertEqual(ws["B1"].value, "Student")
        self.assertEqual(ws.max_row, 3)

    def test_unknown_export_format(self):
        resp = self.client.get("/api/reports/attendance/export?format=pdf", **auth_header(self.admin))
        self.assertEqual(resp.status_code, 400)


@override_settings(TIME_ZONE="UTC")
class CoachReportTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.academy = make_academy()
        self.admin = make_user(self.academy)
        self.hourly = make_coach(self.academy, name="Hourly Coach", hourly_rate=Decimal("40.00"))
        self.flat = make_coach(self.academy, name="Flat Coach", payment_type=Coach.PAYMENT_PER_SESSION,
                               session_rate=Decimal("55.00"))
        self.long_class = make_class(self.academy, self.hourly, name="Long", day=1, start=time(16, 0),
                                     end=time(17, 30))
        self.flat_class = make_class(self.academy, self.flat, name="Flat", day=2, start=time(9, 0),
                                     end=time(10, 0))
        # week 7 of 2026: Monday Feb 9 - Sunday Feb 15
        self._session(self.long_class, datetime(2026, 2, 9, 16, 0), datetime(2026, 2, 9, 17, 30))
        self._session(self.flat_class, datetime(2026, 2, 10, 9, 0), datetime(2026, 2, 10, 10, 0))
        self._session(self.long_class, datetime(2026, 2, 16, 16, 0), datetime(2026, 2, 16, 17, 30))

    def _session(self, recurring_class, start, end):
        return ClassSession.objects.create(
            recurring_class=recurring_class,
            date=start.date(),
            start_time=timezone.make_aware(start),
            end_time=timezone.make_aware(end),
        )

    def test_build_reports(self):
        start, end = get_week_dates(2026, 7)
        reports = build_coach_reports(start, end)
        self.assertEqual([r["coachName"] for r in reports], ["Hourly Coach", "Flat Coach"])
        hourly, flat = reports
        self.assertEqual(hourly["totalSessions"], 1)
        self.assertEqual(hourly["totalHours"], Decimal("1.50"))
        self.assertEqual(hourly["paymentAmount"], Decimal("60.00"))
        self.assertEqual(flat["paymentAmount"], Decimal("55.00"))

    def test_report_endpoint_filters_coach(self):
        resp = self.client.get(f"/api/reports/coaches?year=2026&week=7&coachId={self.flat.id}",
                               **auth_header(self.admin))
        self.assertEqual(resp.status_code, 200, resp.data)
        self.assertEqual(resp.data["weekNumber"], 7)
        self.assertEqual(len(resp.data["coaches"]), 1)
        self.assertEqual(resp.data["coaches"][0]["coachId"], self.flat.id)

    def test_week_without_sessions(self):
        resp = self.client.get("/api/reports/coaches?year=2026&week=20", **auth_header(self.admin))
        self.assertEqual(resp.data["coaches"], [])
