"""
Calendar helpers: Sunday-based day of week, wall-clock combine, report weeks.
"""
from datetime import date, datetime, time, timezone as dt_timezone

from django.core.exceptions import ValidationError
from django.test import SimpleTestCase, override_settings

from core.dates import TimeOfDay, combine, current_week_number, day_of_week, get_week_dates


class DayOfWeekTests(SimpleTestCase):
    def test_sunday_is_zero(self):
        self.assertEqual(day_of_week(date(2026, 2, 8)), 0)
        self.assertEqual(day_of_week(date(2026, 2, 9)), 1)
        self.assertEqual(day_of_week(date(2026, 2, 14)), 6)


class TimeOfDayTests(SimpleTestCase):
    def test_parse_strings(self):
        self.assertEqual(TimeOfDay.parse("16:30"), TimeOfDay(16, 30))
        self.assertEqual(TimeOfDay.parse("07:05:59"), TimeOfDay(7, 5))
        self.assertEqual(str(TimeOfDay.parse(time(9, 0))), "09:00")

    def test_parse_timestamp_keeps_wall_clock(self):
        self.assertEqual(TimeOfDay.parse("2026-02-09T16:00:00"), TimeOfDay(16, 0))

    def test_ordering(self):
        self.assertLess(TimeOfDay(16, 0), TimeOfDay(16, 30))

    def test_invalid_values(self):
        for bad in ("25:00", "noon", None, 1600):
            with self.subTest(value=bad):
                with self.assertRaises(ValidationError):
                    TimeOfDay.parse(bad)


@override_settings(TIME_ZONE="UTC")
class CombineTests(SimpleTestCase):
    def test_combine_is_aware_at_wall_clock(self):
        value = combine(date(2026, 2, 9), "16:00")
        self.assertEqual(value, datetime(2026, 2, 9, 16, 0, tzinfo=dt_timezone.utc))


@override_settings(TIME_ZONE="UTC")
class WeekTests(SimpleTestCase):
    def test_week_one_of_2026(self):
        # Jan 1 2026 is a Thursday
        start, end = get_week_dates(2026, 1)
        self.assertEqual(start.date(), date(2025, 12, 29))
        self.assertEqual(end.date(), date(2026, 1, 4))
        self.assertEqual((start.hour, start.minute), (0, 0))
        self.assertEqual((end.hour, end.minute, end.second), (23, 59, 59))

    def test_week_spans_seven_days(self):
        start, end = get_week_dates(2026, 7)
        self.assertEqual((end.date() - start.date()).days, 6)
        self.assertEqual(start.date(), date(2026, 2, 9))

    def test_invalid_week(self):
        with self.assertRaises(ValidationError):
            get_week_dates(2026, 0)
        with self.assertRaises(ValidationError):
            get_week_dates(2026, 54)

    def test_current_week_number(self):
        self.assertEqual(current_week_number(date(2026, 1, 1)), 1)
        self.assertEqual(current_week_number(date(2026, 1, 3)), 1)
        self.assertEqual(current_week_number(date(2026, 1, 4)), 2)
        self.assertEqual(current_week_number(date(2026, 2, 9)), 7)
