"""
Date/time helpers for schedules and weekly reports.

Day-of-week convention used across the API: Sunday=0 .. Saturday=6.
Python's date.weekday() is Monday=0, so always go through day_of_week().
"""
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

from django.core.exceptions import ValidationError
from django.utils import timezone
from django.utils.dateparse import parse_datetime, parse_time


def day_of_week(d: date) -> int:
    """Sunday=0 .. Saturday=6."""
    return (d.weekday() + 1) % 7


@dataclass(frozen=True, order=True)
class TimeOfDay:
    """Wall-clock hour:minute; seconds and dates are never meaningful for a class slot."""
    hour: int
    minute: int = 0

    def __post_init__(self):
        if not (0 <= self.hour <= 23 and 0 <= self.minute <= 59):
            raise ValidationError(f'Invalid time of day: {self.hour}:{self.minute}')

    @classmethod
    def from_time(cls, value: time) -> 'TimeOfDay':
        return cls(value.hour, value.minute)

    @classmethod
    def parse(cls, value) -> 'TimeOfDay':
        """
        Accepts TimeOfDay, time, datetime, "HH:MM", "HH:MM:SS" or a full ISO timestamp
        (clients send e.g. "1970-01-01T16:00:00.000Z"). Aware values are read in the
        current timezone.
        """
        if isinstance(value, TimeOfDay):
            return value
        if isinstance(value, datetime):
            if timezone.is_aware(value):
                value = timezone.localtime(value)
            return cls(value.hour, value.minute)
        if isinstance(value, time):
            return cls.from_time(value)
        if isinstance(value, str):
            raw = value.strip()
            try:
                parsed = parse_datetime(raw) if 'T' in raw or ' ' in raw else parse_time(raw)
            except ValueError:
                parsed = None
            if parsed is not None:
                return cls.parse(parsed)
        raise ValidationError(f'Invalid time value: {value!r}')

    def as_time(self) -> time:
        return time(self.hour, self.minute)

    def __str__(self):
        return f'{self.hour:02d}:{self.minute:02d}'


def combine(d: date, time_of_day, tz=None) -> datetime:
    """Concrete aware timestamp for a calendar date at a wall-clock time."""
    tod = TimeOfDay.parse(time_of_day)
    naive = datetime.combine(d, tod.as_time())
    return timezone.make_aware(naive, tz or timezone.get_current_timezone())


def start_of_day(d: date, tz=None) -> datetime:
    return timezone.make_aware(datetime.combine(d, time.min), tz or timezone.get_current_timezone())


def end_of_day(d: date, tz=None) -> datetime:
    return timezone.make_aware(datetime.combine(d, time.max), tz or timezone.get_current_timezone())


def get_week_dates(year: int, week_number: int, tz=None):
    """
    (start, end) of a report week, inclusive, start-of-day to end-of-day.
    Week 1 starts on the Monday-adjusted offset from Jan 1:
    start = Jan 1 + (week - 1) * 7 - (day_of_week(Jan 1) - 1) days.
    """
    if not 1 <= week_number <= 53:
        raise ValidationError('weekNumber must be between 1 and 53')
    if not 1 <= year <= 9998:
        raise ValidationError('year is out of range')
    jan1 = date(year, 1, 1)
    offset = day_of_week(jan1) - 1
    first_day = jan1 + timedelta(days=(week_number - 1) * 7 - offset)
    last_day = first_day + timedelta(days=6)
    return start_of_day(first_day, tz), end_of_day(last_day, tz)


def current_week_number(today: date = None) -> int:
    """Week of the year counted in Sunday-started weeks from Jan 1."""
    today = today or timezone.localdate()
    jan1 = date(today.year, 1, 1)
    return ((today - jan1).days + day_of_week(jan1)) // 7 + 1
