"""
Coach double-booking checks for recurring classes.

Two classes conflict when they share a coach and day_of_week and their
time-of-day ranges overlap as half-open intervals [start, end). Touching at a
boundary (one ends exactly when the other starts) is not a conflict.
Courts are not checked.
"""
import logging

from django.core.exceptions import ValidationError

from core.dates import TimeOfDay
from core.exceptions import ScheduleConflictError
from ..repository import ScheduleRepository

logger = logging.getLogger(__name__)


def intervals_overlap(start_a, end_a, start_b, end_b):
    return start_a < end_b and end_a > start_b


class ConflictChecker:

    def __init__(self, repository=None):
        self.repository = repository or ScheduleRepository()

    def find_conflicts(self, coach_id, day_of_week, start_time, end_time, exclude_class_id=None):
        """Classes of this coach on this day whose slot overlaps [start_time, end_time)."""
        start = TimeOfDay.parse(start_time)
        end = TimeOfDay.parse(end_time)
        if not start < end:
            raise ValidationError('End time must be after start time.')

        existing = self.repository.classes_for_coach_on_day(coach_id, day_of_week, exclude_class_id)
        return [
            cls for cls in existing
            if intervals_overlap(
                TimeOfDay.from_time(cls.start_time), TimeOfDay.from_time(cls.end_time), start, end,
            )
        ]

    def has_conflict(self, coach_id, day_of_week, start_time, end_time, exclude_class_id=None):
        return bool(self.find_conflicts(coach_id, day_of_week, start_time, end_time, exclude_class_id))

    def ensure_no_conflict(self, coach_id, day_of_week, start_time, end_time, exclude_class_id=None):
        conflicts = self.find_conflicts(coach_id, day_of_week, start_time, end_time, exclude_class_id)
        if conflicts:
            names = ', '.join(c.name for c in conflicts)
            logger.info(
                f'Rejected slot for coach {coach_id} day {day_of_week} '
                f'{TimeOfDay.parse(start_time)}-{TimeOfDay.parse(end_time)}: overlaps {names}'
            )
            raise ScheduleConflictError(
                f'Coach is already booked during this time ({names}).',
                conflicts=conflicts,
            )
