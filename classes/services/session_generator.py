"""
Materialize dated ClassSession rows from recurring class rules.

For every target class the generator walks the window in 7-day strides and,
per candidate date:
  - session exists and has attendance  -> skipped (reason "attendance_exists")
  - session exists without attendance  -> deleted and recreated
  - no session                         -> created

Each class runs in its own savepoint: a failure rolls back that class only,
is logged, and is reported in failed_classes; other classes still complete.
"""
import logging
from dataclasses import dataclass, field
from datetime import timedelta

from django.conf import settings
from django.core.exceptions import ValidationError
from django.utils import timezone

from attendance.services.initializer import AttendanceInitializer
from core.dates import combine, day_of_week
from ..repository import ScheduleRepository

logger = logging.getLogger(__name__)

SKIP_ATTENDANCE_EXISTS = 'attendance_exists'
MAX_WEEKS_AHEAD = 52


@dataclass
class GenerationResult:
    generated_count: int = 0
    generated_sessions: list = field(default_factory=list)
    skipped_sessions: list = field(default_factory=list)
    failed_classes: list = field(default_factory=list)

    def merge(self, other):
        self.generated_count += other.generated_count
        self.generated_sessions.extend(other.generated_sessions)
        self.skipped_sessions.extend(other.skipped_sessions)
        self.failed_classes.extend(other.failed_classes)

    def as_dict(self):
        return {
            'generatedCount': self.generated_count,
            'generatedSessions': self.generated_sessions,
            'skippedSessions': self.skipped_sessions,
            'failedClasses': self.failed_classes,
        }


def candidate_dates(class_day, start_time, window_start, window_end):
    """
    Dates on which the class falls inside the window.
    Anchors step 7 days from the window's first local date; each anchor lands on the
    next occurrence of class_day. A date counts only if the class's start timestamp
    on that date lies within [window_start, window_end].
    """
    anchor = timezone.localdate(window_start)
    last = timezone.localdate(window_end)
    while anchor <= last:
        candidate = anchor + timedelta(days=(class_day - day_of_week(anchor) + 7) % 7)
        if window_start <= combine(candidate, start_time) <= window_end:
            yield candidate
        anchor += timedelta(days=7)


def _session_payload(session, recurring_class, attendance=None):
    payload = {
        'id': session.id,
        'classId': recurring_class.id,
        'className': recurring_class.name,
        'date': session.date.isoformat(),
        'startTime': session.start_time.isoformat(),
        'endTime': session.end_time.isoformat(),
    }
    if attendance is not None:
        payload['attendance'] = attendance
    return payload


class SessionMaterializer:

    def __init__(self, repository=None, initializer=None):
        self.repository = repository or ScheduleRepository()
        self.initializer = initializer or AttendanceInitializer(self.repository)

    def generate_sessions(self, class_id=None, window_start=None, window_end=None,
                          weeks_ahead=None, seed_attendance=None, academy_id=None):
        """
        class_id: one class (NotFoundError if missing); None means every recurring class,
        optionally limited to one academy.
        window_start defaults to now; window_end to window_start + weeks_ahead weeks.
        """
        if seed_attendance is None:
            seed_attendance = settings.SESSION_GENERATION_SEED_ATTENDANCE

        window_start = window_start or timezone.now()
        if timezone.is_naive(window_start):
            window_start = timezone.make_aware(window_start)
        if window_end is None:
            if weeks_ahead is None:
                weeks_ahead = settings.SESSION_GENERATION_WEEKS_AHEAD
            if not 1 <= weeks_ahead <= MAX_WEEKS_AHEAD:
                raise ValidationError(f'weeksAhead must be between 1 and {MAX_WEEKS_AHEAD}')
            window_end = window_start + timedelta(weeks=weeks_ahead)
        if window_end < window_start:
            raise ValidationError('Window end must not be before window start')

        if class_id is not None:
            targets = [self.repository.get_class(class_id)]
        else:
            targets = self.repository.get_recurring_classes(academy_id)

        result = GenerationResult()
        for recurring_class in targets:
            try:
                with self.repository.run_in_transaction():
                    class_result = self._generate_for_class(
                        recurring_class, window_start, window_end, seed_attendance,
                    )
            except Exception as exc:
                logger.exception(f'Session generation failed for class {recurring_class.id}')
                result.failed_classes.append({
                    'classId': recurring_class.id,
                    'className': recurring_class.name,
                    'error': str(exc),
                })
                continue
            result.merge(class_result)

        logger.info(
            f'Session generation {window_start:%Y-%m-%d} -> {window_end:%Y-%m-%d}: '
            f'{result.generated_count} created, {len(result.skipped_sessions)} skipped, '
            f'{len(result.failed_classes)} classes failed'
        )
        return result

    def _generate_for_class(self, recurring_class, window_start, window_end, seed_attendance):
        result = GenerationResult()
        existing_by_date = {
            s.date: s
            for s in self.repository.sessions_in_window(
                recurring_class.id,
                timezone.localdate(window_start),
                timezone.localdate(window_end),
            )
        }

        for session_date in candidate_dates(
            recurring_class.day_of_week, recurring_class.start_time, window_start, window_end,
        ):
            existing = existing_by_date.get(session_date)
            if existing is not None:
                if existing.attendance_count:
                    result.skipped_sessions.append({
                        'sessionId': existing.id,
                        'classId': recurring_class.id,
                        'date': session_date.isoformat(),
                        'reason': SKIP_ATTENDANCE_EXISTS,
                        'attendanceCount': existing.attendance_count,
                    })
                    continue
                logger.debug(f'Replacing attendance-less session {existing.id} on {session_date}')
                self.repository.delete_session(existing)

            session = self.repository.create_session(
                recurring_class,
                session_date,
                combine(session_date, recurring_class.start_time),
                combine(session_date, recurring_class.end_time),
                notes=f'Auto-generated session for {recurring_class.name}',
            )
            attendance = self.initializer.seed(session) if seed_attendance else None
            result.generated_sessions.append(_session_payload(session, recurring_class, attendance))
            result.generated_count += 1

        return result

    def get_or_create_session_for_date(self, class_id, on_date):
        """
        Session for a class on a given date, created (and seeded with attendance)
        on first access. Returns (session, created).
        """
        recurring_class = self.repository.get_class(class_id)
        session = self.repository.find_session_on_date(class_id, on_date)
        if session is not None:
            return session, False

        with self.repository.run_in_transaction():
            session = self.repository.create_session(
                recurring_class,
                on_date,
                combine(on_date, recurring_class.start_time),
                combine(on_date, recurring_class.end_time),
                notes=f'Session created for {recurring_class.name} on {on_date.isoformat()}',
            )
            self.initializer.seed(session)
        logger.info(f'Created session {session.id} for class {class_id} on {on_date}')
        return session, True

    def cleanup_old_sessions(self, days_old=None):
        """Delete sessions dated more than days_old days ago; returns deleted count."""
        if days_old is None:
            days_old = settings.SESSION_CLEANUP_DAYS
        if days_old < 0:
            raise ValidationError('daysOld must not be negative')
        cutoff = timezone.localdate() - timedelta(days=days_old)
        deleted = self.repository.delete_sessions_before(cutoff)
        logger.info(f'Removed {deleted} sessions dated before {cutoff}')
        return deleted
