"""
Coach-facing attendance marking.

Entries are upserted inside one transaction; guardian notifications are sent
afterwards for records whose status is in ATTENDANCE_NOTIFY_STATUSES and that
have not been notified yet. Notification problems never fail the request.
"""
import logging

from django.conf import settings
from django.core.exceptions import ValidationError

from attendance.models import AttendanceRecord
from classes.repository import ScheduleRepository
from core.exceptions import NotFoundError
from core.utils import parse_int
from notifications.services import NotificationDispatcher

logger = logging.getLogger(__name__)

VALID_STATUSES = {choice for choice, _ in AttendanceRecord.STATUS_CHOICES}
ADHOC_ENROLLMENT_ID = 0


def parse_status(value):
    status = str(value or '').strip().upper()
    if status not in VALID_STATUSES:
        raise ValidationError(f'Invalid status {value!r}; expected one of {", ".join(sorted(VALID_STATUSES))}')
    return status


class AttendanceMarker:

    def __init__(self, repository=None, dispatcher=None):
        self.repository = repository or ScheduleRepository()
        self._dispatcher = dispatcher

    @property
    def dispatcher(self):
        if self._dispatcher is None:
            self._dispatcher = NotificationDispatcher()
        return self._dispatcher

    def mark_attendance(self, session_id, records, marked_by=None):
        """
        records: [{studentId, enrollmentId?, status, remarks?}]
          enrollmentId > 0  -> must belong to the session's class
          enrollmentId == 0 -> ad-hoc attendee (no enrollment)
          missing/None      -> enrollment looked up from (student, class)
        Returns {recordsProcessed, absentCount, notifications}.
        """
        session = self.repository.get_session(session_id)
        if not isinstance(records, list) or not records:
            raise ValidationError('records must be a non-empty list')
        entries = [self._parse_entry(raw) for raw in records]

        saved = {}
        with self.repository.run_in_transaction():
            for entry in entries:
                record = self._upsert(session, entry, marked_by)
                saved[record.id] = record

        absent_count = sum(1 for r in saved.values() if r.status == AttendanceRecord.STATUS_ABSENT)
        notifications = self.send_pending_notifications(saved.values())
        logger.info(
            f'Session {session.id}: {len(saved)} attendance records saved, '
            f'{absent_count} absent, {len(notifications)} notified'
        )
        return {
            'recordsProcessed': len(saved),
            'absentCount': absent_count,
            'notifications': notifications,
        }

    def update_attendance_record(self, record_id, status=None, remarks=None, marked_by=None):
        record = self.repository.get_attendance_record(record_id)
        fields = ['updated_at']
        if status is not None:
            record.status = parse_status(status)
            fields.append('status')
        if remarks is not None:
            record.remarks = remarks or None
            fields.append('remarks')
        if marked_by is not None:
            record.marked_by = marked_by
            fields.append('marked_by')
        record.save(update_fields=fields)
        self.send_pending_notifications([record])
        return record

    def send_pending_notifications(self, records):
        """Notify guardians for notifiable, not-yet-notified records. Never raises."""
        notify_statuses = {s.upper() for s in settings.ATTENDANCE_NOTIFY_STATUSES}
        results = []
        for record in records:
            if record.status not in notify_statuses or record.notification_sent:
                continue
            summary = {'recordId': record.id, 'studentId': record.student_id}
            try:
                outcome = self.dispatcher.notify_guardian(record)
                summary.update({channel.lower(): r.as_dict() for channel, r in outcome.items()})
            except Exception as exc:
                logger.exception(f'Notification dispatch failed for attendance record {record.id}')
                summary['error'] = str(exc)
            self.repository.mark_notification_sent(record)
            results.append(summary)
        return results

    def _parse_entry(self, raw):
        if not isinstance(raw, dict):
            raise ValidationError('Each attendance entry must be an object')
        enrollment_id = raw.get('enrollmentId')
        student_id = raw.get('studentId')
        return {
            'student_id': parse_int(student_id, 'studentId') if student_id not in (None, '') else None,
            'enrollment_id': parse_int(enrollment_id, 'enrollmentId') if enrollment_id is not None else None,
            'status': parse_status(raw.get('status')),
            'remarks': (raw.get('remarks') or None),
        }

    def _upsert(self, session, entry, marked_by):
        class_id = session.recurring_class_id
        student_id = entry['student_id']
        enrollment_id = entry['enrollment_id']

        if enrollment_id == ADHOC_ENROLLMENT_ID:
            if student_id is None:
                raise ValidationError('studentId is required for ad-hoc attendance')
            student = self.repository.get_student(student_id)
            class_academy_id = session.recurring_class.academy_id
            if student.academy_id is not None and student.academy_id != class_academy_id:
                raise ValidationError(f'Student {student_id} belongs to another academy')
            enrollment = None
        elif enrollment_id is not None:
            enrollment = self.repository.get_enrollment(enrollment_id)
            if enrollment.recurring_class_id != class_id:
                raise ValidationError(f'Enrollment {enrollment_id} does not belong to this session\'s class')
            if student_id is not None and student_id != enrollment.student_id:
                raise ValidationError(f'Enrollment {enrollment_id} belongs to a different student')
            student_id = enrollment.student_id
        else:
            if student_id is None:
                raise ValidationError('studentId or enrollmentId is required')
            enrollment = self.repository.find_enrollment(class_id, student_id)
            if enrollment is None:
                raise NotFoundError(f'Enrollment not found for student {student_id}')

        return self.repository.upsert_attendance(session, student_id, enrollment, {
            'status': entry['status'],
            'remarks': entry['remarks'],
            'marked_by': marked_by,
        })
