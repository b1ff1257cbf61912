"""
Data access for scheduling services.

Services receive a ScheduleRepository instance instead of touching the ORM
directly, so each query shape used by generation/attendance lives here.
"""
from django.db import transaction
from django.db.models import Count, Prefetch

from attendance.models import AttendanceRecord
from core.exceptions import NotFoundError
from students.models import Student
from .models import ClassEnrollment, ClassSession, RecurringClass


class ScheduleRepository:

    # Classes

    def get_class(self, class_id):
        try:
            return RecurringClass.objects.select_related('coach', 'court').get(id=class_id)
        except RecurringClass.DoesNotExist:
            raise NotFoundError(f'Class {class_id} not found')

    def get_recurring_classes(self, academy_id=None):
        qs = RecurringClass.objects.filter(is_recurring=True)
        if academy_id is not None:
            qs = qs.filter(academy_id=academy_id)
        return list(qs.order_by('id'))

    def get_class_with_roster(self, class_id):
        """Class with coach, court and enrollments (student loaded) prefetched."""
        qs = RecurringClass.objects.select_related('coach', 'court').prefetch_related(
            Prefetch(
                'enrollments',
                queryset=ClassEnrollment.objects.select_related('student').order_by('student__name'),
            )
        )
        try:
            return qs.get(id=class_id)
        except RecurringClass.DoesNotExist:
            raise NotFoundError(f'Class {class_id} not found')

    def classes_for_coach_on_day(self, coach_id, day_of_week, exclude_class_id=None):
        qs = RecurringClass.objects.filter(coach_id=coach_id, day_of_week=day_of_week)
        if exclude_class_id is not None:
            qs = qs.exclude(id=exclude_class_id)
        return list(qs.order_by('start_time'))

    # Sessions

    def sessions_in_window(self, class_id, start_date, end_date):
        """Sessions dated within [start_date, end_date], annotated with attendance_count."""
        return list(
            ClassSession.objects.filter(
                recurring_class_id=class_id,
                date__gte=start_date,
                date__lte=end_date,
            ).annotate(attendance_count=Count('attendance_records')).order_by('date')
        )

    def get_session(self, session_id):
        try:
            return ClassSession.objects.select_related('recurring_class').get(id=session_id)
        except ClassSession.DoesNotExist:
            raise NotFoundError(f'Session {session_id} not found')

    def get_session_with_attendance(self, session_id):
        """Session with its class and attendance records (student, enrollment) prefetched."""
        qs = ClassSession.objects.select_related('recurring_class').prefetch_related(
            Prefetch(
                'attendance_records',
                queryset=AttendanceRecord.objects.select_related('student', 'enrollment'),
            )
        )
        try:
            return qs.get(id=session_id)
        except ClassSession.DoesNotExist:
            raise NotFoundError(f'Session {session_id} not found')

    def find_session_on_date(self, class_id, on_date):
        return ClassSession.objects.filter(recurring_class_id=class_id, date=on_date).first()

    def create_session(self, recurring_class, on_date, start_time, end_time, notes=''):
        return ClassSession.objects.create(
            recurring_class=recurring_class,
            date=on_date,
            start_time=start_time,
            end_time=end_time,
            notes=notes,
        )

    def delete_session(self, session):
        session.delete()

    def delete_sessions_before(self, cutoff_date):
        """Delete sessions dated before cutoff_date; returns the number of sessions removed."""
        deleted = ClassSession.objects.filter(date__lt=cutoff_date).delete()[1]
        return deleted.get(ClassSession._meta.label, 0)

    # Enrollments / attendance

    def enrollments_for_class(self, class_id):
        return list(
            ClassEnrollment.objects.filter(recurring_class_id=class_id)
            .select_related('student').order_by('joined_at', 'id')
        )

    def get_enrollment(self, enrollment_id):
        try:
            return ClassEnrollment.objects.get(id=enrollment_id)
        except ClassEnrollment.DoesNotExist:
            raise NotFoundError(f'Enrollment {enrollment_id} not found')

    def find_enrollment(self, class_id, student_id):
        return ClassEnrollment.objects.filter(recurring_class_id=class_id, student_id=student_id).first()

    def get_student(self, student_id):
        try:
            return Student.objects.get(id=student_id)
        except Student.DoesNotExist:
            raise NotFoundError(f'Student {student_id} not found')

    def get_attendance_record(self, record_id):
        try:
            return AttendanceRecord.objects.select_related(
                'session__recurring_class', 'student', 'enrollment',
            ).get(id=record_id)
        except AttendanceRecord.DoesNotExist:
            raise NotFoundError(f'Attendance record {record_id} not found')

    def upsert_attendance(self, session, student_id, enrollment, values):
        """Update-or-create on (session, enrollment), or (session, student) for ad-hoc rows."""
        if enrollment is not None:
            lookup = {'session': session, 'enrollment': enrollment}
        else:
            lookup = {'session': session, 'student_id': student_id, 'enrollment__isnull': True}
        record, _ = AttendanceRecord.objects.update_or_create(
            defaults={'student_id': student_id, **values}, **lookup,
        )
        return record

    def mark_notification_sent(self, record):
        """Flip notification_sent false->true; returns False if it was already set."""
        updated = AttendanceRecord.objects.filter(id=record.id, notification_sent=False).update(notification_sent=True)
        record.notification_sent = True
        return bool(updated)

    def attendance_count(self, session_id):
        return AttendanceRecord.objects.filter(session_id=session_id).count()

    def create_attendance_records(self, session, enrollments, status=AttendanceRecord.STATUS_PRESENT, marked_by=None):
        records = [
            AttendanceRecord(
                session=session,
                enrollment=enrollment,
                student_id=enrollment.student_id,
                status=status,
                marked_by=marked_by,
            )
            for enrollment in enrollments
        ]
        return AttendanceRecord.objects.bulk_create(records)

    def run_in_transaction(self):
        """Atomic block; nested calls become savepoints."""
        return transaction.atomic()
