"""
Seed attendance placeholders for a session: one PRESENT record per current
enrollment, marked by the system. No-op when the session already has records.
"""
import logging

from classes.repository import ScheduleRepository

logger = logging.getLogger(__name__)


class AttendanceInitializer:

    def __init__(self, repository=None):
        self.repository = repository or ScheduleRepository()

    def generate_attendance_for_session(self, session_id):
        """
        Returns {"generatedCount": n} or {"alreadyExists": True, "existingCount": n}.
        Raises NotFoundError if the session does not exist.
        """
        session = self.repository.get_session(session_id)
        return self.seed(session)

    def seed(self, session):
        existing = self.repository.attendance_count(session.id)
        if existing:
            return {'alreadyExists': True, 'existingCount': existing}

        enrollments = self.repository.enrollments_for_class(session.recurring_class_id)
        with self.repository.run_in_transaction():
            created = self.repository.create_attendance_records(session, enrollments)
        logger.info(f'Seeded {len(created)} attendance records for session {session.id}')
        return {'generatedCount': len(created)}
