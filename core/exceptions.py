"""
Domain exceptions raised by service code.
Mapped to HTTP responses by config.exceptions.custom_exception_handler.
"""


class AcademyError(Exception):
    """Base class for domain errors; carries a client-safe message."""
    code = 'error'

    def __init__(self, message=None):
        self.message = message or self.__class__.__doc__ or 'Error'
        super().__init__(self.message)


class NotFoundError(AcademyError):
    """Referenced object does not exist."""
    code = 'not_found'


class ScheduleConflictError(AcademyError):
    """Coach is already booked during this time."""
    code = 'schedule_conflict'

    def __init__(self, message=None, conflicts=None):
        super().__init__(message)
        self.conflicts = list(conflicts or [])
