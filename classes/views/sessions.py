"""
Session generation, session listing and the week calendar helper
"""
import logging

from django.db.models import Prefetch
from django.utils import timezone
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated

from accounts.permissions import IsAcademyStaff
from attendance.models import AttendanceRecord
from attendance.services.initializer import AttendanceInitializer
from core.dates import current_week_number, get_week_dates
from core.utils import belongs_to_user_academy, is_system_admin, parse_date, parse_int
from ..models import ClassSession
from ..repository import ScheduleRepository
from ..serializers import ClassSessionSerializer
from ..services.session_generator import SessionMaterializer

logger = logging.getLogger(__name__)


def _optional_bool(value):
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ('1', 'true', 'yes', 'on')


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAcademyStaff])
def generate_sessions_view(request):
    """
    POST /api/sessions/generate
    Body: {classId?, weeksAhead?, seedAttendance?}
    Returns: {generatedCount, generatedSessions, skippedSessions, failedClasses}
    """
    repository = ScheduleRepository()
    class_id = request.data.get('classId')
    if class_id not in (None, ''):
        class_id = parse_int(class_id, 'classId')
        if not belongs_to_user_academy(repository.get_class(class_id), request.user):
            return Response({'detail': 'Access denied'}, status=status.HTTP_403_FORBIDDEN)
    else:
        class_id = None
    weeks = request.data.get('weeksAhead')
    weeks_ahead = parse_int(weeks, 'weeksAhead') if weeks not in (None, '') else None

    if class_id is None and not is_system_admin(request.user) and request.user.academy_id is None:
        return Response({'detail': 'User is not assigned to an academy'}, status=status.HTTP_403_FORBIDDEN)

    result = SessionMaterializer(repository).generate_sessions(
        class_id=class_id,
        weeks_ahead=weeks_ahead,
        seed_attendance=_optional_bool(request.data.get('seedAttendance')),
        academy_id=None if is_system_admin(request.user) else request.user.academy_id,
    )
    return Response(result.as_dict(), status=status.HTTP_200_OK)


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAcademyStaff])
def generate_attendance_view(request):
    """
    POST /api/sessions/generate-attendance
    Body: {sessionId}
    Returns: {generatedCount} or {alreadyExists: true, existingCount}
    """
    session_id = parse_int(request.data.get('sessionId'), 'sessionId')
    repository = ScheduleRepository()
    session = repository.get_session(session_id)
    if not belongs_to_user_academy(session.recurring_class, request.user):
        return Response({'detail': 'Access denied'}, status=status.HTTP_403_FORBIDDEN)
    return Response(AttendanceInitializer(repository).generate_attendance_for_session(session_id))


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAcademyStaff])
def sessions_view(request):
    """
    GET /api/sessions/?classId=&startDate=&endDate=
    Sessions of one class with their attendance, ordered by date.
    """
    class_id = parse_int(request.query_params.get('classId'), 'classId')
    recurring_class = ScheduleRepository().get_class(class_id)
    if not belongs_to_user_academy(recurring_class, request.user):
        return Response({'detail': 'Access denied'}, status=status.HTTP_403_FORBIDDEN)

    sessions = ClassSession.objects.filter(recurring_class_id=class_id).select_related('recurring_class')
    start = request.query_params.get('startDate')
    end = request.query_params.get('endDate')
    if start:
        sessions = sessions.filter(date__gte=parse_date(start, 'startDate'))
    if end:
        sessions = sessions.filter(date__lte=parse_date(end, 'endDate'))
    sessions = sessions.prefetch_related(
        Prefetch('attendance_records', queryset=AttendanceRecord.objects.select_related('student'))
    ).order_by('date')
    return Response(ClassSessionSerializer(sessions, many=True).data)


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAcademyStaff])
def schedule_week_view(request):
    """
    GET /api/schedule/week?year=&weekNumber=
    Returns {year, weekNumber, startDate, endDate}; defaults to the current week.
    """
    year_param = request.query_params.get('year')
    year = parse_int(year_param, 'year') if year_param else timezone.localdate().year
    week_param = request.query_params.get('weekNumber')
    week_number = parse_int(week_param, 'weekNumber') if week_param else current_week_number()
    start, end = get_week_dates(year, week_number)
    return Response({
        'year': year,
        'weekNumber': week_number,
        'startDate': start.isoformat(),
        'endDate': end.isoformat(),
    })
