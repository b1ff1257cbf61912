"""
Attendance API views for coaches and admins
"""
import logging

from django.contrib.auth import get_user_model
from django.db.models import Prefetch
from django.utils import timezone
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated

from accounts.permissions import IsAcademyStaff
from classes.models import ClassSession, RecurringClass
from classes.repository import ScheduleRepository
from classes.serializers import ClassSessionSerializer, RecurringClassSerializer
from classes.services.session_generator import SessionMaterializer
from core.dates import day_of_week
from core.utils import belongs_to_user_academy, filter_by_academy, parse_date, parse_int
from ..models import AttendanceRecord
from ..serializers import AttendanceRecordSerializer, AttendanceUpdateSerializer
from ..services.marking import AttendanceMarker

logger = logging.getLogger(__name__)

User = get_user_model()


def _attendance_prefetch():
    return Prefetch('attendance_records', queryset=AttendanceRecord.objects.select_related('student'))


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAcademyStaff])
def attendance_view(request):
    """
    GET /api/attendance/?sessionId=       attendance rows of one session
    GET /api/attendance/?classId=&date=   session for that date (created and seeded on first access)
    GET /api/attendance/                 today's classes with today's sessions
    """
    repository = ScheduleRepository()
    session_id = request.query_params.get('sessionId')
    if session_id:
        session = repository.get_session_with_attendance(parse_int(session_id, 'sessionId'))
        if not belongs_to_user_academy(session.recurring_class, request.user):
            return Response({'detail': 'Access denied'}, status=status.HTTP_403_FORBIDDEN)
        return Response(AttendanceRecordSerializer(session.attendance_records.all(), many=True).data)

    class_id = request.query_params.get('classId')
    on_date = request.query_params.get('date')
    if class_id and on_date:
        class_id = parse_int(class_id, 'classId')
        on_date = parse_date(on_date, 'date')
        if not belongs_to_user_academy(repository.get_class(class_id), request.user):
            return Response({'detail': 'Access denied'}, status=status.HTTP_403_FORBIDDEN)
        session, created = SessionMaterializer(repository).get_or_create_session_for_date(class_id, on_date)
        session = repository.get_session_with_attendance(session.id)
        data = ClassSessionSerializer(session).data
        data['created'] = created
        return Response(data, status=status.HTTP_201_CREATED if created else status.HTTP_200_OK)

    today = timezone.localdate()
    classes = RecurringClass.objects.filter(day_of_week=day_of_week(today)).select_related('coach', 'court')
    classes = filter_by_academy(classes, request.user)
    sessions = ClassSession.objects.filter(date=today).prefetch_related(_attendance_prefetch())
    sessions_by_class = {s.recurring_class_id: s for s in sessions.filter(recurring_class__in=classes)}
    result = []
    for recurring_class in classes:
        item = RecurringClassSerializer(recurring_class).data
        session = sessions_by_class.get(recurring_class.id)
        item['session'] = ClassSessionSerializer(session).data if session else None
        result.append(item)
    return Response({'date': today.isoformat(), 'classes': result})


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAcademyStaff])
def mark_attendance_view(request):
    """
    POST /api/attendance/mark
    Body: {sessionId, records: [{studentId, enrollmentId?, status, remarks?}], markedBy?}
    `attendance` is accepted as an alias of `records`. markedBy defaults to the caller.
    Returns: {recordsProcessed, absentCount, notifications}
    """
    repository = ScheduleRepository()
    session_id = parse_int(request.data.get('sessionId'), 'sessionId')
    session = repository.get_session(session_id)
    if not belongs_to_user_academy(session.recurring_class, request.user):
        return Response({'detail': 'Access denied'}, status=status.HTTP_403_FORBIDDEN)

    records = request.data.get('records')
    if records is None:
        records = request.data.get('attendance')

    marked_by = request.user
    marked_by_id = request.data.get('markedBy')
    if marked_by_id not in (None, ''):
        marked_by_id = parse_int(marked_by_id, 'markedBy')
        if marked_by_id != request.user.id:
            marked_by = filter_by_academy(User.objects.all(), request.user).filter(id=marked_by_id).first()
            if marked_by is None:
                return Response({'detail': 'markedBy user not found'}, status=status.HTTP_404_NOT_FOUND)

    result = AttendanceMarker(repository).mark_attendance(session_id, records, marked_by=marked_by)
    return Response(result, status=status.HTTP_200_OK)


@api_view(['GET', 'PATCH'])
@permission_classes([IsAuthenticated, IsAcademyStaff])
def attendance_record_view(request, pk):
    """
    GET /api/attendance/{id}
    PATCH /api/attendance/{id} {status?, remarks?}
    """
    repository = ScheduleRepository()
    record = repository.get_attendance_record(pk)
    if not belongs_to_user_academy(record.session.recurring_class, request.user):
        return Response({'detail': 'Access denied'}, status=status.HTTP_403_FORBIDDEN)

    if request.method == 'GET':
        return Response(AttendanceRecordSerializer(record).data)

    serializer = AttendanceUpdateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    record = AttendanceMarker(repository).update_attendance_record(
        pk,
        status=serializer.validated_data.get('status'),
        remarks=serializer.validated_data.get('remarks', None),
        marked_by=request.user,
    )
    return Response(AttendanceRecordSerializer(record).data)
