"""
Courts, recurring classes and class rosters
"""
import logging

from django.db.models import Count
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated

from accounts.permissions import IsAcademyAdminOrReadOnly
from core.utils import filter_by_academy, belongs_to_user_academy, parse_int
from students.models import Student
from ..models import ClassEnrollment, Court, RecurringClass
from ..repository import ScheduleRepository
from ..serializers import (
    CourtSerializer,
    EnrolledStudentSerializer,
    RecurringClassDetailSerializer,
    RecurringClassSerializer,
)

logger = logging.getLogger(__name__)


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsAcademyAdminOrReadOnly])
def courts_view(request):
    """
    GET /api/courts/
    POST /api/courts/
    """
    if request.method == 'GET':
        courts = filter_by_academy(Court.objects.all(), request.user)
        return Response(CourtSerializer(courts, many=True).data)

    serializer = CourtSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    court = serializer.save(academy=request.user.academy)
    return Response(CourtSerializer(court).data, status=status.HTTP_201_CREATED)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated, IsAcademyAdminOrReadOnly])
def court_detail_view(request, pk):
    """
    GET/PUT/PATCH/DELETE /api/courts/{id}
    """
    try:
        court = Court.objects.get(id=pk)
    except Court.DoesNotExist:
        return Response({'detail': 'Court not found'}, status=status.HTTP_404_NOT_FOUND)
    if not belongs_to_user_academy(court, request.user):
        return Response({'detail': 'Access denied'}, status=status.HTTP_403_FORBIDDEN)

    if request.method == 'GET':
        return Response(CourtSerializer(court).data)

    if request.method in ('PUT', 'PATCH'):
        serializer = CourtSerializer(court, data=request.data, partial=request.method == 'PATCH')
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response(serializer.data)

    court.delete()
    return Response(status=status.HTTP_204_NO_CONTENT)


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsAcademyAdminOrReadOnly])
def classes_view(request):
    """
    GET /api/classes/?coachId=&dayOfWeek=
    POST /api/classes/: 409 when the coach is already booked for an overlapping slot
    """
    if request.method == 'GET':
        classes = RecurringClass.objects.select_related('coach', 'court').annotate(
            student_count=Count('enrollments'),
        )
        classes = filter_by_academy(classes, request.user)
        coach_id = request.query_params.get('coachId')
        if coach_id:
            classes = classes.filter(coach_id=parse_int(coach_id, 'coachId'))
        day = request.query_params.get('dayOfWeek')
        if day not in (None, ''):
            classes = classes.filter(day_of_week=parse_int(day, 'dayOfWeek'))
        return Response(RecurringClassSerializer(classes, many=True).data)

    serializer = RecurringClassSerializer(data=request.data, context={'request': request})
    serializer.is_valid(raise_exception=True)
    recurring_class = serializer.save(academy=request.user.academy)
    logger.info(f'Class {recurring_class.id} created for coach {recurring_class.coach_id}')
    return Response(RecurringClassSerializer(recurring_class).data, status=status.HTTP_201_CREATED)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated, IsAcademyAdminOrReadOnly])
def class_detail_view(request, pk):
    """
    GET /api/classes/{id}: includes the enrolled students
    PUT/PATCH /api/classes/{id}: same validation as create, excluding this class from the conflict check
    DELETE /api/classes/{id}: cascades to enrollments, sessions and attendance
    """
    recurring_class = ScheduleRepository().get_class_with_roster(pk)
    if not belongs_to_user_academy(recurring_class, request.user):
        return Response({'detail': 'Access denied'}, status=status.HTTP_403_FORBIDDEN)

    if request.method == 'GET':
        return Response(RecurringClassDetailSerializer(recurring_class).data)

    if request.method in ('PUT', 'PATCH'):
        serializer = RecurringClassSerializer(
            recurring_class, data=request.data, partial=request.method == 'PATCH', context={'request': request},
        )
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response(serializer.data)

    recurring_class.delete()
    logger.info(f'Class {pk} deleted')
    return Response(status=status.HTTP_204_NO_CONTENT)


@api_view(['GET', 'POST', 'DELETE'])
@permission_classes([IsAuthenticated, IsAcademyAdminOrReadOnly])
def class_students_view(request, class_id, student_id=None):
    """
    GET /api/classes/{id}/students
    POST /api/classes/{id}/students {studentId}
    DELETE /api/classes/{id}/students/{studentId}
    """
    recurring_class = ScheduleRepository().get_class(class_id)
    if not belongs_to_user_academy(recurring_class, request.user):
        return Response({'detail': 'Access denied'}, status=status.HTTP_403_FORBIDDEN)

    if request.method == 'GET':
        enrollments = ClassEnrollment.objects.filter(recurring_class=recurring_class).select_related('student')
        return Response(EnrolledStudentSerializer(enrollments, many=True).data)

    if request.method == 'POST':
        sid = parse_int(request.data.get('studentId'), 'studentId')
        try:
            student = Student.objects.get(id=sid)
        except Student.DoesNotExist:
            return Response({'detail': 'Student not found'}, status=status.HTTP_404_NOT_FOUND)
        if not belongs_to_user_academy(student, request.user):
            return Response({'detail': 'Student belongs to another academy'}, status=status.HTTP_403_FORBIDDEN)
        enrollment, created = ClassEnrollment.objects.get_or_create(student=student, recurring_class=recurring_class)
        if not created:
            return Response({'detail': 'Student is already enrolled in this class', 'code': 'already_enrolled'},
                            status=status.HTTP_409_CONFLICT)
        logger.info(f'Student {student.id} enrolled in class {recurring_class.id}')
        return Response(EnrolledStudentSerializer(enrollment).data, status=status.HTTP_201_CREATED)

    deleted, _ = ClassEnrollment.objects.filter(recurring_class=recurring_class, student_id=student_id).delete()
    if not deleted:
        return Response({'detail': 'Enrollment not found'}, status=status.HTTP_404_NOT_FOUND)
    return Response(status=status.HTTP_204_NO_CONTENT)
