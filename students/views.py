"""
Student CRUD views
"""
import logging

from django.db.models import Q
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated

from accounts.permissions import IsAcademyAdminOrReadOnly
from core.utils import filter_by_academy, belongs_to_user_academy
from .models import Student
from .serializers import StudentSerializer

logger = logging.getLogger(__name__)


def _search(qs, term):
    term = term.strip()
    q = Q(name__icontains=term) | Q(guardian_name__icontains=term) | Q(contact_number__contains=term)
    if term.isdigit():
        q |= Q(id=int(term))
    return qs.filter(q)


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsAcademyAdminOrReadOnly])
def students_view(request):
    """
    GET /api/students/?search=
    POST /api/students/
    """
    if request.method == 'GET':
        students = filter_by_academy(Student.objects.all(), request.user)
        search = request.query_params.get('search')
        if search:
            students = _search(students, search)
        return Response(StudentSerializer(students, many=True).data)

    serializer = StudentSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    student = serializer.save(academy=request.user.academy)
    logger.info(f'Student {student.id} created in academy {student.academy_id}')
    return Response(StudentSerializer(student).data, status=status.HTTP_201_CREATED)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated, IsAcademyAdminOrReadOnly])
def student_detail_view(request, pk):
    """
    GET/PUT/PATCH/DELETE /api/students/{id}
    Deleting a student cascades to enrollments and attendance.
    """
    try:
        student = Student.objects.get(id=pk)
    except Student.DoesNotExist:
        return Response({'detail': 'Student not found'}, status=status.HTTP_404_NOT_FOUND)
    if not belongs_to_user_academy(student, request.user):
        return Response({'detail': 'Access denied'}, status=status.HTTP_403_FORBIDDEN)

    if request.method == 'GET':
        return Response(StudentSerializer(student).data)

    if request.method in ('PUT', 'PATCH'):
        serializer = StudentSerializer(student, data=request.data, partial=request.method == 'PATCH')
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response(serializer.data)

    student.delete()
    logger.info(f'Student {pk} deleted')
    return Response(status=status.HTTP_204_NO_CONTENT)
