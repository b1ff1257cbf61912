"""
Coach CRUD views and the weekly coach report
"""
import logging

from django.db.models import Q
from django.utils import timezone
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated

from accounts.permissions import IsAcademyAdminOrReadOnly, IsAcademyStaff
from core.dates import current_week_number, get_week_dates
from core.utils import filter_by_academy, belongs_to_user_academy, parse_int
from .models import Coach
from .serializers import CoachSerializer
from .services import build_coach_reports

logger = logging.getLogger(__name__)


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsAcademyAdminOrReadOnly])
def coaches_view(request):
    """
    GET /api/coaches/?search=
    POST /api/coaches/
    """
    if request.method == 'GET':
        coaches = filter_by_academy(Coach.objects.all(), request.user)
        search = (request.query_params.get('search') or '').strip()
        if search:
            q = Q(name__icontains=search)
            if search.isdigit():
                q |= Q(id=int(search))
            coaches = coaches.filter(q)
        return Response(CoachSerializer(coaches, many=True).data)

    serializer = CoachSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    coach = serializer.save(academy=request.user.academy)
    logger.info(f'Coach {coach.id} created in academy {coach.academy_id}')
    return Response(CoachSerializer(coach).data, status=status.HTTP_201_CREATED)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated, IsAcademyAdminOrReadOnly])
def coach_detail_view(request, pk):
    """
    GET/PUT/PATCH/DELETE /api/coaches/{id}
    """
    try:
        coach = Coach.objects.get(id=pk)
    except Coach.DoesNotExist:
        return Response({'detail': 'Coach not found'}, status=status.HTTP_404_NOT_FOUND)
    if not belongs_to_user_academy(coach, request.user):
        return Response({'detail': 'Access denied'}, status=status.HTTP_403_FORBIDDEN)

    if request.method == 'GET':
        return Response(CoachSerializer(coach).data)

    if request.method in ('PUT', 'PATCH'):
        serializer = CoachSerializer(coach, data=request.data, partial=request.method == 'PATCH')
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response(serializer.data)

    if coach.classes.exists():
        return Response(
            {'detail': 'Coach still has classes assigned; reassign or delete them first.', 'code': 'coach_in_use'},
            status=status.HTTP_409_CONFLICT,
        )
    coach.delete()
    return Response(status=status.HTTP_204_NO_CONTENT)


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAcademyStaff])
def coach_report_view(request):
    """
    GET /api/reports/coaches?week=&year=&coachId=
    Per-coach totals for sessions held in the given report week.
    """
    week = request.query_params.get('week')
    week_number = parse_int(week, 'week') if week else current_week_number()
    year_param = request.query_params.get('year')
    year = parse_int(year_param, 'year') if year_param else timezone.localdate().year
    coach_param = request.query_params.get('coachId')
    coach_id = parse_int(coach_param, 'coachId') if coach_param else None

    start, end = get_week_dates(year, week_number)
    reports = build_coach_reports(start, end, user=request.user, coach_id=coach_id)
    return Response({
        'year': year,
        'weekNumber': week_number,
        'startDate': start.isoformat(),
        'endDate': end.isoformat(),
        'coaches': reports,
    })
