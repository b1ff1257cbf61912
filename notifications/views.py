"""
Guardian notification log for academy staff.
"""
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from accounts.permissions import IsAcademyStaff
from core.utils import filter_by_academy, parse_int
from notifications.models import NotificationLog
from notifications.serializers import NotificationLogSerializer

MAX_RESULTS = 200


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAcademyStaff])
def notification_logs_view(request):
    """
    GET /api/notifications/?sent=true|false&channel=EMAIL|SMS&recordId=
    Most recent first, at most 200 rows.
    """
    qs = NotificationLog.objects.select_related('attendance_record')
    qs = filter_by_academy(qs, request.user, 'attendance_record__session__recurring_class__academy')

    sent = request.query_params.get('sent')
    if sent in ('true', 'false'):
        qs = qs.filter(sent=sent == 'true')
    channel = (request.query_params.get('channel') or '').upper()
    if channel:
        qs = qs.filter(channel=channel)
    record_id = request.query_params.get('recordId')
    if record_id:
        qs = qs.filter(attendance_record_id=parse_int(record_id, 'recordId'))

    qs = qs.order_by('-created_at')
    return Response({
        'notifications': NotificationLogSerializer(qs[:MAX_RESULTS], many=True).data,
        'failedCount': qs.filter(sent=False).count(),
    })
