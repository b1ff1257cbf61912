"""
Attendance reports and exports
"""
from django.http import HttpResponse
from django.utils import timezone
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated

from accounts.permissions import IsAcademyStaff
from core.utils import parse_int
from ..services.aggregation import build_attendance_report
from ..services.export import CSV_CONTENT_TYPE, XLSX_CONTENT_TYPE, export_csv, export_xlsx

EXPORT_FORMATS = ('csv', 'xlsx')


def _report_params(request):
    class_param = request.query_params.get('classId')
    return {
        'period': request.query_params.get('period', 'month'),
        'class_id': parse_int(class_param, 'classId') if class_param else None,
    }


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAcademyStaff])
def attendance_report_view(request):
    """
    GET /api/reports/attendance?type=student|class|summary&period=week|month|quarter|year&classId=
    """
    report = build_attendance_report(
        request.user,
        report_type=request.query_params.get('type', 'student'),
        **_report_params(request),
    )
    return Response(report)


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAcademyStaff])
def attendance_report_export_view(request):
    """
    GET /api/reports/attendance/export?period=&classId=&format=csv|xlsx
    Per-student report as a file download.
    """
    fmt = (request.query_params.get('format') or 'csv').lower()
    if fmt not in EXPORT_FORMATS:
        return Response({'detail': 'format must be csv or xlsx', 'code': 'validation_error'},
                        status=status.HTTP_400_BAD_REQUEST)

    params = _report_params(request)
    report = build_attendance_report(request.user, report_type='student', **params)
    filename = f"attendance-{params['period']}-{timezone.localdate():%Y%m%d}.{fmt}"
    if fmt == 'csv':
        response = HttpResponse(export_csv(report['data']), content_type=CSV_CONTENT_TYPE)
    else:
        response = HttpResponse(export_xlsx(report['data']), content_type=XLSX_CONTENT_TYPE)
    response['Content-Disposition'] = f'attachment; filename="{filename}"'
    return response
