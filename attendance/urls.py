"""
Attendance and report URLs
"""
from django.urls import path
from coaches.views import coach_report_view
from .views import attendance, reports

app_name = 'attendance'

urlpatterns = [
    path('', attendance.attendance_view, name='list'),
    path('mark', attendance.mark_attendance_view, name='mark'),
    path('<int:pk>', attendance.attendance_record_view, name='detail'),
]

report_urlpatterns = [
    path('attendance', reports.attendance_report_view, name='report-attendance'),
    path('attendance/export', reports.attendance_report_export_view, name='report-attendance-export'),
    path('coaches', coach_report_view, name='report-coaches'),
]
