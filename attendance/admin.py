"""
Admin configuration for attendance app
"""
from django.contrib import admin
from .models import AttendanceRecord


@admin.register(AttendanceRecord)
class AttendanceRecordAdmin(admin.ModelAdmin):
    list_display = ['student', 'session', 'status', 'notification_sent', 'marked_by', 'updated_at']
    list_filter = ['status', 'notification_sent', 'session__date']
    search_fields = ['student__name', 'session__recurring_class__name']
    raw_id_fields = ['session', 'enrollment', 'student', 'marked_by']
    readonly_fields = ['created_at', 'updated_at']
    ordering = ['-session__date']
