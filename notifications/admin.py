from django.contrib import admin
from .models import NotificationLog


@admin.register(NotificationLog)
class NotificationLogAdmin(admin.ModelAdmin):
    list_display = ['channel', 'recipient', 'sent', 'attendance_record', 'created_at']
    list_filter = ['channel', 'sent', 'created_at']
    search_fields = ['recipient', 'subject', 'error']
    readonly_fields = ['created_at']
