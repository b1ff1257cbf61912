"""
Admin configuration for classes app
"""
from django.contrib import admin
from .models import ClassEnrollment, ClassSession, Court, RecurringClass


class ClassEnrollmentInline(admin.TabularInline):
    model = ClassEnrollment
    extra = 0
    raw_id_fields = ['student']


@admin.register(Court)
class CourtAdmin(admin.ModelAdmin):
    list_display = ['name', 'academy', 'location', 'created_at']
    list_filter = ['academy']
    search_fields = ['name', 'location']


@admin.register(RecurringClass)
class RecurringClassAdmin(admin.ModelAdmin):
    list_display = ['name', 'coach', 'court', 'day_of_week', 'start_time', 'end_time', 'is_recurring']
    list_filter = ['academy', 'day_of_week', 'is_recurring']
    search_fields = ['name', 'coach__name']
    inlines = [ClassEnrollmentInline]


@admin.register(ClassSession)
class ClassSessionAdmin(admin.ModelAdmin):
    list_display = ['recurring_class', 'date', 'start_time', 'end_time', 'created_at']
    list_filter = ['date']
    search_fields = ['recurring_class__name']
    ordering = ['-date']
