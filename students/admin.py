"""
Admin configuration for students app
"""
from django.contrib import admin
from .models import Student


@admin.register(Student)
class StudentAdmin(admin.ModelAdmin):
    list_display = ['name', 'date_of_birth', 'guardian_name', 'contact_number', 'academy', 'registration_date']
    list_filter = ['academy', 'registration_date']
    search_fields = ['name', 'guardian_name', 'guardian_email', 'contact_number']
    readonly_fields = ['created_at', 'updated_at']
