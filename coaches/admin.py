from django.contrib import admin
from .models import Coach


@admin.register(Coach)
class CoachAdmin(admin.ModelAdmin):
    list_display = ['name', 'payment_type', 'hourly_rate', 'session_rate', 'contact_number', 'academy']
    list_filter = ['payment_type', 'academy']
    search_fields = ['name', 'email', 'contact_number']
    readonly_fields = ['created_at', 'updated_at']
