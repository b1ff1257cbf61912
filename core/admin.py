from django.contrib import admin
from .models import Academy


@admin.register(Academy)
class AcademyAdmin(admin.ModelAdmin):
    list_display = ['name', 'slug', 'created_at']
    search_fields = ['name', 'slug']
    prepopulated_fields = {'slug': ('name',)}
