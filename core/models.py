"""
Core models: Academy (tenant).
"""
from django.db import models


class Academy(models.Model):
    """
    Academy / club. Every tenant-owned row (students, coaches, courts, classes)
    points at one; users without an academy only see data when they are system admins.
    """
    name = models.CharField(max_length=255)
    slug = models.SlugField(max_length=100, unique=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'academies'
        verbose_name = 'Academy'
        verbose_name_plural = 'Academies'
        ordering = ['name']

    def __str__(self):
        return self.name
