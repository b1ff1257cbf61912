"""
Students (players) and their guardian contact details.
Guardian email/phone are the notification targets for attendance alerts.
"""
from datetime import date

from django.db import models
from django.utils import timezone


class Student(models.Model):
    academy = models.ForeignKey(
        'core.Academy',
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='students',
    )
    name = models.CharField(max_length=255, db_index=True)
    date_of_birth = models.DateField()
    guardian_name = models.CharField(max_length=255)
    guardian_email = models.EmailField(blank=True, null=True)
    contact_number = models.CharField(max_length=30, help_text="Guardian phone, used for SMS")
    medical_notes = models.TextField(blank=True, null=True)
    registration_date = models.DateField(default=timezone.localdate)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'students'
        verbose_name = 'Student'
        verbose_name_plural = 'Students'
        ordering = ['name']

    def __str__(self):
        return self.name

    @property
    def age(self):
        today = date.today()
        born = self.date_of_birth
        return today.year - born.year - ((today.month, today.day) < (born.month, born.day))
