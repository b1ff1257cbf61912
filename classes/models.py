"""
Courts, recurring classes, enrollments and dated sessions.
RecurringClass is the weekly rule; ClassSession is one dated occurrence of it.
"""
from django.core.exceptions import ValidationError
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models


class Court(models.Model):
    """Location a class is held at. Double-booking a court is allowed."""
    academy = models.ForeignKey(
        'core.Academy',
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='courts',
    )
    name = models.CharField(max_length=255)
    location = models.CharField(max_length=255, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'courts'
        verbose_name = 'Court'
        verbose_name_plural = 'Courts'
        ordering = ['name']

    def __str__(self):
        return self.name


class RecurringClass(models.Model):
    """
    Weekly class rule: day_of_week (Sunday=0) plus a time-of-day range.
    Only hour:minute of start_time/end_time are meaningful.
    """
    academy = models.ForeignKey(
        'core.Academy',
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='classes',
    )
    name = models.CharField(max_length=255)
    coach = models.ForeignKey(
        'coaches.Coach',
        on_delete=models.PROTECT,
        related_name='classes',
    )
    court = models.ForeignKey(
        Court,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='classes',
    )
    day_of_week = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(0), MaxValueValidator(6)],
        help_text="0=Sunday .. 6=Saturday",
    )
    start_time = models.TimeField()
    end_time = models.TimeField()
    is_recurring = models.BooleanField(default=True, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'classes'
        verbose_name = 'Class'
        verbose_name_plural = 'Classes'
        ordering = ['day_of_week', 'start_time']
        indexes = [
            models.Index(fields=['coach', 'day_of_week'], name='classes_coach_day_idx'),
        ]

    def __str__(self):
        return f"{self.name} (day {self.day_of_week} {self.start_time:%H:%M}-{self.end_time:%H:%M})"

    def clean(self):
        if self.start_time and self.end_time and self.end_time <= self.start_time:
            raise ValidationError({'end_time': 'End time must be after start time.'})


class ClassEnrollment(models.Model):
    student = models.ForeignKey(
        'students.Student',
        on_delete=models.CASCADE,
        related_name='enrollments',
    )
    recurring_class = models.ForeignKey(
        RecurringClass,
        on_delete=models.CASCADE,
        related_name='enrollments',
    )
    joined_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'class_enrollments'
        verbose_name = 'Class Enrollment'
        verbose_name_plural = 'Class Enrollments'
        ordering = ['joined_at']
        constraints = [
            models.UniqueConstraint(fields=['student', 'recurring_class'], name='unique_enrollment_per_class'),
        ]

    def __str__(self):
        return f"{self.student_id} in {self.recurring_class_id}"


class ClassSession(models.Model):
    """
    One dated occurrence of a RecurringClass.
    At most one per (class, date); regeneration deletes and recreates sessions without attendance.
    """
    recurring_class = models.ForeignKey(
        RecurringClass,
        on_delete=models.CASCADE,
        related_name='sessions',
    )
    date = models.DateField(db_index=True)
    start_time = models.DateTimeField()
    end_time = models.DateTimeField()
    notes = models.TextField(blank=True, default='')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'class_sessions'
        verbose_name = 'Class Session'
        verbose_name_plural = 'Class Sessions'
        ordering = ['date', 'start_time']
        constraints = [
            models.UniqueConstraint(fields=['recurring_class', 'date'], name='unique_session_per_class_date'),
        ]

    def __str__(self):
        return f"{self.recurring_class_id} @ {self.date}"
