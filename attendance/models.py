"""
Attendance model: one record per student per class session.
Enrolled attendance is unique on (session, enrollment); ad-hoc attendance
(no enrollment) is unique on (session, student).
"""
from django.db import models
from django.db.models import Q


class AttendanceRecord(models.Model):
    STATUS_PRESENT = "PRESENT"
    STATUS_LATE = "LATE"
    STATUS_ABSENT = "ABSENT"

    STATUS_CHOICES = [
        (STATUS_PRESENT, "Present"),
        (STATUS_LATE, "Late"),
        (STATUS_ABSENT, "Absent"),
    ]

    session = models.ForeignKey(
        "classes.ClassSession",
        on_delete=models.CASCADE,
        related_name="attendance_records",
    )
    enrollment = models.ForeignKey(
        "classes.ClassEnrollment",
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="attendance_records",
        help_text="Empty for ad-hoc attendees",
    )
    student = models.ForeignKey(
        "students.Student",
        on_delete=models.CASCADE,
        related_name="attendance_records",
    )
    status = models.CharField(
        max_length=20,
        choices=STATUS_CHOICES,
        default=STATUS_PRESENT,
        db_index=True,
    )
    remarks = models.TextField(blank=True, null=True)
    # null = created by the system (attendance seeding)
    marked_by = models.ForeignKey(
        "accounts.User",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="marked_attendance",
    )
    notification_sent = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "attendance_records"
        verbose_name = "Attendance Record"
        verbose_name_plural = "Attendance Records"
        ordering = ["session", "student__name"]
        constraints = [
            models.UniqueConstraint(
                fields=["session", "enrollment"],
                condition=Q(enrollment__isnull=False),
                name="unique_attendance_per_enrollment",
            ),
            models.UniqueConstraint(
                fields=["session", "student"],
                condition=Q(enrollment__isnull=True),
                name="unique_adhoc_attendance_per_student",
            ),
        ]
        indexes = [
            models.Index(fields=["student", "status"], name="attendance_student_status_idx"),
        ]

    def __str__(self):
        return f"{self.student_id} - session {self.session_id} - {self.status}"

    @property
    def is_adhoc(self):
        return self.enrollment_id is None
