"""
Delivery log for guardian notifications (attendance alerts).
One row per channel attempt, successful or not.
"""
from django.db import models


class NotificationLog(models.Model):
    CHANNEL_EMAIL = "EMAIL"
    CHANNEL_SMS = "SMS"

    CHANNEL_CHOICES = [
        (CHANNEL_EMAIL, "Email"),
        (CHANNEL_SMS, "SMS"),
    ]

    channel = models.CharField(max_length=10, choices=CHANNEL_CHOICES, db_index=True)
    recipient = models.CharField(max_length=255, blank=True, default="")
    subject = models.CharField(max_length=255, blank=True, default="")
    content = models.TextField(blank=True, default="")
    sent = models.BooleanField(default=False, db_index=True)
    error = models.TextField(blank=True, default="")
    message_id = models.CharField(max_length=255, blank=True, null=True)
    attendance_record = models.ForeignKey(
        "attendance.AttendanceRecord",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="notification_logs",
    )
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        db_table = "notification_logs"
        verbose_name = "Notification Log"
        verbose_name_plural = "Notification Logs"
        ordering = ["-created_at"]

    def __str__(self):
        state = "sent" if self.sent else "failed"
        return f"{self.channel} to {self.recipient or '-'} ({state})"
