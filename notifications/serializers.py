"""
Serializers for notifications app
"""
from rest_framework import serializers
from .models import NotificationLog


class NotificationLogSerializer(serializers.ModelSerializer):
    messageId = serializers.CharField(source='message_id', read_only=True)
    attendanceRecordId = serializers.IntegerField(source='attendance_record_id', read_only=True, allow_null=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = NotificationLog
        fields = [
            'id', 'channel', 'recipient', 'subject', 'content', 'sent', 'error',
            'messageId', 'attendanceRecordId', 'createdAt',
        ]
        read_only_fields = fields
