"""
Serializers for attendance app
"""
from rest_framework import serializers
from .models import AttendanceRecord


class AttendanceRecordSerializer(serializers.ModelSerializer):
    """Attendance row with the student inlined. enrollmentId is null for ad-hoc attendees."""
    sessionId = serializers.IntegerField(source='session_id', read_only=True)
    enrollmentId = serializers.IntegerField(source='enrollment_id', read_only=True, allow_null=True)
    studentId = serializers.IntegerField(source='student_id', read_only=True)
    studentName = serializers.CharField(source='student.name', read_only=True)
    markedBy = serializers.IntegerField(source='marked_by_id', read_only=True, allow_null=True)
    notificationSent = serializers.BooleanField(source='notification_sent', read_only=True)
    isAdhoc = serializers.BooleanField(source='is_adhoc', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = AttendanceRecord
        fields = [
            'id', 'sessionId', 'enrollmentId', 'studentId', 'studentName', 'status',
            'remarks', 'markedBy', 'notificationSent', 'isAdhoc', 'updatedAt',
        ]
        read_only_fields = fields


class AttendanceUpdateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=AttendanceRecord.STATUS_CHOICES, required=False)
    remarks = serializers.CharField(required=False, allow_blank=True, allow_null=True)

    def to_internal_value(self, data):
        if isinstance(data, dict) and isinstance(data.get('status'), str):
            data = {**data, 'status': data['status'].upper()}
        return super().to_internal_value(data)

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError('Provide status and/or remarks.')
        return attrs
