"""
Serializers for classes app
"""
from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import serializers
from rest_framework.exceptions import PermissionDenied

from attendance.serializers import AttendanceRecordSerializer
from coaches.models import Coach
from core.dates import TimeOfDay
from core.utils import belongs_to_user_academy
from .models import ClassSession, Court, RecurringClass
from .services.conflicts import ConflictChecker


class TimeOfDayField(serializers.Field):
    """Accepts "HH:MM", "HH:MM:SS" or an ISO timestamp; renders "HH:MM"."""
    default_error_messages = {'invalid': 'Invalid time: {value}'}

    def to_internal_value(self, data):
        try:
            return TimeOfDay.parse(data).as_time()
        except DjangoValidationError:
            self.fail('invalid', value=data)

    def to_representation(self, value):
        return str(TimeOfDay.parse(value))


class CourtSerializer(serializers.ModelSerializer):
    academyId = serializers.IntegerField(source='academy_id', read_only=True)

    class Meta:
        model = Court
        fields = ['id', 'name', 'location', 'academyId']
        read_only_fields = ['id']


class RecurringClassSerializer(serializers.ModelSerializer):
    """
    Create/update validate end > start and reject coach double-booking
    (ScheduleConflictError -> 409) before anything is saved.
    """
    coachId = serializers.PrimaryKeyRelatedField(source='coach', queryset=Coach.objects.all())
    coachName = serializers.CharField(source='coach.name', read_only=True)
    courtId = serializers.PrimaryKeyRelatedField(
        source='court', queryset=Court.objects.all(), required=False, allow_null=True,
    )
    courtName = serializers.CharField(source='court.name', read_only=True, default=None)
    dayOfWeek = serializers.IntegerField(source='day_of_week', min_value=0, max_value=6)
    startTime = TimeOfDayField(source='start_time')
    endTime = TimeOfDayField(source='end_time')
    isRecurring = serializers.BooleanField(source='is_recurring', required=False)
    academyId = serializers.IntegerField(source='academy_id', read_only=True)
    studentCount = serializers.SerializerMethodField()

    class Meta:
        model = RecurringClass
        fields = [
            'id', 'name', 'coachId', 'coachName', 'courtId', 'courtName', 'dayOfWeek',
            'startTime', 'endTime', 'isRecurring', 'academyId', 'studentCount',
        ]
        read_only_fields = ['id']

    def get_studentCount(self, obj):
        count = getattr(obj, 'student_count', None)
        return count if count is not None else obj.enrollments.count()

    def validate(self, attrs):
        instance = self.instance

        def current(field):
            if field in attrs:
                return attrs[field]
            return getattr(instance, field) if instance else None

        start, end = current('start_time'), current('end_time')
        if start is not None and end is not None and end <= start:
            raise serializers.ValidationError({'endTime': 'End time must be after start time.'})

        request = self.context.get('request')
        if request is not None:
            for field in ('coach', 'court'):
                related = current(field)
                if related is not None and not belongs_to_user_academy(related, request.user):
                    raise PermissionDenied(f'{field.capitalize()} belongs to another academy')

        coach = current('coach')
        day = current('day_of_week')
        if coach is not None and day is not None and start is not None and end is not None:
            ConflictChecker().ensure_no_conflict(
                coach.id, day, start, end,
                exclude_class_id=instance.id if instance else None,
            )
        return attrs


class EnrolledStudentSerializer(serializers.Serializer):
    enrollmentId = serializers.IntegerField(source='id')
    studentId = serializers.IntegerField(source='student_id')
    name = serializers.CharField(source='student.name')
    guardianName = serializers.CharField(source='student.guardian_name')
    contactNumber = serializers.CharField(source='student.contact_number')
    joinedAt = serializers.DateTimeField(source='joined_at')


class RecurringClassDetailSerializer(RecurringClassSerializer):
    students = EnrolledStudentSerializer(source='enrollments', many=True, read_only=True)

    class Meta(RecurringClassSerializer.Meta):
        fields = RecurringClassSerializer.Meta.fields + ['students']


class ClassSessionSerializer(serializers.ModelSerializer):
    classId = serializers.IntegerField(source='recurring_class_id', read_only=True)
    className = serializers.CharField(source='recurring_class.name', read_only=True)
    startTime = serializers.DateTimeField(source='start_time', read_only=True)
    endTime = serializers.DateTimeField(source='end_time', read_only=True)
    attendance = AttendanceRecordSerializer(source='attendance_records', many=True, read_only=True)

    class Meta:
        model = ClassSession
        fields = ['id', 'classId', 'className', 'date', 'startTime', 'endTime', 'notes', 'attendance']
        read_only_fields = fields
