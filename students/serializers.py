"""
Serializers for students app
"""
from rest_framework import serializers
from .models import Student


class StudentSerializer(serializers.ModelSerializer):
    """camelCase payloads; `contact` mirrors contactNumber for list screens."""
    dateOfBirth = serializers.DateField(source='date_of_birth')
    guardianName = serializers.CharField(source='guardian_name', max_length=255)
    guardianEmail = serializers.EmailField(source='guardian_email', required=False, allow_null=True, allow_blank=True)
    contactNumber = serializers.CharField(source='contact_number', max_length=30)
    medicalNotes = serializers.CharField(source='medical_notes', required=False, allow_null=True, allow_blank=True)
    registrationDate = serializers.DateField(source='registration_date', required=False)
    academyId = serializers.IntegerField(source='academy_id', read_only=True)
    age = serializers.IntegerField(read_only=True)
    contact = serializers.CharField(source='contact_number', read_only=True)

    class Meta:
        model = Student
        fields = [
            'id', 'name', 'dateOfBirth', 'age', 'guardianName', 'guardianEmail',
            'contactNumber', 'contact', 'medicalNotes', 'registrationDate', 'academyId',
        ]
        read_only_fields = ['id']

    def validate_name(self, value):
        value = (value or '').strip()
        if not value:
            raise serializers.ValidationError('Name is required.')
        return value
