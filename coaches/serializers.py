"""
Serializers for coaches app
"""
from rest_framework import serializers
from .models import Coach


class CoachSerializer(serializers.ModelSerializer):
    paymentType = serializers.ChoiceField(source='payment_type', choices=Coach.PAYMENT_TYPE_CHOICES, required=False)
    hourlyRate = serializers.DecimalField(source='hourly_rate', max_digits=10, decimal_places=2, min_value=0, required=False, coerce_to_string=False)
    sessionRate = serializers.DecimalField(source='session_rate', max_digits=10, decimal_places=2, min_value=0, required=False, coerce_to_string=False)
    payoutMethod = serializers.CharField(source='payout_method', max_length=50)
    bankDetails = serializers.CharField(source='bank_details', required=False, allow_null=True, allow_blank=True)
    contactNumber = serializers.CharField(source='contact_number', max_length=30)
    email = serializers.EmailField(required=False, allow_null=True, allow_blank=True)
    academyId = serializers.IntegerField(source='academy_id', read_only=True)

    class Meta:
        model = Coach
        fields = [
            'id', 'name', 'paymentType', 'hourlyRate', 'sessionRate', 'payoutMethod',
            'bankDetails', 'contactNumber', 'email', 'academyId',
        ]
        read_only_fields = ['id']

    def validate(self, attrs):
        payment_type = attrs.get('payment_type') or (self.instance.payment_type if self.instance else Coach.PAYMENT_HOURLY)
        if payment_type == Coach.PAYMENT_PER_SESSION:
            rate = attrs.get('session_rate', self.instance.session_rate if self.instance else None)
            if rate is None:
                raise serializers.ValidationError({'sessionRate': 'Session rate is required for per-session coaches.'})
        elif self.instance is None and 'hourly_rate' not in attrs:
            raise serializers.ValidationError({'hourlyRate': 'Hourly rate is required for hourly coaches.'})
        return attrs
