"""
Serializers for accounts app
"""
import logging

from django.contrib.auth import get_user_model
from rest_framework import serializers
from rest_framework.exceptions import AuthenticationFailed

logger = logging.getLogger(__name__)

User = get_user_model()

INVALID_CREDENTIALS = 'Invalid email or password.'


class UserSerializer(serializers.ModelSerializer):
    fullName = serializers.CharField(source='full_name', read_only=True)
    academyId = serializers.IntegerField(source='academy_id', read_only=True, allow_null=True)

    class Meta:
        model = User
        fields = ['id', 'email', 'fullName', 'role', 'academyId']
        read_only_fields = fields


class LoginSerializer(serializers.Serializer):
    """
    Email lookup is case-insensitive. Unknown email and wrong password give the
    same 401 message; a disabled account is reported as such.
    """
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, style={'input_type': 'password'})

    def validate(self, attrs):
        user = User.objects.select_related('academy').filter(email__iexact=attrs['email']).first()
        if user is None or not user.check_password(attrs['password']):
            logger.warning(f"Failed login for {attrs['email']}")
            raise AuthenticationFailed(INVALID_CREDENTIALS)
        if not user.is_active:
            logger.warning(f'Login attempt for disabled user {user.id}')
            raise AuthenticationFailed('User account is disabled.')
        attrs['user'] = user
        return attrs
