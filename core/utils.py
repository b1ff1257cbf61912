"""
Core utilities: academy scoping, request parsing helpers.
"""
from datetime import datetime

from django.core.exceptions import ValidationError


def _user_academy_id(user):
    return getattr(user, 'academy_id', None)


def is_system_admin(user):
    return getattr(user, 'role', None) == 'SYSTEM_ADMIN'


def belongs_to_user_academy(obj, user, academy_attr='academy'):
    """
    Check if object belongs to user's academy.
    System admins see everything; rows without an academy are shared.
    """
    if is_system_admin(user):
        return True
    obj_academy_id = getattr(obj, f'{academy_attr}_id', None)
    if obj_academy_id is None:
        return True
    return obj_academy_id == _user_academy_id(user)


def filter_by_academy(queryset, user, academy_field='academy'):
    """
    Filter queryset by user's academy.
    System admin: no filter. User without an academy: nothing.
    """
    if is_system_admin(user):
        return queryset
    academy_id = _user_academy_id(user)
    if academy_id is None:
        return queryset.none()
    return queryset.filter(**{f'{academy_field}_id': academy_id})


def parse_int(value, field_name):
    """Parse a numeric id from request data; ValidationError on garbage."""
    if value is None or value == '':
        raise ValidationError(f'{field_name} is required')
    if isinstance(value, bool):
        raise ValidationError(f'{field_name} must be a number')
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f'{field_name} must be a number')


def parse_date(value, field_name):
    """Parse YYYY-MM-DD (longer ISO strings are truncated to the date part)."""
    if not value:
        raise ValidationError(f'{field_name} is required (YYYY-MM-DD)')
    try:
        return datetime.strptime(str(value)[:10], '%Y-%m-%d').date()
    except (TypeError, ValueError):
        raise ValidationError(f'Invalid {field_name} format, expected YYYY-MM-DD')
