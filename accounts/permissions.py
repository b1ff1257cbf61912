"""
Custom permissions for role-based access
"""
from rest_framework import permissions

STAFF_ROLES = ('SYSTEM_ADMIN', 'ACADEMY_ADMIN', 'COACH')
ADMIN_ROLES = ('SYSTEM_ADMIN', 'ACADEMY_ADMIN')


class IsAcademyStaff(permissions.BasePermission):
    """Any authenticated academy user (admin or coach)."""

    def has_permission(self, request, view):
        return bool(
            request.user and
            request.user.is_authenticated and
            request.user.role in STAFF_ROLES
        )


class IsAcademyAdminOrReadOnly(permissions.BasePermission):
    """Coaches may read; only admins may write."""

    def has_permission(self, request, view):
        if not (request.user and request.user.is_authenticated):
            return False
        if request.method in permissions.SAFE_METHODS:
            return request.user.role in STAFF_ROLES
        return request.user.role in ADMIN_ROLES
