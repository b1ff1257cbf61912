"""
Admin configuration for accounts app
"""
from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.contrib.auth.forms import UserCreationForm, ReadOnlyPasswordHashField
from django import forms
from .models import User


def _validate_academy_for_role(cleaned_data):
    role = cleaned_data.get('role')
    academy = cleaned_data.get('academy')
    if role != User.ROLE_SYSTEM_ADMIN and not academy:
        raise forms.ValidationError(
            {'academy': 'Academy admins and coaches must belong to an academy.'}
        )


class UserAdminForm(forms.ModelForm):
    """Password shown as hash only; use the "Change password" link to set a new one."""
    password = ReadOnlyPasswordHashField(label='Password')

    class Meta:
        model = User
        fields = '__all__'

    def clean(self):
        cleaned = super().clean()
        _validate_academy_for_role(cleaned)
        return cleaned


class UserAddForm(UserCreationForm):

    class Meta(UserCreationForm.Meta):
        model = User
        fields = ('email', 'full_name', 'role', 'academy', 'phone')

    def clean(self):
        cleaned = super().clean()
        _validate_academy_for_role(cleaned)
        return cleaned


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    form = UserAdminForm
    add_form = UserAddForm
    list_display = ['email', 'full_name', 'role', 'academy', 'is_active', 'is_staff', 'date_joined']
    list_filter = ['role', 'is_active', 'is_staff', 'academy']
    search_fields = ['email', 'full_name']
    ordering = ['-date_joined']
    readonly_fields = ['date_joined', 'updated_at', 'last_login']

    fieldsets = (
        (None, {'fields': ('email', 'password')}),
        ('Personal Info', {'fields': ('full_name', 'role', 'academy', 'phone')}),
        ('Permissions', {'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions')}),
        ('Important dates', {'fields': ('last_login', 'date_joined', 'updated_at')}),
    )

    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('email', 'full_name', 'role', 'academy', 'phone', 'password1', 'password2', 'is_active', 'is_staff'),
        }),
    )
