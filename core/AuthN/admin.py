from django.contrib import admin
from django.contrib.auth.admin import UserAdmin

from .models import BaseUserModel


@admin.register(BaseUserModel)
class BaseUserAdmin(UserAdmin):
    list_display = ['email', 'username', 'name', 'role', 'is_active', 'date_joined']
    list_filter = ['role', 'is_active', 'is_staff']
    search_fields = ['email', 'username', 'name']
    ordering = ['email']
    readonly_fields = ['date_joined', 'updated_at']
    fieldsets = (
        ('Account', {
            'fields': ('email', 'username', 'password')
        }),
        ('Profile', {
            'fields': ('name', 'phone_number', 'role')
        }),
        ('Permissions', {
            'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions')
        }),
        ('Timestamps', {
            'fields': ('date_joined', 'updated_at')
        }),
    )
    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('email', 'username', 'role', 'password1', 'password2'),
        }),
    )
