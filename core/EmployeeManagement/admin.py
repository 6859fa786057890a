from django.contrib import admin

from .models import Employee


@admin.register(Employee)
class EmployeeAdmin(admin.ModelAdmin):
    list_display = ['employee_id', 'name', 'designation', 'base_salary', 'advance_balance', 'is_active']
    list_filter = ['is_active', 'designation']
    search_fields = ['employee_id', 'name', 'email']
    readonly_fields = ['employee_id', 'advance_balance', 'created_at', 'updated_at']
    fieldsets = (
        ('Identity', {
            'fields': ('employee_id', 'name', 'email', 'phone', 'address', 'designation', 'join_date', 'user')
        }),
        ('Compensation', {
            'fields': ('base_salary', 'home_rent_allowance', 'health_allowance', 'travel_allowance',
                       'mobile_allowance', 'other_allowances', 'overtime_rate')
        }),
        ('Advance', {
            'fields': ('advance_balance',),
            'description': 'Changed only through advance transactions'
        }),
        ('Status', {
            'fields': ('is_active', 'created_at', 'updated_at')
        }),
    )
