from django.contrib import admin

from .models import AdvanceRecord, Salary, SalaryPayment


@admin.register(Salary)
class SalaryAdmin(admin.ModelAdmin):
    list_display = ['employee', 'month', 'year', 'gross_salary', 'advance_deduction', 'net_salary', 'status', 'paid_date']
    list_filter = ['status', 'year', 'month', 'payment_method']
    search_fields = ['employee__name', 'employee__employee_id', 'reference']
    readonly_fields = ['created_at', 'updated_at']
    list_select_related = ['employee']


@admin.register(SalaryPayment)
class SalaryPaymentAdmin(admin.ModelAdmin):
    list_display = ['salary', 'employee', 'gross_salary', 'advance_deducted', 'net_paid', 'paid_date', 'paid_by']
    list_filter = ['payment_method', 'paid_date']
    search_fields = ['employee__name', 'employee__employee_id', 'reference', 'idempotency_key']
    list_select_related = ['salary', 'employee', 'paid_by']

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(AdvanceRecord)
class AdvanceRecordAdmin(admin.ModelAdmin):
    """Read-only: ledger rows are written by the payroll services only"""

    list_display = ['employee', 'type', 'amount', 'balance_after', 'salary', 'created_by', 'created_at']
    list_filter = ['type', 'payment_method', 'created_at']
    search_fields = ['employee__name', 'employee__employee_id', 'description', 'reference']
    date_hierarchy = 'created_at'
    list_select_related = ['employee', 'salary', 'created_by']

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
