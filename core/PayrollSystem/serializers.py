"""
Payroll System Serializers
"""
from decimal import Decimal

from rest_framework import serializers

from EmployeeManagement.models import Employee
from EmployeeManagement.serializers import EmployeeSummarySerializer
from utils.serializer_fields import UTCDateField, UTCMidnightDateTimeField, money_field
from .models import AdvanceRecord, PaymentMethod, Salary, SalaryPayment
from .utils import month_label

ZERO = Decimal('0.00')


# ==================== SALARY SERIALIZERS ====================

class SalarySerializer(serializers.ModelSerializer):
    """Salary row with the embedded employee summary"""

    employeeId = serializers.UUIDField(source='employee_id', read_only=True)
    monthName = serializers.SerializerMethodField()
    baseSalary = money_field('base_salary', read_only=True)
    allowances = money_field(read_only=True)
    overtimeHours = money_field('overtime_hours', read_only=True)
    overtimeAmount = money_field('overtime_amount', read_only=True)
    bonus = money_field(read_only=True)
    deductions = money_field(read_only=True)
    grossSalary = money_field('gross_salary', read_only=True)
    advanceDeduction = money_field('advance_deduction', read_only=True)
    netSalary = money_field('net_salary', read_only=True)
    paidDate = serializers.DateTimeField(source='paid_date', read_only=True)
    paymentMethod = serializers.CharField(source='payment_method', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)
    employee = EmployeeSummarySerializer(read_only=True)

    class Meta:
        model = Salary
        fields = [
            'id', 'employeeId', 'month', 'year', 'monthName', 'status',
            'baseSalary', 'allowances', 'overtimeHours', 'overtimeAmount', 'bonus', 'deductions',
            'grossSalary', 'advanceDeduction', 'netSalary',
            'paidDate', 'paymentMethod', 'reference', 'notes',
            'createdAt', 'updatedAt', 'employee',
        ]
        read_only_fields = fields

    def get_monthName(self, obj):
        return month_label(obj.month)


class SalaryPaymentSerializer(serializers.ModelSerializer):
    grossSalary = money_field('gross_salary', read_only=True)
    advanceDeducted = money_field('advance_deducted', read_only=True)
    netPaid = money_field('net_paid', read_only=True)
    paymentMethod = serializers.CharField(source='payment_method', read_only=True)

    class Meta:
        model = SalaryPayment
        fields = ['grossSalary', 'advanceDeducted', 'netPaid', 'paymentMethod', 'reference']
        read_only_fields = fields


class PreviewEmployeeSerializer(serializers.ModelSerializer):
    """Employee block of the salary preview"""

    employeeId = serializers.CharField(source='employee_id', read_only=True)
    advanceBalance = money_field('advance_balance', read_only=True)
    baseSalary = money_field('base_salary', read_only=True)
    homeRentAllowance = money_field('home_rent_allowance', read_only=True)
    healthAllowance = money_field('health_allowance', read_only=True)
    travelAllowance = money_field('travel_allowance', read_only=True)
    mobileAllowance = money_field('mobile_allowance', read_only=True)
    otherAllowances = money_field('other_allowances', read_only=True)

    class Meta:
        model = Employee
        fields = [
            'id', 'employeeId', 'name', 'designation', 'advanceBalance', 'baseSalary',
            'homeRentAllowance', 'healthAllowance', 'travelAllowance', 'mobileAllowance', 'otherAllowances',
        ]
        read_only_fields = fields


class CreateSalarySerializer(serializers.Serializer):
    employeeId = serializers.UUIDField()
    month = serializers.IntegerField(min_value=1, max_value=12)
    year = serializers.IntegerField(min_value=2000, max_value=2100)
    overtimeHours = money_field(max_digits=7, min_value=ZERO, required=False, default=ZERO)
    bonus = money_field(min_value=ZERO, required=False, default=ZERO)
    deductions = money_field(min_value=ZERO, required=False, default=ZERO)


class PaySalarySerializer(serializers.Serializer):
    """
    advanceDeduction is range-checked by the pay service against
    min(advance balance, gross) so the error names the allowed maximum.
    """

    employeeId = serializers.UUIDField()
    month = serializers.IntegerField(min_value=1, max_value=12)
    year = serializers.IntegerField(min_value=2000, max_value=2100)
    paidDate = UTCMidnightDateTimeField()
    advanceDeduction = money_field(required=False, default=ZERO)
    paymentMethod = serializers.ChoiceField(choices=PaymentMethod.choices, required=False, allow_null=True)
    reference = serializers.CharField(max_length=255, required=False, allow_blank=True, allow_null=True)
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    idempotencyKey = serializers.CharField(max_length=100, required=False, allow_blank=True, allow_null=True)


class PeriodQuerySerializer(serializers.Serializer):
    """month / year query params; both optional, default to the current UTC month"""

    month = serializers.IntegerField(min_value=1, max_value=12, required=False)
    year = serializers.IntegerField(min_value=2000, max_value=2100, required=False)


# ==================== ADVANCE SERIALIZERS ====================

class AdvanceRecordSerializer(serializers.ModelSerializer):
    """Ledger entry; the client signs the amount from its type"""

    employeeId = serializers.UUIDField(source='employee_id', read_only=True)
    amount = money_field(read_only=True)
    balanceAfter = money_field('balance_after', read_only=True)
    paymentMethod = serializers.CharField(source='payment_method', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    salary = serializers.SerializerMethodField()

    class Meta:
        model = AdvanceRecord
        fields = [
            'id', 'employeeId', 'amount', 'type', 'badge', 'description',
            'paymentMethod', 'reference', 'balanceAfter', 'createdAt', 'salary',
        ]
        read_only_fields = fields

    def get_salary(self, obj):
        if obj.salary_id is None:
            return None
        return {'month': obj.salary.month, 'year': obj.salary.year}


class GiveAdvanceSerializer(serializers.Serializer):
    amount = money_field()
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    paymentMethod = serializers.ChoiceField(choices=PaymentMethod.choices, required=False, allow_null=True)
    reference = serializers.CharField(max_length=255, required=False, allow_blank=True, allow_null=True)
    idempotencyKey = serializers.CharField(max_length=100, required=False, allow_blank=True, allow_null=True)

    def validate_amount(self, value):
        if value <= 0:
            raise serializers.ValidationError("Advance amount must be greater than 0")
        return value


class AdjustAdvanceSerializer(serializers.Serializer):
    amount = money_field()
    description = serializers.CharField()

    def validate_amount(self, value):
        if value == 0:
            raise serializers.ValidationError("Adjustment amount cannot be 0")
        return value

    def validate_description(self, value):
        if not value.strip():
            raise serializers.ValidationError("Description is required for an adjustment")
        return value.strip()


# ==================== BULK SALARY SHEET ====================

class BulkSalaryEntrySerializer(serializers.Serializer):
    """
    One salary-sheet row. perDay and totalPayable are accepted but
    recomputed on the server.
    """

    employeeId = serializers.CharField(source='employee_id', required=False, allow_blank=True, allow_null=True)
    employeeName = serializers.CharField(source='employee_name', max_length=255)
    designation = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=255)
    joiningDate = UTCDateField(source='joining_date', required=False, allow_null=True)
    basic = money_field(min_value=ZERO, required=False, default=ZERO)
    monthlySalary = money_field('monthly_salary', min_value=ZERO, required=False, default=ZERO)
    medicalMobile = money_field('medical_mobile', min_value=ZERO, required=False, default=ZERO)
    bonusBoksis = money_field('bonus_boksis', min_value=ZERO, required=False, default=ZERO)
    perDay = money_field('per_day', required=False, allow_null=True)
    dailyPresent = serializers.IntegerField(source='daily_present', min_value=0, max_value=31, required=False, allow_null=True)
    totalPayable = money_field('total_payable', required=False, allow_null=True)
    advance = money_field(min_value=ZERO, required=False, default=ZERO)
    modeOfPayment = serializers.ChoiceField(
        source='mode_of_payment', choices=['0', '1', '2', '3'],
        required=False, allow_blank=True, allow_null=True
    )

    def validate_employeeName(self, value):
        if not value.strip():
            raise serializers.ValidationError("Employee name is required.")
        return value.strip()


class BulkSalaryUploadSerializer(serializers.Serializer):
    month = serializers.IntegerField(min_value=1, max_value=12)
    year = serializers.IntegerField(min_value=2000, max_value=2100)
    entries = serializers.ListField(child=serializers.DictField(), allow_empty=False)
