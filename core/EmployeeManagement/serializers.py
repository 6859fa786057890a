"""
Employee Serializers

Field names follow the dashboard client (camelCase); model fields are
snake_case and mapped through `source`.
"""
from decimal import Decimal

from rest_framework import serializers

from AuthN.models import BaseUserModel
from utils.serializer_fields import UTCDateField, money_field
from .models import Employee

ZERO = Decimal('0.00')


class EmployeeUserSerializer(serializers.ModelSerializer):
    class Meta:
        model = BaseUserModel
        fields = ['name', 'email']


class EmployeeSerializer(serializers.ModelSerializer):
    """Employee read / create / partial update"""

    employeeId = serializers.CharField(source='employee_id', read_only=True)
    joinDate = UTCDateField(source='join_date')
    baseSalary = money_field('base_salary', min_value=ZERO)
    homeRentAllowance = money_field('home_rent_allowance', min_value=ZERO, required=False)
    healthAllowance = money_field('health_allowance', min_value=ZERO, required=False)
    travelAllowance = money_field('travel_allowance', min_value=ZERO, required=False)
    mobileAllowance = money_field('mobile_allowance', min_value=ZERO, required=False)
    otherAllowances = money_field('other_allowances', min_value=ZERO, required=False)
    overtimeRate = money_field('overtime_rate', max_digits=10, min_value=ZERO, required=False, allow_null=True)
    advanceBalance = money_field('advance_balance', read_only=True)
    isActive = serializers.BooleanField(source='is_active', required=False)
    userId = serializers.PrimaryKeyRelatedField(
        source='user', queryset=BaseUserModel.objects.all(),
        required=False, allow_null=True
    )
    user = EmployeeUserSerializer(read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Employee
        fields = [
            'id', 'employeeId', 'name', 'email', 'phone', 'address', 'designation', 'joinDate',
            'baseSalary', 'homeRentAllowance', 'healthAllowance', 'travelAllowance',
            'mobileAllowance', 'otherAllowances', 'overtimeRate',
            'advanceBalance', 'isActive', 'userId', 'user', 'createdAt', 'updatedAt',
        ]
        read_only_fields = ['id']

    def validate_email(self, value):
        value = value.strip().lower()
        queryset = Employee.objects.filter(email__iexact=value)
        if self.instance:
            queryset = queryset.exclude(id=self.instance.id)
        if queryset.exists():
            raise serializers.ValidationError("An employee with this email already exists.")
        return value

    def validate_name(self, value):
        if not value or not value.strip():
            raise serializers.ValidationError("Name is required.")
        return value.strip()

    def validate_userId(self, value):
        if value is None:
            return value
        queryset = Employee.objects.filter(user=value)
        if self.instance:
            queryset = queryset.exclude(id=self.instance.id)
        if queryset.exists():
            raise serializers.ValidationError("This user is already linked to another employee.")
        return value


class EmployeeSummarySerializer(serializers.ModelSerializer):
    """Minimal embedded employee shape used inside salary rows"""

    employeeId = serializers.CharField(source='employee_id', read_only=True)

    class Meta:
        model = Employee
        fields = ['name', 'designation', 'employeeId']
