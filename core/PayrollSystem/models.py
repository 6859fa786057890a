"""
Payroll System Models
"""
from decimal import Decimal

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from EmployeeManagement.models import Employee
from .exceptions import ImmutableRecordError


class PaymentMethod(models.TextChoices):
    CASH = 'CASH', 'Cash'
    BANK_TRANSFER = 'BANK_TRANSFER', 'Bank Transfer'
    CHEQUE = 'CHEQUE', 'Cheque'
    CARD = 'CARD', 'Card'


# ==================== SALARY ====================
class Salary(models.Model):
    """
    Monthly salary for one employee.

    Amounts are snapshots taken when the record is generated, so later
    changes to the employee's compensation do not rewrite history.
    gross_salary = base + allowances + overtime + bonus - deductions
    net_salary   = gross_salary - advance_deduction
    """

    STATUS_PENDING = 'PENDING'
    STATUS_PAID = 'PAID'
    STATUS_CANCELLED = 'CANCELLED'
    STATUS_CHOICES = [
        (STATUS_PENDING, 'Pending'),
        (STATUS_PAID, 'Paid'),
        (STATUS_CANCELLED, 'Cancelled'),
    ]

    id = models.BigAutoField(primary_key=True)
    employee = models.ForeignKey(
        Employee,
        on_delete=models.PROTECT,
        related_name='salaries'
    )
    month = models.PositiveSmallIntegerField(validators=[MinValueValidator(1), MaxValueValidator(12)])
    year = models.PositiveIntegerField(validators=[MinValueValidator(2000), MaxValueValidator(2100)])

    # --------------------
    # Breakdown
    # --------------------
    base_salary = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    allowances = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    overtime_hours = models.DecimalField(max_digits=7, decimal_places=2, default=Decimal('0.00'))
    overtime_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    bonus = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    deductions = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    gross_salary = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))

    # --------------------
    # Settlement
    # --------------------
    advance_deduction = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    net_salary = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING)
    paid_date = models.DateTimeField(null=True, blank=True, help_text="Stored at 00:00 UTC")
    payment_method = models.CharField(max_length=20, choices=PaymentMethod.choices, null=True, blank=True)
    reference = models.CharField(max_length=255, null=True, blank=True)
    notes = models.TextField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'salary'
        ordering = ['-year', '-month', 'employee__employee_id']
        verbose_name = 'Salary'
        verbose_name_plural = 'Salaries'
        constraints = [
            models.UniqueConstraint(fields=['employee', 'month', 'year'], name='salary_unique_employee_period'),
        ]
        indexes = [
            models.Index(fields=['year', 'month', 'status'], name='salary_period_status_idx'),
            models.Index(fields=['employee', 'status'], name='salary_emp_status_idx'),
        ]

    @property
    def is_paid(self):
        return self.status == self.STATUS_PAID

    def __str__(self):
        return f"{self.employee.employee_id} | {self.month:02d}/{self.year} | {self.status}"


# ==================== SALARY PAYMENT ====================
class SalaryPayment(models.Model):
    """
    Payment written once when a salary is paid. Keeps the balance snapshot
    so a replay with the same idempotency key returns the original result.
    """

    id = models.BigAutoField(primary_key=True)
    salary = models.OneToOneField(Salary, on_delete=models.PROTECT, related_name='payment')
    employee = models.ForeignKey(Employee, on_delete=models.PROTECT, related_name='salary_payments')

    gross_salary = models.DecimalField(max_digits=12, decimal_places=2)
    advance_deducted = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    net_paid = models.DecimalField(max_digits=12, decimal_places=2)
    previous_advance_balance = models.DecimalField(max_digits=12, decimal_places=2)
    new_advance_balance = models.DecimalField(max_digits=12, decimal_places=2)

    payment_method = models.CharField(max_length=20, choices=PaymentMethod.choices, null=True, blank=True)
    reference = models.CharField(max_length=255, null=True, blank=True)
    paid_date = models.DateTimeField()
    paid_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True, blank=True,
        related_name='salary_payments_made'
    )
    idempotency_key = models.CharField(max_length=100, unique=True, null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'salary_payment'
        ordering = ['-paid_date', '-created_at']
        indexes = [
            models.Index(fields=['employee', 'paid_date'], name='salpay_emp_date_idx'),
        ]

    def __str__(self):
        return f"Payment {self.id} | {self.employee.employee_id} | {self.net_paid}"


# ==================== ADVANCE LEDGER ====================
class AdvanceRecord(models.Model):
    """
    Immutable advance ledger entry.

    amount is positive for GIVEN and RECOVERED; ADJUSTMENT carries a signed
    amount. balance_after is the employee's running balance including this
    entry, so for every employee:
        advance_balance == sum(GIVEN) - sum(RECOVERED) + sum(ADJUSTMENT)
    """

    TYPE_GIVEN = 'GIVEN'
    TYPE_RECOVERED = 'RECOVERED'
    TYPE_ADJUSTMENT = 'ADJUSTMENT'
    TYPE_CHOICES = [
        (TYPE_GIVEN, 'Given'),
        (TYPE_RECOVERED, 'Recovered'),
        (TYPE_ADJUSTMENT, 'Adjustment'),
    ]

    # Badge colour shown next to each ledger row
    BADGE_COLORS = {
        TYPE_GIVEN: 'red',
        TYPE_RECOVERED: 'green',
        TYPE_ADJUSTMENT: 'blue',
    }

    id = models.BigAutoField(primary_key=True)
    employee = models.ForeignKey(Employee, on_delete=models.PROTECT, related_name='advance_records')
    type = models.CharField(max_length=20, choices=TYPE_CHOICES)
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    balance_after = models.DecimalField(max_digits=12, decimal_places=2)
    salary = models.ForeignKey(
        Salary,
        on_delete=models.PROTECT,
        null=True, blank=True,
        related_name='advance_records',
        help_text="Salary the amount was recovered from (RECOVERED only)"
    )
    description = models.TextField(null=True, blank=True)
    payment_method = models.CharField(max_length=20, choices=PaymentMethod.choices, null=True, blank=True)
    reference = models.CharField(max_length=255, null=True, blank=True)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True, blank=True,
        related_name='advance_records_created'
    )
    idempotency_key = models.CharField(max_length=100, unique=True, null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'advance_record'
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['employee', 'created_at'], name='advance_emp_created_idx'),
            models.Index(fields=['type', 'created_at'], name='advance_type_created_idx'),
        ]

    @property
    def signed_amount(self):
        """Effect of this entry on the balance"""
        if self.type == self.TYPE_RECOVERED:
            return -self.amount
        return self.amount

    @property
    def badge(self):
        return self.BADGE_COLORS.get(self.type)

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ImmutableRecordError("Advance records cannot be modified once written")
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ImmutableRecordError("Advance records cannot be deleted")

    def __str__(self):
        return f"{self.employee.employee_id} | {self.type} | {self.amount} → {self.balance_after}"
