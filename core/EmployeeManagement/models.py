"""
Employee Management Models
"""
import uuid
from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models


class Employee(models.Model):
    """
    Employee master record with the fixed monthly compensation used when
    salaries are generated.

    advance_balance is owned by the payroll ledger (PayrollSystem.AdvanceRecord)
    and must only change through it.
    """

    EMPLOYEE_ID_PREFIX = "EMP-"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    employee_id = models.CharField(
        max_length=20, unique=True, blank=True,
        help_text="Human readable code, e.g. EMP-00001 (auto-generated)"
    )
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True, blank=True,
        related_name='employee_profile',
        help_text="Optional dashboard login linked to this employee"
    )

    # --------------------
    # Identity
    # --------------------
    name = models.CharField(max_length=255)
    email = models.EmailField(unique=True)
    phone = models.CharField(max_length=30, blank=True, null=True)
    address = models.TextField(blank=True, null=True)
    designation = models.CharField(max_length=255)
    join_date = models.DateField()

    # --------------------
    # Compensation (monthly, BDT)
    # --------------------
    base_salary = models.DecimalField(
        max_digits=12, decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    home_rent_allowance = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'), validators=[MinValueValidator(Decimal('0.00'))])
    health_allowance = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'), validators=[MinValueValidator(Decimal('0.00'))])
    travel_allowance = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'), validators=[MinValueValidator(Decimal('0.00'))])
    mobile_allowance = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'), validators=[MinValueValidator(Decimal('0.00'))])
    other_allowances = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'), validators=[MinValueValidator(Decimal('0.00'))])
    overtime_rate = models.DecimalField(
        max_digits=10, decimal_places=2, null=True, blank=True,
        help_text="Overtime pay per hour"
    )

    # --------------------
    # Advance ledger snapshot
    # --------------------
    advance_balance = models.DecimalField(
        max_digits=12, decimal_places=2, default=Decimal('0.00'),
        help_text="Outstanding advance; equals the last AdvanceRecord.balance_after"
    )

    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'employee'
        ordering = ['employee_id']
        indexes = [
            models.Index(fields=['is_active', 'name'], name='employee_active_name_idx'),
            models.Index(fields=['is_active', 'advance_balance'], name='employee_active_adv_idx'),
        ]

    def save(self, *args, **kwargs):
        if not self.employee_id:
            self.employee_id = self._next_employee_id()
        super().save(*args, **kwargs)

    @classmethod
    def _next_employee_id(cls):
        last = cls.objects.filter(
            employee_id__startswith=cls.EMPLOYEE_ID_PREFIX
        ).order_by('-employee_id').values_list('employee_id', flat=True).first()

        new_num = 1
        if last:
            try:
                new_num = int(last[len(cls.EMPLOYEE_ID_PREFIX):]) + 1
            except ValueError:
                new_num = cls.objects.count() + 1
        return f"{cls.EMPLOYEE_ID_PREFIX}{new_num:05d}"

    @property
    def total_allowances(self):
        return (
            self.home_rent_allowance
            + self.health_allowance
            + self.travel_allowance
            + self.mobile_allowance
            + self.other_allowances
        )

    @property
    def monthly_gross(self):
        return self.base_salary + self.total_allowances

    def __str__(self):
        return f"{self.employee_id} | {self.name}"
