from decimal import Decimal

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


PAYMENT_METHOD_CHOICES = [
    ('CASH', 'Cash'),
    ('BANK_TRANSFER', 'Bank Transfer'),
    ('CHEQUE', 'Cheque'),
    ('CARD', 'Card'),
]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('EmployeeManagement', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Salary',
            fields=[
                ('id', models.BigAutoField(primary_key=True, serialize=False)),
                ('month', models.PositiveSmallIntegerField(validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(12)])),
                ('year', models.PositiveIntegerField(validators=[django.core.validators.MinValueValidator(2000), django.core.validators.MaxValueValidator(2100)])),
                ('base_salary', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12)),
                ('allowances', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12)),
                ('overtime_hours', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=7)),
                ('overtime_amount', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12)),
                ('bonus', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12)),
                ('deductions', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12)),
                ('gross_salary', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12)),
                ('advance_deduction', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12)),
                ('net_salary', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12)),
                ('status', models.CharField(choices=[('PENDING', 'Pending'), ('PAID', 'Paid'), ('CANCELLED', 'Cancelled')], default='PENDING', max_length=20)),
                ('paid_date', models.DateTimeField(blank=True, help_text='Stored at 00:00 UTC', null=True)),
                ('payment_method', models.CharField(blank=True, choices=PAYMENT_METHOD_CHOICES, max_length=20, null=True)),
                ('reference', models.CharField(blank=True, max_length=255, null=True)),
                ('notes', models.TextField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('employee', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='salaries', to='EmployeeManagement.employee')),
            ],
            options={
                'verbose_name': 'Salary',
                'verbose_name_plural': 'Salaries',
                'db_table': 'salary',
                'ordering': ['-year', '-month', 'employee__employee_id'],
                'indexes': [
                    models.Index(fields=['year', 'month', 'status'], name='salary_period_status_idx'),
                    models.Index(fields=['employee', 'status'], name='salary_emp_status_idx'),
                ],
                'constraints': [
                    models.UniqueConstraint(fields=('employee', 'month', 'year'), name='salary_unique_employee_period'),
                ],
            },
        ),
        migrations.CreateModel(
            name='SalaryPayment',
            fields=[
                ('id', models.BigAutoField(primary_key=True, serialize=False)),
                ('gross_salary', models.DecimalField(decimal_places=2, max_digits=12)),
                ('advance_deducted', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12)),
                ('net_paid', models.DecimalField(decimal_places=2, max_digits=12)),
                ('previous_advance_balance', models.DecimalField(decimal_places=2, max_digits=12)),
                ('new_advance_balance', models.DecimalField(decimal_places=2, max_digits=12)),
                ('payment_method', models.CharField(blank=True, choices=PAYMENT_METHOD_CHOICES, max_length=20, null=True)),
                ('reference', models.CharField(blank=True, max_length=255, null=True)),
                ('paid_date', models.DateTimeField()),
                ('idempotency_key', models.CharField(blank=True, max_length=100, null=True, unique=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('employee', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='salary_payments', to='EmployeeManagement.employee')),
                ('paid_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='salary_payments_made', to=settings.AUTH_USER_MODEL)),
                ('salary', models.OneToOneField(on_delete=django.db.models.deletion.PROTECT, related_name='payment', to='PayrollSystem.salary')),
            ],
            options={
                'db_table': 'salary_payment',
                'ordering': ['-paid_date', '-created_at'],
                'indexes': [
                    models.Index(fields=['employee', 'paid_date'], name='salpay_emp_date_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='AdvanceRecord',
            fields=[
                ('id', models.BigAutoField(primary_key=True, serialize=False)),
                ('type', models.CharField(choices=[('GIVEN', 'Given'), ('RECOVERED', 'Recovered'), ('ADJUSTMENT', 'Adjustment')], max_length=20)),
                ('amount', models.DecimalField(decimal_places=2, max_digits=12)),
                ('balance_after', models.DecimalField(decimal_places=2, max_digits=12)),
                ('description', models.TextField(blank=True, null=True)),
                ('payment_method', models.CharField(blank=True, choices=PAYMENT_METHOD_CHOICES, max_length=20, null=True)),
                ('reference', models.CharField(blank=True, max_length=255, null=True)),
                ('idempotency_key', models.CharField(blank=True, max_length=100, null=True, unique=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='advance_records_created', to=settings.AUTH_USER_MODEL)),
                ('employee', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='advance_records', to='EmployeeManagement.employee')),
                ('salary', models.ForeignKey(blank=True, help_text='Salary the amount was recovered from (RECOVERED only)', null=True, on_delete=django.db.models.deletion.PROTECT, related_name='advance_records', to='PayrollSystem.salary')),
            ],
            options={
                'db_table': 'advance_record',
                'ordering': ['-created_at', '-id'],
                'indexes': [
                    models.Index(fields=['employee', 'created_at'], name='advance_emp_created_idx'),
                    models.Index(fields=['type', 'created_at'], name='advance_type_created_idx'),
                ],
            },
        ),
    ]
