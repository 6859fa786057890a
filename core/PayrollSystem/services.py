"""
Payroll services

The only official way to create salaries, pay them and move an employee's
advance balance. Every balance change:
- runs inside transaction.atomic with the employee row locked
  (select_for_update), so concurrent requests for one employee serialize
- appends exactly one immutable AdvanceRecord whose balance_after equals
  the employee's new advance_balance
"""
import logging
from datetime import date

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError, transaction
from django.db.models import Count, OuterRef, Q, Subquery, Sum
from django.utils.text import slugify

from EmployeeManagement.models import Employee
from utils.date_utils import current_period
from .conf import payroll_setting
from .exceptions import (
    DuplicateSalary,
    EmployeeNotFound,
    IdempotencyConflict,
    InactiveEmployee,
    InsufficientAdvanceBalance,
    InvalidAdvanceDeduction,
    PayrollError,
    SalaryAlreadyPaid,
    SalaryNotFound,
    ValidationFailed,
)
from .models import AdvanceRecord, PaymentMethod, Salary, SalaryPayment
from .utils import (
    MAX_AMOUNT,
    ZERO,
    calculate_gross_salary,
    calculate_max_deduction,
    calculate_salary_breakdown,
    calculate_settlement,
    calculate_suggested_deduction,
    calculate_total_payable,
    month_label,
    to_money,
)

logger = logging.getLogger(__name__)

# Salary sheet "mode of payment" column
PAYMENT_MODE_MAP = {
    '0': PaymentMethod.CASH,
    '1': PaymentMethod.BANK_TRANSFER,
    '2': PaymentMethod.CHEQUE,
    '3': PaymentMethod.CARD,
}


# ==================== HELPERS ====================

def resolve_period(month=None, year=None):
    """Fill a missing month/year from the current UTC date and validate both"""
    current_month, current_year = current_period()
    month = current_month if month is None else month
    year = current_year if year is None else year

    if not 1 <= int(month) <= 12:
        raise ValidationFailed("Month must be between 1 and 12")
    if not 2000 <= int(year) <= 2100:
        raise ValidationFailed("Year must be between 2000 and 2100")
    return int(month), int(year)


def get_employee(employee_id, lock=False):
    queryset = Employee.objects.all()
    if lock:
        queryset = queryset.select_for_update()
    try:
        return queryset.get(pk=employee_id)
    except (Employee.DoesNotExist, DjangoValidationError, ValueError):
        raise EmployeeNotFound(employee_id) from None


def _append_advance_record(employee, record_type, amount, salary=None, description=None,
                           payment_method=None, reference=None, created_by=None,
                           idempotency_key=None):
    """
    Write one ledger entry and move the employee's balance with it.
    Caller must hold the employee row lock.

    Returns:
        tuple: (AdvanceRecord, previous_balance)
    """
    amount = to_money(amount)
    change = -amount if record_type == AdvanceRecord.TYPE_RECOVERED else amount
    previous_balance = to_money(employee.advance_balance)
    new_balance = to_money(previous_balance + change)

    if new_balance < ZERO:
        raise InsufficientAdvanceBalance(previous_balance, change)
    if amount > MAX_AMOUNT or new_balance > MAX_AMOUNT:
        raise ValidationFailed(f"Advance balance cannot exceed {MAX_AMOUNT}")

    record = AdvanceRecord.objects.create(
        employee=employee,
        type=record_type,
        amount=amount,
        balance_after=new_balance,
        salary=salary,
        description=description or None,
        payment_method=payment_method or None,
        reference=reference or None,
        created_by=created_by,
        idempotency_key=idempotency_key or None,
    )

    employee.advance_balance = new_balance
    employee.save(update_fields=['advance_balance', 'updated_at'])
    return record, previous_balance


def _advance_result(record, employee, previous_balance, replayed=False):
    return {
        'advance': record,
        'employee': employee,
        'previous_balance': to_money(previous_balance),
        'new_balance': to_money(record.balance_after),
        'replayed': replayed,
    }


def _replay_advance(idempotency_key, employee, record_type):
    if SalaryPayment.objects.filter(idempotency_key=idempotency_key).exists():
        raise IdempotencyConflict(idempotency_key)
    existing = AdvanceRecord.objects.filter(idempotency_key=idempotency_key).first()
    if existing is None:
        return None
    if existing.employee_id != employee.id or existing.type != record_type:
        raise IdempotencyConflict(idempotency_key)
    logger.info(f"Replaying advance record {existing.id} for idempotency key {idempotency_key}")
    return _advance_result(existing, employee, existing.balance_after - existing.signed_amount, replayed=True)


# ==================== SALARY ====================

def _create_salary_record(employee, month, year, overtime_hours=ZERO, bonus=ZERO, deductions=ZERO,
                          breakdown=None):
    if Salary.objects.filter(employee=employee, month=month, year=year).exists():
        raise DuplicateSalary(employee.employee_id, month, year)

    if breakdown is None:
        breakdown = calculate_salary_breakdown(employee, overtime_hours, bonus, deductions)
    if breakdown['gross_salary'] < ZERO:
        raise ValidationFailed("Deductions cannot exceed total earnings")
    if any(value > MAX_AMOUNT for value in breakdown.values()):
        raise ValidationFailed(f"Salary amounts cannot exceed {MAX_AMOUNT}")

    try:
        with transaction.atomic():
            salary = Salary.objects.create(
                employee=employee,
                month=month,
                year=year,
                net_salary=breakdown['gross_salary'],
                **breakdown,
            )
    except IntegrityError:
        raise DuplicateSalary(employee.employee_id, month, year) from None

    logger.info(
        f"Salary {salary.id} created for {employee.employee_id} "
        f"{month_label(month)} {year}: gross {salary.gross_salary}"
    )
    return salary


@transaction.atomic
def create_salary(*, employee_id, month, year, overtime_hours=ZERO, bonus=ZERO, deductions=ZERO):
    """Create the salary of one employee for one month (at most one per period)"""
    month, year = resolve_period(month, year)
    employee = get_employee(employee_id, lock=True)
    if not employee.is_active:
        raise InactiveEmployee(employee.employee_id)
    return _create_salary_record(employee, month, year, overtime_hours, bonus, deductions)


def generate_monthly_salaries(*, month=None, year=None):
    """
    Create a PENDING salary for every active employee that has none for the
    period. Safe to run repeatedly: existing records are skipped.
    """
    month, year = resolve_period(month, year)

    employees = list(Employee.objects.filter(is_active=True).order_by('employee_id'))
    existing_ids = set(
        Salary.objects.filter(month=month, year=year).values_list('employee_id', flat=True)
    )

    created, skipped, errors = [], [], []
    for employee in employees:
        if employee.id in existing_ids:
            skipped.append({
                'employeeId': str(employee.id),
                'employeeName': employee.name,
                'reason': 'Salary already exists for this period',
            })
            continue

        try:
            with transaction.atomic():
                salary = _create_salary_record(employee, month, year)
        except DuplicateSalary:
            skipped.append({
                'employeeId': str(employee.id),
                'employeeName': employee.name,
                'reason': 'Salary already exists for this period',
            })
            continue
        except PayrollError as e:
            errors.append({'employeeId': str(employee.id), 'employeeName': employee.name, 'error': e.message})
            continue
        except Exception as e:
            logger.exception(f"Error generating salary for {employee.employee_id} {month}/{year}")
            errors.append({'employeeId': str(employee.id), 'employeeName': employee.name, 'error': str(e)})
            continue

        created.append({
            'employeeId': str(employee.id),
            'employeeName': employee.name,
            'salaryId': str(salary.id),
            'netSalary': salary.net_salary,
        })

    logger.info(
        f"Monthly salaries {month_label(month)} {year}: "
        f"{len(created)} created, {len(skipped)} skipped, {len(errors)} errors"
    )
    return {
        'month': month,
        'year': year,
        'summary': {
            'totalEmployees': len(employees),
            'created': len(created),
            'skipped': len(skipped),
            'errors': len(errors),
        },
        'details': {
            'created': created,
            'skipped': skipped,
            'errors': errors,
        },
    }


def get_salary_preview(*, employee_id, month, year):
    """
    Salary breakdown plus advance figures for the pay-salary form.
    maxDeduction = min(advance balance, gross); the suggested deduction is a
    configurable share of it.
    """
    month, year = resolve_period(month, year)
    employee = get_employee(employee_id)
    salary = Salary.objects.filter(employee=employee, month=month, year=year).first()
    if salary is None:
        raise SalaryNotFound(
            month, year,
            message=f"Failed to load salary preview: no salary record for {month_label(month)} {year}",
        )

    current_balance = to_money(employee.advance_balance)
    if salary.status == Salary.STATUS_PENDING:
        max_deduction = calculate_max_deduction(current_balance, salary.gross_salary)
        suggested = calculate_suggested_deduction(
            max_deduction, payroll_setting('ADVANCE_SUGGESTED_RECOVERY_PERCENT')
        )
    else:
        max_deduction = ZERO
        suggested = ZERO

    return {
        'salary': salary,
        'employee': employee,
        'advance': {
            'currentBalance': current_balance,
            'suggestedDeduction': suggested,
            'netAfterDeduction': to_money(salary.gross_salary - suggested),
            'maxDeduction': max_deduction,
        },
    }


def _payment_result(payment, replayed=False):
    salary = payment.salary
    recovery = salary.advance_records.filter(type=AdvanceRecord.TYPE_RECOVERED).first()
    return {
        'salary': salary,
        'payment': payment,
        'employee': payment.employee,
        'recovery_record': recovery,
        'previous_balance': payment.previous_advance_balance,
        'new_balance': payment.new_advance_balance,
        'replayed': replayed,
    }


@transaction.atomic
def pay_salary(*, employee_id, month, year, paid_date, advance_deduction=ZERO, payment_method=None,
               reference=None, notes=None, paid_by=None, idempotency_key=None):
    """
    Pay a PENDING salary once, recovering part of the advance balance.

    netPaid    = gross - advance_deduction
    newBalance = previous balance - advance_deduction
    with 0 <= advance_deduction <= min(previous balance, gross).
    """
    month, year = resolve_period(month, year)
    employee = get_employee(employee_id, lock=True)

    if idempotency_key:
        existing = SalaryPayment.objects.select_related('salary', 'employee').filter(
            idempotency_key=idempotency_key
        ).first()
        if existing is not None:
            if (existing.employee_id != employee.id
                    or existing.salary.month != month or existing.salary.year != year):
                raise IdempotencyConflict(idempotency_key)
            logger.info(f"Replaying salary payment {existing.id} for idempotency key {idempotency_key}")
            return _payment_result(existing, replayed=True)
        if AdvanceRecord.objects.filter(idempotency_key=idempotency_key).exists():
            raise IdempotencyConflict(idempotency_key)

    salary = Salary.objects.select_for_update().filter(employee=employee, month=month, year=year).first()
    if salary is None:
        raise SalaryNotFound(month, year)
    if salary.status == Salary.STATUS_PAID:
        raise SalaryAlreadyPaid(month, year)
    if salary.status == Salary.STATUS_CANCELLED:
        raise ValidationFailed("Cannot pay a cancelled salary")

    deduction = to_money(advance_deduction)
    previous_balance = to_money(employee.advance_balance)
    max_deduction = calculate_max_deduction(previous_balance, salary.gross_salary)
    if deduction < ZERO or deduction > max_deduction:
        raise InvalidAdvanceDeduction(deduction, max_deduction)

    settlement = calculate_settlement(salary.gross_salary, previous_balance, deduction)

    salary.advance_deduction = deduction
    salary.net_salary = settlement['net_paid']
    salary.status = Salary.STATUS_PAID
    salary.paid_date = paid_date
    salary.payment_method = payment_method or None
    salary.reference = reference or None
    salary.notes = notes or None
    salary.save()

    if deduction > ZERO:
        _append_advance_record(
            employee,
            AdvanceRecord.TYPE_RECOVERED,
            deduction,
            salary=salary,
            description=f"Recovered from {month_label(month)} {year} salary",
            payment_method=payment_method,
            reference=reference,
            created_by=paid_by,
        )

    payment = SalaryPayment.objects.create(
        salary=salary,
        employee=employee,
        gross_salary=salary.gross_salary,
        advance_deducted=deduction,
        net_paid=settlement['net_paid'],
        previous_advance_balance=previous_balance,
        new_advance_balance=settlement['new_balance'],
        payment_method=payment_method or None,
        reference=reference or None,
        paid_date=paid_date,
        paid_by=paid_by,
        idempotency_key=idempotency_key or None,
    )

    logger.info(
        f"Salary {salary.id} paid for {employee.employee_id} {month_label(month)} {year}: "
        f"gross {salary.gross_salary}, advance deducted {deduction}, net {payment.net_paid}, "
        f"advance balance {previous_balance} -> {payment.new_advance_balance}"
    )
    return _payment_result(payment)


# ==================== ADVANCES ====================

@transaction.atomic
def give_advance(*, employee_id, amount, description=None, payment_method=None, reference=None,
                 created_by=None, idempotency_key=None):
    """Pay out an advance: newBalance = previousBalance + amount"""
    amount = to_money(amount)
    if amount <= ZERO:
        raise ValidationFailed("Advance amount must be greater than 0")

    employee = get_employee(employee_id, lock=True)

    if idempotency_key:
        replay = _replay_advance(idempotency_key, employee, AdvanceRecord.TYPE_GIVEN)
        if replay is not None:
            return replay

    if not employee.is_active:
        raise InactiveEmployee(employee.employee_id)

    record, previous_balance = _append_advance_record(
        employee,
        AdvanceRecord.TYPE_GIVEN,
        amount,
        description=description,
        payment_method=payment_method,
        reference=reference,
        created_by=created_by,
        idempotency_key=idempotency_key,
    )
    logger.info(
        f"Advance {record.id} of {amount} given to {employee.employee_id}: "
        f"balance {previous_balance} -> {record.balance_after}"
    )
    return _advance_result(record, employee, previous_balance)


@transaction.atomic
def adjust_advance(*, employee_id, amount, description, created_by=None):
    """Signed correction to the advance balance; the result may not go below 0"""
    amount = to_money(amount)
    if amount == ZERO:
        raise ValidationFailed("Adjustment amount cannot be 0")
    if not description or not description.strip():
        raise ValidationFailed("Description is required for an adjustment")

    employee = get_employee(employee_id, lock=True)
    record, previous_balance = _append_advance_record(
        employee,
        AdvanceRecord.TYPE_ADJUSTMENT,
        amount,
        description=description.strip(),
        created_by=created_by,
    )
    logger.info(
        f"Advance adjustment {record.id} of {amount} for {employee.employee_id}: "
        f"balance {previous_balance} -> {record.balance_after}"
    )
    return _advance_result(record, employee, previous_balance)


def get_advance_history(*, employee_id):
    """An employee's ledger, newest first. The caller paginates it."""
    employee = get_employee(employee_id)
    queryset = employee.advance_records.select_related('salary').order_by('-created_at', '-id')
    return {
        'employee': employee,
        'advances': queryset,
    }


def get_advance_overview():
    """Outstanding advances across all employees"""
    last_record = AdvanceRecord.objects.filter(employee=OuterRef('pk')).order_by('-created_at', '-id')
    employees = list(
        Employee.objects.exclude(advance_balance=ZERO)
        .annotate(last_record_id=Subquery(last_record.values('id')[:1]))
        .order_by('-advance_balance', 'employee_id')
    )
    last_records = AdvanceRecord.objects.in_bulk(
        [e.last_record_id for e in employees if e.last_record_id]
    )

    total_outstanding = to_money(sum((e.advance_balance for e in employees), ZERO))
    with_advance = len(employees)
    average = to_money(total_outstanding / with_advance) if with_advance else ZERO

    rows = []
    for employee in employees:
        record = last_records.get(employee.last_record_id)
        rows.append({
            'id': str(employee.id),
            'employeeId': employee.employee_id,
            'name': employee.name,
            'designation': employee.designation,
            'advanceBalance': to_money(employee.advance_balance),
            'isActive': employee.is_active,
            'lastAdvanceTransaction': {
                'amount': record.amount,
                'type': record.type,
                'createdAt': record.created_at,
            } if record else None,
        })

    return {
        'summary': {
            'totalOutstandingAdvance': total_outstanding,
            'employeesWithAdvance': with_advance,
            'totalActiveEmployees': Employee.objects.filter(is_active=True).count(),
            'averageAdvance': average,
        },
        'employees': rows,
    }


# ==================== REPORTING ====================

def get_employee_salaries(*, employee_id):
    employee = get_employee(employee_id)
    return list(employee.salaries.select_related('employee').order_by('-year', '-month'))


def get_salary_report(*, month=None, year=None):
    month, year = resolve_period(month, year)
    salaries = list(
        Salary.objects.filter(month=month, year=year)
        .select_related('employee')
        .order_by('employee__employee_id')
    )
    return month, year, salaries


def get_payables(*, month=None, year=None):
    """The month's salaries split into unpaid (PENDING) and paid"""
    month, year, salaries = get_salary_report(month=month, year=year)
    return {
        'unpaid': [s for s in salaries if s.status == Salary.STATUS_PENDING],
        'paid': [s for s in salaries if s.status == Salary.STATUS_PAID],
        'month': month,
        'year': year,
    }


def _sum(queryset, field):
    return to_money(queryset.aggregate(total=Sum(field))['total'] or ZERO)


def get_salary_statistics(*, month=None, year=None):
    month, year = resolve_period(month, year)

    period = Salary.objects.filter(month=month, year=year).exclude(status=Salary.STATUS_CANCELLED)
    paid = period.filter(status=Salary.STATUS_PAID)
    pending = period.filter(status=Salary.STATUS_PENDING)

    year_to_date = Salary.objects.filter(year=year, month__lte=month, status=Salary.STATUS_PAID)
    all_paid = Salary.objects.filter(status=Salary.STATUS_PAID)

    total_active = Employee.objects.filter(is_active=True).count()
    paid_active = paid.filter(employee__is_active=True).count()

    return {
        'currentMonth': {
            'month': month,
            'year': year,
            'totalPaid': _sum(paid, 'net_salary'),
            'totalPending': _sum(pending, 'gross_salary'),
            'paidEmployees': paid.count(),
            'pendingEmployees': pending.count(),
            'totalEmployees': period.count(),
        },
        'yearToDate': {
            'totalPaid': _sum(year_to_date, 'net_salary'),
            'totalMonths': year_to_date.order_by().values('month').distinct().count(),
            'totalPayments': year_to_date.count(),
        },
        'allTime': {
            'totalPaid': _sum(all_paid, 'net_salary'),
            'totalPayments': all_paid.count(),
        },
        'employeeStats': {
            'totalActive': total_active,
            'paidThisMonth': paid_active,
            'pendingThisMonth': max(total_active - paid_active, 0),
        },
    }


def get_monthly_trends(*, year=None):
    """Twelve rows (Jan..Dec) of paid / pending totals for a year"""
    _, year = resolve_period(None, year)

    rows = (
        Salary.objects.filter(year=year)
        .order_by()
        .values('month')
        .annotate(
            paid_amount=Sum('net_salary', filter=Q(status=Salary.STATUS_PAID)),
            pending_amount=Sum('gross_salary', filter=Q(status=Salary.STATUS_PENDING)),
            paid_count=Count('id', filter=Q(status=Salary.STATUS_PAID)),
            pending_count=Count('id', filter=Q(status=Salary.STATUS_PENDING)),
        )
    )
    by_month = {row['month']: row for row in rows}

    trends = []
    for month in range(1, 13):
        row = by_month.get(month, {})
        trends.append({
            'month': month,
            'paidAmount': to_money(row.get('paid_amount') or ZERO),
            'pendingAmount': to_money(row.get('pending_amount') or ZERO),
            'paidCount': row.get('paid_count') or 0,
            'pendingCount': row.get('pending_count') or 0,
        })
    return {'year': year, 'trends': trends}


# ==================== BULK SALARY SHEET ====================

def _resolve_bulk_employee(data, month, year):
    """
    Find the row's employee by code, then by exact name; create one when
    neither matches. Returns (employee, created).
    """
    code = (data.get('employee_id') or '').strip()
    name = data['employee_name'].strip()

    if code:
        employee = Employee.objects.filter(employee_id__iexact=code).first()
        if employee is None:
            raise ValidationFailed(f"Employee {code} not found")
        return employee, False

    matches = list(Employee.objects.filter(name__iexact=name)[:2])
    if len(matches) > 1:
        raise ValidationFailed(f"More than one employee is named {name}; use the employee ID")
    if matches:
        return matches[0], False

    employee = Employee(
        name=name,
        designation=data.get('designation') or 'Staff',
        join_date=data.get('joining_date') or date(year, month, 1),
        base_salary=to_money(data.get('basic')),
        mobile_allowance=to_money(data.get('medical_mobile')),
    )
    employee.employee_id = Employee._next_employee_id()
    employee.email = f"{slugify(name) or 'employee'}.{employee.employee_id.lower()}@payroll.local"
    employee.save()
    logger.info(f"Employee {employee.employee_id} created from salary sheet row ({name})")
    return employee, True


def _process_bulk_entry(data, month, year, created_by):
    employee, employee_created = _resolve_bulk_employee(data, month, year)
    employee = get_employee(employee.pk, lock=True)
    if not employee.is_active:
        raise InactiveEmployee(employee.employee_id)

    basic = to_money(data.get('basic'))
    monthly_salary = to_money(data.get('monthly_salary'))
    medical_mobile = to_money(data.get('medical_mobile'))
    bonus = to_money(data.get('bonus_boksis'))
    daily_present = data.get('daily_present') or 0

    total_payable = calculate_total_payable(
        basic, monthly_salary, medical_mobile, bonus, daily_present, month, year
    )
    earned = to_money(total_payable - medical_mobile - bonus)
    breakdown = {
        'base_salary': earned,
        'allowances': medical_mobile,
        'overtime_hours': ZERO,
        'overtime_amount': ZERO,
        'bonus': bonus,
        'deductions': ZERO,
        'gross_salary': calculate_gross_salary(earned, medical_mobile, ZERO, bonus, ZERO),
    }
    salary = _create_salary_record(employee, month, year, breakdown=breakdown)

    advance = to_money(data.get('advance'))
    if advance > ZERO:
        _append_advance_record(
            employee,
            AdvanceRecord.TYPE_GIVEN,
            advance,
            description=f"Advance given with {month_label(month)} {year} salary sheet",
            payment_method=PAYMENT_MODE_MAP.get(str(data.get('mode_of_payment') or '0')),
            created_by=created_by,
        )

    return employee, employee_created, salary


def bulk_upload_salaries(*, month, year, entries, invalid_rows=None, created_by=None):
    """
    Import a monthly salary sheet.

    entries: list of (row_number, validated row dict)
    invalid_rows: rows already rejected by input validation, reported as-is

    Each row commits on its own; a failing row is reported and the rest continue.
    """
    month, year = resolve_period(month, year)
    errors = list(invalid_rows or [])

    created_salaries, created_employees = [], []
    updated_balances = {}

    for row_number, data in entries:
        try:
            with transaction.atomic():
                employee, employee_created, salary = _process_bulk_entry(data, month, year, created_by)
        except PayrollError as e:
            errors.append({'row': row_number, 'employeeName': data.get('employee_name', ''), 'reason': e.message})
            continue

        created_salaries.append(str(salary.id))
        if employee_created:
            created_employees.append(str(employee.id))
        updated_balances[str(employee.id)] = to_money(employee.advance_balance)

    total_rows = len(entries) + len(invalid_rows or [])
    errors.sort(key=lambda e: e['row'])

    logger.info(
        f"Salary sheet {month_label(month)} {year}: {len(created_salaries)} of {total_rows} rows processed, "
        f"{len(created_employees)} employees created, {len(errors)} errors"
    )
    return {
        'success': not errors,
        'month': month,
        'year': year,
        'monthName': month_label(month),
        'processedRows': len(created_salaries),
        'createdSalaries': created_salaries,
        'createdEmployees': created_employees,
        'errors': errors,
        'updatedAdvanceBalances': updated_balances,
        'summary': {
            'totalRows': total_rows,
            'processed': len(created_salaries),
            'failed': len(errors),
            'salariesCreated': len(created_salaries),
            'employeesCreated': len(created_employees),
        },
    }
