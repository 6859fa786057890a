"""
Payroll System Utility Functions
Salary breakdown and advance settlement arithmetic. Pure functions on
Decimal amounts, no database access.
"""
from calendar import monthrange, month_name
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

TWO_PLACES = Decimal('0.01')
ZERO = Decimal('0.00')
# Largest value a money column (12 digits, 2 dp) holds
MAX_AMOUNT = Decimal('9999999999.99')


def to_money(value):
    """Coerce to a 2-dp Decimal. None/'' become 0."""
    if value is None or value == '':
        return ZERO
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def month_label(month):
    return month_name[month]


# ==================== SALARY BREAKDOWN ====================

def calculate_total_allowances(employee):
    """Sum of the five allowance fields on an employee"""
    return to_money(employee.total_allowances)


def calculate_overtime_amount(overtime_hours, overtime_rate):
    if not overtime_hours or not overtime_rate:
        return ZERO
    return to_money(Decimal(str(overtime_hours)) * Decimal(str(overtime_rate)))


def calculate_gross_salary(base_salary, allowances, overtime_amount=ZERO, bonus=ZERO, deductions=ZERO):
    """gross = base + allowances + overtime + bonus - deductions"""
    return to_money(
        to_money(base_salary)
        + to_money(allowances)
        + to_money(overtime_amount)
        + to_money(bonus)
        - to_money(deductions)
    )


def calculate_salary_breakdown(employee, overtime_hours=ZERO, bonus=ZERO, deductions=ZERO):
    """
    Salary snapshot for one month from the employee's current compensation.

    Returns:
        dict: base_salary, allowances, overtime_hours, overtime_amount,
              bonus, deductions, gross_salary
    """
    base_salary = to_money(employee.base_salary)
    allowances = calculate_total_allowances(employee)
    overtime_hours = to_money(overtime_hours)
    overtime_amount = calculate_overtime_amount(overtime_hours, employee.overtime_rate)
    bonus = to_money(bonus)
    deductions = to_money(deductions)

    return {
        'base_salary': base_salary,
        'allowances': allowances,
        'overtime_hours': overtime_hours,
        'overtime_amount': overtime_amount,
        'bonus': bonus,
        'deductions': deductions,
        'gross_salary': calculate_gross_salary(base_salary, allowances, overtime_amount, bonus, deductions),
    }


# ==================== ADVANCE SETTLEMENT ====================

def calculate_max_deduction(advance_balance, gross_salary):
    """Largest amount recoverable from one salary: min(balance, gross), never below 0"""
    return max(min(to_money(advance_balance), to_money(gross_salary)), ZERO)


def calculate_suggested_deduction(max_deduction, recovery_percent=100):
    """recovery_percent % of the maximum, capped to [0, max_deduction]"""
    suggested = to_money(to_money(max_deduction) * Decimal(str(recovery_percent)) / Decimal('100'))
    return clamp_advance_deduction(suggested, max_deduction)


def clamp_advance_deduction(value, max_deduction):
    """
    Clamp a user-entered deduction to [0, max_deduction].
    Empty or non-numeric input counts as 0.
    """
    try:
        amount = to_money(value)
    except (InvalidOperation, ValueError, TypeError):
        amount = ZERO
    if amount.is_nan():
        amount = ZERO
    return max(min(amount, to_money(max_deduction)), ZERO)


def calculate_settlement(gross_salary, previous_balance, advance_deduction):
    """
    Result of paying a salary with a given deduction.

    Returns:
        dict: net_paid, new_balance
    """
    deduction = to_money(advance_deduction)
    return {
        'net_paid': to_money(to_money(gross_salary) - deduction),
        'new_balance': to_money(to_money(previous_balance) - deduction),
    }


# ==================== BULK SHEET ====================

def calculate_per_day_rate(basic, month, year):
    """Basic salary divided by the days in the month"""
    days_in_month = monthrange(year, month)[1]
    return to_money(Decimal(str(basic)) / Decimal(days_in_month))


def calculate_total_payable(basic, monthly_salary, medical_mobile, bonus, daily_present, month, year):
    """
    Payable for one salary-sheet row. With attendance, pay per day present
    plus medical/mobile and bonus; without it, the monthly salary plus the same.
    """
    extras = to_money(medical_mobile) + to_money(bonus)
    if daily_present and Decimal(str(daily_present)) > 0:
        days_in_month = monthrange(year, month)[1]
        earned = to_money(Decimal(str(basic)) * Decimal(str(daily_present)) / Decimal(days_in_month))
        return to_money(earned + extras)
    return to_money(to_money(monthly_salary) + extras)


# ==================== FORMATTING ====================

def format_bdt(amount):
    """
    Format as Bangladeshi Taka with South Asian digit grouping:
    1234567.5 -> '৳12,34,567.50'
    """
    amount = to_money(amount)
    sign = '-' if amount < 0 else ''
    whole, fraction = f"{abs(amount):.2f}".split('.')

    if len(whole) > 3:
        head, tail = whole[:-3], whole[-3:]
        groups = []
        while len(head) > 2:
            groups.insert(0, head[-2:])
            head = head[:-2]
        if head:
            groups.insert(0, head)
        whole = ','.join(groups + [tail])

    return f"{sign}৳{whole}.{fraction}"
