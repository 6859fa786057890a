"""
Payroll exceptions

Every error raised by the payroll services is a PayrollError carrying a
machine-readable `code` and the HTTP status the views answer with:

    PayrollError (base, 400)
    +-- ValidationFailed            400
    +-- InvalidAdvanceDeduction     400
    +-- InsufficientAdvanceBalance  400
    +-- InactiveEmployee            400
    +-- EmployeeNotFound            404
    +-- SalaryNotFound              404
    +-- DuplicateSalary             409
    +-- SalaryAlreadyPaid           409
    +-- IdempotencyConflict         409
    +-- ImmutableRecordError        409
"""
from calendar import month_name


class PayrollError(Exception):
    code = "PAYROLL_ERROR"
    status_code = 400

    def __init__(self, message):
        self.message = message
        super().__init__(message)


class ValidationFailed(PayrollError):
    code = "VALIDATION_FAILED"


class InvalidAdvanceDeduction(PayrollError):
    code = "INVALID_ADVANCE_DEDUCTION"

    def __init__(self, deduction, max_deduction):
        self.deduction = deduction
        self.max_deduction = max_deduction
        if deduction < 0:
            message = "Advance deduction cannot be negative"
        else:
            message = (
                f"Advance deduction {deduction} exceeds the maximum allowed {max_deduction}"
            )
        super().__init__(message)


class InsufficientAdvanceBalance(PayrollError):
    code = "INSUFFICIENT_ADVANCE_BALANCE"

    def __init__(self, balance, change):
        self.balance = balance
        self.change = change
        super().__init__(
            f"Advance balance {balance} cannot absorb a change of {change}; balance would become negative"
        )


class InactiveEmployee(PayrollError):
    code = "INACTIVE_EMPLOYEE"

    def __init__(self, employee_code):
        self.employee_code = employee_code
        super().__init__(f"Employee {employee_code} is inactive")


class EmployeeNotFound(PayrollError):
    code = "EMPLOYEE_NOT_FOUND"
    status_code = 404

    def __init__(self, employee_id):
        self.employee_id = employee_id
        super().__init__("Employee not found")


class SalaryNotFound(PayrollError):
    code = "SALARY_NOT_FOUND"
    status_code = 404

    def __init__(self, month, year, message=None):
        self.month = month
        self.year = year
        super().__init__(message or f"No salary record for {month_name[month]} {year}")


class DuplicateSalary(PayrollError):
    code = "DUPLICATE_SALARY"
    status_code = 409

    def __init__(self, employee_code, month, year):
        self.employee_code = employee_code
        self.month = month
        self.year = year
        super().__init__(
            f"Salary for {employee_code} already exists for {month_name[month]} {year}"
        )


class SalaryAlreadyPaid(PayrollError):
    code = "SALARY_ALREADY_PAID"
    status_code = 409

    def __init__(self, month, year):
        self.month = month
        self.year = year
        super().__init__(f"Salary for {month_name[month]} {year} is already paid")


class IdempotencyConflict(PayrollError):
    code = "IDEMPOTENCY_CONFLICT"
    status_code = 409

    def __init__(self, key):
        self.key = key
        super().__init__(f"Idempotency key {key!r} was already used for a different request")


class ImmutableRecordError(PayrollError):
    code = "IMMUTABLE_RECORD"
    status_code = 409
