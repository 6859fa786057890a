"""
Salary and advance arithmetic.

These helpers are pure functions, so no database is needed.
"""
from datetime import date
from decimal import Decimal

import pytest

from EmployeeManagement.models import Employee
from PayrollSystem.utils import (
    calculate_gross_salary,
    calculate_max_deduction,
    calculate_per_day_rate,
    calculate_salary_breakdown,
    calculate_settlement,
    calculate_suggested_deduction,
    calculate_total_payable,
    clamp_advance_deduction,
    format_bdt,
    to_money,
)


class TestMoney:

    def test_empty_values_are_zero(self):
        assert to_money(None) == Decimal('0.00')
        assert to_money('') == Decimal('0.00')

    def test_rounds_half_up_to_two_places(self):
        assert to_money('12.345') == Decimal('12.35')
        assert to_money(7) == Decimal('7.00')


class TestSalaryBreakdown:

    def test_gross_adds_earnings_and_subtracts_deductions(self):
        assert calculate_gross_salary(15000, 5000, 1000, 500, 200) == Decimal('21300.00')

    def test_breakdown_from_employee_compensation(self):
        employee = Employee(
            name="Test",
            designation="Engineer",
            join_date=date(2024, 1, 1),
            base_salary=Decimal('15000.00'),
            home_rent_allowance=Decimal('3000.00'),
            health_allowance=Decimal('1000.00'),
            travel_allowance=Decimal('500.00'),
            mobile_allowance=Decimal('500.00'),
            other_allowances=Decimal('0.00'),
            overtime_rate=Decimal('100.00'),
        )

        breakdown = calculate_salary_breakdown(employee, overtime_hours=10, bonus=500, deductions=200)

        assert breakdown['base_salary'] == Decimal('15000.00')
        assert breakdown['allowances'] == Decimal('5000.00')
        assert breakdown['overtime_amount'] == Decimal('1000.00')
        assert breakdown['gross_salary'] == Decimal('21300.00')

    def test_no_overtime_without_rate(self):
        employee = Employee(base_salary=Decimal('1000.00'), overtime_rate=None)
        assert calculate_salary_breakdown(employee, overtime_hours=8)['overtime_amount'] == Decimal('0.00')


class TestAdvanceSettlement:

    @pytest.mark.parametrize("balance, gross, expected", [
        (5000, 20000, Decimal('5000.00')),
        (30000, 20000, Decimal('20000.00')),
        (0, 20000, Decimal('0.00')),
        (5000, 0, Decimal('0.00')),
    ])
    def test_max_deduction_is_min_of_balance_and_gross(self, balance, gross, expected):
        assert calculate_max_deduction(balance, gross) == expected

    def test_suggested_deduction_defaults_to_full_recovery(self):
        assert calculate_suggested_deduction(Decimal('5000.00')) == Decimal('5000.00')

    def test_suggested_deduction_uses_recovery_percent(self):
        assert calculate_suggested_deduction(Decimal('5000.00'), 50) == Decimal('2500.00')

    @pytest.mark.parametrize("entered, expected", [
        ('99999', Decimal('5000.00')),
        ('5000', Decimal('5000.00')),
        ('1200.50', Decimal('1200.50')),
        ('-10', Decimal('0.00')),
        ('', Decimal('0.00')),
        (None, Decimal('0.00')),
        ('abc', Decimal('0.00')),
        ('NaN', Decimal('0.00')),
    ])
    def test_clamp_keeps_deduction_within_range(self, entered, expected):
        assert clamp_advance_deduction(entered, Decimal('5000.00')) == expected

    def test_settlement_scenario(self):
        """Balance 5000, gross 20000, deduct 5000 -> net 15000, balance 0"""
        result = calculate_settlement(Decimal('20000'), Decimal('5000'), Decimal('5000'))

        assert result['net_paid'] == Decimal('15000.00')
        assert result['new_balance'] == Decimal('0.00')

    def test_partial_settlement(self):
        result = calculate_settlement(Decimal('20000'), Decimal('5000'), Decimal('1500'))

        assert result['net_paid'] == Decimal('18500.00')
        assert result['new_balance'] == Decimal('3500.00')


class TestSalarySheet:

    def test_per_day_rate(self):
        assert calculate_per_day_rate(31000, 1, 2025) == Decimal('1000.00')
        assert calculate_per_day_rate(29000, 2, 2024) == Decimal('1000.00')

    def test_total_payable_by_attendance(self):
        # 15 of 31 days in January
        assert calculate_total_payable(31000, 0, 1000, 500, 15, 1, 2025) == Decimal('16500.00')

    def test_total_payable_without_attendance_uses_monthly_salary(self):
        assert calculate_total_payable(31000, 30000, 1000, 500, 0, 1, 2025) == Decimal('31500.00')
        assert calculate_total_payable(31000, 30000, 1000, 500, None, 1, 2025) == Decimal('31500.00')


class TestFormatBdt:

    @pytest.mark.parametrize("amount, expected", [
        (999, '৳999.00'),
        (1500, '৳1,500.00'),
        (123456, '৳1,23,456.00'),
        (1234567.5, '৳12,34,567.50'),
        (-1500, '-৳1,500.00'),
    ])
    def test_south_asian_grouping(self, amount, expected):
        assert format_bdt(amount) == expected
