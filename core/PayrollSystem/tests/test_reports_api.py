"""
Reporting endpoint tests (payables, statistics, trends, salary report).
"""
from datetime import datetime, timezone as dt_timezone
from decimal import Decimal
from io import BytesIO

import openpyxl
import pytest

from PayrollSystem import services
from PayrollSystem.reports import XLSX_CONTENT_TYPE


@pytest.fixture
def january_payroll(create_employee, create_salary):
    """Two January salaries of 20000 each; the first one paid in full"""
    paid = create_employee(name="Paid Employee")
    pending = create_employee(name="Pending Employee")
    create_salary(paid)
    create_salary(pending)
    services.pay_salary(
        employee_id=paid.id, month=1, year=2025,
        paid_date=datetime(2025, 1, 31, tzinfo=dt_timezone.utc),
        advance_deduction=Decimal('0'),
    )
    return paid, pending


@pytest.mark.django_db
class TestPayablesAPI:

    def test_split_by_status(self, auth_client, january_payroll):
        paid, pending = january_payroll

        response = auth_client.get('/api/employees/payables/salaries?month=1&year=2025')

        data = response.json()['data']
        assert (data['month'], data['year']) == (1, 2025)
        assert [row['employee']['name'] for row in data['unpaid']] == [pending.name]
        assert [row['employee']['name'] for row in data['paid']] == [paid.name]


@pytest.mark.django_db
class TestStatisticsAPI:

    def test_statistics(self, auth_client, january_payroll):
        response = auth_client.get('/api/employees/statistics/salaries?month=1&year=2025')

        assert response.status_code == 200
        assert response.json()['data'] == {
            'currentMonth': {
                'month': 1,
                'year': 2025,
                'totalPaid': 20000,
                'totalPending': 20000,
                'paidEmployees': 1,
                'pendingEmployees': 1,
                'totalEmployees': 2,
            },
            'yearToDate': {'totalPaid': 20000, 'totalMonths': 1, 'totalPayments': 1},
            'allTime': {'totalPaid': 20000, 'totalPayments': 1},
            'employeeStats': {'totalActive': 2, 'paidThisMonth': 1, 'pendingThisMonth': 1},
        }

    def test_empty_month(self, auth_client, january_payroll):
        response = auth_client.get('/api/employees/statistics/salaries?month=2&year=2025')

        current = response.json()['data']['currentMonth']
        assert current['totalPaid'] == 0
        assert current['totalEmployees'] == 0


@pytest.mark.django_db
class TestTrendsAPI:

    def test_twelve_months(self, auth_client, january_payroll):
        response = auth_client.get('/api/employees/trends/salaries?year=2025')

        data = response.json()['data']
        assert data['year'] == 2025
        assert len(data['trends']) == 12
        assert data['trends'][0] == {
            'month': 1, 'paidAmount': 20000, 'pendingAmount': 20000, 'paidCount': 1, 'pendingCount': 1,
        }
        assert data['trends'][1] == {
            'month': 2, 'paidAmount': 0, 'pendingAmount': 0, 'paidCount': 0, 'pendingCount': 0,
        }


@pytest.mark.django_db
class TestSalaryReportAPI:

    def test_json_report(self, auth_client, january_payroll):
        response = auth_client.get('/api/employees/reports/salaries?month=1&year=2025')

        data = response.json()['data']
        assert data['monthName'] == 'January'
        assert len(data['salaries']) == 2

    def test_excel_export(self, auth_client, january_payroll):
        response = auth_client.get('/api/employees/reports/salaries?month=1&year=2025&format=xlsx')

        assert response.status_code == 200
        assert response['Content-Type'] == XLSX_CONTENT_TYPE
        assert 'Salary_Report_January_2025.xlsx' in response['Content-Disposition']

        ws = openpyxl.load_workbook(BytesIO(response.content)).active
        assert ws.cell(row=1, column=1).value == "Employee ID"
        assert ws.max_row == 4
        assert ws.cell(row=4, column=1).value == "Total"
        assert ws.cell(row=4, column=11).value == 40000

    def test_invalid_month(self, auth_client):
        response = auth_client.get('/api/employees/reports/salaries?month=13&year=2025')

        assert response.status_code == 400
