"""
Salary sheet import tests.
"""
import pytest

from EmployeeManagement.models import Employee
from PayrollSystem.models import AdvanceRecord, Salary

BULK_URL = '/api/employees/salaries/bulk-upload'


def upload(client, entries, month=1, year=2025):
    return client.post(BULK_URL, {'month': month, 'year': year, 'entries': entries}, format='json')


@pytest.mark.django_db
class TestBulkSalaryUpload:

    def test_existing_employee_by_code(self, auth_client, employee):
        response = upload(auth_client, [{
            'employeeId': employee.employee_id,
            'employeeName': employee.name,
            'basic': 31000,
            'monthlySalary': 31000,
            'dailyPresent': 15,
            'medicalMobile': 1000,
            'bonusBoksis': 500,
            'totalPayable': 99999,
            'advance': 2000,
            'modeOfPayment': '1',
        }])

        assert response.status_code == 200
        data = response.json()['data']
        assert data['success'] is True
        assert data['monthName'] == 'January'
        assert data['processedRows'] == 1
        assert data['createdEmployees'] == []
        assert data['updatedAdvanceBalances'] == {str(employee.id): 2000}

        # 31000 / 31 days * 15 present, total payable recomputed server side
        salary = Salary.objects.get(employee=employee, month=1, year=2025)
        assert salary.base_salary == 15000
        assert salary.allowances == 1000
        assert salary.bonus == 500
        assert salary.gross_salary == 16500
        assert salary.status == Salary.STATUS_PENDING

        advance = AdvanceRecord.objects.get(employee=employee)
        assert advance.type == AdvanceRecord.TYPE_GIVEN
        assert advance.amount == 2000
        assert advance.payment_method == 'BANK_TRANSFER'

    def test_match_by_name_and_monthly_salary(self, auth_client, employee):
        response = upload(auth_client, [{
            'employeeName': employee.name.upper(),
            'basic': 20000,
            'monthlySalary': 18000,
            'medicalMobile': 500,
        }])

        assert response.json()['data']['processedRows'] == 1
        assert Salary.objects.get(employee=employee).gross_salary == 18500

    def test_unknown_name_creates_employee(self, auth_client):
        response = upload(auth_client, [{
            'employeeName': 'Karim Mia',
            'designation': 'Driver',
            'joiningDate': '2024-06-01',
            'basic': 20000,
            'monthlySalary': 20000,
        }])

        data = response.json()['data']
        created = Employee.objects.get(name='Karim Mia')
        assert data['createdEmployees'] == [str(created.id)]
        assert created.designation == 'Driver'
        assert created.email == f"karim-mia.{created.employee_id.lower()}@payroll.local"
        assert created.salaries.get(month=1, year=2025).gross_salary == 20000

    def test_bad_rows_do_not_abort_others(self, auth_client, employee):
        response = upload(auth_client, [
            {'employeeId': employee.employee_id, 'employeeName': employee.name, 'basic': 10000, 'monthlySalary': 10000},
            {'employeeName': '', 'basic': 100},
            {'employeeId': 'EMP-99999', 'employeeName': 'Ghost', 'monthlySalary': 100},
            {'employeeName': 'New Hire', 'monthlySalary': 12000, 'advance': -5},
        ])

        data = response.json()['data']
        assert data['success'] is False
        assert data['processedRows'] == 1
        assert [error['row'] for error in data['errors']] == [2, 3, 4]
        assert data['errors'][1] == {'row': 3, 'employeeName': 'Ghost', 'reason': 'Employee EMP-99999 not found'}
        assert data['summary'] == {
            'totalRows': 4,
            'processed': 1,
            'failed': 3,
            'salariesCreated': 1,
            'employeesCreated': 0,
        }
        assert not Employee.objects.filter(name='New Hire').exists()

    def test_existing_salary_is_a_row_error(self, auth_client, employee, create_salary):
        create_salary(employee)

        response = upload(auth_client, [
            {'employeeId': employee.employee_id, 'employeeName': employee.name, 'monthlySalary': 10000, 'advance': 700},
        ])

        data = response.json()['data']
        assert data['processedRows'] == 0
        assert "already exists" in data['errors'][0]['reason']
        employee.refresh_from_db()
        assert employee.advance_balance == 0

    def test_inactive_employee_is_a_row_error(self, auth_client, create_employee):
        employee = create_employee(is_active=False)

        response = upload(auth_client, [
            {'employeeId': employee.employee_id, 'employeeName': employee.name, 'monthlySalary': 10000, 'advance': 500},
        ])

        data = response.json()['data']
        assert data['success'] is False
        assert data['errors'] == [{
            'row': 1, 'employeeName': employee.name, 'reason': f"Employee {employee.employee_id} is inactive",
        }]
        employee.refresh_from_db()
        assert employee.advance_balance == 0
        assert not Salary.objects.filter(employee=employee).exists()
        assert not AdvanceRecord.objects.exists()

    def test_empty_entries_rejected(self, auth_client):
        response = upload(auth_client, [])

        assert response.status_code == 400
