"""
Employee CRUD endpoint tests.
"""
from uuid import uuid4

import pytest

from EmployeeManagement.models import Employee

EMPLOYEES_URL = '/api/employees'


def employee_payload(**overrides):
    payload = {
        'name': 'Rahim Uddin',
        'email': 'Rahim@Example.com',
        'designation': 'Accountant',
        'joinDate': '2024-03-01',
        'baseSalary': 25000,
        'homeRentAllowance': 5000,
    }
    payload.update(overrides)
    return payload


@pytest.mark.django_db
class TestEmployeeCreate:

    def test_create(self, auth_client):
        response = auth_client.post(EMPLOYEES_URL, employee_payload(advanceBalance=9999), format='json')

        assert response.status_code == 201
        data = response.json()['data']
        assert data['employeeId'] == 'EMP-00001'
        assert data['email'] == 'rahim@example.com'
        assert data['baseSalary'] == 25000
        assert data['advanceBalance'] == 0
        assert data['isActive'] is True
        assert data['joinDate'] == '2024-03-01'

    def test_codes_are_sequential(self, auth_client):
        auth_client.post(EMPLOYEES_URL, employee_payload(), format='json')
        response = auth_client.post(EMPLOYEES_URL, employee_payload(email='other@example.com'), format='json')

        assert response.json()['data']['employeeId'] == 'EMP-00002'

    def test_duplicate_email_rejected(self, auth_client, employee):
        response = auth_client.post(EMPLOYEES_URL, employee_payload(email='RAHIM@example.com'), format='json')

        assert response.status_code == 400
        assert 'email' in response.json()['data']

    def test_negative_salary_rejected(self, auth_client):
        response = auth_client.post(EMPLOYEES_URL, employee_payload(baseSalary=-1), format='json')

        assert response.status_code == 400
        assert 'baseSalary' in response.json()['data']


@pytest.mark.django_db
class TestEmployeeList:

    def test_search_and_active_filter(self, auth_client, create_employee):
        create_employee(name="Salma Akter", designation="Designer")
        create_employee(name="Jamal Hossain")
        create_employee(name="Salman Khan", is_active=False)

        search = auth_client.get(f'{EMPLOYEES_URL}?search=akter')
        active = auth_client.get(f'{EMPLOYEES_URL}?search=sal&isActive=true')

        assert [row['name'] for row in search.json()['data']] == ["Salma Akter"]
        assert [row['name'] for row in active.json()['data']] == ["Salma Akter"]


@pytest.mark.django_db
class TestEmployeeDetail:

    def test_retrieve_and_update(self, auth_client, employee):
        url = f'{EMPLOYEES_URL}/{employee.id}'

        response = auth_client.patch(url, {'baseSalary': 18000, 'designation': 'Lead'}, format='json')

        assert response.status_code == 200
        assert auth_client.get(url).json()['data']['designation'] == 'Lead'
        employee.refresh_from_db()
        assert employee.base_salary == 18000

    def test_not_found(self, auth_client):
        response = auth_client.get(f'{EMPLOYEES_URL}/{uuid4()}')

        assert response.status_code == 404
        assert response.json()['message'] == "Employee not found"

    def test_delete_without_history(self, auth_client, employee):
        response = auth_client.delete(f'{EMPLOYEES_URL}/{employee.id}')

        assert response.status_code == 200
        assert not Employee.objects.filter(id=employee.id).exists()

    def test_delete_with_history_deactivates(self, auth_client, employee, create_salary):
        create_salary(employee)

        response = auth_client.delete(f'{EMPLOYEES_URL}/{employee.id}')

        assert response.status_code == 200
        assert response.json()['data']['isActive'] is False
        employee.refresh_from_db()
        assert employee.is_active is False

    def test_user_role_forbidden(self, api_client, plain_user):
        api_client.force_authenticate(user=plain_user)

        assert api_client.get(EMPLOYEES_URL).status_code == 403
