"""
Pytest fixtures shared by the app test suites.

Provides:
- DRF API clients (anonymous and authenticated per role)
- Factories for users, employees, salaries and advances

The test database is SQLite, built from the models (--nomigrations).
"""
from datetime import date
from decimal import Decimal
from itertools import count

import pytest
from rest_framework.test import APIClient

from AuthN.models import BaseUserModel
from EmployeeManagement.models import Employee
from PayrollSystem import services

_sequence = count(1)


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def create_user(db):
    def _create_user(role=BaseUserModel.ROLE_ADMIN, email=None, password="pass-1234", **extra):
        email = email or f"user{next(_sequence)}@example.com"
        return BaseUserModel.objects.create_user(email, password, role=role, **extra)
    return _create_user


@pytest.fixture
def admin_user(create_user):
    return create_user(role=BaseUserModel.ROLE_ADMIN, email="admin@example.com", name="Admin")


@pytest.fixture
def accountant_user(create_user):
    return create_user(role=BaseUserModel.ROLE_ACCOUNTANT, email="accountant@example.com", name="Accountant")


@pytest.fixture
def plain_user(create_user):
    return create_user(role=BaseUserModel.ROLE_USER, email="staff@example.com", name="Staff")


@pytest.fixture
def auth_client(api_client, admin_user):
    """APIClient signed in as an admin"""
    api_client.force_authenticate(user=admin_user)
    return api_client


@pytest.fixture
def create_employee(db):
    """
    Employee factory. Defaults give a monthly gross of 20000:
    base 15000 + rent 3000 + health 1000 + travel 500 + mobile 500.
    """
    def _create_employee(**overrides):
        n = next(_sequence)
        fields = {
            'name': f"Employee {n}",
            'email': f"employee{n}@example.com",
            'designation': "Engineer",
            'join_date': date(2024, 1, 1),
            'base_salary': Decimal('15000.00'),
            'home_rent_allowance': Decimal('3000.00'),
            'health_allowance': Decimal('1000.00'),
            'travel_allowance': Decimal('500.00'),
            'mobile_allowance': Decimal('500.00'),
        }
        fields.update(overrides)
        return Employee.objects.create(**fields)
    return _create_employee


@pytest.fixture
def employee(create_employee):
    return create_employee(name="Rahim Uddin", email="rahim@example.com")


@pytest.fixture
def create_salary(db):
    def _create_salary(employee, month=1, year=2025, **kwargs):
        return services.create_salary(employee_id=employee.id, month=month, year=year, **kwargs)
    return _create_salary


@pytest.fixture
def give_advance(db):
    def _give_advance(employee, amount, **kwargs):
        result = services.give_advance(employee_id=employee.id, amount=Decimal(str(amount)), **kwargs)
        employee.refresh_from_db()
        return result
    return _give_advance
