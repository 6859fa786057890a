"""
Advance endpoint tests (give, adjust, history, overview).
"""
from uuid import uuid4

import pytest

from PayrollSystem.models import AdvanceRecord


def advance_url(employee):
    return f'/api/employees/{employee.id}/advance'


@pytest.mark.django_db
class TestGiveAdvanceAPI:

    def test_give_from_zero(self, auth_client, employee):
        response = auth_client.post(
            advance_url(employee),
            {'amount': 2000, 'description': 'Eid advance', 'paymentMethod': 'CASH'},
            format='json',
        )

        assert response.status_code == 201
        data = response.json()['data']
        assert data['success'] is True
        assert data['advance']['type'] == 'GIVEN'
        assert data['advance']['amount'] == 2000
        assert data['advance']['balanceAfter'] == 2000
        assert data['advance']['badge'] == 'red'
        assert data['advance']['salary'] is None
        assert data['employee'] == {
            'id': str(employee.id), 'name': employee.name, 'previousBalance': 0, 'newBalance': 2000,
        }

    @pytest.mark.parametrize("amount", [0, '', -50, 'abc'])
    def test_invalid_amount_rejected(self, auth_client, employee, amount):
        response = auth_client.post(advance_url(employee), {'amount': amount}, format='json')

        assert response.status_code == 400
        assert not AdvanceRecord.objects.exists()
        employee.refresh_from_db()
        assert employee.advance_balance == 0

    def test_amount_beyond_column_precision_rejected(self, auth_client, employee):
        response = auth_client.post(advance_url(employee), {'amount': '99999999999.00'}, format='json')

        assert response.status_code == 400
        assert 'amount' in response.json()['data']
        assert not AdvanceRecord.objects.exists()
        assert auth_client.get(f'/api/employees/{employee.id}').status_code == 200

    def test_missing_amount_rejected(self, auth_client, employee):
        response = auth_client.post(advance_url(employee), {}, format='json')

        assert response.status_code == 400
        assert 'amount' in response.json()['data']

    def test_unknown_employee(self, auth_client):
        response = auth_client.post(f'/api/employees/{uuid4()}/advance', {'amount': 100}, format='json')

        assert response.status_code == 404

    def test_replay_with_body_key(self, auth_client, employee):
        body = {'amount': 500, 'idempotencyKey': 'advance-42'}

        first = auth_client.post(advance_url(employee), body, format='json')
        second = auth_client.post(advance_url(employee), body, format='json')

        assert first.status_code == 201
        assert second.status_code == 200
        assert second.json()['data']['advance']['id'] == first.json()['data']['advance']['id']
        assert AdvanceRecord.objects.count() == 1


@pytest.mark.django_db
class TestAdjustAdvanceAPI:

    def test_negative_adjustment(self, auth_client, employee, give_advance):
        give_advance(employee, 2000)

        response = auth_client.post(
            f'{advance_url(employee)}/adjust',
            {'amount': -500, 'description': 'Partial write-off'},
            format='json',
        )

        assert response.status_code == 201
        data = response.json()['data']
        assert data['advance']['type'] == 'ADJUSTMENT'
        assert data['advance']['amount'] == -500
        assert data['advance']['badge'] == 'blue'
        assert data['employee']['newBalance'] == 1500

    def test_adjustment_below_zero_rejected(self, auth_client, employee, give_advance):
        give_advance(employee, 2000)

        response = auth_client.post(
            f'{advance_url(employee)}/adjust', {'amount': -5000, 'description': 'Too much'}, format='json'
        )

        assert response.status_code == 400
        assert "negative" in response.json()['message']
        employee.refresh_from_db()
        assert employee.advance_balance == 2000

    @pytest.mark.parametrize("body", [
        {'amount': 0, 'description': 'Zero'},
        {'amount': 100},
        {'amount': 100, 'description': '  '},
    ])
    def test_invalid_adjustment(self, auth_client, employee, body):
        response = auth_client.post(f'{advance_url(employee)}/adjust', body, format='json')

        assert response.status_code == 400


@pytest.mark.django_db
class TestAdvanceHistoryAPI:

    def test_paginated_newest_first(self, auth_client, employee, give_advance):
        for amount in range(1, 13):
            give_advance(employee, amount)

        response = auth_client.get(f'/api/employees/{employee.id}/advances?page=2&limit=5')

        assert response.status_code == 200
        data = response.json()['data']
        assert data['employee'] == {'id': str(employee.id), 'name': employee.name, 'advanceBalance': 78}
        assert data['pagination'] == {'page': 2, 'limit': 5, 'total': 12, 'pages': 3}
        assert [row['amount'] for row in data['advances']] == [7, 6, 5, 4, 3]

    def test_default_and_maximum_page_size(self, auth_client, employee, give_advance):
        give_advance(employee, 100)

        default = auth_client.get(f'/api/employees/{employee.id}/advances')
        capped = auth_client.get(f'/api/employees/{employee.id}/advances?limit=500')

        assert default.json()['data']['pagination']['limit'] == 10
        assert capped.json()['data']['pagination']['limit'] == 100

    def test_empty_ledger_and_page_past_the_end(self, auth_client, employee):
        empty = auth_client.get(f'/api/employees/{employee.id}/advances?limit=abc')
        past_end = auth_client.get(f'/api/employees/{employee.id}/advances?page=5')

        assert empty.status_code == 200
        assert empty.json()['data']['advances'] == []
        assert empty.json()['data']['pagination'] == {'page': 1, 'limit': 10, 'total': 0, 'pages': 0}
        assert past_end.status_code == 404
        assert past_end.json()['message'] == "Invalid page number: 5"

    def test_recovery_rows_carry_salary_period(self, auth_client, employee, create_salary, give_advance):
        give_advance(employee, 1000)
        create_salary(employee)
        auth_client.post(
            '/api/employees/salaries/pay',
            {'employeeId': str(employee.id), 'month': 1, 'year': 2025, 'paidDate': '2025-01-31',
             'advanceDeduction': 1000},
            format='json',
        )

        response = auth_client.get(f'/api/employees/{employee.id}/advances')

        latest = response.json()['data']['advances'][0]
        assert latest['type'] == 'RECOVERED'
        assert latest['badge'] == 'green'
        assert latest['salary'] == {'month': 1, 'year': 2025}
        assert latest['balanceAfter'] == 0


@pytest.mark.django_db
class TestAdvanceOverviewAPI:

    def test_overview(self, auth_client, create_employee, give_advance):
        first = create_employee()
        second = create_employee()
        give_advance(first, 1000)
        give_advance(second, 5000)

        response = auth_client.get('/api/employees/advances/overview')

        assert response.status_code == 200
        data = response.json()['data']
        assert data['summary'] == {
            'totalOutstandingAdvance': 6000,
            'employeesWithAdvance': 2,
            'totalActiveEmployees': 2,
            'averageAdvance': 3000,
        }
        assert data['employees'][0]['employeeId'] == second.employee_id
        assert data['employees'][0]['lastAdvanceTransaction']['type'] == 'GIVEN'
