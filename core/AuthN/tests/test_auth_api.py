"""
JWT login / refresh / me tests, plus the admin bootstrap command.
"""
from io import StringIO

import pytest
from django.core.management import CommandError, call_command

from AuthN.models import BaseUserModel

LOGIN_URL = '/api/auth/login'
REFRESH_URL = '/api/auth/refresh'
ME_URL = '/api/auth/me'


def login(client, email="admin@example.com", password="pass-1234"):
    return client.post(LOGIN_URL, {'email': email, 'password': password}, format='json')


@pytest.mark.django_db
class TestLogin:

    def test_login_returns_token_pair(self, api_client, admin_user):
        response = login(api_client, email="ADMIN@example.com")

        assert response.status_code == 200
        data = response.json()['data']
        assert data['accessToken']
        assert data['refreshToken']
        assert data['user']['email'] == "admin@example.com"
        assert data['user']['role'] == BaseUserModel.ROLE_ADMIN

    def test_wrong_password(self, api_client, admin_user):
        response = login(api_client, password="wrong")

        assert response.status_code == 401
        assert response.json()['message'] == "Invalid credentials"

    def test_missing_fields(self, api_client):
        response = api_client.post(LOGIN_URL, {}, format='json')

        assert response.status_code == 400

    def test_inactive_user_cannot_login(self, api_client, create_user):
        create_user(email="gone@example.com", is_active=False)

        assert login(api_client, email="gone@example.com").status_code == 401


@pytest.mark.django_db
class TestTokens:

    def test_me_with_bearer_token(self, api_client, accountant_user):
        access = login(api_client, email="accountant@example.com").json()['data']['accessToken']
        api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {access}')

        response = api_client.get(ME_URL)

        assert response.status_code == 200
        assert response.json()['data']['role'] == BaseUserModel.ROLE_ACCOUNTANT

    def test_bearer_token_reaches_payroll_endpoints(self, api_client, admin_user):
        access = login(api_client).json()['data']['accessToken']
        api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {access}')

        assert api_client.get('/api/employees').status_code == 200

    def test_refresh_rotates_tokens(self, api_client, admin_user):
        tokens = login(api_client).json()['data']

        response = api_client.post(REFRESH_URL, {'refreshToken': tokens['refreshToken']}, format='json')

        assert response.status_code == 200
        data = response.json()['data']
        assert data['accessToken']
        assert data['refreshToken'] != tokens['refreshToken']

    def test_invalid_refresh_token(self, api_client):
        response = api_client.post(REFRESH_URL, {'refreshToken': 'not-a-token'}, format='json')

        assert response.status_code == 401

    def test_me_requires_token(self, api_client):
        response = api_client.get(ME_URL)

        assert response.status_code == 401
        assert response.json()['statusCode'] == 401


@pytest.mark.django_db
class TestCreateAdminUserCommand:

    def test_creates_admin(self):
        call_command('create_admin_user', '--email', 'Boss@Example.com', '--password', 'secret-123', stdout=StringIO())

        user = BaseUserModel.objects.get(email='boss@example.com')
        assert user.role == BaseUserModel.ROLE_ADMIN
        assert user.is_superuser
        assert user.check_password('secret-123')

    def test_creates_accountant(self):
        call_command(
            'create_admin_user', '--email', 'acc@example.com', '--password', 'secret-123',
            '--role', 'accountant', stdout=StringIO(),
        )

        assert BaseUserModel.objects.get(email='acc@example.com').is_payroll_staff

    def test_existing_user_requires_force(self, admin_user):
        with pytest.raises(CommandError):
            call_command('create_admin_user', '--email', 'admin@example.com', '--password', 'x', stdout=StringIO())

        call_command(
            'create_admin_user', '--email', 'admin@example.com', '--password', 'new-pass-1',
            '--force', stdout=StringIO(),
        )
        admin_user.refresh_from_db()
        assert admin_user.check_password('new-pass-1')
