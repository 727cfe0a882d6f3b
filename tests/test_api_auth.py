"""
Authentication endpoints: login, single session, logout
"""
from tests.conftest import ADMIN_LOGIN, STAFF_LOGIN, login


def test_login_returns_token_and_user(client):
    response = client.post('/api/auth/login', json=ADMIN_LOGIN)

    assert response.status_code == 200
    data = response.json()
    assert data['token_type'] == 'bearer'
    assert data['access_token']
    assert data['user']['name'] == 'IQAC Admin'
    assert data['user']['role'] == 'qa-office'


def test_login_with_wrong_role_fails(client):
    response = client.post('/api/auth/login', json={**STAFF_LOGIN, 'role': 'qa-office', 'password': 'admin123'})

    assert response.status_code == 401
    assert response.json()['detail'] == 'Invalid credentials'


def test_login_with_wrong_password_fails(client):
    response = client.post('/api/auth/login', json={**ADMIN_LOGIN, 'password': 'nope'})

    assert response.status_code == 401


def test_login_with_unknown_email_fails(client):
    response = client.post('/api/auth/login', json={**ADMIN_LOGIN, 'email': 'ghost@university.edu'})

    assert response.status_code == 401


def test_login_with_unknown_role_is_rejected(client):
    response = client.post('/api/auth/login', json={**ADMIN_LOGIN, 'role': 'dean'})

    assert response.status_code == 422
    assert response.json()['error'] == 'Validation Error'


def test_me_returns_session_user(client, auth_headers):
    response = client.get('/api/auth/me', headers=auth_headers)

    assert response.status_code == 200
    assert response.json()['email'] == 'iqac@university.edu'


def test_missing_token_is_rejected(client):
    response = client.get('/api/auth/me')

    assert response.status_code in (401, 403)


def test_garbage_token_is_rejected(client):
    response = client.get('/api/auth/me', headers={'Authorization': 'Bearer not-a-jwt'})

    assert response.status_code == 401


def test_new_login_replaces_previous_session(client):
    admin_headers = login(client, ADMIN_LOGIN)
    staff_headers = login(client, STAFF_LOGIN)

    assert client.get('/api/auth/me', headers=admin_headers).status_code == 401
    me = client.get('/api/auth/me', headers=staff_headers)
    assert me.status_code == 200
    assert me.json()['name'] == 'Dr. Smith'


def test_logout_ends_session(client, auth_headers):
    response = client.post('/api/auth/logout', headers=auth_headers)

    assert response.status_code == 200
    assert client.get('/api/auth/me', headers=auth_headers).status_code == 401
    assert client.post('/api/auth/logout', headers=auth_headers).status_code == 401


def test_health(client):
    response = client.get('/health')

    assert response.status_code == 200
    data = response.json()
    assert data['status'] == 'healthy'
    assert data['store_backend'] == 'local'
    assert data['remote_configured'] is False
