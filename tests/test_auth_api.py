"""HTTP tests for registration and login."""
from conftest import make_user

URL = "/api/v1/auth"


def test_register_login_and_me(client):
    r = client.post(f"{URL}/register", json={"name": "Ana", "email": "Ana@Example.com", "password": "secret123"})
    assert r.status_code == 201, r.text
    assert r.json()["role"] == "client"
    assert r.json()["email"] == "ana@example.com"

    r = client.post(f"{URL}/login", json={"email": "ana@example.com", "password": "secret123"})
    assert r.status_code == 200
    token = r.json()["access_token"]

    me = client.get(f"{URL}/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["name"] == "Ana"


def test_register_admin_and_form_token(client):
    client.post(f"{URL}/register", json={"name": "Luis", "email": "luis@example.com", "password": "secret123", "role": "admin"})

    r = client.post(f"{URL}/token", data={"username": "luis@example.com", "password": "secret123"})

    assert r.status_code == 200
    assert r.json()["token_type"] == "bearer"


def test_duplicate_email(client):
    body = {"name": "Ana", "email": "ana@example.com", "password": "secret123"}
    assert client.post(f"{URL}/register", json=body).status_code == 201
    assert client.post(f"{URL}/register", json=body).status_code == 400


def test_invalid_role(client):
    body = {"name": "Ana", "email": "ana@example.com", "password": "secret123", "role": "superadmin"}
    assert client.post(f"{URL}/register", json=body).status_code == 422


def test_wrong_password(client, seed):
    seed(make_user("client"))
    r = client.post(f"{URL}/login", json={"email": "client@example.com", "password": "nope"})
    assert r.status_code == 401


def test_inactive_user(client, seed):
    seed(make_user("client", is_active=False))
    r = client.post(f"{URL}/login", json={"email": "client@example.com", "password": "secret123"})
    assert r.status_code == 403


def test_invalid_token(client):
    r = client.get(f"{URL}/me", headers={"Authorization": "Bearer garbage"})
    assert r.status_code == 401
