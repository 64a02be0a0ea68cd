import pytest

from conftest import API, register_admin, register_user


@pytest.mark.parametrize("role, register", [("admin", register_admin), ("user", register_user)])
def test_register_sets_http_only_cookie(client, role, register):
    response = register(client)

    body = response.json()
    assert body["statusCode"] == 201
    assert body["success"] is True
    assert body["data"]["email"].endswith("@example.com")
    assert "password" not in body["data"]
    assert "hashedPassword" not in body["data"]

    set_cookie = response.headers["set-cookie"]
    assert set_cookie.startswith(f"{role}-token=")
    assert "httponly" in set_cookie.lower()


def test_admin_register_returns_department(client):
    body = register_admin(client, department="FINANCE").json()

    assert body["data"] == {"name": "Ada Admin", "email": "admin@example.com", "department": "FINANCE"}
    assert body["message"] == "Admin registered successfully"


@pytest.mark.parametrize("role, register", [("admin", register_admin), ("user", register_user)])
def test_duplicate_registration_fails(new_client, role, register):
    register(new_client())

    response = new_client().post(f"{API}/{role}/register", json={
        "email": "admin@example.com" if role == "admin" else "user@example.com",
        "password": "another-pass",
        "name": "Someone Else",
        "department": "HR",
    })

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["data"] is None
    assert body["message"] == ("Admin already exists" if role == "admin" else "User already exists")


@pytest.mark.parametrize("role, register", [("admin", register_admin), ("user", register_user)])
def test_register_is_refused_while_authenticated(client, role, register):
    register(client)

    response = client.post(f"{API}/{role}/register", json={
        "email": "second@example.com",
        "password": "secret123",
        "name": "Second",
        "department": "IT",
    })

    assert response.status_code == 401
    assert response.json()["message"] == "Already authenticated, token present"


@pytest.mark.parametrize("body", [
    {"email": "not-an-email", "password": "secret123", "name": "A", "department": "IT"},
    {"email": "a@example.com", "password": "short", "name": "A", "department": "IT"},
    {"email": "a@example.com", "password": "secret123", "name": "A", "department": "SALES"},
    {"email": "a@example.com", "password": "secret123", "department": "IT"},
])
def test_admin_register_validation(client, body):
    response = client.post(f"{API}/admin/register", json=body)

    assert response.status_code == 400
    assert response.json()["success"] is False


def test_admin_login_and_logout(new_client):
    register_admin(new_client())
    client = new_client()

    response = client.post(f"{API}/admin/login", json={"email": "admin@example.com", "password": "secret123"})
    assert response.status_code == 200
    assert response.json()["message"] == "Admin logged in successfully"
    assert client.get(f"{API}/admin/assignments").status_code == 200

    response = client.post(f"{API}/admin/logout")
    assert response.status_code == 200
    assert response.json()["data"] == {}

    response = client.get(f"{API}/admin/assignments")
    assert response.status_code == 401
    assert response.json()["message"] == "Not authenticated, token missing"


def test_admin_login_wrong_password(new_client):
    register_admin(new_client())

    response = new_client().post(f"{API}/admin/login", json={"email": "admin@example.com", "password": "wrong-pass"})

    assert response.status_code == 401
    assert response.json()["message"] == "Invalid password"
    assert "set-cookie" not in response.headers


def test_admin_login_unknown_email(client):
    response = client.post(f"{API}/admin/login", json={"email": "ghost@example.com", "password": "secret123"})

    assert response.status_code == 404
    assert response.json()["message"] == "Admin not found"


def test_user_login_wrong_password(new_client):
    register_user(new_client())

    response = new_client().post(f"{API}/user/login", json={"email": "user@example.com", "password": "wrong-pass"})

    assert response.status_code == 401
    assert response.json()["message"] == "Invalid Credentials"


def test_user_login_unknown_email_is_indistinguishable(client):
    response = client.post(f"{API}/user/login", json={"email": "ghost@example.com", "password": "secret123"})

    assert response.status_code == 401
    assert response.json()["message"] == "Invalid Credentials"


def test_user_login_and_logout(new_client):
    register_user(new_client())
    client = new_client()

    response = client.post(f"{API}/user/login", json={"email": "user@example.com", "password": "secret123"})
    assert response.status_code == 200
    assert response.json()["data"] == {"name": "Uma User", "email": "user@example.com"}

    assert client.post(f"{API}/user/logout").status_code == 200
    assert client.get(f"{API}/user/assignment").status_code == 401


def test_tampered_token_is_rejected(client):
    client.cookies.set("user-token", "not-a-jwt")

    response = client.get(f"{API}/user/assignment")

    assert response.status_code == 401
    assert response.json()["message"] == "Invalid token"


def test_user_token_does_not_open_admin_routes(new_client):
    client = new_client()
    token = register_user(client).cookies["user-token"]

    other = new_client()
    other.cookies.set("admin-token", token)
    response = other.get(f"{API}/admin/assignments")

    assert response.status_code == 401
