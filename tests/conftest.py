"""
Pytest configuration and fixtures
"""
import pytest
from fastapi.testclient import TestClient

from portal.core.config.settings import Settings
from portal.db.session import Database
from portal.main import create_app
from portal.models.admin import Admin, Department
from portal.models.assignment import Assignment
from portal.models.user import User
from portal.utils.helpers import get_utc_now

API = "/api/v1"


@pytest.fixture
def settings(tmp_path):
    return Settings(
        DATABASE_URL="sqlite://",
        ADMIN_JWT_SECRET="test-admin-secret",
        USER_JWT_SECRET="test-user-secret",
        LOG_DIR=str(tmp_path / "logs"),
        REDIS_URL=None,
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    """Client that owns the app lifecycle (startup and shutdown events run)"""
    with TestClient(app) as client:
        yield client


@pytest.fixture
def new_client(app, client):
    """Factory for extra clients with their own cookie jar, sharing the app's store"""
    created = []

    def factory():
        extra = TestClient(app)
        created.append(extra)
        return extra

    yield factory
    for extra in created:
        extra.close()


def register_admin(client, email="admin@example.com", department="IT", password="secret123"):
    response = client.post(f"{API}/admin/register", json={
        "email": email,
        "password": password,
        "name": "Ada Admin",
        "department": department,
    })
    assert response.status_code == 201, response.text
    return response


def register_user(client, email="user@example.com", password="secret123"):
    response = client.post(f"{API}/user/register", json={
        "email": email,
        "password": password,
        "name": "Uma User",
    })
    assert response.status_code == 201, response.text
    return response


def create_assignment(client, task="Math HW", due_date="2024-12-01", description=None):
    body = {"task": task, "dueDate": due_date}
    if description is not None:
        body["description"] = description
    response = client.post(f"{API}/admin/assignment", json=body)
    assert response.status_code == 201, response.text
    return response.json()["data"]


@pytest.fixture
def db():
    database = Database("sqlite://")
    database.init()
    session = database.SessionLocal()
    try:
        yield session
    finally:
        session.close()
        database.dispose()


@pytest.fixture
def seeded(db):
    """Two admins, two users and one assignment owned by the first admin"""
    owner = Admin(name="Owner", email="owner@example.com", hashed_password="x", department=Department.IT)
    other = Admin(name="Other", email="other@example.com", hashed_password="x", department=Department.HR)
    alice = User(name="Alice", email="alice@example.com", hashed_password="x")
    bob = User(name="Bob", email="bob@example.com", hashed_password="x")
    db.add_all([owner, other, alice, bob])
    db.commit()

    assignment = Assignment(task="Math HW", description="Chapter 5", due_date=get_utc_now(), admin_id=owner.id)
    db.add(assignment)
    db.commit()

    return {
        "owner": owner,
        "other": other,
        "alice": alice,
        "bob": bob,
        "assignment": assignment,
    }
