"""End-to-end flows across both roles, each actor with its own cookie jar."""
import pytest

from conftest import API, create_assignment, register_admin, register_user


@pytest.fixture
def actors(new_client):
    admin = new_client()
    register_admin(admin, department="IT")
    assignment = create_assignment(admin, task="Math HW", due_date="2024-12-01")

    user = new_client()
    register_user(user)

    return {"admin": admin, "user": user, "assignment": assignment}


def _upload(user, assignment_id, text="done"):
    return user.post(f"{API}/user/upload", json={"assignmentId": assignment_id, "text": text})


def test_scenario_accept_with_feedback(actors):
    upload = _upload(actors["user"], actors["assignment"]["id"])
    assert upload.status_code == 201
    submission = upload.json()["data"]
    assert submission["status"] == "SUBMITTED"
    assert submission["submitText"] == "done"

    response = actors["admin"].post(
        f"{API}/admin/assignments/{actors['assignment']['id']}/accept",
        json={"userId": submission["userId"], "feedback": "Great!"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Assignment submission accepted successfully."
    assert body["data"]["status"] == "ACCEPTED"
    assert body["data"]["feedback"] == "Great!"
    assert body["data"]["id"] == submission["id"]


def test_scenario_reject_without_feedback(actors):
    submission = _upload(actors["user"], actors["assignment"]["id"]).json()["data"]

    response = actors["admin"].post(
        f"{API}/admin/assignments/{actors['assignment']['id']}/reject",
        json={"userId": submission["userId"]},
    )

    assert response.status_code == 200
    assert response.json()["data"]["status"] == "REJECTED"
    assert response.json()["data"]["feedback"] == "No feedback provided"

    view = actors["user"].get(f"{API}/user/assignment/{actors['assignment']['id']}").json()["data"]
    assert view["submission"]["status"] == "REJECTED"
    assert view["submission"]["feedback"] == "No feedback provided"


def test_scenario_duplicate_upload(actors):
    first = _upload(actors["user"], actors["assignment"]["id"], "done").json()["data"]

    second = _upload(actors["user"], actors["assignment"]["id"], "done again")

    assert second.status_code == 400
    assert second.json()["message"] == "Assignment already submitted"

    submissions = actors["admin"].get(f"{API}/admin/submissions").json()["data"]
    assert len(submissions) == 1
    assert submissions[0]["id"] == first["id"]
    assert submissions[0]["submitText"] == "done"
    assert submissions[0]["status"] == "SUBMITTED"


def test_scenario_non_owner_cannot_grade(actors, new_client):
    submission = _upload(actors["user"], actors["assignment"]["id"]).json()["data"]
    intruder = new_client()
    register_admin(intruder, email="intruder@example.com", department="HR")

    for action in ("accept", "reject"):
        existing = intruder.post(
            f"{API}/admin/assignments/{actors['assignment']['id']}/{action}",
            json={"userId": submission["userId"]},
        )
        missing = intruder.post(
            f"{API}/admin/assignments/9999/{action}",
            json={"userId": submission["userId"]},
        )
        assert existing.status_code == missing.status_code == 403
        assert existing.json()["message"] == missing.json()["message"]

    status = actors["admin"].get(f"{API}/admin/submissions/{submission['id']}").json()["data"]["status"]
    assert status == "SUBMITTED"
