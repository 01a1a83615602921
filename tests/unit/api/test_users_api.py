"""
Name: User Accounts HTTP API Tests

Responsibilities:
  - Walk the end-to-end account scenarios (register, conflict, checks,
    admin listing, update, toggle, delete)
  - Verify the ADMIN gate (401/403) never mutates state
  - Verify 400 on validation errors and unknown roles
  - Ensure password material never appears in responses
"""

from datetime import datetime

import pytest

from user_accounts.domain.entities import User, UserRole

pytestmark = pytest.mark.unit

ALICE = {"username": "alice", "email": "a@x.io", "password": "pw12345"}


def _register(client, payload=None):
    return client.post("/api/users/register", json=payload or ALICE)


def _ts(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


# ============================================================================
# Scenarios
# ============================================================================


def test_register_returns_created_view(client):
    response = _register(client)

    assert response.status_code == 201
    body = response.json()
    assert body["id"] is not None
    assert body["username"] == "alice"
    assert body["role"] == "USER"
    assert body["isEnabled"] is True
    assert "password" not in body
    assert "passwordHash" not in body
    assert body["createdAt"] == body["updatedAt"]


def test_register_twice_is_conflict_reported_as_400(client):
    assert _register(client).status_code == 201

    response = _register(client)

    assert response.status_code == 400
    body = response.json()
    assert body["code"] == "CONFLICT"
    assert "Username already exists" in body["detail"]


def test_register_with_taken_email_is_conflict(client):
    _register(client)

    response = _register(
        client, {"username": "alice2", "email": "a@x.io", "password": "pw12345"}
    )

    assert response.status_code == 400
    assert response.json()["code"] == "CONFLICT"


def test_check_email_reports_existence(client):
    _register(client)

    taken = client.get("/api/users/check-email/a@x.io")
    free = client.get("/api/users/check-email/none@x.io")

    assert taken.status_code == 200
    assert taken.json() is True
    assert free.status_code == 200
    assert free.json() is False


def test_check_username_reports_existence(client):
    _register(client)

    assert client.get("/api/users/check-username/alice").json() is True
    assert client.get("/api/users/check-username/nobody").json() is False


def test_list_users_requires_admin(client, user_headers, admin_headers):
    _register(client)

    assert client.get("/api/users").status_code == 401
    assert client.get("/api/users", headers=user_headers).status_code == 403

    response = client.get("/api/users", headers=admin_headers)
    assert response.status_code == 200
    usernames = [u["username"] for u in response.json()]
    assert "alice" in usernames


def test_update_sets_fields_and_advances_updated_at(client):
    created = _register(client).json()

    response = client.put(
        f"/api/users/{created['id']}",
        json={"firstName": "Alice", "isEnabled": True},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["firstName"] == "Alice"
    assert _ts(body["updatedAt"]) > _ts(body["createdAt"])
    assert body["createdAt"] == created["createdAt"]
    assert body["role"] == "USER"


def test_toggle_status_flips_and_restores(client, admin_headers):
    created = _register(client).json()
    url = f"/api/users/{created['id']}/toggle-status"

    first = client.patch(url, headers=admin_headers)
    second = client.patch(url, headers=admin_headers)

    assert first.status_code == 200
    assert first.json()["isEnabled"] is False
    assert second.status_code == 200
    assert second.json()["isEnabled"] is True


def test_delete_then_get_is_not_found(client, admin_headers):
    created = _register(client).json()

    response = client.delete(f"/api/users/{created['id']}", headers=admin_headers)

    assert response.status_code == 204
    assert response.content == b""
    assert client.get(f"/api/users/{created['id']}").status_code == 404


# ============================================================================
# Lookups
# ============================================================================


def test_get_by_id_and_username(client):
    created = _register(client).json()

    by_id = client.get(f"/api/users/{created['id']}")
    by_name = client.get("/api/users/username/alice")

    assert by_id.status_code == 200
    assert by_id.json() == created
    assert by_name.status_code == 200
    assert by_name.json()["id"] == created["id"]


def test_get_missing_user_is_404_problem_json(client):
    response = client.get("/api/users/999")

    assert response.status_code == 404
    assert response.headers["content-type"].startswith("application/problem+json")
    assert response.json()["code"] == "NOT_FOUND"


def test_get_missing_username_is_404(client):
    assert client.get("/api/users/username/ghost").status_code == 404


def test_list_by_role_and_count_enabled(client, admin_headers, admin_user):
    _register(client)

    users = client.get("/api/users/role/USER", headers=admin_headers)
    admins = client.get("/api/users/role/ADMIN", headers=admin_headers)
    moderators = client.get("/api/users/role/MODERATOR", headers=admin_headers)
    count = client.get("/api/users/count/enabled", headers=admin_headers)

    assert [u["username"] for u in users.json()] == ["alice"]
    assert [u["username"] for u in admins.json()] == [admin_user.username]
    assert moderators.json() == []
    assert count.status_code == 200
    assert count.json() == 2


def test_unknown_role_is_400(client, admin_headers):
    response = client.get("/api/users/role/SUPERUSER", headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"


# ============================================================================
# Validation
# ============================================================================


@pytest.mark.parametrize(
    "payload",
    [
        {"username": "al", "email": "a@x.io", "password": "pw12345"},
        {"username": "a" * 51, "email": "a@x.io", "password": "pw12345"},
        {"username": "alice", "email": "not-an-email", "password": "pw12345"},
        {"username": "alice", "email": "a" * 300 + "@x.io", "password": "pw12345"},
        {"username": "alice", "email": "a@x.io", "password": "short"},
        {"username": "alice", "email": "a@x.io", "password": "p" * 101},
        {"username": "alice", "email": "a@x.io", "password": "pw12345",
         "firstName": "x" * 51},
        {"email": "a@x.io", "password": "pw12345"},
        {"username": "alice", "password": "pw12345"},
    ],
)
def test_register_rejects_invalid_payload(client, payload, user_repo):
    response = _register(client, payload)

    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"
    assert user_repo.find_all() == []


def test_update_conflict_on_taken_username(client):
    _register(client)
    other = _register(
        client, {"username": "carol", "email": "c@x.io", "password": "pw12345"}
    ).json()

    response = client.put(f"/api/users/{other['id']}", json={"username": "alice"})

    assert response.status_code == 400
    assert response.json()["code"] == "CONFLICT"


def test_update_with_own_username_and_empty_email_is_ok(client):
    created = _register(client).json()

    response = client.put(
        f"/api/users/{created['id']}", json={"username": "alice", "email": ""}
    )

    assert response.status_code == 200
    assert response.json()["email"] == "a@x.io"


def test_update_rejects_invalid_email(client):
    created = _register(client).json()

    response = client.put(f"/api/users/{created['id']}", json={"email": "nope"})

    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"


def test_update_rejects_email_longer_than_column(client):
    created = _register(client).json()

    response = client.put(
        f"/api/users/{created['id']}", json={"email": "b" * 250 + "@x.io"}
    )

    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"
    assert client.get(f"/api/users/{created['id']}").json()["email"] == "a@x.io"


def test_update_missing_user_is_404(client):
    assert client.put("/api/users/404", json={"firstName": "X"}).status_code == 404


def test_non_numeric_id_is_400(client):
    assert client.get("/api/users/abc").status_code == 400


# ============================================================================
# Authorization gate
# ============================================================================


@pytest.mark.parametrize(
    "method, path",
    [
        ("get", "/api/users"),
        ("get", "/api/users/role/USER"),
        ("get", "/api/users/count/enabled"),
        ("patch", "/api/users/{id}/toggle-status"),
        ("delete", "/api/users/{id}"),
    ],
)
def test_restricted_routes_reject_non_admin_without_mutation(
    client, user_headers, plain_user, user_repo, method, path
):
    url = path.format(id=plain_user.id)
    before = user_repo.find_by_id(plain_user.id)

    anonymous = getattr(client, method)(url)
    non_admin = getattr(client, method)(url, headers=user_headers)

    assert anonymous.status_code == 401
    assert anonymous.headers.get("www-authenticate") == "Bearer"
    assert non_admin.status_code == 403
    assert user_repo.find_by_id(plain_user.id) == before


def test_invalid_token_is_401(client):
    response = client.get(
        "/api/users", headers={"Authorization": "Bearer not-a-jwt"}
    )

    assert response.status_code == 401
    assert response.json()["code"] == "UNAUTHORIZED"


def test_token_of_deleted_admin_is_401(client, admin_headers, admin_user, user_repo):
    user_repo.delete_by_id(admin_user.id)

    assert client.get("/api/users", headers=admin_headers).status_code == 401


def test_disabled_admin_is_401(client, user_repo, password_hasher, bearer_for):
    admin = user_repo.insert(
        User(
            username="sleepy",
            email="sleepy@example.com",
            password_hash=password_hasher.hash("sleepy123"),
            role=UserRole.ADMIN,
            is_enabled=False,
        )
    )

    response = client.get("/api/users", headers=bearer_for(admin))

    assert response.status_code == 401


def test_username_equal_to_admin_email_gets_no_admin_access(
    client, admin_user, user_repo, bearer_for
):
    created = _register(
        client,
        {"username": admin_user.email, "email": "imp@x.io", "password": "pw12345"},
    )
    assert created.status_code == 201
    lookalike = user_repo.find_by_id(created.json()["id"])

    response = client.get("/api/users", headers=bearer_for(lookalike))

    assert response.status_code == 403
    assert response.json()["code"] == "FORBIDDEN"


def test_delete_missing_user_is_404(client, admin_headers):
    assert client.delete("/api/users/12345", headers=admin_headers).status_code == 404


# ============================================================================
# Output hygiene
# ============================================================================


def test_listings_never_expose_password_fields(client, admin_headers):
    _register(client)

    for path in ("/api/users", "/api/users/role/USER"):
        for item in client.get(path, headers=admin_headers).json():
            assert set(item) == {
                "id",
                "username",
                "email",
                "firstName",
                "lastName",
                "role",
                "isEnabled",
                "createdAt",
                "updatedAt",
                "lastLogin",
            }


def test_response_carries_request_id(client):
    response = client.get("/api/users/check-username/x", headers={"X-Request-Id": "abc"})

    assert response.headers["X-Request-Id"] == "abc"


def test_healthz_reports_store(client):
    response = client.get("/healthz")

    assert response.status_code == 200
    assert response.json()["ok"] is True
    assert response.json()["db"] == "connected"
