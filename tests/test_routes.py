from __future__ import annotations

import pytest

from src.user_portal.user_portal.container import build_services
from src.user_portal.user_portal.core.enums import Role
from src.user_portal.user_portal.main import create_app
from src.user_portal.user_portal.users.passwords import PasswordHasher

from tests.fakes import FAST_HASH, FailingDestroySessionStore, InMemoryUsers, make_user


def _session_user(client):
    with client.session_transaction() as sess:
        return sess.get("user")


def _login(client, email, password):
    return client.post("/login", json={"email": email, "password": password})


@pytest.fixture()
def admin(users_repo):
    return make_user(users_repo, PasswordHasher(FAST_HASH), email="admin@example.com", password="secret")


def test_home_reports_login_state(client, registration):
    assert b"create an account" in client.get("/").data
    client.post("/register", json=registration)
    assert b"You are logged in" in client.get("/").data


def test_register_then_admin_listing_forbidden_for_non_admin(client, registration):
    resp = client.post("/register", json=registration)
    assert resp.status_code == 201
    assert resp.get_json() == {"message": "Registration successful!"}

    resp = client.get("/admin/users")
    assert resp.status_code == 403
    assert resp.get_json() == {"message": "Access denied! Admins only."}


def test_register_uppercase_admin_role_is_not_admin(client, users_repo, registration):
    resp = client.post("/register", json={**registration, "role": "ADMIN"})
    assert resp.status_code == 201
    assert users_repo.get_by_email("a@b.com").role == "ADMIN"

    assert client.get("/admin/users").status_code == 403
    assert b"Manage users" not in client.get("/dashboard").data


def test_register_accepts_other_role_names(client, users_repo, registration):
    resp = client.post("/register", json={**registration, "role": "manager"})

    assert resp.status_code == 201
    assert _session_user(client)["role"] == "manager"
    assert client.get("/admin/users").status_code == 403


def test_register_accepts_form_posts(client, users_repo, registration):
    resp = client.post("/register", data=registration)
    assert resp.status_code == 201
    assert users_repo.get_by_email("a@b.com") is not None


def test_register_missing_field(client, users_repo, registration):
    del registration["phoneNumber"]
    resp = client.post("/register", json=registration)

    assert resp.status_code == 400
    assert resp.get_json() == {"message": "All fields are required!"}
    assert users_repo.list_all() == []
    assert _session_user(client) is None


def test_register_duplicate_email(client, users_repo, registration):
    client.post("/register", json=registration)
    resp = client.post("/register", json={**registration, "firstName": "Z"})

    assert resp.status_code == 400
    assert resp.get_json() == {"message": "Email already registered!"}
    assert len(users_repo.list_all()) == 1


def test_register_store_failure_is_generic_500(client, users_repo, registration, monkeypatch):
    def boom(**kwargs):
        raise RuntimeError("db down: secret detail")

    monkeypatch.setattr(users_repo, "create_user", boom)
    resp = client.post("/register", json=registration)

    assert resp.status_code == 500
    assert resp.get_json() == {"message": "Server error during registration."}


def test_register_session_role_matches_stored_role(client, users_repo, registration):
    client.post("/register", json={**registration, "role": "admin"})

    stored = users_repo.get_by_email("a@b.com")
    s_user = _session_user(client)
    assert s_user["role"] == stored.role == "admin"
    assert s_user["id"] == stored.user_id


def test_login_success(client, admin):
    resp = _login(client, "admin@example.com", "secret")

    assert resp.status_code == 200
    assert resp.get_json() == {"message": "Login successful!"}
    assert _session_user(client) == {
        "id": admin.user_id,
        "email": "admin@example.com",
        "firstName": "Ada",
        "lastName": "Admin",
        "role": "admin",
    }


def test_login_unknown_email(client):
    resp = _login(client, "ghost@example.com", "secret")
    assert resp.status_code == 404
    assert resp.get_json() == {"message": "User not found!"}


def test_login_wrong_password_never_touches_session(client, session_store, admin, registration):
    client.post("/register", json=registration)
    before = _session_user(client)
    records_before = dict(session_store.records)

    resp = _login(client, "admin@example.com", "wrong")

    assert resp.status_code == 401
    assert resp.get_json() == {"message": "Incorrect password!"}
    assert _session_user(client) == before
    assert session_store.records == records_before


def test_dashboard_requires_login(client):
    resp = client.get("/dashboard")
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/login")


def test_dashboard_renders_session_fields(client, admin):
    _login(client, "admin@example.com", "secret")
    resp = client.get("/dashboard")

    assert resp.status_code == 200
    assert b"Ada Admin" in resp.data
    assert admin.user_id.encode() in resp.data
    assert b"Manage users" in resp.data


def test_admin_users_requires_login_first(client):
    resp = client.get("/admin/users")
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/login")


@pytest.mark.parametrize("extra", [0, 1, 4])
def test_admin_users_lists_without_passwords(client, users_repo, admin, extra):
    hasher = PasswordHasher(FAST_HASH)
    for i in range(extra):
        make_user(users_repo, hasher, email=f"user{i}@example.com", password="hunter2", role=Role.USER.value)
    _login(client, "admin@example.com", "secret")

    resp = client.get("/admin/users")

    assert resp.status_code == 200
    body = resp.get_data(as_text=True)
    for user in users_repo.list_all():
        assert user.email in body
        assert user.password_hash not in body
    assert "pbkdf2" not in body


def test_update_partial_and_response_excludes_password(client, users_repo, admin):
    resp = client.post("/update", json={"id": admin.user_id, "address": "9 New Rd", "password": "changed"})

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["message"] == "User updated successfully!"
    assert body["user"]["address"] == "9 New Rd"
    assert body["user"]["firstName"] == "Ada"
    assert "password" not in body["user"]
    assert "password_hash" not in body["user"]

    assert _login(client, "admin@example.com", "changed").status_code == 200


def test_update_blank_email_is_ignored(client, users_repo, admin):
    resp = client.post("/update", json={"id": admin.user_id, "email": "", "firstName": ""})

    assert resp.status_code == 200
    assert resp.get_json()["user"]["email"] == "admin@example.com"
    assert resp.get_json()["user"]["firstName"] == "Ada"
    assert users_repo.get_by_id(admin.user_id).email == "admin@example.com"


def test_update_unknown_user(client):
    resp = client.post("/update", json={"id": "nope", "firstName": "X"})
    assert resp.status_code == 404
    assert resp.get_json() == {"message": "User not found."}


def test_update_refreshes_only_session_role_for_own_user(client, users_repo, registration):
    client.post("/register", json=registration)
    s_user = _session_user(client)

    resp = client.post(
        "/update",
        json={"id": s_user["id"], "role": "admin", "firstName": "Renamed", "email": "new@b.com"},
    )
    assert resp.status_code == 200

    refreshed = _session_user(client)
    assert refreshed["role"] == "admin"
    # other snapshot fields keep their login-time values
    assert refreshed["firstName"] == "A"
    assert refreshed["email"] == "a@b.com"
    assert users_repo.get_by_id(s_user["id"]).first_name == "Renamed"

    assert client.get("/admin/users").status_code == 200


def test_update_of_other_user_leaves_session_alone(client, users_repo, admin, registration):
    client.post("/register", json=registration)
    before = _session_user(client)

    resp = client.post("/update", json={"id": admin.user_id, "role": "user"})

    assert resp.status_code == 200
    assert _session_user(client) == before


def test_update_without_session(client, admin):
    resp = client.post("/update", json={"id": admin.user_id, "lastName": "Lovelace"})
    assert resp.status_code == 200
    assert resp.get_json()["user"]["lastName"] == "Lovelace"


def test_update_can_be_gated(monkeypatch, container, admin, registration):
    import config.testing

    monkeypatch.setenv("APP_ENV", "testing")
    monkeypatch.setattr(config.testing, "PROTECT_UPDATE_ENDPOINT", True)
    client = create_app(container).test_client()

    assert client.post("/update", json={"id": admin.user_id, "lastName": "X"}).status_code == 302

    client.post("/register", json=registration)
    assert client.post("/update", json={"id": admin.user_id, "lastName": "X"}).status_code == 403

    _login(client, "admin@example.com", "secret")
    assert client.post("/update", json={"id": admin.user_id, "lastName": "X"}).status_code == 200


def test_logout_clears_cookie_and_session(client, session_store, registration):
    client.post("/register", json=registration)
    assert len(session_store.records) == 1

    resp = client.get("/logout")

    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/login")
    assert client.get_cookie("session") is None
    assert session_store.records == {}
    assert client.get("/dashboard").headers["Location"].endswith("/login")


def test_logout_failure_still_clears_cookie(monkeypatch, registration):
    monkeypatch.setenv("APP_ENV", "testing")
    container = build_services(
        users_repo=InMemoryUsers(),
        session_store=FailingDestroySessionStore(),
        password_hash_method=FAST_HASH,
    )
    client = create_app(container).test_client()
    client.post("/register", json=registration)

    resp = client.get("/logout")

    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/dashboard")
    assert client.get_cookie("session") is None
    follow = client.get("/dashboard")
    assert follow.status_code == 302
    assert follow.headers["Location"].endswith("/login")
