from __future__ import annotations

from datetime import timedelta

import pytest

from medcoord.auth import DatabaseSessionStore, MemorySessionStore, hash_password, verify_password
from medcoord.repositories.users import create_user

ADMIN_EMAIL = "admin@medcoord.local"
ADMIN_PASSWORD = "admin123"


def test_register_returns_user_and_token(client):
    resp = client.post(
        "/api/auth/register",
        json={"email": "Marie@Example.com", "password": "secret123", "firstName": "Marie", "role": "professional"},
    )
    assert resp.status_code == 201
    body = resp.json()
    assert body["token"]
    assert body["user"]["email"] == "marie@example.com"
    assert body["user"]["role"] == "professional"
    assert body["user"]["isProfessional"] is True
    assert "passwordHash" not in body["user"]


def test_register_rejects_duplicates_and_admin_role(client, register):
    register("marie@example.com")
    dup = client.post("/api/auth/register", json={"email": "marie@example.com", "password": "secret123"})
    assert dup.status_code == 400
    assert dup.json()["message"] == "Email or username already exists"

    admin = client.post(
        "/api/auth/register", json={"email": "eve@example.com", "password": "secret123", "role": "admin"}
    )
    assert admin.status_code == 400
    assert admin.json()["field"] == "role"

    short = client.post("/api/auth/register", json={"email": "bob@example.com", "password": "123"})
    assert short.status_code == 400
    assert short.json()["field"] == "password"


def test_login_with_wrong_password(client):
    resp = client.post("/api/auth/login", json={"email": ADMIN_EMAIL, "password": "nope"})
    assert resp.status_code == 401
    assert resp.json()["message"] == "Invalid email or password"


def test_cookie_session_authenticates(client):
    resp = client.post("/api/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert resp.status_code == 200
    me = client.get("/api/auth/user")
    assert me.status_code == 200
    assert me.json()["role"] == "admin"
    assert me.json()["lastLoginAt"] is not None


def test_logout_invalidates_token(client, admin_headers):
    assert client.get("/api/auth/user", headers=admin_headers).status_code == 200

    out = client.post("/api/auth/logout", headers=admin_headers)
    assert out.status_code == 200
    assert out.json() == {"message": "Logout successful"}

    assert client.get("/api/auth/user", headers=admin_headers).status_code == 401


def test_garbage_token_is_unauthorized(client):
    resp = client.get("/api/auth/user", headers={"Authorization": "Bearer not-a-token"})
    assert resp.status_code == 401
    assert resp.json() == {"message": "Unauthorized"}


def test_update_profile(client, user_headers, register):
    resp = client.put(
        "/api/user",
        json={"department": "CHU Lyon Sud", "phone": "+33 4 78 00 00 00"},
        headers=user_headers,
    )
    assert resp.status_code == 200
    assert resp.json()["department"] == "CHU Lyon Sud"
    assert resp.json()["firstName"] == "Marie"

    register("paul@example.com")
    taken = client.put("/api/user", json={"email": "paul@example.com"}, headers=user_headers)
    assert taken.status_code == 400


def test_password_change_rehashes(client, user_headers, login):
    client.put("/api/user", json={"password": "nouveau-secret"}, headers=user_headers)
    fresh = client.post("/api/auth/login", json={"email": "marie@example.com", "password": "secret123"})
    assert fresh.status_code == 401
    assert login("marie@example.com", "nouveau-secret")


def test_users_list_is_admin_only(client, user_headers, admin_headers):
    assert client.get("/api/users", headers=user_headers).status_code == 403
    users = client.get("/api/users", headers=admin_headers).json()
    assert [u["email"] for u in users] == [ADMIN_EMAIL, "marie@example.com"]


def test_password_hashing():
    hashed = hash_password("secret123")
    assert hashed != "secret123"
    assert verify_password("secret123", hashed)
    assert not verify_password("wrong", hashed)
    assert not verify_password("secret123", "not-a-bcrypt-hash")


def test_memory_store_expiry():
    store = MemorySessionStore(ttl_seconds=60)
    token = store.create(7)
    assert store.resolve(token) == 7
    store.revoke(token)
    assert store.resolve(token) is None

    expired = MemorySessionStore(ttl_seconds=-1)
    assert expired.resolve(expired.create(7)) is None


@pytest.mark.parametrize("ttl,expected_alive", [(60, True), (-1, False)])
def test_database_store(db, ttl, expected_alive):
    user = create_user(db, email="store@example.com", password="secret123")
    store = DatabaseSessionStore(ttl_seconds=ttl)
    token = store.create(user.id)
    assert (store.resolve(token) == user.id) is expected_alive

    store.revoke(token)
    assert store.resolve(token) is None


def test_memory_store_drops_expired_tokens_on_create():
    store = MemorySessionStore(ttl_seconds=-1)
    store.create(1)
    store.create(2)
    store.ttl = timedelta(seconds=60)
    live = store.create(3)
    assert list(store._items) == [live]


def test_database_store_drops_expired_rows_on_create(db):
    from medcoord.models.users import AuthSession

    user = create_user(db, email="sweep@example.com", password="secret123")
    stale = DatabaseSessionStore(ttl_seconds=-1)
    stale.create(user.id)
    stale.create(user.id)

    live = DatabaseSessionStore(ttl_seconds=60).create(user.id)
    db.expire_all()
    assert [row.token for row in db.query(AuthSession).all()] == [live]


def test_password_whitespace_is_kept(client):
    resp = client.post("/api/auth/register", json={"email": "lea@example.com", "password": "  secret123 "})
    assert resp.status_code == 201
    client.cookies.clear()

    trimmed = client.post("/api/auth/login", json={"email": "lea@example.com", "password": "secret123"})
    assert trimmed.status_code == 401
    exact = client.post("/api/auth/login", json={"email": "lea@example.com", "password": "  secret123 "})
    assert exact.status_code == 200


def test_profile_fields_are_still_stripped(client, user_headers):
    resp = client.put("/api/user", json={"city": "  Lyon  "}, headers=user_headers)
    assert resp.json()["city"] == "Lyon"
