from __future__ import annotations

import os

# окружение до импорта medcoord: settings читаются один раз при импорте
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SESSION_BACKEND"] = "memory"
os.environ["AUTO_CREATE_TABLES"] = "true"
os.environ["SEED_DEMO_DATA"] = "false"
os.environ["MASTER_ADMIN_EMAIL"] = "admin@medcoord.local"
os.environ["MASTER_ADMIN_USERNAME"] = "admin"
os.environ["MASTER_ADMIN_PASSWORD"] = "admin123"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
from fastapi.testclient import TestClient

import medcoord.models  # noqa: F401
from medcoord import auth
from medcoord.app import app
from medcoord.db import Base, SessionLocal, engine

ADMIN_EMAIL = "admin@medcoord.local"
ADMIN_PASSWORD = "admin123"


@pytest.fixture(autouse=True)
def _fresh_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    auth.session_store.clear()
    yield
    auth.session_store.clear()


@pytest.fixture()
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client():
    with TestClient(app) as c:
        yield c


def _bearer(client: TestClient, resp) -> dict[str, str]:
    assert resp.status_code in (200, 201), resp.text
    # дальше авторизуемся только заголовком, cookie не тащим между пользователями
    client.cookies.clear()
    return {"Authorization": f"Bearer {resp.json()['token']}"}


@pytest.fixture()
def login(client):
    def _login(email: str, password: str) -> dict[str, str]:
        resp = client.post("/api/auth/login", json={"email": email, "password": password})
        return _bearer(client, resp)

    return _login


@pytest.fixture()
def register(client):
    def _register(email: str, password: str = "secret123", **extra) -> dict[str, str]:
        resp = client.post(
            "/api/auth/register",
            json={"email": email, "password": password, **extra},
        )
        return _bearer(client, resp)

    return _register


@pytest.fixture()
def admin_headers(login):
    return login(ADMIN_EMAIL, ADMIN_PASSWORD)


@pytest.fixture()
def user_headers(register):
    return register("marie@example.com", firstName="Marie", lastName="Curie", city="Lyon")


@pytest.fixture()
def make_resource(client, admin_headers):
    def _make(name: str = "Masques FFP2", type: str = "equipment", **extra) -> dict:
        resp = client.post(
            "/api/resources",
            json={"name": name, "type": type, **extra},
            headers=admin_headers,
        )
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _make


@pytest.fixture()
def put_stock(client, admin_headers):
    def _put(resource_id: int, city: str, quantity: int, postal_code: str = "00000", **extra) -> dict:
        resp = client.post(
            "/api/stocks",
            json={
                "resourceId": resource_id,
                "city": city,
                "postalCode": postal_code,
                "quantity": quantity,
                **extra,
            },
            headers=admin_headers,
        )
        assert resp.status_code == 200, resp.text
        return resp.json()

    return _put
