from __future__ import annotations

import pytest

from medcoord.settings import settings


@pytest.fixture()
def masks(make_resource):
    return make_resource()


def _create(client, headers, resource_id, quantity=50, **extra):
    resp = client.post(
        "/api/requests",
        json={"resourceId": resource_id, "quantity": quantity, **extra},
        headers=headers,
    )
    assert resp.status_code == 201, resp.text
    return resp.json()


def test_create_request_defaults(client, masks, user_headers):
    req = _create(client, user_headers, masks["id"], quantity=20, city="Lyon")
    assert req["status"] == "pending"
    assert req["urgency"] == "medium"
    assert req["city"] == "Lyon"

    me = client.get("/api/user", headers=user_headers).json()
    assert req["userId"] == me["id"]


@pytest.mark.parametrize("quantity", [0, -5])
def test_non_positive_quantity_rejected(client, masks, user_headers, quantity):
    resp = client.post(
        "/api/requests",
        json={"resourceId": masks["id"], "quantity": quantity},
        headers=user_headers,
    )
    assert resp.status_code == 400
    assert resp.json()["field"] == "quantity"


def test_unknown_resource_returns_404(client, user_headers):
    resp = client.post("/api/requests", json={"resourceId": 77, "quantity": 3}, headers=user_headers)
    assert resp.status_code == 404


def test_admins_notified_about_new_request(client, masks, user_headers, admin_headers):
    req = _create(client, user_headers, masks["id"])
    notes = client.get("/api/notifications", headers=admin_headers).json()
    assert [n["type"] for n in notes] == ["approval_needed"]
    assert notes[0]["actionUrl"] == f"/requests/{req['id']}"


def test_approve_then_fulfill(client, masks, user_headers, admin_headers):
    req = _create(client, user_headers, masks["id"])
    admin = client.get("/api/auth/user", headers=admin_headers).json()

    approved = client.patch(
        f"/api/requests/{req['id']}",
        json={"status": "approved", "notes": "Livraison par la pharmacie centrale",
              "estimatedDeliveryDate": "2026-11-02T09:00:00Z"},
        headers=admin_headers,
    ).json()
    assert approved["status"] == "approved"
    assert approved["approvedBy"] == admin["id"]
    assert approved["notes"] == "Livraison par la pharmacie centrale"
    assert approved["estimatedDeliveryDate"].startswith("2026-11-02T09:00:00")

    fulfilled = client.patch(
        f"/api/requests/{req['id']}", json={"status": "fulfilled"}, headers=admin_headers
    )
    assert fulfilled.status_code == 200
    assert fulfilled.json()["status"] == "fulfilled"


def test_direct_fulfill_rejected_by_default(client, masks, user_headers, admin_headers):
    req = _create(client, user_headers, masks["id"])
    resp = client.patch(
        f"/api/requests/{req['id']}", json={"status": "fulfilled"}, headers=admin_headers
    )
    assert resp.status_code == 400
    assert resp.json() == {
        "message": "Cannot change request status from 'pending' to 'fulfilled'",
        "field": "status",
    }


def test_direct_fulfill_allowed_when_transitions_not_enforced(
    client, masks, user_headers, admin_headers, monkeypatch
):
    monkeypatch.setattr(settings, "ENFORCE_REQUEST_TRANSITIONS", False)
    req = _create(client, user_headers, masks["id"])
    resp = client.patch(
        f"/api/requests/{req['id']}", json={"status": "fulfilled"}, headers=admin_headers
    )
    assert resp.status_code == 200
    assert resp.json()["status"] == "fulfilled"


def test_same_status_updates_notes(client, masks, user_headers, admin_headers):
    req = _create(client, user_headers, masks["id"])
    resp = client.patch(
        f"/api/requests/{req['id']}",
        json={"status": "pending", "notes": "En attente du stock"},
        headers=admin_headers,
    )
    assert resp.status_code == 200
    assert resp.json()["notes"] == "En attente du stock"


def test_unknown_status_and_missing_request(client, masks, user_headers, admin_headers):
    req = _create(client, user_headers, masks["id"])
    bad = client.patch(f"/api/requests/{req['id']}", json={"status": "shipped"}, headers=admin_headers)
    assert bad.status_code == 400
    assert bad.json()["field"] == "status"

    missing = client.patch("/api/requests/999", json={"status": "approved"}, headers=admin_headers)
    assert missing.status_code == 404
    assert missing.json()["message"] == "Request not found"


def test_owner_notified_on_status_change(client, masks, user_headers, admin_headers):
    req = _create(client, user_headers, masks["id"])
    client.patch(f"/api/requests/{req['id']}", json={"status": "rejected"}, headers=admin_headers)

    notes = client.get("/api/notifications", headers=user_headers).json()
    assert len(notes) == 1
    assert notes[0]["type"] == "request_update"
    assert "Refusée" in notes[0]["title"]


def test_matches_return_stocks_covering_quantity(client, masks, put_stock, user_headers):
    put_stock(masks["id"], "Paris", 40)
    put_stock(masks["id"], "Lyon", 60)
    put_stock(masks["id"], "Marseille", 50)
    req = _create(client, user_headers, masks["id"], quantity=50, city="Lyon")

    matches = client.get(f"/api/requests/{req['id']}/matches").json()
    assert [(m["city"], m["quantity"]) for m in matches] == [("Lyon", 60), ("Marseille", 50)]
    assert matches[0]["resource"]["id"] == masks["id"]

    local = client.get(f"/api/requests/{req['id']}/matches", params={"sameCity": "true"}).json()
    assert [m["city"] for m in local] == ["Lyon"]

    assert client.get("/api/requests/999/matches").status_code == 404


def test_stats_are_zero_filled(client, masks, user_headers, admin_headers):
    assert client.get("/api/requests/stats").json() == {
        "pending": 0,
        "approved": 0,
        "rejected": 0,
        "fulfilled": 0,
        "cancelled": 0,
    }

    first = _create(client, user_headers, masks["id"])
    _create(client, user_headers, masks["id"])
    client.patch(f"/api/requests/{first['id']}", json={"status": "cancelled"}, headers=admin_headers)

    stats = client.get("/api/requests/stats").json()
    assert stats["pending"] == 1
    assert stats["cancelled"] == 1
    assert stats["approved"] == 0


def test_list_requests_filters(client, masks, user_headers, register, admin_headers):
    other_headers = register("paul@example.com", firstName="Paul")
    mine = _create(client, user_headers, masks["id"], quantity=5)
    _create(client, other_headers, masks["id"], quantity=7)
    client.patch(f"/api/requests/{mine['id']}", json={"status": "approved"}, headers=admin_headers)

    everything = client.get("/api/requests", headers=user_headers).json()
    assert [r["quantity"] for r in everything] == [7, 5]
    assert everything[0]["user"]["firstName"] == "Paul"
    assert everything[0]["resource"]["name"] == "Masques FFP2"

    approved = client.get("/api/requests", params={"status": "approved"}, headers=user_headers).json()
    assert [r["id"] for r in approved] == [mine["id"]]

    by_user = client.get(
        "/api/requests", params={"userId": mine["userId"]}, headers=user_headers
    ).json()
    assert [r["id"] for r in by_user] == [mine["id"]]

    bad = client.get("/api/requests", params={"status": "shipped"}, headers=user_headers)
    assert bad.status_code == 400


def test_requests_need_session(client, masks):
    client.cookies.clear()
    assert client.get("/api/requests").status_code == 401
    assert client.post("/api/requests", json={"resourceId": masks["id"], "quantity": 1}).status_code == 401


def test_oversized_quantity_rejected(client, masks, user_headers):
    resp = client.post(
        "/api/requests",
        json={"resourceId": masks["id"], "quantity": 10**12},
        headers=user_headers,
    )
    assert resp.status_code == 400
    assert resp.json()["field"] == "quantity"

    missing = client.patch(f"/api/requests/{10**20}", json={"status": "approved"}, headers=user_headers)
    assert missing.status_code == 400
