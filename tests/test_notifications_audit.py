from __future__ import annotations


def _request(client, headers, resource_id, quantity=10):
    resp = client.post("/api/requests", json={"resourceId": resource_id, "quantity": quantity}, headers=headers)
    assert resp.status_code == 201
    return resp.json()


def test_notifications_are_scoped_to_owner(client, make_resource, user_headers, register, admin_headers):
    masks = make_resource()
    other_headers = register("paul@example.com")
    req = _request(client, user_headers, masks["id"])
    client.patch(f"/api/requests/{req['id']}", json={"status": "approved"}, headers=admin_headers)

    mine = client.get("/api/notifications", headers=user_headers).json()
    assert len(mine) == 1
    assert client.get("/api/notifications", headers=other_headers).json() == []

    stolen = client.patch(f"/api/notifications/{mine[0]['id']}", json={"read": True}, headers=other_headers)
    assert stolen.status_code == 404
    assert stolen.json()["message"] == "Notification not found"


def test_mark_read_and_unread_filter(client, make_resource, user_headers, admin_headers):
    masks = make_resource()
    first = _request(client, user_headers, masks["id"])
    second = _request(client, user_headers, masks["id"])
    client.patch(f"/api/requests/{first['id']}", json={"status": "approved"}, headers=admin_headers)
    client.patch(f"/api/requests/{second['id']}", json={"status": "rejected"}, headers=admin_headers)

    notes = client.get("/api/notifications", headers=user_headers).json()
    assert len(notes) == 2

    marked = client.patch(f"/api/notifications/{notes[0]['id']}", json={"read": True}, headers=user_headers)
    assert marked.json()["read"] is True

    unread = client.get("/api/notifications", params={"unread": "true"}, headers=user_headers).json()
    assert [n["id"] for n in unread] == [notes[1]["id"]]


def test_notifications_need_session(client):
    client.cookies.clear()
    assert client.get("/api/notifications").status_code == 401


def test_writes_leave_audit_trail(client, make_resource, put_stock, admin_headers, user_headers):
    masks = make_resource()
    put_stock(masks["id"], "Paris", 500)
    put_stock(masks["id"], "Paris", 420)

    stock_logs = client.get("/api/audit-logs", params={"entity": "stock"}, headers=admin_headers).json()
    assert [log["action"] for log in stock_logs] == ["update", "create"]
    assert stock_logs[0]["oldValue"]["quantity"] == 500
    assert stock_logs[0]["newValue"]["quantity"] == 420
    assert stock_logs[0]["userId"] is not None

    everything = client.get("/api/audit-logs", headers=admin_headers).json()
    entities = {log["entity"] for log in everything}
    assert {"resource", "stock", "user"} <= entities
    assert any(log["action"] == "login" for log in everything)


def test_audit_logs_are_admin_only(client, user_headers):
    resp = client.get("/api/audit-logs", headers=user_headers)
    assert resp.status_code == 403
    assert resp.json()["message"] == "Admin role required"


def test_audit_window_has_upper_bound(client, admin_headers):
    resp = client.get("/api/audit-logs", params={"days": 1_000_000}, headers=admin_headers)
    assert resp.status_code == 400
    assert resp.json()["field"] == "days"
