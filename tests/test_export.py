from __future__ import annotations

import csv
import io
from datetime import datetime

import pytest
from openpyxl import load_workbook

from medcoord.services.export_service import EXPORT_FORMATS


def test_stock_csv_export(client, make_resource, put_stock, admin_headers):
    masks = make_resource()
    put_stock(masks["id"], "Paris", 5000, postal_code="75001")

    resp = client.get("/api/export/stocks", headers=admin_headers)
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/csv")
    assert "attachment" in resp.headers["content-disposition"]

    rows = list(csv.reader(io.StringIO(resp.text)))
    assert rows[0] == ["ID", "Resource", "City", "Postal Code", "Quantity", "Updated At"]
    assert rows[1][1:5] == ["Masques FFP2", "Paris", "75001", "5000"]


def test_request_csv_export(client, make_resource, user_headers, admin_headers):
    masks = make_resource()
    client.post("/api/requests", json={"resourceId": masks["id"], "quantity": 12}, headers=user_headers)

    resp = client.get("/api/export/requests", params={"format": "csv"}, headers=admin_headers)
    rows = list(csv.reader(io.StringIO(resp.text)))
    assert rows[0] == ["ID", "User", "Resource", "Quantity", "Status", "Urgency", "Created At"]
    assert rows[1][1:6] == ["Marie Curie", "Masques FFP2", "12", "pending", "medium"]


def test_json_export(client, make_resource, put_stock, admin_headers):
    masks = make_resource()
    put_stock(masks["id"], "Lyon", 2000)
    data = client.get("/api/export/stocks", params={"format": "json"}, headers=admin_headers).json()
    assert data[0]["city"] == "Lyon"
    assert data[0]["resource"]["name"] == "Masques FFP2"


def test_xlsx_export(client, make_resource, put_stock, admin_headers):
    masks = make_resource()
    put_stock(masks["id"], "Lyon", 2000)
    resp = client.get("/api/export/stocks", params={"format": "xlsx"}, headers=admin_headers)
    assert resp.status_code == 200

    ws = load_workbook(io.BytesIO(resp.content)).active
    assert [c.value for c in ws[1]] == ["ID", "Resource", "City", "Postal Code", "Quantity", "Updated At"]
    assert ws.cell(row=2, column=3).value == "Lyon"


def test_unknown_format_and_auth(client, admin_headers):
    bad = client.get("/api/export/stocks", params={"format": "pdf"}, headers=admin_headers)
    assert bad.status_code == 400
    assert bad.json()["field"] == "format"

    client.cookies.clear()
    assert client.get("/api/export/stocks").status_code == 401


@pytest.mark.parametrize("fmt", EXPORT_FORMATS)
def test_every_export_format_is_served(client, make_resource, put_stock, admin_headers, fmt):
    masks = make_resource()
    put_stock(masks["id"], "Lyon", 2000)
    resp = client.get("/api/export/stocks", params={"format": fmt}, headers=admin_headers)
    assert resp.status_code == 200


def test_export_filename_uses_utc_stamp(client, admin_headers, monkeypatch):
    from medcoord.api import export

    monkeypatch.setattr(export, "utcnow", lambda: datetime(2026, 3, 1, 23, 45))
    resp = client.get("/api/export/requests", headers=admin_headers)
    assert 'filename="requests_20260301_2345.csv"' in resp.headers["content-disposition"]
