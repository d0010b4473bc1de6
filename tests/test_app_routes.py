from __future__ import annotations

import importlib
from datetime import datetime, timezone

import pytest

from src.asistup.asistup.core.constants import COLLECTION_CONFIG, GLOBAL_SETTINGS_DOC_ID
from src.asistup.asistup.core.enums import AttendanceStatus, Role
from src.asistup.asistup.main import create_app


@pytest.fixture
def app(container):
    settings = importlib.import_module("config.testing")
    return create_app(settings, container=container)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_headers(master_password):
    return {"X-Admin-Secret": master_password}


def _type_pin(client, session_id, pin):
    resp = None
    for digit in pin:
        resp = client.post(f"/api/kiosk/sessions/{session_id}/keys", json={"key": digit})
    return resp


def test_app_seeds_default_settings(app, store):
    assert store.get(COLLECTION_CONFIG, GLOBAL_SETTINGS_DOC_ID)["sbu"] == "482.00"


def test_kiosk_flow_over_http(client, container, seed_employees, employee_factory):
    seed_employees(employee_factory())

    opened = client.post("/api/kiosk/sessions")
    assert opened.status_code == 201
    session_id = opened.get_json()["session_id"]

    view = _type_pin(client, session_id, "123456").get_json()
    assert view["state"] == "confirm"
    assert "pin" not in view

    marked = client.post(f"/api/kiosk/sessions/{session_id}/mark", json={"type": "in"})
    assert marked.status_code == 201
    body = marked.get_json()
    assert body["record"]["status"] == AttendanceStatus.CONFIRMED.value
    assert body["session"]["state"] == "success"

    again = client.post(f"/api/kiosk/sessions/{session_id}/mark", json={"type": "in"})
    assert again.status_code == 400
    assert again.get_json()["success"] is False

    closed = client.post(f"/api/kiosk/sessions/{session_id}/exit")
    assert closed.get_json()["closed"] is True
    assert client.get(f"/api/kiosk/sessions/{session_id}").status_code == 404


def test_kiosk_rejects_bad_mark_type(client, seed_employees, employee_factory):
    seed_employees(employee_factory())
    session_id = client.post("/api/kiosk/sessions").get_json()["session_id"]
    _type_pin(client, session_id, "123456")

    resp = client.post(f"/api/kiosk/sessions/{session_id}/mark", json={"type": "lunch"})

    assert resp.status_code == 400


def test_admin_routes_require_secret(client):
    assert client.get("/api/admin/attendance/pending").status_code == 401
    assert client.get("/api/admin/attendance/pending", headers={"X-Admin-Secret": "nope"}).status_code == 401


def test_forgotten_mark_and_approval(client, seed_employees, employee_factory, master_password, admin_headers):
    seed_employees(employee_factory())

    created = client.post(
        "/api/attendance/forgotten",
        json={
            "pin": "123456",
            "type": "in",
            "timestamp": datetime(2025, 3, 3, 8, 31).isoformat(),
            "justification": "Sin conexión en el kiosco",
            "admin_secret": master_password,
        },
    )
    assert created.status_code == 201
    record_id = created.get_json()["record"]["id"]

    pending = client.get("/api/admin/attendance/pending", headers=admin_headers).get_json()
    assert [r["id"] for r in pending] == [record_id]

    approved = client.post(f"/api/admin/attendance/{record_id}/approve", headers=admin_headers)
    assert approved.get_json()["record"]["status"] == "confirmed"

    conflict = client.post(f"/api/admin/attendance/{record_id}/reject", headers=admin_headers)
    assert conflict.status_code == 409


def test_forgotten_mark_accepts_utc_timestamp(client, container, seed_employees, employee_factory, master_password):
    seed_employees(employee_factory())
    expected = datetime(2025, 3, 3, 13, 31, tzinfo=timezone.utc).astimezone().replace(tzinfo=None)

    created = client.post(
        "/api/attendance/forgotten",
        json={
            "pin": "123456",
            "type": "in",
            "timestamp": "2025-03-03T13:31:00.000Z",
            "justification": "Sin conexión en el kiosco",
            "admin_secret": master_password,
        },
    )

    assert created.status_code == 201
    body = created.get_json()["record"]
    assert body["timestamp"] == expected.isoformat()
    assert container.attendance_repo.get_by_id(body["id"]).timestamp == expected


@pytest.mark.parametrize("timestamp", [None, "", "ayer por la mañana"])
def test_forgotten_mark_rejects_missing_or_bad_timestamp(client, seed_employees, employee_factory, master_password, timestamp):
    seed_employees(employee_factory())

    resp = client.post(
        "/api/attendance/forgotten",
        json={
            "pin": "123456",
            "type": "in",
            "timestamp": timestamp,
            "justification": "Sin conexión en el kiosco",
            "admin_secret": master_password,
        },
    )

    assert resp.status_code == 400


def test_partial_admin_cannot_delete_or_change_settings(client, seed_employees, employee_factory):
    seed_employees(employee_factory(employee_id="adm", pin="777777", role=Role.PARTIAL_ADMIN))
    headers = {"X-Admin-Secret": "777777"}

    assert client.delete("/api/admin/attendance/whatever", headers=headers).status_code == 403
    resp = client.put("/api/admin/settings", headers=headers, json={"sbu": "500", "iess_rate": "0.09", "reserve_rate": "0.08"})
    assert resp.status_code == 403


def test_settings_update(client, admin_headers):
    resp = client.put(
        "/api/admin/settings",
        headers=admin_headers,
        json={"sbu": "500.00", "iess_rate": "0.0945", "reserve_rate": "0.0833"},
    )
    assert resp.status_code == 200
    assert client.get("/api/admin/settings", headers=admin_headers).get_json()["sbu"] == "500.00"

    bad = client.put("/api/admin/settings", headers=admin_headers, json={"sbu": "abc", "iess_rate": "0", "reserve_rate": "0"})
    assert bad.status_code == 400


def test_employee_admin_endpoints(client, admin_headers):
    created = client.post(
        "/api/admin/employees",
        headers=admin_headers,
        json={"name": "Luis", "surname": "Mora", "identification": "1700000001", "salary": "500"},
    )
    assert created.status_code == 201
    employee = created.get_json()["employee"]
    assert len(employee["pin"]) == 6

    listed = client.get("/api/admin/employees", headers=admin_headers).get_json()
    assert [e["id"] for e in listed] == [employee["id"]]
    assert "pin" not in listed[0]

    reset = client.post(f"/api/admin/employees/{employee['id']}/reset-pin", headers=admin_headers)
    assert reset.get_json()["employee"]["pin_needs_reset"] is True

    terminated = client.post(
        f"/api/admin/employees/{employee['id']}/terminate",
        headers=admin_headers,
        json={"termination_date": "2025-03-15", "reason": "Despido"},
    )
    assert terminated.get_json()["employee"]["status"] == "terminated"

    missing = client.get("/api/admin/employees/ghost", headers=admin_headers)
    assert missing.status_code == 404


def test_payroll_json_and_csv(client, seed_employees, employee_factory, admin_headers):
    seed_employees(employee_factory(start_date=datetime(2023, 1, 1).date()))

    roll = client.get("/api/admin/payroll?month=3&year=2025&as_of=2025-03-31", headers=admin_headers).get_json()
    assert roll["rows"][0]["net_to_receive"] == "556.93"
    assert roll["totals"]["net_to_receive"] == "556.93"

    csv_resp = client.get("/api/admin/payroll.csv?month=3&year=2025&as_of=2025-03-31", headers=admin_headers)
    assert csv_resp.mimetype == "text/csv"
    text = csv_resp.data.decode("utf-8-sig")
    lines = text.strip().splitlines()
    assert lines[0].startswith("employee_id,full_name")
    assert lines[-1].split(",")[1] == "TOTAL"

    preview = client.post(
        "/api/admin/payroll/preview",
        headers=admin_headers,
        json={"month": 3, "year": 2025, "as_of": "2025-03-31", "employee": {"salary": "1000", "is_affiliated": False}},
    ).get_json()
    assert preview["net_to_receive"] == "1000.00"


def test_payroll_rejects_month_zero(client, admin_headers):
    assert client.get("/api/admin/payroll?month=0&year=2025", headers=admin_headers).status_code == 400
    assert client.get("/api/admin/payroll.csv?month=0&year=2025", headers=admin_headers).status_code == 400

    preview = client.post(
        "/api/admin/payroll/preview",
        headers=admin_headers,
        json={"month": 0, "year": 2025, "employee": {"salary": "1000"}},
    )
    assert preview.status_code == 400


def test_notifications_inbox(client, container, seed_employees, employee_factory, clock, admin_headers):
    seed_employees(employee_factory())
    clock.now = datetime(2025, 3, 3, 9, 0, 0)
    session_id = client.post("/api/kiosk/sessions").get_json()["session_id"]
    _type_pin(client, session_id, "123456")
    client.post(f"/api/kiosk/sessions/{session_id}/mark", json={"type": "in"})

    inbox = client.get("/api/admin/notifications", headers=admin_headers).get_json()
    assert inbox["unread"] == 1
    note_id = inbox["items"][0]["id"]

    assert client.post(f"/api/admin/notifications/{note_id}/read", headers=admin_headers).status_code == 200
    assert client.get("/api/admin/notifications", headers=admin_headers).get_json()["unread"] == 0
    assert client.post("/api/admin/notifications/999/read", headers=admin_headers).status_code == 404


def test_reports_over_http(client, container, seed_employees, employee_factory, master_password, admin_headers):
    seed_employees(employee_factory())
    client.post(
        "/api/attendance/forgotten",
        json={
            "pin": "123456",
            "type": "in",
            "timestamp": datetime(2025, 3, 3, 8, 31).isoformat(),
            "justification": "Sin conexión en el kiosco",
            "admin_secret": master_password,
        },
    )

    report = client.get("/api/admin/reports/attendance?year=2025&month=3", headers=admin_headers).get_json()
    assert len(report["rows"]) == 1
    assert report["summary"][0]["pending"] == 1

    assert client.get("/api/admin/reports/attendance?year=2025&month=0", headers=admin_headers).status_code == 400
    assert client.get("/api/admin/reports/attendance?year=abc", headers=admin_headers).status_code == 400
    assert client.get("/api/admin/reports/attendance?employee_id=ghost", headers=admin_headers).status_code == 404

    payments = client.get("/api/admin/reports/payments?year=2025", headers=admin_headers).get_json()
    assert payments == {"year": 2025, "employee_id": None, "rows": [], "total": "0.00"}

    assert client.get("/api/admin/reports/payments").status_code == 401
