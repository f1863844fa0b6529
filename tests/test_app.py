from datetime import datetime

import pytest

from staff_payroll.main import create_app

NOW = datetime(2026, 1, 15, 9, 10)


@pytest.fixture
def app(container, monkeypatch):
    for module in ("attendance.service", "attendance.controller", "leaves.service", "payroll.service"):
        monkeypatch.setattr(f"staff_payroll.{module}.now_local", lambda: NOW)
    return create_app(settings_module="staff_payroll.settings.testing", container=container)


@pytest.fixture
def client(app):
    return app.test_client()


def login(client, user):
    with client.session_transaction() as sess:
        sess["user_id"] = user.user_id


def test_requires_login(client):
    resp = client.post("/attendance/check-in", json={})

    assert resp.status_code == 401
    assert resp.get_json()["error"] == "unauthenticated"


def test_check_in_inside_and_outside_geofence(client, staff, store_location, far_away):
    login(client, staff)

    resp = client.post("/attendance/check-in", json={"lat": far_away.lat, "lng": far_away.lng})
    assert resp.status_code == 422
    assert resp.get_json()["error"] == "out_of_range"

    resp = client.post("/attendance/check-in", json={"lat": store_location.lat, "lng": store_location.lng})
    assert resp.status_code == 201
    body = resp.get_json()
    assert body["record"]["status"] == "present"
    assert body["record"]["work_date"] == "2026-01-15"

    resp = client.post("/attendance/check-in", json={"lat": store_location.lat, "lng": store_location.lng})
    assert resp.status_code == 409
    assert resp.get_json()["error"] == "already_marked"

    today = client.get("/attendance/today").get_json()
    assert today["status"] == "present"


def test_staff_cannot_mark_others(client, staff, remote_staff):
    login(client, staff)

    resp = client.post("/attendance/mark", json={"staff_id": remote_staff.user_id, "status": "absent"})

    assert resp.status_code == 403


def test_admin_marks_with_invalid_status(client, admin, staff):
    login(client, admin)

    resp = client.post("/attendance/mark", json={"staff_id": staff.user_id, "status": "sleeping"})
    assert resp.status_code == 422
    assert resp.get_json()["error"] == "validation_error"

    resp = client.post("/attendance/mark", json={"staff_id": staff.user_id, "status": "absent"})
    assert resp.status_code == 201
    assert resp.get_json()["marked_by"] == "admin"


def test_leave_flow(client, staff, admin):
    login(client, staff)
    resp = client.post("/leaves", json={"date": "2026-01-20", "reason": "wedding"})
    assert resp.status_code == 201
    request_id = resp.get_json()["request_id"]

    assert client.post("/leaves", json={"date": "2026-01-20"}).status_code == 409
    assert client.post("/leaves", json={"date": "2026-01-15"}).get_json()["error"] == "invalid_date"
    assert client.post("/leaves", json={"date": "20-01-2026"}).status_code == 422

    login(client, admin)
    pending = client.get(f"/stores/{staff.store_id}/leaves/pending").get_json()
    assert [p["request_id"] for p in pending] == [request_id]

    resp = client.post(f"/leaves/{request_id}/approve")
    assert resp.status_code == 200
    assert resp.get_json()["status"] == "approved"

    assert client.post(f"/leaves/{request_id}/reject").get_json()["error"] == "invalid_transition"


def test_salary_preview_and_lock(client, staff, admin, remote_staff):
    login(client, staff)
    preview = client.get(f"/salary/{staff.user_id}/2026/1").get_json()
    assert preview["locked"] is False
    assert preview["statement"]["breakdown"]["working_days"] == 30

    assert client.get(f"/salary/{remote_staff.user_id}/2026/1").status_code == 403
    assert client.post(f"/salary/{staff.user_id}/2026/1/lock").status_code == 403

    login(client, admin)
    resp = client.post(f"/salary/{staff.user_id}/advances", json={"amount": 1000, "given_on": "2026-01-10"})
    assert resp.status_code == 201

    resp = client.post(f"/salary/{staff.user_id}/2026/1/lock")
    assert resp.status_code == 201
    locked = resp.get_json()
    assert locked["is_locked"] is True
    assert locked["advance_deduction"] == 1000

    resp = client.post(f"/salary/{staff.user_id}/2026/1/lock")
    assert resp.status_code == 409
    assert resp.get_json()["error"] == "already_locked"

    preview = client.get(f"/salary/{staff.user_id}/2026/1").get_json()
    assert preview["locked"] is True
    assert preview["record"]["final_amount"] == locked["final_amount"]

    history = client.get(f"/salary/{staff.user_id}/history").get_json()
    assert [(h["year"], h["month"]) for h in history] == [(2026, 1)]


def test_freeze_is_super_admin_only(client, admin, super_admin, staff, store_location):
    login(client, admin)
    assert client.post(f"/stores/{staff.store_id}/freeze", json={"frozen": True}).status_code == 403

    login(client, super_admin)
    resp = client.post(f"/stores/{staff.store_id}/freeze", json={"frozen": True})
    assert resp.status_code == 200
    assert resp.get_json()["attendance_frozen"] is True

    login(client, staff)
    resp = client.post("/attendance/check-in", json={"lat": store_location.lat, "lng": store_location.lng})
    assert resp.get_json()["error"] == "store_frozen"


def test_unknown_staff_is_404(client, admin):
    login(client, admin)
    assert client.get("/salary/999/2026/1").status_code == 404


def test_store_staff_and_advances(client, admin, other_admin, staff):
    login(client, admin)
    roster = client.get(f"/stores/{staff.store_id}/staff").get_json()
    assert [(s["user_id"], s["role"]) for s in roster] == [(staff.user_id, "staff")]

    client.post(f"/salary/{staff.user_id}/advances", json={"amount": 500, "given_on": "2026-01-05"})
    client.post(f"/salary/{staff.user_id}/advances", json={"amount": 700, "given_on": "2026-01-12"})
    advances = client.get(f"/salary/{staff.user_id}/advances").get_json()
    assert [a["amount"] for a in advances] == [700, 500]
    assert all(a["is_deducted"] is False for a in advances)

    login(client, other_admin)
    assert client.get(f"/stores/{staff.store_id}/staff").status_code == 403


def test_freeze_flag_must_be_boolean(client, super_admin, container, staff):
    login(client, super_admin)

    resp = client.post(f"/stores/{staff.store_id}/freeze", json={"frozen": "false"})

    assert resp.status_code == 422
    assert resp.get_json()["error"] == "validation_error"
    assert container.store_service.get(staff.store_id).attendance_frozen is False

    resp = client.post(f"/stores/{staff.store_id}/freeze", json={"frozen": False})
    assert resp.status_code == 200
    assert resp.get_json()["attendance_frozen"] is False
