from __future__ import annotations

import csv
import threading
from concurrent.futures import ThreadPoolExecutor
import io

from timeclock.core.enums import Role
from timeclock.core.exceptions import KIOSK_FAILURE_MESSAGE
from timeclock.models import AuditLog, User
from timeclock.services.audit_service import AUDIT_CSV_HEADERS
from timeclock.services.timesheet_service import TIMESHEET_CSV_HEADERS

API = "/api/v1"


def test_root(client):
    resp = client.get("/")

    assert resp.status_code == 200
    assert resp.json()["name"] == "Kiosk Timesheet"


def test_kiosk_clock_in_then_out(client, make_user):
    make_user("jane.doe@acme.io", "1234")

    first = client.post(f"{API}/auth/kiosk/clock", json={"pin": "1234"})
    second = client.post(f"{API}/auth/kiosk/clock", json={"pin": "1234"})

    assert first.status_code == 200
    body = first.json()
    assert body["success"] is True
    assert body["message"] == "Welcome, Jane Doe! Clock-in successful."
    assert body["data"]["action"] == "CLOCK_IN"

    assert second.status_code == 200
    assert second.json()["data"]["action"] == "CLOCK_OUT"
    assert second.json()["data"]["session_id"] == body["data"]["session_id"]


def test_concurrent_kiosk_submissions_for_one_pin(client, make_user):
    make_user("jane@acme.io", "1234")
    barrier = threading.Barrier(2)

    def submit():
        barrier.wait()
        return client.post(f"{API}/auth/kiosk/clock", json={"pin": "1234"})

    with ThreadPoolExecutor(max_workers=2) as pool:
        futures = [pool.submit(submit) for _ in range(2)]
        responses = [f.result() for f in futures]

    assert [r.status_code for r in responses] == [200, 200]
    data = [r.json()["data"] for r in responses]
    assert sorted(d["action"] for d in data) == ["CLOCK_IN", "CLOCK_OUT"]
    assert data[0]["session_id"] == data[1]["session_id"]


def test_kiosk_wrong_pin(client, make_user, db):
    make_user("jane@acme.io", "1234")

    resp = client.post(f"{API}/auth/kiosk/clock", json={"pin": "9999"})

    assert resp.status_code == 401
    assert resp.json()["success"] is False
    assert resp.json()["message"] == KIOSK_FAILURE_MESSAGE
    entry = db.query(AuditLog).one()
    assert entry.al_action == "PIN_LOGIN_FAILURE"
    assert entry.al_ip_address == "testclient"


def test_kiosk_blank_pin_is_validation_error(client):
    resp = client.post(f"{API}/auth/kiosk/clock", json={"pin": ""})

    assert resp.status_code == 422


def test_admin_login(client, make_user):
    make_user("boss@acme.io", "s3cret-pass", Role.ADMIN)

    resp = client.post(f"{API}/auth/admin/login", json={"email": "boss@acme.io", "password": "s3cret-pass"})

    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["token_type"] == "bearer"
    assert data["role"] == "ADMIN"
    assert data["expires_in"] > 0


def test_admin_login_wrong_password(client, make_user, db):
    make_user("boss@acme.io", "s3cret-pass", Role.ADMIN)

    resp = client.post(f"{API}/auth/admin/login", json={"email": "boss@acme.io", "password": "nope"})

    assert resp.status_code == 401
    assert db.query(AuditLog).one().al_action == "ADMIN_LOGIN_FAILURE"


def test_admin_login_unknown_email(client):
    resp = client.post(f"{API}/auth/admin/login", json={"email": "ghost@acme.io", "password": "x"})

    assert resp.status_code == 401


def test_employee_cannot_log_into_dashboard(client, make_user):
    make_user("jane@acme.io", "1234")

    resp = client.post(f"{API}/auth/admin/login", json={"email": "jane@acme.io", "password": "1234"})

    assert resp.status_code == 403


def test_admin_routes_require_token(client):
    assert client.get(f"{API}/admin/users").status_code == 401
    assert client.get(f"{API}/admin/users", headers={"Authorization": "Bearer garbage"}).status_code == 401
    assert client.post(f"{API}/maintenance/weekly-reset").status_code == 401


def test_token_of_deleted_admin_is_rejected(client, admin_headers, db):
    db.query(User).filter(User.u_email == "boss@acme.io").delete()
    db.commit()

    assert client.get(f"{API}/admin/users", headers=admin_headers).status_code == 401


def test_user_management_flow(client, admin_headers):
    created = client.post(
        f"{API}/admin/users",
        json={"email": "new@acme.io", "pin": "5678", "role": "EMPLOYEE"},
        headers=admin_headers,
    )
    assert created.status_code == 201
    user_id = created.json()["data"]["u_id"]

    listed = client.get(f"{API}/admin/users", headers=admin_headers)
    assert listed.status_code == 200
    assert {u["u_email"] for u in listed.json()["data"]} == {"boss@acme.io", "new@acme.io"}

    reset = client.post(f"{API}/admin/users/{user_id}/reset-pin", json={"new_pin": "8765"}, headers=admin_headers)
    assert reset.status_code == 200
    assert client.post(f"{API}/auth/kiosk/clock", json={"pin": "8765"}).status_code == 200

    deleted = client.delete(f"{API}/admin/users/{user_id}", headers=admin_headers)
    assert deleted.status_code == 204
    assert client.delete(f"{API}/admin/users/{user_id}", headers=admin_headers).status_code == 404


def test_create_user_errors(client, admin_headers, make_user):
    make_user("alice@acme.io", "1111")

    dup_pin = client.post(
        f"{API}/admin/users", json={"email": "bob@acme.io", "pin": "1111", "role": "EMPLOYEE"}, headers=admin_headers
    )
    dup_email = client.post(
        f"{API}/admin/users", json={"email": "alice@acme.io", "pin": "2222", "role": "EMPLOYEE"}, headers=admin_headers
    )
    bad_email = client.post(
        f"{API}/admin/users", json={"email": "not-an-email", "pin": "2222", "role": "EMPLOYEE"}, headers=admin_headers
    )

    assert dup_pin.status_code == 400
    assert "already in use" in dup_pin.json()["message"]
    assert dup_email.status_code == 409
    assert bad_email.status_code == 422


def test_create_admin_with_oversized_password(client, admin_headers):
    resp = client.post(
        f"{API}/admin/users", json={"email": "ops@acme.io", "pin": "x" * 80, "role": "ADMIN"}, headers=admin_headers
    )

    assert resp.status_code == 400
    assert "72 bytes" in resp.json()["message"]


def test_user_statuses(client, admin_headers, make_user):
    make_user("jane@acme.io", "1234")
    client.post(f"{API}/auth/kiosk/clock", json={"pin": "1234"})

    resp = client.get(f"{API}/admin/users/statuses", headers=admin_headers)

    statuses = {s["u_email"]: s["status"] for s in resp.json()["data"]}
    assert statuses == {"boss@acme.io": "Never Clocked In", "jane@acme.io": "Clocked In"}


def test_timesheets_and_export(client, admin_headers, make_user):
    make_user("jane@acme.io", "1234")
    client.post(f"{API}/auth/kiosk/clock", json={"pin": "1234"})
    client.post(f"{API}/auth/kiosk/clock", json={"pin": "1234"})

    weekly = client.get(f"{API}/admin/timesheets", headers=admin_headers)
    assert weekly.status_code == 200
    sheets = weekly.json()["data"]
    assert len(sheets) == 1
    assert len(sheets[0]["daily_hours"]) == 7
    assert sheets[0]["total_hours"] == sum(sheets[0]["daily_hours"].values())

    export = client.get(f"{API}/admin/timesheets/export", headers=admin_headers)
    assert export.status_code == 200
    assert export.headers["content-type"].startswith("text/csv")
    assert "attachment" in export.headers["content-disposition"]
    table = list(csv.reader(io.StringIO(export.text)))
    assert table[0] == TIMESHEET_CSV_HEADERS
    assert [r[3] for r in table[1:]] == ["CLOCK_IN", "CLOCK_OUT"]


def test_timesheet_window_parameters(client, admin_headers):
    resp = client.get(
        f"{API}/admin/timesheets", params={"week_start_date": "2024-01-01", "days": 3}, headers=admin_headers
    )

    assert resp.status_code == 200
    assert resp.json()["data"] == []


def test_export_requires_both_dates(client, admin_headers):
    resp = client.get(f"{API}/admin/timesheets/export", params={"start_date": "2024-01-01"}, headers=admin_headers)
    assert resp.status_code == 400

    resp = client.get(f"{API}/admin/audit-logs/export", params={"end_date": "2024-01-01"}, headers=admin_headers)
    assert resp.status_code == 400


def test_audit_logs_and_notifications(client, admin_headers, make_user):
    make_user("jane@acme.io", "1234")
    client.post(f"{API}/auth/kiosk/clock", json={"pin": "1234"})

    logs = client.get(f"{API}/admin/audit-logs", params={"skip": 0, "limit": 1}, headers=admin_headers)
    assert logs.status_code == 200
    body = logs.json()
    assert body["total"] == 2
    assert body["pages"] == 2
    assert body["data"][0]["al_action"] == "CLOCK_IN_SUCCESS"
    assert body["data"][0]["user_email"] == "jane@acme.io"

    notes = client.get(f"{API}/admin/notifications", headers=admin_headers)
    assert [n["message"] for n in notes.json()["data"]] == [
        "Jane clocked in.",
        "Boss logged into the admin dashboard.",
    ]

    export = client.get(f"{API}/admin/audit-logs/export", headers=admin_headers)
    table = list(csv.reader(io.StringIO(export.text)))
    assert table[0] == AUDIT_CSV_HEADERS
    assert len(table) == 3


def test_weekly_reset(client, admin_headers, make_user):
    make_user("jane@acme.io", "1234")
    client.post(f"{API}/auth/kiosk/clock", json={"pin": "1234"})

    resp = client.post(f"{API}/maintenance/weekly-reset", headers=admin_headers)

    assert resp.status_code == 200
    assert resp.json()["data"]["deleted_count"] == 1
    again = client.post(f"{API}/auth/kiosk/clock", json={"pin": "1234"})
    assert again.json()["data"]["action"] == "CLOCK_IN"
