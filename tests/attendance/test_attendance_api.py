from __future__ import annotations

import pytest

from conftest import OFFICE_LAT, OFFICE_LON, WORKDAY, InMemoryNotifications, local
from src.office_attendance.office_attendance.attendance import service as attendance_service_module
from src.office_attendance.office_attendance.container import wire_container
from src.office_attendance.office_attendance.core.enums import AttendanceStatus
from src.office_attendance.office_attendance.main import create_app


@pytest.fixture
def container(users, attendance_repo, holidays_repo, locations_repo):
    return wire_container(
        users_repo=users,
        attendance_repo=attendance_repo,
        holidays_repo=holidays_repo,
        locations_repo=locations_repo,
        notifications_repo=InMemoryNotifications(),
        attendance_config={"timezone": "Asia/Kolkata"},
    )


@pytest.fixture
def client(monkeypatch, container):
    monkeypatch.setenv("APP_ENV", "testing")
    monkeypatch.setattr(attendance_service_module, "now_utc", lambda: local(WORKDAY, 9, 30))
    app = create_app(container=container)
    return app.test_client()


def login(client, user_id=1, role="employee", name="Asha Rao"):
    with client.session_transaction() as sess:
        sess["user_id"] = user_id
        sess["role"] = role
        sess["name"] = name


def test_requires_session(client):
    assert client.post("/api/attendance/mark", json={"source": "web"}).status_code == 401
    assert client.get("/api/holidays").status_code == 401


def test_health(client):
    assert client.get("/api/health").get_json() == {"status": "ok"}


def test_mark_via_web(client):
    login(client)

    resp = client.post("/api/attendance/mark", json={"source": "web"})

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["action"] == "check_in"
    assert body["status"] == "present"
    assert body["is_late"] is False
    assert body["date"] == "2026-02-03"

    today = client.get("/api/attendance/today")
    assert today.status_code == 200
    assert today.get_json()["attendance_id"] == body["attendance_id"]


def test_mark_twice_is_rejected_with_message(client):
    login(client)
    client.post("/api/attendance/mark", json={"source": "web"})

    resp = client.post("/api/attendance/mark", json={"source": "web"})

    assert resp.status_code == 400
    assert resp.get_json()["message"] == "Attendance already completed for today"


def test_mark_outside_geofence_reports_distance(client):
    login(client)

    resp = client.post(
        "/api/attendance/mark",
        json={"latitude": OFFICE_LAT + 0.01, "longitude": OFFICE_LON, "accuracy": 10, "source": "mobile"},
    )

    assert resp.status_code == 400
    body = resp.get_json()
    assert body["message"] == "You are outside the office area"
    assert body["allowed_radius"] == 120
    assert body["distance"] > 1000


def test_mark_with_non_numeric_coordinates(client):
    login(client)

    resp = client.post("/api/attendance/mark", json={"latitude": "north", "longitude": OFFICE_LON})

    assert resp.status_code == 400


def test_today_without_record_is_404(client):
    login(client)

    assert client.get("/api/attendance/today").status_code == 404


def test_checkout_after_auto_close_is_400(client):
    login(client)
    client.post("/api/attendance/mark", json={"source": "web"})

    resp = client.post("/api/attendance/checkout", json={})

    assert resp.status_code == 400
    assert resp.get_json()["message"] == "You have already checked out today"


def test_admin_routes_reject_employees(client):
    login(client)

    assert client.get("/api/attendance/stats").status_code == 403
    assert client.get("/api/attendance/all").status_code == 403
    assert client.put("/api/attendance/1", json={"status": "late"}).status_code == 403


def test_admin_listing_and_stats(client, attendance_repo):
    attendance_repo.seed(
        user_id=2,
        work_date=WORKDAY,
        check_in=local(WORKDAY, 10, 30),
        check_out=local(WORKDAY, 17, 0),
        status=AttendanceStatus.LATE,
    )
    login(client, user_id=9, role="admin", name="Admin")

    listing = client.get("/api/attendance/all?date=2026-02-03").get_json()
    stats = client.get("/api/attendance/stats?date=2026-02-03").get_json()

    assert [e["id"] for e in listing] == ["absent-1-2026-02-03", "1", "absent-9-2026-02-03"]
    assert listing[1]["user"]["name"] == "Ravi Kumar"
    assert stats["late_today"] == 1
    assert stats["absent_today"] == 2


def test_admin_edit_errors(client, attendance_repo):
    record = attendance_repo.seed(
        user_id=1,
        work_date=WORKDAY,
        check_in=local(WORKDAY, 9, 30),
        check_out=local(WORKDAY, 17, 0),
        status=AttendanceStatus.PRESENT,
    )
    login(client, user_id=9, role="admin", name="Admin")

    synthetic = client.put("/api/attendance/absent-2-2026-02-03", json={"status": "present"})
    missing = client.put("/api/attendance/999", json={"status": "present"})
    late_edit = client.put(f"/api/attendance/{record.attendance_id}", json={"checkOut": "2026-02-03T18:00:00"})

    assert synthetic.status_code == 400
    assert missing.status_code == 404
    assert late_edit.status_code == 400
    assert late_edit.get_json()["message"] == "Check-out time must be between 09:00 - 17:00"


def test_admin_edit_success(client, attendance_repo):
    record = attendance_repo.seed(
        user_id=1,
        work_date=WORKDAY,
        check_in=local(WORKDAY, 9, 30),
        check_out=local(WORKDAY, 17, 0),
        status=AttendanceStatus.PRESENT,
    )
    login(client, user_id=9, role="admin", name="Admin")

    resp = client.put(
        f"/api/attendance/{record.attendance_id}",
        json={"checkIn": "2026-02-03T09:00:00", "status": "half_day"},
    )

    assert resp.status_code == 200
    body = resp.get_json()["attendance"]
    assert body["status"] == "half_day"
    assert body["working_hours"] == pytest.approx(8.0)


def test_holiday_lifecycle(client):
    login(client, user_id=9, role="admin", name="Admin")

    created = client.post("/api/holidays", json={"name": "Founders Day", "date": "2026-02-05"})
    assert created.status_code == 201
    holiday_id = created.get_json()["holiday_id"]

    duplicate = client.post("/api/holidays", json={"name": "Again", "date": "2026-02-05"})
    assert duplicate.status_code == 409

    check = client.get("/api/holidays/check/2026-02-05").get_json()
    assert check == {"date": "2026-02-05", "is_holiday": True, "is_weekend": False, "holiday_name": "Founders Day"}

    assert client.delete(f"/api/holidays/{holiday_id}").status_code == 200
    assert client.delete(f"/api/holidays/{holiday_id}").status_code == 404
    assert client.get("/api/holidays/check/2026-02-05").get_json()["is_holiday"] is False


def test_location_get_and_set(client):
    login(client, user_id=9, role="admin", name="Admin")

    assert client.get("/api/location").get_json()["radius"] == 100

    resp = client.post("/api/location", json={"latitude": 12.98, "longitude": 77.6, "radius": 250, "address": "Whitefield"})

    assert resp.status_code == 201
    assert client.get("/api/location").get_json()["address"] == "Whitefield"


def test_location_set_rejects_out_of_range_latitude(client):
    login(client, user_id=9, role="admin", name="Admin")

    resp = client.post("/api/location", json={"latitude": 123.0, "longitude": 77.6, "address": "Nowhere"})

    assert resp.status_code == 400


def test_checkin_lands_in_notification_inbox(client):
    login(client)
    client.post("/api/attendance/mark", json={"source": "web"})

    items = client.get("/api/notifications").get_json()
    assert [n["title"] for n in items] == ["Checked in"]
    assert client.get("/api/notifications/unread-count").get_json() == {"count": 1}

    notification_id = items[0]["notification_id"]
    assert client.patch(f"/api/notifications/{notification_id}/read").status_code == 200
    assert client.get("/api/notifications/unread-count").get_json() == {"count": 0}
    assert client.patch("/api/notifications/999/read").status_code == 404


def test_clearing_the_inbox(client):
    login(client)
    client.post("/api/attendance/mark", json={"source": "web"})

    resp = client.delete("/api/notifications/user")

    assert resp.status_code == 200
    assert resp.get_json() == {"message": "All notifications deleted", "deleted": 1}
    assert client.get("/api/notifications").get_json() == []


def test_clearing_the_inbox_requires_session(client):
    assert client.delete("/api/notifications/user").status_code == 401
