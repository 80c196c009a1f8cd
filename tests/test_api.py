from datetime import date, datetime
from zoneinfo import ZoneInfo

import pytest

from src.attendance_payroll.attendance_payroll.attendance import service as attendance_service
from src.attendance_payroll.attendance_payroll.main import create_app

JAKARTA = ZoneInfo("Asia/Jakarta")
OFFICE = {"lat": -2.9795731113284303, "lng": 104.73111003716011}


@pytest.fixture
def clock(monkeypatch):
    now = {"value": datetime(2025, 1, 6, 8, 15, tzinfo=JAKARTA)}
    monkeypatch.setattr(attendance_service, "now_local", lambda tz=None: now["value"])
    return now


@pytest.fixture
def client(monkeypatch, container):
    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(container)
    return app.test_client()


def test_clock_in_and_out(client, clock):
    res = client.post("/api/attendance/clock-in", json={"userId": 1, **OFFICE, "photo": "a.jpg"})
    assert res.status_code == 201
    body = res.get_json()
    assert body["status"] == "late"
    assert body["lateMinutes"] == 15
    assert body["isWithinGeofenceIn"] is True
    assert body["approvalStatus"] == "pending"

    clock["value"] = datetime(2025, 1, 6, 18, 0, tzinfo=JAKARTA)
    res = client.post("/api/attendance/clock-out", json={"userId": 1, "lat": "bogus", "lng": None})
    assert res.status_code == 200
    body = res.get_json()
    assert body["overtimeMinutes"] == 120
    assert body["workedMinutes"] == 525
    assert body["isWithinGeofenceOut"] is False


def test_domain_errors_map_to_status_codes(client, clock):
    assert client.post("/api/attendance/clock-out", json={"userId": 1}).status_code == 400

    client.post("/api/attendance/clock-in", json={"userId": 1, **OFFICE})
    res = client.post("/api/attendance/clock-in", json={"userId": 1, **OFFICE})
    assert res.status_code == 409
    assert res.get_json()["code"] == "DuplicateClockIn"

    client.post("/api/attendance/clock-out", json={"userId": 1, **OFFICE})
    res = client.post("/api/attendance/clock-out", json={"userId": 1, **OFFICE})
    assert res.status_code == 409
    assert res.get_json()["code"] == "AlreadyClockedOut"

    res = client.post("/api/attendance/clock-in", json={"userId": 99, **OFFICE})
    assert res.status_code == 404

    res = client.post("/api/attendance/clock-in", json={"userId": "abc"})
    assert res.status_code == 400
    assert res.get_json()["code"] == "ValidationError"


def test_approval_endpoint(client, clock):
    created = client.post("/api/attendance/clock-in", json={"userId": 1, **OFFICE}).get_json()

    res = client.post(f"/api/attendance/{created['id']}/approval", json={"status": "approved"})
    assert res.status_code == 200
    assert res.get_json()["approvalStatus"] == "approved"

    res = client.post(f"/api/attendance/{created['id']}/approval", json={"status": "maybe"})
    assert res.status_code == 400


def test_list_attendance_for_period(client, clock):
    client.post("/api/attendance/clock-in", json={"userId": 1, **OFFICE})

    res = client.get("/api/attendance?userId=1&period=2025-01")
    assert res.status_code == 200
    assert [r["date"] for r in res.get_json()] == ["2025-01-06"]

    res = client.get("/api/attendance?userId=1&period=2025-13")
    assert res.status_code == 400
    assert res.get_json()["code"] == "InvalidPeriod"


def test_generate_and_finalize_payroll(client, attendance_repo, approved_day):
    attendance_repo.add(approved_day(1, 1, date(2025, 1, 6), worked=600, late=5, overtime=120))

    res = client.post("/api/payroll/generate", json={"period": "2025-01", "manualBonuses": {"1": 100000}})
    assert res.status_code == 201
    body = res.get_json()
    assert body["success"] is True
    assert body["skippedFinalized"] == []
    budi = next(p for p in body["payrolls"] if p["userId"] == 1)
    assert budi["basicSalary"] == 600000
    assert budi["overtimePay"] == 210000
    assert budi["totalNet"] == 600000 + 210000 + 100000 - (10000 + 18000 + 30000)
    assert budi["status"] == "draft"

    res = client.post(f"/api/payroll/{budi['id']}/finalize")
    assert res.status_code == 200
    assert res.get_json()["status"] == "final"
    assert res.get_json()["finalizedAt"] is not None

    listed = client.get("/api/payroll?period=2025-01").get_json()
    assert {p["status"] for p in listed} == {"draft", "final"}

    rerun = client.post("/api/payroll/generate", json={"period": "2025-01"}).get_json()
    assert rerun["skippedFinalized"] == [1]


def test_payroll_errors(client):
    res = client.post("/api/payroll/generate", json={"period": "2025-13"})
    assert res.status_code == 400
    assert res.get_json()["code"] == "InvalidPeriod"

    assert client.post("/api/payroll/404/finalize").status_code == 404
    assert client.get("/api/payroll").status_code == 400


def test_negative_net_is_flagged(client, attendance_repo, approved_day):
    attendance_repo.add(approved_day(1, 1, date(2025, 1, 6), worked=60, late=1000))

    body = client.post("/api/payroll/generate", json={"period": "2025-01"}).get_json()

    budi = next(p for p in body["payrolls"] if p["userId"] == 1)
    assert budi["totalNet"] < 0
    assert budi["negativeNet"] is True


def test_config_endpoints(client, config_repo):
    res = client.put("/api/config/geofenceRadius", json={"value": "150"})
    assert res.status_code == 200
    assert config_repo.values["geofenceRadius"] == "150"

    keys = {e["key"] for e in client.get("/api/config").get_json()}
    assert "geofenceRadius" in keys

    assert client.put("/api/config/nope", json={"value": "1"}).status_code == 400


def test_activity_log_endpoint(client, clock):
    client.post("/api/attendance/clock-in", json={"userId": 1, **OFFICE})

    logs = client.get("/api/activity-logs?limit=5").get_json()
    assert logs[0]["activityType"] == "clock_in"
    assert logs[0]["userId"] == 1
