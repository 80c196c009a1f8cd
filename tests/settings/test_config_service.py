from datetime import time
from decimal import Decimal

import pytest

from src.attendance_payroll.attendance_payroll.core.exceptions import ValidationError
from src.attendance_payroll.attendance_payroll.settings.service import ConfigReader


def test_empty_table_uses_defaults():
    config = ConfigReader({}).snapshot()

    assert config.office.lat == pytest.approx(-2.9795731113284303)
    assert config.geofence_radius_meters == 100
    assert config.work_start == time(8, 0)
    assert config.work_end == time(16, 0)
    assert config.late_tolerance_minutes == 10
    assert config.break_duration_minutes == 60
    assert config.overtime_rate_first_hour == Decimal("1.5")
    assert config.overtime_rate_next_hours == Decimal("2.0")
    assert config.late_penalty_per_minute == 2000
    assert config.bpjs_health_rate + config.bpjs_labor_rate == Decimal("0.03")
    assert config.pph21_rate == Decimal("0.05")
    assert str(config.timezone) == "Asia/Jakarta"


def test_stored_values_override_defaults():
    config = ConfigReader({"work_start_time": "09:30", "geofenceRadius": "250", "timezone": "Asia/Makassar"}).snapshot()

    assert config.work_start == time(9, 30)
    assert config.geofence_radius_meters == 250
    assert str(config.timezone) == "Asia/Makassar"


def test_invalid_values_fall_back_to_defaults(caplog):
    config = ConfigReader({"late_tolerance_minutes": "ten", "pph21_rate": "NaN", "timezone": "Mars/Olympus"}).snapshot()

    assert config.late_tolerance_minutes == 10
    assert config.pph21_rate == Decimal("0.05")
    assert str(config.timezone) == "Asia/Jakarta"
    assert "late_tolerance_minutes" in caplog.text


def test_set_value_is_seen_by_next_snapshot(container):
    before = container.config_service.load_snapshot()
    container.config_service.set_value("late_penalty_per_minute", " 1500 ")
    after = container.config_service.load_snapshot()

    assert before.late_penalty_per_minute == 2000
    assert after.late_penalty_per_minute == 1500


def test_set_unknown_key(container):
    with pytest.raises(ValidationError):
        container.config_service.set_value("office_wifi_password", "x")
