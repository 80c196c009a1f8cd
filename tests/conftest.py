from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from typing import Optional
from zoneinfo import ZoneInfo

import pytest

from src.attendance_payroll.attendance_payroll.activity.model import ActivityLogEntry
from src.attendance_payroll.attendance_payroll.attendance.model import AttendanceRecord
from src.attendance_payroll.attendance_payroll.container import wire
from src.attendance_payroll.attendance_payroll.core.enums import (
    ApprovalStatus,
    AttendanceStatus,
    EmploymentStatus,
    PayrollStatus,
    Role,
)
from src.attendance_payroll.attendance_payroll.core.exceptions import DuplicateClockIn
from src.attendance_payroll.attendance_payroll.payroll.model import PayrollRecord
from src.attendance_payroll.attendance_payroll.settings.model import ConfigEntry
from src.attendance_payroll.attendance_payroll.users.model import Employee
from src.attendance_payroll.attendance_payroll.users.position_model import Position

JAKARTA = ZoneInfo("Asia/Jakarta")


@dataclass
class InMemoryUsers:
    users_by_id: dict[int, Employee] = field(default_factory=dict)

    def get_by_id(self, user_id: int) -> Optional[Employee]:
        return self.users_by_id.get(user_id)

    def list_all(self):
        return [self.users_by_id[k] for k in sorted(self.users_by_id)]


@dataclass
class InMemoryPositions:
    positions: dict[int, Position] = field(default_factory=dict)

    def list_all(self):
        return list(self.positions.values())


class InMemoryAttendance:
    def __init__(self):
        self._by_id: dict[int, AttendanceRecord] = {}
        self._keys: dict[tuple[int, date], int] = {}
        self._id = 0

    def add(self, record: AttendanceRecord) -> AttendanceRecord:
        self._id = max(self._id, record.attendance_id)
        self._by_id[record.attendance_id] = record
        self._keys[(record.user_id, record.work_date)] = record.attendance_id
        return record

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        return self._by_id.get(attendance_id)

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        attendance_id = self._keys.get((user_id, work_date))
        return self._by_id.get(attendance_id) if attendance_id else None

    def list_for_user_between(self, user_id: int, start_date: date, end_date: date):
        items = [r for r in self._by_id.values() if r.user_id == user_id and start_date <= r.work_date <= end_date]
        return sorted(items, key=lambda r: r.work_date)

    def create_clock_in(self, *, user_id, work_date, clock_in, lat, lng, photo, status, is_within_geofence, late_minutes, notes=None) -> int:
        # Unique key (user_id, date), like the table constraint
        if (user_id, work_date) in self._keys:
            raise DuplicateClockIn("Already clocked in today")
        self._id += 1
        self._keys[(user_id, work_date)] = self._id
        self._by_id[self._id] = AttendanceRecord(
            attendance_id=self._id,
            user_id=user_id,
            work_date=work_date,
            clock_in=clock_in,
            clock_out=None,
            status=status,
            clock_in_lat=lat,
            clock_in_lng=lng,
            clock_in_photo=photo,
            is_within_geofence_in=is_within_geofence,
            late_minutes=late_minutes,
            notes=notes,
        )
        return self._id

    def update_clock_out(self, *, attendance_id, clock_out, lat, lng, photo, status, is_within_geofence, overtime_minutes, worked_minutes, notes=None) -> bool:
        r = self._by_id[attendance_id]
        if r.clock_out is not None:
            return False
        self._by_id[attendance_id] = replace(
            r,
            clock_out=clock_out,
            clock_out_lat=lat,
            clock_out_lng=lng,
            clock_out_photo=photo,
            status=status,
            is_within_geofence_out=is_within_geofence,
            overtime_minutes=overtime_minutes,
            worked_minutes=worked_minutes,
            notes=notes,
        )
        return True

    def set_approval_status(self, *, attendance_id: int, approval_status: ApprovalStatus) -> bool:
        r = self._by_id.get(attendance_id)
        if not r:
            return False
        self._by_id[attendance_id] = replace(r, approval_status=approval_status)
        return True


class InMemoryPayrolls:
    def __init__(self):
        self._by_id: dict[int, PayrollRecord] = {}
        self._id = 0

    def add(self, record: PayrollRecord) -> PayrollRecord:
        # Unique key (user_id, period), like the table constraint
        if any(r.user_id == record.user_id and r.period == record.period for r in self._by_id.values()):
            raise ValueError(f"Duplicate payroll for user {record.user_id} in {record.period}")
        self._id += 1
        record = replace(record, payroll_id=self._id)
        self._by_id[self._id] = record
        return record

    def get_by_id(self, payroll_id: int) -> Optional[PayrollRecord]:
        return self._by_id.get(payroll_id)

    def list_for_period(self, period: str):
        return [r for r in self._by_id.values() if r.period == period]

    def list_for_user(self, user_id: int):
        return [r for r in self._by_id.values() if r.user_id == user_id]

    def replace_drafts_for_period(self, period: str, drafts):
        for pid in [pid for pid, r in self._by_id.items() if r.period == period and r.status == PayrollStatus.DRAFT]:
            del self._by_id[pid]
        finalized = {r.user_id for r in self._by_id.values() if r.period == period}
        created = [self.add(d) for d in drafts if d.user_id not in finalized]
        return created, [d.user_id for d in drafts if d.user_id in finalized]

    def mark_final(self, *, payroll_id: int, finalized_at: datetime) -> bool:
        r = self._by_id.get(payroll_id)
        if not r or r.status != PayrollStatus.DRAFT:
            return False
        self._by_id[payroll_id] = replace(r, status=PayrollStatus.FINAL, finalized_at=finalized_at)
        return True


@dataclass
class InMemoryConfigs:
    values: dict[str, str] = field(default_factory=dict)

    def get_all(self):
        return dict(self.values)

    def list_entries(self):
        return [ConfigEntry(key=k, value=v) for k, v in sorted(self.values.items())]

    def upsert(self, *, key: str, value: str, description: Optional[str] = None) -> None:
        self.values[key] = value


class InMemoryActivityLogs:
    def __init__(self, *, fail: bool = False):
        self.entries: list[ActivityLogEntry] = []
        self.fail = fail

    def append(self, *, user_id, activity_type, description, metadata) -> int:
        if self.fail:
            raise RuntimeError("activity_logs table is gone")
        entry = ActivityLogEntry(
            log_id=len(self.entries) + 1,
            user_id=user_id,
            activity_type=activity_type,
            description=description,
            metadata=metadata,
        )
        self.entries.append(entry)
        return entry.log_id

    def list_recent(self, limit: int):
        return list(reversed(self.entries))[:limit]


def local(y, mo, d, h=0, mi=0, s=0) -> datetime:
    return datetime(y, mo, d, h, mi, s, tzinfo=JAKARTA)


@pytest.fixture
def fixed_now() -> datetime:
    return local(2025, 1, 6, 8, 15)


@pytest.fixture
def users() -> InMemoryUsers:
    return InMemoryUsers(
        {
            1: Employee(user_id=1, name="Budi", role=Role.EMPLOYEE, position_id=10),
            2: Employee(user_id=2, name="Sari", role=Role.EMPLOYEE, position_id=10),
            3: Employee(user_id=3, name="Admin", role=Role.ADMIN, position_id=10),
            4: Employee(user_id=4, name="Old", role=Role.EMPLOYEE, position_id=10, status=EmploymentStatus.INACTIVE),
        }
    )


@pytest.fixture
def positions() -> InMemoryPositions:
    return InMemoryPositions({10: Position(position_id=10, title="Staff", hourly_rate=60000)})


@pytest.fixture
def attendance_repo() -> InMemoryAttendance:
    return InMemoryAttendance()


@pytest.fixture
def payroll_repo() -> InMemoryPayrolls:
    return InMemoryPayrolls()


@pytest.fixture
def config_repo() -> InMemoryConfigs:
    return InMemoryConfigs({"timezone": "Asia/Jakarta"})


@pytest.fixture
def activity_repo() -> InMemoryActivityLogs:
    return InMemoryActivityLogs()


@pytest.fixture
def container(users, positions, attendance_repo, payroll_repo, config_repo, activity_repo):
    return wire(
        users_repo=users,
        positions_repo=positions,
        attendance_repo=attendance_repo,
        payroll_repo=payroll_repo,
        config_repo=config_repo,
        activity_repo=activity_repo,
    )


@pytest.fixture
def snapshot(container):
    return container.config_service.load_snapshot()


@pytest.fixture
def approved_day():
    """Build an approved, complete attendance row."""

    def _make(attendance_id, user_id, day: date, *, worked=480, late=0, overtime=0, **kw):
        return AttendanceRecord(
            attendance_id=attendance_id,
            user_id=user_id,
            work_date=day,
            clock_in=local(day.year, day.month, day.day, 8, 0),
            clock_out=local(day.year, day.month, day.day, 17, 0),
            status=AttendanceStatus.PRESENT,
            approval_status=kw.pop("approval_status", ApprovalStatus.APPROVED),
            late_minutes=late,
            overtime_minutes=overtime,
            worked_minutes=worked,
            **kw,
        )

    return _make
