from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import ApprovalStatus, AttendanceStatus
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    """Attendance storage keyed by (user_id, work_date).

    Implementations must enforce uniqueness of that key themselves and raise
    DuplicateClockIn when an insert collides with an existing row.
    """

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_for_user_between(self, user_id: int, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def create_clock_in(
        self,
        *,
        user_id: int,
        work_date: date,
        clock_in: datetime,
        lat: Optional[float],
        lng: Optional[float],
        photo: Optional[str],
        status: AttendanceStatus,
        is_within_geofence: bool,
        late_minutes: int,
        notes: Optional[str] = None,
    ) -> int:
        raise NotImplementedError

    def update_clock_out(
        self,
        *,
        attendance_id: int,
        clock_out: datetime,
        lat: Optional[float],
        lng: Optional[float],
        photo: Optional[str],
        status: AttendanceStatus,
        is_within_geofence: bool,
        overtime_minutes: int,
        worked_minutes: int,
        notes: Optional[str] = None,
    ) -> bool:
        """Set the clock-out once; returns False if it was already set."""

        raise NotImplementedError

    def set_approval_status(self, *, attendance_id: int, approval_status: ApprovalStatus) -> bool:
        raise NotImplementedError
