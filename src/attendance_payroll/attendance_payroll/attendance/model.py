from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import ApprovalStatus, AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance row per (employee, local calendar date).

    `late_minutes`, `overtime_minutes` and `worked_minutes` are derived at
    clock time; None means "not computed yet" and is recomputed on demand.
    """

    attendance_id: int
    user_id: int
    work_date: date
    clock_in: Optional[datetime]
    clock_out: Optional[datetime]
    status: AttendanceStatus
    approval_status: ApprovalStatus = ApprovalStatus.PENDING
    clock_in_lat: Optional[float] = None
    clock_in_lng: Optional[float] = None
    clock_out_lat: Optional[float] = None
    clock_out_lng: Optional[float] = None
    clock_in_photo: Optional[str] = None
    clock_out_photo: Optional[str] = None
    is_within_geofence_in: bool = False
    is_within_geofence_out: bool = False
    late_minutes: Optional[int] = 0
    overtime_minutes: Optional[int] = 0
    worked_minutes: Optional[int] = None
    notes: Optional[str] = None

    @property
    def is_complete(self) -> bool:
        return self.clock_in is not None and self.clock_out is not None

    @property
    def is_payable(self) -> bool:
        """Only approved rows with both clock events feed payroll."""
        return self.approval_status == ApprovalStatus.APPROVED and self.is_complete
