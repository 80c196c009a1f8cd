from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from ..activity.service import ActivityLogger
from ..common.datetime_utils import now_local, parse_period, to_local
from ..core.enums import ActivityType, ApprovalStatus
from ..core.exceptions import AlreadyClockedOut, DuplicateClockIn, NoOpenClockIn, NotFound, ValidationError
from ..geo.geofence import GeoPoint, is_within_geofence
from ..settings.service import ConfigService
from ..users.repository import UserRepository
from .classifier import TimeWindowClassifier
from .factory import AttendanceStrategyFactory
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


def _join_notes(*parts: Optional[str]) -> Optional[str]:
    notes = [p for p in parts if p]
    return "; ".join(notes) if notes else None


class AttendanceRecorder:
    """Use case: a single clock-in or clock-out.

    Per (employee, local date) the record moves NoRecord -> ClockedIn -> ClockedOut.
    The config snapshot is read once at the start of each call.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        users: UserRepository,
        configs: ConfigService,
        activity: ActivityLogger,
        *,
        strategy_factory: AttendanceStrategyFactory | None = None,
    ):
        self._attendance = attendance
        self._users = users
        self._configs = configs
        self._activity = activity
        self._factory = strategy_factory or AttendanceStrategyFactory()

    def _require_employee(self, user_id: int) -> None:
        if not self._users.get_by_id(user_id):
            raise NotFound(f"Employee {user_id} does not exist")

    def clock_in(
        self,
        user_id: int,
        lat: Optional[float],
        lng: Optional[float],
        photo: Optional[str] = None,
        *,
        now: datetime | None = None,
    ) -> AttendanceRecord:
        config = self._configs.load_snapshot()
        now = to_local(now or now_local(config.timezone), config.timezone)
        today = now.date()

        self._require_employee(user_id)
        if self._attendance.get_for_user_and_date(user_id, today):
            logger.info("Rejected duplicate clock-in for user %s on %s", user_id, today)
            raise DuplicateClockIn("Already clocked in today")

        within = is_within_geofence(GeoPoint.of(lat, lng), config.office, config.geofence_radius_meters)
        late_minutes = TimeWindowClassifier.from_config(config).late_minutes(today, now)
        decision = self._factory.for_clock_in(late_minutes=late_minutes).decide_clock_in(late_minutes=late_minutes)

        # A concurrent clock-in that slipped past the check above is rejected by the storage key.
        attendance_id = self._attendance.create_clock_in(
            user_id=user_id,
            work_date=today,
            clock_in=now,
            lat=lat,
            lng=lng,
            photo=photo,
            status=decision.status,
            is_within_geofence=within,
            late_minutes=late_minutes,
            notes=decision.note,
        )

        self._activity.record(
            user_id=user_id,
            activity_type=ActivityType.CLOCK_IN,
            description="Clock In",
            metadata={"status": decision.status.value, "isWithinGeofence": within, "lateMinutes": late_minutes},
        )
        logger.info("User %s clocked in at %s (%s, geofence=%s)", user_id, now.isoformat(), decision.status.value, within)
        return self._get(attendance_id)

    def clock_out(
        self,
        user_id: int,
        lat: Optional[float],
        lng: Optional[float],
        photo: Optional[str] = None,
        *,
        now: datetime | None = None,
    ) -> AttendanceRecord:
        config = self._configs.load_snapshot()
        now = to_local(now or now_local(config.timezone), config.timezone)
        today = now.date()

        record = self._attendance.get_for_user_and_date(user_id, today)
        if not record or record.clock_in is None:
            raise NoOpenClockIn("No clock in record found for today")
        if record.clock_out is not None:
            raise AlreadyClockedOut("Already clocked out today")

        within = is_within_geofence(GeoPoint.of(lat, lng), config.office, config.geofence_radius_meters)
        classifier = TimeWindowClassifier.from_config(config)
        overtime_minutes = classifier.overtime_minutes(record.work_date, now)
        worked_minutes = classifier.worked_minutes(record.clock_in, now)
        decision = self._factory.for_clock_out(overtime_minutes=overtime_minutes).decide_clock_out(
            current=record.status, overtime_minutes=overtime_minutes
        )

        ok = self._attendance.update_clock_out(
            attendance_id=record.attendance_id,
            clock_out=now,
            lat=lat,
            lng=lng,
            photo=photo,
            status=decision.status,
            is_within_geofence=within,
            overtime_minutes=overtime_minutes,
            worked_minutes=worked_minutes,
            notes=_join_notes(record.notes, decision.note),
        )
        if not ok:
            raise AlreadyClockedOut("Already clocked out today")

        self._activity.record(
            user_id=user_id,
            activity_type=ActivityType.CLOCK_OUT,
            description="Clock Out",
            metadata={"isWithinGeofence": within, "overtimeMinutes": overtime_minutes},
        )
        logger.info("User %s clocked out at %s (overtime=%s, geofence=%s)", user_id, now.isoformat(), overtime_minutes, within)
        return self._get(record.attendance_id)

    def list_for_period(self, user_id: int, period: str) -> Sequence[AttendanceRecord]:
        start, end = parse_period(period)
        return self._attendance.list_for_user_between(user_id, start, end)

    def _get(self, attendance_id: int) -> AttendanceRecord:
        record = self._attendance.get_by_id(attendance_id)
        if not record:
            raise NotFound(f"Attendance record {attendance_id} not found")
        return record


class AttendanceApprovalService:
    """HR/finance review of a day: pending -> approved | rejected.

    Re-applying the decision already recorded is a no-op.
    """

    _DECISIONS = {ApprovalStatus.APPROVED, ApprovalStatus.REJECTED}

    def __init__(self, attendance: AttendanceRepository):
        self._attendance = attendance

    def decide(self, attendance_id: int, decision: ApprovalStatus) -> AttendanceRecord:
        if decision not in self._DECISIONS:
            raise ValidationError("Status must be 'approved' or 'rejected'")

        record = self._attendance.get_by_id(attendance_id)
        if not record:
            raise NotFound(f"Attendance record {attendance_id} not found")
        if record.approval_status == decision:
            return record
        if record.approval_status != ApprovalStatus.PENDING:
            raise ValidationError(f"Attendance record already {record.approval_status.value}")

        self._attendance.set_approval_status(attendance_id=attendance_id, approval_status=decision)
        logger.info("Attendance %s %s", attendance_id, decision.value)
        return self._attendance.get_by_id(attendance_id) or record
