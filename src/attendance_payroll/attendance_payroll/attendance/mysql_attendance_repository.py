from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Optional, Sequence

import mysql.connector

from ..core.enums import ApprovalStatus, AttendanceStatus
from ..core.exceptions import DuplicateClockIn
from ..database.connection import DatabaseConnection
from ..database.mysql_base import (
    db_cursor,
    fetchall,
    fetchone,
    from_db_datetime,
    is_duplicate_key,
    to_db_datetime,
    to_optional_float,
    to_optional_int,
)
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = """
    id, user_id, `date`, clock_in, clock_out,
    clock_in_lat, clock_in_lng, clock_out_lat, clock_out_lng,
    clock_in_photo, clock_out_photo,
    status, approval_status, is_within_geofence_in, is_within_geofence_out,
    late_minutes, overtime_minutes, worked_minutes, notes
"""


def _to_record(r: Dict[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["id"]),
        user_id=int(r["user_id"]),
        work_date=r["date"],
        clock_in=from_db_datetime(r.get("clock_in")),
        clock_out=from_db_datetime(r.get("clock_out")),
        status=AttendanceStatus(r["status"]),
        approval_status=ApprovalStatus(r["approval_status"]),
        clock_in_lat=to_optional_float(r.get("clock_in_lat")),
        clock_in_lng=to_optional_float(r.get("clock_in_lng")),
        clock_out_lat=to_optional_float(r.get("clock_out_lat")),
        clock_out_lng=to_optional_float(r.get("clock_out_lng")),
        clock_in_photo=r.get("clock_in_photo"),
        clock_out_photo=r.get("clock_out_photo"),
        is_within_geofence_in=bool(r.get("is_within_geofence_in")),
        is_within_geofence_out=bool(r.get("is_within_geofence_out")),
        late_minutes=to_optional_int(r.get("late_minutes")),
        overtime_minutes=to_optional_int(r.get("overtime_minutes")),
        worked_minutes=to_optional_int(r.get("worked_minutes")),
        notes=r.get("notes"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance WHERE id=%s", (int(attendance_id),))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance WHERE user_id=%s AND `date`=%s",
                (int(user_id), work_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def list_for_user_between(self, user_id: int, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance
                WHERE user_id=%s AND `date` BETWEEN %s AND %s
                ORDER BY `date` ASC
                """,
                (int(user_id), start_date, end_date),
            )
            return [_to_record(r) for r in fetchall(cur)]

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
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance(
                        user_id, `date`, clock_in, clock_in_lat, clock_in_lng, clock_in_photo,
                        status, approval_status, is_within_geofence_in, late_minutes, notes
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        int(user_id),
                        work_date,
                        to_db_datetime(clock_in),
                        lat,
                        lng,
                        photo,
                        status.value,
                        ApprovalStatus.PENDING.value,
                        bool(is_within_geofence),
                        int(late_minutes),
                        notes,
                    ),
                )
                return int(cur.lastrowid)
        except mysql.connector.IntegrityError as e:
            if is_duplicate_key(e):
                raise DuplicateClockIn("Already clocked in today") from e
            raise

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance
                SET clock_out=%s, clock_out_lat=%s, clock_out_lng=%s, clock_out_photo=%s,
                    status=%s, is_within_geofence_out=%s,
                    overtime_minutes=%s, worked_minutes=%s, notes=%s
                WHERE id=%s AND clock_out IS NULL
                """,
                (
                    to_db_datetime(clock_out),
                    lat,
                    lng,
                    photo,
                    status.value,
                    bool(is_within_geofence),
                    int(overtime_minutes),
                    int(worked_minutes),
                    notes,
                    int(attendance_id),
                ),
            )
            return cur.rowcount > 0

    def set_approval_status(self, *, attendance_id: int, approval_status: ApprovalStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE attendance SET approval_status=%s WHERE id=%s",
                (approval_status.value, int(attendance_id)),
            )
            return cur.rowcount > 0
