from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.validators import optional_coordinate, require_positive_int
from ..core.enums import ApprovalStatus
from ..core.exceptions import ValidationError
from ..container import Container
from .model import AttendanceRecord


def attendance_to_json(r: AttendanceRecord) -> dict:
    return {
        "id": r.attendance_id,
        "userId": r.user_id,
        "date": r.work_date.isoformat(),
        "clockIn": r.clock_in.isoformat() if r.clock_in else None,
        "clockOut": r.clock_out.isoformat() if r.clock_out else None,
        "clockInLat": r.clock_in_lat,
        "clockInLng": r.clock_in_lng,
        "clockOutLat": r.clock_out_lat,
        "clockOutLng": r.clock_out_lng,
        "clockInPhoto": r.clock_in_photo,
        "clockOutPhoto": r.clock_out_photo,
        "status": r.status.value,
        "approvalStatus": r.approval_status.value,
        "isWithinGeofenceIn": r.is_within_geofence_in,
        "isWithinGeofenceOut": r.is_within_geofence_out,
        "lateMinutes": r.late_minutes,
        "overtimeMinutes": r.overtime_minutes,
        "workedMinutes": r.worked_minutes,
        "notes": r.notes,
    }


def register(app: Flask, container: Container) -> None:
    def _clock_payload() -> tuple[int, float | None, float | None, str | None]:
        data = request.get_json(silent=True) or {}
        user_id = require_positive_int(data.get("userId"), "userId")
        return user_id, optional_coordinate(data.get("lat")), optional_coordinate(data.get("lng")), data.get("photo")

    @app.route("/api/attendance/clock-in", methods=["POST"], endpoint="api_clock_in")
    def api_clock_in():
        user_id, lat, lng, photo = _clock_payload()
        record = container.attendance_recorder.clock_in(user_id, lat, lng, photo)
        return jsonify(attendance_to_json(record)), 201

    @app.route("/api/attendance/clock-out", methods=["POST"], endpoint="api_clock_out")
    def api_clock_out():
        user_id, lat, lng, photo = _clock_payload()
        record = container.attendance_recorder.clock_out(user_id, lat, lng, photo)
        return jsonify(attendance_to_json(record)), 200

    @app.route("/api/attendance", methods=["GET"], endpoint="api_attendance_list")
    def api_attendance_list():
        user_id = require_positive_int(request.args.get("userId"), "userId")
        period = request.args.get("period") or ""
        records = container.attendance_recorder.list_for_period(user_id, period)
        return jsonify([attendance_to_json(r) for r in records]), 200

    @app.route("/api/attendance/<int:attendance_id>/approval", methods=["POST"], endpoint="api_attendance_approval")
    def api_attendance_approval(attendance_id: int):
        data = request.get_json(silent=True) or {}
        try:
            decision = ApprovalStatus(str(data.get("status", "")).strip().lower())
        except ValueError:
            raise ValidationError("Status must be 'approved' or 'rejected'")
        record = container.attendance_approval.decide(attendance_id, decision)
        return jsonify(attendance_to_json(record)), 200
