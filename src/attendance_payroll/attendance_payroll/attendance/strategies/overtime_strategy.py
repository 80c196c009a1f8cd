from __future__ import annotations

from ...core.enums import AttendanceStatus
from .base import ClockOutStrategy, StatusDecision


class OvertimeStrategy(ClockOutStrategy):
    """Clock-out after the workday end; the day status is kept."""

    def decide_clock_out(self, *, current: AttendanceStatus, overtime_minutes: int) -> StatusDecision:
        return StatusDecision(status=current, note=f"Overtime {overtime_minutes} min")
