from __future__ import annotations

from ...core.enums import AttendanceStatus
from .base import ClockInStrategy, ClockOutStrategy, StatusDecision


class PresentStrategy(ClockInStrategy, ClockOutStrategy):
    """On-time clock-in, clock-out within the workday."""

    def decide_clock_in(self, *, late_minutes: int) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.PRESENT)

    def decide_clock_out(self, *, current: AttendanceStatus, overtime_minutes: int) -> StatusDecision:
        return StatusDecision(status=current)
