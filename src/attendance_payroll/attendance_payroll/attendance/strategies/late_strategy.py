from __future__ import annotations

from ...core.enums import AttendanceStatus
from .base import ClockInStrategy, StatusDecision


class LateStrategy(ClockInStrategy):
    """Late clock-in."""

    def decide_clock_in(self, *, late_minutes: int) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.LATE, note=f"Late {late_minutes} min")
