from __future__ import annotations

from dataclasses import dataclass

from .strategies.base import ClockInStrategy, ClockOutStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.overtime_strategy import OvertimeStrategy
from .strategies.present_strategy import PresentStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy from the classified minutes."""

    def for_clock_in(self, *, late_minutes: int) -> ClockInStrategy:
        if late_minutes > 0:
            return LateStrategy()
        return PresentStrategy()

    def for_clock_out(self, *, overtime_minutes: int) -> ClockOutStrategy:
        if overtime_minutes > 0:
            return OvertimeStrategy()
        return PresentStrategy()
