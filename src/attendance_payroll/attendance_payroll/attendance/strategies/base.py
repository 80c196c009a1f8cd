from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from ...core.enums import AttendanceStatus


@dataclass(frozen=True)
class StatusDecision:
    status: AttendanceStatus
    note: Optional[str] = None


class ClockInStrategy(ABC):
    """Strategy Pattern: decide the day status when the employee clocks in."""

    @abstractmethod
    def decide_clock_in(self, *, late_minutes: int) -> StatusDecision:
        raise NotImplementedError


class ClockOutStrategy(ABC):
    """Strategy Pattern: decide the day status when the employee clocks out."""

    @abstractmethod
    def decide_clock_out(self, *, current: AttendanceStatus, overtime_minutes: int) -> StatusDecision:
        raise NotImplementedError
