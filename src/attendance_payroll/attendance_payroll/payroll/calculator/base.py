from __future__ import annotations

from abc import ABC, abstractmethod

from ...settings.model import PayrollConfig
from ..model import AttendanceAggregate, PayrollRecord


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def calculate(
        self,
        aggregate: AttendanceAggregate,
        hourly_rate: int,
        manual_bonus: int,
        config: PayrollConfig,
        *,
        user_id: int,
        period: str,
    ) -> PayrollRecord:
        raise NotImplementedError
