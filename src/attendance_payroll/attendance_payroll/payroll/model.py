from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..core.enums import PayrollStatus

MISSING_POSITION = "MissingPosition"


@dataclass(frozen=True)
class AttendanceAggregate:
    """Minutes summed over an employee's payable days of one period."""

    total_worked_minutes: int = 0
    total_late_minutes: int = 0
    total_overtime_minutes: int = 0
    days: int = 0


@dataclass(frozen=True)
class PayrollRecord:
    """One payslip row per (employee, period); all amounts are integer currency units."""

    user_id: int
    period: str
    basic_salary: int
    overtime_pay: int
    bonus: int
    late_deduction: int
    bpjs_deduction: int
    pph21_deduction: int
    other_deduction: int
    total_net: int
    status: PayrollStatus = PayrollStatus.DRAFT
    payroll_id: Optional[int] = None
    generated_at: Optional[datetime] = None
    finalized_at: Optional[datetime] = None

    @property
    def total_deductions(self) -> int:
        return self.late_deduction + self.bpjs_deduction + self.pph21_deduction + self.other_deduction

    @property
    def is_negative_net(self) -> bool:
        return self.total_net < 0

    def computed_fields(self) -> tuple[int, ...]:
        """Amounts only, for comparing two generations of the same period."""
        return (
            self.user_id,
            self.basic_salary,
            self.overtime_pay,
            self.bonus,
            self.late_deduction,
            self.bpjs_deduction,
            self.pph21_deduction,
            self.other_deduction,
            self.total_net,
        )


@dataclass(frozen=True)
class RunWarning:
    user_id: int
    code: str
    message: str


@dataclass(frozen=True)
class PayrollRun:
    period: str
    records: list[PayrollRecord] = field(default_factory=list)
    skipped_finalized: list[int] = field(default_factory=list)
    warnings: list[RunWarning] = field(default_factory=list)
