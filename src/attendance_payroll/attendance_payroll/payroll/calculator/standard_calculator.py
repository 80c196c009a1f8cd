from __future__ import annotations

from decimal import ROUND_FLOOR, Decimal

from ...core.enums import PayrollStatus
from ...settings.model import PayrollConfig
from ..model import AttendanceAggregate, PayrollRecord
from .base import PayrollCalculator


def _floor(value: Decimal) -> int:
    return int(value.to_integral_value(rounding=ROUND_FLOOR))


class StandardPayrollCalculator(PayrollCalculator):
    """Hourly pay with two-tier overtime over the period total.

    The first overtime hour of the whole period is paid at the first-hour
    rate and every minute after it at the next-hours rate (no per-day reset).
    """

    def basic_salary(self, worked_minutes: int, hourly_rate: int) -> int:
        return (worked_minutes * hourly_rate) // 60

    def overtime_pay(self, overtime_minutes: int, hourly_rate: int, config: PayrollConfig) -> int:
        if overtime_minutes <= 0:
            return 0
        first = min(overtime_minutes, 60)
        rest = max(0, overtime_minutes - 60)
        amount = (
            Decimal(first) * config.overtime_rate_first_hour * hourly_rate
            + Decimal(rest) * config.overtime_rate_next_hours * hourly_rate
        )
        return _floor(amount / 60)

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
        basic = self.basic_salary(aggregate.total_worked_minutes, int(hourly_rate))
        overtime = self.overtime_pay(aggregate.total_overtime_minutes, int(hourly_rate), config)

        late_deduction = aggregate.total_late_minutes * config.late_penalty_per_minute
        bpjs_deduction = _floor(Decimal(basic) * (config.bpjs_health_rate + config.bpjs_labor_rate))
        pph21_deduction = _floor(Decimal(basic) * config.pph21_rate)
        other_deduction = 0

        bonus = int(manual_bonus)
        # Not clamped: a negative net must reach the approver as-is.
        total_net = basic + overtime + bonus - (late_deduction + bpjs_deduction + pph21_deduction + other_deduction)

        return PayrollRecord(
            user_id=user_id,
            period=period,
            basic_salary=basic,
            overtime_pay=overtime,
            bonus=bonus,
            late_deduction=late_deduction,
            bpjs_deduction=bpjs_deduction,
            pph21_deduction=pph21_deduction,
            other_deduction=other_deduction,
            total_net=total_net,
            status=PayrollStatus.DRAFT,
        )
