from __future__ import annotations

from ..attendance.classifier import TimeWindowClassifier
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import parse_period
from ..settings.model import PayrollConfig
from .model import AttendanceAggregate


class PeriodAggregator:
    """Reduce a period of approved, complete attendance rows to minute totals.

    Stored derived minutes win; a missing value is recomputed with the same
    classifier the recorder uses at clock time, so both paths agree.
    """

    def __init__(self, attendance: AttendanceRepository):
        self._attendance = attendance

    def aggregate(self, user_id: int, period: str, config: PayrollConfig) -> AttendanceAggregate:
        start, end = parse_period(period)
        classifier = TimeWindowClassifier.from_config(config)

        worked = late = overtime = days = 0
        for r in self._attendance.list_for_user_between(user_id, start, end):
            if not (start <= r.work_date <= end) or not r.is_payable:
                continue

            days += 1
            if r.worked_minutes is not None:
                worked += r.worked_minutes
            else:
                worked += classifier.worked_minutes(r.clock_in, r.clock_out)

            if r.late_minutes is not None:
                late += r.late_minutes
            else:
                late += classifier.late_minutes(r.work_date, r.clock_in)

            if r.overtime_minutes is not None:
                overtime += r.overtime_minutes
            else:
                overtime += classifier.overtime_minutes(r.work_date, r.clock_out)

        return AttendanceAggregate(
            total_worked_minutes=worked,
            total_late_minutes=late,
            total_overtime_minutes=overtime,
            days=days,
        )
