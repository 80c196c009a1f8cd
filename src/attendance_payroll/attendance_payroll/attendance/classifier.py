from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone, tzinfo

from ..common.datetime_utils import at_local, to_local
from ..core.constants import FULL_DAY_THRESHOLD_MINUTES
from ..settings.model import PayrollConfig

_MINUTE = timedelta(minutes=1)


@dataclass(frozen=True)
class TimeClassification:
    late_minutes: int
    overtime_minutes: int
    worked_minutes: int


def _elapsed_minutes(later: datetime, earlier: datetime) -> int:
    # Subtract in UTC: same-tzinfo subtraction is wall-clock and ignores DST shifts.
    return (later.astimezone(timezone.utc) - earlier.astimezone(timezone.utc)) // _MINUTE


@dataclass(frozen=True)
class TimeWindowClassifier:
    """Lateness, overtime and worked time against a single daily window.

    All arithmetic happens in the organization time zone; the work date is
    the local calendar date of the attendance row.
    """

    start: time
    end: time
    late_tolerance_minutes: int
    break_duration_minutes: int
    tz: tzinfo

    @classmethod
    def from_config(cls, config: PayrollConfig) -> "TimeWindowClassifier":
        return cls(
            start=config.work_start,
            end=config.work_end,
            late_tolerance_minutes=config.late_tolerance_minutes,
            break_duration_minutes=config.break_duration_minutes,
            tz=config.timezone,
        )

    def local_date(self, moment: datetime) -> date:
        return to_local(moment, self.tz).date()

    def work_start(self, work_date: date) -> datetime:
        return at_local(work_date, self.start, self.tz)

    def work_end(self, work_date: date) -> datetime:
        return at_local(work_date, self.end, self.tz)

    def late_minutes(self, work_date: date, clock_in: datetime) -> int:
        # Tolerance only decides whether someone is late; minutes count from the nominal start.
        clock_in = to_local(clock_in, self.tz)
        start = self.work_start(work_date)
        if clock_in > start + timedelta(minutes=self.late_tolerance_minutes):
            return _elapsed_minutes(clock_in, start)
        return 0

    def overtime_minutes(self, work_date: date, clock_out: datetime) -> int:
        clock_out = to_local(clock_out, self.tz)
        end = self.work_end(work_date)
        if clock_out > end:
            return _elapsed_minutes(clock_out, end)
        return 0

    def worked_minutes(self, clock_in: datetime, clock_out: datetime) -> int:
        minutes = _elapsed_minutes(to_local(clock_out, self.tz), to_local(clock_in, self.tz))
        if minutes > FULL_DAY_THRESHOLD_MINUTES:
            minutes -= self.break_duration_minutes
        return max(minutes, 0)

    def classify(self, work_date: date, clock_in: datetime, clock_out: datetime) -> TimeClassification:
        return TimeClassification(
            late_minutes=self.late_minutes(work_date, clock_in),
            overtime_minutes=self.overtime_minutes(work_date, clock_out),
            worked_minutes=self.worked_minutes(clock_in, clock_out),
        )
