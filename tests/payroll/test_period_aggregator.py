from dataclasses import replace
from datetime import date, datetime
from zoneinfo import ZoneInfo

from src.attendance_payroll.attendance_payroll.core.enums import ApprovalStatus
from src.attendance_payroll.attendance_payroll.payroll.aggregator import PeriodAggregator


def test_sums_only_approved_complete_days_in_period(attendance_repo, approved_day, snapshot):
    attendance_repo.add(approved_day(1, 1, date(2025, 1, 6), worked=480, late=5, overtime=30))
    attendance_repo.add(approved_day(2, 1, date(2025, 1, 7), worked=525, late=15, overtime=120))
    attendance_repo.add(approved_day(3, 1, date(2025, 1, 8), approval_status=ApprovalStatus.PENDING))
    attendance_repo.add(approved_day(4, 1, date(2025, 1, 9), approval_status=ApprovalStatus.REJECTED))
    attendance_repo.add(replace(approved_day(5, 1, date(2025, 1, 10)), clock_out=None))
    attendance_repo.add(approved_day(6, 1, date(2025, 2, 3)))
    attendance_repo.add(approved_day(7, 2, date(2025, 1, 6)))

    total = PeriodAggregator(attendance_repo).aggregate(1, "2025-01", snapshot)

    assert total.total_worked_minutes == 1005
    assert total.total_late_minutes == 20
    assert total.total_overtime_minutes == 150
    assert total.days == 2


def test_no_eligible_days_gives_zeros(attendance_repo, snapshot):
    total = PeriodAggregator(attendance_repo).aggregate(1, "2025-01", snapshot)

    assert (total.total_worked_minutes, total.total_late_minutes, total.total_overtime_minutes) == (0, 0, 0)


def test_missing_derived_minutes_are_recomputed(attendance_repo, approved_day, snapshot):
    # 08:00-17:00 local: 540 raw minutes minus break, one hour past 16:00
    attendance_repo.add(approved_day(1, 1, date(2025, 1, 6), worked=None, late=None, overtime=None))

    total = PeriodAggregator(attendance_repo).aggregate(1, "2025-01", snapshot)

    assert total.total_worked_minutes == 480
    assert total.total_late_minutes == 0
    assert total.total_overtime_minutes == 60


def test_stored_and_recomputed_paths_agree(container, attendance_repo, snapshot):
    tz = ZoneInfo("Asia/Jakarta")
    recorder = container.attendance_recorder
    recorder.clock_in(1, None, None, now=datetime(2025, 1, 6, 8, 15, tzinfo=tz))
    stored = recorder.clock_out(1, None, None, now=datetime(2025, 1, 6, 18, 0, tzinfo=tz))
    attendance_repo.set_approval_status(attendance_id=stored.attendance_id, approval_status=ApprovalStatus.APPROVED)

    from_stored = PeriodAggregator(attendance_repo).aggregate(1, "2025-01", snapshot)

    attendance_repo.add(
        replace(
            attendance_repo.get_by_id(stored.attendance_id),
            worked_minutes=None,
            late_minutes=None,
            overtime_minutes=None,
        )
    )
    recomputed = PeriodAggregator(attendance_repo).aggregate(1, "2025-01", snapshot)

    assert from_stored == recomputed
    assert from_stored.total_worked_minutes == 525
