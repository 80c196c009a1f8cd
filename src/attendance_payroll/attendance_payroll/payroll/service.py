from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Mapping, Optional, Sequence

from ..common.datetime_utils import now_local, parse_period
from ..core.enums import PayrollStatus
from ..core.exceptions import NotFound, ValidationError
from ..settings.service import ConfigService
from ..users.position_repository import PositionRepository
from ..users.repository import UserRepository
from .aggregator import PeriodAggregator
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import MISSING_POSITION, PayrollRecord, PayrollRun, RunWarning
from .repository import PayrollRepository

logger = logging.getLogger(__name__)


def _normalize_bonuses(manual_bonuses: Optional[Mapping]) -> dict[int, int]:
    out: dict[int, int] = {}
    for key, value in (manual_bonuses or {}).items():
        try:
            out[int(key)] = int(value)
        except (TypeError, ValueError):
            raise ValidationError(f"Invalid manual bonus for employee {key!r}: {value!r}")
    return out


class PayrollBatchRunner:
    """Use case: (re)generate the draft payroll of a period and finalize rows.

    Regeneration replaces every draft of the period; employees who already
    have a final record for it are skipped and reported, never overwritten.
    """

    def __init__(
        self,
        payrolls: PayrollRepository,
        users: UserRepository,
        positions: PositionRepository,
        configs: ConfigService,
        aggregator: PeriodAggregator,
        *,
        calculator: Optional[PayrollCalculator] = None,
    ):
        self._payrolls = payrolls
        self._users = users
        self._positions = positions
        self._configs = configs
        self._aggregator = aggregator
        self._calculator = calculator or StandardPayrollCalculator()

    def generate(
        self,
        period: str,
        manual_bonuses: Optional[Mapping] = None,
        *,
        now: datetime | None = None,
    ) -> PayrollRun:
        period = (period or "").strip()
        parse_period(period)
        bonuses = _normalize_bonuses(manual_bonuses)

        config = self._configs.load_snapshot()
        generated_at = now or now_local(config.timezone)

        finalized = {r.user_id for r in self._payrolls.list_for_period(period) if r.status == PayrollStatus.FINAL}
        rates = {p.position_id: p.hourly_rate for p in self._positions.list_all()}

        drafts: list[PayrollRecord] = []
        skipped: list[int] = []
        warnings: list[RunWarning] = []

        for emp in self._users.list_all():
            if not emp.is_payable:
                continue
            if emp.user_id in finalized:
                skipped.append(emp.user_id)
                continue

            hourly_rate = rates.get(emp.position_id) if emp.position_id is not None else None
            if hourly_rate is None:
                hourly_rate = 0
                warnings.append(
                    RunWarning(
                        user_id=emp.user_id,
                        code=MISSING_POSITION,
                        message=f"Employee {emp.user_id} has no resolvable position; hourly rate 0 used",
                    )
                )
                logger.warning("Payroll %s: employee %s has no position, paying rate 0", period, emp.user_id)

            aggregate = self._aggregator.aggregate(emp.user_id, period, config)
            draft = self._calculator.calculate(
                aggregate,
                hourly_rate,
                bonuses.get(emp.user_id, 0),
                config,
                user_id=emp.user_id,
                period=period,
            )
            if draft.is_negative_net:
                logger.warning("Payroll %s: employee %s has negative net pay %s", period, emp.user_id, draft.total_net)
            drafts.append(replace(draft, generated_at=generated_at))

        # The read above is only a shortcut; the repository re-checks final rows in its transaction.
        records, finalized_during_run = self._payrolls.replace_drafts_for_period(period, drafts)
        if finalized_during_run:
            logger.warning("Payroll %s: employees %s were finalized during the run", period, finalized_during_run)
            skipped = sorted(set(skipped) | set(finalized_during_run))
        if skipped:
            logger.info("Payroll %s: skipped finalized employees %s", period, skipped)
        logger.info("Generated payroll for %s employees (period=%s)", len(records), period)
        return PayrollRun(period=period, records=records, skipped_finalized=skipped, warnings=warnings)

    def finalize(self, payroll_id: int, *, now: datetime | None = None) -> PayrollRecord:
        record = self._payrolls.get_by_id(payroll_id)
        if not record:
            raise NotFound("Payroll record not found")
        if record.status == PayrollStatus.FINAL:
            return record

        finalized_at = now or now_local(self._configs.load_snapshot().timezone)
        self._payrolls.mark_final(payroll_id=payroll_id, finalized_at=finalized_at)
        logger.info("Payroll %s finalized (user=%s, period=%s)", payroll_id, record.user_id, record.period)

        # A concurrent finalize may have won the update; either way the row is final now.
        return self._payrolls.get_by_id(payroll_id) or replace(
            record, status=PayrollStatus.FINAL, finalized_at=finalized_at
        )

    def list_for_period(self, period: str) -> Sequence[PayrollRecord]:
        parse_period(period)
        return self._payrolls.list_for_period(period.strip())

    def list_for_user(self, user_id: int) -> Sequence[PayrollRecord]:
        return self._payrolls.list_for_user(user_id)

    def get(self, payroll_id: int) -> PayrollRecord:
        record = self._payrolls.get_by_id(payroll_id)
        if not record:
            raise NotFound("Payroll record not found")
        return record
