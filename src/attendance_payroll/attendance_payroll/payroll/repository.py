from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import PayrollRecord


class PayrollRepository(Protocol):
    def get_by_id(self, payroll_id: int) -> Optional[PayrollRecord]:
        raise NotImplementedError

    def list_for_period(self, period: str) -> Sequence[PayrollRecord]:
        raise NotImplementedError

    def list_for_user(self, user_id: int) -> Sequence[PayrollRecord]:
        raise NotImplementedError

    def replace_drafts_for_period(
        self, period: str, drafts: Sequence[PayrollRecord]
    ) -> tuple[list[PayrollRecord], list[int]]:
        """Delete the period's draft rows and insert `drafts` atomically.

        Final rows are never touched: a draft whose employee already has a
        final row for the period, as seen inside the same transaction, is not
        inserted. Returns (created drafts, user ids skipped for that reason).
        Readers must see either the old or the new set of drafts, never both.
        """

        raise NotImplementedError

    def mark_final(self, *, payroll_id: int, finalized_at: datetime) -> bool:
        raise NotImplementedError
