from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Any, Dict, Optional, Sequence

from ..core.enums import PayrollStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, from_db_datetime, to_db_datetime
from .model import PayrollRecord
from .repository import PayrollRepository

_COLUMNS = """
    id, user_id, period, basic_salary, overtime_pay, bonus,
    late_deduction, bpjs_deduction, pph21_deduction, other_deduction,
    total_net, status, generated_at, finalized_at
"""


def _to_record(r: Dict[str, Any]) -> PayrollRecord:
    return PayrollRecord(
        payroll_id=int(r["id"]),
        user_id=int(r["user_id"]),
        period=r["period"],
        basic_salary=int(r["basic_salary"]),
        overtime_pay=int(r["overtime_pay"]),
        bonus=int(r["bonus"]),
        late_deduction=int(r["late_deduction"]),
        bpjs_deduction=int(r["bpjs_deduction"]),
        pph21_deduction=int(r["pph21_deduction"]),
        other_deduction=int(r["other_deduction"]),
        total_net=int(r["total_net"]),
        status=PayrollStatus(r["status"]),
        generated_at=from_db_datetime(r.get("generated_at")),
        finalized_at=from_db_datetime(r.get("finalized_at")),
    )


class MySQLPayrollRepository(PayrollRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, payroll_id: int) -> Optional[PayrollRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM payroll WHERE id=%s", (int(payroll_id),))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def list_for_period(self, period: str) -> Sequence[PayrollRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM payroll WHERE period=%s ORDER BY user_id", (period,))
            return [_to_record(r) for r in fetchall(cur)]

    def list_for_user(self, user_id: int) -> Sequence[PayrollRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM payroll WHERE user_id=%s ORDER BY period DESC", (int(user_id),))
            return [_to_record(r) for r in fetchall(cur)]

    def replace_drafts_for_period(
        self, period: str, drafts: Sequence[PayrollRecord]
    ) -> tuple[list[PayrollRecord], list[int]]:
        # One connection, one commit: delete and inserts become visible together.
        created: list[PayrollRecord] = []
        skipped: list[int] = []
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM payroll WHERE period=%s AND status=%s",
                (period, PayrollStatus.DRAFT.value),
            )
            # Only final rows remain; lock them so a late finalize cannot collide with the inserts.
            cur.execute("SELECT user_id FROM payroll WHERE period=%s FOR UPDATE", (period,))
            finalized = {int(r["user_id"]) for r in fetchall(cur)}

            for d in drafts:
                if d.user_id in finalized:
                    skipped.append(d.user_id)
                    continue
                cur.execute(
                    """
                    INSERT INTO payroll(
                        user_id, period, basic_salary, overtime_pay, bonus,
                        late_deduction, bpjs_deduction, pph21_deduction, other_deduction,
                        total_net, status, generated_at
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        d.user_id,
                        period,
                        d.basic_salary,
                        d.overtime_pay,
                        d.bonus,
                        d.late_deduction,
                        d.bpjs_deduction,
                        d.pph21_deduction,
                        d.other_deduction,
                        d.total_net,
                        PayrollStatus.DRAFT.value,
                        to_db_datetime(d.generated_at),
                    ),
                )
                created.append(replace(d, payroll_id=int(cur.lastrowid), status=PayrollStatus.DRAFT))
        return created, skipped

    def mark_final(self, *, payroll_id: int, finalized_at: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE payroll SET status=%s, finalized_at=%s WHERE id=%s AND status=%s",
                (PayrollStatus.FINAL.value, to_db_datetime(finalized_at), int(payroll_id), PayrollStatus.DRAFT.value),
            )
            return cur.rowcount > 0
