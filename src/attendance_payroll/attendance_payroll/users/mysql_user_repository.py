from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..core.enums import EmploymentStatus, Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, to_optional_int
from .model import Employee
from .repository import UserRepository


def _to_employee(r: Dict[str, Any]) -> Employee:
    return Employee(
        user_id=int(r["id"]),
        name=r["name"],
        role=Role(r["role"]),
        position_id=to_optional_int(r.get("position_id")),
        status=EmploymentStatus(r.get("status") or EmploymentStatus.ACTIVE.value),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT id, name, role, position_id, status FROM users WHERE id=%s",
                (int(user_id),),
            )
            r = fetchone(cur)
            return _to_employee(r) if r else None

    def list_all(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, name, role, position_id, status FROM users ORDER BY id")
            return [_to_employee(r) for r in fetchall(cur)]
