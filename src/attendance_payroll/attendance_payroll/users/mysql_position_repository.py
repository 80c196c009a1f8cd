from __future__ import annotations

from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .position_model import Position
from .position_repository import PositionRepository


class MySQLPositionRepository(PositionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Position]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, title, hourly_rate FROM positions ORDER BY id")
            return [
                Position(position_id=int(r["id"]), title=r["title"], hourly_rate=int(r["hourly_rate"] or 0))
                for r in fetchall(cur)
            ]
