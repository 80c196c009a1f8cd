from __future__ import annotations

from typing import Mapping, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import ConfigEntry
from .repository import ConfigRepository


class MySQLConfigRepository(ConfigRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_all(self) -> Mapping[str, str]:
        return {e.key: e.value for e in self.list_entries()}

    def list_entries(self) -> Sequence[ConfigEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT `key`, `value`, description FROM config ORDER BY `key`")
            rows = fetchall(cur)
            return [
                ConfigEntry(key=r["key"], value=r.get("value") or "", description=r.get("description"))
                for r in rows
            ]

    def upsert(self, *, key: str, value: str, description: Optional[str] = None) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO config(`key`, `value`, description)
                VALUES(%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    `value`=VALUES(`value`),
                    description=COALESCE(VALUES(description), description),
                    updated_at=CURRENT_TIMESTAMP
                """,
                (key, value, description),
            )
