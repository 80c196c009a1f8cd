from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, from_db_datetime
from .model import ActivityLogEntry
from .repository import ActivityLogRepository


class MySQLActivityLogRepository(ActivityLogRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def append(
        self,
        *,
        user_id: int,
        activity_type: str,
        description: Optional[str],
        metadata: Optional[str],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO activity_logs(user_id, activity_type, description, metadata)
                VALUES(%s,%s,%s,%s)
                """,
                (int(user_id), activity_type, description, metadata),
            )
            return int(cur.lastrowid)

    def list_recent(self, limit: int) -> Sequence[ActivityLogEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, user_id, activity_type, description, metadata, created_at
                FROM activity_logs
                ORDER BY created_at DESC, id DESC
                LIMIT %s
                """,
                (int(limit),),
            )
            return [
                ActivityLogEntry(
                    log_id=int(r["id"]),
                    user_id=int(r["user_id"]),
                    activity_type=r["activity_type"],
                    description=r.get("description"),
                    metadata=r.get("metadata"),
                    created_at=from_db_datetime(r.get("created_at")),
                )
                for r in fetchall(cur)
            ]
