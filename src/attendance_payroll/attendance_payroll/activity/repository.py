from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import ActivityLogEntry


class ActivityLogRepository(Protocol):
    def append(
        self,
        *,
        user_id: int,
        activity_type: str,
        description: Optional[str],
        metadata: Optional[str],
    ) -> int:
        raise NotImplementedError

    def list_recent(self, limit: int) -> Sequence[ActivityLogEntry]:
        raise NotImplementedError
