from __future__ import annotations

import json
import logging
from typing import Any, Mapping, Optional

from ..core.enums import ActivityType
from .repository import ActivityLogRepository

logger = logging.getLogger(__name__)


class ActivityLogger:
    """Fire-and-forget activity sink.

    A failing append is logged and dropped; it never fails the caller's operation.
    """

    def __init__(self, logs: ActivityLogRepository):
        self._logs = logs

    def record(
        self,
        *,
        user_id: int,
        activity_type: ActivityType,
        description: Optional[str] = None,
        metadata: Optional[Mapping[str, Any]] = None,
    ) -> None:
        try:
            self._logs.append(
                user_id=int(user_id),
                activity_type=activity_type.value,
                description=description,
                metadata=json.dumps(dict(metadata), default=str) if metadata else None,
            )
        except Exception:
            logger.exception("Failed to write %s activity for user %s", activity_type.value, user_id)

    def recent(self, limit: int = 50):
        return self._logs.list_recent(int(limit))
