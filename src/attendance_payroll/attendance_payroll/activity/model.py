from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class ActivityLogEntry:
    log_id: int
    user_id: int
    activity_type: str
    description: Optional[str]
    metadata: Optional[str]
    created_at: Optional[datetime] = None
