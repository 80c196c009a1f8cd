from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Position:
    position_id: int
    title: str
    hourly_rate: int
