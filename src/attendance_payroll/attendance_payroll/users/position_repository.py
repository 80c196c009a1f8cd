from __future__ import annotations

from typing import Protocol, Sequence

from .position_model import Position


class PositionRepository(Protocol):
    def list_all(self) -> Sequence[Position]:
        raise NotImplementedError
