from __future__ import annotations

from typing import Mapping, Optional, Protocol, Sequence

from .model import ConfigEntry


class ConfigRepository(Protocol):
    def get_all(self) -> Mapping[str, str]:
        raise NotImplementedError

    def list_entries(self) -> Sequence[ConfigEntry]:
        raise NotImplementedError

    def upsert(self, *, key: str, value: str, description: Optional[str] = None) -> None:
        raise NotImplementedError
