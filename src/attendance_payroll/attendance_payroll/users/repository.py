from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Employee


class UserRepository(Protocol):
    """Repository interface for employees.

    Note (DIP): services depend on this interface, never on a concrete DB.
    """

    def get_by_id(self, user_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Employee]:
        raise NotImplementedError
