from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import EmploymentStatus, Role


@dataclass(frozen=True)
class Employee:
    """Domain entity: User as seen by attendance/payroll.

    Note: The HR module owns the full record; only what the engine reads is mapped.
    """

    user_id: int
    name: str
    role: Role
    position_id: Optional[int]
    status: EmploymentStatus = EmploymentStatus.ACTIVE

    @property
    def is_payable(self) -> bool:
        return self.status == EmploymentStatus.ACTIVE and self.role != Role.ADMIN
