from __future__ import annotations

from dataclasses import dataclass
from datetime import time, tzinfo
from decimal import Decimal

from ..geo.geofence import GeoPoint


@dataclass(frozen=True)
class PayrollConfig:
    """Immutable snapshot of the business configuration.

    Taken once at the start of a clock event or a payroll run and passed
    explicitly to every calculation of that operation.
    """

    office: GeoPoint
    geofence_radius_meters: float
    work_start: time
    work_end: time
    late_tolerance_minutes: int
    break_duration_minutes: int
    overtime_rate_first_hour: Decimal
    overtime_rate_next_hours: Decimal
    late_penalty_per_minute: int
    bpjs_health_rate: Decimal
    bpjs_labor_rate: Decimal
    pph21_rate: Decimal
    timezone: tzinfo


@dataclass(frozen=True)
class ConfigEntry:
    key: str
    value: str
    description: str | None = None
