from __future__ import annotations

import logging
from datetime import time
from decimal import Decimal, InvalidOperation
from typing import Callable, Mapping, Optional, Sequence, TypeVar
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..common.datetime_utils import parse_hhmm
from ..core.constants import CONFIG_DEFAULTS
from ..core.exceptions import ValidationError
from ..geo.geofence import GeoPoint
from .model import ConfigEntry, PayrollConfig
from .repository import ConfigRepository

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ConfigReader:
    """Typed accessors over the raw key/value map.

    Missing or empty keys use CONFIG_DEFAULTS; values that fail to parse are
    logged and replaced by the default as well.
    """

    def __init__(self, values: Mapping[str, str]):
        self._values = values

    def _get(self, key: str, parse: Callable[[str], T]) -> T:
        raw = self._values.get(key)
        if raw is not None and str(raw).strip() != "":
            try:
                return parse(str(raw).strip())
            except (ValueError, InvalidOperation, ZoneInfoNotFoundError):
                logger.warning("Config %s=%r is not valid, using default %r", key, raw, CONFIG_DEFAULTS[key])
        return parse(CONFIG_DEFAULTS[key])

    def get_float(self, key: str) -> float:
        return self._get(key, float)

    def get_int(self, key: str) -> int:
        return self._get(key, int)

    def get_decimal(self, key: str) -> Decimal:
        def _dec(v: str) -> Decimal:
            d = Decimal(v)
            if not d.is_finite():
                raise InvalidOperation(v)
            return d

        return self._get(key, _dec)

    def get_time(self, key: str) -> time:
        return self._get(key, parse_hhmm)

    def get_zone(self, key: str) -> ZoneInfo:
        return self._get(key, ZoneInfo)

    def snapshot(self) -> PayrollConfig:
        return PayrollConfig(
            office=GeoPoint(lat=self.get_float("officeLat"), lng=self.get_float("officeLng")),
            geofence_radius_meters=self.get_float("geofenceRadius"),
            work_start=self.get_time("work_start_time"),
            work_end=self.get_time("work_end_time"),
            late_tolerance_minutes=max(self.get_int("late_tolerance_minutes"), 0),
            break_duration_minutes=max(self.get_int("break_duration_minutes"), 0),
            overtime_rate_first_hour=self.get_decimal("overtime_rate_first_hour"),
            overtime_rate_next_hours=self.get_decimal("overtime_rate_next_hours"),
            late_penalty_per_minute=self.get_int("late_penalty_per_minute"),
            bpjs_health_rate=self.get_decimal("bpjs_kesehatan_rate"),
            bpjs_labor_rate=self.get_decimal("bpjs_ketenagakerjaan_rate"),
            pph21_rate=self.get_decimal("pph21_rate"),
            timezone=self.get_zone("timezone"),
        )


class ConfigService:
    def __init__(self, configs: ConfigRepository):
        self._configs = configs

    def load_snapshot(self) -> PayrollConfig:
        """Read the config table once and freeze it for one operation."""
        return ConfigReader(dict(self._configs.get_all())).snapshot()

    def list_entries(self) -> Sequence[ConfigEntry]:
        return self._configs.list_entries()

    def set_value(self, key: str, value: str, *, description: Optional[str] = None) -> None:
        key = (key or "").strip()
        if key not in CONFIG_DEFAULTS:
            raise ValidationError(f"Unknown config key: {key!r}")
        self._configs.upsert(key=key, value=str(value).strip(), description=description)
        logger.info("Config %s updated", key)
