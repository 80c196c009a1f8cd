from __future__ import annotations

import calendar
import re
from datetime import date, datetime, time, tzinfo
from typing import Optional

from ..core.constants import PERIOD_FORMAT
from ..core.exceptions import InvalidPeriod

_PERIOD_RE = re.compile(r"^\d{4}-\d{2}$")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_hhmm(value: str) -> time:
    return datetime.strptime(value.strip(), "%H:%M").time()


def parse_period(value: str) -> tuple[date, date]:
    """Return the first and last calendar day of a YYYY-MM period."""
    v = (value or "").strip()
    if not _PERIOD_RE.match(v):
        raise InvalidPeriod(f"Valid period (YYYY-MM) required, got {value!r}")
    try:
        first = datetime.strptime(v, PERIOD_FORMAT).date()
    except ValueError:
        raise InvalidPeriod(f"Valid period (YYYY-MM) required, got {value!r}")
    last_day = calendar.monthrange(first.year, first.month)[1]
    return first, first.replace(day=last_day)


def period_of(day: date) -> str:
    return day.strftime(PERIOD_FORMAT)


def to_local(value: datetime, tz: tzinfo) -> datetime:
    """Express a timestamp in the organization time zone.

    Naive datetimes are taken to be local wall-clock time already.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=tz)
    return value.astimezone(tz)


def at_local(day: date, moment: time, tz: tzinfo) -> datetime:
    return datetime.combine(day, moment, tzinfo=tz)


def now_local(tz: Optional[tzinfo] = None) -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(tz)
