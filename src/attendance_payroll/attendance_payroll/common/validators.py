from __future__ import annotations

import math
from typing import Any, Optional

from ..core.exceptions import ValidationError


def require_positive_int(value: Any, field_name: str) -> int:
    try:
        out = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer")
    if out <= 0:
        raise ValidationError(f"{field_name} must be positive")
    return out


def optional_coordinate(value: Any) -> Optional[float]:
    """Parse a latitude/longitude coming from a client.

    Missing or garbage values become None; the geofence treats them as outside.
    """
    if value is None or value == "":
        return None
    try:
        out = float(value)
    except (TypeError, ValueError):
        return None
    return out if math.isfinite(out) else None
