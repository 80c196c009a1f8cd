from __future__ import annotations

from dataclasses import dataclass
from math import atan2, cos, nan, radians, sin, sqrt
from typing import Optional

from ..core.constants import EARTH_RADIUS_METERS


@dataclass(frozen=True)
class GeoPoint:
    lat: float
    lng: float

    @classmethod
    def of(cls, lat: Optional[float], lng: Optional[float]) -> "GeoPoint":
        """Build a point; a missing coordinate becomes NaN."""
        return cls(lat=nan if lat is None else float(lat), lng=nan if lng is None else float(lng))


def distance_meters(a: GeoPoint, b: GeoPoint) -> float:
    """Great-circle distance (haversine, spherical earth).

    NaN or out-of-range input propagates NaN.
    """
    if not (-90.0 <= a.lat <= 90.0 and -90.0 <= b.lat <= 90.0):
        return nan
    if not (-180.0 <= a.lng <= 180.0 and -180.0 <= b.lng <= 180.0):
        return nan

    phi1, phi2 = radians(a.lat), radians(b.lat)
    dphi = radians(b.lat - a.lat)
    dlmb = radians(b.lng - a.lng)
    h = sin(dphi / 2) ** 2 + cos(phi1) * cos(phi2) * sin(dlmb / 2) ** 2
    # Rounding can push h just past 1 for near-antipodal points.
    h = min(1.0, max(0.0, h))
    return EARTH_RADIUS_METERS * 2 * atan2(sqrt(h), sqrt(1 - h))


def is_within_geofence(point: GeoPoint, office_center: GeoPoint, radius_meters: float) -> bool:
    # NaN compares False, so a bad fix is always outside.
    return distance_meters(point, office_center) <= radius_meters
