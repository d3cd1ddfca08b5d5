from __future__ import annotations

import math
from types import MappingProxyType

from src.domain.models import GeoPoint, Stop, StopCatalog

# One mile, rounded.
DEFAULT_RADIUS_M = 1610.0


def haversine_distance_m(a: GeoPoint, b: GeoPoint) -> float:
    """Great-circle distance in meters."""

    r = 6371000.0
    lat1 = math.radians(a.lat)
    lon1 = math.radians(a.lon)
    lat2 = math.radians(b.lat)
    lon2 = math.radians(b.lon)

    dlat = lat2 - lat1
    dlon = lon2 - lon1

    s = (
        math.sin(dlat / 2.0) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2.0) ** 2
    )
    return 2.0 * r * math.asin(math.sqrt(min(1.0, s)))


def is_near(stop: Stop, point: GeoPoint, radius_m: float = DEFAULT_RADIUS_M) -> bool:
    """True if the stop lies within ``radius_m`` of ``point``.

    Stops without usable coordinates are never near anything.
    """

    if stop.location is None:
        return False
    try:
        distance_m = haversine_distance_m(stop.location, point)
    except ValueError:
        return False
    if not math.isfinite(distance_m):
        return False
    return distance_m <= radius_m


def filter_near(
    catalog: StopCatalog, point: GeoPoint, radius_m: float = DEFAULT_RADIUS_M
) -> StopCatalog:
    return MappingProxyType(
        {
            stop_id: stop
            for stop_id, stop in catalog.items()
            if is_near(stop, point, radius_m)
        }
    )
