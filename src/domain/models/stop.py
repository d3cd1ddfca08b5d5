from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from .geo import GeoPoint


@dataclass(frozen=True, slots=True)
class Stop:
    """Static catalog entry (GTFS stops.txt row).

    ``location`` is None when the row's coordinates could not be parsed.
    """

    id: str
    name: str
    location: GeoPoint | None
    location_type: str = ""
    parent_station: str = ""


# key is stop ID; adapters hand out read-only mappings.
StopCatalog = Mapping[str, Stop]
