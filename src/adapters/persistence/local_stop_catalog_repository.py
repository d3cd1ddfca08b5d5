from __future__ import annotations

import csv
import logging
import math
import os
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

from src.adapters.config import DEFAULT_GTFS_PATH
from src.app.ports.output import IStopCatalogRepository
from src.domain.models import GeoPoint, Stop, StopCatalog

logger = logging.getLogger(__name__)


def _parse_location(row: dict[str, str]) -> GeoPoint | None:
    try:
        lat = float(row["stop_lat"])
        lon = float(row["stop_lon"])
        if not (math.isfinite(lat) and math.isfinite(lon)):
            return None
        return GeoPoint(lat=lat, lon=lon)
    except (TypeError, ValueError, KeyError):
        return None


@dataclass(slots=True)
class LocalStopCatalogRepository(IStopCatalogRepository):
    """Loads the stop catalog from a GTFS stops.txt file.

    Env vars:
      - GTFS_PATH: path to directory containing stops.txt

    The catalog is read once per instance and handed out as a read-only
    mapping.
    """

    base_path: str | Path | None = None
    _catalog: StopCatalog | None = field(default=None, init=False, repr=False)

    def _base(self) -> Path:
        value = self.base_path or os.getenv("GTFS_PATH") or DEFAULT_GTFS_PATH
        return Path(value)

    def load_catalog(self) -> StopCatalog:
        if self._catalog is not None:
            return self._catalog

        stops_path = self._base() / "stops.txt"
        stops_by_id: dict[str, Stop] = {}
        with stops_path.open("r", encoding="utf-8-sig", newline="") as fp:
            reader = csv.DictReader(fp)
            for row in reader:
                stop_id = (row.get("stop_id") or "").strip()
                if not stop_id:
                    continue
                location = _parse_location(row)
                if location is None:
                    logger.warning("Stop %r has no usable coordinates", stop_id)
                stops_by_id[stop_id] = Stop(
                    id=stop_id,
                    name=(row.get("stop_name") or stop_id).strip(),
                    location=location,
                    location_type=(row.get("location_type") or "").strip(),
                    parent_station=(row.get("parent_station") or "").strip(),
                )

        logger.info("Loaded %d stops from %s", len(stops_by_id), stops_path)
        self._catalog = MappingProxyType(stops_by_id)
        return self._catalog
