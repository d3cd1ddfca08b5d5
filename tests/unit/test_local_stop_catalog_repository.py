from __future__ import annotations

from pathlib import Path

import pytest

from src.adapters.persistence.local_stop_catalog_repository import (
    LocalStopCatalogRepository,
)
from src.domain.models import GeoPoint

STOPS_TXT = """stop_id,stop_name,stop_lat,stop_lon,location_type,parent_station
R16,Times Sq-42 St,40.754672,-73.986754,1,
R16N,Times Sq-42 St,40.754672,-73.986754,,R16
R16S,Times Sq-42 St,40.754672,-73.986754,,R16
BAD,Broken Stop,not-a-number,-73.9,,
,Nameless,40.0,-73.0,,
"""


def _write_stops(tmp_path: Path) -> Path:
    (tmp_path / "stops.txt").write_text(STOPS_TXT, encoding="utf-8")
    return tmp_path


def test_load_catalog_reads_stops(tmp_path: Path) -> None:
    repo = LocalStopCatalogRepository(base_path=_write_stops(tmp_path))

    catalog = repo.load_catalog()

    assert list(catalog) == ["R16", "R16N", "R16S", "BAD"]
    stop = catalog["R16N"]
    assert stop.name == "Times Sq-42 St"
    assert stop.location == GeoPoint(lat=40.754672, lon=-73.986754)
    assert stop.parent_station == "R16"
    assert catalog["R16"].location_type == "1"
    assert catalog["BAD"].location is None


def test_load_catalog_is_read_only_and_loaded_once(tmp_path: Path) -> None:
    base = _write_stops(tmp_path)
    repo = LocalStopCatalogRepository(base_path=base)

    first = repo.load_catalog()
    (base / "stops.txt").unlink()
    second = repo.load_catalog()

    assert second is first
    with pytest.raises(TypeError):
        first["NEW"] = first["R16"]  # type: ignore[index]


def test_load_catalog_uses_gtfs_path_env(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("GTFS_PATH", str(_write_stops(tmp_path)))
    assert "R16S" in LocalStopCatalogRepository().load_catalog()


def test_load_catalog_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        LocalStopCatalogRepository(base_path=tmp_path).load_catalog()
