from __future__ import annotations

import pytest

from src.adapters.config import DEFAULT_FEED_URL, DEFAULT_GTFS_PATH, NearbyConfig
from src.domain.algorithms.feed_merge import MergePolicy


def test_from_env_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "GTFS_RT_FEED_URL",
        "GTFS_PATH",
        "NEARBY_RADIUS_M",
        "ETA_HORIZON_S",
        "FEED_SKIP_INVALID",
    ):
        monkeypatch.delenv(name, raising=False)

    config = NearbyConfig.from_env()

    assert config.feed_url == DEFAULT_FEED_URL
    assert config.gtfs_path == DEFAULT_GTFS_PATH
    assert config.radius_m == 1610.0
    assert config.eta_horizon_s == 1800.0
    assert config.merge_policy is MergePolicy.STRICT


def test_from_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GTFS_RT_FEED_URL", "http://feed.test/ace")
    monkeypatch.setenv("GTFS_PATH", "/srv/gtfs")
    monkeypatch.setenv("NEARBY_RADIUS_M", "800")
    monkeypatch.setenv("ETA_HORIZON_S", " 600 ")
    monkeypatch.setenv("FEED_SKIP_INVALID", "yes")

    config = NearbyConfig.from_env()

    assert config.feed_url == "http://feed.test/ace"
    assert config.gtfs_path == "/srv/gtfs"
    assert config.radius_m == 800.0
    assert config.eta_horizon_s == 600.0
    assert config.merge_policy is MergePolicy.SKIP


def test_from_env_reads_feed_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GTFS_RT_HEADERS", " x-api-key:abc ")
    monkeypatch.setenv("GTFS_RT_TIMEOUT_S", "4")
    monkeypatch.setenv("GTFS_RT_CACHE_TTL_S", "0")

    config = NearbyConfig.from_env()

    assert config.feed_headers == "x-api-key:abc"
    assert config.feed_timeout_s == 4.0
    assert config.feed_cache_ttl_s == 0.0


def test_from_env_rejects_malformed_numbers(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NEARBY_RADIUS_M", "one mile")

    with pytest.raises(ValueError):
        NearbyConfig.from_env()
