from __future__ import annotations

import os
from dataclasses import dataclass

from src.domain.algorithms.eta import DEFAULT_HORIZON
from src.domain.algorithms.feed_merge import MergePolicy
from src.domain.algorithms.geo_utils import DEFAULT_RADIUS_M

# MTA serves the subway in several feeds; this one covers the N/Q/R/W lines.
DEFAULT_FEED_URL = (
    "https://api-endpoint.mta.info/Dataservice/mtagtfsfeeds/nyct%2Fgtfs-nqrw"
)
DEFAULT_GTFS_PATH = "data/gtfs_subway"
DEFAULT_FEED_TIMEOUT_S = 10.0
DEFAULT_FEED_CACHE_TTL_S = 25.0


def env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_float(name: str, default: float) -> float:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    return float(raw)


@dataclass(frozen=True, slots=True)
class NearbyConfig:
    feed_url: str
    gtfs_path: str
    radius_m: float
    eta_horizon_s: float
    skip_invalid_pairs: bool
    feed_headers: str | None = None
    feed_timeout_s: float = DEFAULT_FEED_TIMEOUT_S
    feed_cache_ttl_s: float = DEFAULT_FEED_CACHE_TTL_S

    @staticmethod
    def from_env() -> "NearbyConfig":
        return NearbyConfig(
            feed_url=(os.getenv("GTFS_RT_FEED_URL") or "").strip() or DEFAULT_FEED_URL,
            gtfs_path=(os.getenv("GTFS_PATH") or "").strip() or DEFAULT_GTFS_PATH,
            radius_m=_env_float("NEARBY_RADIUS_M", DEFAULT_RADIUS_M),
            eta_horizon_s=_env_float(
                "ETA_HORIZON_S", DEFAULT_HORIZON.total_seconds()
            ),
            skip_invalid_pairs=env_bool("FEED_SKIP_INVALID", False),
            feed_headers=(os.getenv("GTFS_RT_HEADERS") or "").strip() or None,
            feed_timeout_s=_env_float("GTFS_RT_TIMEOUT_S", DEFAULT_FEED_TIMEOUT_S),
            feed_cache_ttl_s=_env_float(
                "GTFS_RT_CACHE_TTL_S", DEFAULT_FEED_CACHE_TTL_S
            ),
        )

    @property
    def merge_policy(self) -> MergePolicy:
        return MergePolicy.SKIP if self.skip_invalid_pairs else MergePolicy.STRICT
