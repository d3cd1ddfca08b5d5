from __future__ import annotations

from functools import lru_cache

from src.adapters.config import NearbyConfig
from src.adapters.persistence.local_stop_catalog_repository import (
    LocalStopCatalogRepository,
)
from src.adapters.realtime.http_gtfs_realtime_feed_provider import (
    HttpGtfsRealtimeFeedProvider,
)
from src.app.services.nearby_trains_service import NearbyTrainsService


@lru_cache(maxsize=1)
def _feed_provider(config: NearbyConfig) -> HttpGtfsRealtimeFeedProvider:
    return HttpGtfsRealtimeFeedProvider(
        url=config.feed_url,
        headers_raw=config.feed_headers or "",
        timeout_s=config.feed_timeout_s,
        cache_ttl_s=config.feed_cache_ttl_s,
    )


@lru_cache(maxsize=1)
def _catalog_repository(gtfs_path: str) -> LocalStopCatalogRepository:
    return LocalStopCatalogRepository(base_path=gtfs_path)


def get_nearby_trains_service() -> NearbyTrainsService:
    # Provider and catalog are process-wide so the feed cache and the loaded
    # stops survive across requests.
    config = NearbyConfig.from_env()
    return NearbyTrainsService(
        feed_provider=_feed_provider(config),
        catalog_repository=_catalog_repository(config.gtfs_path),
        radius_m=config.radius_m,
        eta_horizon_s=config.eta_horizon_s,
        merge_policy=config.merge_policy,
    )
