from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence

import httpx

from src.adapters.config import NearbyConfig
from src.adapters.persistence.local_stop_catalog_repository import (
    LocalStopCatalogRepository,
)
from src.adapters.realtime.http_gtfs_realtime_feed_provider import (
    HttpGtfsRealtimeFeedProvider,
)
from src.app.services.nearby_trains_service import NearbyTrainsService
from src.domain.algorithms.feed_merge import MergePolicy
from src.domain.exceptions import FeedError
from src.domain.models import AnnotatedMatch, GeoPoint

logger = logging.getLogger("nearby_trains")


def _build_parser(config: NearbyConfig) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nearby-trains",
        description="List trains at or approaching stations near a location.",
    )
    parser.add_argument("lat", type=float, help="latitude of the query point")
    parser.add_argument("lon", type=float, help="longitude of the query point")
    parser.add_argument(
        "--radius-m",
        type=float,
        default=config.radius_m,
        help="search radius in meters (default: %(default)s)",
    )
    parser.add_argument(
        "--horizon-min",
        type=float,
        default=config.eta_horizon_s / 60.0,
        help="ignore trains further out than this many minutes (default: %(default)s)",
    )
    parser.add_argument(
        "--skip-invalid",
        action="store_true",
        default=config.skip_invalid_pairs,
        help="skip malformed feed entries instead of failing",
    )
    parser.add_argument("--gtfs-path", default=config.gtfs_path)
    parser.add_argument("--feed-url", default=config.feed_url)
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def format_match(match: AnnotatedMatch) -> str:
    return (
        f"nearby train: route {match.route_id} heading in {match.direction.label} "
        f"direction, at or approaching station {match.stop_name}. ETA: {match.eta}"
    )


def main(argv: Sequence[str] | None = None) -> int:
    try:
        config = NearbyConfig.from_env()
    except ValueError as exc:
        print(f"error: invalid configuration: {exc}", file=sys.stderr)
        return 1
    args = _build_parser(config).parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        point = GeoPoint(lat=args.lat, lon=args.lon)
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    service = NearbyTrainsService(
        feed_provider=HttpGtfsRealtimeFeedProvider(
            url=args.feed_url,
            headers_raw=config.feed_headers or "",
            timeout_s=config.feed_timeout_s,
            cache_ttl_s=config.feed_cache_ttl_s,
        ),
        catalog_repository=LocalStopCatalogRepository(base_path=args.gtfs_path),
        radius_m=args.radius_m,
        eta_horizon_s=args.horizon_min * 60.0,
        merge_policy=MergePolicy.SKIP if args.skip_invalid else MergePolicy.STRICT,
    )

    try:
        result = asyncio.run(service.nearby_arrivals(point))
    except (FeedError, httpx.HTTPError, OSError) as exc:
        logger.debug("Query failed", exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 1

    for match in result.matches:
        print(format_match(match))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
