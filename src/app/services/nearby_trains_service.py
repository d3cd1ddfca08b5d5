from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from src.app.ports.output import IRealtimeFeedProvider, IStopCatalogRepository
from src.domain.algorithms.direction import classify_direction
from src.domain.algorithms.eta import DEFAULT_HORIZON, eta_for_stop
from src.domain.algorithms.feed_merge import MergePolicy, merge_feed
from src.domain.algorithms.geo_utils import DEFAULT_RADIUS_M, filter_near
from src.domain.algorithms.next_stop import resolve_next_stop
from src.domain.models import (
    UNKNOWN,
    AnnotatedMatch,
    GeoPoint,
    StopCatalog,
    TrainRecord,
)

logger = logging.getLogger(__name__)


def _stop_name(catalog: StopCatalog, stop_id: str) -> str:
    stop = catalog.get(stop_id)
    if stop is None:
        logger.warning("Unknown stop id %r", stop_id)
        return UNKNOWN
    return stop.name


def find_nearby_arrivals(
    catalog: StopCatalog,
    records: Sequence[TrainRecord],
    point: GeoPoint,
    *,
    now: datetime,
    radius_m: float = DEFAULT_RADIUS_M,
    horizon: timedelta = DEFAULT_HORIZON,
) -> tuple[AnnotatedMatch, ...]:
    """Trains at or approaching stops within ``radius_m`` of ``point``.

    Results follow catalog order for stops, then feed order for trains.
    Trains whose ETA is not useful (in the past, or beyond the horizon) are
    left out.
    """

    nearby = filter_near(catalog, point, radius_m)
    if not nearby:
        return ()

    # `now` is fixed for the query, so each train's next stop is resolved once.
    next_stops = [(record, resolve_next_stop(record, now)) for record in records]

    out: list[AnnotatedMatch] = []
    for stop_id in nearby:
        for record, next_stop_id in next_stops:
            if next_stop_id != stop_id:
                continue
            eta = eta_for_stop(record, next_stop_id, now, horizon)
            if eta is None:
                continue
            out.append(
                AnnotatedMatch(
                    route_id=record.route_id or UNKNOWN,
                    direction=classify_direction(record),
                    stop_id=next_stop_id,
                    stop_name=_stop_name(catalog, next_stop_id),
                    eta=eta,
                    trip_id=record.trip_id,
                )
            )
    return tuple(out)


@dataclass(frozen=True, slots=True)
class NearbyArrivals:
    matches: tuple[AnnotatedMatch, ...]
    generated_at: datetime
    radius_m: float
    train_count: int
    skipped_entities: int = 0


@dataclass(slots=True)
class NearbyTrainsService:
    """Use case: which trains are approaching stops near a point, and when.

    Ports supply the feed snapshot and the stop catalog; the domain functions
    do the rest.
    """

    feed_provider: IRealtimeFeedProvider
    catalog_repository: IStopCatalogRepository
    radius_m: float = DEFAULT_RADIUS_M
    eta_horizon_s: float = DEFAULT_HORIZON.total_seconds()
    merge_policy: MergePolicy = MergePolicy.STRICT

    def query(
        self,
        catalog: StopCatalog,
        records: Sequence[TrainRecord],
        point: GeoPoint,
        *,
        now: datetime | None = None,
        radius_m: float | None = None,
    ) -> tuple[AnnotatedMatch, ...]:
        return find_nearby_arrivals(
            catalog,
            records,
            point,
            now=now or datetime.now(timezone.utc),
            radius_m=self.radius_m if radius_m is None else radius_m,
            horizon=timedelta(seconds=self.eta_horizon_s),
        )

    async def nearby_arrivals(
        self,
        point: GeoPoint,
        *,
        now: datetime | None = None,
        radius_m: float | None = None,
    ) -> NearbyArrivals:
        """Fetch, merge and query. ``radius_m`` overrides the configured radius
        for this call only."""

        logger.info("Looking up trains near %s", point)
        entities = await self.feed_provider.fetch_entities()
        merged = merge_feed(entities, policy=self.merge_policy)
        if merged.skipped:
            logger.warning("Skipped %d malformed feed entities", merged.skipped)

        catalog = self.catalog_repository.load_catalog()
        now = now or datetime.now(timezone.utc)
        matches = self.query(
            catalog, merged.records, point, now=now, radius_m=radius_m
        )

        return NearbyArrivals(
            matches=matches,
            generated_at=now,
            radius_m=self.radius_m if radius_m is None else radius_m,
            train_count=len(merged.records),
            skipped_entities=merged.skipped,
        )
