from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, field

import httpx
from google.transit import gtfs_realtime_pb2

from src.adapters.config import NearbyConfig
from src.app.ports.output import IRealtimeFeedProvider
from src.domain.models import (
    FeedEntity,
    StopTimeEvent,
    StopTimeUpdate,
    TripDescriptor,
    TripUpdate,
    VehiclePosition,
)

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class HttpGtfsRealtimeFeedProvider(IRealtimeFeedProvider):
    """Fetches a GTFS-Realtime feed over HTTP and decodes every entity.

    Env vars:
      - GTFS_RT_FEED_URL: URL of the GTFS-RT feed (default: MTA N/Q/R/W)
      - GTFS_RT_HEADERS: optional headers, as 'Key:Value;Key2:Value2'
      - GTFS_RT_TIMEOUT_S: request timeout (default 10)
      - GTFS_RT_CACHE_TTL_S: in-process cache TTL seconds (default 25)

    Notes:
      - Entity order is preserved; the merger relies on it.
      - Cache is per-process and shared across requests.
    """

    url: str | None = None
    headers_raw: str | None = None
    timeout_s: float | None = None
    cache_ttl_s: float | None = None
    transport: httpx.AsyncBaseTransport | None = None

    # In-process cache
    _lock: asyncio.Lock = field(default_factory=asyncio.Lock, init=False, repr=False)
    _cached_at_monotonic: float | None = None
    _cached_entities: tuple[FeedEntity, ...] = ()

    def __post_init__(self) -> None:
        # Explicit arguments win; anything left unset comes from the environment.
        if None in (self.url, self.headers_raw, self.timeout_s, self.cache_ttl_s):
            config = NearbyConfig.from_env()
            if self.url is None:
                self.url = config.feed_url
            if self.headers_raw is None:
                self.headers_raw = config.feed_headers
            if self.timeout_s is None:
                self.timeout_s = config.feed_timeout_s
            if self.cache_ttl_s is None:
                self.cache_ttl_s = config.feed_cache_ttl_s

    def _headers(self) -> dict[str, str]:
        raw = (self.headers_raw or "").strip()
        if not raw:
            return {}
        headers: dict[str, str] = {}
        for part in raw.split(";"):
            part = part.strip()
            if ":" not in part:
                continue
            k, v = part.split(":", 1)
            k = k.strip()
            if k:
                headers[k] = v.strip()
        return headers

    async def fetch_entities(self) -> tuple[FeedEntity, ...]:
        async with self._lock:
            now_mono = time.monotonic()
            if (
                self._cached_at_monotonic is not None
                and (now_mono - self._cached_at_monotonic) < self.cache_ttl_s
            ):
                return self._cached_entities

            async with httpx.AsyncClient(
                timeout=self.timeout_s, transport=self.transport
            ) as client:
                resp = await client.get(self.url, headers=self._headers())
                resp.raise_for_status()
                content = resp.content

            entities = _parse_gtfs_rt_entities(content)
            logger.info("Fetched %d feed entities from %s", len(entities), self.url)

            self._cached_at_monotonic = time.monotonic()
            self._cached_entities = entities
            return entities


def _optional_str(msg, name: str) -> str | None:
    if not msg.HasField(name):
        return None
    return getattr(msg, name) or None


def _optional_int(msg, name: str) -> int | None:
    if not msg.HasField(name):
        return None
    return int(getattr(msg, name))


def _parse_trip(trip) -> TripDescriptor:
    return TripDescriptor(
        trip_id=_optional_str(trip, "trip_id"),
        route_id=_optional_str(trip, "route_id"),
        start_date=_optional_str(trip, "start_date"),
        start_time=_optional_str(trip, "start_time"),
        direction_id=_optional_int(trip, "direction_id"),
    )


def _parse_trip_update(tu) -> TripUpdate:
    updates: list[StopTimeUpdate] = []
    for stu in tu.stop_time_update:
        arrival = None
        if stu.HasField("arrival"):
            arrival = StopTimeEvent(
                time=_optional_int(stu.arrival, "time"),
                delay=_optional_int(stu.arrival, "delay"),
            )
        updates.append(
            StopTimeUpdate(stop_id=_optional_str(stu, "stop_id"), arrival=arrival)
        )
    return TripUpdate(trip=_parse_trip(tu.trip), stop_time_updates=tuple(updates))


def _parse_vehicle(v) -> VehiclePosition:
    trip = _parse_trip(v.trip) if v.HasField("trip") else None
    return VehiclePosition(
        trip=trip,
        stop_id=_optional_str(v, "stop_id"),
        direction_hint=trip.direction_id if trip is not None else None,
    )


def _parse_gtfs_rt_entities(content: bytes) -> tuple[FeedEntity, ...]:
    feed = gtfs_realtime_pb2.FeedMessage()
    feed.ParseFromString(content)

    out: list[FeedEntity] = []
    for ent in feed.entity:
        out.append(
            FeedEntity(
                id=ent.id or None,
                trip_update=(
                    _parse_trip_update(ent.trip_update)
                    if ent.HasField("trip_update")
                    else None
                ),
                vehicle=(
                    _parse_vehicle(ent.vehicle) if ent.HasField("vehicle") else None
                ),
            )
        )
    return tuple(out)
