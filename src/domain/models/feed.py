from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class TripDescriptor:
    """Trip reference shared by the two halves of a train's feed entities."""

    trip_id: str | None = None
    route_id: str | None = None
    start_date: str | None = None
    start_time: str | None = None
    direction_id: int | None = None


@dataclass(frozen=True, slots=True)
class StopTimeEvent:
    time: int | None = None  # POSIX seconds
    delay: int | None = None  # seconds


@dataclass(frozen=True, slots=True)
class StopTimeUpdate:
    stop_id: str | None = None
    arrival: StopTimeEvent | None = None


@dataclass(frozen=True, slots=True)
class TripUpdate:
    trip: TripDescriptor
    stop_time_updates: tuple[StopTimeUpdate, ...] = ()


@dataclass(frozen=True, slots=True)
class VehiclePosition:
    trip: TripDescriptor | None = None
    stop_id: str | None = None
    # Not populated by every agency (MTA leaves it empty).
    direction_hint: int | None = None


@dataclass(frozen=True, slots=True)
class FeedEntity:
    """One element of the raw GTFS-RT stream.

    Each entity carries at most one of the two payloads; two consecutive
    entities describe the same train.
    """

    id: str | None = None
    trip_update: TripUpdate | None = None
    vehicle: VehiclePosition | None = None
