from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .feed import TripUpdate, VehiclePosition

UNKNOWN = "<UNKNOWN>"


class Direction(str, Enum):
    NORTH = "north"
    SOUTH = "south"
    UNKNOWN = "unknown"

    @property
    def label(self) -> str:
        """Lower-case display text, with the shared sentinel for UNKNOWN."""
        if self is Direction.UNKNOWN:
            return UNKNOWN
        return self.value

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


@dataclass(frozen=True, slots=True)
class TrainRecord:
    """A train reconstructed from a (trip update, vehicle position) pair."""

    trip_update: TripUpdate
    vehicle_position: VehiclePosition

    @property
    def trip_id(self) -> str | None:
        return self.trip_update.trip.trip_id

    @property
    def route_id(self) -> str | None:
        trip = self.vehicle_position.trip
        return trip.route_id if trip is not None else None


@dataclass(frozen=True, slots=True)
class AnnotatedMatch:
    route_id: str
    direction: Direction
    stop_id: str
    stop_name: str
    eta: str
    trip_id: str | None = None
