from __future__ import annotations

import pytest

from src.domain.algorithms.direction import classify_direction
from src.domain.models import (
    UNKNOWN,
    Direction,
    TrainRecord,
    TripDescriptor,
    TripUpdate,
    VehiclePosition,
)


def _record(trip_id: str | None) -> TrainRecord:
    trip = TripDescriptor(trip_id=trip_id, route_id="Q", direction_id=None)
    return TrainRecord(
        trip_update=TripUpdate(trip=trip),
        vehicle_position=VehiclePosition(trip=trip),
    )


@pytest.mark.parametrize(
    ("trip_id", "expected"),
    [
        ("054350_Q..N16R", Direction.NORTH),
        ("054350_Q..S16R", Direction.SOUTH),
        ("..N..S", Direction.NORTH),
        ("054350_Q..n16R", Direction.UNKNOWN),
        ("054350_Q.N16R", Direction.UNKNOWN),
        ("", Direction.UNKNOWN),
        (None, Direction.UNKNOWN),
    ],
)
def test_classify_direction(trip_id: str | None, expected: Direction) -> None:
    assert classify_direction(_record(trip_id)) is expected


def test_direction_labels() -> None:
    assert Direction.NORTH.label == "north"
    assert Direction.SOUTH.display_name == "South"
    assert Direction.UNKNOWN.label == UNKNOWN
