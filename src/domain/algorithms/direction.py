from __future__ import annotations

from src.domain.models import Direction, TrainRecord


def classify_direction(record: TrainRecord) -> Direction:
    """Infer travel direction from the trip id naming convention.

    NYCT trip ids embed the direction after a double dot (``"..N"`` /
    ``"..S"``). The structured ``direction_id`` is left unset by that feed,
    so it is not consulted.
    """

    trip_id = record.trip_update.trip.trip_id
    if not trip_id:
        return Direction.UNKNOWN
    if "..N" in trip_id:
        return Direction.NORTH
    if "..S" in trip_id:
        return Direction.SOUTH
    return Direction.UNKNOWN
