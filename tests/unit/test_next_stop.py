from __future__ import annotations

from datetime import datetime, timezone

from src.domain.algorithms.next_stop import resolve_next_stop
from src.domain.models import (
    UNKNOWN,
    StopTimeEvent,
    StopTimeUpdate,
    TrainRecord,
    TripDescriptor,
    TripUpdate,
    VehiclePosition,
)

NOW = datetime(2026, 1, 8, 8, 0, 0, tzinfo=timezone.utc)
NOW_S = int(NOW.timestamp())


def _record(
    *updates: StopTimeUpdate, vehicle_stop_id: str | None = "R01N"
) -> TrainRecord:
    trip = TripDescriptor(trip_id="054350_N..N", route_id="N")
    return TrainRecord(
        trip_update=TripUpdate(trip=trip, stop_time_updates=updates),
        vehicle_position=VehiclePosition(trip=trip, stop_id=vehicle_stop_id),
    )


def _stu(stop_id: str, offset_s: int | None, delay: int | None = None) -> StopTimeUpdate:
    if offset_s is None:
        return StopTimeUpdate(stop_id=stop_id)
    return StopTimeUpdate(
        stop_id=stop_id, arrival=StopTimeEvent(time=NOW_S + offset_s, delay=delay)
    )


def test_picks_nearest_future_arrival() -> None:
    record = _record(_stu("R20N", 500), _stu("R16N", 50))
    assert resolve_next_stop(record, NOW) == "R16N"


def test_ignores_past_and_present_arrivals() -> None:
    record = _record(_stu("R14N", -30), _stu("R15N", 0), _stu("R16N", 120))
    assert resolve_next_stop(record, NOW) == "R16N"


def test_ties_go_to_first_occurrence() -> None:
    record = _record(_stu("R16N", 60), _stu("R17N", 60))
    assert resolve_next_stop(record, NOW) == "R16N"


def test_delay_is_not_applied() -> None:
    # With the delay applied R16N would be later than R17N.
    record = _record(_stu("R16N", 60, delay=600), _stu("R17N", 120))
    assert resolve_next_stop(record, NOW) == "R16N"


def test_falls_back_to_vehicle_stop_when_nothing_is_ahead() -> None:
    record = _record(_stu("R14N", -100), _stu("R15N", None))
    assert resolve_next_stop(record, NOW) == "R01N"


def test_fallback_without_vehicle_stop_uses_sentinel() -> None:
    record = _record(vehicle_stop_id=None)
    assert resolve_next_stop(record, NOW) == UNKNOWN
