from __future__ import annotations

from datetime import datetime

from src.domain.models import UNKNOWN, TrainRecord


def resolve_next_stop(record: TrainRecord, now: datetime) -> str:
    """Return the id of the stop the train is heading to.

    Picks the stop with the nearest arrival strictly in the future (first one
    wins on ties). Uses the raw predicted time; delay is only applied when
    computing the displayed ETA. Falls back to the vehicle's reported stop,
    which in practice tends to be the first stop of the route.
    """

    now_s = now.timestamp()
    best_delta: float | None = None
    best_stop: str | None = None

    for stu in record.trip_update.stop_time_updates:
        if stu.arrival is None or stu.arrival.time is None:
            continue
        delta = stu.arrival.time - now_s
        if delta <= 0:
            continue
        if best_delta is None or delta < best_delta:
            best_delta = delta
            best_stop = stu.stop_id or ""

    if best_stop is not None:
        return best_stop
    return record.vehicle_position.stop_id or UNKNOWN
