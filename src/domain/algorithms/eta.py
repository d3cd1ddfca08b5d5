from __future__ import annotations

from datetime import datetime, timedelta, timezone

from src.domain.models import UNKNOWN, TrainRecord

DEFAULT_HORIZON = timedelta(minutes=30)


def humanize_duration(delta: timedelta) -> str:
    """Render a non-negative duration as e.g. ``"1h 2m 3s"``, whole seconds only."""

    total_s = int(delta.total_seconds())
    days, rem = divmod(total_s, 86400)
    hours, rem = divmod(rem, 3600)
    minutes, seconds = divmod(rem, 60)

    parts = [
        f"{value}{unit}"
        for value, unit in ((days, "d"), (hours, "h"), (minutes, "m"), (seconds, "s"))
        if value
    ]
    return " ".join(parts) if parts else "0s"


def _raw_arrival(record: TrainRecord, stop_id: str) -> tuple[int, int]:
    """(timestamp, delay) for the stop; timestamp 0 means no arrival is known."""

    for stu in record.trip_update.stop_time_updates:
        if stu.stop_id != stop_id:
            continue
        if stu.arrival is None:
            return 0, 0
        return stu.arrival.time or 0, stu.arrival.delay or 0
    return 0, 0


def eta_for_stop(
    record: TrainRecord,
    stop_id: str,
    now: datetime,
    horizon: timedelta = DEFAULT_HORIZON,
) -> str | None:
    """Time until the train reaches ``stop_id``, formatted for display.

    Returns None when the arrival is in the past or further out than
    ``horizon``. A timestamp that cannot be represented as a datetime yields
    the ``"<UNKNOWN>"`` sentinel instead.
    """

    ts, delay = _raw_arrival(record, stop_id)
    if ts != 0:
        ts += delay

    try:
        arrival_at = datetime.fromtimestamp(ts, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return UNKNOWN

    duration = arrival_at - now
    if duration < timedelta(0) or duration > horizon:
        return None
    return humanize_duration(duration)
