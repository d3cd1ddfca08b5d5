from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from src.domain.exceptions import FeedInvariantError
from src.domain.models import FeedEntity, TrainRecord

logger = logging.getLogger(__name__)


class MergePolicy(str, Enum):
    STRICT = "strict"
    SKIP = "skip"


@dataclass(frozen=True, slots=True)
class MergeResult:
    records: tuple[TrainRecord, ...]
    # Raw entities dropped under MergePolicy.SKIP (two per bad pair).
    skipped: int = 0


def _merge_pair(first: FeedEntity, second: FeedEntity, index: int) -> TrainRecord:
    trip_update = first.trip_update or second.trip_update
    if trip_update is None:
        raise FeedInvariantError("missing trip update", pair_index=index)

    vehicle = first.vehicle or second.vehicle
    if vehicle is None:
        raise FeedInvariantError("missing vehicle position", pair_index=index)

    if vehicle.trip != trip_update.trip:
        raise FeedInvariantError("trip mismatch", pair_index=index)

    return TrainRecord(trip_update=trip_update, vehicle_position=vehicle)


def merge_feed(
    entities: Sequence[FeedEntity], *, policy: MergePolicy = MergePolicy.STRICT
) -> MergeResult:
    """Combine the raw entity stream into one record per train.

    The feed sends every train as two consecutive entities, one holding the
    trip update and the other the vehicle position. STRICT aborts on the first
    violation of that layout; SKIP drops offending pairs and reports how many
    entities were discarded.
    """

    skipped = 0
    if len(entities) % 2 != 0:
        if policy is MergePolicy.STRICT:
            raise FeedInvariantError("odd entity count")
        logger.warning(
            "Dropping trailing feed entity: expected two entries per train "
            "(got %d)",
            len(entities),
        )
        entities = entities[:-1]
        skipped += 1

    records: list[TrainRecord] = []
    for index in range(0, len(entities), 2):
        try:
            record = _merge_pair(entities[index], entities[index + 1], index // 2)
        except FeedInvariantError as exc:
            if policy is MergePolicy.STRICT:
                raise
            logger.warning("Skipping feed pair: %s", exc)
            skipped += 2
        else:
            records.append(record)

    return MergeResult(records=tuple(records), skipped=skipped)


def merge(entities: Sequence[FeedEntity]) -> tuple[TrainRecord, ...]:
    """Strict merge; raises FeedInvariantError on any malformed pair."""

    return merge_feed(entities, policy=MergePolicy.STRICT).records
