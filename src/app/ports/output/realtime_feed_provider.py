from __future__ import annotations

from abc import ABC, abstractmethod

from src.domain.models import FeedEntity


class IRealtimeFeedProvider(ABC):
    """Port for obtaining the raw GTFS-Realtime entity stream."""

    @abstractmethod
    async def fetch_entities(self) -> tuple[FeedEntity, ...]:
        raise NotImplementedError
