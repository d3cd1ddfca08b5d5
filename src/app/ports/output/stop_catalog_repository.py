from __future__ import annotations

from abc import ABC, abstractmethod

from src.domain.models import StopCatalog


class IStopCatalogRepository(ABC):
    """Port for loading the static stop catalog into a read-only mapping."""

    @abstractmethod
    def load_catalog(self) -> StopCatalog:
        raise NotImplementedError
