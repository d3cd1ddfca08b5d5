from .realtime_feed_provider import IRealtimeFeedProvider
from .stop_catalog_repository import IStopCatalogRepository

__all__ = [
    "IRealtimeFeedProvider",
    "IStopCatalogRepository",
]
