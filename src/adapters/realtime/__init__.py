from .http_gtfs_realtime_feed_provider import HttpGtfsRealtimeFeedProvider

__all__ = ["HttpGtfsRealtimeFeedProvider"]
