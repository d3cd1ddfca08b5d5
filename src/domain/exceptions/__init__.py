from .feed import FeedError, FeedInvariantError, InvariantError

__all__ = ["FeedError", "FeedInvariantError", "InvariantError"]
