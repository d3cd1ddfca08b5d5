from .feed import (
    FeedEntity,
    StopTimeEvent,
    StopTimeUpdate,
    TripDescriptor,
    TripUpdate,
    VehiclePosition,
)
from .geo import GeoPoint
from .stop import Stop, StopCatalog
from .train import UNKNOWN, AnnotatedMatch, Direction, TrainRecord

__all__ = [
    "AnnotatedMatch",
    "Direction",
    "FeedEntity",
    "GeoPoint",
    "Stop",
    "StopCatalog",
    "StopTimeEvent",
    "StopTimeUpdate",
    "TrainRecord",
    "TripDescriptor",
    "TripUpdate",
    "UNKNOWN",
    "VehiclePosition",
]
