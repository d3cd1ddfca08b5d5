from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


class GeoPointSchema(BaseModel):
    lat: float = Field(..., ge=-90.0, le=90.0)
    lon: float = Field(..., ge=-180.0, le=180.0)


class ArrivalSchema(BaseModel):
    route_id: str
    direction: Literal["north", "south", "unknown"]
    stop_id: str
    stop_name: str
    eta: str
    trip_id: str | None = None


class NearbyResponseSchema(BaseModel):
    point: GeoPointSchema
    radius_m: float
    generated_at: datetime
    train_count: int
    skipped_entities: int = 0
    arrivals: list[ArrivalSchema] = []
