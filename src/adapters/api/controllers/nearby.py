from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from src.adapters.api.dependencies import get_nearby_trains_service
from src.adapters.api.schemas.nearby import (
    ArrivalSchema,
    GeoPointSchema,
    NearbyResponseSchema,
)
from src.app.services.nearby_trains_service import NearbyTrainsService
from src.domain.models import GeoPoint

router = APIRouter(tags=["nearby"])


@router.get("/nearby", response_model=NearbyResponseSchema)
async def nearby_trains(
    lat: float = Query(..., ge=-90.0, le=90.0),
    lon: float = Query(..., ge=-180.0, le=180.0),
    radius_m: float | None = Query(default=None, gt=0.0),
    service: NearbyTrainsService = Depends(get_nearby_trains_service),
) -> NearbyResponseSchema:
    result = await service.nearby_arrivals(
        GeoPoint(lat=lat, lon=lon), radius_m=radius_m
    )

    return NearbyResponseSchema(
        point=GeoPointSchema(lat=lat, lon=lon),
        radius_m=result.radius_m,
        generated_at=result.generated_at,
        train_count=result.train_count,
        skipped_entities=result.skipped_entities,
        arrivals=[
            ArrivalSchema(
                route_id=m.route_id,
                direction=m.direction.value,
                stop_id=m.stop_id,
                stop_name=m.stop_name,
                eta=m.eta,
                trip_id=m.trip_id,
            )
            for m in result.matches
        ],
    )
