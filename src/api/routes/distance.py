"""
Distance endpoint
=================

GET /api/v1/distance?lat1=..&lon1=..&lat2=..&lon2=.. -- great-circle km
"""

from fastapi import APIRouter, Query, Request

from src.api.middleware import limiter
from src.api.schemas import DistanceResponse
from src.config import settings
from src.domain.distance import calculate_distance

router = APIRouter(prefix="/distance", tags=["distance"])


@router.get("", response_model=DistanceResponse, summary="Great-circle distance")
@limiter.limit(settings.rate_limit)
async def distance(
    request: Request,
    lat1: float = Query(..., ge=-90, le=90),
    lon1: float = Query(..., ge=-180, le=180),
    lat2: float = Query(..., ge=-90, le=90),
    lon2: float = Query(..., ge=-180, le=180),
):
    return DistanceResponse(distance_km=calculate_distance(lat1, lon1, lat2, lon2))
