"""Point-of-interest routes for the map view."""
import math
from fastapi import APIRouter, HTTPException, Depends, Query, status
from pydantic import ValidationError
from typing import Iterable, List, Optional, Tuple
import logging

from api.schemas.request_schemas import POIBatchRequest
from api.schemas.response_schemas import POIResponse
from config.settings import settings
from core.crowd import crowd_band
from core.dependencies import get_poi_repo
from core.geo_ranker import InvalidArgumentError, as_geopoint
from database.repositories.poi_repo import POIRepository
from models.geo import POI

logger = logging.getLogger(__name__)
router = APIRouter()


def to_poi_response(row: dict, distance_meters: Optional[float] = None) -> POIResponse:
    """Store row → API shape. Malformed coordinates are reported as missing."""
    poi = POI.model_validate({**row, "coordinates": as_geopoint(row.get("coordinates"))})
    if distance_meters is not None and math.isinf(distance_meters):
        distance_meters = None
    return POIResponse(
        id=poi.id,
        name=poi.name,
        description=poi.description,
        coordinates=poi.coordinates,
        crowd=crowd_band(poi.crowd_level),
        distance_meters=distance_meters,
    )


def to_poi_responses(rows: Iterable[Tuple[dict, Optional[float]]]) -> List[POIResponse]:
    """Convert (row, distance) pairs, dropping rows that fail validation."""
    responses = []
    for row, distance_meters in rows:
        try:
            responses.append(to_poi_response(row, distance_meters))
        except ValidationError as e:
            logger.warning(f"Skipping malformed POI record {row.get('id')!r}: {e}")
    return responses


@router.get("/nearby", response_model=List[POIResponse])
async def nearby_pois(
    latitude: float = Query(..., ge=-90, le=90),
    longitude: float = Query(..., ge=-180, le=180),
    radius: Optional[float] = Query(None, description="Search radius in meters"),
    poi_repo: POIRepository = Depends(get_poi_repo),
):
    """POIs within ``radius`` meters of the given point, nearest first."""
    radius = settings.DEFAULT_NEARBY_RADIUS_METERS if radius is None else radius
    try:
        results = await poi_repo.get_nearby(latitude, longitude, radius)
    except InvalidArgumentError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error(f"Error getting nearby POIs: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load nearby places. Please try again.",
        )
    return to_poi_responses((r.candidate, r.distance_meters) for r in results)


@router.get("", response_model=List[POIResponse])
async def list_pois(
    latitude: Optional[float] = Query(None, ge=-90, le=90),
    longitude: Optional[float] = Query(None, ge=-180, le=180),
    poi_repo: POIRepository = Depends(get_poi_repo),
):
    """All POIs; ordered by distance when a location is given."""
    if (latitude is None) != (longitude is None):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="latitude and longitude must be given together",
        )
    try:
        if latitude is None:
            rows = await poi_repo.fetch_all()
            return to_poi_responses((row, None) for row in rows)
        results = await poi_repo.get_ranked(latitude, longitude)
    except Exception as e:
        logger.error(f"Error listing POIs: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load places. Please try again.",
        )
    return to_poi_responses((r.candidate, r.distance_meters) for r in results)


@router.post("/batch", response_model=List[POIResponse])
async def get_pois_batch(
    request: POIBatchRequest,
    poi_repo: POIRepository = Depends(get_poi_repo),
):
    """Resolve the ``related_pois`` of a chat reply in one call."""
    try:
        rows = await poi_repo.get_by_ids(request.ids)
    except Exception as e:
        logger.error(f"Error getting POIs by IDs: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load places. Please try again.",
        )
    return to_poi_responses((row, None) for row in rows)


@router.get("/{poi_id}", response_model=POIResponse)
async def get_poi(
    poi_id: str,
    poi_repo: POIRepository = Depends(get_poi_repo),
):
    try:
        row = await poi_repo.get_by_id(poi_id)
    except Exception as e:
        logger.error(f"Error getting POI: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load place. Please try again.",
        )
    if not row:
        raise HTTPException(status_code=404, detail="POI not found")
    try:
        return to_poi_response(row)
    except ValidationError as e:
        logger.error(f"Malformed POI record {poi_id!r}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Stored place record is invalid.",
        )
