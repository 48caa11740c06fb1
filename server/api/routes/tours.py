"""Tour routes"""
import math
from fastapi import APIRouter, HTTPException, Depends, status
from pydantic import ValidationError
from typing import Iterable, List, Optional, Tuple
import logging

from api.schemas.request_schemas import TourRecommendationRequest
from api.schemas.response_schemas import TourResponse
from config.settings import settings
from core.dependencies import get_tour_repo
from core.geo_ranker import InvalidArgumentError, tour_coordinates
from database.repositories.tour_repo import TourRepository

logger = logging.getLogger(__name__)
router = APIRouter()


def to_tour_response(row: dict, distance_meters: Optional[float] = None) -> TourResponse:
    languages = row.get("languages")
    if distance_meters is not None and math.isinf(distance_meters):
        distance_meters = None
    return TourResponse(
        id=row.get("id"),
        name=row.get("name") or "",
        description=row.get("description") or "",
        languages=languages if isinstance(languages, list) else [],
        pois=row.get("pois") or [],
        start_coordinates=tour_coordinates(row),
        distance_meters=distance_meters,
    )


def to_tour_responses(rows: Iterable[Tuple[dict, Optional[float]]]) -> List[TourResponse]:
    responses = []
    for row, distance_meters in rows:
        try:
            responses.append(to_tour_response(row, distance_meters))
        except ValidationError as e:
            logger.warning(f"Skipping malformed tour record {row.get('id')!r}: {e}")
    return responses


@router.post("/recommend", response_model=List[TourResponse])
async def recommend_tours(
    request: TourRecommendationRequest,
    tour_repo: TourRepository = Depends(get_tour_repo),
):
    """Tours in the user's languages, closest starting point first."""
    limit = settings.DEFAULT_TOUR_LIMIT if request.limit is None else request.limit
    try:
        results = await tour_repo.get_recommended(request.languages, request.location, limit)
    except InvalidArgumentError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error(f"Error recommending tours: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load tours. Please try again.",
        )
    return to_tour_responses((r.candidate, r.distance_meters) for r in results)


@router.get("/{tour_id}", response_model=TourResponse)
async def get_tour(
    tour_id: str,
    tour_repo: TourRepository = Depends(get_tour_repo),
):
    try:
        row = await tour_repo.get_by_id(tour_id)
    except Exception as e:
        logger.error(f"Error getting tour: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load tour. Please try again.",
        )
    if not row:
        raise HTTPException(status_code=404, detail="Tour not found")
    return to_tour_response(row)
