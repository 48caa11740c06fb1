"""Tour repository for database operations."""
from asyncio import to_thread
from typing import Iterable, Optional, List
from supabase import Client
import logging

from core import geo_ranker
from models.geo import GeoPoint, RankedResult

logger = logging.getLogger(__name__)


class TourRepository:
    """Handle tour database operations."""

    def __init__(self, supabase: Client):
        self.supabase = supabase

    async def get_by_id(self, tour_id: str) -> Optional[dict]:
        """Get tour by ID. Returns None if not found."""
        try:
            response = await to_thread(
                lambda: self.supabase.table("tours")
                .select("*")
                .eq("id", tour_id)
                .execute()
            )
            return response.data[0] if response.data else None
        except Exception as e:
            logger.error(f"Error getting tour: {e}")
            raise

    async def fetch_all(self) -> List[dict]:
        """All tour records."""
        try:
            response = await to_thread(
                lambda: self.supabase.table("tours").select("*").execute()
            )
            return response.data if response.data else []
        except Exception as e:
            logger.error(f"Error fetching tours: {e}")
            raise

    async def get_recommended(
        self,
        languages: Iterable[str],
        location: Optional[GeoPoint] = None,
        limit: int = 5,
    ) -> List[RankedResult]:
        """Tours offered in one of ``languages``, closest starting point first."""
        tours = await self.fetch_all()
        results = geo_ranker.recommend(tours, languages, origin=location, limit=limit)
        logger.info(f"Recommended {len(results)} of {len(tours)} tours")
        return results
