"""Point-of-interest repository for database operations."""
from asyncio import to_thread
from typing import Optional, List
from supabase import Client
import logging

from core import geo_ranker
from models.geo import GeoPoint, RankedResult

logger = logging.getLogger(__name__)


class POIRepository:
    """Handle POI database operations."""

    def __init__(self, supabase: Client):
        self.supabase = supabase

    async def get_by_id(self, poi_id: str) -> Optional[dict]:
        """Get POI by ID. Returns None if not found."""
        try:
            response = await to_thread(
                lambda: self.supabase.table("pois")
                .select("*")
                .eq("id", poi_id)
                .execute()
            )
            return response.data[0] if response.data else None
        except Exception as e:
            logger.error(f"Error getting POI: {e}")
            raise

    async def get_by_ids(self, poi_ids: List[str]) -> List[dict]:
        """Get several POIs in the order requested; unknown ids are skipped."""
        if not poi_ids:
            return []
        try:
            response = await to_thread(
                lambda: self.supabase.table("pois")
                .select("*")
                .in_("id", list(poi_ids))
                .execute()
            )
            by_id = {row["id"]: row for row in (response.data or [])}
            return [by_id[poi_id] for poi_id in poi_ids if poi_id in by_id]
        except Exception as e:
            logger.error(f"Error getting POIs by IDs: {e}")
            raise

    async def fetch_all(self) -> List[dict]:
        """All POI records (candidate set for proximity queries)."""
        try:
            response = await to_thread(
                lambda: self.supabase.table("pois").select("*").execute()
            )
            return response.data if response.data else []
        except Exception as e:
            logger.error(f"Error fetching POIs: {e}")
            raise

    async def get_nearby(
        self,
        latitude: float,
        longitude: float,
        radius_meters: float = 2000,
    ) -> List[RankedResult]:
        """
        POIs within ``radius_meters``, nearest first.

        The table is small, so rows are filtered in-process rather than with
        a spatial query.
        """
        pois = await self.fetch_all()
        results = geo_ranker.nearby(
            GeoPoint(latitude=latitude, longitude=longitude), pois, radius_meters
        )
        logger.info(
            f"Nearby POIs: {len(results)}/{len(pois)} within {radius_meters:.0f}m "
            f"of ({latitude}, {longitude})"
        )
        return results

    async def get_ranked(self, latitude: float, longitude: float) -> List[RankedResult]:
        """Every POI ordered by distance; records without coordinates come last."""
        pois = await self.fetch_all()
        return geo_ranker.rank_all(GeoPoint(latitude=latitude, longitude=longitude), pois)
