"""Geographic data models: coordinates, points of interest and tours."""
from pydantic import BaseModel, Field
from typing import Any, Optional


class GeoPoint(BaseModel):
    """A WGS84 coordinate in degrees."""
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


class POI(BaseModel):
    """Point of interest as stored in the ``pois`` table."""
    id: str
    name: str
    coordinates: Optional[GeoPoint] = None
    description: str = ""
    crowd_level: int = Field(1, ge=1, le=10, alias="crowdLevel")  # 1-10 scale

    class Config:
        populate_by_name = True
        extra = "ignore"


class Tour(BaseModel):
    """Guided tour as stored in the ``tours`` table."""
    id: str
    name: str = ""
    description: str = ""
    languages: list[str] = []
    pois: list[str] = []  # POI ids, in visiting order
    start_coordinates: Optional[GeoPoint] = Field(None, alias="startCoordinates")
    duration_minutes: Optional[int] = Field(None, alias="durationMinutes")

    class Config:
        populate_by_name = True
        extra = "ignore"


class RankedResult(BaseModel):
    """A candidate paired with its distance from the query origin.

    The distance depends on the origin, so it lives here and is never
    written back onto the candidate record.
    """
    candidate: Any
    distance_meters: float = Field(..., ge=0)


class CrowdIndicator(BaseModel):
    """Map-marker crowd band for a POI."""
    level: int
    band: str   # low | moderate | high
    color: str  # hex colour for the marker
