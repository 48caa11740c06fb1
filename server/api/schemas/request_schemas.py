"""API request schemas"""
from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Any

from models.geo import GeoPoint
from models.user import UserPreferences


# Chat schemas
class ClassifyRequest(BaseModel):
    """Stateless single-turn classification."""
    utterance: str = Field("", max_length=5000)
    context: Dict[str, Any] = {}


class StartConversationRequest(BaseModel):
    user_id: Optional[str] = None
    initial_context: Dict[str, Any] = {}


class SendMessageRequest(BaseModel):
    text: str = Field(..., max_length=5000)


# Place schemas
class POIBatchRequest(BaseModel):
    ids: List[str] = Field(..., max_length=100)


class TourRecommendationRequest(BaseModel):
    # Negative limits are rejected by the ranker (400), not here
    languages: List[str] = ["English"]
    location: Optional[GeoPoint] = None
    limit: Optional[int] = None  # defaults to settings.DEFAULT_TOUR_LIMIT


# User schemas
class CreateUserRequest(BaseModel):
    display_name: Optional[str] = Field(None, max_length=256)
    email: Optional[str] = Field(None, max_length=320)
    preferences: Optional[UserPreferences] = None
