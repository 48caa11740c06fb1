"""API response schemas"""
from pydantic import BaseModel
from typing import Optional, List, Dict, Any

from models.conversation import IntentResponse
from models.geo import CrowdIndicator, GeoPoint


class TurnResponse(BaseModel):
    conversation_id: str
    reply: IntentResponse
    context: Dict[str, Any] = {}


class ConversationResponse(BaseModel):
    id: str
    user_id: Optional[str] = None
    messages: List[Dict[str, Any]] = []
    context: Dict[str, Any] = {}
    updated_at: Optional[str] = None


class POIResponse(BaseModel):
    id: str
    name: str
    description: str = ""
    coordinates: Optional[GeoPoint] = None
    crowd: CrowdIndicator
    distance_meters: Optional[float] = None  # only for location queries


class TourResponse(BaseModel):
    id: str
    name: str = ""
    description: str = ""
    languages: List[str] = []
    pois: List[str] = []
    start_coordinates: Optional[GeoPoint] = None
    distance_meters: Optional[float] = None  # None when unknown


class UserResponse(BaseModel):
    id: str
    display_name: Optional[str] = None
    email: Optional[str] = None
    preferences: Dict[str, Any] = {}
