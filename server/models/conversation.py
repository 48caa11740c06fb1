"""Conversation data models"""
from enum import Enum
from pydantic import BaseModel
from typing import Any


class Timeframe(str, Enum):
    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"
    NONE = "none"


class ExtractedEntities(BaseModel):
    """Entities pulled out of a single utterance"""
    locations: list[str] = []  # vocabulary-scan order
    interests: list[str] = []
    timeframe: Timeframe = Timeframe.NONE


class IntentResponse(BaseModel):
    """Assistant reply for one turn"""
    content: str
    related_pois: list[str] = []
    related_tours: list[str] = []
    context_patch: dict[str, Any] = {}
    intent: str = "fallback"  # name of the rule that produced the reply


class ChatMessage(BaseModel):
    """Message stored in a conversation transcript (the store adds the timestamp)"""
    id: str
    sender: str  # 'user' or 'system'
    content: str
    related_pois: list[str] = []
    related_tours: list[str] = []

