"""User data models"""
from pydantic import BaseModel


class UserPreferences(BaseModel):
    """Travel preferences used for tour recommendations"""
    languages: list[str] = ["English"]
    interests: list[str] = []
    pace: str = "moderate"  # relaxed, moderate, fast
    accessibility: bool = False
    max_distance: int = 5000  # meters


class UserHistory(BaseModel):
    completed_tours: list[str] = []
    visited_pois: list[str] = []
