"""User repository for database operations."""
from asyncio import to_thread
from typing import Optional
from datetime import datetime, timezone
from supabase import Client
import logging

from models.user import UserHistory, UserPreferences

logger = logging.getLogger(__name__)


class UserRepository:
    """Handle user database operations."""

    def __init__(self, supabase: Client):
        self.supabase = supabase

    async def create_user(
        self,
        user_data: dict,
        default_preferences: Optional[UserPreferences] = None,
    ) -> dict:
        """Create a new user, filling in default preferences and empty lists."""
        try:
            data = dict(user_data)
            if not data.get("preferences"):
                data["preferences"] = (default_preferences or UserPreferences()).model_dump()
            data.setdefault("saved_tours", [])
            data.setdefault("saved_pois", [])
            data.setdefault("history", UserHistory().model_dump())
            data["created_at"] = datetime.now(timezone.utc).isoformat()

            response = await to_thread(
                lambda: self.supabase.table("users").insert(data).execute()
            )
            return response.data[0] if response.data else None
        except Exception as e:
            logger.error(f"Error creating user: {e}")
            raise

    async def get_by_id(self, user_id: str) -> Optional[dict]:
        """Get user by ID."""
        try:
            response = await to_thread(
                lambda: self.supabase.table("users")
                .select("*")
                .eq("id", user_id)
                .execute()
            )
            return response.data[0] if response.data else None
        except Exception as e:
            logger.error(f"Error getting user by ID: {e}")
            raise

    async def update_preferences(self, user_id: str, preferences: UserPreferences) -> bool:
        """Replace a user's preferences. Returns True on success, False on failure."""
        try:
            await to_thread(
                lambda: self.supabase.table("users")
                .update(
                    {
                        "preferences": preferences.model_dump(),
                        "updated_at": datetime.now(timezone.utc).isoformat(),
                    }
                )
                .eq("id", user_id)
                .execute()
            )
            return True
        except Exception as e:
            logger.error(f"Error updating user preferences: {e}")
            return False
