"""Conversation repository for database operations."""
from asyncio import to_thread
from typing import Any, Optional, List
from datetime import datetime, timezone
from uuid import uuid4
from supabase import Client
import logging

logger = logging.getLogger(__name__)

WELCOME_MESSAGE = "Hello! I'm Navina, your personal travel guide. How can I help you today?"


class ConversationNotFoundError(LookupError):
    """Raised when writing to a conversation that does not exist."""


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class ConversationRepository:
    """
    Handle conversation documents.

    A conversation row holds the whole transcript (``messages``) and the
    conversational memory (``context``). Context updates are merged key by
    key; the last write wins.
    """

    def __init__(self, supabase: Client):
        self.supabase = supabase

    async def start_conversation(
        self,
        user_id: Optional[str] = None,
        initial_context: Optional[dict] = None,
    ) -> dict:
        """Create a conversation seeded with the assistant's welcome message."""
        try:
            now = _now()
            data = {
                "user_id": user_id,
                "messages": [
                    {
                        "id": uuid4().hex,
                        "sender": "system",
                        "content": WELCOME_MESSAGE,
                        "timestamp": now,
                    }
                ],
                "context": initial_context or {},
                "created_at": now,
                "updated_at": now,
            }
            response = await to_thread(
                lambda: self.supabase.table("conversations").insert(data).execute()
            )
            return response.data[0] if response.data else None
        except Exception as e:
            logger.error(f"Error starting conversation: {e}")
            raise

    async def get_conversation_by_id(self, conversation_id: str) -> Optional[dict]:
        """Get conversation by ID.

        Returns None if not found. Raises on database errors.
        """
        try:
            response = await to_thread(
                lambda: self.supabase.table("conversations")
                .select("*")
                .eq("id", str(conversation_id))
                .execute()
            )
            return response.data[0] if response.data else None
        except Exception as e:
            logger.error(f"Error getting conversation: {e}")
            raise

    async def append_message(
        self,
        conversation_id: str,
        message: dict,
        context_patch: Optional[dict] = None,
    ) -> dict:
        """
        Append a message and merge ``context_patch`` into the stored context.

        Returns the updated conversation document.
        """
        conversation = await self.get_conversation_by_id(conversation_id)
        if not conversation:
            raise ConversationNotFoundError(f"Conversation not found: {conversation_id}")

        try:
            now = _now()
            update: dict[str, Any] = {
                "messages": [*(conversation.get("messages") or []), {**message, "timestamp": now}],
                "updated_at": now,
            }
            if context_patch:
                update["context"] = {**(conversation.get("context") or {}), **context_patch}

            await to_thread(
                lambda: self.supabase.table("conversations")
                .update(update)
                .eq("id", str(conversation_id))
                .execute()
            )
            return {**conversation, **update}
        except Exception as e:
            logger.error(f"Error adding message to conversation: {e}", exc_info=True)
            raise

    async def fetch_context(self, conversation_id: str) -> dict:
        """Current conversational memory (e.g. ``lastPOI``)."""
        conversation = await self.get_conversation_by_id(conversation_id)
        if not conversation:
            raise ConversationNotFoundError(f"Conversation not found: {conversation_id}")
        return dict(conversation.get("context") or {})

    async def get_history(self, user_id: str, limit: int = 10) -> List[dict]:
        """Most recently updated conversations for a user."""
        try:
            response = await to_thread(
                lambda: self.supabase.table("conversations")
                .select("*")
                .eq("user_id", user_id)
                .order("updated_at", desc=True)
                .limit(limit)
                .execute()
            )
            return response.data if response.data else []
        except Exception as e:
            logger.error(f"Error getting conversation history: {e}")
            raise
