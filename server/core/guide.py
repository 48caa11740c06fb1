"""Travel guide: runs one chat turn against the conversation store."""
import time
import logging
from typing import Optional
from uuid import uuid4

from models.conversation import ChatMessage, IntentResponse
from core.intent_classifier import IntentClassifier
from database.repositories.conversation_repo import ConversationRepository

logger = logging.getLogger(__name__)


class TravelGuide:
    """
    Chat turn orchestrator:
    store user message → read context → classify → store reply + context patch

    The classifier never touches the store; everything it needs is fetched
    here first. Store failures propagate to the caller untouched.
    """

    def __init__(
        self,
        conversation_repo: ConversationRepository,
        classifier: Optional[IntentClassifier] = None,
    ):
        self.conversation_repo = conversation_repo
        self.classifier = classifier or IntentClassifier()

    async def process_user_message(self, conversation_id: str, text: str) -> dict:
        """
        Handle one user utterance.

        Returns:
        {
            'conversation': dict,        # updated conversation document
            'response': IntentResponse,  # the assistant's reply
        }
        """
        start_time = time.time()

        await self.conversation_repo.append_message(
            conversation_id,
            ChatMessage(id=uuid4().hex, sender="user", content=text).model_dump(),
        )

        context = await self.conversation_repo.fetch_context(conversation_id)
        response = self.classifier.classify(text, context)
        logger.info(f"Conversation {conversation_id}: intent={response.intent}")

        conversation = await self.conversation_repo.append_message(
            conversation_id,
            _system_message(response),
            response.context_patch or None,
        )

        elapsed_ms = int((time.time() - start_time) * 1000)
        logger.info(f"Turn completed in {elapsed_ms}ms")
        return {"conversation": conversation, "response": response}


def _system_message(response: IntentResponse) -> dict:
    return ChatMessage(
        id=uuid4().hex,
        sender="system",
        content=response.content,
        related_pois=response.related_pois,
        related_tours=response.related_tours,
    ).model_dump()
