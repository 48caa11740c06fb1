"""Chat routes: conversations with the travel guide."""
from fastapi import APIRouter, HTTPException, Depends, Query, status
from typing import List, Optional
import logging

from api.schemas.request_schemas import (
    ClassifyRequest,
    SendMessageRequest,
    StartConversationRequest,
)
from api.schemas.response_schemas import ConversationResponse, TurnResponse
from config.settings import settings
from core.dependencies import get_classifier, get_conversation_repo, get_guide
from core.guide import TravelGuide
from core.intent_classifier import IntentClassifier
from database.repositories.conversation_repo import (
    ConversationNotFoundError,
    ConversationRepository,
)
from models.conversation import IntentResponse

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/chat/classify", response_model=IntentResponse)
async def classify(
    request: ClassifyRequest,
    classifier: IntentClassifier = Depends(get_classifier),
):
    """Classify a single utterance without touching any conversation."""
    return classifier.classify(request.utterance, request.context)


@router.post(
    "/conversations",
    response_model=ConversationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def start_conversation(
    request: StartConversationRequest,
    conversation_repo: ConversationRepository = Depends(get_conversation_repo),
):
    """Start a conversation seeded with the guide's welcome message."""
    try:
        conversation = await conversation_repo.start_conversation(
            user_id=request.user_id,
            initial_context=request.initial_context,
        )
    except Exception as e:
        logger.error(f"Error starting conversation: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to start conversation. Please try again.",
        )
    if not conversation:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Conversation was not created.",
        )
    return conversation


@router.get("/conversations", response_model=List[ConversationResponse])
async def conversation_history(
    user_id: str = Query(..., min_length=1),
    limit: Optional[int] = Query(None, ge=1, le=100),
    conversation_repo: ConversationRepository = Depends(get_conversation_repo),
):
    """A user's most recently updated conversations."""
    try:
        return await conversation_repo.get_history(
            user_id, limit or settings.CONVERSATION_HISTORY_LIMIT
        )
    except Exception as e:
        logger.error(f"Error getting conversation history: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load conversations. Please try again.",
        )


@router.post("/conversations/{conversation_id}/messages", response_model=TurnResponse)
async def send_message(
    conversation_id: str,
    request: SendMessageRequest,
    guide: TravelGuide = Depends(get_guide),
):
    """Store the user's message, reply, and persist the reply."""
    try:
        result = await guide.process_user_message(conversation_id, request.text)
    except ConversationNotFoundError:
        raise HTTPException(status_code=404, detail="Conversation not found")
    except Exception as e:
        logger.error(f"Error processing message: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to process message. Please try again.",
        )

    return TurnResponse(
        conversation_id=conversation_id,
        reply=result["response"],
        context=result["conversation"].get("context") or {},
    )
