"""
Shared singleton dependencies for the application.

The knowledge base and the classifier are built once at startup and reused
across requests. Repositories are thin wrappers over the Supabase client and
are created per request.
"""
import logging
import random
from typing import Optional

from config.settings import settings
from database.client import get_supabase
from database.repositories.conversation_repo import ConversationRepository
from database.repositories.poi_repo import POIRepository
from database.repositories.tour_repo import TourRepository
from database.repositories.user_repo import UserRepository
from core.knowledge_base import KnowledgeBase, get_default_knowledge_base
from core.intent_classifier import IntentClassifier
from core.guide import TravelGuide

logger = logging.getLogger(__name__)

# Module-level singletons: initialized once via init_dependencies()
_knowledge_base: Optional[KnowledgeBase] = None
_classifier: Optional[IntentClassifier] = None


def init_dependencies() -> None:
    """
    Initialize all shared singletons. Called once at application startup.
    """
    global _knowledge_base, _classifier

    logger.info("Initializing shared dependencies...")

    if settings.KNOWLEDGE_BASE_FILE:
        _knowledge_base = KnowledgeBase.from_file(settings.KNOWLEDGE_BASE_FILE)
    else:
        _knowledge_base = get_default_knowledge_base()

    rng = random.Random(settings.RESPONSE_SEED) if settings.RESPONSE_SEED is not None else None
    _classifier = IntentClassifier(_knowledge_base, rng=rng)

    logger.info(
        f"Dependencies initialized: {len(_knowledge_base.poi_keys)} places, "
        f"{len(_classifier.rules)} intent rules"
    )


def shutdown_dependencies() -> None:
    """Drop singletons on shutdown."""
    global _knowledge_base, _classifier
    _knowledge_base = None
    _classifier = None


def get_classifier() -> IntentClassifier:
    if _classifier is None:
        raise RuntimeError("Dependencies not initialized. Call init_dependencies() first.")
    return _classifier


def get_conversation_repo() -> ConversationRepository:
    return ConversationRepository(get_supabase())


def get_poi_repo() -> POIRepository:
    return POIRepository(get_supabase())


def get_tour_repo() -> TourRepository:
    return TourRepository(get_supabase())


def get_user_repo() -> UserRepository:
    return UserRepository(get_supabase())


def get_guide() -> TravelGuide:
    """
    Build a TravelGuide around the shared classifier.

    WARNING: the guide and its repository are created per-request and MUST
    remain stateless.
    """
    return TravelGuide(
        conversation_repo=get_conversation_repo(),
        classifier=get_classifier(),
    )
