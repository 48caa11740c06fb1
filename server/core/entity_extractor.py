"""Keyword-based entity extraction for chat utterances."""
from typing import List, Sequence

from models.conversation import ExtractedEntities, Timeframe

# Plain substring matching: "museums" still hits "museum", and so does
# "acropolis museum" hit both "acropolis" and "museum".
LOCATION_KEYWORDS = [
    "acropolis", "parthenon", "temple", "museum", "agora",
    "plaka", "monastiraki", "syntagma", "athens", "greece",
]

INTEREST_KEYWORDS = [
    "history", "architecture", "food", "art", "shopping",
    "culture", "local", "ancient", "modern", "photography",
]

# Checked top to bottom, first hit wins
TIMEFRAME_KEYWORDS = [
    (Timeframe.MORNING, ("morning", "breakfast")),
    (Timeframe.AFTERNOON, ("afternoon", "lunch")),
    (Timeframe.EVENING, ("evening", "dinner", "night")),
]


def normalize(utterance: str) -> str:
    return (utterance or "").lower().strip()


def match_keywords(text: str, vocabulary: Sequence[str]) -> List[str]:
    """Vocabulary words contained in ``text``, in vocabulary order."""
    return [keyword for keyword in vocabulary if keyword in text]


def detect_timeframe(text: str) -> Timeframe:
    for timeframe, keywords in TIMEFRAME_KEYWORDS:
        if any(keyword in text for keyword in keywords):
            return timeframe
    return Timeframe.NONE


def extract_entities(text: str) -> ExtractedEntities:
    """
    Extract locations, interests and a timeframe from normalized text.

    Callers are expected to pass the output of ``normalize``.
    """
    return ExtractedEntities(
        locations=match_keywords(text, LOCATION_KEYWORDS),
        interests=match_keywords(text, INTEREST_KEYWORDS),
        timeframe=detect_timeframe(text),
    )
