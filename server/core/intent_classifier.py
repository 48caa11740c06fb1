"""Rule-based intent classifier and responder for the travel chat.

Each turn is matched against an ordered list of rules. The first rule whose
predicate accepts the utterance produces the reply; later rules are never
consulted. There is no error path: anything unrecognised lands in the
fallback rule, so the assistant always answers.
"""
import logging
import random
from typing import Any, Callable, List, Mapping, NamedTuple, Optional

from models.conversation import ExtractedEntities, IntentResponse, Timeframe
from core.entity_extractor import extract_entities, normalize
from core.knowledge_base import (
    CROWD_LEVELS,
    FORECASTS,
    METRO_STATIONS,
    WALK_MINUTES_RANGE,
    WEATHER_CONDITIONS,
    KnowledgeBase,
    get_default_knowledge_base,
)

logger = logging.getLogger(__name__)

GREETING_RESPONSE = (
    "Hello! I'm your personal travel guide for Athens. I can help you discover historical "
    "sites, find interesting tours, or provide information about local attractions. What are "
    "you interested in exploring today?"
)

FALLBACK_RESPONSE = (
    "I'm here to help with your Athens travel experience! You can ask me about specific "
    "attractions, tour recommendations, directions, or local tips. What would you like to "
    "explore?"
)

CROWD_POIS = ["acropolis001", "agora001", "plaka001"]
DEFAULT_TOURS = ["athens_history_001", "athens_culture_001", "athens_food_001", "athens_art_001"]


class Turn(NamedTuple):
    """Everything a rule may look at for one utterance."""
    text: str  # normalized
    entities: ExtractedEntities
    context: Mapping[str, Any]


class IntentRule(NamedTuple):
    name: str
    matches: Callable[[Turn], bool]
    respond: Callable[[Turn], IntentResponse]


def _contains_any(*phrases: str) -> Callable[[Turn], bool]:
    return lambda turn: any(phrase in turn.text for phrase in phrases)


def _capitalize(word: str) -> str:
    return word[:1].upper() + word[1:]


class IntentClassifier:
    """
    Classify an utterance and compose the assistant's reply.

    Stateless apart from read-only tables: conversational memory comes in
    through ``context`` and goes out as ``IntentResponse.context_patch``.
    ``rng`` only picks flavor text (crowd levels, weather, stations); pass a
    seeded ``random.Random`` for reproducible replies.
    """

    def __init__(
        self,
        knowledge_base: Optional[KnowledgeBase] = None,
        rng: Optional[random.Random] = None,
    ):
        self.kb = knowledge_base or get_default_knowledge_base()
        self.rng = rng or random.Random()
        self.rules: List[IntentRule] = [
            IntentRule("greeting", _contains_any("hello", "hi ", "hey"), self._greeting),
            IntentRule("crowd", _contains_any("crowd", "busy", "wait time"), self._crowd),
            IntentRule("tour", _contains_any("tour", "guide"), self._tour),
            IntentRule("location", lambda turn: bool(turn.entities.locations), self._location),
            IntentRule(
                "recommend", _contains_any("recommend", "suggest", "what should"), self._recommend
            ),
            IntentRule(
                "directions",
                lambda turn: "how" in turn.text and ("get" in turn.text or "go" in turn.text),
                self._directions,
            ),
            IntentRule("weather", _contains_any("weather", "temperature", "rain"), self._weather),
            IntentRule("food", _contains_any("food", "eat", "restaurant", "cafe"), self._food),
            IntentRule("history", _contains_any("history", "tell me about"), self._history),
        ]

    def classify(
        self, utterance: str, context: Optional[Mapping[str, Any]] = None
    ) -> IntentResponse:
        """Produce the reply for one turn. Never raises for string input."""
        text = normalize(utterance)
        turn = Turn(text=text, entities=extract_entities(text), context=context or {})

        for rule in self.rules:
            if rule.matches(turn):
                logger.debug(f"Intent rule matched: {rule.name}")
                response = rule.respond(turn)
                response.intent = rule.name
                return response

        logger.debug("No intent rule matched, using fallback")
        return IntentResponse(content=FALLBACK_RESPONSE, intent="fallback")

    # ------------------------------------------------------------------
    # Flavor text
    # ------------------------------------------------------------------

    def _crowd_level(self) -> str:
        return self.rng.choice(CROWD_LEVELS)

    def _metro_station(self) -> str:
        return self.rng.choice(METRO_STATIONS)

    def _walk_minutes(self) -> int:
        return self.rng.randint(*WALK_MINUTES_RANGE)

    # ------------------------------------------------------------------
    # Rule handlers
    # ------------------------------------------------------------------

    def _greeting(self, turn: Turn) -> IntentResponse:
        return IntentResponse(content=GREETING_RESPONSE)

    def _crowd(self, turn: Turn) -> IntentResponse:
        content = (
            "Based on current data, here are the crowd levels at popular attractions:\n\n"
            f"- Acropolis: {self._crowd_level()} ({self.kb.crowd_time_hint('acropolis')})\n"
            f"- Ancient Agora: {self._crowd_level()} ({self.kb.crowd_time_hint('agora')})\n"
            f"- Plaka District: {self._crowd_level()} (best in the evening)\n\n"
            "Would you like me to suggest a less crowded route?"
        )
        return IntentResponse(content=content, related_pois=list(CROWD_POIS))

    def _tour(self, turn: Turn) -> IntentResponse:
        if turn.entities.interests:
            interest = turn.entities.interests[0]
            content = (
                f"I have several {interest}-focused tours that might interest you. The "
                f"\"Athens {_capitalize(interest)} Explorer\" is a popular 3-hour tour covering "
                f"the main {interest} sites in central Athens. Would you like more details about "
                "this tour?"
            )
            return IntentResponse(content=content, related_tours=[f"athens_{interest}_001"])

        content = (
            "I can recommend several tours based on your interests. We have historical tours "
            "exploring ancient ruins, cultural tours featuring local traditions, food tours with "
            "authentic Greek cuisine, and art tours showcasing museums and galleries. What type "
            "of experience are you looking for?"
        )
        return IntentResponse(content=content, related_tours=list(DEFAULT_TOURS))

    def _location(self, turn: Turn) -> IntentResponse:
        fact = self.kb.lookup_poi_fact(turn.entities.locations[0])
        content = (
            f"{fact.description}\n\n"
            f"Current crowd level: {self._crowd_level()}\n"
            f"Best time to visit: {fact.best_time}\n\n"
            "Would you like directions or more detailed information?"
        )
        return IntentResponse(
            content=content,
            related_pois=[fact.id],
            context_patch={"lastPOI": fact.id},
        )

    def _recommend(self, turn: Turn) -> IntentResponse:
        entities = turn.entities
        if entities.timeframe != Timeframe.NONE:
            content = (
                f"For a {entities.timeframe.value} activity, I'd recommend "
                f"{self.kb.recommend_for_time(entities.timeframe.value)}. Would you like more "
                "information about this?"
            )
        elif entities.interests:
            interest = entities.interests[0]
            content = (
                f"If you're interested in {interest}, I'd recommend visiting "
                f"{self.kb.recommend_for_interest(interest)}. Would you like to know more about "
                "this place?"
            )
        else:
            content = (
                "I'd be happy to make some recommendations! Are you interested in historical "
                "sites, cultural experiences, local cuisine, or perhaps something off the beaten "
                "path?"
            )
        return IntentResponse(content=content)

    def _directions(self, turn: Turn) -> IntentResponse:
        # Conversational memory wins over anything in the current utterance
        last_poi = turn.context.get("lastPOI")
        if last_poi:
            fact = self.kb.lookup_poi_fact_by_id(str(last_poi))
            content = (
                f"To get to the {fact.name}, you can take the metro to {self._metro_station()} "
                "station and walk about 10 minutes. Alternatively, bus routes 040 and 230 stop "
                "nearby. Would you like me to show you the route on the map?"
            )
            return IntentResponse(content=content, related_pois=[fact.id])

        if turn.entities.locations:
            location = turn.entities.locations[0]
            content = (
                f"To reach the {_capitalize(location)}, take the metro to "
                f"{self._metro_station()} station. It's about a {self._walk_minutes()} minute "
                "walk from there. Would you like me to show you the route?"
            )
            return IntentResponse(
                content=content, related_pois=[self.kb.lookup_poi_fact(location).id]
            )

        return IntentResponse(
            content="I can help you with directions! Which place are you trying to reach?"
        )

    def _weather(self, turn: Turn) -> IntentResponse:
        content = (
            f"The current weather in Athens is {self.rng.choice(WEATHER_CONDITIONS)}. For today, "
            f"the forecast shows {self.rng.choice(FORECASTS)}. Would you like me to recommend "
            "activities suitable for this weather?"
        )
        return IntentResponse(content=content)

    def _food(self, turn: Turn) -> IntentResponse:
        content = (
            "If you're looking for food, I can recommend several options:\n\n"
            "1. Traditional Taverna in Plaka - authentic Greek dishes in a charming setting\n"
            "2. Modern Fusion Restaurant near Syntagma - creative takes on Mediterranean cuisine\n"
            "3. Street Food near Monastiraki - quick and delicious local specialties\n\n"
            "Do any of these interest you? I can provide more details or directions."
        )
        return IntentResponse(content=content)

    def _history(self, turn: Turn) -> IntentResponse:
        if turn.entities.locations:
            location = turn.entities.locations[0]
            return IntentResponse(
                content=self.kb.lookup_history(location),
                related_pois=[self.kb.lookup_poi_fact(location).id],
            )

        content = (
            "Athens has a rich history spanning over 3,400 years, making it one of the oldest "
            "cities in the world. The city is dominated by the Acropolis, a hilltop citadel "
            "topped with ancient buildings like the Parthenon temple. Athens was the heart of "
            "Ancient Greece, a powerful civilization and empire that established democracy, "
            "Western philosophy, literature, and drama. Would you like to know more about a "
            "specific historical period or monument?"
        )
        return IntentResponse(content=content)
