"""Static travel facts used by the chat assistant.

The tables are configuration, not state: they are built once at startup
(embedded defaults, optionally overridden from a JSON file) and only read
afterwards. Key order matters because place lookups return the first key
contained in the query text.
"""
import json
import logging
from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class PoiFact(BaseModel):
    id: str
    name: str
    description: str
    best_time: str = Field(..., alias="bestTime")

    class Config:
        populate_by_name = True


# Declaration order is the tie-break for overlapping keys
# ("acropolis museum" resolves to "acropolis").
POI_FACTS: dict[str, dict] = {
    "acropolis": {
        "id": "acropolis001",
        "name": "Acropolis",
        "description": (
            "The Acropolis of Athens is an ancient citadel located on a rocky outcrop above the "
            "city of Athens. It contains the remains of several ancient buildings of great "
            "architectural and historical significance, the most famous being the Parthenon."
        ),
        "bestTime": "Early morning or late afternoon",
    },
    "parthenon": {
        "id": "parthenon001",
        "name": "Parthenon",
        "description": (
            "The Parthenon is a former temple on the Athenian Acropolis, dedicated to the goddess "
            "Athena, whom the people of Athens considered their patron deity. Construction began "
            "in 447 BC and was completed in 438 BC."
        ),
        "bestTime": "Early morning for the best light",
    },
    "agora": {
        "id": "agora001",
        "name": "Ancient Agora",
        "description": (
            "The Ancient Agora of Athens was the heart of ancient Athens, serving as the "
            "commercial, political, and social center of the city. It features the "
            "well-preserved Temple of Hephaestus and the reconstructed Stoa of Attalos."
        ),
        "bestTime": "Mid-morning or late afternoon",
    },
    "plaka": {
        "id": "plaka001",
        "name": "Plaka District",
        "description": (
            "Plaka is the oldest neighborhood of Athens, built on the northeastern slopes of the "
            "Acropolis. With its narrow streets, neoclassical architecture, and abundance of "
            "shops and restaurants, it's a charming area to explore."
        ),
        "bestTime": "Evening for dinner and nightlife",
    },
    "temple": {
        "id": "zeus001",
        "name": "Temple of Olympian Zeus",
        "description": (
            "The Temple of Olympian Zeus is a colossal ruined temple in the center of Athens "
            "dedicated to Zeus, king of the Olympian gods. Construction began in the 6th century "
            "BC but wasn't completed until the 2nd century AD under Roman Emperor Hadrian."
        ),
        "bestTime": "Late afternoon for golden hour photography",
    },
    "museum": {
        "id": "museum001",
        "name": "Acropolis Museum",
        "description": (
            "The Acropolis Museum is an archaeological museum focused on the findings of the "
            "archaeological site of the Acropolis of Athens. The museum was built to house every "
            "artifact found on the Acropolis and its slopes."
        ),
        "bestTime": "Weekday mornings are least crowded",
    },
    "monastiraki": {
        "id": "monastiraki001",
        "name": "Monastiraki Square",
        "description": (
            "Monastiraki is a flea market neighborhood in the old town of Athens, and is one of "
            "the principal shopping districts in Athens. The area is home to clothing boutiques, "
            "souvenir shops, and specialty stores."
        ),
        "bestTime": "Sunday morning for the full flea market experience",
    },
    "syntagma": {
        "id": "syntagma001",
        "name": "Syntagma Square",
        "description": (
            "Syntagma Square is the central square of Athens. The square is named after the "
            "Constitution that Otto, the first King of Greece, was obliged to grant after a "
            "popular and military uprising in 1843. It's home to the Greek Parliament building."
        ),
        "bestTime": "On the hour to watch the changing of the guard ceremony",
    },
}

DEFAULT_POI_FACT: dict = {
    "id": "athens001",
    "name": "Athens",
    "description": (
        "Athens is the capital and largest city of Greece. With a history spanning over 3,400 "
        "years, it's widely referred to as the cradle of Western civilization and the "
        "birthplace of democracy."
    ),
    "bestTime": "Spring and fall offer the best weather",
}

HISTORY_FACTS: dict[str, str] = {
    "acropolis": (
        "The Acropolis has been inhabited since the 4th millennium BC. In the 5th century BC, "
        "under the leadership of Pericles, Athens embarked on an ambitious building program "
        "that included the Parthenon, Propylaea, Erechtheion, and temple of Athena Nike. These "
        "monuments were designed by the architects Ictinus and Callicrates, while the sculptor "
        "Phidias supervised the entire project. The Acropolis suffered damage during a Venetian "
        "siege in 1687 when a cannonball hit the Parthenon, which was being used as a gunpowder "
        "magazine by the Ottoman Turks."
    ),
    "parthenon": (
        "The Parthenon was built between 447-432 BC as a temple dedicated to the goddess Athena "
        "Parthenos. It replaced an older temple that was destroyed by the Persians in 480 BC. "
        "The temple contained a massive gold and ivory statue of Athena created by the sculptor "
        "Phidias. Over the centuries, the Parthenon served as a Byzantine church, a Catholic "
        "church, and an Ottoman mosque. In the early 19th century, Lord Elgin removed many of "
        "the marble sculptures, now known as the Elgin Marbles, which are displayed in the "
        "British Museum."
    ),
    "agora": (
        "The Ancient Agora was the heart of public life in Athens for about 5,000 years. It "
        "served as a marketplace and a center for Athenian democracy where citizens gathered to "
        "discuss politics, philosophy, and daily affairs. Socrates engaged in philosophical "
        "debates here, and St. Paul preached to the Athenians at the Agora in 49 AD. The site "
        "contains the well-preserved Temple of Hephaestus, built around 450 BC, and the Stoa of "
        "Attalos, a reconstructed ancient shopping center that now houses the Museum of the "
        "Ancient Agora."
    ),
    "plaka": (
        "Plaka is built on top of the residential areas of the ancient town of Athens. It has "
        "been continuously inhabited for thousands of years, making it one of the oldest "
        "neighborhoods in Europe. During the Ottoman rule of Greece, Plaka was the Turkish "
        "quarter of Athens. After Greek independence in the 19th century, the area became home "
        "to many neoclassical buildings. Despite some damage during World War II, Plaka has "
        "maintained its traditional character and is now protected by heritage laws."
    ),
}

DEFAULT_HISTORY = (
    "Athens has a history spanning over 3,400 years, making it one of the world's oldest "
    "cities. Named after the goddess Athena, it became the leading city of Ancient Greece in "
    "the first millennium BC and produced many important cultural and intellectual "
    "achievements, including democracy, Western philosophy, literature, and the Olympic Games. "
    "After periods of Roman, Byzantine, and Ottoman rule, Athens became the capital of the "
    "independent Greek state in 1834. The city has experienced significant growth and "
    "transformation, particularly after World War II, evolving into a modern metropolis while "
    "preserving its ancient landmarks."
)

RECOMMENDATIONS_BY_TIME: dict[str, str] = {
    "morning": "visiting the Acropolis before the crowds and heat build up",
    "afternoon": "exploring the air-conditioned National Archaeological Museum",
    "evening": (
        "taking a stroll through the illuminated Plaka district and enjoying dinner at a "
        "rooftop restaurant with Acropolis views"
    ),
}

RECOMMENDATIONS_BY_INTEREST: dict[str, str] = {
    "history": "the Ancient Agora, where you can walk in the footsteps of Socrates and Plato",
    "architecture": "the Parthenon, a masterpiece of Doric architecture",
    "food": "the Central Market and surrounding tavernas for authentic Greek cuisine",
    "art": "the Benaki Museum, featuring Greek art from prehistoric to modern times",
    "shopping": "Ermou Street and Monastiraki Flea Market for everything from boutiques to antiques",
    "culture": "the Stavros Niarchos Foundation Cultural Center, a modern architectural landmark",
    "local": "the neighborhood of Exarchia, known for its vibrant street art and alternative scene",
    "ancient": "the Temple of Olympian Zeus, one of the largest temples of the ancient world",
    "modern": "the National Museum of Contemporary Art, showcasing cutting-edge Greek artists",
    "photography": "Lycabettus Hill, offering panoramic views of the city perfect for photography",
}

DEFAULT_RECOMMENDATION = "the Athens Walking Tour, which gives you a great overview of the city"

CROWD_TIME_HINTS: dict[str, str] = {
    "acropolis": "best before 10am or after 4pm",
    "agora": "generally uncrowded in the afternoon",
}

DEFAULT_CROWD_TIME_HINT = "usually fine any time"

# Flavor text pools
CROWD_LEVELS = ["Low (2/10)", "Moderate (5/10)", "High (8/10)"]
METRO_STATIONS = ["Acropolis", "Syntagma", "Monastiraki", "Thissio"]
WEATHER_CONDITIONS = [
    "sunny and warm at 28°C",
    "partly cloudy at 25°C",
    "clear skies at 27°C",
    "a bit windy at 24°C",
]
FORECASTS = [
    "continued sunshine throughout the day",
    "some clouds in the afternoon but no rain expected",
    "temperatures cooling slightly in the evening",
    "perfect conditions for outdoor exploration",
]
WALK_MINUTES_RANGE = (5, 14)  # inclusive


class KnowledgeBase:
    """Read-only lookup tables for places, history and recommendations."""

    def __init__(
        self,
        poi_facts: Optional[dict[str, dict]] = None,
        history_facts: Optional[dict[str, str]] = None,
        default_poi_fact: Optional[dict] = None,
        default_history: str = DEFAULT_HISTORY,
        recommendations_by_time: Optional[dict[str, str]] = None,
        recommendations_by_interest: Optional[dict[str, str]] = None,
    ):
        raw_facts = POI_FACTS if poi_facts is None else poi_facts
        self._poi_facts = {
            key: PoiFact.model_validate(value) for key, value in raw_facts.items()
        }
        self._poi_facts_by_id = {fact.id: fact for fact in self._poi_facts.values()}
        self._history_facts = dict(HISTORY_FACTS if history_facts is None else history_facts)
        self.default_poi_fact = PoiFact.model_validate(default_poi_fact or DEFAULT_POI_FACT)
        self.default_history = default_history
        self._by_time = dict(
            RECOMMENDATIONS_BY_TIME if recommendations_by_time is None else recommendations_by_time
        )
        self._by_interest = dict(
            RECOMMENDATIONS_BY_INTEREST
            if recommendations_by_interest is None
            else recommendations_by_interest
        )

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "KnowledgeBase":
        """
        Load tables from a JSON file.

        Expected keys (all optional, missing ones fall back to the embedded
        tables): ``poi_facts``, ``history_facts``, ``default_poi_fact``,
        ``default_history``, ``recommendations_by_time``,
        ``recommendations_by_interest``.
        """
        with open(path, encoding="utf-8") as f:
            data = json.load(f)

        kb = cls(
            poi_facts=data.get("poi_facts"),
            history_facts=data.get("history_facts"),
            default_poi_fact=data.get("default_poi_fact"),
            default_history=data.get("default_history", DEFAULT_HISTORY),
            recommendations_by_time=data.get("recommendations_by_time"),
            recommendations_by_interest=data.get("recommendations_by_interest"),
        )
        logger.info(f"Loaded knowledge base from {path}: {len(kb.poi_keys)} places")
        return kb

    @property
    def poi_keys(self) -> list[str]:
        return list(self._poi_facts)

    def lookup_poi_fact(self, text: str) -> PoiFact:
        """Return the first fact whose key is contained in ``text``, else the default."""
        for key, fact in self._poi_facts.items():
            if key in text:
                return fact
        return self.default_poi_fact

    def lookup_poi_fact_by_id(self, poi_id: str) -> PoiFact:
        """Resolve a stored POI id (e.g. ``lastPOI``), falling back to text lookup."""
        fact = self._poi_facts_by_id.get(poi_id)
        if fact is not None:
            return fact
        if poi_id == self.default_poi_fact.id:
            return self.default_poi_fact
        return self.lookup_poi_fact(poi_id)

    def lookup_history(self, text: str) -> str:
        for key, history in self._history_facts.items():
            if key in text:
                return history
        return self.default_history

    def recommend_for_time(self, timeframe: str) -> str:
        # Anything that isn't morning/afternoon gets the evening suggestion
        return self._by_time.get(timeframe, self._by_time.get("evening", DEFAULT_RECOMMENDATION))

    def recommend_for_interest(self, interest: str) -> str:
        return self._by_interest.get(interest, DEFAULT_RECOMMENDATION)

    @staticmethod
    def crowd_time_hint(place_key: str) -> str:
        return CROWD_TIME_HINTS.get(place_key, DEFAULT_CROWD_TIME_HINT)


_default_kb: Optional[KnowledgeBase] = None


def get_default_knowledge_base() -> KnowledgeBase:
    """Embedded tables, built on first use."""
    global _default_kb
    if _default_kb is None:
        _default_kb = KnowledgeBase()
    return _default_kb
