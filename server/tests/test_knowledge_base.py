"""Tests for the static fact tables and their lookups."""
import json

import pytest

from core.knowledge_base import (
    DEFAULT_HISTORY,
    DEFAULT_RECOMMENDATION,
    POI_FACTS,
    KnowledgeBase,
    get_default_knowledge_base,
)


@pytest.fixture
def kb() -> KnowledgeBase:
    return KnowledgeBase()


class TestPoiFactLookup:
    def test_exact_key(self, kb):
        fact = kb.lookup_poi_fact("agora")
        assert fact.id == "agora001"
        assert fact.name == "Ancient Agora"
        assert fact.best_time == "Mid-morning or late afternoon"

    def test_containment(self, kb):
        assert kb.lookup_poi_fact("the old plaka streets").id == "plaka001"

    def test_declaration_order_breaks_ties(self, kb):
        # Both "acropolis" and "museum" are contained; acropolis is declared first
        assert kb.lookup_poi_fact("acropolis museum").id == "acropolis001"

    def test_default(self, kb):
        fact = kb.lookup_poi_fact("lycabettus")
        assert fact.id == "athens001"
        assert fact.name == "Athens"

    def test_keys_keep_declaration_order(self, kb):
        assert kb.poi_keys == list(POI_FACTS)

    def test_lookup_by_id(self, kb):
        assert kb.lookup_poi_fact_by_id("museum001").name == "Acropolis Museum"
        assert kb.lookup_poi_fact_by_id("athens001").name == "Athens"

    def test_lookup_by_unknown_id_falls_back_to_text(self, kb):
        assert kb.lookup_poi_fact_by_id("plaka_night_walk").id == "plaka001"
        assert kb.lookup_poi_fact_by_id("nowhere").id == "athens001"


class TestHistoryLookup:
    def test_known(self, kb):
        assert "Pericles" in kb.lookup_history("acropolis")

    def test_default(self, kb):
        assert kb.lookup_history("syntagma") == DEFAULT_HISTORY


class TestRecommendations:
    def test_by_time(self, kb):
        assert "Acropolis" in kb.recommend_for_time("morning")
        assert kb.recommend_for_time("none") == kb.recommend_for_time("evening")

    def test_by_interest(self, kb):
        assert "Benaki Museum" in kb.recommend_for_interest("art")
        assert kb.recommend_for_interest("skiing") == DEFAULT_RECOMMENDATION

    def test_crowd_time_hint(self, kb):
        assert kb.crowd_time_hint("plaka") == "usually fine any time"


class TestFromFile:
    def test_override_tables(self, tmp_path):
        path = tmp_path / "kb.json"
        path.write_text(json.dumps({
            "poi_facts": {
                "lighthouse": {
                    "id": "light001",
                    "name": "Old Lighthouse",
                    "description": "A lighthouse.",
                    "bestTime": "Sunset",
                }
            },
            "history_facts": {"lighthouse": "Built in 1900."},
        }), encoding="utf-8")

        kb = KnowledgeBase.from_file(path)
        assert kb.poi_keys == ["lighthouse"]
        assert kb.lookup_poi_fact("the lighthouse").best_time == "Sunset"
        assert kb.lookup_history("lighthouse") == "Built in 1900."
        # Missing sections fall back to the embedded tables
        assert kb.lookup_poi_fact("acropolis").id == "athens001"
        assert "Benaki Museum" in kb.recommend_for_interest("art")

    def test_invalid_fact_rejected(self, tmp_path):
        path = tmp_path / "kb.json"
        path.write_text(json.dumps({"poi_facts": {"x": {"id": "x"}}}), encoding="utf-8")
        with pytest.raises(ValueError):
            KnowledgeBase.from_file(path)


def test_default_knowledge_base_is_shared():
    assert get_default_knowledge_base() is get_default_knowledge_base()
