"""Tests for keyword entity extraction."""
import pytest

from core.entity_extractor import (
    detect_timeframe,
    extract_entities,
    match_keywords,
    normalize,
)
from models.conversation import Timeframe


class TestNormalize:
    def test_lowercase_and_trim(self):
        assert normalize("  Tell me about the ACROPOLIS \n") == "tell me about the acropolis"

    def test_none_becomes_empty(self):
        assert normalize(None) == ""


class TestLocations:
    def test_vocabulary_order_not_input_order(self):
        entities = extract_entities("plaka then the acropolis")
        assert entities.locations == ["acropolis", "plaka"]

    def test_substring_match(self):
        assert extract_entities("any good museums?").locations == ["museum"]

    def test_overlapping_place_names(self):
        assert extract_entities("acropolis museum").locations == ["acropolis", "museum"]

    def test_keyword_added_once(self):
        assert extract_entities("agora agora agora").locations == ["agora"]

    def test_none_found(self):
        assert extract_entities("where is the nearest pharmacy").locations == []


class TestInterests:
    def test_multiple(self):
        entities = extract_entities("i love modern art and food")
        assert entities.interests == ["food", "art", "modern"]

    def test_substring_semantics(self):
        # "party" contains "art"
        assert match_keywords("party time", ["art"]) == ["art"]


class TestTimeframe:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("breakfast spots", Timeframe.MORNING),
            ("this morning", Timeframe.MORNING),
            ("lunch nearby", Timeframe.AFTERNOON),
            ("late afternoon", Timeframe.AFTERNOON),
            ("dinner ideas", Timeframe.EVENING),
            ("night out", Timeframe.EVENING),
            ("something fun", Timeframe.NONE),
        ],
    )
    def test_buckets(self, text, expected):
        assert detect_timeframe(text) == expected

    def test_first_match_wins(self):
        # Both morning and evening words present; morning is checked first
        assert detect_timeframe("breakfast or dinner") == Timeframe.MORNING

    def test_afternoon_beats_evening(self):
        assert detect_timeframe("lunch and a night walk") == Timeframe.AFTERNOON


def test_empty_text():
    entities = extract_entities("")
    assert entities.locations == []
    assert entities.interests == []
    assert entities.timeframe == Timeframe.NONE
