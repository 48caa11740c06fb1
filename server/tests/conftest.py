"""Shared test fixtures and configuration."""
import sys
import os
import random

import pytest

# Ensure the server package is importable
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Set required environment variables BEFORE any application module is imported.
# These are dummy values used only in tests: no real connections are made.
os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_KEY", "test-key-for-unit-tests")

from core.intent_classifier import IntentClassifier  # noqa: E402


# Coordinates used by the map view's seed data
ACROPOLIS = {"latitude": 37.9715, "longitude": 23.7268}
AGORA = {"latitude": 37.9755, "longitude": 23.7212}
PLAKA = {"latitude": 37.9692, "longitude": 23.7276}


@pytest.fixture
def poi_rows():
    return [
        {"id": "agora001", "name": "Ancient Agora", "coordinates": AGORA, "crowd_level": 4},
        {"id": "acropolis001", "name": "Acropolis", "coordinates": ACROPOLIS, "crowd_level": 8},
        {"id": "plaka001", "name": "Plaka District", "coordinates": PLAKA, "crowd_level": 6},
    ]


@pytest.fixture
def classifier() -> IntentClassifier:
    return IntentClassifier(rng=random.Random(1234))
