"""
- Keep the app away from the network (no random.org during tests)
- Provide a fresh in-memory store per test and override FastAPI's get_store so routes use it.
- Provide a client fixture (TestClient(app)) that already has the override applied.
- Provide a seeded random source so guess sequences are reproducible.
"""
import os
import random

import pytest

from fastapi.testclient import TestClient

# Set before the app module reads its settings
os.environ.setdefault("RANDOM_ORG_ENABLED", "0")

from bullscows.main import app, get_store
from bullscows.store import GameStore


class FirstChoice:
    """Deterministic stand-in for random.Random: always the first option, never shuffles."""

    def choice(self, seq):
        return seq[0]

    def shuffle(self, x):
        pass


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)

@pytest.fixture
def first_choice() -> FirstChoice:
    return FirstChoice()

@pytest.fixture
def store() -> GameStore:
    return GameStore()

@pytest.fixture(autouse=True)
def override_store(store):
    """Force the app to use our test store for every request."""
    app.dependency_overrides[get_store] = lambda: store
    yield
    app.dependency_overrides.clear()

@pytest.fixture
def client():
    # Talks to the FastAPI app in-process; sessions land in the per-test store.
    return TestClient(app)
