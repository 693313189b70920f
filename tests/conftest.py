import os
import random

os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

import pytest
from fastapi.testclient import TestClient

from docqa.main import app
from docqa.services.pipeline import new_rng


class PinnedRandom(random.Random):
    """Seeded generator whose randint always lands on ``value`` (clamped to the range)."""

    def __init__(self, value=0, seed=0):
        super().__init__(seed)
        self.value = value

    def randint(self, a, b):
        return min(max(self.value, a), b)


class ExhaustedRandom(random.Random):
    """Fails the test if any randomness is drawn."""

    def random(self):
        raise AssertionError("random source should not be used")

    def randint(self, a, b):
        raise AssertionError("random source should not be used")

    def choice(self, seq):
        raise AssertionError("random source should not be used")

    def randrange(self, *args, **kwargs):
        raise AssertionError("random source should not be used")


@pytest.fixture
def pinned():
    """Factory for generators whose randint is fixed: ``pinned(3)``."""
    return PinnedRandom


@pytest.fixture
def exhausted_rng():
    return ExhaustedRandom()


@pytest.fixture
def client():
    app.dependency_overrides[new_rng] = lambda: PinnedRandom(0, seed=42)
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
