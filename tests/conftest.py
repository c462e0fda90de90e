from contextlib import contextmanager

import pytest
from fastapi.testclient import TestClient

from clarity.ai import Attempt, GenerationUnavailable
from clarity.config import Settings, get_settings
from clarity.deps import get_generation_client, get_local_guide
from clarity.main import app
from clarity.models import PersonalityProfile


SAMPLE_REPLY = """SECTION I — The Reading
The Atlas sat on your shoulders all year, and you carried it well.

Next year is a rebalancing, not a reinvention.

SECTION II — The Path Opens
Lean on containers that hold you.
- A weekly class with a stable cohort
  supports The Table and The Steady Flame.
- A beginner-friendly movement practice with consistent times.

The first gate is already open."""


def unavailable() -> GenerationUnavailable:
    return GenerationUnavailable([Attempt("model-a", "HTTP 500: boom"), Attempt("model-b", "HTTP 503: down")])


class FakeGenerator:
    """Stands in for GenerationClient. Replies are returned in order; an exception in the list is raised."""

    def __init__(self, replies=None):
        self.replies = list(replies or [])
        self.calls = []

    def complete(self, messages, **kwargs):
        self.calls.append({"messages": messages, **kwargs})
        reply = self.replies.pop(0) if self.replies else ""
        if isinstance(reply, Exception):
            raise reply
        return reply

    def generate(self, system_prompt, user_prompt, **kwargs):
        return self.complete(
            [{"role": "system", "content": system_prompt}, {"role": "user", "content": user_prompt}],
            **kwargs,
        )


class FakeGuide:
    def __init__(self, result=None):
        self.result = result or {
            "success": True,
            "category": "gym",
            "location": "Austin, TX, USA",
            "recommendations": [
                {"name": "Iron Temple", "type": "fitness_centre", "address": "12 Main St"},
                {"name": "Local venue", "type": "sports_centre", "address": "Address unavailable"},
            ],
            "personalizedNote": "Start small - consistency matters more than intensity!",
        }
        self.calls = []

    def recommend(self, location, category, profile):
        self.calls.append((location, category))
        return self.result


def profile_data(**overrides):
    data = {
        "openness": 50,
        "conscientiousness": 50,
        "extraversion": 50,
        "agreeableness": 50,
        "neuroticism": 30,
    }
    data.update(overrides)
    return data


def make_profile(**overrides) -> PersonalityProfile:
    return PersonalityProfile(**profile_data(**overrides))


@pytest.fixture
def settings(tmp_path):
    return Settings(db_path=str(tmp_path / "clarity.db"), openrouter_api_key="test-key")


@pytest.fixture
def generator():
    return FakeGenerator([SAMPLE_REPLY])


@pytest.fixture
def guide():
    return FakeGuide()


@contextmanager
def serve(settings, generator, guide):
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_generation_client] = lambda: generator
    app.dependency_overrides[get_local_guide] = lambda: guide
    try:
        with TestClient(app) as c:
            yield c
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def client(settings, generator, guide):
    with serve(settings, generator, guide) as c:
        yield c
