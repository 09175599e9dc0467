"""Shared test fixtures."""
from __future__ import annotations

import json

import pytest
from fastapi.testclient import TestClient

from quiz_api.identity import InvalidToken
from quiz_api.main import create_app
from quiz_api.services import Ready, Services, Unavailable
from quiz_api.settings import Settings
from quiz_api.store import open_store


class FakeOracle:
    """Stands in for GeminiClient; returns canned text and records prompts."""

    model = "fake-gemini"

    def __init__(self, text: str = "", error: Exception | None = None):
        self.text = text
        self.error = error
        self.prompts: list[str] = []

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.text

    async def aclose(self) -> None:
        pass


class FakeVerifier:
    """Accepts a fixed set of tokens, each mapped to a uid."""

    def __init__(self, tokens: dict[str, str] | None = None):
        self.tokens = tokens or {"good-token": "user-1"}

    async def verify(self, token: str) -> dict:
        if token not in self.tokens:
            raise InvalidToken("unknown token")
        return {"sub": self.tokens[token], "email": f"{self.tokens[token]}@example.com"}

    async def aclose(self) -> None:
        pass


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        gemini_api_key=None,
        firebase_project_id=None,
        firebase_client_email=None,
        firebase_private_key=None,
        database_url=None,
    )


@pytest.fixture
def memory_store():
    store = open_store("sqlite://")
    yield store
    store.dispose()


@pytest.fixture
def sample_items():
    return {
        "items": [
            {
                "stem": "What is 2 + 2?",
                "options": ["3", "4", "5", "6"],
                "answer": "B",
                "explanation": "Two plus two is four.",
                "hint": "Count on your fingers.",
            },
            {
                "stem": "Which planet is known as the Red Planet?",
                "options": ["Venus", "Mars", "Jupiter", "Saturn"],
                "answer": "B",
                "explanation": "Iron oxide colours Mars red.",
                "hint": "Named after a Roman god.",
            },
        ]
    }


@pytest.fixture
def oracle_reply(sample_items):
    """Oracle text wrapping valid JSON in prose and a code fence."""
    return "Sure! Here are your questions:\n```json\n" + json.dumps(sample_items) + "\n```\nGood luck!"


@pytest.fixture
def make_app(settings):
    """Build an app over explicitly injected services."""

    def _make(oracle=None, identity=None, store=None):
        services = Services(
            settings=settings,
            oracle=Ready(oracle) if oracle is not None else Unavailable("GOOGLE_API_KEY is not configured"),
            identity=Ready(identity) if identity is not None else Unavailable("Firebase credentials are not configured"),
            store=Ready(store) if store is not None else Unavailable("DATABASE_URL is not configured"),
        )
        return create_app(services=services)

    return _make


@pytest.fixture
def make_client(make_app):
    """Build a TestClient over explicitly injected services."""

    def _make(oracle=None, identity=None, store=None) -> TestClient:
        return TestClient(make_app(oracle=oracle, identity=identity, store=store))

    return _make
