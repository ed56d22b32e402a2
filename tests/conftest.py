"""Pytest configuration."""

import re
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from tweet_gateway.lookup import LookupConfig
from tweet_gateway.sentiment import SentimentConfig


@pytest.fixture(autouse=True)
def environment(monkeypatch):
    """Provide credentials without touching the real environment."""
    monkeypatch.setenv("TWITTER_BEARER_TOKEN", "test-token")
    monkeypatch.delenv("bearer_token", raising=False)
    monkeypatch.delenv("GOOGLE_APPLICATION_CREDENTIALS", raising=False)


@pytest.fixture
def lookup_config() -> LookupConfig:
    """Create a test lookup config."""
    return LookupConfig(bearer_token="test-token", timeout=1)


@pytest.fixture
def sentiment_config() -> SentimentConfig:
    """Create a test sentiment config."""
    return SentimentConfig(timeout=1)


@pytest.fixture
def root_config() -> dict:
    """Create a test root config dictionary."""
    return {
        "lookup": {"bearer_token": "test-token", "timeout": 1},
        "sentiment": {"timeout": 1},
    }


def make_sentiment_response(score, magnitude, language="", sentences=()):
    """Build an object shaped like an AnalyzeSentimentResponse."""
    return SimpleNamespace(
        document_sentiment=SimpleNamespace(score=score, magnitude=magnitude),
        language=language,
        sentences=[
            SimpleNamespace(
                text=SimpleNamespace(content=text),
                sentiment=SimpleNamespace(score=s, magnitude=m),
            )
            for text, s, m in sentences
        ],
    )


@pytest.fixture
def language_client():
    """Mock Natural Language client."""
    client = MagicMock()
    client.analyze_sentiment = AsyncMock(return_value=make_sentiment_response(0.8, 0.9))
    client.transport.close = AsyncMock()
    return client


@pytest.fixture
def patch_language_client(monkeypatch, language_client):
    """Route every SentimentClient to the mock Natural Language client."""
    from tweet_gateway.sentiment import SentimentClient

    monkeypatch.setattr(SentimentClient, "_create_client", lambda self: language_client)
    return language_client


@pytest.fixture
def tweet_id() -> str:
    """A well-formed tweet identifier."""
    return "1234567890123456789"


@pytest.fixture
def lookup_url() -> re.Pattern:
    """Pattern matching the plural lookup endpoint with any query."""
    return re.compile(r"^https://api\.twitter\.com/2/tweets\?.*$")


@pytest.fixture
def sentiment_response():
    """Factory for AnalyzeSentimentResponse-shaped objects."""
    return make_sentiment_response
