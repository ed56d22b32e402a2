"""Sentiment analysis package."""

from .client import SentimentClient
from .config import SentimentConfig
from .types import AnalysisUnavailable, SentenceSentiment, SentimentResult

__all__ = [
    "AnalysisUnavailable",
    "SentenceSentiment",
    "SentimentClient",
    "SentimentConfig",
    "SentimentResult",
]
