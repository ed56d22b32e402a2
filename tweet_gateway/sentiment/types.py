"""Sentiment analysis types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from pydantic import BaseModel, Field

from tweet_gateway.common.result import Err, Ok


class SentenceSentiment(BaseModel):
    """Sentiment of a single sentence."""

    text: str = Field(..., description="Sentence text")
    score: float = Field(..., ge=-1.0, le=1.0, description="Sentence sentiment score")
    magnitude: float = Field(..., ge=0.0, description="Sentence sentiment magnitude")


class SentimentResult(BaseModel):
    """Document sentiment summary."""

    score: float = Field(
        ...,
        ge=-1.0,
        le=1.0,
        description="Overall emotion, from -1 (negative) to 1 (positive)",
    )
    magnitude: float = Field(
        ...,
        ge=0.0,
        description="Overall strength of emotion",
    )
    language: str | None = Field(
        default=None,
        description="Detected document language",
    )
    sentences: list[SentenceSentiment] = Field(
        default_factory=list,
        description="Per-sentence breakdown",
    )

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(exclude_defaults=True)


@dataclass(frozen=True)
class AnalysisUnavailable:
    """Sentiment analysis failed. The reason is for logs only."""

    reason: str

    def to_payload(self) -> dict[str, Any]:
        return {"error": "Analysis unavailable"}


SentimentAnalysisResult = Union[Ok[SentimentResult], Err[AnalysisUnavailable]]
