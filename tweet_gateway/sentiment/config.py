"""Sentiment analysis configuration."""

from __future__ import annotations

import os

from pydantic import Field, model_validator

from tweet_gateway.common.config import BaseConfig

CREDENTIALS_ENV_VAR = "GOOGLE_APPLICATION_CREDENTIALS"


class SentimentConfig(BaseConfig):
    """Google Natural Language configuration."""

    credentials_file: str | None = Field(
        default=None,
        description="Service account JSON file, application default credentials when unset",
    )
    timeout: float = Field(
        default=10.0,
        gt=0,
        le=60,
        description="Request timeout in seconds",
    )
    max_attempts: int = Field(
        default=1,
        ge=1,
        le=5,
        description="Attempts per analysis, retried only on transient upstream errors",
    )
    include_sentences: bool = Field(
        default=False,
        description="Return the per-sentence breakdown alongside the summary",
    )

    @model_validator(mode="before")
    @classmethod
    def validate_credentials(cls, values: dict) -> dict:
        if values.get("credentials_file"):
            return values
        return {**values, "credentials_file": os.getenv(CREDENTIALS_ENV_VAR)}
