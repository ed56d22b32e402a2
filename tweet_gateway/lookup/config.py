"""Tweet lookup configuration."""

from __future__ import annotations

import os
from urllib.parse import urlparse

from pydantic import Field, field_validator, model_validator

from tweet_gateway.common.config import BaseConfig

BEARER_TOKEN_ENV_VARS = ("TWITTER_BEARER_TOKEN", "bearer_token")


class LookupConfig(BaseConfig):
    """Twitter lookup configuration."""

    base_url: str = Field(
        default="https://api.twitter.com/2",
        description="Twitter API base URL",
    )
    bearer_token: str = Field(
        default=...,
        min_length=1,
        description="Twitter API bearer token",
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
        description="Attempts per lookup, retried only on connection errors",
    )
    tweet_fields: list[str] = Field(
        default_factory=list,
        description="Extra tweet fields requested from the lookup endpoint",
    )

    @model_validator(mode="before")
    @classmethod
    def validate_credentials(cls, values: dict) -> dict:
        if values.get("bearer_token"):
            return values

        for name in BEARER_TOKEN_ENV_VARS:
            if token := os.getenv(name):
                return {**values, "bearer_token": token}

        raise ValueError("TWITTER_BEARER_TOKEN must be set")

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        parsed = urlparse(v.strip())
        if parsed.scheme not in ("http", "https"):
            raise ValueError("URL must use http or https scheme")
        if not parsed.netloc:
            raise ValueError("URL must have a valid host")
        return v.strip().rstrip("/")
