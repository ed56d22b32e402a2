"""Tweet lookup types."""

from __future__ import annotations

from enum import Enum
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field

from tweet_gateway.common.result import Err, Ok


class TweetRecord(BaseModel):
    """Single tweet record from the lookup `data` array."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(..., description="Tweet ID")
    text: str = Field(..., description="Tweet text")


class LookupProblem(BaseModel):
    """Single problem record from the lookup `errors` array."""

    model_config = ConfigDict(extra="ignore")

    title: str = Field(..., description="Short problem title")
    detail: str = Field(..., description="Human readable detail")


class LookupEnvelope(BaseModel):
    """Raw body returned by the plural tweet lookup endpoint."""

    model_config = ConfigDict(extra="ignore")

    data: list[Any] | None = None
    errors: list[Any] | None = None

    @property
    def has_data(self) -> bool:
        return bool(self.data)


class Tweet(BaseModel):
    """Resolved tweet."""

    model_config = ConfigDict(frozen=True)

    id: str
    text: str

    def to_payload(self) -> dict[str, Any]:
        return {"id": self.id, "text": self.text}


class LookupFailureKind(str, Enum):
    """Why a lookup did not produce a tweet."""

    NOT_FOUND_OR_REJECTED = "not_found_or_rejected"
    UPSTREAM_UNREACHABLE = "upstream_unreachable"
    MALFORMED_RESPONSE = "malformed_response"


class LookupFailure(BaseModel):
    """Failed lookup, shaped for the caller."""

    model_config = ConfigDict(frozen=True)

    kind: LookupFailureKind
    message: str
    error: str
    diagnostics: dict[str, Any] | None = None

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"message": self.message, "error": self.error}
        if self.diagnostics is not None:
            payload["diagnostics"] = self.diagnostics
        return payload


TweetLookupResult = Union[Ok[Tweet], Err[LookupFailure]]
