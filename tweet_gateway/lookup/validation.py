"""Tweet identifier validation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from tweet_gateway.common.result import Err, Ok

TWEET_ID_LENGTH = 19


@dataclass(frozen=True)
class InvalidIdentifierLength:
    """Identifier rejected before any upstream call."""

    identifier: str
    error: str = "Invalid ID."
    message: str = f"ID must be a {TWEET_ID_LENGTH}-character long Tweet ID."

    def to_payload(self) -> dict[str, Any]:
        return {"error": self.error, "message": self.message}


def validate_identifier(identifier: str) -> Union[Ok[str], Err[InvalidIdentifierLength]]:
    """Check the identifier shape. Only the length is enforced; the upstream may still reject it."""
    if len(identifier) != TWEET_ID_LENGTH:
        return Err(InvalidIdentifierLength(identifier=identifier))
    return Ok(identifier)
