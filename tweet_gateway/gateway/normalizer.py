"""Collapse client outcomes into a success/error classification."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from tweet_gateway.common.result import Err, Ok


@dataclass(frozen=True)
class Classification:
    """Classified outcome ready to be serialized."""

    is_error: bool
    payload: dict[str, Any]


def _payload(value: Any) -> dict[str, Any]:
    if not hasattr(value, "to_payload"):
        raise TypeError(f"{type(value).__name__} has no payload")
    return value.to_payload()


def classify(result: Ok | Err | Classification) -> Classification:
    """Classify a client outcome. Only the tag is consulted, never the upstream variant."""
    if isinstance(result, Classification):
        return result
    if isinstance(result, Err):
        return Classification(is_error=True, payload=_payload(result.error))
    if isinstance(result, Ok):
        return Classification(is_error=False, payload=_payload(result.value))
    raise TypeError(f"Cannot classify {type(result).__name__}")


def is_error_payload(payload: Mapping[str, Any]) -> bool:
    """Structural check for already-serialized payloads.

    Success payloads always carry a string under `text`; a mapping there means
    the payload describes an error. A missing or null `text` is not an error.
    """
    return isinstance(payload.get("text"), Mapping)
