"""Gateway endpoints composing validation, upstream clients and classification."""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Any
from urllib.parse import unquote

from tweet_gateway.common.component import ComponentFactory
from tweet_gateway.common.config import RootConfig
from tweet_gateway.common.result import Err
from tweet_gateway.lookup import TweetLookupClient, validate_identifier
from tweet_gateway.sentiment import SentimentClient

from .normalizer import classify

logger = logging.getLogger(__name__)

ANALYZE_TWEET_ROUTE = re.compile(r"^/analyze/(?P<identifier>[^/]+)/?$")
ANALYZE_DOCUMENT_ROUTE = re.compile(r"^/google/analyze/?$")

JSON_CONTENT_TYPE = "application/json"
TEXT_CONTENT_TYPE = "text/plain"


@dataclass(frozen=True)
class GatewayResponse:
    """Status and body handed back to the transport."""

    status_code: int
    body: dict[str, Any] | str
    content_type: str = field(default=JSON_CONTENT_TYPE)

    @property
    def is_error(self) -> bool:
        return self.status_code >= HTTPStatus.BAD_REQUEST

    def serialize(self) -> str:
        if isinstance(self.body, str):
            return self.body
        return json.dumps(self.body)

    @classmethod
    def from_json(cls, status: HTTPStatus, body: dict[str, Any]) -> GatewayResponse:
        return cls(status_code=int(status), body=body)

    @classmethod
    def from_text(cls, status: HTTPStatus, body: str) -> GatewayResponse:
        return cls(status_code=int(status), body=body, content_type=TEXT_CONTENT_TYPE)


def _bad_request(error: str, message: str) -> GatewayResponse:
    return GatewayResponse.from_json(HTTPStatus.BAD_REQUEST, {"error": error, "message": message})


class Gateway(ComponentFactory[RootConfig]):
    """Request gateway in front of the lookup and sentiment services."""

    _config_type = RootConfig

    def __init__(
        self,
        config: RootConfig,
        lookup: TweetLookupClient | None = None,
        sentiment: SentimentClient | None = None,
    ) -> None:
        """Initialize gateway and its upstream clients."""
        super().__init__(config)
        self.lookup = lookup or TweetLookupClient.from_config(config.lookup)
        self.sentiment = sentiment or SentimentClient.from_config(config.sentiment)

    async def analyze_tweet(self, identifier: str) -> GatewayResponse:
        """Resolve a tweet identifier into its id and text."""
        validated = validate_identifier(identifier)
        if isinstance(validated, Err):
            logger.info(f"Rejected identifier of length {len(identifier)}")
            return GatewayResponse.from_json(HTTPStatus.BAD_REQUEST, validated.error.to_payload())

        result = await self.lookup.resolve(validated.value)
        classification = classify(result)

        if classification.is_error:
            return GatewayResponse.from_json(HTTPStatus.BAD_REQUEST, classification.payload)
        return GatewayResponse.from_json(HTTPStatus.OK, classification.payload)

    async def analyze_document(self, document: str) -> GatewayResponse:
        """Score the sentiment of a free-text document."""
        result = await self.sentiment.analyze(document)
        classification = classify(result)

        if classification.is_error:
            return GatewayResponse.from_text(HTTPStatus.UNAUTHORIZED, "error")
        return GatewayResponse.from_json(HTTPStatus.OK, classification.payload)

    async def dispatch(self, method: str, path: str, body: str | None = None) -> GatewayResponse:
        """Route a request to its endpoint."""
        logger.info(f"{method} {path}")

        tweet_match = ANALYZE_TWEET_ROUTE.match(path)
        document_match = ANALYZE_DOCUMENT_ROUTE.match(path)

        if not tweet_match and not document_match:
            return GatewayResponse.from_json(
                HTTPStatus.NOT_FOUND, {"error": "Not Found", "message": f"No route for {path}"}
            )
        if method.upper() != "POST":
            return GatewayResponse.from_json(
                HTTPStatus.METHOD_NOT_ALLOWED,
                {"error": "Method Not Allowed", "message": f"{method} is not supported"},
            )

        if tweet_match:
            return await self.analyze_tweet(unquote(tweet_match.group("identifier")))

        try:
            payload = json.loads(body) if body else {}
        except json.JSONDecodeError:
            return _bad_request("Invalid body.", "Request body must be valid JSON.")

        document = payload.get("doc") if isinstance(payload, dict) else None
        if not isinstance(document, str):
            return _bad_request("Invalid document.", "Request body must contain a string 'doc'.")

        return await self.analyze_document(document)

    async def close(self) -> None:
        await self.lookup.close()
        await self.sentiment.close()
