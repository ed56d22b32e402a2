"""Twitter client for resolving tweet identifiers."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from typing import Any

import aiohttp
import tenacity
from pydantic import ValidationError

from tweet_gateway.common.component import ComponentFactory
from tweet_gateway.common.result import Err, Ok

from .config import LookupConfig
from .types import (
    LookupEnvelope,
    LookupFailure,
    LookupFailureKind,
    LookupProblem,
    Tweet,
    TweetLookupResult,
    TweetRecord,
)

logger = logging.getLogger(__name__)

RETRYABLE_ERRORS = (aiohttp.ClientConnectionError, asyncio.TimeoutError)


def parse_envelope(body: Any) -> TweetLookupResult:
    """Normalize a lookup body into a tweet or a failure.

    A non-empty `data` array wins and only its first record is used. Without
    it the first entry of `errors` becomes the failure. Anything that cannot
    be extracted is reported as a malformed response with the raw body attached.
    """
    try:
        if not isinstance(body, Mapping):
            raise TypeError(f"Expected a JSON object, got {type(body).__name__}")

        envelope = LookupEnvelope.model_validate(body)
        if envelope.has_data:
            record = TweetRecord.model_validate(envelope.data[0])
            return Ok(Tweet(id=record.id, text=record.text))

        if not envelope.errors:
            raise KeyError("errors")

        problem = LookupProblem.model_validate(envelope.errors[0])
        return Err(
            LookupFailure(
                kind=LookupFailureKind.NOT_FOUND_OR_REJECTED,
                message=problem.title,
                error=problem.detail,
            )
        )
    except (ValidationError, TypeError, KeyError, IndexError) as e:
        logger.error(f"Error extracting tweet from lookup response: {e}")
        return Err(
            LookupFailure(
                kind=LookupFailureKind.MALFORMED_RESPONSE,
                message="Malformed tweet lookup response",
                error=str(e),
                diagnostics={"type": e.__class__.__name__, "body": body},
            )
        )


class TweetLookupClient(ComponentFactory[LookupConfig]):
    """Resolves tweet identifiers against the plural lookup endpoint."""

    _config_type = LookupConfig

    def __init__(self, config: LookupConfig) -> None:
        """Initialize client."""
        super().__init__(config)
        self._session: aiohttp.ClientSession | None = None

        logger.debug(f"Lookup client initialized for {config.base_url}")

    @property
    def session(self) -> aiohttp.ClientSession:
        """Lazy load session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                headers={"Authorization": f"Bearer {self.config.bearer_token}"},
                timeout=aiohttp.ClientTimeout(total=self.config.timeout),
            )
        return self._session

    async def close(self) -> None:
        """Close session."""
        if self._session is not None:
            await self._session.close()
            self._session = None

    def build_request(self, identifier: str) -> tuple[str, dict[str, str]]:
        """Build the lookup URL and query for a single-identifier batch."""
        params = {"ids": identifier}
        if self.config.tweet_fields:
            params["tweet.fields"] = ",".join(self.config.tweet_fields)
        return f"{self.config.base_url}/tweets", params

    async def _fetch(self, url: str, params: dict[str, str]) -> Any:
        """Issue the lookup call and decode the body."""
        async for attempt in tenacity.AsyncRetrying(
            retry=tenacity.retry_if_exception_type(RETRYABLE_ERRORS),
            wait=tenacity.wait_exponential(multiplier=1, min=1, max=4),
            stop=tenacity.stop_after_attempt(self.config.max_attempts),
            reraise=True,
        ):
            with attempt:
                async with self.session.get(url, params=params) as response:
                    logger.debug(f"Lookup responded with status {response.status}")
                    body = await response.json(content_type=None)
                    if body is None:
                        raise ValueError("Empty lookup response body")
                    return body

    async def resolve(self, identifier: str) -> TweetLookupResult:
        """Resolve a validated identifier into a tweet or a failure."""
        url, params = self.build_request(identifier)
        logger.info(f"Sending lookup request for tweet {identifier}")

        try:
            body = await self._fetch(url, params)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            logger.error(f"Tweet lookup failed for {identifier}: {e!r}")
            return Err(
                LookupFailure(
                    kind=LookupFailureKind.UPSTREAM_UNREACHABLE,
                    message="Upstream Unreachable",
                    error=str(e) or e.__class__.__name__,
                )
            )

        logger.debug(f"Lookup body: {body}")
        result = parse_envelope(body)
        if isinstance(result, Ok):
            logger.info(f"Resolved tweet {result.value.id}: {result.value.text}")
        return result
