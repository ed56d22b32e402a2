"""Google Natural Language client for document sentiment."""

from __future__ import annotations

import logging

import tenacity
from google.api_core import exceptions as core_exceptions
from google.auth import exceptions as auth_exceptions
from google.cloud import language_v1
from google.oauth2 import service_account
from pydantic import ValidationError

from tweet_gateway.common.component import ComponentFactory
from tweet_gateway.common.result import Err, Ok

from .config import SentimentConfig
from .types import AnalysisUnavailable, SentenceSentiment, SentimentAnalysisResult, SentimentResult

logger = logging.getLogger(__name__)

TRANSIENT_ERRORS = (core_exceptions.ServiceUnavailable, core_exceptions.DeadlineExceeded)
UPSTREAM_ERRORS = (
    core_exceptions.GoogleAPIError,
    auth_exceptions.GoogleAuthError,
    ValidationError,
    OSError,
    ValueError,
)


class SentimentClient(ComponentFactory[SentimentConfig]):
    """Scores plain-text documents."""

    _config_type = SentimentConfig

    def __init__(self, config: SentimentConfig) -> None:
        """Initialize client."""
        super().__init__(config)
        self._client: language_v1.LanguageServiceAsyncClient | None = None

    def _create_client(self) -> language_v1.LanguageServiceAsyncClient:
        if self.config.credentials_file:
            credentials = service_account.Credentials.from_service_account_file(
                self.config.credentials_file
            )
            return language_v1.LanguageServiceAsyncClient(credentials=credentials)
        return language_v1.LanguageServiceAsyncClient()

    @property
    def client(self) -> language_v1.LanguageServiceAsyncClient:
        """Lazy load client."""
        if self._client is None:
            self._client = self._create_client()
        return self._client

    async def close(self) -> None:
        """Close client."""
        if self._client is not None:
            await self._client.transport.close()
            self._client = None

    async def _analyze_sentiment(self, document: str) -> language_v1.AnalyzeSentimentResponse:
        async for attempt in tenacity.AsyncRetrying(
            retry=tenacity.retry_if_exception_type(TRANSIENT_ERRORS),
            wait=tenacity.wait_exponential(multiplier=1, min=1, max=4),
            stop=tenacity.stop_after_attempt(self.config.max_attempts),
            reraise=True,
        ):
            with attempt:
                return await self.client.analyze_sentiment(
                    request={
                        "document": language_v1.Document(
                            content=document,
                            type_=language_v1.Document.Type.PLAIN_TEXT,
                        )
                    },
                    retry=None,
                    timeout=self.config.timeout,
                )

    def _to_result(self, response: language_v1.AnalyzeSentimentResponse) -> SentimentResult:
        sentiment = response.document_sentiment
        sentences = []
        if self.config.include_sentences:
            sentences = [
                SentenceSentiment(
                    text=sentence.text.content,
                    score=sentence.sentiment.score,
                    magnitude=sentence.sentiment.magnitude,
                )
                for sentence in response.sentences
            ]

        return SentimentResult(
            score=sentiment.score,
            magnitude=sentiment.magnitude,
            language=response.language or None,
            sentences=sentences,
        )

    async def analyze(self, document: str) -> SentimentAnalysisResult:
        """Score a document. Upstream faults are collapsed into `AnalysisUnavailable`."""
        try:
            response = await self._analyze_sentiment(document)
            result = self._to_result(response)
        except UPSTREAM_ERRORS as e:
            logger.error(f"Sentiment analysis failed: {e!r}")
            return Err(AnalysisUnavailable(reason=str(e) or e.__class__.__name__))

        logger.debug(f"Text: {document}")
        logger.info(f"Sentiment score: {result.score}, magnitude: {result.magnitude}")
        return Ok(result)
