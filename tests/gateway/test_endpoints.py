"""Test the gateway endpoints end to end against mocked upstreams."""

import json

import aiohttp
import pytest
from aioresponses import aioresponses
from google.api_core import exceptions as core_exceptions

from tweet_gateway import Gateway, GatewayResponse


def count_requests(m: aioresponses) -> int:
    return sum(len(calls) for calls in m.requests.values())


@pytest.fixture
async def gateway(root_config, patch_language_client):
    """Create a gateway with a mocked Natural Language client."""
    async with Gateway.from_config(root_config) as gateway:
        yield gateway


class TestAnalyzeTweet:
    """Test suite for the identifier analysis endpoint."""

    @pytest.mark.asyncio
    async def test_resolves_tweet(self, gateway, lookup_url, tweet_id):
        """Test a tweet that resolves returns 200 with id and text."""
        with aioresponses() as m:
            m.get(lookup_url, payload={"data": [{"id": tweet_id, "text": "hello"}]})

            response = await gateway.dispatch("POST", f"/analyze/{tweet_id}")

            assert count_requests(m) == 1

        assert response == GatewayResponse(200, {"id": tweet_id, "text": "hello"})

    @pytest.mark.asyncio
    @pytest.mark.parametrize("identifier", ["short", "1" * 18, "1" * 20])
    async def test_rejects_wrong_length_without_upstream_call(self, gateway, identifier):
        """Test that invalid identifiers never reach the upstream."""
        with aioresponses() as m:
            response = await gateway.dispatch("POST", f"/analyze/{identifier}")

            assert count_requests(m) == 0

        assert response.status_code == 400
        assert response.body == {
            "error": "Invalid ID.",
            "message": "ID must be a 19-character long Tweet ID.",
        }

    @pytest.mark.asyncio
    async def test_not_found(self, gateway, lookup_url):
        """Test that an upstream errors body maps to 400 with its message."""
        body = {
            "errors": [
                {
                    "title": "Not Found Error",
                    "detail": "Could not find tweet with id: [0000000000000000000].",
                }
            ]
        }
        with aioresponses() as m:
            m.get(lookup_url, payload=body)

            response = await gateway.dispatch("POST", "/analyze/0000000000000000000")

        assert response.status_code == 400
        assert response.body == {
            "message": "Not Found Error",
            "error": "Could not find tweet with id: [0000000000000000000].",
        }

    @pytest.mark.asyncio
    async def test_upstream_unreachable(self, gateway, lookup_url, tweet_id):
        """Test that transport faults map to the same client error status."""
        with aioresponses() as m:
            m.get(lookup_url, exception=aiohttp.ClientConnectionError("connection refused"))

            response = await gateway.analyze_tweet(tweet_id)

        assert response.status_code == 400
        assert response.body == {"message": "Upstream Unreachable", "error": "connection refused"}

    @pytest.mark.asyncio
    async def test_malformed_upstream_body(self, gateway, lookup_url, tweet_id):
        """Test that an unexpected body still yields a JSON client error."""
        with aioresponses() as m:
            m.get(lookup_url, payload={"meta": {"result_count": 0}})

            response = await gateway.analyze_tweet(tweet_id)

        assert response.status_code == 400
        assert response.body["message"] == "Malformed tweet lookup response"
        assert response.body["diagnostics"]["body"] == {"meta": {"result_count": 0}}
        json.loads(response.serialize())


class TestAnalyzeDocument:
    """Test suite for the free-text sentiment endpoint."""

    @pytest.mark.asyncio
    async def test_sentiment(self, gateway):
        """Test a scored document returns 200 with the summary."""
        response = await gateway.dispatch(
            "POST", "/google/analyze", json.dumps({"doc": "I love this"})
        )

        assert response.status_code == 200
        assert response.body == {"score": 0.8, "magnitude": 0.9}
        assert response.content_type == "application/json"

    @pytest.mark.asyncio
    async def test_empty_document_is_forwarded(self, gateway, patch_language_client):
        """Test that an empty document is left for the upstream to judge."""
        patch_language_client.analyze_sentiment.side_effect = core_exceptions.InvalidArgument(
            "The document is empty."
        )

        response = await gateway.dispatch("POST", "/google/analyze", json.dumps({"doc": ""}))

        patch_language_client.analyze_sentiment.assert_awaited_once()
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_sentiment_failure(self, gateway, patch_language_client):
        """Test that upstream faults collapse into a plain-text 401."""
        patch_language_client.analyze_sentiment.side_effect = core_exceptions.PermissionDenied(
            "Cloud Natural Language API has not been used in project 123"
        )

        response = await gateway.analyze_document("I love this")

        assert response == GatewayResponse(401, "error", "text/plain")
        assert response.serialize() == "error"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body", [None, "", "not json", "[]", '{"text": "wrong key"}', '{"doc": 5}']
    )
    async def test_invalid_body(self, gateway, patch_language_client, body):
        """Test that a missing document is a client error without an upstream call."""
        response = await gateway.dispatch("POST", "/google/analyze", body)

        assert response.status_code == 400
        assert set(response.body) == {"error", "message"}
        patch_language_client.analyze_sentiment.assert_not_awaited()


class TestDispatch:
    """Test suite for request routing."""

    @pytest.mark.asyncio
    async def test_unknown_route(self, gateway):
        """Test that unknown paths are not found."""
        response = await gateway.dispatch("POST", "/analyze")

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_wrong_method(self, gateway, tweet_id):
        """Test that only POST is accepted."""
        response = await gateway.dispatch("GET", f"/analyze/{tweet_id}")

        assert response.status_code == 405

    @pytest.mark.asyncio
    async def test_encoded_identifier(self, gateway):
        """Test that path-encoded identifiers are decoded before validation."""
        response = await gateway.dispatch("POST", "/analyze/abc%20def")

        assert response.status_code == 400
        assert response.body["error"] == "Invalid ID."
