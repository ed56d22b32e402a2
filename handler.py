import asyncio
import base64
import json
import logging
import os
from typing import Any

import aioboto3
from botocore.exceptions import ClientError
from pydantic import ValidationError

from tweet_gateway import Gateway
from tweet_gateway.common import RootConfig, load_config
from tweet_gateway.lookup import LookupConfig, TweetLookupClient
from tweet_gateway.sentiment import SentimentClient, SentimentConfig

# Setup logger
logger = logging.getLogger(__name__)
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

SECRET_KEYS = ("TWITTER_BEARER_TOKEN", "GOOGLE_APPLICATION_CREDENTIALS")

_config: RootConfig | None = None
_client_configs: tuple[LookupConfig, SentimentConfig] | None = None


async def get_secret(secret_name: str) -> dict[str, str]:
    """Fetch upstream credentials from AWS Secrets Manager."""
    region_name = os.environ.get("AWS_REGION", "eu-central-1")
    logger.info(f"Fetching {secret_name} from Secrets Manager in {region_name}")

    session = aioboto3.Session()
    async with session.client(service_name="secretsmanager", region_name=region_name) as client:
        try:
            response = await client.get_secret_value(SecretId=secret_name)
        except ClientError as e:
            logger.error(f"Failed to retrieve secret: {e}")
            raise

    if "SecretString" not in response:
        raise ValueError(f"Secret {secret_name} is not a JSON string")

    secrets = json.loads(response["SecretString"])
    return {key: secrets[key] for key in SECRET_KEYS if key in secrets}


async def get_config() -> RootConfig:
    """Load and validate configuration once per process."""
    global _config
    if _config is not None:
        return _config

    if secret_name := os.environ.get("GATEWAY_SECRET_NAME"):
        os.environ.update(await get_secret(secret_name))

    _config = RootConfig(**load_config(os.environ.get("GATEWAY_CONFIG_PATH")))
    logger.info("Configuration loaded successfully.")
    return _config


async def get_client_configs() -> tuple[LookupConfig, SentimentConfig]:
    """Validate the upstream client configs once per process."""
    global _client_configs
    if _client_configs is None:
        config = await get_config()
        _client_configs = (
            LookupConfig(**config.lookup),
            SentimentConfig(**config.sentiment),
        )
    return _client_configs


def read_body(event: dict[str, Any]) -> str | None:
    """Extract the raw request body from a proxy event."""
    body = event.get("body")
    if body and event.get("isBase64Encoded"):
        return base64.b64decode(body).decode("utf-8")
    return body


async def process_request(event: dict[str, Any]) -> dict[str, Any]:
    """Process the incoming API Gateway request."""
    method = event.get("httpMethod", "GET")
    path = event.get("path", "/")

    try:
        lookup_config, sentiment_config = await get_client_configs()
        gateway = Gateway(
            await get_config(),
            lookup=TweetLookupClient(lookup_config),
            sentiment=SentimentClient(sentiment_config),
        )
    except (ValidationError, ValueError, FileNotFoundError) as e:
        logger.error(f"Config validation error: {e}")
        return {"statusCode": 500, "body": json.dumps({"error": "Invalid configuration"})}

    async with gateway:
        response = await gateway.dispatch(method, path, read_body(event))

    logger.info(f"{method} {path} {response.status_code}")
    return {
        "statusCode": response.status_code,
        "headers": {"Content-Type": response.content_type},
        "body": response.serialize(),
    }


def lambda_handler(event: dict[str, Any], context: Any | None = None) -> dict[str, Any]:
    """AWS Lambda entry point."""
    try:
        return asyncio.run(process_request(event))
    except Exception as e:
        logger.error(f"Unhandled exception: {e}")
        return {"statusCode": 500, "body": json.dumps({"error": "Unhandled server error"})}
