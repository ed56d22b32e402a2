"""Command-line runner for the gateway endpoints."""

import asyncio
import logging
from typing import Any

from tweet_gateway import Gateway, GatewayResponse
from tweet_gateway.common import load_config

logger = logging.getLogger(__name__)


async def main(config: dict[str, Any], command: str, value: str) -> GatewayResponse:
    """Run a single gateway request."""
    async with Gateway.from_config(config) as gateway:
        if command == "tweet":
            return await gateway.analyze_tweet(value)
        return await gateway.analyze_document(value)


if __name__ == "__main__":
    import argparse
    import time

    # Configure logging
    logging.basicConfig(
        level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    parser = argparse.ArgumentParser(description="Query the tweet gateway locally")
    parser.add_argument("command", choices=["tweet", "sentiment"], help="Endpoint to call")
    parser.add_argument("value", type=str, help="Tweet ID or document text")
    parser.add_argument("--config", type=str, default=None, help="Path to the YAML config")
    args = parser.parse_args()

    config = load_config(args.config)

    start = time.time()
    response = asyncio.run(main(config, args.command, args.value))
    end = time.time()

    print(response.status_code)
    print(response.serialize())
    logger.info(f"Request completed in {end - start:.2f} seconds")
