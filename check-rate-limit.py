#!/usr/bin/env python3
"""Print the Fitbit API quota status for the stored token."""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

import structlog

from fitbit_gateway.client import FitbitClient
from fitbit_gateway.config import GatewayConfiguration
from fitbit_gateway.errors import FitbitAPIError
from fitbit_gateway.log import configure_logging

logger = structlog.get_logger(__name__)


def _default_token_file() -> str:
    return os.environ.get("FB_TOKENS_FILE") or "tokens.json"


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Show the remaining Fitbit API calls for the client and user."
    )
    parser.add_argument(
        "--token-file",
        default=_default_token_file(),
        help="Path to the OAuth tokens file (default: %(default)s).",
    )
    parser.add_argument(
        "--config",
        help="Optional JSON file with gateway options such as water_units.",
    )
    parser.add_argument(
        "--format",
        choices=("json", "xml"),
        default="json",
        help="Response format requested from the Fitbit API (default: %(default)s).",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Minimum log level to print (default: %(default)s).",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    configure_logging(args.log_level)

    configuration = (
        GatewayConfiguration.from_json_file(args.config)
        if args.config
        else GatewayConfiguration()
    )
    token_file = Path(args.token_file)
    logger.info("loading_tokens", path=str(token_file))
    client = FitbitClient.from_token_file(
        token_file,
        configuration=configuration,
        response_format=args.format,
    )

    try:
        rate_limiting = client.get_rate_limit()
    except FitbitAPIError as exc:
        logger.error("fitbit_api_error", code=exc.code, error=str(exc))
        sys.exit(1)

    if rate_limiting is None:
        logger.error("rate_limit_unavailable")
        sys.exit(1)

    for scope, status in (
        ("client_and_viewer", rate_limiting.client_and_viewer),
        ("client", rate_limiting.client),
    ):
        logger.info(
            "rate_limit_status",
            scope=scope,
            remaining_hits=status.remaining_hits,
            hourly_limit=status.hourly_limit,
            reset_time=status.reset_time.isoformat(),
        )


if __name__ == "__main__":
    main()
