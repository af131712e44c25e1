"""Command line entrypoint: call one API operation and print the result."""
from __future__ import annotations

import argparse
import json
import sys

import structlog

from bing_ads_sdk.client import BingAdsClient
from bing_ads_sdk.logging_config import configure_logging
from bing_ads_sdk.settings import ClientSettings

logger = structlog.get_logger()


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Call a Bing Ads SOAP operation"
    )
    parser.add_argument(
        "service",
        help="Service name, e.g. campaign_management"
    )
    parser.add_argument(
        "operation",
        help="Operation name, e.g. get_campaigns_by_ids or GetCampaignsByIds"
    )
    parser.add_argument(
        "--body",
        default="{}",
        help="Request body as JSON (default: {})"
    )
    parser.add_argument(
        "--sandbox",
        action="store_true",
        help="Use the sandbox environment (overrides BING_ADS_ENVIRONMENT)"
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Log level (DEBUG prints SOAP envelopes)"
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Render logs as JSON lines"
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    configure_logging(args.log_level, json_output=args.json_logs)

    try:
        body = json.loads(args.body)
    except json.JSONDecodeError as e:
        logger.error("Invalid JSON body", error=str(e))
        return 2

    overrides = {"environment": "sandbox"} if args.sandbox else {}
    settings = ClientSettings.from_env(**overrides)

    with BingAdsClient(settings) as client:
        result = client.service(args.service).call(args.operation, body)

    print(result.model_dump_json(indent=2))
    return 0 if result.ok else 1


if __name__ == "__main__":
    sys.exit(main())
