"""
backchat command line: send one request through an HTTPNetworkService.

Usage:
    backchat GET /users --base-url https://api.example.com/v1
    backchat POST /items --data '{"name": "x"}' --content-type application/json
    → prints the response body to stdout, exits 1 on failure

Defaults for the base URL, headers and timeouts come from BACKCHAT_* env vars.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from pydantic import ValidationError

from backchat.config.settings import Settings
from backchat.services.errors import BackchatError
from backchat.services.http_method import HttpMethod
from backchat.services.http_network_service import HTTPNetworkService
from backchat.services.webservice_adapter import WebServiceDefaultAdapter
from backchat.services.webservice_endpoint import WebServiceEndpoint

logger = logging.getLogger("backchat")


def _header(value: str) -> tuple[str, str]:
    name, sep, field_value = value.partition(":")
    if not sep or not name.strip():
        raise argparse.ArgumentTypeError(f"expected NAME:VALUE, got {value!r}")
    return name.strip(), field_value.strip()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="backchat", description="Send a request to a web service endpoint.")
    parser.add_argument("method", type=str.upper, choices=[m.value for m in HttpMethod])
    parser.add_argument("path", help="endpoint path including the leading '/'")
    parser.add_argument("--base-url", default=None, help="overrides BACKCHAT_BASE_URL")
    parser.add_argument("--query", default=None, help="query string appended to the path")
    parser.add_argument("--data", default=None, help="request body")
    parser.add_argument("--content-type", default=None)
    parser.add_argument("--header", action="append", type=_header, default=[], metavar="NAME:VALUE")
    parser.add_argument("--token", default=None, help="access token sent in the Authorization header")
    return parser


async def _invoke(endpoint: WebServiceEndpoint, settings: Settings, token: str | None) -> bytes:
    token_hook = None
    if token:
        async def token_hook(request_fresh: bool) -> str | None:
            return token

    async with HTTPNetworkService.from_settings(settings, token_hook=token_hook) as service:
        adapter = WebServiceDefaultAdapter(endpoint=endpoint, network_service=service)
        return await adapter.invoke()


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = Settings()
        logging.basicConfig(
            level=settings.LOG_LEVEL,
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        )
    except ValueError as e:
        parser.error(f"invalid BACKCHAT_* configuration: {e}")
    if args.base_url:
        settings.BASE_URL = args.base_url

    for _noisy in ("httpx", "httpcore"):
        logging.getLogger(_noisy).setLevel(logging.WARNING)

    try:
        endpoint = WebServiceEndpoint(
            path=args.path,
            http_method=HttpMethod(args.method),
            content_type=args.content_type,
            body=args.data.encode("utf-8") if args.data is not None else None,
            query_parameter=args.query,
            additional_header_fields=dict(args.header) or None,
        )
    except ValidationError as e:
        parser.error(str(e))

    try:
        data = asyncio.run(_invoke(endpoint, settings, args.token))
    except BackchatError as e:
        logger.error("[FAIL] %s", e)
        if e.__cause__ is not None:
            logger.error("[FAIL] caused by: %s", e.__cause__)
        return 1

    sys.stdout.buffer.write(data)
    sys.stdout.buffer.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())
