# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""apir CLI: issue one request against an ad-hoc API and print the decoded result."""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any

from ..config import load_settings
from ..discoverer import DirectDiscoverer
from ..errors import ApirError, HTTPError
from ..log import setup_logging
from ..requester import Client, ContentType, ExecutionResult, with_header, with_user_agent

CLI_API_NAME = "cli"
_CONTENT_TYPES = {
    "json": ContentType.APPLICATION_JSON,
    "csv": ContentType.TEXT_CSV,
}

EXIT_OK = 0
EXIT_APPLICATION_ERROR = 1
EXIT_CLIENT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="apir", description="Call an upstream API and decode its response")
    parser.add_argument("base_url", help="Base URL of the API, e.g. https://api.example.com/v1")
    parser.add_argument("path", nargs="?", default="", help="Request path relative to the base URL")
    parser.add_argument("-X", "--method", default="GET", help="HTTP method (default: GET)")
    parser.add_argument(
        "--content-type",
        choices=sorted(_CONTENT_TYPES),
        default="json",
        help="Content type of the API (default: json)",
    )
    parser.add_argument("-d", "--data", help="Request body")
    parser.add_argument(
        "-H",
        "--header",
        action="append",
        default=[],
        metavar="NAME:VALUE",
        help="Extra request header (repeatable)",
    )
    parser.add_argument("--user-agent", help="Override the default User-Agent")
    parser.add_argument("--name", default="apir-cli", help="Client name used in the default User-Agent")
    parser.add_argument("--retry", action="store_true", help="Retry transport failures and 5xx responses")
    parser.add_argument("--timeout", type=float, help="Request timeout in seconds")
    parser.add_argument("--ignore-ssl-errors", action="store_true", help="Skip TLS verification")
    parser.add_argument("--log-level", help="Logging level (default: APIR_LOG_LEVEL or WARNING)")
    return parser


def _parse_header(raw: str) -> tuple[str, str]:
    name, sep, value = raw.partition(":")
    if not sep or not name.strip():
        raise argparse.ArgumentTypeError(f"invalid header {raw!r}, expected NAME:VALUE")
    return name.strip(), value.strip()


def exit_code_for(result: ExecutionResult) -> int:
    if result.ok:
        return EXIT_OK
    if result.error is None or isinstance(result.error, HTTPError):
        return EXIT_APPLICATION_ERROR
    return EXIT_CLIENT_ERROR


def _passthrough(value: Any) -> Any:
    return value


def _print_json(data: Any) -> None:
    json.dump(data, sys.stdout, indent=2, sort_keys=True, default=str)
    sys.stdout.write("\n")


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    try:
        headers = [_parse_header(raw) for raw in args.header]
    except argparse.ArgumentTypeError as exc:
        parser.error(str(exc))

    settings = load_settings()
    if args.ignore_ssl_errors:
        settings.verify_ssl = False

    content_type = _CONTENT_TYPES[args.content_type]
    options = [with_header(name, value) for name, value in headers]
    if args.user_agent:
        options.append(with_user_agent(args.user_agent))

    with Client(args.name, settings=settings, retry=args.retry or None, timeout=args.timeout) as client:
        try:
            client.add_api(CLI_API_NAME, DirectDiscoverer(args.base_url), content_type=content_type)
            request = client.new_request(CLI_API_NAME, args.method, args.path, args.data, *options)
        except ApirError as exc:
            sys.stderr.write(f"error: {exc}\n")
            return EXIT_CLIENT_ERROR

        if content_type is ContentType.TEXT_CSV:
            result = client.execute(request, sys.stdout.buffer)
            sys.stdout.flush()
        else:
            result = client.execute(request, _passthrough, _passthrough)
            # both sinks are set, so a clean decode of either payload has no error
            if result.status_code is not None and result.error is None:
                _print_json(result.data if result.success else result.error_data)

    if result.error is not None:
        sys.stderr.write(f"error: {result.error}\n")
    return exit_code_for(result)


if __name__ == "__main__":
    raise SystemExit(main())
