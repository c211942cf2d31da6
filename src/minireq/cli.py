"""Command-line entry point for minireq.

Usage:
    minireq get URL [-H NAME:VALUE]... [--cookie STR] [--param KEY=VALUE]... [--json]
    minireq encode TEXT
    minireq decode TEXT
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Dict, List, Optional

from .codec import encode, try_decode
from .config import ClientConfig
from .logging_config import get_logger, setup_logging
from .transfer import get

logger = get_logger("cli")

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_HTTP_ERROR = 2


def _parse_pairs(values: Optional[List[str]], separator: str, label: str) -> Dict[str, str]:
    pairs: Dict[str, str] = {}
    for item in values or []:
        name, found, value = item.partition(separator)
        if not found or not name.strip():
            raise argparse.ArgumentTypeError(f"Invalid {label} {item!r}, expected NAME{separator}VALUE")
        pairs[name.strip()] = value.strip()
    return pairs


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="minireq", description="Blocking HTTP GET and percent-encoding tools")
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to a YAML client configuration file",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        help="Logging level (overrides configuration)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    get_parser = subparsers.add_parser("get", help="Fetch a URL with HTTP GET")
    get_parser.add_argument("url", help="Target URL, passed through unencoded")
    get_parser.add_argument(
        "-H",
        "--header",
        action="append",
        dest="headers",
        help="Request header as NAME:VALUE (repeatable)",
    )
    get_parser.add_argument("--cookie", type=str, help="Cookie header value")
    get_parser.add_argument(
        "--param",
        action="append",
        dest="params",
        help="Query parameter as KEY=VALUE (repeatable, percent-encoded)",
    )
    get_parser.add_argument("--json", action="store_true", help="Print the response as JSON")

    encode_parser = subparsers.add_parser("encode", help="Percent-encode text")
    encode_parser.add_argument("text")

    decode_parser = subparsers.add_parser("decode", help="Percent-decode text")
    decode_parser.add_argument("text")

    return parser


def _run_get(args: argparse.Namespace, config: ClientConfig) -> int:
    try:
        headers = _parse_pairs(args.headers, ":", "header")
        params = _parse_pairs(args.params, "=", "parameter")
    except argparse.ArgumentTypeError as exc:
        print(str(exc), file=sys.stderr)
        return EXIT_ERROR

    response = get(args.url, headers, args.cookie, params=params, config=config)

    if args.json:
        print(json.dumps(response.to_dict(), indent=2, ensure_ascii=False))
    else:
        if response.reason:
            print(f"Error: {response.reason}", file=sys.stderr)
        else:
            print(response.content)
        print(f"HTTP {response.status_code} in {response.elapsed:.3f}s", file=sys.stderr)

    if response.reason:
        return EXIT_ERROR
    if response.status_code >= 400:
        return EXIT_HTTP_ERROR
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = ClientConfig.from_file(args.config) if args.config else ClientConfig()
        config = ClientConfig.from_env(config)
        setup_logging(level=args.log_level or config.log_level)
    except ValueError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return EXIT_ERROR

    if args.command == "encode":
        print(encode(args.text))
        return EXIT_OK

    if args.command == "decode":
        result = try_decode(args.text)
        if not result.ok:
            logger.error("Cannot decode input: %s", result.error)
            print(f"Error: {result.error}", file=sys.stderr)
            return EXIT_ERROR
        print(result.value)
        return EXIT_OK

    return _run_get(args, config)


if __name__ == "__main__":
    sys.exit(main())
