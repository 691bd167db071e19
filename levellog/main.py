"""Command line entrypoint: emit a single structured record to stderr."""

from __future__ import annotations

import argparse
import json
from typing import Any, Sequence

from levellog.bootstrap import new_logger
from levellog.core.levels import LOG_LEVELS, normalize_level


def parse_field(raw: str) -> tuple[str, Any]:
    """Split ``KEY=VALUE``; the value is decoded as JSON when it parses."""

    key, sep, value = raw.partition("=")
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"expected KEY=VALUE, got {raw!r}")
    try:
        return key, json.loads(value)
    except json.JSONDecodeError:
        return key, value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="levellog", description="Write one JSON log line to stderr.")
    parser.add_argument("level", type=normalize_level, choices=list(LOG_LEVELS), help="record level")
    parser.add_argument("message", help="record message")
    parser.add_argument("--name", default="levellog", help="logger name embedded in the record")
    parser.add_argument(
        "--field",
        dest="fields",
        action="append",
        type=parse_field,
        default=[],
        metavar="KEY=VALUE",
        help="structured field, repeatable",
    )
    parser.add_argument("--json-message", action="store_true", help="decode MESSAGE as a JSON value")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Synchronous entrypoint."""

    parser = build_parser()
    args = parser.parse_args(argv)
    message: Any = args.message
    if args.json_message:
        try:
            message = json.loads(args.message)
        except json.JSONDecodeError as error:
            parser.error(f"MESSAGE is not valid JSON: {error}")
    logger = new_logger(args.name)
    fields = dict(args.fields) if args.fields else None
    logger.log(args.level, message, fields)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
