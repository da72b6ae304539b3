"""Crawl this node once and report it to the monitoring collector.

Usage:
    nodewatcher --hostname node1 --hood city --lat 49.45 --lng 11.07
    nodewatcher --config /etc/nodewatcher.yaml --debug --dry-run
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from pydantic import ValidationError

from nodewatcher.collectors.base import CollectorError
from nodewatcher.config import DEFAULT_CONFIG_FILE, Settings, load_settings
from nodewatcher.engine.assembler import SnapshotAssembler, apply_identity
from nodewatcher.report import ReportError, build_envelope, deliver, encode_snapshot

logger = logging.getLogger("nodewatcher")

LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nodewatcher", description="Mesh node health crawler"
    )
    parser.add_argument(
        "--config", default=str(DEFAULT_CONFIG_FILE), help="YAML settings file"
    )
    parser.add_argument("--hostname")
    parser.add_argument("--contact")
    parser.add_argument("--hood")
    parser.add_argument("--distname")
    parser.add_argument("--distversion")
    parser.add_argument("--lat", type=float)
    parser.add_argument("--lng", type=float)
    parser.add_argument(
        "--debug", action="store_true", default=None, help="Print intermediate output"
    )
    parser.add_argument(
        "--dry-run",
        dest="dry_run",
        action="store_true",
        default=None,
        help="Do not send the report",
    )
    return parser


async def run(settings: Settings) -> str | None:
    """One crawl: assemble, print in debug mode, deliver unless dry-run."""
    snapshot = await SnapshotAssembler.from_settings(settings).assemble()
    snapshot = apply_identity(snapshot, settings)

    payload = encode_snapshot(snapshot)
    envelope = build_envelope(snapshot, payload)

    if settings.debug:
        print("XML Output:")
        print(encode_snapshot(snapshot, indent="\t"))
        print()
        print("XML Payload:")
        print()
        print(payload)
        print()
        print("JSON Output:")
        print()
        print(envelope)

    if settings.dry_run:
        logger.info("Dry run, report not sent")
        return None

    body = await deliver(envelope, settings.collector_url, timeout=settings.http_timeout)
    if settings.debug:
        print()
        print("HTTP Response:")
        print()
        print(body)
    return body


def main(argv: list[str] | None = None) -> int:
    args = vars(build_parser().parse_args(argv))
    config_file = args.pop("config")

    try:
        settings = load_settings(config_file, **args)
    except (OSError, ValueError, ValidationError) as exc:
        print(f"invalid configuration: {exc}", file=sys.stderr)
        return 1

    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO, format=LOG_FORMAT
    )

    try:
        asyncio.run(run(settings))
    except CollectorError as exc:
        logger.error("Crawl failed: %s", exc)
        return 1
    except ReportError as exc:
        logger.error("Report failed: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
