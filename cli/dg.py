"""Command-line interface for the Dharma Gates directory."""
from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any

import structlog

from dharma_gates.core.config import get_settings
from dharma_gates.core.logging import configure_logging
from dharma_gates.directory.facets import build_filter_options
from dharma_gates.directory.grouping import GroupingTree, group_by_location
from dharma_gates.geocoding import GeocodeClient, GeocodeError, GeocodeResult

LOGGER = structlog.get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI commands."""

    parser = argparse.ArgumentParser(prog="dg")
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("init-db", help="Create the database tables")

    geocode_parser = subparsers.add_parser("geocode", help="Resolve an address or coordinates")
    geocode_parser.add_argument("--address", default=None, help="Free-text address")
    geocode_parser.add_argument("--lat", type=float, default=None, help="Latitude")
    geocode_parser.add_argument("--lon", type=float, default=None, help="Longitude")

    group_parser = subparsers.add_parser("group", help="Print centers grouped by country and state")
    group_parser.add_argument("path", type=Path, help="JSON file holding a list of center records")

    facets_parser = subparsers.add_parser("facets", help="Print the filter options for a set of centers")
    facets_parser.add_argument("path", type=Path, help="JSON file holding a list of center records")

    return parser


def load_centers(path: Path) -> list[dict[str, Any]]:
    """Read a JSON list of center records."""

    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError(f"{path} must contain a JSON list of centers")
    return [dict(item) for item in data if isinstance(item, dict)]


def render_tree(grouped: GroupingTree) -> str:
    """Render a grouping tree as indented text."""

    lines: list[str] = []
    for country in grouped.countries():
        lines.append(country)
        for state in grouped.states(country):
            lines.append(f"  {state}")
            lines.extend(f"    {center.get('name') or ''}" for center in grouped.tree[country][state])
    if grouped.unparseable:
        lines.append("Other Locations/Address Unlisted")
        lines.extend(f"    {center.get('name') or ''}" for center in grouped.unparseable)
    return "\n".join(lines)


async def _geocode(address: str | None, lat: float | None, lon: float | None) -> GeocodeResult:
    async with GeocodeClient.from_settings(get_settings()) as client:
        if address:
            return await client.forward(address)
        return await client.reverse(lat, lon)  # type: ignore[arg-type]


def _handle_geocode(args: argparse.Namespace) -> int:
    if not args.address and (args.lat is None or args.lon is None):
        print("Either --address or both --lat and --lon are required", file=sys.stderr)
        return 2
    try:
        result = asyncio.run(_geocode(args.address, args.lat, args.lon))
    except ValueError as exc:
        print(str(exc), file=sys.stderr)
        return 2
    except GeocodeError as exc:
        LOGGER.error("cli.geocode.failed", error=str(exc), kind=type(exc).__name__)
        return 1
    print(json.dumps(result.as_dict(), indent=2))
    return 0


def main(args: list[str] | None = None) -> None:
    """CLI entry point."""

    settings = get_settings()
    configure_logging(settings.log_level, json_output=False)
    parser = build_parser()
    namespace = parser.parse_args(args=args)

    if namespace.command == "init-db":
        from dharma_gates.db.session import init_db

        init_db()
        LOGGER.info("db.initialised", database_url=settings.database_url)
    elif namespace.command == "geocode":
        code = _handle_geocode(namespace)
        if code:
            sys.exit(code)
    elif namespace.command == "group":
        grouped = group_by_location(load_centers(namespace.path), pinned_country=settings.pinned_country)
        print(render_tree(grouped))
    elif namespace.command == "facets":
        options = build_filter_options(load_centers(namespace.path))
        print(json.dumps(options.as_dict(), indent=2, ensure_ascii=False))
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
