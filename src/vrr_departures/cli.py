"""CLI helpers for finding stops and inspecting the board configuration."""

import asyncio
import json
import sys
from datetime import UTC, datetime
from typing import Any

import aiohttp

from vrr_departures.adapters.config import AppConfig, BoardDefaultsLoader
from vrr_departures.adapters.relay import LocalDepartureSource, LocalStopFinder, VrrRelay
from vrr_departures.adapters.storage import JsonFileStore
from vrr_departures.adapters.vrr_api import EfaClient
from vrr_departures.application.services import ConfigStore
from vrr_departures.application.services.departure_fetcher import sort_departures
from vrr_departures.application.services.departure_formatter import DepartureFormatter
from vrr_departures.domain.models import BoardConfigRecord, RelayError, Station


def _relay(session: aiohttp.ClientSession, config: AppConfig) -> VrrRelay:
    return VrrRelay(
        EfaClient(
            session,
            base_url=config.vrr_api_base_url,
            timezone=config.timezone,
            timeout_seconds=config.vrr_api_timeout,
        )
    )


async def search_stations(query: str, config: AppConfig) -> list[Station]:
    """Search for stops by name."""
    async with aiohttp.ClientSession() as session:
        return await LocalStopFinder(_relay(session, config)).search_stops(query)


async def show_departures(stop_id: str, limit: int, config: AppConfig, format_json: bool) -> None:
    """Print upcoming departures for a stop."""
    async with aiohttp.ClientSession() as session:
        source = LocalDepartureSource(_relay(session, config), config.timezone)
        departures = await source.get_departures(stop_id)

    departures = sort_departures(departures)[:limit]
    if format_json:
        print(
            json.dumps(
                [
                    {
                        "line": d.line,
                        "destination": d.destination,
                        "plannedTime": d.planned_time.isoformat(),
                        "estimatedTime": d.estimated_time.isoformat() if d.estimated_time else None,
                        "platform": d.platform,
                    }
                    for d in departures
                ],
                indent=2,
                ensure_ascii=False,
            )
        )
        return

    if not departures:
        print(f"No departures for stop {stop_id}", file=sys.stderr)
        sys.exit(1)
    formatter = DepartureFormatter(config.timezone)
    now = datetime.now(UTC)
    for d in departures:
        delay = f" +{d.delay_minutes}" if d.delay_minutes else ""
        platform = f"  [{d.platform}]" if d.platform else ""
        print(
            f"  {formatter.format_clock_time(d.effective_time)}{delay:<4} "
            f"{formatter.format_countdown(d, now):>6}  {d.line:<6} {d.destination}{platform}"
        )


def generate_stop_snippet(station: Station) -> str:
    """TOML snippet for the board defaults file."""
    return "\n".join(
        [
            "[[stops]]",
            f'id = "{station.id}"',
            f'name = "{station.name}"',
            "# label = \"\"",
            "# platforms = []",
            '# time_from = "06:00"',
            '# time_to = "22:00"',
        ]
    )


def _config_store(config: AppConfig) -> ConfigStore:
    store = ConfigStore(
        JsonFileStore(config.storage_path), config.storage_key, BoardDefaultsLoader.load(config)
    )
    store.load()
    return store


def _print_stations(stations: list[Station], query: str, format_json: bool) -> None:
    if format_json:
        results: list[dict[str, Any]] = [
            {"id": s.id, "name": s.name, "place": s.place} for s in stations
        ]
        print(json.dumps(results, indent=2, ensure_ascii=False))
        return
    if not stations:
        print(f"No stops found for '{query}'", file=sys.stderr)
        sys.exit(1)
    print(f"\nFound {len(stations)} stop(s):\n")
    for station in stations:
        print(f"  {station.name}" + (f" ({station.place})" if station.place else ""))
        print(f"    ID: {station.id}")
        print()


async def main() -> None:
    """Main CLI entry point."""
    import argparse

    parser = argparse.ArgumentParser(
        description="VRR Departures Configuration Helper",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Search for stops
  vrr-departures-cli search "Essen Hbf"

  # Show upcoming departures of a stop
  vrr-departures-cli departures 20009289

  # Generate a board defaults snippet for the first match
  vrr-departures-cli search "Essen Hbf" --toml

  # Show or reset the persisted board
  vrr-departures-cli config show
  vrr-departures-cli config reset
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    search_parser = subparsers.add_parser("search", help="Search for stops")
    search_parser.add_argument("query", help="Stop name to search for (min. 3 characters)")
    search_parser.add_argument("--json", action="store_true", help="Output as JSON")
    search_parser.add_argument(
        "--toml", action="store_true", help="Print a board defaults snippet for each match"
    )

    departures_parser = subparsers.add_parser("departures", help="Show upcoming departures")
    departures_parser.add_argument("stop_id", help="Stop ID (e.g., 20009289)")
    departures_parser.add_argument("--limit", type=int, default=10, help="Maximum departures")
    departures_parser.add_argument("--json", action="store_true", help="Output as JSON")

    config_parser = subparsers.add_parser("config", help="Inspect the persisted board")
    config_parser.add_argument("action", choices=["show", "reset"], help="What to do")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    config = AppConfig()
    try:
        if args.command == "search":
            stations = await search_stations(args.query, config)
            if args.toml:
                print("\n\n".join(generate_stop_snippet(s) for s in stations))
            else:
                _print_stations(stations, args.query, args.json)

        elif args.command == "departures":
            await show_departures(args.stop_id, args.limit, config, args.json)

        elif args.command == "config":
            store = _config_store(config)
            if args.action == "reset":
                store.reset()
                print(f"Reset board config in {config.storage_path}")
            record = BoardConfigRecord.from_domain(store.current)
            print(json.dumps(record.to_json(), indent=2, ensure_ascii=False))

    except RelayError as e:
        print(f"Error: {e.failure.error_type}: {e.failure.message}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def cli_main() -> None:
    """Synchronous entry point for the CLI command."""
    asyncio.run(main())


if __name__ == "__main__":
    cli_main()
