"""Command-line interface for the astronomical almanac."""

import argparse
import logging
import sys
from datetime import datetime

from pydantic import ValidationError

from astro_almanac import __version__
from astro_almanac.astronomy.calculator import AstroCalculator
from astro_almanac.config import Settings, get_settings
from astro_almanac.formatting import NOT_OCCURRING, field_map
from astro_almanac.models.observer import Observer


def _parse_when(value: str | None, settings: Settings) -> datetime:
    """Parse --date; naive values are taken in the configured timezone."""
    if value is None:
        return datetime.now(settings.tzinfo)
    when = datetime.fromisoformat(value)
    if when.tzinfo is None:
        when = when.replace(tzinfo=settings.tzinfo)
    return when


def _build_calculator(args: argparse.Namespace, settings: Settings) -> AstroCalculator:
    observer = settings.observer()
    if args.location:
        overrides = observer.model_dump(exclude={"latitude", "longitude"})
        if args.location.count(",") == 2:
            overrides.pop("altitude")
        observer = Observer.from_string(args.location, **overrides)
    return AstroCalculator(observer, delta_t=settings.delta_t, schedule=settings.schedule)


def _print_fields(fields: dict, selected: list[str] | None) -> None:
    if selected:
        for name in selected:
            print(f"{name}: {fields.get(name, NOT_OCCURRING)}")
        return
    for name, value in fields.items():
        if isinstance(value, dict):
            continue
        print(f"{name}: {value}")


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Astro Almanac - Sun, Moon, twilight, seasonal hours and seasons"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--date",
        help="ISO date/time (default: now); naive values use ASTRO_TIMEZONE",
    )
    common.add_argument(
        "--offset",
        default="0",
        help="Day offset: an integer, 'yesterday' or 'tomorrow'",
    )
    common.add_argument(
        "--location",
        help="Observer as 'latitude,longitude[,altitude]' (default: from settings)",
    )

    # Fields command
    fields_parser = subparsers.add_parser(
        "fields", parents=[common], help="Print the almanac fields of a day"
    )
    fields_parser.add_argument(
        "--field",
        action="append",
        help="Only print this field (may be repeated)",
    )

    # Schedule command
    subparsers.add_parser(
        "schedule", parents=[common], help="Print the recent and upcoming events of a day"
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    try:
        settings = get_settings()
        logging.basicConfig(
            level=settings.log_level,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
        calculator = _build_calculator(args, settings)
        report = calculator.compute(_parse_when(args.date, settings), args.offset)
    except (ValidationError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    fields = field_map(report)
    if args.command == "fields":
        _print_fields(fields, args.field)
    else:
        _print_fields(
            fields,
            [
                "ObsDate",
                "ObsTime",
                "ObsSchedLastT",
                "ObsSchedLast",
                "ObsSchedNextT",
                "ObsSchedNext",
                "ObsSchedRecent",
                "ObsSchedUpcoming",
            ],
        )
    return 0


if __name__ == "__main__":
    sys.exit(main())
