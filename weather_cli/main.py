"""Command line entry point for fetching weather from wttr.in."""

import argparse
import sys
import traceback

from rich.console import Console

from weather_cli.core.config import settings
from weather_cli.core.logging import configure_logging, get_logger
from weather_cli.models.weather import FormatSelector
from weather_cli.services.formatter import render_error, render_report
from weather_cli.services.weather import WeatherNotFoundError, WeatherService, WeatherServiceError

logger = get_logger(__name__)

console = Console(highlight=False)

EPILOG = """\
Examples:
  weather-cli Mumbai
  weather-cli "New York" --simple
  weather-cli Tokyo --json
  weather-cli London --debug

Format Options:
  --full     Full ASCII art weather (default)
  --simple   One-line simple format
  --plain    Plain text detailed format
  --custom   Custom format with specific fields
  --json     JSON format with detailed data
  --debug    Show debug information
"""

# Checked in order; the first flag present wins.
FORMAT_PRECEDENCE = (
    FormatSelector.SIMPLE,
    FormatSelector.PLAIN,
    FormatSelector.CUSTOM,
    FormatSelector.JSON,
)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog=settings.app_name,
        usage="%(prog)s <city_name> [options]",
        description="Fetch current weather for a location from wttr.in",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        allow_abbrev=False,
    )
    # Location words are collected from the leftovers of parse_known_args so
    # they may appear before, after or between flags.
    for fmt in FormatSelector:
        parser.add_argument(
            f"--{fmt.value}",
            dest=fmt.value,
            action="store_true",
            help=argparse.SUPPRESS,
        )
    parser.add_argument("--debug", action="store_true", help="Show debug information")
    parser.add_argument("--version", action="version", version=f"%(prog)s {settings.app_version}")
    return parser


def resolve_format(args: argparse.Namespace) -> FormatSelector:
    """Pick the output format from parsed flags."""
    for fmt in FORMAT_PRECEDENCE:
        if getattr(args, fmt.value, False):
            return fmt
    return FormatSelector.FULL


def print_lines(lines: list[str]) -> None:
    """Write report lines verbatim."""
    for line in lines:
        # rich expands tabs and strips control characters; upstream text must pass through as-is
        console.file.write(line + "\n")
    console.file.flush()


def report_failure(error: WeatherServiceError) -> None:
    """Print the user message and log diagnostic detail."""
    print_lines(render_error(error))

    cause = error.__cause__ or error
    logger.debug(
        "fetch_failed",
        error_type=type(error).__name__,
        cause_type=type(cause).__name__,
        frames=[frame.strip() for frame in traceback.format_tb(cause.__traceback__)[:3]],
    )


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point.

    Args:
        argv: Arguments without the program name, defaults to sys.argv[1:]

    Returns:
        Process exit status
    """
    argv = sys.argv[1:] if argv is None else argv
    parser = build_parser()

    if not argv:
        console.out(parser.format_help(), highlight=False)
        return 1

    args, rest = parser.parse_known_args(argv)
    configure_logging("DEBUG" if args.debug else None)

    words = [arg for arg in rest if not arg.startswith("-")]
    unknown = [arg for arg in rest if arg.startswith("-")]
    if unknown:
        logger.debug("unknown_arguments_ignored", arguments=unknown)

    location = " ".join(words)
    if not location:
        logger.warning("empty_location", hint="the service will guess a location from the caller")

    fmt = resolve_format(args)

    with WeatherService() as service:
        try:
            data = service.fetch(location, fmt)
        except WeatherNotFoundError as e:
            report_failure(e)
            return 0
        except WeatherServiceError as e:
            report_failure(e)
            return 1

    print_lines(render_report(data))
    return 0


if __name__ == "__main__":
    sys.exit(main())
