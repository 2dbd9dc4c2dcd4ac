"""Command-line demonstration of the WorldWeatherOnline client.

Fetches the current conditions for a location and prints every value the
provider reported as non-zero:

    wwo-example --key YOUR-API-KEY London

The key may also be supplied through WWO_API_KEY (or a .env file).
"""

import argparse
import logging
import sys
from dataclasses import replace
from typing import List, Optional, TextIO

from wwo import WWO
from wwo_config import get_settings
from wwo_errors import WWOError
from wwo_time import format_clock
from wwo_types import CurrentCondition, ZERO_TIME

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="wwo-example",
                                     description="Print current weather conditions for a location.")
    parser.add_argument("location", help="Location query, e.g. 'London' or '48.85,2.35'")
    parser.add_argument("--key", help="Premium API key (defaults to WWO_API_KEY)")
    parser.add_argument("--insecure", action="store_true", help="Use http rather than https")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def print_current_condition(cc: CurrentCondition, out: Optional[TextIO] = None) -> None:
    """Prints the non-zero fields of a current-condition observation."""
    out = out or sys.stdout
    out.write("Current Conditions: ")

    if cc.time != ZERO_TIME:
        out.write(f"at {format_clock(cc.time)}\n")
    if cc.temp != 0:
        out.write(f"Temperature\t{cc.temp}°C\n")
    if cc.feels_like != 0:
        out.write(f"Feels Like\t{cc.feels_like}°C\n")
    if cc.humidity != 0:
        out.write(f"Humidity\t{cc.humidity}%\n")
    if cc.dew_point != 0:
        out.write(f"Dew Point\t{cc.dew_point}°C\n")
    if cc.pressure != 0:
        out.write(f"Pressure\t{cc.pressure}mbar\n")
    if cc.visibility != 0:
        out.write(f"Visibility\t{cc.visibility}km\n")
    if cc.cloud_cover != 0:
        out.write(f"Cloud cover\t{cc.cloud_cover}%\n")
    if cc.precip != 0:
        out.write(f"Precipitation\t{cc.precip}mm\n")
    if cc.wind_speed != 0:
        out.write(f"Wind Speed\t{cc.wind_speed}km/h\n")
    if cc.wind_dir != 0:
        out.write(f"Wind Direction\t{cc.wind_dir}°E of N ({cc.wind_dir_compass})\n")


def main(argv: Optional[List[str]] = None, client: Optional[WWO] = None) -> int:
    """Runs the demonstration and returns the process exit status.

        Exit status is 1 when no API key is available and 2 when the lookup fails.
    """
    args = build_parser().parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    if client is None:
        settings = get_settings()
        if args.key:
            settings = replace(settings, api_key=args.key)
        if args.insecure:
            settings = replace(settings, insecure=True)
        if not settings.has_api_key:
            sys.stderr.write("Error: no API key given (use --key or set WWO_API_KEY)\n")
            return 1
        client = WWO.from_settings(settings)

    try:
        forecast = client.get_local(args.location, {"fx": "no"})
    except WWOError as e:
        logger.debug("Lookup failed: %r", e)
        sys.stderr.write(f"Error: {e}\n")
        return 2

    print_current_condition(forecast.current)
    return 0


if __name__ == "__main__":
    sys.exit(main())
