"""
Greyhawk Weather Generator - Main Entry Point

Generates daily weather for the World of Greyhawk campaign calendar.

This module provides the command-line front end: argument parsing, the
optional interactive settings prompt, continuity-state persistence
between runs, and report output.
"""

import argparse
import json
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from greyhawk_weather.data_models import (
    DiceRoller,
    LocationConfig,
    WeatherFlags,
    latitude_from_miles,
)
from greyhawk_weather.errors import ConfigError, GenerationCancelled, WeatherError
from greyhawk_weather.tables.table_types import TerrainId
from greyhawk_weather.weather.calendar import BASELINE_LATITUDE, DEFAULT_YEAR, MONTHS, CalendarDate
from greyhawk_weather.weather.orchestrator import (
    ContinuityState,
    GenerationResult,
    WeatherOrchestrator,
)
from greyhawk_weather.weather.report import ReportCompiler


# Configure logging
def setup_logging(verbose: bool = False) -> None:
    """Configure logging based on verbosity level."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


logger = logging.getLogger(__name__)


# =============================================================================
# CONFIGURATION
# =============================================================================

@dataclass
class WeatherConfig:
    """Configuration for a weather generation run."""

    # Date
    month: str = "Fireseek"
    day: int = 1
    year: int = DEFAULT_YEAR

    # Location
    latitude: int = BASELINE_LATITUDE
    elevation_feet: int = 0
    terrain: str = TerrainId.PLAINS.slug

    # Rules
    use_record_temperatures: bool = True
    use_realistic_wind: bool = False
    enable_special_weather: bool = True
    in_air: bool = False
    in_battle: bool = False

    # Runtime options
    days: int = 1
    seed: Optional[int] = None
    state_file: Optional[Path] = None
    json_output: bool = False
    interactive: bool = False
    verbose: bool = False

    def __post_init__(self):
        """Ensure paths are Path objects."""
        if isinstance(self.state_file, str):
            self.state_file = Path(self.state_file)

    def location(self) -> LocationConfig:
        """Build the location, validating it."""
        return LocationConfig(
            latitude=self.latitude,
            elevation_feet=self.elevation_feet,
            terrain=TerrainId.from_name(self.terrain),
        )

    def date(self) -> CalendarDate:
        """Build the start date, validating it."""
        return CalendarDate(month=self.month, day=self.day, year=self.year)

    def flags(self) -> WeatherFlags:
        return WeatherFlags(
            use_record_temperatures=self.use_record_temperatures,
            use_realistic_wind=self.use_realistic_wind,
            enable_special_weather=self.enable_special_weather,
            in_air=self.in_air,
            in_battle=self.in_battle,
        )


def parse_arguments(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Greyhawk Weather Generator - daily weather for the Common Year calendar",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  greyhawk-weather --month Coldeven --day 1          # One day on the plains
  greyhawk-weather --terrain mountains --elevation 6000
  greyhawk-weather --miles-north 210 --days 7        # A week, 3 degrees north of Greyhawk
  greyhawk-weather --state-file weather.json         # Carry weather over between runs
  greyhawk-weather --interactive                     # Prompt for settings
        """
    )

    # General options
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Seed the dice for a reproducible report",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print reports as JSON",
    )
    parser.add_argument(
        "-i", "--interactive",
        action="store_true",
        help="Prompt for the date and location",
    )

    # Date options
    date_group = parser.add_argument_group("Date Options")
    date_group.add_argument(
        "--month",
        type=str,
        default="Fireseek",
        help="Month or festival name (default: Fireseek)",
    )
    date_group.add_argument(
        "--day",
        type=int,
        default=1,
        help="Day of the month (default: 1)",
    )
    date_group.add_argument(
        "--year",
        type=int,
        default=DEFAULT_YEAR,
        help=f"Common Year (default: {DEFAULT_YEAR})",
    )
    date_group.add_argument(
        "--days",
        type=int,
        default=1,
        help="Number of consecutive days to generate (default: 1)",
    )

    # Location options
    location_group = parser.add_argument_group("Location Options")
    latitude_group = location_group.add_mutually_exclusive_group()
    latitude_group.add_argument(
        "--latitude",
        type=int,
        default=None,
        help="Latitude in degrees (default: 40)",
    )
    latitude_group.add_argument(
        "--miles-north",
        type=int,
        help="Miles north of the City of Greyhawk (sets the latitude)",
    )
    latitude_group.add_argument(
        "--miles-south",
        type=int,
        help="Miles south of the City of Greyhawk (sets the latitude)",
    )
    location_group.add_argument(
        "--elevation",
        type=int,
        default=0,
        help="Elevation in feet (default: 0)",
    )
    location_group.add_argument(
        "--terrain",
        type=str,
        default="plains",
        choices=[t.slug for t in TerrainId],
        help="Terrain type (default: plains)",
    )

    # Rule options
    rules_group = parser.add_argument_group("Rule Options")
    rules_group.add_argument(
        "--no-record-temperatures",
        action="store_true",
        help="Never roll record highs and lows",
    )
    rules_group.add_argument(
        "--realistic-wind",
        action="store_true",
        help="Gentler wind increase with elevation in mountains",
    )
    rules_group.add_argument(
        "--no-special-weather",
        action="store_true",
        help="Disable special weather phenomena",
    )
    rules_group.add_argument(
        "--in-air",
        action="store_true",
        help="Report high-wind effects on flyers",
    )
    rules_group.add_argument(
        "--in-battle",
        action="store_true",
        help="Report high-wind effects on combat",
    )

    # State options
    state_group = parser.add_argument_group("State Options")
    state_group.add_argument(
        "--state-file",
        type=Path,
        help="JSON file holding continuing weather between runs",
    )

    return parser.parse_args(argv)


def create_config_from_args(args: argparse.Namespace) -> WeatherConfig:
    """Create WeatherConfig from parsed arguments."""
    latitude = args.latitude if args.latitude is not None else BASELINE_LATITUDE
    if args.miles_north is not None:
        latitude = latitude_from_miles(miles_north=args.miles_north)
    elif args.miles_south is not None:
        latitude = latitude_from_miles(miles_south=args.miles_south)

    return WeatherConfig(
        month=args.month,
        day=args.day,
        year=args.year,
        latitude=latitude,
        elevation_feet=args.elevation,
        terrain=args.terrain,
        use_record_temperatures=not args.no_record_temperatures,
        use_realistic_wind=args.realistic_wind,
        enable_special_weather=not args.no_special_weather,
        in_air=args.in_air,
        in_battle=args.in_battle,
        days=args.days,
        seed=args.seed,
        state_file=args.state_file,
        json_output=args.json,
        interactive=args.interactive,
        verbose=args.verbose,
    )


# =============================================================================
# INTERACTIVE PROMPT
# =============================================================================

CANCEL_WORDS = ("q", "quit")


def _ask(prompt: str, default, input_func: Callable[[str], str]) -> str:
    try:
        answer = input_func(f"{prompt} [{default}]: ").strip()
    except (EOFError, KeyboardInterrupt):
        raise GenerationCancelled("Settings prompt aborted") from None
    if answer.lower() in CANCEL_WORDS:
        raise GenerationCancelled("Settings prompt cancelled")
    return answer or str(default)


def _ask_int(prompt: str, default: int, input_func: Callable[[str], str]) -> int:
    answer = _ask(prompt, default, input_func)
    try:
        return int(answer)
    except ValueError:
        raise ConfigError(f"{prompt} must be a whole number, got {answer!r}")


def prompt_for_settings(
    config: WeatherConfig,
    input_func: Callable[[str], str] = input,
) -> WeatherConfig:
    """
    Ask for the date and location, keeping the current value on a blank answer.

    Raises:
        GenerationCancelled: If the user enters "q" or aborts the prompt
        ConfigError: If a number is expected and something else is entered
    """
    print("Enter settings (blank keeps the default, 'q' cancels).")
    print("Months: " + ", ".join(m.name for m in MONTHS.values()))
    print("Terrains: " + ", ".join(t.slug for t in TerrainId))
    config.month = _ask("Month", config.month, input_func)
    config.day = _ask_int("Day", config.day, input_func)
    config.year = _ask_int("Year (CY)", config.year, input_func)
    config.terrain = _ask("Terrain", config.terrain, input_func)
    config.latitude = _ask_int("Latitude", config.latitude, input_func)
    config.elevation_feet = _ask_int("Elevation (feet)", config.elevation_feet, input_func)
    return config


# =============================================================================
# STATE FILE
# =============================================================================

def load_state(path: Optional[Path]) -> ContinuityState:
    """
    Load the continuity state, or a fresh one if there is no file yet.

    Raises:
        ConfigError: If the file is not valid JSON or not a weather state
    """
    if path is None or not path.exists():
        return ContinuityState()
    with open(path, encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"State file {path} is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"State file {path} does not hold a weather state")
    try:
        state = ContinuityState.from_dict(data)
    except (AttributeError, TypeError, ValueError) as e:
        raise ConfigError(f"State file {path} holds an invalid weather state: {e}") from e
    logger.debug(f"Loaded weather state from {path}")
    return state


def save_state(path: Path, state: ContinuityState) -> None:
    """Write the continuity state as JSON."""
    with open(path, "w", encoding="utf-8") as f:
        json.dump(state.to_dict(), f, indent=2)
    logger.debug(f"Saved weather state to {path}")


# =============================================================================
# GENERATION
# =============================================================================

def run_generation(
    config: WeatherConfig,
    state: Optional[ContinuityState] = None,
) -> list[GenerationResult]:
    """
    Generate the configured number of consecutive days.

    Each day is generated from the previous day's continuity state.
    """
    location = config.location()
    date = config.date()
    flags = config.flags()
    orchestrator = WeatherOrchestrator(DiceRoller(seed=config.seed))

    results = []
    for index in range(max(1, config.days)):
        if index:
            date = date.advance()
        result = orchestrator.generate(date, location, flags, state)
        state = result.next_state
        results.append(result)
    return results


# =============================================================================
# MAIN ENTRY POINT
# =============================================================================

def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for CLI usage."""
    args = parse_arguments(argv)
    setup_logging(args.verbose)

    config = create_config_from_args(args)
    compiler = ReportCompiler()

    try:
        if config.interactive:
            config = prompt_for_settings(config)
        state = load_state(config.state_file)
        results = run_generation(config, state)
    except GenerationCancelled as e:
        print(f"Generation cancelled: {e}")
        return 1
    except WeatherError as e:
        logger.error(f"Weather generation failed: {e}")
        return 2

    if config.state_file is not None:
        save_state(config.state_file, results[-1].next_state)

    if config.json_output:
        print(json.dumps([compiler.to_dict(r.report) for r in results], indent=2))
        return 0

    print("=" * 60)
    print("GREYHAWK WEATHER")
    print("=" * 60)
    for result in results:
        print(compiler.to_text(result.report))
        print("-" * 60)
    return 0


if __name__ == "__main__":
    sys.exit(main())
