"""
Greyhawk Weather Generator.

Daily weather for the World of Greyhawk campaign calendar, with record
temperatures and precipitation carried over from one day to the next.
"""

from greyhawk_weather.errors import (
    WeatherError,
    ConfigError,
    ParseError,
    GenerationCancelled,
)
from greyhawk_weather.data_models import (
    DiceRoller,
    DiceResult,
    LocationConfig,
    WeatherFlags,
    latitude_from_miles,
)
from greyhawk_weather.tables.table_types import TerrainId
from greyhawk_weather.weather import (
    CalendarDate,
    ContinuityState,
    GenerationResult,
    ReportCompiler,
    WeatherOrchestrator,
    WeatherReport,
)

__version__ = "0.1.0"

__all__ = [
    # Errors
    "WeatherError",
    "ConfigError",
    "ParseError",
    "GenerationCancelled",
    # Inputs
    "DiceRoller",
    "DiceResult",
    "LocationConfig",
    "WeatherFlags",
    "TerrainId",
    "CalendarDate",
    "latitude_from_miles",
    # Generation
    "WeatherOrchestrator",
    "ContinuityState",
    "GenerationResult",
    "WeatherReport",
    "ReportCompiler",
]
