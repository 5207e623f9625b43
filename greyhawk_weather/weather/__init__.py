"""
Greyhawk Weather Generation.

Implements the calendar, temperature, precipitation, wind, special
phenomena and moon phase rules, and the orchestrator that runs them in a
fixed order for one day at a time.
"""

from greyhawk_weather.weather.calendar import (
    GreyhawkMonth,
    GreyhawkSeason,
    CalendarDate,
    MONTHS,
    MONTH_BY_NAME,
    get_month,
    get_season_for_month,
    get_sun_times,
    get_weekday,
)
from greyhawk_weather.weather.temperature import (
    ExtremeKind,
    TemperatureExtremeState,
    TemperatureResult,
    HeatEffects,
    compute_daily_temperatures,
    compute_heat_effects,
)
from greyhawk_weather.weather.precipitation import (
    PrecipitationState,
    PrecipitationOutcome,
    PrecipitationEngine,
)
from greyhawk_weather.weather.special_events import (
    SpecialEventOutcome,
    SpecialEventEngine,
)
from greyhawk_weather.weather.wind import (
    WindResult,
    compute_wind,
    compute_wind_speed,
    prevailing_wind_direction,
    wind_chill,
)
from greyhawk_weather.weather.moon_phases import (
    LycanthropeActivity,
    MoonPhasePair,
    phase_of,
    phases_for,
    activity_for,
)
from greyhawk_weather.weather.orchestrator import (
    ContinuityState,
    PrecipitationReport,
    WeatherReport,
    GenerationResult,
    WeatherOrchestrator,
)
from greyhawk_weather.weather.report import ReportCompiler

__all__ = [
    # Calendar
    "GreyhawkMonth",
    "GreyhawkSeason",
    "CalendarDate",
    "MONTHS",
    "MONTH_BY_NAME",
    "get_month",
    "get_season_for_month",
    "get_sun_times",
    "get_weekday",
    # Temperature
    "ExtremeKind",
    "TemperatureExtremeState",
    "TemperatureResult",
    "HeatEffects",
    "compute_daily_temperatures",
    "compute_heat_effects",
    # Precipitation
    "PrecipitationState",
    "PrecipitationOutcome",
    "PrecipitationEngine",
    # Special events
    "SpecialEventOutcome",
    "SpecialEventEngine",
    # Wind
    "WindResult",
    "compute_wind",
    "compute_wind_speed",
    "prevailing_wind_direction",
    "wind_chill",
    # Moons
    "LycanthropeActivity",
    "MoonPhasePair",
    "phase_of",
    "phases_for",
    "activity_for",
    # Orchestration
    "ContinuityState",
    "PrecipitationReport",
    "WeatherReport",
    "GenerationResult",
    "WeatherOrchestrator",
    "ReportCompiler",
]
