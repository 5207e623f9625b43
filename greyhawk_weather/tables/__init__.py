"""
Lookup tables for the Greyhawk weather generator.

This module provides:
- Closed enumerations for terrains, precipitation types and special events
- Terrain effects and their special weather tables
- The ordered precipitation occurrence table and standard weather details
- Special weather phenomena and their extraordinary causes
- High winds, prevailing wind and wind chill charts
- Moon phases for Luna and Celene
"""

from greyhawk_weather.tables.table_types import (
    # Enums
    TerrainId,
    PrecipitationTypeId,
    SpecialEventId,
    DurationUnit,
    # Variants
    UniformMovement,
    PerModeMovement,
    MovementRate,
    FixedWindAdjustment,
    ChoiceWindAdjustment,
    ElevationWindAdjustment,
    WindAdjustment,
    # Rows
    WeatherDetail,
    PrecipitationTypeEntry,
    SpecialEventEntry,
    SpecialEventRange,
    TerrainProfile,
)
from greyhawk_weather.tables.terrain_tables import (
    TERRAIN_PROFILES,
    get_terrain_profile,
    get_wind_profile,
)
from greyhawk_weather.tables.precipitation_tables import (
    PRECIPITATION_TABLE,
    STANDARD_WEATHER,
    RAINBOW_TABLE,
    SPECIAL_ROW_INDEX,
    clamp_index,
    find_precipitation_row,
    index_of,
    rainbow_for_roll,
)
from greyhawk_weather.tables.special_event_tables import (
    SPECIAL_EVENTS,
    CAUSE_TABLE,
    CAUSE_CHANCE,
    get_special_event,
)
from greyhawk_weather.tables.wind_tables import (
    HighWindsEntry,
    HIGH_WINDS_TABLE,
    WIND_SPEED_LABELS,
    WIND_DIRECTIONS,
    WIND_DIRECTION_THRESHOLDS,
    WIND_CHILL_TABLE,
)
from greyhawk_weather.tables.moon_tables import (
    Moon,
    MOON_PHASES,
)

__all__ = [
    # Enums
    "TerrainId",
    "PrecipitationTypeId",
    "SpecialEventId",
    "DurationUnit",
    # Variants
    "UniformMovement",
    "PerModeMovement",
    "MovementRate",
    "FixedWindAdjustment",
    "ChoiceWindAdjustment",
    "ElevationWindAdjustment",
    "WindAdjustment",
    # Rows
    "WeatherDetail",
    "PrecipitationTypeEntry",
    "SpecialEventEntry",
    "SpecialEventRange",
    "TerrainProfile",
    # Terrain
    "TERRAIN_PROFILES",
    "get_terrain_profile",
    "get_wind_profile",
    # Precipitation
    "PRECIPITATION_TABLE",
    "STANDARD_WEATHER",
    "RAINBOW_TABLE",
    "SPECIAL_ROW_INDEX",
    "clamp_index",
    "find_precipitation_row",
    "index_of",
    "rainbow_for_roll",
    # Special events
    "SPECIAL_EVENTS",
    "CAUSE_TABLE",
    "CAUSE_CHANCE",
    "get_special_event",
    # Wind
    "HighWindsEntry",
    "HIGH_WINDS_TABLE",
    "WIND_SPEED_LABELS",
    "WIND_DIRECTIONS",
    "WIND_DIRECTION_THRESHOLDS",
    "WIND_CHILL_TABLE",
    # Moons
    "Moon",
    "MOON_PHASES",
]
