"""
Terrain Effects Table.

Precipitation, temperature and wind adjustments for each terrain, along
with the d100 special weather table rolled when the precipitation table
comes up "Special".
"""

import logging

from greyhawk_weather.errors import ConfigError
from greyhawk_weather.tables.table_types import (
    ChoiceWindAdjustment,
    ElevationWindAdjustment,
    FixedWindAdjustment,
    SpecialEventId,
    SpecialEventRange,
    TerrainId,
    TerrainProfile,
)


logger = logging.getLogger(__name__)

E = SpecialEventId

FOG_AND_MIST_NOTE = "Duration of fog and mist doubled."

DESERT_NOTE = (
    "In the desert, there is a cumulative 2% chance per hour that a creature or character "
    "will become blinded by the glare. The effect is equivalent to a Light spell cast on the "
    "creature's visage, and may be relieved with a Cure Disease spell or a night's sleep. "
    "After a week of travel in the desert, the cumulative chance drops to 1% per hour, and "
    "after one month of continual exposure to these conditions, the possibility is entirely "
    "removed. No fog, mist, blizzard, monsoon, tropical storm, gale, or hurricane permitted."
)


def _ranges(*rows: tuple[int, int, SpecialEventId]) -> tuple[SpecialEventRange, ...]:
    return tuple(SpecialEventRange(low, high, event) for low, high, event in rows)


_SWAMP_EVENTS = _ranges((1, 25, E.QUICKSAND), (26, 80, E.SUN_SHOWER), (81, 100, E.EARTHQUAKE))
_SEACOAST_EVENTS = _ranges((1, 80, E.EARTHQUAKE), (81, 94, E.TSUNAMI), (95, 100, E.UNDERSEA_VOLCANO))
_AT_SEA_EVENTS = _ranges((1, 20, E.TSUNAMI), (21, 40, E.UNDERSEA_VOLCANO), (41, 100, E.UNDERSEA_EARTHQUAKE))


TERRAIN_PROFILES: dict[TerrainId, TerrainProfile] = {
    TerrainId.HILLS: TerrainProfile(
        terrain=TerrainId.HILLS,
        precipitation_adjustment=0,
        day_temperature=0,
        night_temperature=0,
        wind_adjustment=ChoiceWindAdjustment((5, -5)),
        special_events=_ranges((1, 80, E.WINDSTORM), (81, 100, E.EARTHQUAKE)),
    ),
    TerrainId.FOREST: TerrainProfile(
        terrain=TerrainId.FOREST,
        precipitation_adjustment=0,
        day_temperature=-5,
        night_temperature=-5,
        wind_adjustment=FixedWindAdjustment(-5),
        special_events=_ranges((1, 80, E.QUICKSAND), (81, 100, E.EARTHQUAKE)),
    ),
    TerrainId.SYLVAN_FOREST: TerrainProfile(
        terrain=TerrainId.SYLVAN_FOREST,
        precipitation_adjustment=-30,
        day_temperature=0,
        night_temperature=0,
        wind_adjustment=FixedWindAdjustment(-5),
        notes="Influenced by Faerie, ensuring temperate conditions and minimal precipitation",
        allows_record_temperatures=False,
        seasonal_dice_scaling=True,
    ),
    TerrainId.JUNGLE: TerrainProfile(
        terrain=TerrainId.JUNGLE,
        precipitation_adjustment=10,
        day_temperature=5,
        night_temperature=5,
        wind_adjustment=FixedWindAdjustment(-10),
        special_events=_ranges(
            (1, 5, E.VOLCANO),
            (6, 60, E.RAIN_FOREST_DOWNPOUR),
            (61, 80, E.QUICKSAND),
            (81, 100, E.EARTHQUAKE),
        ),
    ),
    TerrainId.SWAMP: TerrainProfile(
        terrain=TerrainId.SWAMP,
        precipitation_adjustment=5,
        day_temperature=5,
        night_temperature=5,
        wind_adjustment=FixedWindAdjustment(-5),
        special_events=_SWAMP_EVENTS,
    ),
    TerrainId.COLD_SWAMP: TerrainProfile(
        terrain=TerrainId.COLD_SWAMP,
        precipitation_adjustment=5,
        day_temperature=-5,
        night_temperature=-5,
        wind_adjustment=FixedWindAdjustment(-5),
        special_events=_SWAMP_EVENTS,
    ),
    TerrainId.DUST: TerrainProfile(
        terrain=TerrainId.DUST,
        precipitation_adjustment=-25,
        day_temperature=10,
        night_temperature=-10,
        wind_adjustment=FixedWindAdjustment(0),
        special_events=_ranges(
            (1, 40, E.FLASH_FLOOD),
            (41, 70, E.DUSTSTORM),
            (71, 85, E.TORNADO),
            (86, 100, E.EARTHQUAKE),
        ),
        notes="No fog, gale, or hurricane permitted.",
    ),
    TerrainId.PLAINS: TerrainProfile(
        terrain=TerrainId.PLAINS,
        precipitation_adjustment=0,
        day_temperature=0,
        night_temperature=0,
        wind_adjustment=FixedWindAdjustment(5),
        special_events=_ranges((1, 50, E.TORNADO), (51, 100, E.EARTHQUAKE)),
        notes="No monsoon or tropical storm permitted.",
    ),
    TerrainId.DESERT: TerrainProfile(
        terrain=TerrainId.DESERT,
        precipitation_adjustment=-30,
        day_temperature=10,
        night_temperature=-10,
        wind_adjustment=FixedWindAdjustment(5),
        special_events=_ranges(
            (1, 25, E.FLASH_FLOOD),
            (26, 50, E.SANDSTORM),
            (51, 65, E.OASIS),
            (66, 85, E.MIRAGE_OASIS),
            (86, 100, E.EARTHQUAKE),
        ),
        notes=DESERT_NOTE,
    ),
    # Altitude already lowers temperatures; wind rises with elevation
    TerrainId.MOUNTAINS: TerrainProfile(
        terrain=TerrainId.MOUNTAINS,
        precipitation_adjustment=0,
        day_temperature=0,
        night_temperature=0,
        wind_adjustment=ElevationWindAdjustment(),
        special_events=_ranges(
            (1, 20, E.WINDSTORM),
            (21, 50, E.ROCK_AVALANCHE),
            (51, 75, E.SNOW_AVALANCHE),
            (76, 80, E.VOLCANO),
            (81, 100, E.EARTHQUAKE),
        ),
    ),
    TerrainId.SEACOAST_WARM: TerrainProfile(
        terrain=TerrainId.SEACOAST_WARM,
        precipitation_adjustment=5,
        day_temperature=5,
        night_temperature=5,
        wind_adjustment=FixedWindAdjustment(5),
        special_events=_SEACOAST_EVENTS,
        notes=FOG_AND_MIST_NOTE,
        doubles_fog_duration=True,
    ),
    TerrainId.SEACOAST_COLD: TerrainProfile(
        terrain=TerrainId.SEACOAST_COLD,
        precipitation_adjustment=5,
        day_temperature=-5,
        night_temperature=-5,
        wind_adjustment=FixedWindAdjustment(5),
        special_events=_SEACOAST_EVENTS,
        notes=FOG_AND_MIST_NOTE,
        doubles_fog_duration=True,
    ),
    TerrainId.AT_SEA_WARM: TerrainProfile(
        terrain=TerrainId.AT_SEA_WARM,
        precipitation_adjustment=15,
        day_temperature=5,
        night_temperature=5,
        wind_adjustment=FixedWindAdjustment(10),
        special_events=_AT_SEA_EVENTS,
        notes=FOG_AND_MIST_NOTE,
        doubles_fog_duration=True,
    ),
    TerrainId.AT_SEA_COLD: TerrainProfile(
        terrain=TerrainId.AT_SEA_COLD,
        precipitation_adjustment=15,
        day_temperature=-10,
        night_temperature=-10,
        wind_adjustment=FixedWindAdjustment(10),
        special_events=_AT_SEA_EVENTS,
        notes=FOG_AND_MIST_NOTE,
        doubles_fog_duration=True,
    ),
}


def get_terrain_profile(terrain: TerrainId) -> TerrainProfile:
    """
    Look up the profile for a terrain.

    Raises:
        ConfigError: If the terrain has no profile
    """
    profile = TERRAIN_PROFILES.get(terrain)
    if profile is None:
        raise ConfigError(f"No terrain profile for {terrain!r}")
    return profile


def get_wind_profile(terrain: TerrainId) -> TerrainProfile:
    """
    Look up the profile used for wind adjustments.

    Unlike get_terrain_profile, an unknown terrain falls back to Plains.
    """
    profile = TERRAIN_PROFILES.get(terrain)
    if profile is None:
        logger.warning(f"No wind adjustment for terrain {terrain!r}, using Plains")
        return TERRAIN_PROFILES[TerrainId.PLAINS]
    return profile
