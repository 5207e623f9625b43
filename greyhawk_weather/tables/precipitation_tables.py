"""
Precipitation Occurrence and Standard Weather Tables.

PRECIPITATION_TABLE is ordered from the most severe winter weather down
to the rare "Special" row. Adjacent rows are one step apart, which the
continuation rules rely on when weather worsens or eases overnight.
"""

from greyhawk_weather.errors import ConfigError
from greyhawk_weather.tables.table_types import (
    DurationUnit,
    PerModeMovement,
    PrecipitationTypeEntry,
    PrecipitationTypeId,
    TerrainId,
    UniformMovement,
    WeatherDetail,
)


P = PrecipitationTypeId
T = TerrainId
HOURS = DurationUnit.HOURS
DAYS = DurationUnit.DAYS

ICY_CONDITIONS_NOTE = (
    "A drop in temperature to 30°F or below after a storm may result in icy conditions, "
    "affecting travel and dexterity"
)
GUST_DAMAGE_NOTE = (
    "Every 3 turns, there's a 10% chance of gust damage if wind speed exceeds 40 mph. "
    "Damage is 1d6 for every 10 mph over 40 mph"
)
STORM_MOVEMENT = PerModeMovement(foot="x1/4", horse="x1/4", cart="not allowed")


# =============================================================================
# STANDARD WEATHER DETAILS
# =============================================================================


STANDARD_WEATHER: dict[PrecipitationTypeId, WeatherDetail] = {
    P.HEAVY_BLIZZARD: WeatherDetail(
        amount="2d10+10",
        duration="3d8",
        duration_unit=HOURS,
        movement=PerModeMovement(foot="x1/8", horse="x1/4", cart="not allowed"),
        normal_vision="2 ft. radius",
        infravision="No, can't see",
        tracking="No",
        lost_chance="+50%",
        wind_speed="6d8+40",
        notes="Snowdrifts of up to 10 ft per hour may accumulate against buildings, walls, etc",
    ),
    P.BLIZZARD: WeatherDetail(
        amount="2d8+8",
        duration="3d10",
        duration_unit=HOURS,
        movement=UniformMovement("x1/4"),
        normal_vision="10 ft radius",
        infravision="x1/2",
        tracking="Not allowed",
        lost_chance="+35%",
        wind_speed="3d8+36",
        notes="Snowdrifts of up to 5 ft per hour may accumulate against buildings, walls, etc",
    ),
    P.HEAVY_SNOWSTORM: WeatherDetail(
        amount="2d8+2",
        duration="4d6",
        duration_unit=HOURS,
        movement=UniformMovement("x1/2"),
        normal_vision="x3/4",
        infravision="x1/2",
        tracking="-40%",
        lost_chance="+20%",
        wind_speed="3d10",
        notes="Drifts of 1 foot per hour if wind speed > 20 mph",
    ),
    P.LIGHT_SNOWSTORM: WeatherDetail(
        amount="1d8",
        duration="2d6",
        duration_unit=HOURS,
        movement=UniformMovement("x3/4"),
        normal_vision="x3/4",
        infravision="x3/4",
        tracking="-25%",
        lost_chance="+10%",
        wind_speed="4d6",
        notes="Drifts of 1 foot per hour if wind speed > 20 mph",
    ),
    P.SLEETSTORM: WeatherDetail(
        amount="1d2",
        duration="1d6",
        duration_unit=HOURS,
        movement=PerModeMovement(foot="x3/4", horse="x1/2", cart="x1/2"),
        normal_vision="Normal",
        infravision="x3/4",
        tracking="-10%",
        lost_chance="+5%",
        wind_speed="3d10",
    ),
    P.HAILSTORM: WeatherDetail(
        amount="1d2",
        duration="1d4",
        duration_unit=HOURS,
        movement=UniformMovement("x3/4"),
        normal_vision="2 ft. radius",
        infravision="Normal",
        tracking="-10%",
        lost_chance="+10%",
        wind_speed="4d10",
        notes=(
            "Average hailstone diameter is 1/2d4 inches. If stones are more than 1 inch in "
            "diameter, assess 1 point of damage per 1/2 inch of diameter every turn for those "
            "AC6 or worse. Rings, bracers, etc., give no protection from this damage, but "
            "magic armor does"
        ),
    ),
    P.HEAVY_FOG: WeatherDetail(
        amount=None,
        duration="1d12",
        duration_unit=HOURS,
        movement=UniformMovement("x1/4"),
        normal_vision="2 ft. radius",
        infravision="x1/2",
        tracking="-60%",
        lost_chance="+50%",
        wind_speed="1d20",
    ),
    P.LIGHT_FOG: WeatherDetail(
        amount=None,
        duration="2d4",
        duration_unit=HOURS,
        movement=UniformMovement("x1/2"),
        normal_vision="x1/4",
        infravision="x3/4",
        tracking="-30%",
        lost_chance="+30%",
        wind_speed="1d10",
    ),
    P.MIST: WeatherDetail(
        amount=None,
        duration="2d6",
        duration_unit=HOURS,
        movement=UniformMovement("Normal"),
        normal_vision="Normal",
        infravision="Normal",
        tracking="-5%",
        lost_chance="Normal",
        wind_speed="1d10",
    ),
    P.DRIZZLE: WeatherDetail(
        amount="1/4d4",
        duration="1d10",
        duration_unit=HOURS,
        movement=UniformMovement("Normal"),
        normal_vision="Normal",
        infravision="Normal",
        tracking="-1%/turn cumulative",
        lost_chance="Normal",
        wind_speed="1d20",
    ),
    P.LIGHT_RAINSTORM: WeatherDetail(
        amount="1d3",
        duration="1d12",
        duration_unit=HOURS,
        movement=UniformMovement("Normal"),
        normal_vision="Normal",
        infravision="Normal",
        tracking="-10%/hour",
        lost_chance="+10% cumulative",
        wind_speed="1d20",
        notes=ICY_CONDITIONS_NOTE,
    ),
    P.HEAVY_RAINSTORM: WeatherDetail(
        amount="1d4+3",
        duration="1d12",
        duration_unit=HOURS,
        movement=PerModeMovement(foot="x3/4", horse="Normal", cart="x3/4"),
        normal_vision="x3/4",
        infravision="x3/4",
        tracking="-10%/turn",
        lost_chance="+10% cumulative",
        wind_speed="2d12+10",
        notes=ICY_CONDITIONS_NOTE,
    ),
    P.THUNDERSTORM: WeatherDetail(
        amount="1d8",
        duration="1d4",
        duration_unit=HOURS,
        movement=UniformMovement("x1/2"),
        normal_vision="x3/4",
        infravision="x3/4",
        tracking="-10% per Turn",
        lost_chance="+10% (+30% if horsed)",
        wind_speed="4d10",
        notes=(
            "Lightning strikes occur once every 10 minutes with a 1% chance of hitting the "
            "party, increased to 10% if sheltering under trees. Damage is 6d6, with a saving "
            "throw allowed for half damage. " + ICY_CONDITIONS_NOTE
        ),
    ),
    P.TROPICAL_STORM: WeatherDetail(
        amount="1d6",
        duration="1d3",
        duration_unit=DAYS,
        movement=STORM_MOVEMENT,
        normal_vision="x1/2",
        infravision="x1/2",
        tracking="Not allowed",
        lost_chance="+30%",
        wind_speed="3d12",
        notes=GUST_DAMAGE_NOTE,
    ),
    P.MONSOON: WeatherDetail(
        amount="1d8",
        duration="d6+6",
        duration_unit=DAYS,
        movement=STORM_MOVEMENT,
        normal_vision="x1/4",
        infravision="x1/4",
        tracking="Not allowed",
        lost_chance="+30%",
        wind_speed="6d10",
        notes=GUST_DAMAGE_NOTE,
    ),
    P.GALE: WeatherDetail(
        amount="1d8",
        duration="1d3",
        duration_unit=DAYS,
        movement=STORM_MOVEMENT,
        normal_vision="x1/4",
        infravision="x1/4",
        tracking="Not allowed",
        lost_chance="+20%",
        wind_speed="6d8+40",
        notes=GUST_DAMAGE_NOTE,
    ),
    P.HURRICANE: WeatherDetail(
        amount="1d10",
        duration="1d4",
        duration_unit=DAYS,
        movement=STORM_MOVEMENT,
        normal_vision="x1/4",
        infravision="x1/4",
        tracking="Not allowed",
        lost_chance="+30%",
        wind_speed="7d10+70",
        notes=(
            "Unprotected creatures suffer 1d6 wind damage every 3 turns, and buildings take "
            "1d4 structural damage each turn"
        ),
    ),
}


# =============================================================================
# PRECIPITATION OCCURRENCE TABLE
# =============================================================================


def _row(
    roll_min: int,
    roll_max: int,
    type_id: PrecipitationTypeId,
    temp_min,
    temp_max,
    continuation: int,
    rainbow: int,
    forbidden: tuple[TerrainId, ...] = (),
) -> PrecipitationTypeEntry:
    return PrecipitationTypeEntry(
        roll_min=roll_min,
        roll_max=roll_max,
        type_id=type_id,
        temp_min=temp_min,
        temp_max=temp_max,
        continuation_chance=continuation,
        rainbow_chance=rainbow,
        forbidden_terrains=frozenset(forbidden),
        detail=STANDARD_WEATHER.get(type_id),
    )


# Forbidden terrains include the restrictions spelled out in the terrain notes
PRECIPITATION_TABLE: tuple[PrecipitationTypeEntry, ...] = (
    _row(1, 2, P.HEAVY_BLIZZARD, None, 10, 5, 0, (T.DESERT,)),
    _row(3, 5, P.BLIZZARD, None, 20, 10, 0, (T.DESERT,)),
    _row(6, 10, P.HEAVY_SNOWSTORM, None, 25, 20, 0),
    _row(11, 20, P.LIGHT_SNOWSTORM, None, 35, 25, 1),
    _row(21, 25, P.SLEETSTORM, None, 35, 20, 0),
    _row(26, 27, P.HAILSTORM, None, 65, 10, 0, (T.DESERT, T.DUST)),
    _row(28, 30, P.HEAVY_FOG, 32, 60, 25, 1, (T.DESERT, T.DUST)),
    _row(31, 38, P.LIGHT_FOG, 32, 70, 30, 3, (T.DESERT, T.DUST)),
    _row(39, 40, P.MIST, 32, None, 15, 10, (T.DESERT,)),
    _row(41, 45, P.DRIZZLE, 32, None, 20, 5),
    _row(46, 60, P.LIGHT_RAINSTORM, 32, None, 45, 15),
    _row(61, 70, P.HEAVY_RAINSTORM, 32, None, 30, 20),
    _row(71, 84, P.THUNDERSTORM, 32, None, 15, 20),
    _row(85, 89, P.TROPICAL_STORM, 75, None, 20, 10, (T.DESERT, T.PLAINS)),
    _row(90, 94, P.MONSOON, 80, None, 30, 5, (T.DESERT, T.DUST, T.PLAINS)),
    _row(95, 97, P.GALE, 40, None, 15, 10, (T.DESERT, T.DUST)),
    _row(98, 99, P.HURRICANE, 80, None, 20, 5, (T.DESERT, T.DUST)),
    _row(100, 100, P.SPECIAL, None, None, 1, 0),
)

SPECIAL_ROW_INDEX = len(PRECIPITATION_TABLE) - 1


def _validate_table() -> None:
    expected = 1
    for entry in PRECIPITATION_TABLE:
        if entry.roll_min != expected or entry.roll_max < entry.roll_min:
            raise ConfigError(f"Precipitation table gap or overlap at {entry.name}")
        if entry.detail is None and not entry.is_special:
            raise ConfigError(f"No weather detail for {entry.name}")
        expected = entry.roll_max + 1
    if expected != 101:
        raise ConfigError("Precipitation table must cover 1-100")


_validate_table()


def find_precipitation_row(roll: int) -> int:
    """
    Find the table index matching a d100 roll.

    Raises:
        ConfigError: If no row covers the roll
    """
    for index, entry in enumerate(PRECIPITATION_TABLE):
        if entry.matches(roll):
            return index
    raise ConfigError(f"No precipitation row covers roll {roll}")


def index_of(type_id: PrecipitationTypeId) -> int:
    """Position of a precipitation type in the ordered table."""
    for index, entry in enumerate(PRECIPITATION_TABLE):
        if entry.type_id == type_id:
            return index
    raise ConfigError(f"Unknown precipitation type: {type_id!r}")


def clamp_index(index: int) -> int:
    """Clamp an index into the bounds of the precipitation table."""
    return max(0, min(len(PRECIPITATION_TABLE) - 1, index))


# =============================================================================
# RAINBOWS
# =============================================================================


# (highest second d100 roll, result)
RAINBOW_TABLE: tuple[tuple[int, str], ...] = (
    (89, "Single rainbow"),
    (95, "Double rainbow (may be an omen)"),
    (98, "Triple rainbow (almost certainly an omen)"),
    (99, "Bifrost bridge or clouds in the shape of a rain deity"),
    (100, "Rain deity or servant in sky"),
)


def rainbow_for_roll(roll: int) -> str:
    """Classify a rainbow from the second d100 roll."""
    for high, result in RAINBOW_TABLE:
        if roll <= high:
            return result
    return RAINBOW_TABLE[-1][1]
