"""
Wind Model.

Wind speed comes from the day's precipitation (or d20-1 on a dry day)
plus the terrain adjustment. Direction is rolled on the seasonal
prevailing wind chart. Wind chill and high-wind effects are table
lookups on the resulting speed.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Optional, Union

from greyhawk_weather.data_models import DiceRoller
from greyhawk_weather.tables.table_types import (
    ChoiceWindAdjustment,
    ElevationWindAdjustment,
    FixedWindAdjustment,
    TerrainId,
    WindAdjustment,
)
from greyhawk_weather.tables.terrain_tables import get_wind_profile
from greyhawk_weather.tables.wind_tables import (
    HIGH_WINDS_TABLE,
    NO_EFFECT,
    UNUSUAL_WIND_LABEL,
    WIND_CHILL_TABLE,
    WIND_CHILL_THRESHOLD,
    WIND_DIRECTION_THRESHOLDS,
    WIND_DIRECTIONS,
    WIND_SPEED_LABELS,
)
from greyhawk_weather.weather.calendar import GreyhawkSeason


logger = logging.getLogger(__name__)

CALM_WIND_DICE = "d20-1"


@dataclass
class WindResult:
    """
    The day's wind.

    Attributes:
        speed: Speed in mph (never negative)
        label: Descriptive label for the speed
        base_speed: Speed rolled before the terrain adjustment
        terrain_adjustment: Adjustment applied for the terrain
        direction: Prevailing direction the wind blows from
        effects: High-wind effects by domain ("On Land", "At Sea", ...)
    """

    speed: int
    label: str
    base_speed: int
    terrain_adjustment: Union[int, float]
    direction: Optional[str] = None
    effects: dict[str, str] = field(default_factory=dict)


def terrain_wind_adjustment(
    adjustment: WindAdjustment,
    elevation_feet: int,
    use_realistic_wind: bool,
    roller: DiceRoller,
) -> Union[int, float]:
    """
    Resolve a terrain's wind adjustment.

    Mountains scale with elevation: +5 mph per 1000 feet, or with
    realistic wind a flat 10 plus 0.5 per 1000 feet.
    """
    if isinstance(adjustment, ElevationWindAdjustment):
        thousands = elevation_feet // 1000
        if use_realistic_wind:
            return 10 + 0.5 * thousands
        return 5 * thousands
    if isinstance(adjustment, ChoiceWindAdjustment):
        return roller.choice(adjustment.options, "Terrain wind adjustment")
    if isinstance(adjustment, FixedWindAdjustment):
        return adjustment.value
    return 0


def wind_label(speed: int) -> str:
    """Descriptive label for a wind speed."""
    for highest, label in WIND_SPEED_LABELS:
        if speed <= highest:
            return label
    return UNUSUAL_WIND_LABEL


def high_wind_effects(
    speed: int,
    on_land: bool = True,
    at_sea: bool = False,
    in_air: bool = False,
    in_battle: bool = False,
) -> dict[str, str]:
    """
    Effects of the wind on the domains the party is in.

    Domains without an effect at this speed are left out.
    """
    entry = next((e for e in HIGH_WINDS_TABLE if e.matches(speed)), None)
    if entry is None:
        return {}
    candidates = (
        ("On Land", on_land, entry.on_land),
        ("At Sea", at_sea, entry.at_sea),
        ("In Air", in_air, entry.in_air),
        ("In Battle", in_battle, entry.in_battle),
    )
    return {domain: text for domain, wanted, text in candidates if wanted and text != NO_EFFECT}


def compute_wind_speed(
    wind_dice: Optional[str],
    terrain: TerrainId,
    elevation_feet: int,
    use_realistic_wind: bool,
    roller: DiceRoller,
    *,
    on_land: bool = True,
    at_sea: bool = False,
    in_air: bool = False,
    in_battle: bool = False,
) -> WindResult:
    """
    Roll the wind speed and look up its label and effects.

    Args:
        wind_dice: Wind dice of today's precipitation or special event,
            or None on a dry day
        terrain: Terrain type (unknown terrains use Plains)
        elevation_feet: Elevation, used by mountain winds
        use_realistic_wind: Gentler elevation scaling for mountains
        roller: Source of randomness
        on_land, at_sea, in_air, in_battle: Domains to report effects for

    Returns:
        WindResult without a direction
    """
    base = roller.evaluate(wind_dice or CALM_WIND_DICE, reason="Wind speed")
    profile = get_wind_profile(terrain)
    adjustment = terrain_wind_adjustment(
        profile.wind_adjustment, elevation_feet, use_realistic_wind, roller
    )
    speed = math.floor(max(0, base + adjustment))
    logger.debug(f"Wind speed {base} {adjustment:+} ({profile.terrain.value}) -> {speed} mph")
    return WindResult(
        speed=speed,
        label=wind_label(speed),
        base_speed=base,
        terrain_adjustment=adjustment,
        effects=high_wind_effects(speed, on_land, at_sea, in_air, in_battle),
    )


def prevailing_wind_direction(season: GreyhawkSeason, roller: DiceRoller) -> str:
    """Roll d20 on the season's prevailing wind chart."""
    thresholds = WIND_DIRECTION_THRESHOLDS[season.wind_season]
    roll = roller.roll_d20("Wind direction").total
    for direction, highest in zip(WIND_DIRECTIONS, thresholds):
        if roll <= highest:
            return direction
    return WIND_DIRECTIONS[-1]


def compute_wind(
    wind_dice: Optional[str],
    terrain: TerrainId,
    elevation_feet: int,
    use_realistic_wind: bool,
    season: GreyhawkSeason,
    roller: DiceRoller,
    **domains: bool,
) -> WindResult:
    """Roll the wind speed and then its direction."""
    result = compute_wind_speed(
        wind_dice, terrain, elevation_feet, use_realistic_wind, roller, **domains
    )
    result.direction = prevailing_wind_direction(season, roller)
    return result


def _nearest(keys, target: int) -> int:
    # Strict comparison keeps the first candidate on a tie
    best = None
    for key in keys:
        if best is None or abs(key - target) < abs(best - target):
            best = key
    return best


def wind_chill(low: int, speed: int) -> Optional[int]:
    """
    Felt temperature for the daily low, or None when it is 35°F or above.

    Uses the nearest tabulated wind speed, then the nearest tabulated
    temperature in that row.
    """
    if low >= WIND_CHILL_THRESHOLD:
        return None
    row = WIND_CHILL_TABLE[_nearest(WIND_CHILL_TABLE.keys(), speed)]
    return row[_nearest(row.keys(), low)]
