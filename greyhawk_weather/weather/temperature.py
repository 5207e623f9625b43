"""
Temperature Model.

Computes the daily high and low from the month's baseline climate, the
location, and the record-temperature sub-state-machine. A record high or
low is rolled rarely, lasts 1-7 days, and shifts the baseline by a
multiple of the month's dice ceiling for as long as it lasts.
"""

import logging
import math
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Optional

from greyhawk_weather.data_models import DiceRoller, LocationConfig
from greyhawk_weather.dice import RollMode, parse_dice_expression
from greyhawk_weather.tables.terrain_tables import get_terrain_profile
from greyhawk_weather.weather.calendar import (
    BASELINE_LATITUDE,
    CalendarDate,
    GreyhawkMonth,
    GreyhawkSeason,
)


logger = logging.getLogger(__name__)


class ExtremeKind(str, Enum):
    """Record temperature events, mildest to most severe on each side."""

    NONE = "none"
    RECORD_LOW = "Record low"
    SEVERE_LOW = "Severe record low"
    EXTREME_LOW = "Extreme record low"
    RECORD_HIGH = "Record high"
    SEVERE_HIGH = "Severe record high"
    EXTREME_HIGH = "Extreme record high"

    @property
    def is_low(self) -> bool:
        return self in (ExtremeKind.RECORD_LOW, ExtremeKind.SEVERE_LOW, ExtremeKind.EXTREME_LOW)

    @property
    def multiplier(self) -> int:
        """How many dice ceilings the baseline moves by."""
        return _MULTIPLIERS[self]


_MULTIPLIERS = {
    ExtremeKind.NONE: 0,
    ExtremeKind.RECORD_LOW: 1,
    ExtremeKind.SEVERE_LOW: 2,
    ExtremeKind.EXTREME_LOW: 3,
    ExtremeKind.RECORD_HIGH: 1,
    ExtremeKind.SEVERE_HIGH: 2,
    ExtremeKind.EXTREME_HIGH: 3,
}

# (highest d100 roll, extreme); rolls 5-96 give no extreme
_EXTREME_ROLLS: tuple[tuple[int, ExtremeKind], ...] = (
    (1, ExtremeKind.EXTREME_LOW),
    (2, ExtremeKind.SEVERE_LOW),
    (4, ExtremeKind.RECORD_LOW),
    (96, ExtremeKind.NONE),
    (98, ExtremeKind.RECORD_HIGH),
    (99, ExtremeKind.SEVERE_HIGH),
    (100, ExtremeKind.EXTREME_HIGH),
)

# (highest d20 roll, days)
_EXTREME_DURATIONS: tuple[tuple[int, int], ...] = (
    (1, 1),
    (3, 2),
    (10, 3),
    (14, 4),
    (17, 5),
    (19, 6),
    (20, 7),
)

# Sylvan forest: (high dice factor, low dice factor) by season
_SYLVAN_SCALING: dict[GreyhawkSeason, tuple[float, float]] = {
    GreyhawkSeason.WINTER: (1.0, 0.25),
    GreyhawkSeason.SPRING: (0.25, 0.5),
    GreyhawkSeason.AUTUMN: (0.25, 0.5),
    GreyhawkSeason.LOW_SUMMER: (0.5, 0.5),
    GreyhawkSeason.HIGH_SUMMER: (0.5, 0.5),
}


def extreme_for_roll(roll: int) -> ExtremeKind:
    """Map the d100 record-temperature roll to an extreme."""
    for high, kind in _EXTREME_ROLLS:
        if roll <= high:
            return kind
    return ExtremeKind.NONE


def extreme_duration_for_roll(roll: int) -> int:
    """Map the d20 duration roll to a number of days."""
    for high, days in _EXTREME_DURATIONS:
        if roll <= high:
            return days
    return _EXTREME_DURATIONS[-1][1]


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves upward (2.5 -> 3, -2.5 -> -2)."""
    return math.floor(value + 0.5)


def latitude_adjustment(latitude: int) -> int:
    """Degrees added for latitude; the baseline is calibrated to 40."""
    return (BASELINE_LATITUDE - latitude) * 2


def altitude_adjustment(elevation_feet: int) -> int:
    """Degrees added for elevation: -3 per full 1000 feet."""
    return -3 * (elevation_feet // 1000)


def extreme_magnitude(kind: ExtremeKind, month: GreyhawkMonth) -> int:
    """
    Baseline shift for an extreme in a month.

    Lows use the ceiling of the month's low dice, highs the ceiling of
    its high dice.
    """
    if kind == ExtremeKind.NONE:
        return 0
    if kind.is_low:
        ceiling = abs(parse_dice_expression(month.low_adjustment).maximum())
        return -kind.multiplier * ceiling
    ceiling = parse_dice_expression(month.high_adjustment).maximum()
    return kind.multiplier * ceiling


# =============================================================================
# STATE
# =============================================================================


@dataclass
class TemperatureExtremeState:
    """
    Tracks a multi-day record temperature event.

    Attributes:
        kind: The active extreme (NONE if temperatures are normal)
        remaining_days: Days the extreme still has to run
    """

    kind: ExtremeKind = ExtremeKind.NONE
    remaining_days: int = 0

    @property
    def active(self) -> bool:
        return self.is_active()

    def is_active(self) -> bool:
        """Check if a record temperature is currently in effect."""
        return self.kind != ExtremeKind.NONE and self.remaining_days > 0

    def start(self, kind: ExtremeKind, duration: int) -> None:
        """Start a new extreme with the given duration."""
        self.kind = kind
        self.remaining_days = duration

    def advance_day(self) -> bool:
        """
        Count down one day. Returns True if the extreme ended.
        """
        if self.remaining_days > 0:
            self.remaining_days -= 1
            if self.remaining_days == 0:
                self.kind = ExtremeKind.NONE
                return True
        return False

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "active": self.is_active(),
            "kind": self.kind.value,
            "remaining_days": self.remaining_days,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TemperatureExtremeState":
        """Deserialize from dictionary."""
        return cls(
            kind=ExtremeKind(data.get("kind", ExtremeKind.NONE.value)),
            remaining_days=data.get("remaining_days", 0),
        )


@dataclass
class TemperatureResult:
    """
    The day's temperatures.

    Attributes:
        high: Daily high in °F
        low: Daily low in °F
        extreme: Record temperature in effect today
        extreme_duration_rolled: Days rolled if an extreme started today
        next_extreme_state: Extreme state carried into tomorrow
        adjustments: Breakdown of each term that went into the result
    """

    high: int
    low: int
    extreme: ExtremeKind
    extreme_duration_rolled: Optional[int]
    next_extreme_state: TemperatureExtremeState
    adjustments: dict[str, int] = field(default_factory=dict)


# =============================================================================
# DAILY TEMPERATURES
# =============================================================================


def compute_daily_temperatures(
    date: CalendarDate,
    location: LocationConfig,
    prior_extreme_state: Optional[TemperatureExtremeState],
    use_record_temperatures: bool,
    roller: DiceRoller,
) -> TemperatureResult:
    """
    Compute the daily high and low.

    Roll order: record d100 (when allowed), d20 duration (new extreme
    only), then the month's high dice and low dice.

    Args:
        date: Today's date
        location: Where the weather is generated
        prior_extreme_state: Yesterday's extreme state (not mutated)
        use_record_temperatures: Whether new extremes may be rolled
        roller: Source of randomness

    Returns:
        TemperatureResult with rounded high/low and tomorrow's extreme state
    """
    month = date.month_info
    profile = get_terrain_profile(location.terrain)
    state = replace(prior_extreme_state) if prior_extreme_state else TemperatureExtremeState()

    duration_rolled: Optional[int] = None
    if (
        use_record_temperatures
        and profile.allows_record_temperatures
        and not state.is_active()
    ):
        roll = roller.roll_percentile("Record temperature check").total
        kind = extreme_for_roll(roll)
        if kind != ExtremeKind.NONE:
            duration_rolled = extreme_duration_for_roll(
                roller.roll_d20("Record temperature duration").total
            )
            state.start(kind, duration_rolled)
            logger.info(f"{kind.value} begins, lasting {duration_rolled} day(s)")

    extreme = state.kind if state.is_active() else ExtremeKind.NONE
    magnitude = extreme_magnitude(extreme, month)

    high_dice = roller.evaluate(month.high_adjustment, RollMode.SAMPLE, "Daily high adjustment")
    low_dice = roller.evaluate(month.low_adjustment, RollMode.SAMPLE, "Daily low adjustment")

    lat_adj = latitude_adjustment(location.latitude)
    alt_adj = altitude_adjustment(location.elevation_feet)
    base = month.base_temperature + magnitude + lat_adj + alt_adj

    if profile.seasonal_dice_scaling:
        high_factor, low_factor = _SYLVAN_SCALING[month.season]
        high = round_half_up(base + high_factor * high_dice)
        low = round_half_up(base + low_factor * low_dice)
        if high < low:
            high, low = low, high
        day_adj = night_adj = 0
    else:
        day_adj = profile.day_temperature
        night_adj = profile.night_temperature
        high = base + high_dice + day_adj
        low = base + low_dice + night_adj

    logger.debug(
        f"{date}: base {month.base_temperature}, extreme {magnitude:+d}, "
        f"latitude {lat_adj:+d}, altitude {alt_adj:+d} -> high {high}, low {low}"
    )

    if extreme != ExtremeKind.NONE and state.advance_day():
        logger.info(f"{extreme.value} has ended")

    return TemperatureResult(
        high=high,
        low=low,
        extreme=extreme,
        extreme_duration_rolled=duration_rolled,
        next_extreme_state=state,
        adjustments={
            "base": month.base_temperature,
            "extreme": magnitude,
            "high_dice": high_dice,
            "low_dice": low_dice,
            "latitude": lat_adj,
            "altitude": alt_adj,
            "terrain_day": day_adj,
            "terrain_night": night_adj,
        },
    )


# =============================================================================
# HEAT AND HUMIDITY
# =============================================================================


NOTHING_SIGNIFICANT = "Nothing significant."

# (lowest high + humidity sum, effects); checked from the top down
_HEAT_EFFECTS: tuple[tuple[int, str], ...] = (
    (
        201,
        "Move x1/4, AC -2, To hit -3, Dexterity -3, Vision x1/4, Rest per hour: 5 turns, "
        "Spell failure chance: 20%",
    ),
    (
        181,
        "Move x1/2, AC -1, To hit -2, Dexterity -2, Vision x1/2, Rest per hour: 4 turns, "
        "Spell failure chance: 15%",
    ),
    (
        161,
        "Move x3/4, AC 0, To hit -1, Dexterity -1, Vision x3/4, Rest per hour: 3 turns, "
        "Spell failure chance: 10%",
    ),
    (
        140,
        "Move Normal, AC 0, To hit 0, Dexterity -1, Vision Normal, Rest per hour: 2 turns, "
        "Spell failure chance: 5%",
    ),
)

HUMIDITY_THRESHOLD = 75


@dataclass(frozen=True)
class HeatEffects:
    """Humidity rolled on a hot day and its effect on the party."""

    humidity: int
    description: str


def heat_effects_for_sum(total: int) -> str:
    """Effects for a high temperature + humidity sum."""
    for lowest, description in _HEAT_EFFECTS:
        if total >= lowest:
            return description
    return NOTHING_SIGNIFICANT


def compute_heat_effects(high: int, roller: DiceRoller) -> HeatEffects:
    """
    Roll humidity when the high is above 75°F and look up its effects.

    No roll is made on cooler days.
    """
    if high <= HUMIDITY_THRESHOLD:
        return HeatEffects(humidity=0, description=NOTHING_SIGNIFICANT)
    humidity = roller.roll_percentile("Humidity").total
    return HeatEffects(humidity=humidity, description=heat_effects_for_sum(high + humidity))
