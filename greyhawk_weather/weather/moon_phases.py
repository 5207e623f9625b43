"""
Moon Phases of Luna and Celene.

Phases are a pure function of the date. The tables only list key days;
a day between two keys takes the earlier key's phase, marked with "+"
to show it is moving on toward the next one.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union

from greyhawk_weather.errors import ConfigError
from greyhawk_weather.tables.moon_tables import (
    FULL_PHASE,
    MIDSUMMER_DAY,
    MIDSUMMER_MONTH,
    MOON_PHASES,
    TRANSITIONAL_MARKER,
    Moon,
)
from greyhawk_weather.weather.calendar import get_month


class LycanthropeActivity(str, Enum):
    """How active lycanthropes are under the current moons."""

    NORMAL = "Normal"
    HEIGHTENED = "Heightened"
    MAXIMUM = "Maximum"


@dataclass(frozen=True)
class MoonPhasePair:
    """Phase labels of both moons on one night."""

    luna: str
    celene: str


def phase_of(moon: Union[Moon, str], month: str, day: int) -> str:
    """
    Phase of a moon on a day.

    Args:
        moon: Moon.LUNA / Moon.CELENE, or "luna" / "celene"
        month: Month name
        day: Day of the month

    Returns:
        The phase label; transitional phases end with "+"

    Raises:
        ConfigError: If the moon or month is unknown
    """
    try:
        moon = Moon(str(moon).lower()) if not isinstance(moon, Moon) else moon
    except ValueError:
        raise ConfigError(f"Unknown moon: {moon!r}")
    key_days = MOON_PHASES[moon].get(get_month(month).name)
    if not key_days:
        raise ConfigError(f"No {moon.value} phases for {month!r}")

    if day in key_days:
        return key_days[day]
    earlier = [key for key in key_days if key < day]
    # Before the first key day the phase carries over from the month's last key
    key = max(earlier) if earlier else max(key_days)
    return f"{key_days[key]}{TRANSITIONAL_MARKER}"


def phases_for(month: str, day: int) -> MoonPhasePair:
    """Phases of Luna and Celene on a day."""
    return MoonPhasePair(
        luna=phase_of(Moon.LUNA, month, day),
        celene=phase_of(Moon.CELENE, month, day),
    )


def _is_full(phase: str) -> bool:
    return phase.rstrip(TRANSITIONAL_MARKER) == FULL_PHASE


def activity_for(month: str, day: int, luna: str, celene: str) -> LycanthropeActivity:
    """
    Lycanthrope activity under the two moons.

    Midsummer's night is always at maximum, as is any night both moons
    are full. One full moon heightens activity.
    """
    if get_month(month).name == MIDSUMMER_MONTH and day == MIDSUMMER_DAY:
        return LycanthropeActivity.MAXIMUM
    full_moons = sum(1 for phase in (luna, celene) if _is_full(phase))
    if full_moons == 2:
        return LycanthropeActivity.MAXIMUM
    if full_moons == 1:
        return LycanthropeActivity.HEIGHTENED
    return LycanthropeActivity.NORMAL
