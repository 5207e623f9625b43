"""
Greyhawk Calendar System.

Defines the 12 months and 4 festival weeks of the Common Year, their
seasons, the baseline climate for each (calibrated to latitude 40), and
sunrise/sunset times.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Any

from greyhawk_weather.errors import ConfigError


DEFAULT_YEAR = 568
BASELINE_LATITUDE = 40


class GreyhawkSeason(str, Enum):
    """The seasons of the Greyhawk year."""

    WINTER = "Winter"  # Needfest, Fireseek, Sunsebb
    SPRING = "Spring"  # Readying, Coldeven, Growfest
    LOW_SUMMER = "Low Summer"  # Planting, Flocktime, Wealsun
    HIGH_SUMMER = "High Summer"  # Richfest, Reaping, Goodmonth, Harvester
    AUTUMN = "Autumn"  # Brewfest, Patchwall, Ready'reat

    @property
    def wind_season(self) -> str:
        """Bucket used by the prevailing wind chart."""
        if self in (GreyhawkSeason.LOW_SUMMER, GreyhawkSeason.HIGH_SUMMER):
            return "Summer"
        return self.value


WEEKDAYS: tuple[str, ...] = (
    "Starday",
    "Sunday",
    "Moonday",
    "Godsday",
    "Waterday",
    "Earthday",
    "Freeday",
)


@dataclass(frozen=True)
class GreyhawkMonth:
    """
    A month or festival week of the Greyhawk calendar.

    Attributes:
        number: 1-16 in calendar order
        name: Month name (e.g., "Fireseek")
        label: Display label (e.g., "Fireseek (Winter)")
        season: The season this month belongs to
        days: 7 for festivals, otherwise 28
        base_temperature: Baseline daily temperature in °F
        high_adjustment: Dice added to the baseline for the daily high
        low_adjustment: Dice added to the baseline for the daily low
        precipitation_chance: Percent chance of precipitation
        clear_max: Highest d100 roll giving a clear sky
        partly_cloudy_max: Highest d100 roll giving a partly cloudy sky
        sunrise: Time of sunrise (e.g., "7:10 AM")
        sunset: Time of sunset (e.g., "4:35 PM")
    """

    number: int
    name: str
    label: str
    season: GreyhawkSeason
    days: int
    base_temperature: int
    high_adjustment: str
    low_adjustment: str
    precipitation_chance: int
    clear_max: int
    partly_cloudy_max: int
    sunrise: str
    sunset: str

    @property
    def is_festival(self) -> bool:
        return self.days == FESTIVAL_DAYS


FESTIVAL_DAYS = 7
MONTH_DAYS = 28

W = GreyhawkSeason.WINTER
SP = GreyhawkSeason.SPRING
LS = GreyhawkSeason.LOW_SUMMER
HS = GreyhawkSeason.HIGH_SUMMER
AU = GreyhawkSeason.AUTUMN

_MONTH_ROWS = (
    # name, label, season, days, base, high dice, low dice, precip %, clear, partly, rise, set
    ("Needfest", "Needfest (Midwinter Festival)", W, FESTIVAL_DAYS, 30, "d10", "-d20", 46, 23, 50, "7:10 AM", "4:35 PM"),
    ("Fireseek", "Fireseek (Winter)", W, MONTH_DAYS, 32, "d10", "-d20", 46, 23, 50, "7:21 AM", "5:01 PM"),
    ("Readying", "Readying (Spring)", SP, MONTH_DAYS, 34, "d6+4", "-(d10+4)", 40, 25, 50, "6:55 AM", "5:36 PM"),
    ("Coldeven", "Coldeven (Spring)", SP, MONTH_DAYS, 42, "d8+4", "-(d10+4)", 44, 27, 54, "6:12 AM", "6:09 PM"),
    ("Growfest", "Growfest (Spring Festival)", SP, FESTIVAL_DAYS, 44, "d8+4", "-(d10+4)", 46, 23, 54, "5:50 AM", "6:05 PM"),
    ("Planting", "Planting (Low Summer)", LS, MONTH_DAYS, 52, "d10+6", "-(d8+4)", 42, 20, 55, "5:24 AM", "6:39 PM"),
    ("Flocktime", "Flocktime (Low Summer)", LS, MONTH_DAYS, 63, "d10+6", "-(d10+6)", 42, 20, 53, "4:45 AM", "7:10 PM"),
    ("Wealsun", "Wealsun (Low Summer)", LS, MONTH_DAYS, 71, "d8+8", "-(d6+6)", 36, 20, 60, "4:32 AM", "7:32 PM"),
    ("Richfest", "Richfest (Midsummer Festival)", HS, FESTIVAL_DAYS, 73, "d8+8", "-(d6+4)", 36, 20, 60, "4:20 AM", "7:20 PM"),
    ("Reaping", "Reaping (High Summer)", HS, MONTH_DAYS, 77, "d6+4", "-(d6+6)", 33, 22, 62, "4:45 AM", "7:29 PM"),
    ("Goodmonth", "Goodmonth (High Summer)", HS, MONTH_DAYS, 75, "d4+6", "-(d6+6)", 33, 25, 60, "5:13 AM", "6:57 PM"),
    ("Harvester", "Harvester (High Summer)", HS, MONTH_DAYS, 68, "d8+6", "-(d8+6)", 33, 33, 54, "5:42 AM", "6:10 PM"),
    ("Brewfest", "Brewfest (Autumn Festival)", AU, FESTIVAL_DAYS, 64, "d8+6", "-(d8+6)", 33, 33, 54, "5:49 AM", "6:02 PM"),
    ("Patchwall", "Patchwall (Autumn)", AU, MONTH_DAYS, 57, "d10+5", "-(d10+5)", 36, 35, 60, "6:12 AM", "5:21 PM"),
    ("Ready'reat", "Ready'reat (Autumn)", AU, MONTH_DAYS, 46, "d10+6", "-(d10+4)", 40, 20, 50, "6:46 AM", "4:45 PM"),
    ("Sunsebb", "Sunsebb (Winter)", W, MONTH_DAYS, 33, "d8+5", "-d20", 43, 25, 50, "7:19 AM", "4:36 PM"),
)

# The 16 months of the Common Year in calendar order
MONTHS: dict[int, GreyhawkMonth] = {
    number: GreyhawkMonth(number, *row) for number, row in enumerate(_MONTH_ROWS, start=1)
}

# Lookup by name for convenience
MONTH_BY_NAME: dict[str, GreyhawkMonth] = {m.name.lower(): m for m in MONTHS.values()}


def get_month(name: str) -> GreyhawkMonth:
    """
    Get a month by its name (case-insensitive).

    Raises:
        ConfigError: If no month has that name
    """
    month = MONTH_BY_NAME.get(str(name).strip().lower())
    if month is None:
        raise ConfigError(f"Unknown month: {name!r}")
    return month


def get_season_for_month(name: str) -> GreyhawkSeason:
    """Get the season for a month name."""
    return get_month(name).season


def get_weekday(day: int) -> str:
    """Name of the weekday for a day of the month (weeks restart each month)."""
    return WEEKDAYS[(day - 1) % len(WEEKDAYS)]


def get_year_length() -> int:
    """Get the total number of days in the Greyhawk year."""
    return sum(m.days for m in MONTHS.values())


def _parse_clock(text: str) -> datetime:
    return datetime.strptime(text, "%I:%M %p")


def get_sun_times(month_name: str, latitude: int) -> tuple[str, str]:
    """
    Sunrise and sunset for a month at a latitude.

    Both times move two minutes for every degree away from latitude 40.

    Returns:
        Tuple of (sunrise, sunset) as 24-hour "HH:MM" strings
    """
    month = get_month(month_name)
    shift = timedelta(minutes=(latitude - BASELINE_LATITUDE) * 2)
    sunrise = _parse_clock(month.sunrise) + shift
    sunset = _parse_clock(month.sunset) + shift
    return sunrise.strftime("%H:%M"), sunset.strftime("%H:%M")


# =============================================================================
# DATES
# =============================================================================


@dataclass(frozen=True)
class CalendarDate:
    """
    A day in the Common Year calendar.

    Attributes:
        month: Month name (canonical capitalisation, e.g. "Ready'reat")
        day: Day of the month, 1-based
        year: Common Year (CY)
    """

    month: str
    day: int
    year: int = DEFAULT_YEAR

    def __post_init__(self):
        month = get_month(self.month)
        object.__setattr__(self, "month", month.name)
        if not 1 <= self.day <= month.days:
            raise ConfigError(f"{month.name} has {month.days} days, got day {self.day}")

    @property
    def month_info(self) -> GreyhawkMonth:
        return get_month(self.month)

    @property
    def season(self) -> GreyhawkSeason:
        return self.month_info.season

    @property
    def weekday(self) -> str:
        return get_weekday(self.day)

    def advance(self, days: int = 1) -> "CalendarDate":
        """
        Return the date the given number of days later.

        Rolls over month lengths; the year increments after Sunsebb.
        """
        number = self.month_info.number
        day = self.day
        year = self.year
        for _ in range(days):
            day += 1
            if day > MONTHS[number].days:
                day = 1
                number += 1
                if number > len(MONTHS):
                    number = 1
                    year += 1
        return CalendarDate(month=MONTHS[number].name, day=day, year=year)

    def __str__(self) -> str:
        return f"{self.weekday}, {self.day} {self.month}, {self.year} CY"

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {"month": self.month, "day": self.day, "year": self.year}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CalendarDate":
        """Deserialize from dictionary."""
        return cls(
            month=data["month"],
            day=data.get("day", 1),
            year=data.get("year", DEFAULT_YEAR),
        )
