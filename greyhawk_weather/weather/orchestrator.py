"""
Weather Orchestrator.

Runs one day of weather generation. The day's rolls happen in a fixed
order so a seed reproduces the whole report:

1. Temperature (record check, duration, high dice, low dice)
2. Sky
3. Precipitation type, amount and duration (or special phenomenon)
4. Wind speed
5. Humidity
6. Continuation and rainbow
7. Wind direction
8. Extraordinary cause of a phenomenon

The continuity state (record temperatures and continuing precipitation)
is owned by the caller and passed in; a new state is returned for the
next day.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from greyhawk_weather.data_models import DiceRoller, LocationConfig, WeatherFlags
from greyhawk_weather.tables.table_types import DurationUnit, SpecialEventId
from greyhawk_weather.tables.terrain_tables import get_terrain_profile
from greyhawk_weather.weather.calendar import (
    CalendarDate,
    GreyhawkMonth,
    GreyhawkSeason,
    get_sun_times,
)
from greyhawk_weather.weather.moon_phases import (
    LycanthropeActivity,
    MoonPhasePair,
    activity_for,
    phases_for,
)
from greyhawk_weather.weather.precipitation import (
    PrecipitationEngine,
    PrecipitationOutcome,
    PrecipitationState,
)
from greyhawk_weather.weather.special_events import SpecialEventEngine
from greyhawk_weather.weather.temperature import (
    ExtremeKind,
    TemperatureExtremeState,
    compute_daily_temperatures,
    compute_heat_effects,
)
from greyhawk_weather.weather.wind import (
    WindResult,
    compute_wind_speed,
    prevailing_wind_direction,
    wind_chill,
)


logger = logging.getLogger(__name__)


CLEAR = "Clear"
PARTLY_CLOUDY = "Partly cloudy"
CLOUDY = "Cloudy"

FROSTBITE_NOTE = (
    "At temperatures of -40 degrees F and below, frostbite will destroy an exposed body "
    "part in 10-30 minutes."
)
SNOWBLINDNESS_NOTE = (
    "On a sunny winter day, there is a cumulative 2% chance per hour that a character will "
    "become snowblind for d4 turns. The effects of this are equivalent to a Light spell cast "
    "on the character's visage."
)
FROSTBITE_THRESHOLD = -40


def determine_sky(month: GreyhawkMonth, roller: DiceRoller) -> str:
    """Roll d100 against the month's clear and partly cloudy bounds."""
    roll = roller.roll_percentile("Sky conditions").total
    if roll <= month.clear_max:
        return CLEAR
    if roll <= month.partly_cloudy_max:
        return PARTLY_CLOUDY
    return CLOUDY


# =============================================================================
# STATE AND REPORT
# =============================================================================


@dataclass
class ContinuityState:
    """
    Weather carried from one day to the next.

    Attributes:
        extremes: Record temperature in progress
        precipitation: Precipitation continuing into the next day
    """

    extremes: TemperatureExtremeState = field(default_factory=TemperatureExtremeState)
    precipitation: PrecipitationState = field(default_factory=PrecipitationState)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "extremes": self.extremes.to_dict(),
            "precipitation": self.precipitation.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ContinuityState":
        """Deserialize from dictionary."""
        return cls(
            extremes=TemperatureExtremeState.from_dict(data.get("extremes", {})),
            precipitation=PrecipitationState.from_dict(data.get("precipitation", {})),
        )


@dataclass(frozen=True)
class PrecipitationReport:
    """Today's precipitation as reported."""

    type: str = "None"
    amount: Optional[int] = None
    amount_text: str = ""
    duration: Optional[int] = None
    duration_unit: Optional[DurationUnit] = None
    duration_text: str = ""
    movement: str = ""
    normal_vision: str = ""
    infravision: str = ""
    tracking: str = ""
    lost_chance: str = ""
    area_effect: str = ""
    continuing: bool = False
    continues_tomorrow: bool = False
    rainbow: Optional[str] = None

    @property
    def occurred(self) -> bool:
        return self.type != "None"

    @classmethod
    def from_outcome(
        cls,
        outcome: PrecipitationOutcome,
        next_state: PrecipitationState,
        rainbow: Optional[str],
    ) -> "PrecipitationReport":
        detail = outcome.detail
        if detail is None:
            return cls(rainbow=rainbow)
        return cls(
            type=outcome.name,
            amount=outcome.amount,
            amount_text=detail.amount_text,
            duration=outcome.duration,
            duration_unit=outcome.duration_unit,
            duration_text=detail.duration_text,
            movement=detail.movement.describe(),
            normal_vision=detail.normal_vision,
            infravision=detail.infravision,
            tracking=detail.tracking,
            lost_chance=detail.lost_chance,
            area_effect=detail.area_effect,
            continuing=outcome.continuing,
            continues_tomorrow=next_state.is_active(),
            rainbow=rainbow,
        )


@dataclass(frozen=True)
class WeatherReport:
    """
    One day's weather.

    Attributes:
        date: The day reported
        location: Where it was generated
        season: Season of the month
        high: Daily high in °F
        low: Daily low in °F
        wind_chill: Felt low temperature, if cold enough to matter
        extreme: Record temperature in effect
        extreme_days_left: Days the record temperature still runs after today
        sky: Sky condition
        humidity: Humidity rolled on a hot day (0 otherwise)
        heat_effects: Effects of heat and humidity
        precipitation: Precipitation details
        wind: Wind speed, direction, label and effects
        moons: Phases of Luna and Celene
        lycanthrope_activity: Activity level under the moons
        special_event: Special phenomenon, if one occurred
        special_cause: Extraordinary cause of the phenomenon, if any
        sunrise: Sunrise as "HH:MM"
        sunset: Sunset as "HH:MM"
        notes: Rules notes for the day
    """

    date: CalendarDate
    location: LocationConfig
    season: GreyhawkSeason
    high: int
    low: int
    wind_chill: Optional[int]
    extreme: ExtremeKind
    extreme_days_left: int
    sky: str
    humidity: int
    heat_effects: str
    precipitation: PrecipitationReport
    wind: WindResult
    moons: MoonPhasePair
    lycanthrope_activity: LycanthropeActivity
    special_event: Optional[SpecialEventId]
    special_cause: Optional[str]
    sunrise: str
    sunset: str
    notes: tuple[str, ...] = ()

    @property
    def weekday(self) -> str:
        return self.date.weekday


@dataclass(frozen=True)
class GenerationResult:
    """A day's report and the state to carry into the next day."""

    report: WeatherReport
    next_state: ContinuityState


# =============================================================================
# NOTES
# =============================================================================


def compile_notes(
    outcome: PrecipitationOutcome,
    location: LocationConfig,
    season: GreyhawkSeason,
    sky: str,
    chill: Optional[int],
    activity: LycanthropeActivity,
    cause: Optional[str],
) -> list[str]:
    """Gather the rules notes that apply to the day."""
    notes: list[str] = []
    detail = outcome.detail
    if detail is not None and detail.notes:
        notes.append(detail.notes)
    if cause:
        notes.append(f"Possible extraordinary cause of the weather: {cause}")
    if chill is not None and chill <= FROSTBITE_THRESHOLD:
        notes.append(FROSTBITE_NOTE)
    if season == GreyhawkSeason.WINTER and sky == CLEAR and not outcome.active:
        notes.append(SNOWBLINDNESS_NOTE)
    terrain_notes = get_terrain_profile(location.terrain).notes
    if terrain_notes:
        notes.append(terrain_notes)
    if activity != LycanthropeActivity.NORMAL:
        notes.append(f"Lycanthrope Activity: {activity.value}")
    return notes


# =============================================================================
# ORCHESTRATOR
# =============================================================================


class WeatherOrchestrator:
    """
    Generates a day of weather from the date, location and prior state.

    Not safe for concurrent use: calls against the same continuity state
    must be made one at a time.

    Args:
        roller: Source of randomness (a fresh unseeded roller if omitted)
    """

    def __init__(self, roller: Optional[DiceRoller] = None):
        self.dice = roller if roller is not None else DiceRoller()
        self.special_engine = SpecialEventEngine(self.dice)
        self.precipitation_engine = PrecipitationEngine(self.dice, self.special_engine)

    def generate(
        self,
        date: CalendarDate,
        location: LocationConfig,
        flags: Optional[WeatherFlags] = None,
        prior_state: Optional[ContinuityState] = None,
    ) -> GenerationResult:
        """
        Generate one day of weather.

        Args:
            date: The day to generate
            location: Latitude, elevation and terrain
            flags: Optional rules and reporting context
            prior_state: Yesterday's continuity state (not modified)

        Returns:
            GenerationResult with the report and the state for tomorrow

        Raises:
            ConfigError: If a month or terrain lookup fails
        """
        flags = flags or WeatherFlags()
        prior_state = prior_state or ContinuityState()
        month = date.month_info
        terrain = location.terrain
        logger.debug(f"Generating weather for {date} at {location.to_dict()}")

        temperature = compute_daily_temperatures(
            date,
            location,
            prior_state.extremes,
            flags.use_record_temperatures,
            self.dice,
        )
        sky = determine_sky(month, self.dice)

        outcome = self.precipitation_engine.determine(
            month,
            terrain,
            temperature.high,
            prior_state.precipitation,
            flags.enable_special_weather,
        )

        wind = compute_wind_speed(
            outcome.wind_dice,
            terrain,
            location.elevation_feet,
            flags.use_realistic_wind,
            self.dice,
            on_land=not location.at_sea,
            at_sea=location.at_sea,
            in_air=flags.in_air,
            in_battle=flags.in_battle,
        )
        heat = compute_heat_effects(temperature.high, self.dice)
        chill = wind_chill(temperature.low, wind.speed)

        next_precipitation, rainbow = self.precipitation_engine.continue_precipitation(
            outcome, terrain
        )
        wind.direction = prevailing_wind_direction(month.season, self.dice)

        cause = self.special_engine.maybe_cause() if outcome.is_special else None

        moons = phases_for(date.month, date.day)
        activity = activity_for(date.month, date.day, moons.luna, moons.celene)
        sunrise, sunset = get_sun_times(date.month, location.latitude)

        report = WeatherReport(
            date=date,
            location=location,
            season=month.season,
            high=temperature.high,
            low=temperature.low,
            wind_chill=chill,
            extreme=temperature.extreme,
            extreme_days_left=temperature.next_extreme_state.remaining_days,
            sky=sky,
            humidity=heat.humidity,
            heat_effects=heat.description,
            precipitation=PrecipitationReport.from_outcome(outcome, next_precipitation, rainbow),
            wind=wind,
            moons=moons,
            lycanthrope_activity=activity,
            special_event=outcome.special.event if outcome.is_special else None,
            special_cause=cause,
            sunrise=sunrise,
            sunset=sunset,
            notes=tuple(
                compile_notes(outcome, location, month.season, sky, chill, activity, cause)
            ),
        )
        next_state = ContinuityState(
            extremes=temperature.next_extreme_state,
            precipitation=next_precipitation,
        )
        logger.info(
            f"{date}: high {report.high}°F, low {report.low}°F, {sky}, "
            f"{report.precipitation.type}, wind {wind.speed} mph {wind.direction}"
        )
        return GenerationResult(report=report, next_state=next_state)
