"""
Table type definitions for the weather lookup tables.

Closed enumerations for every axis the tables are keyed on (terrain,
precipitation type, special event) plus the frozen row types shared by
the terrain, precipitation and special-event tables. Every dice field is
parsed when a row is constructed, so a malformed table fails at import.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

from greyhawk_weather.dice import parse_dice_expression
from greyhawk_weather.errors import ConfigError


# =============================================================================
# KEY ENUMS
# =============================================================================


class TerrainId(str, Enum):
    """Terrain types a location can have."""

    HILLS = "Rough terrain or Hills"
    FOREST = "Forest"
    SYLVAN_FOREST = "Forest, Sylvan"
    JUNGLE = "Jungle"
    SWAMP = "Swamp or marsh"
    COLD_SWAMP = "Swamp or marsh, cold"
    DUST = "Dust"
    PLAINS = "Plains"
    DESERT = "Desert"
    MOUNTAINS = "Mountains"
    SEACOAST_WARM = "Seacoast, warm current"
    SEACOAST_COLD = "Seacoast, cold current"
    AT_SEA_WARM = "At sea, warm current"
    AT_SEA_COLD = "At sea, cold current"

    @property
    def at_sea(self) -> bool:
        """True for open-water terrains."""
        return self in (TerrainId.AT_SEA_WARM, TerrainId.AT_SEA_COLD)

    @classmethod
    def from_name(cls, name: str) -> "TerrainId":
        """
        Resolve a terrain from its display name, enum name or CLI slug.

        Accepts "Forest, Sylvan", "SYLVAN_FOREST" or "sylvan-forest".

        Raises:
            ConfigError: If no terrain matches
        """
        if isinstance(name, cls):
            return name
        key = str(name).strip().lower()
        for terrain in cls:
            if key in (terrain.value.lower(), terrain.name.lower(), terrain.slug):
                return terrain
        raise ConfigError(f"Unknown terrain: {name!r}")

    @property
    def slug(self) -> str:
        return self.name.lower().replace("_", "-")


class PrecipitationTypeId(str, Enum):
    """Rows of the precipitation occurrence table."""

    HEAVY_BLIZZARD = "Blizzard, heavy"
    BLIZZARD = "Blizzard"
    HEAVY_SNOWSTORM = "Snowstorm, heavy"
    LIGHT_SNOWSTORM = "Snowstorm, light"
    SLEETSTORM = "Sleetstorm"
    HAILSTORM = "Hailstorm"
    HEAVY_FOG = "Heavy Fog"
    LIGHT_FOG = "Light Fog"
    MIST = "Mist"
    DRIZZLE = "Drizzle"
    LIGHT_RAINSTORM = "Rainstorm, light"
    HEAVY_RAINSTORM = "Rainstorm, heavy"
    THUNDERSTORM = "Thunderstorm"
    TROPICAL_STORM = "Tropical Storm"
    MONSOON = "Monsoon"
    GALE = "Gale"
    HURRICANE = "Hurricane or typhoon"
    SPECIAL = "Special"

    @property
    def is_fog_or_mist(self) -> bool:
        return self in (PrecipitationTypeId.HEAVY_FOG, PrecipitationTypeId.LIGHT_FOG, PrecipitationTypeId.MIST)


class SpecialEventId(str, Enum):
    """Special weather phenomena."""

    SANDSTORM = "Sandstorm"
    DUSTSTORM = "Duststorm"
    WINDSTORM = "Windstorm"
    EARTHQUAKE = "Earthquake"
    UNDERSEA_EARTHQUAKE = "Earthquake, Undersea"
    ROCK_AVALANCHE = "Rock Avalanche"
    SNOW_AVALANCHE = "Snow Avalanche"
    VOLCANO = "Volcano"
    UNDERSEA_VOLCANO = "Volcano, Undersea"
    TSUNAMI = "Tsunami"
    QUICKSAND = "Quicksand"
    FLASH_FLOOD = "Flash Flood"
    RAIN_FOREST_DOWNPOUR = "Rain Forest Downpour"
    SUN_SHOWER = "Sun Shower"
    TORNADO = "Tornado or Cyclone"
    OASIS = "Oasis"
    MIRAGE_OASIS = "Mirage oasis"


class DurationUnit(str, Enum):
    """Unit a weather duration is measured in."""

    MINUTES = "minutes"
    HOURS = "hours"
    DAYS = "days"


# =============================================================================
# MOVEMENT RATE
# =============================================================================


@dataclass(frozen=True)
class UniformMovement:
    """The same movement factor for every mode of travel (e.g. "x1/2")."""

    factor: str

    def describe(self) -> str:
        return self.factor


@dataclass(frozen=True)
class PerModeMovement:
    """Separate movement factors for travel on foot, on horse and by cart."""

    foot: str
    horse: str
    cart: str

    def describe(self) -> str:
        return f"Foot: {self.foot}, Horse: {self.horse}, Cart: {self.cart}"


MovementRate = Union[UniformMovement, PerModeMovement]


# =============================================================================
# WIND ADJUSTMENTS
# =============================================================================


@dataclass(frozen=True)
class FixedWindAdjustment:
    """A flat wind-speed adjustment."""

    value: int


@dataclass(frozen=True)
class ChoiceWindAdjustment:
    """One of several adjustments, picked uniformly each day."""

    options: tuple[int, ...]


@dataclass(frozen=True)
class ElevationWindAdjustment:
    """Wind rises with elevation (mountains)."""

    pass


WindAdjustment = Union[FixedWindAdjustment, ChoiceWindAdjustment, ElevationWindAdjustment]


# =============================================================================
# ROW TYPES
# =============================================================================


def _validate_dice(value: Optional[str]) -> None:
    if value is not None:
        parse_dice_expression(value)


@dataclass(frozen=True)
class WeatherDetail:
    """
    Mechanical detail for one weather type or special event.

    Dice fields (amount, duration, wind_speed) are validated at
    construction. Values that are not dice (e.g. a duration of "Normal")
    go in the *_text fields instead.

    Attributes:
        amount: Precipitation in inches as dice, or None
        duration: Duration dice, or None
        duration_unit: Unit of the duration dice
        movement: Effect on movement
        normal_vision: Range of normal vision
        infravision: Range of infravision
        tracking: Effect on tracking
        lost_chance: Modifier to the chance of getting lost
        wind_speed: Base wind speed dice in mph
        notes: Free-text rules notes
        amount_text: Description when the amount is not dice
        duration_text: Description when the duration is not dice
        area_effect: Area affected, if limited
    """

    amount: Optional[str]
    duration: Optional[str]
    duration_unit: Optional[DurationUnit]
    movement: MovementRate
    normal_vision: str
    infravision: str
    tracking: str
    lost_chance: str
    wind_speed: str
    notes: str = ""
    amount_text: str = ""
    duration_text: str = ""
    area_effect: str = ""

    def __post_init__(self):
        _validate_dice(self.amount)
        _validate_dice(self.duration)
        _validate_dice(self.wind_speed)
        if self.duration is not None and self.duration_unit is None:
            raise ConfigError(f"Duration {self.duration!r} needs a unit")

    def roll_amount(self, roller, reason: str = "") -> Optional[int]:
        """Roll the amount dice with a DiceRoller, or None if not dice."""
        if self.amount is None:
            return None
        return roller.evaluate(self.amount, reason=reason or "Precipitation amount")

    def roll_duration(self, roller, reason: str = "") -> Optional[int]:
        """Roll the duration dice with a DiceRoller, or None if not dice."""
        if self.duration is None:
            return None
        return roller.evaluate(self.duration, reason=reason or "Precipitation duration")


@dataclass(frozen=True)
class PrecipitationTypeEntry:
    """
    A row of the precipitation occurrence table.

    Attributes:
        roll_min: Lowest d100 roll selecting this row
        roll_max: Highest d100 roll selecting this row
        type_id: Which precipitation type this row is
        temp_min: Minimum daily high (None = no gate)
        temp_max: Maximum daily high (None = no gate)
        continuation_chance: Percent chance it continues into the next day
        rainbow_chance: Percent chance of a rainbow when it ends
        forbidden_terrains: Terrains where this type never occurs
        detail: Mechanical detail (None for the "Special" row)
    """

    roll_min: int
    roll_max: int
    type_id: PrecipitationTypeId
    temp_min: Optional[int]
    temp_max: Optional[int]
    continuation_chance: int
    rainbow_chance: int
    forbidden_terrains: frozenset[TerrainId] = field(default_factory=frozenset)
    detail: Optional[WeatherDetail] = None

    @property
    def is_special(self) -> bool:
        return self.type_id == PrecipitationTypeId.SPECIAL

    @property
    def name(self) -> str:
        return self.type_id.value

    def matches(self, roll: int) -> bool:
        """Check if this entry matches the given roll."""
        return self.roll_min <= roll <= self.roll_max

    def allows_temperature(self, high_temp: int) -> bool:
        """Check the day's high against this row's temperature gates."""
        if self.temp_min is not None and high_temp < self.temp_min:
            return False
        if self.temp_max is not None and high_temp > self.temp_max:
            return False
        return True

    def allowed_in(self, terrain: TerrainId) -> bool:
        return terrain not in self.forbidden_terrains


@dataclass(frozen=True)
class SpecialEventEntry:
    """A special weather phenomenon and its mechanics."""

    event_id: SpecialEventId
    detail: WeatherDetail
    rainbow_chance: int = 0

    @property
    def name(self) -> str:
        return self.event_id.value


@dataclass(frozen=True)
class SpecialEventRange:
    """A percentile range on a terrain's special weather table."""

    roll_min: int
    roll_max: int
    event: SpecialEventId

    def matches(self, roll: int) -> bool:
        """Check if this entry matches the given roll."""
        return self.roll_min <= roll <= self.roll_max


@dataclass(frozen=True)
class TerrainProfile:
    """
    Weather adjustments for one terrain type.

    Attributes:
        terrain: Terrain this profile describes
        precipitation_adjustment: Added to the month's chance of precipitation
        day_temperature: Added to the daily high
        night_temperature: Added to the daily low
        wind_adjustment: Added to the wind speed
        special_events: Ordered d100 table of special phenomena
        notes: Rules notes shown in the report
        doubles_fog_duration: Fog and mist last twice as long
        allows_record_temperatures: Record highs/lows can occur
        seasonal_dice_scaling: Temperature dice are scaled by season
            instead of applying day/night adjustments
    """

    terrain: TerrainId
    precipitation_adjustment: int
    day_temperature: int
    night_temperature: int
    wind_adjustment: WindAdjustment
    special_events: tuple[SpecialEventRange, ...] = ()
    notes: str = ""
    doubles_fog_duration: bool = False
    allows_record_temperatures: bool = True
    seasonal_dice_scaling: bool = False
