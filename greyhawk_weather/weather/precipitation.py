"""
Precipitation Engine.

Decides today's precipitation and whether it carries on into tomorrow.

The engine is a two-state machine. With no precipitation carried over,
the month's chance (plus the terrain adjustment) is rolled, then a row
of the occurrence table. Carried-over precipitation is reused as is.
At the end of each wet day a continuation check decides whether the
weather persists, eases or worsens by one row, or stops (with a chance
of a rainbow).
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from greyhawk_weather.data_models import DiceRoller
from greyhawk_weather.tables.precipitation_tables import (
    PRECIPITATION_TABLE,
    clamp_index,
    find_precipitation_row,
    rainbow_for_roll,
)
from greyhawk_weather.tables.table_types import (
    DurationUnit,
    PrecipitationTypeEntry,
    SpecialEventId,
    TerrainId,
    WeatherDetail,
)
from greyhawk_weather.tables.terrain_tables import get_terrain_profile
from greyhawk_weather.weather.calendar import GreyhawkMonth
from greyhawk_weather.weather.special_events import (
    SpecialEventEngine,
    SpecialEventOutcome,
)


logger = logging.getLogger(__name__)

MAX_TYPE_ATTEMPTS = 2


# =============================================================================
# STATE
# =============================================================================


@dataclass
class PrecipitationState:
    """
    Precipitation carried over into the next day.

    Attributes:
        active: Whether precipitation continues tomorrow
        type_index: Row of the precipitation table that continues
        remaining_duration: Duration rolled for the continuing weather
        chance_continuing: Continuation chance of that row
        special_event: The phenomenon when the row is "Special"
    """

    active: bool = False
    type_index: Optional[int] = None
    remaining_duration: Optional[int] = None
    chance_continuing: int = 0
    special_event: Optional[SpecialEventId] = None

    def is_active(self) -> bool:
        """Check if precipitation is carried over."""
        return self.active and self.type_index is not None

    @property
    def entry(self) -> Optional[PrecipitationTypeEntry]:
        if self.type_index is None:
            return None
        return PRECIPITATION_TABLE[clamp_index(self.type_index)]

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "active": self.active,
            "type_index": self.type_index,
            "remaining_duration": self.remaining_duration,
            "chance_continuing": self.chance_continuing,
            "special_event": self.special_event.value if self.special_event else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PrecipitationState":
        """Deserialize from dictionary."""
        type_index = data.get("type_index")
        special = data.get("special_event")
        return cls(
            active=data.get("active", False),
            type_index=clamp_index(type_index) if type_index is not None else None,
            remaining_duration=data.get("remaining_duration"),
            chance_continuing=data.get("chance_continuing", 0),
            special_event=SpecialEventId(special) if special else None,
        )


@dataclass
class PrecipitationOutcome:
    """
    Today's precipitation.

    Attributes:
        entry: Row of the precipitation table (None on a dry day)
        type_index: Position of that row
        special: The phenomenon, when the row is "Special"
        amount: Precipitation rolled, in inches (None if not dice)
        duration: Duration rolled (None if not dice)
        duration_unit: Unit of the duration
        continuing: True if carried over from yesterday
    """

    entry: Optional[PrecipitationTypeEntry] = None
    type_index: Optional[int] = None
    special: Optional[SpecialEventOutcome] = None
    amount: Optional[int] = None
    duration: Optional[int] = None
    duration_unit: Optional[DurationUnit] = None
    continuing: bool = False

    @property
    def active(self) -> bool:
        return self.entry is not None

    @property
    def is_special(self) -> bool:
        return self.special is not None

    @property
    def name(self) -> str:
        if self.special is not None:
            return self.special.entry.name
        if self.entry is not None:
            return self.entry.name
        return "None"

    @property
    def detail(self) -> Optional[WeatherDetail]:
        if self.special is not None:
            return self.special.entry.detail
        if self.entry is not None:
            return self.entry.detail
        return None

    @property
    def wind_dice(self) -> Optional[str]:
        """Wind dice for the day, or None on a dry day."""
        detail = self.detail
        return detail.wind_speed if detail is not None else None

    @property
    def rainbow_chance(self) -> int:
        if self.special is not None:
            return self.special.entry.rainbow_chance
        if self.entry is not None:
            return self.entry.rainbow_chance
        return 0


# =============================================================================
# ENGINE
# =============================================================================


class PrecipitationEngine:
    """
    Determines today's precipitation and tomorrow's continuation.

    Args:
        roller: Source of randomness
        special_engine: Engine for "Special" rows (built from the roller
            if omitted)
    """

    def __init__(self, roller: DiceRoller, special_engine: Optional[SpecialEventEngine] = None):
        self.roller = roller
        self.special_engine = special_engine or SpecialEventEngine(roller)

    def _roll_duration(self, entry: PrecipitationTypeEntry, terrain: TerrainId) -> Optional[int]:
        duration = entry.detail.roll_duration(self.roller, f"{entry.name} duration")
        if (
            duration is not None
            and entry.type_id.is_fog_or_mist
            and get_terrain_profile(terrain).doubles_fog_duration
        ):
            logger.debug(f"{entry.name} duration doubled to {duration * 2} ({terrain.value})")
            duration *= 2
        return duration

    def _is_valid(
        self,
        entry: PrecipitationTypeEntry,
        terrain: TerrainId,
        high_temp: int,
        enable_special: bool,
    ) -> bool:
        if entry.is_special:
            return enable_special
        return entry.allowed_in(terrain) and entry.allows_temperature(high_temp)

    def _special_outcome(
        self,
        index: int,
        event: Optional[SpecialEventId],
        terrain: TerrainId,
    ) -> PrecipitationOutcome:
        if event is None:
            event = self.special_engine.determine(terrain)
        if event is None:
            logger.info(f"No special weather occurs in {terrain.value}; no precipitation today")
            return PrecipitationOutcome()
        special = self.special_engine.outcome_for(event)
        return PrecipitationOutcome(
            entry=PRECIPITATION_TABLE[index],
            type_index=index,
            special=special,
            amount=special.amount,
            duration=special.duration,
            duration_unit=special.duration_unit,
        )

    def _continuing(
        self,
        prior_state: PrecipitationState,
        terrain: TerrainId,
    ) -> PrecipitationOutcome:
        index = clamp_index(prior_state.type_index)
        entry = PRECIPITATION_TABLE[index]
        if entry.is_special:
            outcome = self._special_outcome(index, prior_state.special_event, terrain)
        else:
            outcome = PrecipitationOutcome(
                entry=entry,
                type_index=index,
                amount=entry.detail.roll_amount(self.roller, f"{entry.name} amount"),
                duration=prior_state.remaining_duration,
                duration_unit=entry.detail.duration_unit,
            )
        if outcome.active:
            if prior_state.remaining_duration is not None:
                outcome.duration = prior_state.remaining_duration
            outcome.continuing = True
            logger.info(f"{outcome.name} continues from yesterday")
        return outcome

    def determine(
        self,
        month: GreyhawkMonth,
        terrain: TerrainId,
        high_temp: int,
        prior_state: Optional[PrecipitationState] = None,
        enable_special: bool = True,
    ) -> PrecipitationOutcome:
        """
        Determine today's precipitation.

        Args:
            month: Current month (gives the base chance)
            terrain: Terrain type
            high_temp: Today's high, checked against each row's gates
            prior_state: Precipitation carried over from yesterday
            enable_special: Whether the "Special" row may be used

        Returns:
            PrecipitationOutcome (inactive on a dry day)
        """
        if prior_state is not None and prior_state.is_active():
            entry = prior_state.entry
            if entry.is_special and not enable_special:
                logger.info("Special weather is disabled; rolling fresh precipitation")
            elif not entry.is_special and not entry.allowed_in(terrain):
                logger.info(f"{entry.name} cannot occur in {terrain.value}; rolling fresh precipitation")
            else:
                return self._continuing(prior_state, terrain)

        profile = get_terrain_profile(terrain)
        chance = month.precipitation_chance + profile.precipitation_adjustment
        roll = self.roller.roll_percentile("Precipitation check").total
        if roll > chance:
            logger.debug(f"No precipitation (rolled {roll} vs {chance}%)")
            return PrecipitationOutcome()

        for attempt in range(1, MAX_TYPE_ATTEMPTS + 1):
            index = find_precipitation_row(self.roller.roll_percentile("Precipitation type").total)
            entry = PRECIPITATION_TABLE[index]
            if self._is_valid(entry, terrain, high_temp, enable_special):
                break
            logger.debug(
                f"Attempt {attempt}: {entry.name} not possible in {terrain.value} at {high_temp}°F"
            )
        else:
            logger.info("No valid precipitation type found; no precipitation today")
            return PrecipitationOutcome()

        if entry.is_special:
            return self._special_outcome(index, None, terrain)

        logger.debug(f"Precipitation: {entry.name}")
        return PrecipitationOutcome(
            entry=entry,
            type_index=index,
            amount=entry.detail.roll_amount(self.roller, f"{entry.name} amount"),
            duration=self._roll_duration(entry, terrain),
            duration_unit=entry.detail.duration_unit,
        )

    def continue_precipitation(
        self,
        outcome: PrecipitationOutcome,
        terrain: TerrainId,
    ) -> tuple[PrecipitationState, Optional[str]]:
        """
        Decide whether today's precipitation carries on tomorrow.

        On a continuation, d10 moves the type one row up the table on a 1
        or down on a 10. A move onto a row forbidden in the terrain, or
        onto or off the "Special" row, is cancelled. When the weather
        ends, the rainbow check is made.

        Returns:
            Tuple of (state for tomorrow, rainbow result or None)
        """
        if not outcome.active:
            return PrecipitationState(), None

        index = outcome.type_index
        entry = PRECIPITATION_TABLE[index]
        roll = self.roller.roll_percentile(f"{outcome.name} continuation").total
        if roll > entry.continuation_chance:
            logger.info(f"{outcome.name} ends")
            return PrecipitationState(), self.check_rainbow(outcome.rainbow_chance)

        shift = self.roller.roll_d10("Precipitation change").total
        new_index = index
        if shift == 1:
            new_index = clamp_index(index - 1)
        elif shift == 10:
            new_index = clamp_index(index + 1)

        candidate = PRECIPITATION_TABLE[new_index]
        if new_index != index and (
            candidate.is_special or entry.is_special or not candidate.allowed_in(terrain)
        ):
            logger.debug(f"Change to {candidate.name} not possible; {entry.name} continues")
            new_index = index
            candidate = entry

        if candidate.is_special:
            remaining = outcome.special.entry.detail.roll_duration(
                self.roller, f"{outcome.name} duration"
            )
            event = outcome.special.event
        else:
            remaining = self._roll_duration(candidate, terrain)
            event = None

        logger.info(f"{outcome.name} continues tomorrow ({candidate.name})")
        return (
            PrecipitationState(
                active=True,
                type_index=new_index,
                remaining_duration=remaining,
                chance_continuing=candidate.continuation_chance,
                special_event=event,
            ),
            None,
        )

    def check_rainbow(self, chance: int) -> Optional[str]:
        """
        Roll for a rainbow as precipitation ends.

        Returns:
            The kind of rainbow, or None
        """
        if chance <= 0:
            return None
        roll = self.roller.roll_percentile("Rainbow check").total
        if roll > chance:
            return None
        rainbow = rainbow_for_roll(self.roller.roll_percentile("Rainbow type").total)
        logger.info(f"Rainbow: {rainbow}")
        return rainbow
