"""
Special Weather Phenomena.

Rolled when the precipitation table comes up "Special": each terrain has
its own d100 table of phenomena. A phenomenon may also have an
extraordinary cause, from elementals up to warring deities.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from greyhawk_weather.data_models import DiceRoller
from greyhawk_weather.tables.special_event_tables import (
    CAUSE_CHANCE,
    CAUSE_TABLE,
    get_special_event,
)
from greyhawk_weather.tables.table_types import (
    DurationUnit,
    SpecialEventEntry,
    SpecialEventId,
    TerrainId,
)
from greyhawk_weather.tables.terrain_tables import get_terrain_profile


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SpecialEventOutcome:
    """A phenomenon with its amount and duration rolled."""

    entry: SpecialEventEntry
    amount: Optional[int]
    duration: Optional[int]

    @property
    def event(self) -> SpecialEventId:
        return self.entry.event_id

    @property
    def duration_unit(self) -> Optional[DurationUnit]:
        return self.entry.detail.duration_unit


class SpecialEventEngine:
    """
    Rolls special weather phenomena and their causes.

    Args:
        roller: Source of randomness shared with the rest of the day's rolls
    """

    def __init__(self, roller: DiceRoller):
        self.roller = roller

    def has_events(self, terrain: TerrainId) -> bool:
        """Check if a terrain has a special weather table at all."""
        return bool(get_terrain_profile(terrain).special_events)

    def determine(self, terrain: TerrainId) -> Optional[SpecialEventId]:
        """
        Roll d100 on the terrain's special weather table.

        Returns:
            The first phenomenon whose range matches, or None
        """
        ranges = get_terrain_profile(terrain).special_events
        if not ranges:
            logger.debug(f"No special weather table for {terrain.value}")
            return None
        roll = self.roller.roll_percentile(f"Special weather ({terrain.value})").total
        for entry in ranges:
            if entry.matches(roll):
                logger.info(f"Special weather: {entry.event.value} (roll {roll})")
                return entry.event
        return None

    def outcome_for(self, event: SpecialEventId) -> SpecialEventOutcome:
        """Roll the amount and duration of a phenomenon."""
        entry = get_special_event(event)
        return SpecialEventOutcome(
            entry=entry,
            amount=entry.detail.roll_amount(self.roller, f"{entry.name} amount"),
            duration=entry.detail.roll_duration(self.roller, f"{entry.name} duration"),
        )

    def determine_cause(self) -> str:
        """Roll d100 for the extraordinary cause of a phenomenon."""
        roll = self.roller.roll_percentile("Cause of phenomenon").total
        for highest, cause in CAUSE_TABLE:
            if roll <= highest:
                return cause
        return CAUSE_TABLE[-1][1]

    def maybe_cause(self) -> Optional[str]:
        """10% chance that a phenomenon has an extraordinary cause."""
        roll = self.roller.roll_percentile("Extraordinary cause check").total
        if roll > CAUSE_CHANCE:
            return None
        cause = self.determine_cause()
        logger.info(f"Phenomenon caused by: {cause}")
        return cause
