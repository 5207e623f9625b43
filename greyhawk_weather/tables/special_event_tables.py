"""
Special Weather Phenomena Table.

Mechanics for each special phenomenon, plus the d100 table of
extraordinary causes that may lie behind one.
"""

from greyhawk_weather.errors import ConfigError
from greyhawk_weather.tables.table_types import (
    DurationUnit,
    PerModeMovement,
    SpecialEventEntry,
    SpecialEventId,
    UniformMovement,
    WeatherDetail,
)


E = SpecialEventId

_STORM_NOTE = "50% chance of d4 damage every 3 turns, no saving throw, until shelter is found"

_EARTHQUAKE_NOTE = (
    "Center is 1-100 miles away from party, with shock waves extending 1-1000 miles. The "
    "first shock wave of the earthquake will be preceded by 1-4 mild tremors, which do no "
    "damage but cause untrained horses, cattle, and other animals to bolt in fear and run "
    "for open ground. After a delay of 1-6 rounds, the first shock wave reaches the party, "
    "and there are 1-6 shock waves in an earthquake. Roll d20 to determine the number of "
    "rounds between each of the shock waves. Each shock wave causes damage as the 7th level "
    "cleric spell Earthquake"
)

_AVALANCHE_NOTE = (
    "Damage is 2d20 pts., with save (vs. dexterity or petrification) for 1/2 damage. "
    "Victims taking more than 20 points of damage are buried and will suffocate in 6 rounds "
    "unless rescued"
)

_VOLCANO_NOTE = (
    "1d8 inches of ash per day. Ash burns: d4 damage every 3 Turns, no save. Location: 0-7 "
    "(d8-1) miles from party. Lava flows at d10 mph, does damage as a salamander's tail "
    "(2d6). For every day a volcano continues to erupt, the base temperature will rise 1 "
    "degree in a 60-mile-diameter area. This overheating will lapse after 7-12 months, as "
    "particles of ash in the air bring the temperature back down, but the chance of clear "
    "skies in the area will be cut by 50% for an additional 1-6 months thereafter"
)

_OASIS_NOTE = (
    "If the oasis is real, roll d20. A result of 1 or 2 indicates that the oasis is "
    "currently populated (determine population type via the Wilderness Encounter Charts in "
    "the DMG), while a 20 indicates that the last visitor has poisoned all the wells. If the "
    "oasis is a mirage, anyone who drinks must save vs. spell or take d6 damage from "
    "swallowed sand"
)

_EARTHQUAKE_MOVEMENT = PerModeMovement(foot="x1/4", horse="x1/4", cart="no (may be overturned)")
_NORMAL = UniformMovement("Normal")


def _storm(event: SpecialEventId) -> SpecialEventEntry:
    return SpecialEventEntry(
        event_id=event,
        detail=WeatherDetail(
            amount=None,
            duration="1d8",
            duration_unit=DurationUnit.HOURS,
            movement=UniformMovement("No"),
            normal_vision="No",
            infravision="No",
            tracking="No",
            lost_chance="+80%",
            wind_speed="5d10",
            notes=_STORM_NOTE,
        ),
    )


def _earthquake(event: SpecialEventId, notes: str) -> SpecialEventEntry:
    return SpecialEventEntry(
        event_id=event,
        detail=WeatherDetail(
            amount=None,
            duration="1d10",
            duration_unit=DurationUnit.HOURS,
            movement=_EARTHQUAKE_MOVEMENT,
            normal_vision="Normal",
            infravision="Normal",
            tracking="-50%",
            lost_chance="+10% (+30% on horse)",
            wind_speed="d20",
            notes=notes,
        ),
    )


def _avalanche(event: SpecialEventId) -> SpecialEventEntry:
    return SpecialEventEntry(
        event_id=event,
        detail=WeatherDetail(
            amount="5d10",
            duration="1d10",
            duration_unit=DurationUnit.MINUTES,
            movement=UniformMovement("May be blocked"),
            normal_vision="Normal",
            infravision="Normal",
            tracking="-60%",
            lost_chance="+10% if trail is covered",
            wind_speed="d20",
            notes=_AVALANCHE_NOTE,
        ),
    )


def _volcano(event: SpecialEventId, normal_vision: str, notes: str) -> SpecialEventEntry:
    return SpecialEventEntry(
        event_id=event,
        detail=WeatherDetail(
            amount="d8",
            duration="1d10",
            duration_unit=DurationUnit.DAYS,
            movement=UniformMovement("x1/2"),
            normal_vision=normal_vision,
            infravision="x1/2",
            tracking="-50%",
            lost_chance="+20% (+40% if on horse)",
            wind_speed="d20",
            notes=notes,
        ),
    )


def _oasis(event: SpecialEventId) -> SpecialEventEntry:
    return SpecialEventEntry(
        event_id=event,
        detail=WeatherDetail(
            amount=None,
            duration=None,
            duration_unit=None,
            duration_text="Normal",
            area_effect="3-6 (d4+2) radius",
            movement=_NORMAL,
            normal_vision="Normal",
            infravision="Normal",
            tracking="No",
            lost_chance="Normal",
            wind_speed="d20",
            notes=_OASIS_NOTE,
        ),
    )


SPECIAL_EVENTS: dict[SpecialEventId, SpecialEventEntry] = {
    E.SANDSTORM: _storm(E.SANDSTORM),
    E.DUSTSTORM: _storm(E.DUSTSTORM),
    E.WINDSTORM: SpecialEventEntry(
        event_id=E.WINDSTORM,
        detail=WeatherDetail(
            amount=None,
            duration="1d10",
            duration_unit=DurationUnit.HOURS,
            movement=UniformMovement("x1/2"),
            normal_vision="x1/2",
            infravision="x3/4",
            tracking="No",
            lost_chance="+30%",
            wind_speed="8d10+20",
            notes=(
                "50% chance of 2d6 of rock damage every 3 turns. Characters must roll "
                "dexterity or less on d20 to save for 1/2 damage; monsters must save vs. "
                "petrification"
            ),
        ),
    ),
    E.EARTHQUAKE: _earthquake(E.EARTHQUAKE, _EARTHQUAKE_NOTE),
    E.UNDERSEA_EARTHQUAKE: _earthquake(
        E.UNDERSEA_EARTHQUAKE, "A tsunami will occur in d10 hours. " + _EARTHQUAKE_NOTE
    ),
    E.ROCK_AVALANCHE: _avalanche(E.ROCK_AVALANCHE),
    E.SNOW_AVALANCHE: _avalanche(E.SNOW_AVALANCHE),
    E.VOLCANO: _volcano(E.VOLCANO, "x3/4 (x1/2 if undersea)", _VOLCANO_NOTE),
    E.UNDERSEA_VOLCANO: _volcano(
        E.UNDERSEA_VOLCANO, "x1/2", "An island will be formed after 2d6 days. " + _VOLCANO_NOTE
    ),
    E.TSUNAMI: SpecialEventEntry(
        event_id=E.TSUNAMI,
        detail=WeatherDetail(
            amount=None,
            duration="1d2",
            duration_unit=DurationUnit.HOURS,
            movement=_NORMAL,
            normal_vision="Normal",
            infravision="Normal",
            tracking="No",
            lost_chance="Normal",
            wind_speed="5d10+10",
            notes=(
                "Wave height is 10d20 feet. Save vs. Dexterity/Petrification or drown. "
                "If save is made, victim takes d20 damage"
            ),
        ),
    ),
    E.QUICKSAND: SpecialEventEntry(
        event_id=E.QUICKSAND,
        detail=WeatherDetail(
            amount=None,
            duration=None,
            duration_unit=None,
            duration_text="Normal",
            area_effect="Covers a radius of d20 inches",
            movement=UniformMovement("Normal (until entered)"),
            normal_vision="Normal",
            infravision="Normal",
            tracking="No",
            lost_chance="+20% if skirted",
            wind_speed="d20",
            notes=(
                "An individual wearing no armor, leather armor, studded armor, elven chain, "
                "or magical armor will only sink up to the neck if he remains motionless, "
                "keeps his arms above the surface, and discards all heavy items. Other "
                "characters will be dragged under at the rate of 1 foot per round if "
                "motionless or 2 feet per round if attempting to escape. Drowning occurs 3 "
                "rounds after the head is submerged. If a victim is rescued after his head "
                "has been submerged, assess damage of d6 per round of submersion once "
                "character is resuscitated"
            ),
        ),
    ),
    E.FLASH_FLOOD: SpecialEventEntry(
        event_id=E.FLASH_FLOOD,
        detail=WeatherDetail(
            amount="3",
            duration="1d6+2",
            duration_unit=DurationUnit.HOURS,
            movement=_NORMAL,
            normal_vision="Normal",
            infravision="Normal",
            tracking="-5% per Turn",
            lost_chance="+10%",
            wind_speed="d20",
            notes=(
                "A flash flood will begin with what appears to be a heavy rainstorm, with "
                "appropriate effects, during which 3 inches of rain will fall each hour. The "
                "rain will stop when 50% of the flood's duration is over, at which point all "
                "low areas will be covered with running water to a depth which is triple the "
                "amount of rainfall. This water will remain for 6-10 turns, and then "
                "disappear at a rate of 3 inches per hour. The current will vary from 5-50 "
                "mph, increasing when water flows in narrow gullies"
            ),
        ),
    ),
    E.RAIN_FOREST_DOWNPOUR: SpecialEventEntry(
        event_id=E.RAIN_FOREST_DOWNPOUR,
        detail=WeatherDetail(
            amount="1",
            duration="3d4",
            duration_unit=DurationUnit.HOURS,
            movement=PerModeMovement(foot="x1/2", horse="x1/2", cart="no"),
            normal_vision="x3/4",
            infravision="x3/4",
            tracking="-5% per Turn",
            lost_chance="+20%",
            wind_speed="d6-1",
            notes=(
                "Precipitation is 1 inch per hour. The ground will absorb up to 6 inches of "
                "water; then mud will form, converting the area to a swamp for travel purposes"
            ),
        ),
    ),
    E.SUN_SHOWER: SpecialEventEntry(
        event_id=E.SUN_SHOWER,
        detail=WeatherDetail(
            amount=None,
            amount_text="x1/2",
            duration="6d10",
            duration_unit=DurationUnit.MINUTES,
            movement=_NORMAL,
            normal_vision="Normal",
            infravision="Normal",
            tracking="No",
            lost_chance="Normal",
            wind_speed="d20",
            notes="95% chance of a rainbow; see note under Precipitation Occurrence Table",
        ),
        rainbow_chance=95,
    ),
    E.TORNADO: SpecialEventEntry(
        event_id=E.TORNADO,
        detail=WeatherDetail(
            amount="1",
            duration="5d10",
            duration_unit=DurationUnit.HOURS,
            movement=_NORMAL,
            normal_vision="x3/4",
            infravision="x3/4",
            tracking="No",
            lost_chance="+40%",
            wind_speed="300",
            notes=(
                "Precipitation is 1 inch per hour. 10% chance party will be transported to "
                "the Ethereal Plane. Otherwise, treat as a triple-strength hurricane for damage"
            ),
        ),
    ),
    E.OASIS: _oasis(E.OASIS),
    E.MIRAGE_OASIS: _oasis(E.MIRAGE_OASIS),
}


def get_special_event(event: SpecialEventId) -> SpecialEventEntry:
    """
    Look up a special phenomenon.

    Raises:
        ConfigError: If the phenomenon is not in the table
    """
    entry = SPECIAL_EVENTS.get(event)
    if entry is None:
        raise ConfigError(f"Unknown special weather event: {event!r}")
    return entry


# =============================================================================
# EXTRAORDINARY CAUSES
# =============================================================================


# (highest d100 roll, cause)
CAUSE_TABLE: tuple[tuple[int, str], ...] = (
    (30, "Elemental(s) or giant(s)."),
    (60, "Elemental(s) under NPC control."),
    (90, "NPC or monster."),
    (98, "Demons, devils, or creatures from the appropriate Elemental Plane."),
    (99, "A deity or his/her servants."),
    (100, "A battle between two or more deities."),
)

# Percent chance a special phenomenon has an extraordinary cause
CAUSE_CHANCE = 10
