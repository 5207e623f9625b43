"""
Tests for the precipitation engine.

Covers the daily precipitation check, type selection and its terrain
and temperature gates, special weather, and continuation into the next
day (including rainbows).
"""

import pytest

from greyhawk_weather.tables.precipitation_tables import (
    PRECIPITATION_TABLE,
    SPECIAL_ROW_INDEX,
    index_of,
)
from greyhawk_weather.tables.special_event_tables import get_special_event
from greyhawk_weather.tables.table_types import (
    DurationUnit,
    PrecipitationTypeId,
    SpecialEventId,
    TerrainId,
)
from greyhawk_weather.weather.calendar import get_month
from greyhawk_weather.weather.precipitation import (
    PrecipitationEngine,
    PrecipitationOutcome,
    PrecipitationState,
)
from greyhawk_weather.weather.special_events import SpecialEventOutcome
from tests.helpers import remaining_rolls, scripted_roller


FIRESEEK = get_month("Fireseek")
LIGHT_SNOW = index_of(PrecipitationTypeId.LIGHT_SNOWSTORM)
LIGHT_RAIN = index_of(PrecipitationTypeId.LIGHT_RAINSTORM)
THUNDERSTORM = index_of(PrecipitationTypeId.THUNDERSTORM)


def _outcome(type_id: PrecipitationTypeId, duration: int = 3) -> PrecipitationOutcome:
    index = index_of(type_id)
    entry = PRECIPITATION_TABLE[index]
    return PrecipitationOutcome(
        entry=entry,
        type_index=index,
        amount=1,
        duration=duration,
        duration_unit=entry.detail.duration_unit,
    )


def _special_outcome(event: SpecialEventId, duration: int = 30) -> PrecipitationOutcome:
    special = SpecialEventOutcome(get_special_event(event), None, duration)
    return PrecipitationOutcome(
        entry=PRECIPITATION_TABLE[SPECIAL_ROW_INDEX],
        type_index=SPECIAL_ROW_INDEX,
        special=special,
        duration=duration,
        duration_unit=special.duration_unit,
    )


class TestDetermine:
    """Tests for PrecipitationEngine.determine."""

    def test_dry_day(self):
        engine = PrecipitationEngine(scripted_roller(47))
        outcome = engine.determine(FIRESEEK, TerrainId.PLAINS, 20)
        assert not outcome.active
        assert outcome.name == "None"
        assert outcome.wind_dice is None

    def test_light_snowstorm(self):
        # chance, type, amount d8, duration 2d6
        roller = scripted_roller(10, 15, 4, 3, 4)
        outcome = PrecipitationEngine(roller).determine(FIRESEEK, TerrainId.PLAINS, 20)
        assert outcome.name == "Snowstorm, light"
        assert outcome.type_index == LIGHT_SNOW
        assert outcome.amount == 4
        assert outcome.duration == 7
        assert outcome.duration_unit == DurationUnit.HOURS
        assert outcome.wind_dice == "4d6"
        assert not outcome.continuing
        assert remaining_rolls(roller) == 0

    def test_second_attempt_after_invalid_type(self):
        # Light rainstorm needs a high of at least 32
        roller = scripted_roller(10, 50, 15, 4, 3, 4)
        outcome = PrecipitationEngine(roller).determine(FIRESEEK, TerrainId.PLAINS, 20)
        assert outcome.type_index == LIGHT_SNOW

    def test_no_precipitation_after_two_invalid_types(self):
        roller = scripted_roller(10, 50, 60)
        outcome = PrecipitationEngine(roller).determine(FIRESEEK, TerrainId.PLAINS, 20)
        assert not outcome.active
        assert remaining_rolls(roller) == 0

    def test_terrain_adjusts_chance(self):
        # Desert: 46 - 30 = 16%
        outcome = PrecipitationEngine(scripted_roller(17)).determine(FIRESEEK, TerrainId.DESERT, 20)
        assert not outcome.active

    def test_forbidden_terrain(self):
        roller = scripted_roller(5, 2, 2)
        outcome = PrecipitationEngine(roller).determine(FIRESEEK, TerrainId.DESERT, 0)
        assert not outcome.active

    def test_fog_duration_doubled_on_seacoast(self):
        roller = scripted_roller(10, 28, 5)
        outcome = PrecipitationEngine(roller).determine(
            get_month("Coldeven"), TerrainId.SEACOAST_WARM, 50
        )
        assert outcome.name == "Heavy Fog"
        assert outcome.amount is None
        assert outcome.duration == 10

    def test_fog_duration_normal_inland(self):
        roller = scripted_roller(10, 28, 5)
        outcome = PrecipitationEngine(roller).determine(get_month("Coldeven"), TerrainId.PLAINS, 50)
        assert outcome.duration == 5

    def test_special_weather(self):
        # chance, type 100, plains special table, tornado duration 5d10
        roller = scripted_roller(1, 100, 10, 1, 1, 1, 1, 1)
        outcome = PrecipitationEngine(roller).determine(FIRESEEK, TerrainId.PLAINS, 20)
        assert outcome.is_special
        assert outcome.type_index == SPECIAL_ROW_INDEX
        assert outcome.name == "Tornado or Cyclone"
        assert outcome.amount == 1
        assert outcome.duration == 5
        assert outcome.wind_dice == "300"
        assert remaining_rolls(roller) == 0

    def test_special_weather_disabled(self):
        roller = scripted_roller(1, 100, 15, 4, 3, 4)
        outcome = PrecipitationEngine(roller).determine(
            FIRESEEK, TerrainId.PLAINS, 20, enable_special=False
        )
        assert outcome.type_index == LIGHT_SNOW

    def test_special_without_terrain_table(self):
        roller = scripted_roller(1, 100)
        outcome = PrecipitationEngine(roller).determine(FIRESEEK, TerrainId.SYLVAN_FOREST, 20)
        assert not outcome.active
        assert remaining_rolls(roller) == 0


class TestCarriedOver:
    """Precipitation carried over from yesterday skips the daily check."""

    def test_continuing_precipitation(self):
        prior = PrecipitationState(
            active=True, type_index=LIGHT_RAIN, remaining_duration=5, chance_continuing=45
        )
        roller = scripted_roller(2)
        outcome = PrecipitationEngine(roller).determine(FIRESEEK, TerrainId.PLAINS, 20, prior)
        assert outcome.continuing
        assert outcome.name == "Rainstorm, light"
        assert outcome.amount == 2
        assert outcome.duration == 5
        assert remaining_rolls(roller) == 0

    def test_forbidden_in_new_terrain(self):
        prior = PrecipitationState(
            active=True, type_index=index_of(PrecipitationTypeId.MONSOON), remaining_duration=2
        )
        outcome = PrecipitationEngine(scripted_roller(99)).determine(
            FIRESEEK, TerrainId.PLAINS, 90, prior
        )
        assert not outcome.active

    def test_special_carried_over(self):
        prior = PrecipitationState(
            active=True,
            type_index=SPECIAL_ROW_INDEX,
            remaining_duration=3,
            special_event=SpecialEventId.TORNADO,
        )
        roller = scripted_roller(1, 1, 1, 1, 1)
        outcome = PrecipitationEngine(roller).determine(FIRESEEK, TerrainId.PLAINS, 20, prior)
        assert outcome.is_special
        assert outcome.special.event == SpecialEventId.TORNADO
        assert outcome.duration == 3
        assert outcome.continuing

    def test_special_carried_over_when_disabled(self):
        prior = PrecipitationState(
            active=True,
            type_index=SPECIAL_ROW_INDEX,
            remaining_duration=3,
            special_event=SpecialEventId.TORNADO,
        )
        outcome = PrecipitationEngine(scripted_roller(99)).determine(
            FIRESEEK, TerrainId.PLAINS, 20, prior, enable_special=False
        )
        assert not outcome.active


class TestContinuation:
    """Tests for PrecipitationEngine.continue_precipitation."""

    def test_dry_day_rolls_nothing(self, clean_dice):
        state, rainbow = PrecipitationEngine(clean_dice).continue_precipitation(
            PrecipitationOutcome(), TerrainId.PLAINS
        )
        assert not state.is_active()
        assert rainbow is None
        assert clean_dice.get_roll_log() == []

    def test_ends_with_rainbow(self):
        engine = PrecipitationEngine(scripted_roller(46, 15, 90))
        state, rainbow = engine.continue_precipitation(
            _outcome(PrecipitationTypeId.LIGHT_RAINSTORM), TerrainId.PLAINS
        )
        assert not state.is_active()
        assert rainbow == "Double rainbow (may be an omen)"

    def test_ends_without_rainbow(self):
        engine = PrecipitationEngine(scripted_roller(46, 16))
        _, rainbow = engine.continue_precipitation(
            _outcome(PrecipitationTypeId.LIGHT_RAINSTORM), TerrainId.PLAINS
        )
        assert rainbow is None

    def test_continues_unchanged(self):
        engine = PrecipitationEngine(scripted_roller(45, 5, 7))
        state, rainbow = engine.continue_precipitation(
            _outcome(PrecipitationTypeId.LIGHT_RAINSTORM), TerrainId.PLAINS
        )
        assert state.is_active()
        assert state.type_index == LIGHT_RAIN
        assert state.remaining_duration == 7
        assert state.chance_continuing == 45
        assert rainbow is None

    @pytest.mark.parametrize(
        "shift,expected",
        [
            (10, PrecipitationTypeId.HEAVY_RAINSTORM),
            (1, PrecipitationTypeId.DRIZZLE),
        ],
    )
    def test_shifts_one_row(self, shift, expected):
        engine = PrecipitationEngine(scripted_roller(45, shift, 7))
        state, _ = engine.continue_precipitation(
            _outcome(PrecipitationTypeId.LIGHT_RAINSTORM), TerrainId.PLAINS
        )
        assert state.type_index == index_of(expected)
        assert state.chance_continuing == PRECIPITATION_TABLE[index_of(expected)].continuation_chance

    def test_clamped_at_top_of_table(self):
        engine = PrecipitationEngine(scripted_roller(5, 1, 1, 1, 1))
        state, _ = engine.continue_precipitation(
            _outcome(PrecipitationTypeId.HEAVY_BLIZZARD), TerrainId.PLAINS
        )
        assert state.type_index == 0
        assert state.remaining_duration == 3

    def test_never_shifts_into_special(self):
        engine = PrecipitationEngine(scripted_roller(20, 10))
        state, _ = engine.continue_precipitation(
            _outcome(PrecipitationTypeId.HURRICANE), TerrainId.JUNGLE
        )
        assert state.type_index == index_of(PrecipitationTypeId.HURRICANE)

    def test_never_shifts_into_forbidden_type(self):
        engine = PrecipitationEngine(scripted_roller(15, 10))
        state, _ = engine.continue_precipitation(
            _outcome(PrecipitationTypeId.THUNDERSTORM), TerrainId.PLAINS
        )
        assert state.type_index == THUNDERSTORM

    def test_shift_allowed_in_jungle(self):
        engine = PrecipitationEngine(scripted_roller(15, 10))
        state, _ = engine.continue_precipitation(
            _outcome(PrecipitationTypeId.THUNDERSTORM), TerrainId.JUNGLE
        )
        assert state.type_index == index_of(PrecipitationTypeId.TROPICAL_STORM)

    def test_fog_duration_doubled(self):
        engine = PrecipitationEngine(scripted_roller(25, 5, 6))
        state, _ = engine.continue_precipitation(
            _outcome(PrecipitationTypeId.HEAVY_FOG), TerrainId.SEACOAST_WARM
        )
        assert state.remaining_duration == 12

    def test_special_continues_with_same_event(self):
        engine = PrecipitationEngine(scripted_roller(1, 10, 1, 1, 1, 1, 1, 1))
        state, _ = engine.continue_precipitation(
            _special_outcome(SpecialEventId.SUN_SHOWER), TerrainId.SWAMP
        )
        assert state.type_index == SPECIAL_ROW_INDEX
        assert state.special_event == SpecialEventId.SUN_SHOWER
        assert state.remaining_duration == 6

    def test_special_never_shifts_to_standard(self):
        engine = PrecipitationEngine(scripted_roller(1, 1, 1, 1, 1, 1, 1, 1))
        state, _ = engine.continue_precipitation(
            _special_outcome(SpecialEventId.SUN_SHOWER), TerrainId.SWAMP
        )
        assert state.type_index == SPECIAL_ROW_INDEX

    def test_special_rainbow_uses_event_chance(self):
        engine = PrecipitationEngine(scripted_roller(2, 50, 10))
        state, rainbow = engine.continue_precipitation(
            _special_outcome(SpecialEventId.SUN_SHOWER), TerrainId.SWAMP
        )
        assert not state.is_active()
        assert rainbow == "Single rainbow"

    def test_no_rainbow_roll_at_zero_chance(self, clean_dice):
        assert PrecipitationEngine(clean_dice).check_rainbow(0) is None
        assert clean_dice.get_roll_log() == []


class TestPrecipitationState:
    """Tests for serializing the carried-over state."""

    def test_dict_round_trip(self):
        state = PrecipitationState(
            active=True,
            type_index=SPECIAL_ROW_INDEX,
            remaining_duration=4,
            chance_continuing=1,
            special_event=SpecialEventId.TORNADO,
        )
        assert PrecipitationState.from_dict(state.to_dict()) == state

    def test_index_clamped_on_load(self):
        state = PrecipitationState.from_dict({"active": True, "type_index": 40})
        assert state.type_index == SPECIAL_ROW_INDEX
        assert state.is_active()

    def test_inactive_without_type(self):
        assert not PrecipitationState(active=True).is_active()
