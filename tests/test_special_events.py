"""
Tests for special weather phenomena and their causes.
"""

from greyhawk_weather.tables.table_types import DurationUnit, SpecialEventId, TerrainId
from greyhawk_weather.weather.special_events import SpecialEventEngine
from tests.helpers import scripted_roller


class TestSpecialEventEngine:
    """Tests for SpecialEventEngine."""

    def test_plains_table(self):
        engine = SpecialEventEngine(scripted_roller(50, 51))
        assert engine.determine(TerrainId.PLAINS) == SpecialEventId.TORNADO
        assert engine.determine(TerrainId.PLAINS) == SpecialEventId.EARTHQUAKE

    def test_desert_table(self):
        engine = SpecialEventEngine(scripted_roller(60, 70))
        assert engine.determine(TerrainId.DESERT) == SpecialEventId.OASIS
        assert engine.determine(TerrainId.DESERT) == SpecialEventId.MIRAGE_OASIS

    def test_no_table_no_roll(self, clean_dice):
        engine = SpecialEventEngine(clean_dice)
        assert not engine.has_events(TerrainId.SYLVAN_FOREST)
        assert engine.determine(TerrainId.SYLVAN_FOREST) is None
        assert clean_dice.get_roll_log() == []

    def test_outcome_rolls_amount_and_duration(self):
        engine = SpecialEventEngine(scripted_roller(1, 2, 3, 4, 5))
        outcome = engine.outcome_for(SpecialEventId.TORNADO)
        assert outcome.event == SpecialEventId.TORNADO
        assert outcome.amount == 1
        assert outcome.duration == 15
        assert outcome.duration_unit == DurationUnit.HOURS

    def test_sun_shower_has_no_amount_dice(self):
        engine = SpecialEventEngine(scripted_roller(1, 1, 1, 1, 1, 1))
        outcome = engine.outcome_for(SpecialEventId.SUN_SHOWER)
        assert outcome.amount is None
        assert outcome.duration == 6
        assert outcome.duration_unit == DurationUnit.MINUTES
        assert outcome.entry.detail.amount_text == "x1/2"


class TestCauses:
    """An extraordinary cause is found 10% of the time."""

    def test_no_cause(self):
        engine = SpecialEventEngine(scripted_roller(11))
        assert engine.maybe_cause() is None

    def test_cause_found(self):
        engine = SpecialEventEngine(scripted_roller(10, 95))
        assert engine.maybe_cause() == (
            "Demons, devils, or creatures from the appropriate Elemental Plane."
        )

    def test_cause_table(self):
        engine = SpecialEventEngine(scripted_roller(30, 31, 100))
        assert engine.determine_cause() == "Elemental(s) or giant(s)."
        assert engine.determine_cause() == "Elemental(s) under NPC control."
        assert engine.determine_cause() == "A battle between two or more deities."
