"""
Unit tests for the dice system.

Tests dice expression parsing in greyhawk_weather/dice.py and the
DiceRoller/DiceResult classes in greyhawk_weather/data_models.py.
"""

import pytest

from greyhawk_weather.data_models import DiceResult, DiceRoller
from greyhawk_weather.dice import (
    ExpressionKind,
    RollMode,
    evaluate,
    parse_dice_expression,
)
from greyhawk_weather.errors import ParseError
from tests.helpers import scripted_roller


class TestParseDiceExpression:
    """Tests for parsing dice notation."""

    def test_standard_with_modifier(self):
        expr = parse_dice_expression("3d6+2")
        assert expr.kind == ExpressionKind.STANDARD
        assert expr.count == 3
        assert expr.sides == 6
        assert expr.modifier == 2
        assert expr.maximum() == 20

    def test_implicit_single_die(self):
        expr = parse_dice_expression("d20")
        assert expr.count == 1
        assert expr.sides == 20

    def test_negative_modifier(self):
        expr = parse_dice_expression("d20-1")
        assert expr.modifier == -1
        assert expr.maximum() == 19

    def test_fractional(self):
        expr = parse_dice_expression("1/2d4")
        assert expr.kind == ExpressionKind.FRACTIONAL
        assert expr.maximum() == 2

    def test_negated_with_parentheses(self):
        """A leading minus negates the whole parenthesised expression."""
        expr = parse_dice_expression("-(d10+4)")
        assert expr.negative
        assert expr.maximum() == -14

    def test_negated_die(self):
        assert parse_dice_expression("-d20").maximum() == -20

    def test_literal(self):
        expr = parse_dice_expression("300")
        assert expr.kind == ExpressionKind.LITERAL
        assert expr.maximum() == 300
        assert not expr.is_random

    @pytest.mark.parametrize("notation", ["", "None", "  "])
    def test_zero_forms(self, notation):
        expr = parse_dice_expression(notation)
        assert expr.kind == ExpressionKind.ZERO
        assert expr.maximum() == 0

    @pytest.mark.parametrize("notation", ["abc", "0d6", "2d0", "1/0d4", "d", "3d6+"])
    def test_invalid_notation_raises(self, notation):
        with pytest.raises(ParseError):
            parse_dice_expression(notation)

    def test_none_raises(self):
        with pytest.raises(ParseError):
            parse_dice_expression(None)


class TestEvaluate:
    """Tests for evaluating expressions in sample and max modes."""

    def test_sample_negated_expression(self):
        roller = scripted_roller(3)
        assert roller.evaluate("-(d10+4)") == -7

    def test_fractional_sample_is_floored(self):
        roller = scripted_roller(3, 4, 3)
        assert roller.evaluate("1/2d4") == 1
        assert roller.evaluate("1/4d4") == 1
        assert roller.evaluate("1/4d4") == 0

    def test_max_mode_rolls_nothing(self, seeded_dice):
        assert seeded_dice.evaluate("2d8+6", RollMode.MAX) == 22
        assert seeded_dice.evaluate("-(d6+6)", "max") == -12
        assert seeded_dice.get_roll_log() == []

    def test_literal_is_not_logged(self, clean_dice):
        assert clean_dice.evaluate("300") == 300
        assert clean_dice.get_roll_log() == []

    def test_module_evaluate_without_roller(self):
        for _ in range(20):
            assert 1 <= evaluate("1d6") <= 6

    def test_module_evaluate_uses_given_roller(self):
        roller = scripted_roller(5)
        assert evaluate("1d8+1", roller=roller, reason="test") == 6


class TestDiceRoller:
    """Tests for DiceRoller class."""

    def test_roll_basic_d6(self, seeded_dice):
        result = seeded_dice.roll("1d6", "test roll")
        assert isinstance(result, DiceResult)
        assert 1 <= result.total <= 6
        assert len(result.rolls) == 1

    def test_roll_multiple_dice(self, seeded_dice):
        result = seeded_dice.roll("3d6", "attribute roll")
        assert len(result.rolls) == 3
        assert all(1 <= r <= 6 for r in result.rolls)
        assert result.total == sum(result.rolls)

    def test_same_seed_same_rolls(self):
        first = DiceRoller(seed=7)
        second = DiceRoller(seed=7)
        assert [first.roll("1d100").total for _ in range(10)] == [
            second.roll("1d100").total for _ in range(10)
        ]

    def test_set_seed_restarts_stream(self):
        roller = DiceRoller(seed=3)
        before = [roller.roll_d20().total for _ in range(5)]
        roller.set_seed(3)
        assert [roller.roll_d20().total for _ in range(5)] == before
        assert roller.seed == 3

    def test_roll_log_records_reason(self, clean_dice):
        clean_dice.roll_percentile("Sky conditions")
        clean_dice.roll_d10("Precipitation change")
        log = clean_dice.get_roll_log()
        assert [entry.reason for entry in log] == ["Sky conditions", "Precipitation change"]
        clean_dice.clear_roll_log()
        assert clean_dice.get_roll_log() == []

    def test_roll_log_keeps_most_recent_rolls(self, monkeypatch):
        monkeypatch.setattr("greyhawk_weather.data_models.ROLL_LOG_LIMIT", 3)
        roller = DiceRoller(seed=1)
        for day in range(1, 6):
            roller.roll_percentile(f"Day {day}")
        assert [entry.reason for entry in roller.get_roll_log()] == ["Day 3", "Day 4", "Day 5"]
        roller.clear_roll_log()
        roller.roll_d20("After clearing")
        assert len(roller.get_roll_log()) == 1

    def test_choice_uses_randint(self):
        roller = scripted_roller(1)
        assert roller.choice((5, -5)) == -5

    def test_choice_empty_raises(self, clean_dice):
        with pytest.raises(ValueError):
            clean_dice.choice(())

    def test_result_str(self):
        result = DiceResult(notation="1d8+2", rolls=[5], modifier=2, total=7, reason="")
        assert str(result) == "1d8+2: [5] + 2 = 7"
        assert result.to_dict()["total"] == 7
