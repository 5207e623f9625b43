"""
Tests for report formatting.
"""

import json

import pytest

from greyhawk_weather.weather.orchestrator import WeatherOrchestrator
from greyhawk_weather.weather.report import ReportCompiler
from tests.helpers import DRY_FIRESEEK_ROLLS, SNOWY_FIRESEEK_ROLLS, scripted_roller


@pytest.fixture
def compiler():
    return ReportCompiler()


@pytest.fixture
def dry_report(fireseek_first, plains_location):
    roller = scripted_roller(*DRY_FIRESEEK_ROLLS)
    return WeatherOrchestrator(roller).generate(fireseek_first, plains_location).report


@pytest.fixture
def snowy_report(fireseek_first, plains_location):
    roller = scripted_roller(*SNOWY_FIRESEEK_ROLLS)
    return WeatherOrchestrator(roller).generate(fireseek_first, plains_location).report


class TestToDict:
    """Structured reports."""

    def test_top_level_keys(self, compiler, dry_report):
        data = compiler.to_dict(dry_report)
        assert list(data) == [
            "date",
            "location",
            "temperature",
            "sky",
            "humidity",
            "precipitation",
            "wind",
            "moons",
            "special_event",
            "sunrise",
            "sunset",
            "notes",
        ]

    def test_values(self, compiler, dry_report):
        data = compiler.to_dict(dry_report)
        assert data["date"] == {
            "month": "Fireseek",
            "day": 1,
            "year": 568,
            "weekday": "Starday",
            "season": "Winter",
        }
        assert data["location"]["terrain"] == "Plains"
        assert data["temperature"]["high"] == 38
        assert data["temperature"]["wind_chill"] == -6
        assert data["temperature"]["extreme"] == "none"
        assert data["precipitation"]["type"] == "None"
        assert data["wind"]["direction"] == "North"
        assert data["moons"]["lycanthrope_activity"] == "Normal"
        assert data["special_event"] == {"event": None, "cause": None}

    def test_json_serializable(self, compiler, snowy_report):
        data = json.loads(json.dumps(compiler.to_dict(snowy_report)))
        assert data["precipitation"]["duration_unit"] == "hours"
        assert data["precipitation"]["continues_tomorrow"] is True


class TestToText:
    """Plain-text reports."""

    def test_dry_day(self, compiler, dry_report):
        text = compiler.to_text(dry_report)
        assert text.startswith("Weather for Starday, 1 Fireseek, 568 CY (Winter)")
        assert "High: 38°F   Low: 20°F   Wind chill: -6°F" in text
        assert "Sky: Clear" in text
        assert "Precipitation: None" in text
        assert "Wind: 14 mph from the North (Moderate Breeze)" in text
        assert "Sunrise: 07:21   Sunset: 17:01" in text
        assert "Notes:" in text

    def test_snowy_day(self, compiler, snowy_report):
        text = compiler.to_text(snowy_report)
        assert "Precipitation: Snowstorm, light" in text
        assert "  Amount: 4 inches" in text
        assert "  Duration: 7 hours" in text
        assert "  Movement Rate: x3/4" in text
        assert "  Continues tomorrow" in text
