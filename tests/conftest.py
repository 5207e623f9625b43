"""
Pytest fixtures for the Greyhawk weather generator test suite.

Provides reusable fixtures for dice, dates and locations.
"""

import pytest

from greyhawk_weather.data_models import DiceRoller, LocationConfig, WeatherFlags
from greyhawk_weather.tables.table_types import TerrainId
from greyhawk_weather.weather.calendar import CalendarDate


# =============================================================================
# DICE FIXTURES
# =============================================================================


@pytest.fixture
def seeded_dice():
    """Provide a seeded DiceRoller for reproducible tests."""
    roller = DiceRoller(seed=42)
    yield roller
    roller.clear_roll_log()


@pytest.fixture
def clean_dice():
    """Provide a clean DiceRoller without seed."""
    roller = DiceRoller()
    yield roller
    roller.clear_roll_log()


# =============================================================================
# DATE AND LOCATION FIXTURES
# =============================================================================


@pytest.fixture
def fireseek_first():
    """First day of Fireseek, 568 CY."""
    return CalendarDate(month="Fireseek", day=1, year=568)


@pytest.fixture
def plains_location():
    """Sea-level plains at the baseline latitude."""
    return LocationConfig(latitude=40, elevation_feet=0, terrain=TerrainId.PLAINS)


@pytest.fixture
def default_flags():
    """Default rules: record temperatures and special weather on."""
    return WeatherFlags()
