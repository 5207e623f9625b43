"""
Core data models for the Greyhawk weather generator.

Holds the randomization interface (DiceRoller) and the immutable inputs
to a generation call (LocationConfig, WeatherFlags).
"""

import logging
import random
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional, Sequence, TypeVar, Union

from greyhawk_weather.dice import (
    DiceExpression,
    RollMode,
    parse_dice_expression,
)
from greyhawk_weather.errors import ConfigError
from greyhawk_weather.tables.table_types import TerrainId


logger = logging.getLogger(__name__)

T = TypeVar("T")

# Oldest rolls are dropped once the log holds this many
ROLL_LOG_LIMIT = 10000


# =============================================================================
# DICE
# =============================================================================


@dataclass
class DiceResult:
    """Result of a dice roll with full information."""
    notation: str
    rolls: list[int]
    modifier: int
    total: int
    reason: str
    timestamp: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        if self.modifier > 0:
            return f"{self.notation}: {self.rolls} + {self.modifier} = {self.total}"
        elif self.modifier < 0:
            return f"{self.notation}: {self.rolls} - {abs(self.modifier)} = {self.total}"
        return f"{self.notation}: {self.rolls} = {self.total}"

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "notation": self.notation,
            "rolls": list(self.rolls),
            "modifier": self.modifier,
            "total": self.total,
            "reason": self.reason,
            "timestamp": self.timestamp.isoformat(),
        }


class DiceRoller:
    """
    Randomization interface for one weather session.

    All dice rolls go through an instance of this class so a report can be
    reproduced from a seed and every roll is logged. Each instance owns its
    random stream; there is no shared module-level generator.

    Usage:
        roller = DiceRoller(seed=42)
        roller.roll("3d6+2", "test roll").total
        roller.evaluate("-(d10+4)", "max")  # -14, no roll consumed
    """

    def __init__(self, seed: Optional[int] = None, rng: Optional[random.Random] = None):
        """
        Initialize the roller.

        Args:
            seed: Seed for the default random.Random stream
            rng: Optional object with randint/choice (e.g. a scripted
                source in tests). Overrides seed.
        """
        self._seed = seed
        self._rng = rng if rng is not None else random.Random(seed)
        self._roll_log: deque[DiceResult] = deque(maxlen=ROLL_LOG_LIMIT)

    @property
    def seed(self) -> Optional[int]:
        return self._seed

    def set_seed(self, seed: int) -> None:
        """Reseed the random stream for reproducibility."""
        self._seed = seed
        self._rng.seed(seed)

    def roll(self, dice: Union[str, DiceExpression], reason: str = "") -> DiceResult:
        """
        Roll dice using standard notation (e.g., '2d6', '1d20+5', '1/2d4').

        Args:
            dice: Dice notation string or parsed expression
            reason: Why this roll is being made (for logging)

        Returns:
            DiceResult with individual rolls and total
        """
        expression = dice if isinstance(dice, DiceExpression) else parse_dice_expression(dice)
        rolls, total = expression.sample(self._rng.randint)

        result = DiceResult(
            notation=expression.notation,
            rolls=rolls,
            modifier=expression.modifier,
            total=total,
            reason=reason,
        )
        if expression.is_random:
            self._roll_log.append(result)
            logger.debug(f"Roll {result} ({reason})")
        return result

    def evaluate(
        self,
        expr: Union[str, DiceExpression],
        mode: Union[str, RollMode] = RollMode.SAMPLE,
        reason: str = "",
    ) -> int:
        """
        Evaluate a dice expression to an integer.

        Args:
            expr: Notation string or parsed expression
            mode: "sample" rolls the dice, "max" returns the ceiling
            reason: Why this roll is being made (for logging)

        Returns:
            The integer result
        """
        expression = expr if isinstance(expr, DiceExpression) else parse_dice_expression(expr)
        if RollMode(mode) == RollMode.MAX:
            return expression.maximum()
        return self.roll(expression, reason).total

    def randint(self, a: int, b: int, reason: str = "") -> int:
        """Roll a uniform integer in [a, b] and log it."""
        value = self._rng.randint(a, b)
        self._roll_log.append(
            DiceResult(notation=f"{a}-{b}", rolls=[value], modifier=0, total=value, reason=reason)
        )
        logger.debug(f"Roll {a}-{b}: {value} ({reason})")
        return value

    def choice(self, seq: Sequence[T], reason: str = "") -> T:
        """Pick one element uniformly from a non-empty sequence."""
        if not seq:
            raise ValueError("Cannot choose from an empty sequence")
        index = self.randint(0, len(seq) - 1, reason)
        return seq[index]

    def roll_d20(self, reason: str = "") -> DiceResult:
        """Convenience method for d20 rolls."""
        return self.roll("1d20", reason)

    def roll_d10(self, reason: str = "") -> DiceResult:
        """Convenience method for d10 rolls."""
        return self.roll("1d10", reason)

    def roll_percentile(self, reason: str = "") -> DiceResult:
        """Roll d100 for percentile checks."""
        return self.roll("1d100", reason)

    def get_roll_log(self) -> list[DiceResult]:
        """Get the logged rolls, oldest first (at most ROLL_LOG_LIMIT)."""
        return list(self._roll_log)

    def clear_roll_log(self) -> None:
        """Clear the roll log."""
        self._roll_log.clear()


# =============================================================================
# GENERATION INPUTS
# =============================================================================


GREYHAWK_CITY_LATITUDE = 35
MILES_PER_DEGREE = 70


def latitude_from_miles(miles_north: int = 0, miles_south: int = 0) -> int:
    """
    Latitude of a place given its distance from the City of Greyhawk.

    Every full 70 miles north or south moves one degree from 35.
    """
    return (
        GREYHAWK_CITY_LATITUDE
        + miles_north // MILES_PER_DEGREE
        - miles_south // MILES_PER_DEGREE
    )


@dataclass(frozen=True)
class LocationConfig:
    """
    Where the weather is being generated.

    Attributes:
        latitude: Degrees, -90..90 (baseline climate is calibrated to 40)
        elevation_feet: Height above sea level, >= 0
        terrain: Terrain type
    """

    latitude: int = 40
    elevation_feet: int = 0
    terrain: TerrainId = TerrainId.PLAINS

    def __post_init__(self):
        if not -90 <= self.latitude <= 90:
            raise ConfigError(f"Latitude must be between -90 and 90, got {self.latitude}")
        if self.elevation_feet < 0:
            raise ConfigError(f"Elevation must be >= 0 feet, got {self.elevation_feet}")
        if not isinstance(self.terrain, TerrainId):
            object.__setattr__(self, "terrain", TerrainId.from_name(self.terrain))

    @property
    def at_sea(self) -> bool:
        return self.terrain.at_sea

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "latitude": self.latitude,
            "elevation_feet": self.elevation_feet,
            "terrain": self.terrain.value,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LocationConfig":
        """Deserialize from dictionary."""
        return cls(
            latitude=data.get("latitude", 40),
            elevation_feet=data.get("elevation_feet", 0),
            terrain=TerrainId.from_name(data.get("terrain", TerrainId.PLAINS.value)),
        )


@dataclass(frozen=True)
class WeatherFlags:
    """
    Optional rules and reporting context for a generation call.

    Attributes:
        use_record_temperatures: Roll for multi-day record highs/lows
        use_realistic_wind: Gentler elevation scaling for mountain winds
        enable_special_weather: Allow the "Special" precipitation row
        in_air: Report high-wind effects on flying creatures
        in_battle: Report high-wind effects on combat
    """

    use_record_temperatures: bool = True
    use_realistic_wind: bool = False
    enable_special_weather: bool = True
    in_air: bool = False
    in_battle: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "use_record_temperatures": self.use_record_temperatures,
            "use_realistic_wind": self.use_realistic_wind,
            "enable_special_weather": self.enable_special_weather,
            "in_air": self.in_air,
            "in_battle": self.in_battle,
        }
