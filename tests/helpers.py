"""
Test helpers for the Greyhawk weather generator test suite.

Provides a scripted random source so tests can choose every die that
is rolled, in order.
"""

import random
from collections import deque
from typing import Iterable, Optional

from greyhawk_weather.data_models import DiceRoller


# =============================================================================
# SCRIPTED DICE
# =============================================================================


class ScriptedRandom:
    """
    Random source that returns queued values.

    Each call to randint pops the next queued value. Once the queue runs
    out, a seeded random.Random takes over so a test only has to script
    the rolls it cares about.

    Usage:
        roller = DiceRoller(rng=ScriptedRandom([50, 6, 12]))
        roller.roll("1d100").total  # 50
    """

    def __init__(self, values: Iterable[int] = (), fallback_seed: int = 0):
        self._values = deque(values)
        self._fallback = random.Random(fallback_seed)
        self.calls: list[tuple[int, int]] = []

    @property
    def remaining(self) -> int:
        """Number of scripted values not yet used."""
        return len(self._values)

    def queue(self, *values: int) -> None:
        self._values.extend(values)

    def randint(self, a: int, b: int) -> int:
        self.calls.append((a, b))
        if not self._values:
            return self._fallback.randint(a, b)
        value = self._values.popleft()
        if not a <= value <= b:
            raise ValueError(f"Scripted value {value} outside range {a}-{b}")
        return value

    def choice(self, seq):
        return seq[self.randint(0, len(seq) - 1)]

    def seed(self, seed: Optional[int] = None) -> None:
        self._fallback.seed(seed)


def scripted_roller(*values: int) -> DiceRoller:
    """Build a DiceRoller that rolls the given values in order."""
    return DiceRoller(rng=ScriptedRandom(values))


def remaining_rolls(roller: DiceRoller) -> int:
    """Scripted values a roller built by scripted_roller has not used."""
    return roller._rng.remaining


# =============================================================================
# SCRIPTED DAYS
# =============================================================================

# Fireseek 1 on sea-level plains: record check, high d10, low -d20, sky,
# precipitation check, wind d20-1, wind direction
DRY_FIRESEEK_ROLLS = (50, 6, 12, 10, 80, 10, 15)

# As above, but a light snowstorm that carries on into the next day:
# ..., precipitation check, type, amount d8, duration 2d6, wind 4d6,
# continuation, d10 change, tomorrow's duration 2d6, wind direction
SNOWY_FIRESEEK_ROLLS = (50, 2, 12, 80, 10, 15, 4, 3, 4, 2, 3, 4, 5, 25, 5, 1, 1, 15)
