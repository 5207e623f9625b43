"""
Dice expression parsing and evaluation.

Supports the notations used throughout the weather tables:
- Standard: "d20", "3d6+2", "2d8-1"
- Fractional: "1/2d4" (one die, scaled and floored)
- Literal integers: "300"
- Zero: "" or "None"

A leading "-" negates the whole expression, optionally wrapping the
remainder in parentheses ("-d20", "-(d10+4)").
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import TYPE_CHECKING, Callable, Optional, Union

from greyhawk_weather.errors import ParseError

if TYPE_CHECKING:
    from greyhawk_weather.data_models import DiceRoller


class RollMode(str, Enum):
    """How a dice expression is resolved."""

    SAMPLE = "sample"  # Roll the dice
    MAX = "max"  # Worst case, no randomness


class ExpressionKind(str, Enum):
    """Shape of a parsed dice expression."""

    ZERO = "zero"
    LITERAL = "literal"
    STANDARD = "standard"
    FRACTIONAL = "fractional"


_STANDARD_RE = re.compile(r"^(\d*)d(\d+)\s*(?:([+-])\s*(\d+))?$", re.IGNORECASE)
_FRACTIONAL_RE = re.compile(r"^(\d+)\s*/\s*(\d+)\s*d(\d+)$", re.IGNORECASE)
_LITERAL_RE = re.compile(r"^\d+$")


@dataclass(frozen=True)
class DiceExpression:
    """
    Parsed form of a dice notation string.

    Attributes:
        notation: The original notation string
        kind: Which form the expression takes
        count: Number of dice (standard form)
        sides: Sides per die (standard and fractional forms)
        modifier: Flat modifier added after the dice (standard form)
        numerator: Scale numerator (fractional form)
        denominator: Scale denominator (fractional form)
        value: The literal value (literal form)
        negative: Whether the whole result is negated
    """

    notation: str
    kind: ExpressionKind
    count: int = 0
    sides: int = 0
    modifier: int = 0
    numerator: int = 1
    denominator: int = 1
    value: int = 0
    negative: bool = False

    @property
    def is_random(self) -> bool:
        """True if evaluating this expression consumes rolls."""
        return self.kind in (ExpressionKind.STANDARD, ExpressionKind.FRACTIONAL)

    def maximum(self) -> int:
        """The ceiling of this expression (sign applied)."""
        if self.kind == ExpressionKind.STANDARD:
            result = self.count * self.sides + self.modifier
        elif self.kind == ExpressionKind.FRACTIONAL:
            result = (self.numerator * self.sides) // self.denominator
        elif self.kind == ExpressionKind.LITERAL:
            result = self.value
        else:
            result = 0
        return -result if self.negative else result

    def sample(self, randint: Callable[[int, int], int]) -> tuple[list[int], int]:
        """
        Roll this expression.

        Args:
            randint: Callable returning a uniform integer in [a, b]

        Returns:
            Tuple of (individual die results, signed total)
        """
        rolls: list[int] = []
        if self.kind == ExpressionKind.STANDARD:
            rolls = [randint(1, self.sides) for _ in range(self.count)]
            result = sum(rolls) + self.modifier
        elif self.kind == ExpressionKind.FRACTIONAL:
            rolls = [randint(1, self.sides)]
            result = (self.numerator * rolls[0]) // self.denominator
        elif self.kind == ExpressionKind.LITERAL:
            result = self.value
        else:
            result = 0
        return rolls, (-result if self.negative else result)

    def __str__(self) -> str:
        return self.notation


@lru_cache(maxsize=512)
def parse_dice_expression(notation: str) -> DiceExpression:
    """
    Parse a dice notation string.

    Args:
        notation: Dice notation (e.g. "2d8+6", "1/2d4", "-(d10+4)", "None")

    Returns:
        The parsed DiceExpression

    Raises:
        ParseError: If the notation is not a recognised form
    """
    if notation is None:
        raise ParseError("Dice expression may not be None (use the string 'None')")

    text = notation.strip()
    if text == "" or text == "None":
        return DiceExpression(notation=notation, kind=ExpressionKind.ZERO)

    negative = False
    body = text
    if body.startswith("-"):
        negative = True
        body = body[1:].strip()
        if body.startswith("(") and body.endswith(")"):
            body = body[1:-1].strip()

    if _LITERAL_RE.match(body):
        return DiceExpression(
            notation=notation,
            kind=ExpressionKind.LITERAL,
            value=int(body),
            negative=negative,
        )

    match = _FRACTIONAL_RE.match(body)
    if match:
        numerator, denominator, sides = (int(g) for g in match.groups())
        if denominator == 0 or sides == 0:
            raise ParseError(f"Invalid fractional dice expression: {notation!r}")
        return DiceExpression(
            notation=notation,
            kind=ExpressionKind.FRACTIONAL,
            sides=sides,
            numerator=numerator,
            denominator=denominator,
            negative=negative,
        )

    match = _STANDARD_RE.match(body)
    if match:
        count_str, sides_str, sign, mod_str = match.groups()
        count = int(count_str) if count_str else 1
        sides = int(sides_str)
        if count == 0 or sides == 0:
            raise ParseError(f"Dice expression needs at least one die with one side: {notation!r}")
        modifier = int(mod_str) if mod_str else 0
        if sign == "-":
            modifier = -modifier
        return DiceExpression(
            notation=notation,
            kind=ExpressionKind.STANDARD,
            count=count,
            sides=sides,
            modifier=modifier,
            negative=negative,
        )

    raise ParseError(f"Unrecognised dice expression: {notation!r}")


def evaluate(
    expr: Union[str, DiceExpression],
    mode: Union[str, RollMode] = RollMode.SAMPLE,
    roller: Optional["DiceRoller"] = None,
    reason: str = "",
) -> int:
    """
    Evaluate a dice expression.

    Args:
        expr: Notation string or already parsed expression
        mode: "sample" to roll, "max" for the ceiling
        roller: DiceRoller supplying randomness. A fresh unseeded
            roller is created when omitted.
        reason: Why the roll is being made (for the roll log)

    Returns:
        The integer result
    """
    if roller is None:
        from greyhawk_weather.data_models import DiceRoller

        roller = DiceRoller()
    return roller.evaluate(expr, mode, reason)
