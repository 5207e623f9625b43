"""
Moon Phase Tables for Luna and Celene.

Sparse per-month maps of day -> phase. Only the key days are listed;
days in between take the preceding phase as a transitional phase.
"""

from enum import Enum


class Moon(str, Enum):
    """The two moons of Oerth."""

    LUNA = "luna"
    CELENE = "celene"


_LUNA_WINTER_SPRING = {
    1: "Waxing Crescent",
    4: "1st quarter",
    7: "Waxing Gibbous",
    11: "Full",
    14: "Waning Gibbous",
    18: "3rd quarter",
    21: "Waning Crescent",
    25: "New",
}
_LUNA_LOW_SUMMER = {
    1: "Waning Crescent",
    4: "Full",
    7: "Waning Gibbous",
    11: "3rd quarter",
    14: "Waning Crescent",
    18: "New",
    21: "Waxing Crescent",
    25: "1st quarter",
    28: "Waxing Gibbous",
}
_LUNA_HIGH_SUMMER = {
    1: "Waning Gibbous",
    4: "3rd quarter",
    7: "Waning Crescent",
    11: "New",
    14: "Waxing Crescent",
    18: "1st quarter",
    21: "Waxing Gibbous",
    25: "Full",
    28: "Waning Gibbous",
}
_LUNA_AUTUMN_WINTER = {
    1: "Waning Crescent",
    4: "New",
    7: "Waxing Crescent",
    11: "1st quarter",
    14: "Waxing Gibbous",
    18: "Full",
    21: "Waning Gibbous",
    25: "3rd quarter",
    28: "Waning Crescent",
}

MOON_PHASES: dict[Moon, dict[str, dict[int, str]]] = {
    Moon.LUNA: {
        "Needfest": {4: "New"},
        "Fireseek": _LUNA_WINTER_SPRING,
        "Readying": _LUNA_WINTER_SPRING,
        "Coldeven": _LUNA_WINTER_SPRING,
        "Growfest": {1: "Waxing Crescent", 4: "1st quarter", 7: "Waxing Gibbous"},
        "Planting": _LUNA_LOW_SUMMER,
        "Flocktime": _LUNA_LOW_SUMMER,
        "Wealsun": _LUNA_LOW_SUMMER,
        "Richfest": {1: "Waxing Gibbous", 4: "Full"},
        "Reaping": _LUNA_HIGH_SUMMER,
        "Goodmonth": _LUNA_HIGH_SUMMER,
        "Harvester": _LUNA_HIGH_SUMMER,
        "Brewfest": {1: "Waning Crescent", 4: "3rd quarter", 7: "Waning Gibbous"},
        "Patchwall": _LUNA_AUTUMN_WINTER,
        "Ready'reat": _LUNA_AUTUMN_WINTER,
        "Sunsebb": _LUNA_AUTUMN_WINTER,
    },
    Moon.CELENE: {
        "Needfest": {4: "Full"},
        "Fireseek": {19: "3rd quarter"},
        "Readying": {11: "New"},
        "Coldeven": {4: "1st quarter"},
        "Growfest": {4: "Full"},
        "Planting": {19: "3rd quarter"},
        "Flocktime": {11: "New"},
        "Wealsun": {4: "1st quarter"},
        "Richfest": {4: "Full"},
        "Reaping": {19: "3rd quarter"},
        "Goodmonth": {11: "New"},
        "Harvester": {4: "1st quarter"},
        "Brewfest": {4: "Full"},
        "Patchwall": {19: "3rd quarter"},
        "Ready'reat": {11: "New"},
        "Sunsebb": {4: "1st quarter"},
    },
}

FULL_PHASE = "Full"
TRANSITIONAL_MARKER = "+"

# Midsummer's night: both moons full
MIDSUMMER_MONTH = "Richfest"
MIDSUMMER_DAY = 4
