"""
Wind Tables.

High-wind effects by speed band, Beaufort-style speed labels, the
seasonal prevailing wind chart and the wind chill chart.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class HighWindsEntry:
    """Effects of a band of wind speeds, by where the party is."""

    min_speed: int
    max_speed: int
    on_land: str
    at_sea: str
    in_air: str
    in_battle: str

    def matches(self, speed: int) -> bool:
        return self.min_speed <= speed <= self.max_speed


NO_EFFECT = "No effect"


HIGH_WINDS_TABLE: tuple[HighWindsEntry, ...] = (
    HighWindsEntry(0, 31, NO_EFFECT, NO_EFFECT, NO_EFFECT, NO_EFFECT),
    HighWindsEntry(
        32,
        54,
        on_land="All travel slowed by 25%; torches will be blown out.",
        at_sea=(
            "Strong Gale; sailing difficult; rowing impossible; check for damage every 6 hours:"
            "\n- 1% chance of capsizing"
            "\n- 5% chance of broken mast"
            "\n- 10% chance of broken beams"
            "\n- 20% chance of torn sail and/or fouled rigging"
            "\n- 10% chance of man overboard."
        ),
        in_air="Creatures eagle-size and below can't fly.",
        in_battle="Missiles at 1/2 range and -1 to hit.",
    ),
    HighWindsEntry(
        55,
        72,
        on_land="All travel slowed by 50%; torches and small fires will be blown out.",
        at_sea=(
            "Storm; minor ship damage (d4 structural points); wave height d10+20 ft.; "
            "check for damage every 6 hours:"
            "\n- 20% chance of capsizing"
            "\n- 25% chance of broken mast"
            "\n- 35% chance of broken beams"
            "\n- 45% chance of torn sail and/or fouled rigging"
            "\n- 50% chance of man overboard."
        ),
        in_air="Man-sized creatures cannot fly.",
        in_battle="Missiles at 1/4 range and -3 to hit.",
    ),
    HighWindsEntry(
        73,
        136,
        on_land=(
            "Small trees are uprooted; all travel slowed by 75%; roofs may be torn off; "
            "torches and medium-sized fires will be blown out."
        ),
        at_sea=(
            "Hurricane; ships are endangered (d10 structural damage) and blown off course; "
            "wave height d20+20 ft.; check for damage every 6 hours:"
            "\n- 40% chance of capsizing"
            "\n- 45% chance of broken mast"
            "\n- 50% chance of broken beams"
            "\n- 65% chance of torn sail and/or fouled rigging"
            "\n- 70% chance of man overboard."
        ),
        in_air="No creatures can fly, except those from the Elemental Plane of Air.",
        in_battle=(
            "No missile fire permitted; all non-magical weapon attacks are -1 to hit; "
            "dexterity bonuses to AC cancelled."
        ),
    ),
    HighWindsEntry(
        137,
        500,
        on_land=(
            "Only strong stone buildings will be undamaged; travel is impossible; up to large "
            "trees are damaged or uprooted; roofs will be torn off; torches and large fires "
            "will be blown out."
        ),
        at_sea="Ships are capsized and sunk; wave height d20+20 ft. or more.",
        in_air="No creatures can fly, except those from the Elemental Plane of Air.",
        in_battle=(
            "No missile fire permitted; all non-magical weapon attacks at -3 to hit; 20% "
            "chance per attack that any weapon will be torn from the wielder's grip by the "
            "wind; dexterity bonuses to AC cancelled."
        ),
    ),
)


# (highest speed in mph, label)
WIND_SPEED_LABELS: tuple[tuple[int, str], ...] = (
    (1, "Calm"),
    (7, "Light Breeze"),
    (18, "Moderate Breeze"),
    (31, "Strong Breeze"),
    (54, "Strong 'Gale'"),
    (72, "Storm Winds"),
    (136, "Hurricane Winds"),
)
UNUSUAL_WIND_LABEL = "Unusually Strong Winds"


# =============================================================================
# PREVAILING WIND
# =============================================================================


WIND_DIRECTIONS: tuple[str, ...] = (
    "South",
    "Southwest",
    "West",
    "Northwest",
    "North",
    "Northeast",
    "East",
    "Southeast",
)

# Highest d20 roll for each direction above, by wind season
WIND_DIRECTION_THRESHOLDS: dict[str, tuple[int, ...]] = {
    "Winter": (1, 2, 3, 6, 15, 17, 19, 20),
    "Spring": (2, 3, 4, 5, 6, 8, 13, 20),
    "Summer": (2, 3, 4, 5, 6, 7, 14, 20),
    "Autumn": (1, 2, 3, 5, 10, 17, 19, 20),
}


# =============================================================================
# WIND CHILL
# =============================================================================


WIND_CHILL_TEMPERATURES: tuple[int, ...] = (35, 30, 25, 20, 15, 10, 5, 0, -5, -10, -15, -20)

_WIND_CHILL_ROWS: dict[int, tuple[int, ...]] = {
    5: (33, 27, 21, 16, 12, 7, 1, -6, -11, -15, -20, -22),
    10: (21, 16, 9, 2, -2, -9, -15, -22, -27, -31, -37, -43),
    15: (16, 11, 1, -6, -11, -18, -25, -33, -40, -45, -51, -58),
    20: (12, 3, -4, -9, -17, -24, -32, -40, -46, -52, -58, -64),
    25: (7, 0, -7, -15, -22, -29, -37, -45, -52, -58, -65, -72),
    30: (5, -2, -11, -18, -26, -33, -41, -49, -56, -63, -70, -78),
    35: (3, -4, -13, -20, -27, -35, -43, -52, -60, -67, -75, -82),
    40: (1, -4, -15, -22, -29, -36, -45, -54, -62, -69, -76, -83),
    45: (1, -6, -17, -24, -31, -38, -46, -55, -63, -70, -77, -84),
    50: (0, -7, -17, -24, -31, -38, -47, -56, -64, -71, -78, -85),
    55: (-1, -8, -19, -25, -33, -39, -48, -57, -65, -72, -79, -86),
    60: (-3, -10, -21, -27, -34, -40, -49, -58, -66, -73, -80, -87),
}

# wind speed (mph) -> temperature (°F) -> felt temperature
WIND_CHILL_TABLE: dict[int, dict[int, int]] = {
    speed: dict(zip(WIND_CHILL_TEMPERATURES, row)) for speed, row in _WIND_CHILL_ROWS.items()
}

# Wind chill only applies below this low temperature
WIND_CHILL_THRESHOLD = 35
