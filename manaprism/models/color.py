"""
MTG Color Constants and Ordering.

The five colors of Magic, the canonical WUBRG order, and the name lattice
for every color combination (guilds, shards, wedges, four-color nephilim).

INVARIANTS:
- A ColorSet is always a tuple in WUBRG order with no duplicates
- Colorless is the EMPTY color set, never a sixth color
- canonical_key() is the set identity: equal keys <=> equal sets
"""

from collections.abc import Iterable
from enum import Enum


class Color(str, Enum):
    """One of the five colors of Magic. Compares equal to its letter."""

    WHITE = "W"
    BLUE = "U"
    BLACK = "B"
    RED = "R"
    GREEN = "G"

    @property
    def display_name(self) -> str:
        return COLOR_NAMES[self]


# A color set in canonical order
ColorSet = tuple[Color, ...]

# Color order for consistent sorting (WUBRG)
COLOR_ORDER: ColorSet = (Color.WHITE, Color.BLUE, Color.BLACK, Color.RED, Color.GREEN)

_ORDER_INDEX: dict[Color, int] = {color: i for i, color in enumerate(COLOR_ORDER)}

COLOR_NAMES: dict[Color, str] = {
    Color.WHITE: "White",
    Color.BLUE: "Blue",
    Color.BLACK: "Black",
    Color.RED: "Red",
    Color.GREEN: "Green",
}

# Colorless has a display code but is not a Color
COLORLESS_CODE = "C"
COLORLESS_NAME = "Colorless"

# =============================================================================
# NAME LATTICE (keyed by canonical key)
# =============================================================================

COLOR_PAIR_NAMES: dict[str, str] = {
    "WU": "Azorius",
    "UB": "Dimir",
    "BR": "Rakdos",
    "RG": "Gruul",
    "WG": "Selesnya",
    "WB": "Orzhov",
    "UR": "Izzet",
    "BG": "Golgari",
    "WR": "Boros",
    "UG": "Simic",
}

COLOR_TRIO_NAMES: dict[str, str] = {
    # Shards
    "WUB": "Esper",
    "UBR": "Grixis",
    "BRG": "Jund",
    "WRG": "Naya",
    "WUG": "Bant",
    # Wedges
    "WBG": "Abzan",
    "WUR": "Jeskai",
    "UBG": "Sultai",
    "WBR": "Mardu",
    "URG": "Temur",
}

# Four-color combinations are named by the color they leave out
COLOR_QUAD_NAMES: dict[str, str] = {
    "WUBR": "Yore-Tiller (Non-Green)",
    "WUBG": "Witch-Maw (Non-Red)",
    "WURG": "Ink-Treader (Non-Black)",
    "WBRG": "Dune-Brood (Non-Blue)",
    "UBRG": "Glint-Eye (Non-White)",
}

FIVE_COLOR_NAME = "Five Color"


def parse_color(symbol: str | Color) -> Color | None:
    """
    Interpret a single color symbol.

    Accepts Color members or one-letter codes in either case.
    Returns None for anything outside WUBRG.
    """
    if isinstance(symbol, Color):
        return symbol
    if not isinstance(symbol, str):
        return None
    try:
        return Color(symbol.strip().upper())
    except ValueError:
        return None


def normalize_colors(
    colors: Iterable[str | Color] | None,
    strict: bool = False,
) -> ColorSet:
    """
    Normalize any collection of color symbols to a canonical ColorSet.

    Duplicates are dropped and the result is sorted in WUBRG order.
    None is treated as the empty set.

    Args:
        colors: Color members or letter codes, in any order
        strict: Raise on symbols outside WUBRG instead of ignoring them

    Returns:
        Tuple of Color in canonical order

    Raises:
        ValueError: If strict and a symbol is not one of the five colors
    """
    if not colors:
        return ()

    found: set[Color] = set()
    for symbol in colors:
        color = parse_color(symbol)
        if color is None:
            if strict:
                raise ValueError(f"Unknown color symbol: {symbol!r}")
            continue
        found.add(color)

    return tuple(sorted(found, key=_ORDER_INDEX.__getitem__))


def canonical_key(colors: Iterable[str | Color] | None) -> str:
    """
    Get the canonical key for a color set.

    Members are concatenated in WUBRG order, e.g. {G, W, U} -> "WUG".
    The empty set (or None) is "C".
    """
    normalized = normalize_colors(colors)
    if not normalized:
        return COLORLESS_CODE
    return "".join(color.value for color in normalized)


def display_name(colors: Iterable[str | Color] | None) -> str:
    """
    Get the display name for a color combination.

    Examples: () -> "Colorless", (R,) -> "Mono Red", (W, U) -> "Azorius",
    (W, U, B, R, G) -> "Five Color". Unknown combinations fall back to
    the canonical key.
    """
    normalized = normalize_colors(colors)
    key = canonical_key(normalized)

    if len(normalized) == 0:
        return COLORLESS_NAME
    if len(normalized) == 1:
        return f"Mono {COLOR_NAMES[normalized[0]]}"
    if len(normalized) == 2:
        return COLOR_PAIR_NAMES.get(key, key)
    if len(normalized) == 3:
        return COLOR_TRIO_NAMES.get(key, key)
    if len(normalized) == 4:
        return COLOR_QUAD_NAMES.get(key, key)
    if len(normalized) == 5:
        return FIVE_COLOR_NAME
    return key
