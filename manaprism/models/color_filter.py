"""
Color Filter Predicates.

Filters select cards by color identity for commander-style browsing.

INVARIANTS:
- colorless => 0 colors, mono => 1 color, exact => 2+ colors
- "exact" means SET EQUALITY, not subset: an Esper card does not match
  an Azorius filter
- Filter identity is its id; two filters with the same id are the same
  filter for toggling
- An empty filter list matches everything
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum

from manaprism.models.color import (
    COLOR_NAMES,
    COLORLESS_NAME,
    Color,
    ColorSet,
    canonical_key,
    display_name,
    normalize_colors,
)
from manaprism.models.failure import FilterConstructionError


class FilterType(str, Enum):
    """How a filter compares its colors to a card's colors."""

    COLORLESS = "colorless"
    MONO = "mono"
    EXACT = "exact"


@dataclass(frozen=True, slots=True)
class ColorFilter:
    """
    An immutable color filter.

    Attributes:
        type: How the filter matches
        colors: Filter colors in canonical order
        label: Human-readable name ("Mono Red", "Azorius", ...)
        id: Stable identifier ("colorless", "mono-R", "exact-WU")
    """

    type: FilterType
    colors: ColorSet
    label: str
    id: str

    @property
    def key(self) -> str:
        """Canonical key of the filter colors."""
        return canonical_key(self.colors)


def create_filter(
    filter_type: FilterType | str,
    colors: Iterable[str | Color] | None = (),
) -> ColorFilter:
    """
    Create a color filter.

    Args:
        filter_type: "colorless", "mono" or "exact"
        colors: Filter colors in any order

    Returns:
        ColorFilter with canonical colors, label and id

    Raises:
        FilterConstructionError: If the type is unknown, a color symbol is
            invalid, or the color count violates the type's invariant
    """
    raw_colors = tuple(colors or ())
    type_name = filter_type.value if isinstance(filter_type, FilterType) else str(filter_type)

    try:
        ftype = FilterType(type_name)
    except ValueError:
        raise FilterConstructionError(type_name, raw_colors, "unknown filter type") from None

    try:
        normalized = normalize_colors(raw_colors, strict=True)
    except ValueError as e:
        raise FilterConstructionError(ftype.value, raw_colors, str(e)) from e

    count = len(normalized)
    if ftype is FilterType.COLORLESS:
        if count != 0:
            raise FilterConstructionError(ftype.value, raw_colors, "takes no colors")
        return ColorFilter(type=ftype, colors=(), label=COLORLESS_NAME, id="colorless")

    if ftype is FilterType.MONO:
        if count != 1:
            raise FilterConstructionError(ftype.value, raw_colors, "takes exactly one color")
        color = normalized[0]
        return ColorFilter(
            type=ftype,
            colors=normalized,
            label=f"Mono {COLOR_NAMES[color]}",
            id=f"mono-{color.value}",
        )

    if count < 2:
        raise FilterConstructionError(ftype.value, raw_colors, "takes two or more colors")
    return ColorFilter(
        type=ftype,
        colors=normalized,
        label=display_name(normalized),
        id=f"exact-{canonical_key(normalized)}",
    )


def matches(card_colors: Iterable[str | Color] | None, color_filter: ColorFilter) -> bool:
    """
    Check if a card's color identity matches a filter.

    Args:
        card_colors: Card color identity; None is treated as colorless
        color_filter: Filter to check against

    Returns:
        True if the card matches. Order of card_colors is irrelevant.
    """
    colors = normalize_colors(card_colors)

    if color_filter.type is FilterType.COLORLESS:
        return len(colors) == 0
    if color_filter.type is FilterType.MONO:
        return len(colors) == 1 and colors[0] == color_filter.colors[0]
    if color_filter.type is FilterType.EXACT:
        # Both sides are canonical, so tuple equality is set equality
        return colors == color_filter.colors
    return False


def matches_any(
    card_colors: Iterable[str | Color] | None,
    filters: Sequence[ColorFilter] | None,
) -> bool:
    """
    Check if a card matches at least one filter (OR logic).

    No active filters means everything passes.
    """
    if not filters:
        return True
    colors = normalize_colors(card_colors)
    return any(matches(colors, f) for f in filters)


# =============================================================================
# PRESETS
# =============================================================================

_PRESET_DEFINITIONS: tuple[tuple[FilterType, str], ...] = (
    # Colorless
    (FilterType.COLORLESS, ""),
    # Mono colors
    (FilterType.MONO, "W"),
    (FilterType.MONO, "U"),
    (FilterType.MONO, "B"),
    (FilterType.MONO, "R"),
    (FilterType.MONO, "G"),
    # Two-color (guilds)
    (FilterType.EXACT, "WU"),
    (FilterType.EXACT, "UB"),
    (FilterType.EXACT, "BR"),
    (FilterType.EXACT, "RG"),
    (FilterType.EXACT, "GW"),
    (FilterType.EXACT, "WB"),
    (FilterType.EXACT, "UR"),
    (FilterType.EXACT, "BG"),
    (FilterType.EXACT, "RW"),
    (FilterType.EXACT, "GU"),
    # Three-color (shards, then wedges)
    (FilterType.EXACT, "WUB"),
    (FilterType.EXACT, "UBR"),
    (FilterType.EXACT, "BRG"),
    (FilterType.EXACT, "RGW"),
    (FilterType.EXACT, "GWU"),
    (FilterType.EXACT, "WBG"),
    (FilterType.EXACT, "URW"),
    (FilterType.EXACT, "BGU"),
    (FilterType.EXACT, "RWB"),
    (FilterType.EXACT, "GUR"),
)

_PRESETS: tuple[ColorFilter, ...] = tuple(
    create_filter(ftype, tuple(letters)) for ftype, letters in _PRESET_DEFINITIONS
)


def preset_filters() -> list[ColorFilter]:
    """
    Predefined filters for the UI.

    Colorless, the five monos, the ten guilds, then the ten shards and
    wedges. Returns a new list on each call.
    """
    return list(_PRESETS)


def get_preset_filter(filter_id: str) -> ColorFilter | None:
    """Look up a preset filter by id."""
    for preset in _PRESETS:
        if preset.id == filter_id:
            return preset
    return None
