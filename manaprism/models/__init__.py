from manaprism.models.color import (
    COLOR_ORDER,
    COLOR_PAIR_NAMES,
    COLOR_QUAD_NAMES,
    COLOR_TRIO_NAMES,
    COLORLESS_CODE,
    COLORLESS_NAME,
    FIVE_COLOR_NAME,
    Color,
    ColorSet,
    canonical_key,
    display_name,
    normalize_colors,
)
from manaprism.models.color_filter import (
    ColorFilter,
    FilterType,
    create_filter,
    get_preset_filter,
    matches,
    matches_any,
    preset_filters,
)
from manaprism.models.decklist import Deck, DeckEntry, ParsedEntry
from manaprism.models.failure import (
    EmptyDecklistError,
    FailureDetail,
    FailureKind,
    FilterConstructionError,
    KnownError,
)

__all__ = [
    "COLORLESS_CODE",
    "COLORLESS_NAME",
    "COLOR_ORDER",
    "COLOR_PAIR_NAMES",
    "COLOR_QUAD_NAMES",
    "COLOR_TRIO_NAMES",
    "Color",
    "ColorFilter",
    "ColorSet",
    "Deck",
    "DeckEntry",
    "EmptyDecklistError",
    "FIVE_COLOR_NAME",
    "FailureDetail",
    "FailureKind",
    "FilterConstructionError",
    "FilterType",
    "KnownError",
    "ParsedEntry",
    "canonical_key",
    "create_filter",
    "display_name",
    "get_preset_filter",
    "matches",
    "matches_any",
    "normalize_colors",
    "preset_filters",
]
