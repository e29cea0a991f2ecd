from dataclasses import dataclass, field

from manaprism.models.color import ColorSet, display_name, normalize_colors


@dataclass(frozen=True, slots=True)
class ParsedEntry:
    """
    A card line read from decklist text.

    Attributes:
        quantity: Number of copies (always >= 1)
        name: Card name, trimmed. Split and double-faced cards keep " // "
        set_code: Upper-cased set code (e.g., "MH2"), None if absent
    """

    quantity: int
    name: str
    set_code: str | None = None


@dataclass(frozen=True, slots=True)
class DeckEntry:
    """A parsed card paired with its resolved color identity."""

    name: str
    set_code: str | None
    quantity: int
    colors: ColorSet = ()


@dataclass
class Deck:
    """
    A deck assembled from decklist text.

    Attributes:
        name: Deck name
        format: Format label as given by the caller (not validated)
        entries: Card entries in decklist order
    """

    name: str
    format: str | None = None
    entries: list[DeckEntry] = field(default_factory=list)

    @property
    def total_cards(self) -> int:
        """Total number of cards, counting copies."""
        return sum(entry.quantity for entry in self.entries)

    @property
    def color_identity(self) -> ColorSet:
        """Union of every entry's colors, in canonical order."""
        return normalize_colors(color for entry in self.entries for color in entry.colors)

    @property
    def color_identity_name(self) -> str:
        """Display name of the deck's color identity (e.g., "Izzet")."""
        return display_name(self.color_identity)
