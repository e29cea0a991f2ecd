"""
Decklist Formatter.

Renders parsed entries back to decklist text. The output is the clean
form of what the parser reads, so parsing formatted text returns the
same entries.
"""

from collections.abc import Iterable

from manaprism.models.decklist import DeckEntry, ParsedEntry


def format_decklist(entries: Iterable[ParsedEntry | DeckEntry]) -> str:
    """
    Format entries as decklist text, one card per line.

    Args:
        entries: Parsed entries or resolved deck entries

    Returns:
        Text such as "4 Lightning Bolt\\n2 Sol Ring (C21)"
    """
    return "\n".join(_format_card_line(entry) for entry in entries)


def _format_card_line(entry: ParsedEntry | DeckEntry) -> str:
    """Format a single card line."""
    if entry.set_code:
        return f"{entry.quantity} {entry.name} ({entry.set_code})"
    return f"{entry.quantity} {entry.name}"
