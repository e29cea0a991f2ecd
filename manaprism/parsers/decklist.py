"""
Decklist Parser.

Reads free-form decklist text, one card per line:

    4 Lightning Bolt
    2x Sol Ring (C21)
    // comments are skipped
    1 Fire // Ice (MH2) 123
    Mountain

The parser is TOTAL: any input produces a (possibly empty) list and it
never raises. Lines it cannot make sense of are dropped silently; callers
inspect the entry count.
"""

import re

from manaprism.models.decklist import ParsedEntry


class DecklistParser:
    """
    Parser for plain-text decklists.

    Usage:
        parser = DecklistParser()
        entries = parser.parse(raw_text)
    """

    # "4 Card Name", "4x Card Name", "4X Card Name"
    _QUANTITY_PATTERN = re.compile(r"^(\d+)\s*x?\s+(.+)$", re.IGNORECASE)

    # "Card Name (SET)" or "Card Name (SET) 123"
    _SET_CODE_PATTERN = re.compile(r"^(.+?)\s*\(\s*([A-Za-z0-9]{2,})\s*\)(?:\s+\S+)?$")

    _COMMENT_PREFIX = "//"

    # Section headers from Arena and Moxfield exports (lowercase)
    KNOWN_SECTIONS: frozenset[str] = frozenset(
        {
            "deck",
            "sideboard",
            "commander",
            "companion",
            "maybeboard",
        }
    )

    def parse(self, raw_input: str) -> list[ParsedEntry]:
        """
        Parse decklist text into entries.

        Args:
            raw_input: Decklist text with \\n or \\r\\n line endings

        Returns:
            Entries in input order
        """
        if not raw_input or not isinstance(raw_input, str):
            return []

        entries: list[ParsedEntry] = []
        for line in raw_input.split("\n"):
            entry = self._parse_line(line)
            if entry is not None:
                entries.append(entry)
        return entries

    def _parse_line(self, line: str) -> ParsedEntry | None:
        """Parse a single line. Returns None for skipped or malformed lines."""
        stripped = line.strip()

        if not stripped:
            return None
        if stripped.startswith(self._COMMENT_PREFIX):
            return None
        if self._is_section_header(stripped.lower()):
            return None

        match = self._QUANTITY_PATTERN.match(stripped)
        if not match:
            # Bare name, no quantity and no set code
            return ParsedEntry(quantity=1, name=stripped)

        quantity = int(match.group(1))
        if quantity < 1:
            return None

        name, set_code = self._split_set_code(match.group(2).strip())
        if not name:
            return None

        return ParsedEntry(quantity=quantity, name=name, set_code=set_code)

    def _split_set_code(self, remainder: str) -> tuple[str, str | None]:
        """Split a trailing "(SET) [collector#]" off the card name."""
        match = self._SET_CODE_PATTERN.match(remainder)
        if not match:
            return remainder, None
        return match.group(1).strip(), match.group(2).upper()

    def _is_section_header(self, line_lower: str) -> bool:
        """Check for "Sideboard", "Deck:", etc."""
        return line_lower.rstrip(":").strip() in self.KNOWN_SECTIONS


def parse_decklist(text: str) -> list[ParsedEntry]:
    """
    Parse decklist text.

    This is a convenience function that creates a parser and parses.

    Args:
        text: Raw decklist text

    Returns:
        Parsed entries in input order (possibly empty)
    """
    parser = DecklistParser()
    return parser.parse(text)
