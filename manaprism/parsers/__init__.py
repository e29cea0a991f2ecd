from manaprism.parsers.decklist import DecklistParser, parse_decklist

__all__ = [
    "DecklistParser",
    "parse_decklist",
]
