"""
Decklist ingest.

Text in, Deck out: parse the decklist, resolve every distinct card's color
identity through the shared resolver, and assemble a Deck.

Only an empty parse is an error. Cards whose identity could not be found
come through with no colors, as the resolver caches them.
"""

import logging

from manaprism.models.decklist import Deck, DeckEntry
from manaprism.models.failure import EmptyDecklistError
from manaprism.parsers.decklist import parse_decklist
from manaprism.services.identity_resolver import IdentityResolver

logger = logging.getLogger(__name__)

DEFAULT_DECK_NAME = "Imported Deck"


async def ingest_decklist(
    text: str,
    resolver: IdentityResolver,
    name: str | None = None,
    format: str | None = None,
) -> Deck:
    """
    Build a Deck from decklist text.

    Args:
        text: Raw decklist text
        resolver: Identity resolver (its batching and rate limit apply)
        name: Deck name, defaults to "Imported Deck"
        format: Format label, stored as given

    Returns:
        Deck with one entry per parsed line, in decklist order

    Raises:
        EmptyDecklistError: If no card entries could be parsed
    """
    entries = parse_decklist(text)
    if not entries:
        line_count = len(text.split("\n")) if isinstance(text, str) and text else 0
        raise EmptyDecklistError(line_count)

    identities = await resolver.resolve_many(entry.name for entry in entries)

    deck = Deck(
        name=name or DEFAULT_DECK_NAME,
        format=format,
        entries=[
            DeckEntry(
                name=entry.name,
                set_code=entry.set_code,
                quantity=entry.quantity,
                colors=identities.get(entry.name, ()),
            )
            for entry in entries
        ],
    )

    logger.info(
        "Ingested deck %r: %d entries, %d cards, identity %s",
        deck.name,
        len(deck.entries),
        deck.total_cards,
        deck.color_identity_name,
    )
    return deck
