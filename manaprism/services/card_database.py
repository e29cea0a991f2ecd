"""
Card database loading.

Reads a Scryfall bulk data file (oracle-cards or default-cards JSON) into
a {name: card_data} mapping that CardDatabaseIdentityProvider can serve
color identities from without touching the network.
"""

import json
import logging
from pathlib import Path
from typing import Any

from manaprism.services.identity_provider import CardDatabaseIdentityProvider

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).parent.parent / "data"
DEFAULT_CARD_FILE = DATA_DIR / "oracle-cards.json"


def load_card_database(path: Path | None = None) -> dict[str, dict[str, Any]]:
    """
    Load card database from a Scryfall bulk data file.

    Args:
        path: Path to JSON file. Defaults to data/oracle-cards.json

    Returns:
        Dict mapping card names to card data (first printing wins).

    Raises:
        FileNotFoundError: If database file doesn't exist
    """
    if path is None:
        path = DEFAULT_CARD_FILE

    if not path.exists():
        raise FileNotFoundError(
            f"Card database not found at {path}. "
            "Download oracle-cards from https://scryfall.com/docs/api/bulk-data first."
        )

    with open(path, encoding="utf-8") as f:
        cards = json.load(f)

    db: dict[str, dict[str, Any]] = {}
    for card in cards:
        name = card.get("name")
        if name and name not in db:
            db[name] = card

    logger.info("Loaded %d cards from %s", len(db), path)
    return db


def load_identity_provider(path: Path | None = None) -> CardDatabaseIdentityProvider:
    """Build an offline identity provider from a bulk data file."""
    return CardDatabaseIdentityProvider(load_card_database(path))
