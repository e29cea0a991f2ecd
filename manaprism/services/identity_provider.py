"""
Color identity providers.

A provider answers one question: what is this card's color identity?
The resolver owns caching, deduplication and rate limiting; providers
just look things up and raise IdentityLookupError when they cannot.

Implementations:
- ScryfallIdentityProvider: live lookups against the Scryfall API
  (exact name first, fuzzy name as fallback)
- CardDatabaseIdentityProvider: offline lookups against a loaded
  Scryfall bulk card database
"""

import logging
from collections.abc import Mapping
from typing import Any, Protocol

import httpx

from manaprism.config import settings
from manaprism.models.color import ColorSet, normalize_colors
from manaprism.models.failure import FailureKind, KnownError

logger = logging.getLogger(__name__)

DOUBLE_FACE_SEPARATOR = "//"


class IdentityLookupError(KnownError):
    """
    Raised when a provider cannot determine a card's color identity.

    Kind is EXTERNAL_API_ERROR unless the provider knows better: a card
    that does not exist is NOT_FOUND, a blank name is INVALID_INPUT.
    """

    def __init__(
        self,
        card_name: str,
        reason: str,
        kind: FailureKind = FailureKind.EXTERNAL_API_ERROR,
    ) -> None:
        self.card_name = card_name
        self.reason = reason
        super().__init__(
            kind=kind,
            message=f"Color identity lookup failed for {card_name!r}: {reason}",
            detail=reason,
        )


class IdentityProvider(Protocol):
    """Capability: map a card name to its color identity."""

    async def lookup(self, name: str) -> ColorSet:
        """
        Look up a card's color identity.

        Args:
            name: Raw card name as the caller has it

        Returns:
            Color identity in canonical order (empty for colorless)

        Raises:
            IdentityLookupError: If the card cannot be found or the
                lookup fails
        """
        ...


def front_face_name(name: str) -> str:
    """Name of the front face of a split or double-faced card."""
    return name.split(DOUBLE_FACE_SEPARATOR, 1)[0].strip()


def extract_color_identity(card: Mapping[str, Any]) -> ColorSet:
    """
    Extract color identity from Scryfall card data.

    Args:
        card: Card data dict with a color_identity field

    Returns:
        Canonical color set, empty if the field is missing
    """
    return normalize_colors(card.get("color_identity") or [])


class ScryfallIdentityProvider:
    """
    Looks up color identity with the Scryfall named-card endpoint.

    Tries `cards/named?exact=` first and falls back to `cards/named?fuzzy=`
    when the exact lookup does not succeed. Complies with Scryfall's
    request headers policy; rate limiting is left to the resolver.
    """

    def __init__(
        self,
        base_url: str | None = None,
        user_agent: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize the provider.

        Args:
            base_url: Scryfall API root
            user_agent: User-Agent header value
            timeout: Per-request timeout in seconds
            client: Shared client to use instead of one per lookup
        """
        self.base_url = (base_url or settings.scryfall_api_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.identity_lookup_timeout_s
        self.headers = {
            "User-Agent": user_agent or settings.scryfall_user_agent,
            "Accept": "application/json",
        }
        self._client = client

    async def lookup(self, name: str) -> ColorSet:
        """Look up a card by exact name, then by fuzzy name."""
        query_name = front_face_name(name)
        if not query_name:
            raise IdentityLookupError(name, "empty card name", FailureKind.INVALID_INPUT)

        try:
            if self._client is not None:
                return await self._lookup_with(self._client, name, query_name)
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                return await self._lookup_with(client, name, query_name)
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            kind = FailureKind.NOT_FOUND if status == 404 else FailureKind.EXTERNAL_API_ERROR
            raise IdentityLookupError(name, f"HTTP {status}", kind) from e
        except httpx.RequestError as e:
            raise IdentityLookupError(name, str(e) or type(e).__name__) from e

    async def _lookup_with(
        self,
        client: httpx.AsyncClient,
        name: str,
        query_name: str,
    ) -> ColorSet:
        url = f"{self.base_url}/cards/named"

        response = await client.get(
            url, params={"exact": query_name}, headers=self.headers, timeout=self.timeout
        )
        if not response.is_success:
            logger.debug(
                "Exact lookup for %r returned HTTP %d, trying fuzzy",
                query_name,
                response.status_code,
            )
            response = await client.get(
                url, params={"fuzzy": query_name}, headers=self.headers, timeout=self.timeout
            )
            response.raise_for_status()

        try:
            data = response.json()
        except ValueError as e:
            raise IdentityLookupError(name, "response was not JSON") from e

        return extract_color_identity(data)


class CardDatabaseIdentityProvider:
    """
    Looks up color identity in a loaded Scryfall card database.

    Matches exact name first, then case-insensitive name, then the front
    face of split and double-faced cards.
    """

    def __init__(self, card_db: Mapping[str, Mapping[str, Any]]) -> None:
        """
        Initialize provider with a card database.

        Args:
            card_db: Scryfall card database {name: card_data}
        """
        self._card_db = card_db
        self._by_lower_name = self._build_name_index()

    def _build_name_index(self) -> dict[str, str]:
        """Index lowercased full names and front-face names to db keys."""
        index: dict[str, str] = {}
        for card_name in self._card_db:
            index.setdefault(card_name.lower(), card_name)
            front = front_face_name(card_name).lower()
            if front:
                index.setdefault(front, card_name)
        return index

    async def lookup(self, name: str) -> ColorSet:
        card = self._card_db.get(name)
        if card is None:
            db_name = self._by_lower_name.get(name.strip().lower()) or self._by_lower_name.get(
                front_face_name(name).lower()
            )
            if db_name is None:
                raise IdentityLookupError(
                    name, "card not found in card database", FailureKind.NOT_FOUND
                )
            card = self._card_db[db_name]
        return extract_color_identity(card)
