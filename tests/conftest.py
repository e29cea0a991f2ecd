import asyncio
from collections.abc import Iterable

import pytest

from manaprism.models.color import ColorSet, normalize_colors
from manaprism.services.identity_provider import IdentityLookupError
from manaprism.services.identity_resolver import IdentityResolver


class FakeIdentityProvider:
    """
    In-memory identity provider that records every call.

    Unknown names raise IdentityLookupError, like a 404 from Scryfall.
    """

    def __init__(
        self,
        identities: dict[str, Iterable[str]] | None = None,
        delay: float = 0.0,
        fail_names: Iterable[str] = (),
    ) -> None:
        self.identities = {
            name.lower(): normalize_colors(colors) for name, colors in (identities or {}).items()
        }
        self.delay = delay
        self.fail_names = {name.lower() for name in fail_names}
        self.calls: list[str] = []
        self.call_times: list[float] = []

    async def lookup(self, name: str) -> ColorSet:
        self.calls.append(name)
        self.call_times.append(asyncio.get_running_loop().time())
        if self.delay:
            await asyncio.sleep(self.delay)
        key = name.split("//")[0].strip().lower()
        if key in self.fail_names:
            raise IdentityLookupError(name, "service unavailable")
        if key not in self.identities:
            raise IdentityLookupError(name, "card not found")
        return self.identities[key]


@pytest.fixture
def card_identities() -> dict[str, list[str]]:
    """Color identities for a handful of well-known cards."""
    return {
        "Lightning Bolt": ["R"],
        "Counterspell": ["U"],
        "Sol Ring": [],
        "Fire": ["U", "R"],
        "Mountain": [],
        "Absorb": ["W", "U"],
        "Sphinx of the Steel Wind": ["W", "U", "B"],
        "Llanowar Elves": ["G"],
        "Lightning Helix": ["R", "W"],
    }


@pytest.fixture
def fake_provider(card_identities: dict[str, list[str]]) -> FakeIdentityProvider:
    return FakeIdentityProvider(card_identities)


@pytest.fixture
def fast_resolver(fake_provider: FakeIdentityProvider) -> IdentityResolver:
    """Resolver with no rate limit, for tests that are not about timing."""
    return IdentityResolver(fake_provider, rate_limit_ms=0)


@pytest.fixture
def sample_decklist() -> str:
    """Decklist mixing every line shape the parser accepts."""
    return """4 Lightning Bolt
2x Sol Ring (C21)
// this is a comment
1 Fire // Ice (MH2) 123

Mountain"""


@pytest.fixture
def provider_factory() -> type[FakeIdentityProvider]:
    """Build providers with custom identities, latency or failures."""
    return FakeIdentityProvider
