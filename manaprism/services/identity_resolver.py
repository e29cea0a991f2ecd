"""
Color Identity Resolution Cache.

Serves color identity lookups for the whole process with:
- at most ONE provider call per normalized card name, ever
- a global minimum gap between provider call initiations
- permanent memoization of every answer, including failures

=============================================================================
CONCURRENCY MODEL
=============================================================================

The resolver runs on a single asyncio event loop. It takes no locks:
the sequence

    check resolved -> check pending -> reserve rate-limit slot -> register

contains no await, so no other coroutine can interleave with it. The
provider call runs in a background task that completes a shared future;
every caller awaits that future through asyncio.shield.

Cancelling a caller only stops that caller's wait. The provider call
keeps running and its result is cached for everyone else.

Provider failures are logged and cached as the EMPTY color set. Missing
data must never wedge a view that is filtering by color.
"""

import asyncio
import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from functools import lru_cache

from manaprism.config import DEFAULT_BATCH_SIZE, DEFAULT_RATE_LIMIT_MS, settings
from manaprism.models.color import Color, ColorSet, normalize_colors
from manaprism.services.identity_provider import (
    DOUBLE_FACE_SEPARATOR,
    IdentityProvider,
    ScryfallIdentityProvider,
)

logger = logging.getLogger(__name__)

# Receives (loaded, total) as resolve_many finishes each window
ProgressCallback = Callable[[int, int], None]


def normalize_card_name(name: str) -> str:
    """
    Normalize a card name to its cache key.

    Lowercased and trimmed; split and double-faced cards keep only the
    part before the first "//".
    """
    key = name.lower().strip()
    if DOUBLE_FACE_SEPARATOR in key:
        key = key.split(DOUBLE_FACE_SEPARATOR, 1)[0].strip()
    return key


@dataclass
class ResolverStats:
    """Counters recorded over the resolver's lifetime."""

    provider_calls: int = 0
    cache_hits: int = 0
    shared_waits: int = 0
    failures: int = 0


class IdentityResolver:
    """
    Deduplicating, rate-limited color identity cache.

    Usage:
        resolver = IdentityResolver(ScryfallIdentityProvider())
        colors = await resolver.resolve("Lightning Bolt")      # (Color.RED,)
        by_name = await resolver.resolve_many(["Sol Ring", "Counterspell"])
        resolver.peek("Sol Ring")                              # ()
    """

    def __init__(
        self,
        provider: IdentityProvider,
        rate_limit_ms: float = DEFAULT_RATE_LIMIT_MS,
        batch_size: int = DEFAULT_BATCH_SIZE,
    ) -> None:
        """
        Initialize resolver.

        Args:
            provider: Where identities come from
            rate_limit_ms: Minimum gap between provider call initiations
            batch_size: Concurrent lookups per resolve_many window
        """
        if batch_size < 1:
            raise ValueError(f"batch_size must be at least 1, got {batch_size}")
        if rate_limit_ms < 0:
            raise ValueError(f"rate_limit_ms must not be negative, got {rate_limit_ms}")

        self._provider = provider
        self.rate_limit_s = rate_limit_ms / 1000
        self.batch_size = batch_size

        self._resolved: dict[str, ColorSet] = {}
        self._pending: dict[str, asyncio.Future[ColorSet]] = {}
        self._last_request_at: float | None = None
        # Strong references so background lookups are not garbage-collected
        self._tasks: set[asyncio.Task[None]] = set()

        self.stats = ResolverStats()

    # =========================================================================
    # LOOKUPS
    # =========================================================================

    async def resolve(self, name: str) -> ColorSet:
        """
        Resolve one card's color identity.

        Returns immediately on a cache hit. Otherwise joins the in-flight
        lookup for the same card, or starts one.

        Args:
            name: Card name in any case; double-faced names are fine

        Returns:
            Color identity, empty for colorless cards and failed lookups

        Raises:
            asyncio.CancelledError: If the calling task is cancelled. The
                lookup itself continues in the background.
        """
        key = normalize_card_name(name)
        if not key:
            return ()

        cached = self._resolved.get(key)
        if cached is not None:
            self.stats.cache_hits += 1
            return cached

        future = self._pending.get(key)
        if future is None:
            future = self._start_lookup(key, name)
        else:
            self.stats.shared_waits += 1

        return await asyncio.shield(future)

    async def resolve_many(
        self,
        names: Iterable[str],
        on_progress: ProgressCallback | None = None,
    ) -> dict[str, ColorSet]:
        """
        Resolve many cards, a window of batch_size at a time.

        Cached names are answered first; the rest are resolved in windows
        that run concurrently (each lookup still respects the rate limit).

        Args:
            names: Card names; duplicates are looked up once
            on_progress: Called as (loaded, total) after each window, where
                total counts the names that were not cached

        Returns:
            Dict keyed by the input names. Cached names come first, then
            freshly resolved names in input order.
        """
        results: dict[str, ColorSet] = {}
        uncached: list[str] = []

        for name in dict.fromkeys(names):
            cached = self._resolved.get(normalize_card_name(name))
            if cached is not None:
                self.stats.cache_hits += 1
                results[name] = cached
            else:
                uncached.append(name)

        for start in range(0, len(uncached), self.batch_size):
            window = uncached[start : start + self.batch_size]
            colors = await asyncio.gather(*(self.resolve(name) for name in window))
            results.update(zip(window, colors, strict=True))
            logger.debug(
                "Resolved identity window %d-%d of %d",
                start + 1,
                start + len(window),
                len(uncached),
            )
            if on_progress is not None:
                on_progress(start + len(window), len(uncached))

        return results

    def peek(self, name: str) -> ColorSet | None:
        """
        Get a cached color identity without suspending.

        Returns:
            The cached identity, or None if the card is not resolved yet
        """
        return self._resolved.get(normalize_card_name(name))

    def is_pending(self, name: str) -> bool:
        """True while a provider call for this card is in flight."""
        return normalize_card_name(name) in self._pending

    # =========================================================================
    # PERSISTENCE HOOKS
    # =========================================================================

    def snapshot(self) -> dict[str, ColorSet]:
        """Copy of every resolved identity, keyed by normalized name."""
        return dict(self._resolved)

    def preload(self, identities: Mapping[str, Iterable[str | Color]]) -> int:
        """
        Seed the cache, e.g. from a snapshot the host persisted.

        Names already resolved keep their current value.

        Returns:
            Number of names added
        """
        added = 0
        for name, colors in identities.items():
            key = normalize_card_name(name)
            if key and key not in self._resolved:
                self._resolved[key] = normalize_colors(colors)
                added += 1
        return added

    # =========================================================================
    # INTERNALS
    # =========================================================================

    def _start_lookup(self, key: str, name: str) -> asyncio.Future[ColorSet]:
        """
        Reserve a rate-limit slot and start the background lookup.

        Must not await: it runs between the pending check and the pending
        insert.
        """
        loop = asyncio.get_running_loop()
        now = loop.time()

        if self._last_request_at is None:
            start_at = now
        else:
            start_at = max(now, self._last_request_at + self.rate_limit_s)
        self._last_request_at = start_at

        future: asyncio.Future[ColorSet] = loop.create_future()
        self._pending[key] = future

        task = loop.create_task(self._run_lookup(key, name, future, start_at - now))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

        return future

    async def _run_lookup(
        self,
        key: str,
        name: str,
        future: asyncio.Future[ColorSet],
        delay: float,
    ) -> None:
        """Wait for the reserved slot, call the provider, publish the result."""
        try:
            if delay > 0:
                await asyncio.sleep(delay)
            self.stats.provider_calls += 1
            colors = normalize_colors(await self._provider.lookup(name))
        except asyncio.CancelledError:
            # Event loop shutdown: nothing was learned, leave the name unresolved
            self._pending.pop(key, None)
            future.cancel()
            raise
        except Exception as e:
            self.stats.failures += 1
            logger.warning("Color identity lookup failed for %r, caching as colorless: %s", name, e)
            colors = ()

        self._resolved[key] = colors
        self._pending.pop(key, None)
        if not future.done():
            future.set_result(colors)


@lru_cache(maxsize=1)
def get_identity_resolver() -> IdentityResolver:
    """
    Get the process-wide resolver backed by Scryfall.

    Cached after first call.
    """
    return IdentityResolver(
        ScryfallIdentityProvider(),
        rate_limit_ms=settings.identity_rate_limit_ms,
        batch_size=settings.identity_batch_size,
    )
