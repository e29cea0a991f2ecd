"""
Reactive Color Filter Driver.

Turns (collection, active filters, resolved identities) into a filtered
view, and keeps the resolver busy with whatever the view still needs.

INVARIANTS:
- The filtered view is a subsequence of the input, order preserved
- The input collection is never mutated
- Disabled or no filters => the input passes through unchanged
- UNKNOWN colors INCLUDE the card: cards still resolving stay visible
  so the view does not collapse and pop back
- A frame whose names or filters changed cancels the previous batch
  wait; identities that batch already cached stay cached
- Blank names are not card names and are never scheduled
- Only the current frame's batch fires on_update
"""

import asyncio
import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from manaprism.models.color import ColorSet
from manaprism.models.color_filter import ColorFilter, matches_any
from manaprism.services.identity_resolver import IdentityResolver, normalize_card_name

logger = logging.getLogger(__name__)

# Returns a card's colors, or None while they are unknown
ColorLookup = Callable[[str], ColorSet | None]


@dataclass(frozen=True)
class LoadingProgress:
    """Names resolved so far out of the names the current batch fetches."""

    loaded: int = 0
    total: int = 0


@dataclass(frozen=True)
class FilterView:
    """
    One frame of filter output.

    Attributes:
        filtered: Records that pass the active filters, in input order
        loading: True while identities for this frame are being resolved
        color_snapshot: Known identities for the frame's card names
        pending_count: Number of card names still unresolved
        progress: Window-by-window progress of the in-flight batch
    """

    filtered: list[Any]
    loading: bool
    color_snapshot: dict[str, ColorSet] = field(default_factory=dict)
    pending_count: int = 0
    progress: LoadingProgress = field(default_factory=LoadingProgress)


def record_name(record: Any) -> str | None:
    """
    Card name of a record: a mapping with "name" or an object with .name.

    Names that normalize to nothing ("   ", "// Ice") count as missing.
    """
    if isinstance(record, Mapping):
        name = record.get("name")
    else:
        name = getattr(record, "name", None)
    if isinstance(name, str) and normalize_card_name(name):
        return name
    return None


def unique_card_names(collection: Sequence[Any]) -> list[str]:
    """Distinct card names in first-seen order."""
    names: dict[str, None] = {}
    for record in collection:
        name = record_name(record)
        if name is not None:
            names.setdefault(name, None)
    return list(names)


def apply_color_filters(
    collection: Sequence[Any],
    filters: Sequence[ColorFilter],
    lookup: ColorLookup,
) -> list[Any]:
    """
    Filter a collection by color identity.

    Pure: depends only on its arguments.

    Args:
        collection: Card records with a name
        filters: Active filters (OR semantics); empty keeps everything
        lookup: Known colors for a name, None if not resolved yet

    Returns:
        Records that pass, in input order
    """
    if not filters:
        return list(collection)

    kept: list[Any] = []
    for record in collection:
        name = record_name(record)
        if name is None:
            continue
        colors = lookup(name)
        if colors is None or matches_any(colors, filters):
            kept.append(record)
    return kept


def toggle_filter(current: Sequence[ColorFilter], color_filter: ColorFilter) -> list[ColorFilter]:
    """
    Toggle a filter by id.

    Returns a new list without the filter if one with the same id is
    active, otherwise with the filter appended.
    """
    if any(f.id == color_filter.id for f in current):
        return [f for f in current if f.id != color_filter.id]
    return [*current, color_filter]


def is_filter_active(current: Sequence[ColorFilter], filter_id: str) -> bool:
    """Check if a filter with this id is active."""
    return any(f.id == filter_id for f in current)


def clear_filters() -> list[ColorFilter]:
    """An empty filter selection."""
    return []


class ColorFilterDriver:
    """
    Computes filtered views and schedules identity resolution.

    Call filter_view() once per frame from inside the event loop. When a
    scheduled batch finishes, on_update fires so the host can render the
    next frame.

    Usage:
        driver = ColorFilterDriver(resolver, on_update=request_render)
        view = driver.filter_view(cards, [create_filter("mono", ["R"])])
        # or, without a render loop:
        view = await driver.refresh(cards, filters)
    """

    def __init__(
        self,
        resolver: IdentityResolver,
        on_update: Callable[[], None] | None = None,
    ) -> None:
        self._resolver = resolver
        self._on_update = on_update
        self._batch: asyncio.Task[dict[str, ColorSet]] | None = None
        self._batch_signature: tuple[tuple[str, ...], tuple[str, ...]] | None = None
        self._progress = LoadingProgress()

    @property
    def loading(self) -> bool:
        """True while a batch is in flight."""
        return self._batch is not None and not self._batch.done()

    @property
    def progress(self) -> LoadingProgress:
        """Progress of the current batch, (0, 0) when there is none."""
        return self._progress

    def filter_view(
        self,
        collection: Sequence[Any],
        filters: Sequence[ColorFilter],
        enabled: bool = True,
    ) -> FilterView:
        """
        Compute one frame.

        Args:
            collection: Card records (not mutated)
            filters: Active filters, in selection order
            enabled: Whether color filtering is on at all

        Returns:
            FilterView for this frame
        """
        if not enabled or not filters:
            self.cancel()
            return FilterView(filtered=list(collection), loading=False)

        names = unique_card_names(collection)
        snapshot: dict[str, ColorSet] = {}
        unresolved: list[str] = []
        for name in names:
            colors = self._resolver.peek(name)
            if colors is None:
                unresolved.append(name)
            else:
                snapshot[name] = colors

        if unresolved:
            signature = (tuple(names), tuple(f.id for f in filters))
            self._schedule(unresolved, signature)
        else:
            self.cancel()

        filtered = apply_color_filters(collection, filters, snapshot.get)
        return FilterView(
            filtered=filtered,
            loading=bool(unresolved),
            color_snapshot=snapshot,
            pending_count=len(unresolved),
            progress=self._progress,
        )

    async def refresh(
        self,
        collection: Sequence[Any],
        filters: Sequence[ColorFilter],
        enabled: bool = True,
    ) -> FilterView:
        """
        Compute a frame, wait for its resolution, and compute it again.

        Raises:
            asyncio.CancelledError: If a newer frame superseded this one
                while it was waiting
        """
        view = self.filter_view(collection, filters, enabled)
        if view.loading and self._batch is not None:
            await self._batch
        return self.filter_view(collection, filters, enabled)

    def cancel(self) -> None:
        """Stop waiting on the in-flight batch. Lookups already started finish."""
        if self._batch is not None and not self._batch.done():
            logger.debug("Cancelling identity batch for a superseded frame")
            self._batch.cancel()
        self._batch = None
        self._batch_signature = None
        self._progress = LoadingProgress()

    def _schedule(
        self,
        names: list[str],
        signature: tuple[tuple[str, ...], tuple[str, ...]],
    ) -> None:
        """Start a batch for this frame unless one is already running for it."""
        if self.loading and self._batch_signature == signature:
            return

        self.cancel()
        loop = asyncio.get_running_loop()
        batch = loop.create_task(
            self._resolver.resolve_many(names, on_progress=self._progress_recorder(signature))
        )
        batch.add_done_callback(self._batch_done)
        self._batch = batch
        self._batch_signature = signature
        self._progress = LoadingProgress(loaded=0, total=len(names))
        logger.debug("Scheduled identity batch for %d card names", len(names))

    def _progress_recorder(
        self,
        signature: tuple[tuple[str, ...], tuple[str, ...]],
    ) -> Callable[[int, int], None]:
        def record(loaded: int, total: int) -> None:
            if self._batch_signature == signature:
                self._progress = LoadingProgress(loaded=loaded, total=total)

        return record

    def _batch_done(self, batch: asyncio.Task[dict[str, ColorSet]]) -> None:
        # Finished batches can still be replaced before this callback runs
        if batch is not self._batch or batch.cancelled():
            return
        error = batch.exception()
        if error is not None:
            logger.error("Identity batch failed: %s", error)
            return
        if self._on_update is not None:
            self._on_update()
