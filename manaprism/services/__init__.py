from manaprism.services.card_database import load_card_database, load_identity_provider
from manaprism.services.deck_ingest import ingest_decklist
from manaprism.services.decklist_formatter import format_decklist
from manaprism.services.filter_driver import (
    ColorFilterDriver,
    FilterView,
    LoadingProgress,
    apply_color_filters,
    clear_filters,
    is_filter_active,
    toggle_filter,
)
from manaprism.services.identity_provider import (
    CardDatabaseIdentityProvider,
    IdentityLookupError,
    IdentityProvider,
    ScryfallIdentityProvider,
)
from manaprism.services.identity_resolver import (
    IdentityResolver,
    ResolverStats,
    get_identity_resolver,
    normalize_card_name,
)
from manaprism.services.search_scoring import ScoredMatch, rank_matches, score_match

__all__ = [
    "CardDatabaseIdentityProvider",
    "ColorFilterDriver",
    "FilterView",
    "IdentityLookupError",
    "IdentityProvider",
    "IdentityResolver",
    "LoadingProgress",
    "ResolverStats",
    "ScoredMatch",
    "ScryfallIdentityProvider",
    "apply_color_filters",
    "clear_filters",
    "format_decklist",
    "get_identity_resolver",
    "ingest_decklist",
    "is_filter_active",
    "load_card_database",
    "load_identity_provider",
    "normalize_card_name",
    "rank_matches",
    "score_match",
    "toggle_filter",
]
