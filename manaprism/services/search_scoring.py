"""
Card name search scoring.

Ranks candidate card names against a typed query. Tiers are checked in
order and the first that applies wins:

    exact                     1000
    starts with query          500
    multi-word ordered prefix  450   ("for w" -> "Force of Will")
    word starts with query     400   ("ring" -> "Sol Ring")
    substring                  100-199, earlier positions rank higher
    character subsequence       50   ("cnl" -> "Counterspell")
    no match                     0
"""

from collections.abc import Iterable
from dataclasses import dataclass

SCORE_EXACT = 1000
SCORE_STARTS_WITH = 500
SCORE_MULTI_WORD = 450
SCORE_WORD_BOUNDARY = 400
SCORE_SUBSTRING_MAX = 200
SCORE_SUBSEQUENCE = 50
SCORE_NONE = 0


@dataclass(frozen=True, slots=True)
class ScoredMatch:
    """A candidate name with its relevance score."""

    name: str
    score: int


def score_match(candidate: str, query: str) -> int:
    """
    Score a card name against a search query.

    Both strings are compared lowercased. Callers should not submit an
    empty query: it scores every candidate as a starts-with match.

    Args:
        candidate: Card name to score
        query: What the user typed

    Returns:
        Relevance score, higher is better, 0 for no match
    """
    name = candidate.lower()
    needle = query.lower()

    if name == needle:
        return SCORE_EXACT

    if name.startswith(needle):
        return SCORE_STARTS_WITH

    name_words = name.split()

    query_words = needle.split()
    if len(query_words) > 1 and _words_match_in_order(query_words, name_words):
        return SCORE_MULTI_WORD

    if any(word.startswith(needle) for word in name_words):
        return SCORE_WORD_BOUNDARY

    position = name.find(needle)
    if position != -1:
        return int(SCORE_SUBSTRING_MAX - (position / len(name)) * 100)

    if _is_subsequence(needle, name):
        return SCORE_SUBSEQUENCE

    return SCORE_NONE


def _words_match_in_order(query_words: list[str], name_words: list[str]) -> bool:
    """Each query word prefixes a later name word than the previous one did."""
    remaining = iter(name_words)
    return all(any(word.startswith(q) for word in remaining) for q in query_words)


def _is_subsequence(needle: str, haystack: str) -> bool:
    """Every character of needle appears in haystack, in order."""
    remaining = iter(haystack)
    return all(char in remaining for char in needle)


def rank_matches(
    candidates: Iterable[str],
    query: str,
    limit: int | None = None,
) -> list[ScoredMatch]:
    """
    Rank candidate names against a query.

    Non-matching candidates are dropped. Ties sort alphabetically so the
    order is deterministic.

    Args:
        candidates: Card names to rank (duplicates are ignored)
        query: Search query
        limit: Maximum number of results, None for all

    Returns:
        Matches sorted by score descending, then name
    """
    scored = [
        ScoredMatch(name=name, score=score)
        for name in dict.fromkeys(candidates)
        if (score := score_match(name, query)) > SCORE_NONE
    ]
    scored.sort(key=lambda m: (-m.score, m.name.lower(), m.name))

    if limit is not None:
        return scored[:limit]
    return scored
