# Path: core/search/matching.py
# Purpose: Decide how a single term matches an entry name and score entries over all terms.
# Layer: core/search.
# Details: Matching is a conjunction: one unmatched term excludes the entry.

from __future__ import annotations

from typing import List, Optional, Sequence

from core.models.domain import Entry, MatchResult, MatchType
from .synonyms import SynonymTable


def match_term(term: str, name: str, synonyms: SynonymTable) -> Optional[MatchType]:
    """Return how ``term`` matches the lower-cased entry ``name``, or None.

    A term that is both a canonical key and an alias under another key is
    first expanded as a key, then through every key that lists it.
    """

    if term in name:
        return MatchType.EXACT

    if any(alias in name for alias in synonyms.aliases_for(term)):
        return MatchType.SYNONYM

    for key in synonyms.canonicals_for(term):
        if key in name:
            return MatchType.SYNONYM
        if any(alias in name for alias in synonyms.aliases_for(key) if alias != term):
            return MatchType.SYNONYM

    return None


def score_entry(entry: Entry, terms: Sequence[str], synonyms: SynonymTable) -> Optional[MatchResult]:
    """Score ``entry`` against every term; None if any term fails to match."""

    name = entry.search_name
    matches: List[MatchType] = []
    for term in terms:
        match = match_term(term, name, synonyms)
        if match is None:
            return None
        matches.append(match)
    return MatchResult(entry=entry, score=sum(match.weight for match in matches))


def ranking_key(result: MatchResult):
    """Sort key: score descending, then case-insensitive name, then path."""

    return (-result.score, result.entry.display_name.lower(), str(result.entry.id))


__all__ = ["match_term", "ranking_key", "score_entry"]
