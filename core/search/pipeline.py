# Path: core/search/pipeline.py
# Purpose: Orchestrate search over a catalog snapshot by combining query parsing, matching, and ranking.
# Layer: core/search.
# Details: Pure and synchronous over an immutable Catalog; safe to call from any number of readers.

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from core.models.domain import Catalog, Entry, MatchResult
from .matching import ranking_key, score_entry
from .query import is_browse_query, parse_terms
from .synonyms import SynonymTable

logger = logging.getLogger(__name__)


class SearchPipeline:
    """High-level service bridging consumers with the catalog and synonym table."""

    def __init__(self, synonyms: Optional[SynonymTable] = None) -> None:
        self.synonyms = synonyms if synonyms is not None else SynonymTable.empty()

    def search(self, catalog: Catalog, query: str, group_filter: Optional[str] = None) -> List[MatchResult]:
        """
        Rank the catalog entries matching every term of ``query``.

        An empty query returns the browse view: every entry in scan order
        with a zero score. ``group_filter`` restricts the candidates to the
        named group; an unknown name yields no results.
        """

        candidates = list(self._candidates(catalog, group_filter))
        if is_browse_query(query):
            return [MatchResult(entry=entry, score=0) for entry in candidates]

        terms = parse_terms(query, self.synonyms)
        results: List[MatchResult] = []
        for entry in candidates:
            result = score_entry(entry, terms, self.synonyms)
            if result is not None:
                results.append(result)
        results.sort(key=ranking_key)
        logger.debug("Query %r -> terms %s -> %d of %d entries", query, terms, len(results), len(candidates))
        return results

    @staticmethod
    def _candidates(catalog: Catalog, group_filter: Optional[str]) -> Iterable[Entry]:
        if group_filter is None:
            return catalog.entries()
        group = catalog.group(group_filter)
        return group.entries if group is not None else ()


def search(
    catalog: Catalog,
    synonyms: SynonymTable,
    query: str,
    group_filter: Optional[str] = None,
) -> List[MatchResult]:
    """Functional form of :meth:`SearchPipeline.search`."""

    return SearchPipeline(synonyms).search(catalog, query, group_filter)


__all__ = ["SearchPipeline", "search"]
