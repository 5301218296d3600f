# Path: core/search/query.py
# Purpose: Turn a raw query string into the list of terms that must all match an entry.
# Layer: core/search.
# Details: Multi-word synonym keys are extracted first (longest wins), the remainder is split on whitespace.

from __future__ import annotations

from typing import List

from .synonyms import SynonymTable


def is_browse_query(query: str) -> bool:
    """Return True when the query carries no terms and the browse view applies."""

    return not query or not query.strip()


def parse_terms(query: str, synonyms: SynonymTable) -> List[str]:
    """Split ``query`` into phrase and word terms.

    Each multi-word canonical key is tested against the text that earlier,
    longer phrases left behind, so a shorter phrase never reuses characters
    already claimed. Every occurrence of a phrase is consumed and yields one
    term; the consumed text is replaced by a single space so the words on
    either side stay separate.
    """

    remaining = query.lower()
    phrases: List[str] = []
    for phrase in synonyms.multi_word_keys():
        position = remaining.find(phrase)
        while position != -1:
            phrases.append(phrase)
            remaining = remaining[:position] + " " + remaining[position + len(phrase):]
            # resume after the inserted space so the cut cannot form a new occurrence
            position = remaining.find(phrase, position + 1)
    return phrases + remaining.split()


__all__ = ["is_browse_query", "parse_terms"]
