# Path: core/search/__init__.py
# Purpose: Package initializer for query parsing, matching, ranking, and pagination.
# Layer: core/search.
# Details: Exposes the synonym table loader and the main search pipeline entrypoint.

from .matching import match_term, score_entry
from .pagination import SearchSession, window
from .pipeline import SearchPipeline, search
from .query import parse_terms
from .synonyms import SynonymTable, load_synonyms

__all__ = [
    "SearchPipeline",
    "SearchSession",
    "SynonymTable",
    "load_synonyms",
    "match_term",
    "parse_terms",
    "score_entry",
    "search",
    "window",
]
