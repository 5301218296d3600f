# Path: core/models/__init__.py
# Purpose: Package initializer for domain model definitions.
# Layer: core/models.
# Details: Exposes dataclasses used across indexing, search, and pagination layers.

from .domain import Catalog, Entry, ExtraSource, Group, MatchResult, MatchType, MediaKind, SearchPage

__all__ = ["Catalog", "Entry", "ExtraSource", "Group", "MatchResult", "MatchType", "MediaKind", "SearchPage"]
