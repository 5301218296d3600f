# Path: core/models/domain.py
# Purpose: Define domain models shared across catalog building, search, and pagination.
# Layer: core/models.
# Details: Frozen dataclasses keep catalog snapshots immutable once a build returns them.

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterator, List, Optional, Tuple


class MediaKind(Enum):
    """Kind of media file an entry points at."""

    IMAGE = "image"
    VIDEO = "video"


class MatchType(Enum):
    """How a single query term matched an entry name, with its score weight."""

    EXACT = 1000
    SYNONYM = 1

    @property
    def weight(self) -> int:
        return self.value


@dataclass(frozen=True)
class Entry:
    """One indexed media file. Identity is the filesystem path."""

    id: Path
    display_name: str
    group_name: Optional[str] = field(default=None, compare=False)
    media_kind: MediaKind = field(default=MediaKind.IMAGE, compare=False)
    preview: Optional[Path] = field(default=None, compare=False)

    @property
    def search_name(self) -> str:
        return self.display_name.lower()


@dataclass(frozen=True)
class Group:
    """Entries found in one source directory; ``name`` is None for the wallet root."""

    name: Optional[str]
    entries: Tuple[Entry, ...] = ()

    def __len__(self) -> int:
        return len(self.entries)


@dataclass(frozen=True)
class Catalog:
    """Immutable snapshot of every group produced by a single build pass."""

    groups: Tuple[Group, ...] = ()
    warnings: Tuple[str, ...] = ()

    def __len__(self) -> int:
        return sum(len(group) for group in self.groups)

    def entries(self) -> Iterator[Entry]:
        """Yield every entry in scan order (group order, then entry order)."""

        for group in self.groups:
            yield from group.entries

    def group(self, name: Optional[str]) -> Optional[Group]:
        """Return the group with the given name, or None if it is not in the catalog."""

        for group in self.groups:
            if group.name == name:
                return group
        return None

    def group_names(self) -> List[str]:
        """Return the names of all named groups in catalog order."""

        return [group.name for group in self.groups if group.name is not None]


@dataclass(frozen=True)
class ExtraSource:
    """An additional directory scanned into its own group, filtered by file name."""

    path: Path
    group_name: str
    name_filter: str = ".*"

    def compiled_filter(self) -> re.Pattern[str]:
        return re.compile(self.name_filter, re.IGNORECASE)


@dataclass(frozen=True)
class MatchResult:
    """Search hit combining a catalog entry with its integer score."""

    entry: Entry
    score: int = 0


@dataclass(frozen=True)
class SearchPage:
    """A window over ranked results together with the total number of hits."""

    results: Tuple[MatchResult, ...]
    total: int
    page_count: int
    page_size: int

    @property
    def has_more(self) -> bool:
        return len(self.results) < self.total
