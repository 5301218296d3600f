# Path: core/search/pagination.py
# Purpose: Slice ranked results into growing prefix windows for incremental display.
# Layer: core/search.
# Details: Windows never re-sort or re-filter; a session resets to the first page when its inputs change.

from __future__ import annotations

from typing import Optional, Sequence, TypeVar

from core.models.domain import MatchResult, SearchPage

T = TypeVar("T")


def window(sorted_results: Sequence[T], page_size: int, page_count: int) -> Sequence[T]:
    """Return the first ``page_count * page_size`` results (or all of them)."""

    if page_size < 1:
        raise ValueError(f"page_size must be at least 1, got {page_size}")
    if page_count < 1:
        raise ValueError(f"page_count must be at least 1, got {page_count}")
    return sorted_results[: page_count * page_size]


class SearchSession:
    """Track the query, group filter, and page count of one consumer."""

    def __init__(self, page_size: int = 50) -> None:
        if page_size < 1:
            raise ValueError(f"page_size must be at least 1, got {page_size}")
        self.page_size = page_size
        self.query = ""
        self.group_filter: Optional[str] = None
        self.page_count = 1

    def update(self, query: str, group_filter: Optional[str] = None) -> bool:
        """Apply new inputs; return True (and reset to page 1) if either changed."""

        if query == self.query and group_filter == self.group_filter:
            return False
        self.query = query
        self.group_filter = group_filter
        self.page_count = 1
        return True

    def load_more(self, total: Optional[int] = None) -> int:
        """Advance by one page unless ``total`` says everything is already shown."""

        if total is None or self.page_count * self.page_size < total:
            self.page_count += 1
        return self.page_count

    def page(self, results: Sequence[MatchResult]) -> SearchPage:
        """Window ``results`` at the current page count."""

        return SearchPage(
            results=tuple(window(results, self.page_size, self.page_count)),
            total=len(results),
            page_count=self.page_count,
            page_size=self.page_size,
        )


__all__ = ["SearchSession", "window"]
