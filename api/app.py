# Path: api/app.py
# Purpose: Expose a FastAPI application for browsing and searching the media catalog.
# Layer: api.
# Details: Provides health checks, group listing, paged search, refresh, and preview purge endpoints.

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional

from core.library import LibraryManager
from core.models.domain import Catalog, MatchResult


def _result_payload(result: MatchResult) -> Dict[str, Any]:
    entry = result.entry
    return {
        "path": str(entry.id),
        "name": entry.display_name,
        "group": entry.group_name,
        "kind": entry.media_kind.value,
        "preview": str(entry.preview) if entry.preview is not None else None,
        "score": result.score,
    }


def _catalog_summary(catalog: Catalog) -> Dict[str, Any]:
    return {
        "entries": len(catalog),
        "groups": [{"name": group.name, "entries": len(group)} for group in catalog.groups],
        "warnings": list(catalog.warnings),
    }


def create_app(library: Optional[LibraryManager] = None, page_size: int = 50):  # type: ignore[override]
    """Create a FastAPI app instance serving the provided library manager."""

    from fastapi import FastAPI, HTTPException, Query

    @asynccontextmanager
    async def lifespan(_app: "FastAPI") -> AsyncIterator[None]:
        yield
        if library is not None:
            library.close()

    app = FastAPI(title="Media Wallet API", version="0.1.0", lifespan=lifespan)

    def _library() -> LibraryManager:
        if library is None:
            raise HTTPException(status_code=500, detail="Library is not configured.")
        return library

    @app.get("/health")
    def health() -> Dict[str, str]:
        """Return a simple health status payload."""

        return {"status": "ok"}

    @app.get("/groups")
    def groups() -> Dict[str, Any]:
        """Summarise the current catalog snapshot."""

        return _catalog_summary(_library().catalog)

    @app.get("/search")
    def search(
        q: str = "",
        group: Optional[str] = None,
        pages: int = Query(default=1, ge=1),
    ) -> Dict[str, Any]:
        """Run a query and return the first ``pages`` pages of ranked results."""

        page = _library().search(q, group_filter=group, page_size=page_size, page_count=pages)
        return {
            "total": page.total,
            "pages": page.page_count,
            "has_more": page.has_more,
            "results": [_result_payload(result) for result in page.results],
        }

    @app.post("/refresh")
    def refresh() -> Dict[str, Any]:
        """Rebuild the catalog from disk."""

        return _catalog_summary(_library().refresh())

    @app.post("/previews/purge")
    def purge_previews() -> Dict[str, Any]:
        """Delete generated video previews and rebuild the catalog."""

        return _catalog_summary(_library().purge_previews())

    return app
