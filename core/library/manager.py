# Path: core/library/manager.py
# Purpose: Own the current catalog snapshot and expose refresh, purge, and paged search to consumers.
# Layer: core/library.
# Details: Snapshots are swapped atomically; a build superseded by a newer refresh request is discarded.

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import Iterable, List, Optional

from config import AppSettings
from core.indexing.catalog_builder import CatalogBuilder
from core.indexing.previews import FfmpegPreviewGenerator, PreviewCache
from core.models.domain import Catalog, ExtraSource, SearchPage
from core.search.pagination import SearchSession, window
from core.search.pipeline import SearchPipeline
from core.search.synonyms import SynonymTable, load_synonyms

logger = logging.getLogger(__name__)


class LibraryManager:
    """Hold the catalog snapshot used by every reader between refreshes.

    Readers call :attr:`catalog` and get an immutable snapshot; refreshes
    build a new snapshot off to the side and publish it with a single
    reference swap.
    """

    def __init__(
        self,
        root_dir: Path | str,
        extra_sources: Iterable[ExtraSource] = (),
        synonyms: Optional[SynonymTable] = None,
        builder: Optional[CatalogBuilder] = None,
        synonyms_path: Optional[Path] = None,
    ) -> None:
        self.root_dir = Path(root_dir)
        self.extra_sources: List[ExtraSource] = list(extra_sources)
        self.synonyms_path = synonyms_path
        self.builder = builder or CatalogBuilder()
        self.pipeline = SearchPipeline(synonyms if synonyms is not None else load_synonyms(synonyms_path))
        self._lock = threading.Lock()
        self._catalog: Optional[Catalog] = None
        self._requested_generation = 0
        self._background = ThreadPoolExecutor(max_workers=1, thread_name_prefix="refresh")

    @classmethod
    def from_settings(cls, settings: AppSettings) -> "LibraryManager":
        """Wire builder, preview cache, and synonyms from application settings."""

        previews = None
        if settings.previews.enabled:
            generator = FfmpegPreviewGenerator(
                binary=settings.previews.ffmpeg_binary,
                timeout=settings.previews.timeout_seconds,
            )
            previews = PreviewCache(settings.previews.directory, generator)
        builder = CatalogBuilder(
            previews=previews,
            max_workers=settings.scan_workers,
            suppress_read_errors=settings.suppress_read_errors,
        )
        return cls(
            root_dir=settings.root_dir,
            extra_sources=settings.sources(),
            builder=builder,
            synonyms_path=settings.search.synonyms_path,
        )

    @property
    def synonyms(self) -> SynonymTable:
        return self.pipeline.synonyms

    @property
    def catalog(self) -> Catalog:
        """Return the current snapshot, building the first one on demand."""

        current = self._catalog
        if current is None:
            current = self.refresh()
        return current

    def refresh(self, reload_synonyms: bool = False) -> Catalog:
        """Build a new catalog and publish it unless a newer refresh was requested meanwhile.

        Returns the snapshot visible once this call finishes, which is the
        newer one when this build was superseded and already applied.
        Reloaded synonyms are installed together with the published catalog;
        a table injected without ``synonyms_path`` is kept.
        """

        with self._lock:
            self._requested_generation += 1
            generation = self._requested_generation

        pipeline = None
        if reload_synonyms and self.synonyms_path is not None:
            pipeline = SearchPipeline(load_synonyms(self.synonyms_path))

        built = self.builder.build(self.root_dir, self.extra_sources)

        with self._lock:
            if generation == self._requested_generation:
                if pipeline is not None:
                    self.pipeline = pipeline
                self._catalog = built
                return built
            logger.info("Discarding catalog build %d superseded by %d", generation, self._requested_generation)
            return self._catalog if self._catalog is not None else built

    def refresh_in_background(self, reload_synonyms: bool = False) -> "Future[Catalog]":
        """Schedule :meth:`refresh` on the background worker."""

        return self._background.submit(self.refresh, reload_synonyms)

    def purge_previews(self) -> Catalog:
        """Delete generated previews and rebuild so they are regenerated."""

        previews = self.builder.previews
        if previews is not None:
            previews.purge()
        return self.refresh()

    def search(
        self,
        query: str,
        group_filter: Optional[str] = None,
        page_size: int = 50,
        page_count: int = 1,
    ) -> SearchPage:
        """Run a query over the current snapshot and return the requested window."""

        results = self.pipeline.search(self.catalog, query, group_filter)
        return SearchPage(
            results=tuple(window(results, page_size, page_count)),
            total=len(results),
            page_count=page_count,
            page_size=page_size,
        )

    def search_session(self, session: SearchSession) -> SearchPage:
        """Run the session's query and return its current window."""

        return session.page(self.pipeline.search(self.catalog, session.query, session.group_filter))

    def close(self) -> None:
        self._background.shutdown(wait=True)


__all__ = ["LibraryManager"]
