# Path: core/indexing/catalog_builder.py
# Purpose: Build an immutable catalog from the wallet root, its pockets, and configured extra sources.
# Layer: core/indexing.
# Details: Coordinates directory scanning with progress reporting; one failing source never aborts a build.

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable, List, Optional, Set, Tuple

from tqdm import tqdm

from core.errors import SourceUnavailableError
from core.models.domain import Catalog, ExtraSource, Group
from .previews import PreviewCache
from .scanner import MediaScanner, ScanReport

logger = logging.getLogger(__name__)

# (directory, group name, optional file name filter)
_SourceSpec = Tuple[Path, Optional[str], Optional[re.Pattern[str]]]


class CatalogBuilder:
    """Scan every configured source into a Catalog snapshot."""

    def __init__(
        self,
        previews: Optional[PreviewCache] = None,
        max_workers: int = 8,
        suppress_read_errors: bool = False,
        show_progress: bool = False,
    ) -> None:
        self.previews = previews
        self.max_workers = max_workers
        self.suppress_read_errors = suppress_read_errors
        self.show_progress = show_progress

    def build(self, root_dir: Path, extra_sources: Iterable[ExtraSource] = ()) -> Catalog:
        """
        Scan ``root_dir`` (root group plus one group per visible subdirectory)
        and each extra source, returning a new Catalog.

        External calls:
        - core/indexing/scanner.py::MediaScanner.scan_group - inspects one directory level.
        - core/indexing/previews.py::PreviewCache.try_preview_for - renders video previews.
        """

        report = ScanReport(suppress_read_errors=self.suppress_read_errors)
        scanner = MediaScanner(previews=self.previews, max_workers=self.max_workers, report=report)

        specs = self._root_specs(scanner, Path(root_dir)) + self._extra_specs(extra_sources, report)

        groups: List[Group] = []
        seen: Set[Path] = set()
        for directory, name, name_filter in tqdm(specs, desc="Scanning sources", unit="dir", disable=not self.show_progress):
            try:
                group = scanner.scan_group(directory, name, name_filter)
            except SourceUnavailableError as exc:
                report.source_failed(exc)
                continue

            unique = tuple(entry for entry in group.entries if entry.id not in seen)
            if len(unique) != len(group.entries):
                logger.debug("Dropped %d entries of %s already catalogued", len(group.entries) - len(unique), directory)
            seen.update(entry.id for entry in unique)
            if unique:
                groups.append(Group(name=name, entries=unique))

        catalog = Catalog(groups=tuple(groups), warnings=tuple(report.warnings))
        logger.info("Catalog built: %d entries in %d groups", len(catalog), len(catalog.groups))
        return catalog

    @staticmethod
    def _root_specs(scanner: MediaScanner, root_dir: Path) -> List[_SourceSpec]:
        try:
            pockets = scanner.list_subdirectories(root_dir)
        except SourceUnavailableError as exc:
            scanner.report.source_failed(exc)
            return []
        return [(root_dir, None, None)] + [(root_dir / name, name, None) for name in pockets]

    @staticmethod
    def _extra_specs(extra_sources: Iterable[ExtraSource], report: ScanReport) -> List[_SourceSpec]:
        specs: List[_SourceSpec] = []
        for source in extra_sources:
            try:
                pattern = source.compiled_filter()
            except re.error as exc:
                report.source_failed(SourceUnavailableError(source.path, exc))
                continue
            specs.append((Path(source.path), source.group_name, pattern))
        return specs


__all__ = ["CatalogBuilder"]
