# Path: core/indexing/scanner.py
# Purpose: Scan one directory level and turn recognised media files into catalog entries.
# Layer: core/indexing.
# Details: Item inspection runs on a bounded thread pool; per-item failures are isolated and reported.

from __future__ import annotations

import logging
import os
import re
import stat
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from functools import partial
from pathlib import Path
from typing import List, Optional

from core.errors import FilesystemAccessError, SourceUnavailableError
from core.models.domain import Entry, Group, MediaKind
from .previews import PreviewCache

logger = logging.getLogger(__name__)

HIDDEN_PREFIX = "."

IMAGE_EXTENSIONS = frozenset(
    {
        ".png", ".jpg", ".jpeg", ".bmp", ".dds", ".exr", ".gif", ".hdr", ".ico", ".jpe",
        ".pbm", ".pfm", ".pgm", ".pict", ".ppm", ".psd", ".sgi", ".svg", ".tga", ".tiff",
        ".webp", ".cr2", ".dng", ".heic", ".heif", ".jp2", ".nef", ".orf", ".raf", ".rw2",
    }
)
VIDEO_EXTENSIONS = frozenset({".mov", ".mp4", ".m4v", ".mts", ".3gp", ".m2ts", ".m2v", ".mpeg", ".mpg", ".vob"})
SUPPORTED_EXTENSIONS = IMAGE_EXTENSIONS | VIDEO_EXTENSIONS


def classify(path: Path) -> Optional[MediaKind]:
    """Return the media kind for ``path`` based on its extension, or None."""

    suffix = path.suffix.lower()
    if suffix in IMAGE_EXTENSIONS:
        return MediaKind.IMAGE
    if suffix in VIDEO_EXTENSIONS:
        return MediaKind.VIDEO
    return None


def is_hidden(name: str) -> bool:
    return name.startswith(HIDDEN_PREFIX)


@dataclass
class ScanReport:
    """Warnings collected while scanning; shared by all tasks of one build."""

    suppress_read_errors: bool = False
    warnings: List[str] = field(default_factory=list)

    def item_failed(self, error: FilesystemAccessError) -> None:
        if self.suppress_read_errors:
            logger.debug("Skipping unreadable item: %s", error)
            return
        logger.warning("%s", error)
        self.warnings.append(str(error))

    def source_failed(self, error: SourceUnavailableError) -> None:
        logger.warning("%s", error)
        self.warnings.append(str(error))


class MediaScanner:
    """Scan a single directory level for supported media files."""

    def __init__(
        self,
        previews: Optional[PreviewCache] = None,
        max_workers: int = 8,
        report: Optional[ScanReport] = None,
    ) -> None:
        self.previews = previews
        self.max_workers = max(1, max_workers)
        self.report = report or ScanReport()

    def list_subdirectories(self, root: Path) -> List[str]:
        """Return the sorted names of visible immediate subdirectories of ``root``.

        Raises SourceUnavailableError if ``root`` cannot be listed.
        """

        names: List[str] = []
        for name in self._list_names(root):
            try:
                mode = os.lstat(root / name).st_mode
            except OSError as exc:
                self.report.item_failed(FilesystemAccessError(root / name, exc))
                continue
            if stat.S_ISDIR(mode):
                names.append(name)
        return sorted(names)

    def scan_group(
        self,
        directory: Path,
        group_name: Optional[str],
        name_filter: Optional[re.Pattern[str]] = None,
    ) -> Group:
        """Build the group for ``directory``; raises SourceUnavailableError if it cannot be listed."""

        names = [name for name in self._list_names(directory) if name_filter is None or name_filter.search(name)]
        paths = [directory / name for name in names]

        with ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix="scan") as pool:
            found = list(pool.map(partial(self._inspect_item, group_name=group_name), paths))

        entries = sorted((entry for entry in found if entry is not None), key=lambda e: (e.display_name, str(e.id)))
        logger.debug("Scanned %s: %d of %d items are media", directory, len(entries), len(names))
        return Group(name=group_name, entries=tuple(entries))

    def _list_names(self, directory: Path) -> List[str]:
        try:
            names = os.listdir(directory)
        except OSError as exc:
            raise SourceUnavailableError(directory, exc) from exc
        return [name for name in names if not is_hidden(name)]

    def _inspect_item(self, path: Path, group_name: Optional[str]) -> Optional[Entry]:
        """Stat and classify one item; failures only drop this item."""

        try:
            mode = os.lstat(path).st_mode
        except OSError as exc:
            self.report.item_failed(FilesystemAccessError(path, exc))
            return None
        if stat.S_ISDIR(mode):
            return None

        kind = classify(path)
        if kind is None:
            return None

        if kind is MediaKind.IMAGE:
            preview: Optional[Path] = path
        elif self.previews is not None:
            preview = self.previews.try_preview_for(path)
        else:
            preview = None

        return Entry(
            id=path,
            display_name=path.stem,
            group_name=group_name,
            media_kind=kind,
            preview=preview,
        )


__all__ = [
    "IMAGE_EXTENSIONS",
    "MediaScanner",
    "ScanReport",
    "SUPPORTED_EXTENSIONS",
    "VIDEO_EXTENSIONS",
    "classify",
    "is_hidden",
]
