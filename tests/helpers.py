"""Builders shared by the media wallet tests"""

from pathlib import Path
from typing import Iterable, Optional

from core.models.domain import Catalog, Entry, Group, MediaKind


def make_entry(name: str, group: Optional[str] = None, folder: str = "/wallet", suffix: str = ".png") -> Entry:
    """Build an image entry whose path is derived from its name."""
    path = Path(folder) / (group or "") / f"{name}{suffix}"
    return Entry(id=path, display_name=name, group_name=group, media_kind=MediaKind.IMAGE, preview=path)


def make_catalog(*groups: tuple) -> Catalog:
    """Build a catalog from ``(group_name, [display names])`` pairs, keeping the given order."""
    built = []
    for group_name, names in groups:
        built.append(Group(name=group_name, entries=tuple(make_entry(n, group_name) for n in names)))
    return Catalog(groups=tuple(built))


def touch_all(directory: Path, names: Iterable[str]) -> None:
    """Create empty files under ``directory``."""
    directory.mkdir(parents=True, exist_ok=True)
    for name in names:
        (directory / name).write_bytes(b"")
