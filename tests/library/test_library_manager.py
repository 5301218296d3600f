"""Tests for the library manager owning catalog snapshots"""

import json
from pathlib import Path

from config import AppSettings
from core.indexing.catalog_builder import CatalogBuilder
from core.library import LibraryManager
from core.models.domain import Catalog, Group
from core.search.pagination import SearchSession
from core.search.synonyms import SynonymTable
from helpers import make_entry, touch_all


class _InterruptedBuilder(CatalogBuilder):
    """Requests a newer refresh while the first build is still running."""

    def __init__(self) -> None:
        super().__init__()
        self.manager = None
        self.builds = 0

    def build(self, root_dir, extra_sources=()):
        self.builds += 1
        label = f"build {self.builds}"
        if self.builds == 1:
            self.manager.refresh()
        return Catalog(groups=(Group(name=None, entries=(make_entry(label),)),))


class TestLibraryManager:
    """Tests for LibraryManager"""

    def test_catalog_is_built_on_first_use(self, wallet: Path):
        """Test the first access builds and later accesses reuse the snapshot"""
        library = LibraryManager(wallet)

        first = library.catalog

        assert len(first) == 5
        assert library.catalog is first

    def test_refresh_replaces_snapshot_wholesale(self, wallet: Path):
        """Test a refresh publishes a new catalog and leaves the old one untouched"""
        library = LibraryManager(wallet)
        before = library.catalog
        touch_all(wallet / "dogs", ["Shiba.png"])

        after = library.refresh()

        assert after is not before
        assert library.catalog is after
        assert len(before) == 5
        assert len(after) == 6

    def test_superseded_build_is_discarded(self, tmp_path: Path):
        """Test a build finishing after a newer refresh does not replace the newer result"""
        builder = _InterruptedBuilder()
        library = LibraryManager(tmp_path, builder=builder, synonyms=SynonymTable.empty())
        builder.manager = library

        visible = library.refresh()

        assert builder.builds == 2
        assert [e.display_name for e in library.catalog.entries()] == ["build 2"]
        assert visible is library.catalog

    def test_background_refresh(self, wallet: Path):
        """Test a background refresh publishes its catalog when done"""
        library = LibraryManager(wallet)
        try:
            catalog = library.refresh_in_background().result(timeout=10)
        finally:
            library.close()

        assert library.catalog is catalog

    def test_search_page(self, wallet: Path):
        """Test search uses synonyms and windows the ranked results"""
        library = LibraryManager(wallet, synonyms=SynonymTable({"garfield": ["cat"]}))

        page = library.search("garfield", page_size=1)

        assert page.total == 3
        assert [r.entry.display_name for r in page.results] == ["Garfield Meme"]
        assert page.has_more

        page = library.search("garfield", page_size=1, page_count=3)
        assert [r.entry.display_name for r in page.results] == ["Garfield Meme", "big cat photo", "Cat Funny"]
        assert not page.has_more

    def test_reload_keeps_injected_synonyms(self, wallet: Path):
        """Test reloading synonyms without a synonyms file keeps the injected table"""
        library = LibraryManager(wallet, synonyms=SynonymTable({"garfield": ["cat"]}))
        assert library.search("garfield").total == 3

        library.refresh(reload_synonyms=True)

        assert library.search("garfield").total == 3

    def test_reload_reads_synonyms_file(self, wallet: Path, tmp_path: Path):
        """Test reloading picks up an edited synonyms file"""
        synonyms_path = tmp_path / "synonyms.json"
        synonyms_path.write_text(json.dumps({"garfield": ["cat"]}), encoding="utf-8")
        library = LibraryManager(wallet, synonyms_path=synonyms_path)
        assert library.search("doggo").total == 0

        synonyms_path.write_text(json.dumps({"doggo": ["doge"]}), encoding="utf-8")
        library.refresh(reload_synonyms=True)

        assert library.search("doggo").total == 1
        assert library.search("garfield").total == 1

    def test_superseded_reload_does_not_install_synonyms(self, tmp_path: Path):
        """Test synonyms reloaded by a discarded build are not installed"""
        synonyms_path = tmp_path / "synonyms.json"
        synonyms_path.write_text(json.dumps({"garfield": ["cat"]}), encoding="utf-8")
        builder = _InterruptedBuilder()
        library = LibraryManager(tmp_path, builder=builder, synonyms_path=synonyms_path)
        builder.manager = library
        original = library.synonyms
        synonyms_path.write_text(json.dumps({"doggo": ["doge"]}), encoding="utf-8")

        library.refresh(reload_synonyms=True)

        assert library.synonyms is original
        assert "doggo" not in library.synonyms

    def test_search_session_loads_more_and_resets(self, wallet: Path):
        """Test a session grows its window and resets when the query changes"""
        library = LibraryManager(wallet, synonyms=SynonymTable({"garfield": ["cat"]}))
        session = SearchSession(page_size=1)
        session.update("garfield")

        page = library.search_session(session)
        assert [r.entry.display_name for r in page.results] == ["Garfield Meme"]

        session.load_more(page.total)
        page = library.search_session(session)
        assert [r.entry.display_name for r in page.results] == ["Garfield Meme", "big cat photo"]

        session.update("doge")
        page = library.search_session(session)
        assert page.page_count == 1
        assert [r.entry.display_name for r in page.results] == ["Doge"]

    def test_search_empty_wallet(self, tmp_path: Path):
        """Test a missing wallet gives zero results rather than an error"""
        library = LibraryManager(tmp_path / "missing")

        page = library.search("cat")

        assert page.total == 0
        assert page.results == ()

    def test_from_settings(self, wallet: Path, tmp_path: Path):
        """Test wiring from settings, including synonyms and extra sources"""
        synonyms_path = tmp_path / "synonyms.json"
        synonyms_path.write_text(json.dumps({"doggo": ["doge"]}), encoding="utf-8")
        desktop = tmp_path / "desktop"
        touch_all(desktop, ["Doge Desk.png"])
        settings = AppSettings.model_validate(
            {
                "root_dir": str(wallet),
                "extra_sources": [{"path": str(desktop), "group_name": "Desktop"}],
                "previews": {"enabled": False},
                "search": {"synonyms_path": str(synonyms_path)},
            }
        )

        library = LibraryManager.from_settings(settings)
        page = library.search("doggo")

        assert library.builder.previews is None
        assert [r.entry.display_name for r in page.results] == ["Doge", "Doge Desk"]
        assert library.search("doggo", group_filter="Desktop").total == 1

    def test_purge_previews_rebuilds(self, tmp_path: Path):
        """Test purging removes the preview folder and refreshes the catalog"""
        settings = AppSettings.model_validate(
            {
                "root_dir": str(tmp_path / "wallet"),
                "previews": {"directory": str(tmp_path / "previews"), "ffmpeg_binary": "definitely-not-ffmpeg-binary"},
            }
        )
        touch_all(tmp_path / "wallet", ["clip.mov"])
        touch_all(tmp_path / "previews", ["stale.tiff"])
        library = LibraryManager.from_settings(settings)
        before = library.catalog

        after = library.purge_previews()

        assert not (tmp_path / "previews" / "stale.tiff").exists()
        assert after is not before
        assert [e.preview for e in after.entries()] == [None]
