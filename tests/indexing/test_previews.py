"""Tests for video preview generation and caching"""

import subprocess
from pathlib import Path

import pytest
from PIL import Image

import core.indexing.previews as previews_module
from core.errors import PreviewGenerationError
from core.indexing.catalog_builder import CatalogBuilder
from core.indexing.previews import FfmpegPreviewGenerator, PreviewCache, PreviewGenerator
from helpers import touch_all


class _SolidFrameGenerator(PreviewGenerator):
    """Writes a small solid image and counts calls."""

    def __init__(self) -> None:
        self.calls = 0

    def generate(self, source: Path, destination: Path) -> Path:
        self.calls += 1
        destination.parent.mkdir(parents=True, exist_ok=True)
        Image.new("RGB", (4, 4), "orange").save(destination, format="TIFF")
        return destination


class _FailingGenerator(PreviewGenerator):
    def generate(self, source: Path, destination: Path) -> Path:
        raise PreviewGenerationError("no video track")


class TestPreviewCache:
    """Tests for PreviewCache"""

    def test_destination_name(self, tmp_path: Path):
        """Test previews are named after the source folder and file"""
        cache = PreviewCache(tmp_path / "previews", _SolidFrameGenerator())

        destination = cache.destination_for(Path("/wallet/clips/run.mov"))

        assert destination == tmp_path / "previews" / "-wallet-clips-run.mov.tiff"

    def test_existing_preview_is_reused(self, tmp_path: Path):
        """Test a generated preview is not regenerated"""
        generator = _SolidFrameGenerator()
        cache = PreviewCache(tmp_path / "previews", generator)
        source = tmp_path / "run.mov"

        first = cache.preview_for(source)
        second = cache.preview_for(source)

        assert first == second
        assert first.exists()
        assert generator.calls == 1

    def test_purge_forces_regeneration(self, tmp_path: Path):
        """Test purge deletes previews so they are generated again"""
        generator = _SolidFrameGenerator()
        cache = PreviewCache(tmp_path / "previews", generator)
        source = tmp_path / "run.mov"
        cache.preview_for(source)

        cache.purge()

        assert not (tmp_path / "previews").exists()
        cache.preview_for(source)
        assert generator.calls == 2

    def test_failure_returns_none(self, tmp_path: Path):
        """Test try_preview_for swallows generation failures"""
        cache = PreviewCache(tmp_path / "previews", _FailingGenerator())

        assert cache.try_preview_for(tmp_path / "run.mov") is None
        with pytest.raises(PreviewGenerationError):
            cache.preview_for(tmp_path / "run.mov")


class TestCatalogPreviews:
    """Tests for previews inside catalog builds"""

    def test_video_entries_get_previews(self, tmp_path: Path):
        """Test video entries point at their cached preview"""
        touch_all(tmp_path / "wallet", ["clip.mp4", "pic.png"])
        cache = PreviewCache(tmp_path / "previews", _SolidFrameGenerator())

        catalog = CatalogBuilder(previews=cache).build(tmp_path / "wallet")

        entries = {e.display_name: e for e in catalog.entries()}
        assert entries["clip"].preview == cache.destination_for(tmp_path / "wallet" / "clip.mp4")
        assert entries["clip"].preview.exists()
        assert entries["pic"].preview == tmp_path / "wallet" / "pic.png"

    def test_failed_preview_keeps_entry(self, tmp_path: Path):
        """Test a failing generator neither drops the entry nor aborts the scan"""
        touch_all(tmp_path / "wallet", ["clip.mp4", "other.m4v", "pic.png"])
        cache = PreviewCache(tmp_path / "previews", _FailingGenerator())

        catalog = CatalogBuilder(previews=cache).build(tmp_path / "wallet")

        entries = {e.display_name: e for e in catalog.entries()}
        assert set(entries) == {"clip", "other", "pic"}
        assert entries["clip"].preview is None
        assert entries["other"].preview is None


class TestFfmpegPreviewGenerator:
    """Tests for the ffmpeg-backed generator"""

    def test_missing_binary(self, tmp_path: Path):
        """Test a missing ffmpeg executable is a generation error"""
        generator = FfmpegPreviewGenerator(binary="definitely-not-ffmpeg-binary")

        with pytest.raises(PreviewGenerationError):
            generator.generate(tmp_path / "clip.mov", tmp_path / "previews" / "clip.tiff")

    def test_frame_is_stored_as_tiff(self, tmp_path: Path, monkeypatch):
        """Test the extracted frame is re-encoded as TIFF at the destination"""

        def fake_run(command, **kwargs):
            Image.new("RGBA", (8, 6), "blue").save(command[-1], format="PNG")
            return subprocess.CompletedProcess(command, 0, b"", b"")

        monkeypatch.setattr(previews_module.subprocess, "run", fake_run)
        destination = tmp_path / "previews" / "clip.tiff"

        result = FfmpegPreviewGenerator().generate(tmp_path / "clip.mov", destination)

        assert result == destination
        with Image.open(destination) as image:
            assert image.format == "TIFF"
            assert image.size == (8, 6)
            assert image.mode == "RGB"
        assert list(destination.parent.iterdir()) == [destination]

    def test_ffmpeg_failure(self, tmp_path: Path, monkeypatch):
        """Test a non-zero ffmpeg exit is a generation error"""

        def fake_run(command, **kwargs):
            raise subprocess.CalledProcessError(1, command, b"", b"moov atom not found")

        monkeypatch.setattr(previews_module.subprocess, "run", fake_run)

        with pytest.raises(PreviewGenerationError, match="moov atom"):
            FfmpegPreviewGenerator().generate(tmp_path / "clip.mov", tmp_path / "previews" / "clip.tiff")
