# Path: core/indexing/previews.py
# Purpose: Produce and cache still-frame previews for video entries.
# Layer: core/indexing.
# Details: Generators are pluggable; the cache reuses existing previews and can purge them all.

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from PIL import Image

from core.errors import PreviewGenerationError

logger = logging.getLogger(__name__)

PREVIEW_SUFFIX = ".tiff"


class PreviewGenerator(ABC):
    """Interface for collaborators that render a still frame of a video file."""

    @abstractmethod
    def generate(self, source: Path, destination: Path) -> Path:
        """Write a still image for ``source`` at ``destination`` and return it.

        Raises PreviewGenerationError when no frame can be produced.
        """


class FfmpegPreviewGenerator(PreviewGenerator):
    """Extract the first video frame with ffmpeg and store it as TIFF via Pillow."""

    def __init__(self, binary: str = "ffmpeg", timeout: float = 30.0) -> None:
        self.binary = binary
        self.timeout = timeout

    def generate(self, source: Path, destination: Path) -> Path:
        destination.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.TemporaryDirectory(dir=destination.parent) as workdir:
            frame_path = Path(workdir) / "frame.png"
            command = [
                self.binary,
                "-y",
                "-loglevel",
                "error",
                "-i",
                str(source),
                "-frames:v",
                "1",
                str(frame_path),
            ]
            try:
                subprocess.run(command, check=True, capture_output=True, timeout=self.timeout)
            except FileNotFoundError as exc:
                raise PreviewGenerationError(f"{self.binary} is not installed") from exc
            except subprocess.TimeoutExpired as exc:
                raise PreviewGenerationError(f"Frame extraction for {source} timed out") from exc
            except subprocess.CalledProcessError as exc:
                stderr = (exc.stderr or b"").decode("utf-8", errors="replace").strip()
                raise PreviewGenerationError(f"Frame extraction for {source} failed: {stderr}") from exc

            staged = Path(workdir) / destination.name
            try:
                with Image.open(frame_path) as frame:
                    frame.convert("RGB").save(staged, format="TIFF")
            except (OSError, FileNotFoundError) as exc:
                raise PreviewGenerationError(f"No frame could be decoded from {source}") from exc
            os.replace(staged, destination)
        return destination


class PreviewCache:
    """Map video files to cached preview images under a single directory."""

    def __init__(self, directory: Path, generator: PreviewGenerator) -> None:
        self.directory = Path(directory)
        self.generator = generator

    def destination_for(self, source: Path) -> Path:
        """Return the cache path for ``source``: parent directory with slashes as dashes, then the file name."""

        parent = source.parent.as_posix().replace("/", "-")
        return self.directory / f"{parent}-{source.name}{PREVIEW_SUFFIX}"

    def preview_for(self, source: Path) -> Path:
        """Return an existing preview or generate one; raises PreviewGenerationError."""

        destination = self.destination_for(source)
        if destination.exists():
            return destination
        return self.generator.generate(source, destination)

    def try_preview_for(self, source: Path) -> Optional[Path]:
        """Like :meth:`preview_for` but returns None on failure."""

        try:
            return self.preview_for(source)
        except (PreviewGenerationError, OSError) as exc:
            logger.warning("Preview unavailable for %s: %s", source, exc)
            return None

    def purge(self) -> None:
        """Delete every cached preview so the next build regenerates them."""

        shutil.rmtree(self.directory, ignore_errors=True)
        logger.info("Purged previews in %s", self.directory)


__all__ = ["FfmpegPreviewGenerator", "PreviewCache", "PreviewGenerator", "PREVIEW_SUFFIX"]
