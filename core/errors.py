# Path: core/errors.py
# Purpose: Define the error kinds raised while building catalogs and loading configuration.
# Layer: core.
# Details: All errors are recoverable; callers log them and continue with the remaining work.

from __future__ import annotations

from pathlib import Path
from typing import Optional


class WalletError(Exception):
    """Base class for all recoverable wallet errors."""


class FilesystemAccessError(WalletError):
    """A single directory item could not be read (permission error, deleted mid-scan)."""

    def __init__(self, path: Path, cause: Optional[BaseException] = None) -> None:
        self.path = path
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"{path} could not be read{detail}")


class SourceUnavailableError(WalletError):
    """A whole source directory (root, pocket, or extra source) is missing or unreadable."""

    def __init__(self, path: Path, cause: Optional[BaseException] = None) -> None:
        self.path = path
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"Source {path} is unavailable{detail}")


class ConfigLoadError(WalletError):
    """Settings or synonym configuration is missing or malformed."""


class PreviewGenerationError(WalletError):
    """A still-frame preview could not be produced for a video file."""
