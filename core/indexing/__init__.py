# Path: core/indexing/__init__.py
# Purpose: Package initializer for indexing utilities.
# Layer: core/indexing.
# Details: Exposes directory scanning, catalog building, and video preview helpers.

from .catalog_builder import CatalogBuilder
from .previews import FfmpegPreviewGenerator, PreviewCache, PreviewGenerator
from .scanner import IMAGE_EXTENSIONS, SUPPORTED_EXTENSIONS, VIDEO_EXTENSIONS, MediaScanner, classify

__all__ = [
    "CatalogBuilder",
    "FfmpegPreviewGenerator",
    "IMAGE_EXTENSIONS",
    "MediaScanner",
    "PreviewCache",
    "PreviewGenerator",
    "SUPPORTED_EXTENSIONS",
    "VIDEO_EXTENSIONS",
    "classify",
]
