# Path: scripts/build_catalog.py
# Purpose: CLI tool to scan a wallet folder and print the resulting catalog.
# Layer: scripts.
# Details: Demonstrates how to wire settings, preview cache, and catalog builder together.

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

# Ensure project root is on sys.path when running as a script.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from config import AppSettings, configure_logging
from core.indexing.catalog_builder import CatalogBuilder
from core.indexing.previews import FfmpegPreviewGenerator, PreviewCache


def main(argv: Optional[List[str]] = None) -> int:
    """Build a catalog and print one line per group."""

    parser = argparse.ArgumentParser(description="Scan a media wallet into a catalog")
    parser.add_argument("--config", type=Path, default=Path("wallet_config.json"), help="Settings JSON file")
    parser.add_argument("--root", type=Path, default=None, help="Wallet root folder (overrides the settings file)")
    parser.add_argument("--no-previews", action="store_true", help="Skip video preview generation")
    parser.add_argument("--purge-previews", action="store_true", help="Delete cached previews before scanning")
    args = parser.parse_args(argv)

    settings = AppSettings.load_from_file(args.config)
    if args.root is not None:
        settings = settings.model_copy(update={"root_dir": args.root})
    configure_logging(settings.log_level)

    previews = None
    if settings.previews.enabled and not args.no_previews:
        generator = FfmpegPreviewGenerator(settings.previews.ffmpeg_binary, settings.previews.timeout_seconds)
        previews = PreviewCache(settings.previews.directory, generator)
        if args.purge_previews:
            previews.purge()

    builder = CatalogBuilder(
        previews=previews,
        max_workers=settings.scan_workers,
        suppress_read_errors=settings.suppress_read_errors,
        show_progress=True,
    )
    catalog = builder.build(settings.root_dir, settings.sources())

    for group in catalog.groups:
        print(f"{group.name or '(unsorted)'}: {len(group)} entries")
    for warning in catalog.warnings:
        print(f"warning: {warning}")
    print(f"Catalogued {len(catalog)} entries from {settings.root_dir}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
