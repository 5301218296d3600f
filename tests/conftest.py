"""Shared fixtures for the media wallet tests"""

from pathlib import Path

import pytest

from helpers import touch_all


@pytest.fixture
def wallet(tmp_path: Path) -> Path:
    """A wallet root with loose files, two pockets, a hidden folder, and noise."""
    root = tmp_path / "wallet"
    touch_all(root, ["Garfield Meme.png", "notes.txt", ".DS_Store", "clip.MOV"])
    touch_all(root / "cats", ["Cat Funny.jpg", "big cat photo.webp", ".hidden.png"])
    touch_all(root / "dogs", ["Doge.GIF", "readme.md"])
    touch_all(root / ".trash", ["deleted.png"])
    touch_all(root / "cats" / "nested", ["too deep.png"])
    return root
