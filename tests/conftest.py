"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from pathlib import Path

import pytest
from sdclean.cleanup.guard import PathGuard


def write_file(path: Path, content: str = "x") -> Path:
    """Create a file (and its parents) with the given content."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    return path


def snapshot(root: Path) -> dict[str, bytes | None]:
    """Map every entry under root to its content (None for directories)."""
    state: dict[str, bytes | None] = {}
    for entry in sorted(root.rglob("*")):
        if entry.is_symlink():
            state[str(entry)] = str(entry.readlink()).encode()
        elif entry.is_dir():
            state[str(entry)] = None
        else:
            state[str(entry)] = entry.read_bytes()
    return state


@pytest.fixture
def sdcard(tmp_path: Path) -> Path:
    """A small shared-storage tree with media, downloads, and app caches."""
    root = tmp_path / "sdcard"
    write_file(root / "DCIM" / "Camera" / "IMG_0001.jpg", "photo")
    write_file(root / "DCIM" / "a.tmp", "keep me")
    write_file(root / "DCIM2" / "c.tmp", "not protected")
    write_file(root / "Pictures" / "cache" / "thumb.jpg", "thumb")
    write_file(root / "Download" / "b.tmp", "junk")
    write_file(root / "Download" / "report.pdf", "document")
    write_file(root / "Download" / "Telegram" / "video.tmp", "telegram media")
    write_file(root / "Android" / "data" / "com.app" / "cache" / "img.bin", "12345")
    write_file(root / "Android" / "data" / "com.app" / "files" / "save.dat", "save")
    return root


@pytest.fixture
def guard(sdcard: Path) -> PathGuard:
    """Default guard rebased onto the test storage root."""
    return PathGuard.default(str(sdcard))


@pytest.fixture
def make_file():
    """Factory fixture wrapping write_file."""
    return write_file


@pytest.fixture
def fs_snapshot():
    """Factory fixture wrapping snapshot."""
    return snapshot
