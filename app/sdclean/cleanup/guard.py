"""Protected storage paths that must never be deleted.

This module defines the default media and document folders of Android
shared storage and the PathGuard that vetoes any path equal to or
nested under one of them.
"""

import os
from collections.abc import Iterable
from pathlib import PurePosixPath

from sdclean.cleanup.errors import ConfigError

DEFAULT_STORAGE_ROOT = "/sdcard"

# Folders holding irreplaceable user media, relative to the storage root.
DEFAULT_PROTECTED_DIRS: tuple[str, ...] = (
    # Camera and galleries
    "DCIM",
    "Pictures",
    "Movies",
    "Music",
    "Documents",
    # Messenger media
    "WhatsApp/Media",
    "Android/media/com.whatsapp/WhatsApp/Media",
    "Download/Telegram",
    "Download/Instagram",
)


def default_protected_paths(storage_root: str = DEFAULT_STORAGE_ROOT) -> tuple[str, ...]:
    """Build the absolute default protected paths for a storage root.

    Args:
        storage_root: Absolute path of shared storage (e.g., "/sdcard").

    Returns:
        Tuple of absolute protected directory paths.
    """
    root = normalize_path(storage_root)
    return tuple(os.path.join(root, rel) for rel in DEFAULT_PROTECTED_DIRS)


def normalize_path(path: str) -> str:
    """Normalize an absolute path without resolving symlinks.

    Collapses ``.``/``..`` segments, duplicate separators, and trailing
    slashes. Symlinks are deliberately left alone: ``/sdcard`` is itself
    a link on most devices and must keep matching its protected paths.

    Args:
        path: Absolute filesystem path.

    Returns:
        Normalized path string.

    Raises:
        ConfigError: If the path is empty or relative.
    """
    if not path:
        msg = "Path cannot be empty"
        raise ConfigError(msg)
    if not os.path.isabs(path):
        msg = f"Path must be absolute: {path}"
        raise ConfigError(msg)
    normalized = os.path.normpath(path)
    # POSIX keeps a leading "//"; collapse it so segments compare equal.
    if normalized.startswith("//"):
        normalized = "/" + normalized.lstrip("/")
    return normalized


def path_segments(path: str, *, case_sensitive: bool = False) -> tuple[str, ...]:
    """Split a normalized path into the segments guards compare."""
    parts = PurePosixPath(path).parts
    if case_sensitive:
        return parts
    return tuple(part.casefold() for part in parts)


class PathGuard:
    """Decides whether a path lies inside a protected directory.

    Paths are compared as sequences of path segments, so ``/sdcard/DCIM``
    protects ``/sdcard/DCIM/a.jpg`` but not ``/sdcard/DCIM2/a.jpg``.
    Comparison ignores case by default because Android shared storage is
    case-insensitive.

    A guard is immutable: ``extended()`` returns a new guard and there is
    no way to remove a protected path.

    Args:
        protected_paths: Absolute directory paths to protect.
        case_sensitive: Compare segments case-sensitively.
    """

    __slots__ = ("_case_sensitive", "_paths", "_segments")

    def __init__(self, protected_paths: Iterable[str], *, case_sensitive: bool = False) -> None:
        paths = tuple(dict.fromkeys(normalize_path(p) for p in protected_paths))
        self._paths = paths
        self._case_sensitive = case_sensitive
        self._segments = tuple(self._split(p) for p in paths)

    @classmethod
    def default(cls, storage_root: str = DEFAULT_STORAGE_ROOT) -> "PathGuard":
        """Create a guard for the default media folders of a storage root."""
        return cls(default_protected_paths(storage_root))

    @property
    def protected_paths(self) -> tuple[str, ...]:
        """Normalized protected paths, in insertion order."""
        return self._paths

    @property
    def case_sensitive(self) -> bool:
        return self._case_sensitive

    def extended(self, paths: Iterable[str]) -> "PathGuard":
        """Return a new guard protecting these paths in addition to ours."""
        return PathGuard((*self._paths, *paths), case_sensitive=self._case_sensitive)

    def is_protected(self, path: str) -> bool:
        """Check if a path equals or is nested under a protected path.

        Args:
            path: Absolute filesystem path to check.

        Returns:
            True if the path is protected, False otherwise.
        """
        segments = self._split(normalize_path(path))
        for protected in self._segments:
            if segments[: len(protected)] == protected:
                return True
        return False

    def encloses_protected(self, path: str) -> bool:
        """Check if any protected path lies strictly beneath a directory.

        Args:
            path: Absolute directory path.

        Returns:
            True if deleting the directory would also delete a protected path.
        """
        segments = self._split(normalize_path(path))
        for protected in self._segments:
            if len(protected) > len(segments) and protected[: len(segments)] == segments:
                return True
        return False

    def _split(self, path: str) -> tuple[str, ...]:
        return path_segments(path, case_sensitive=self._case_sensitive)

    def __repr__(self) -> str:
        return f"PathGuard({list(self._paths)!r}, case_sensitive={self._case_sensitive})"
