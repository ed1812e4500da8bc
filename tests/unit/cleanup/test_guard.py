"""Tests for protected path checking."""

import pytest
from sdclean.cleanup.errors import ConfigError
from sdclean.cleanup.guard import (
    DEFAULT_PROTECTED_DIRS,
    PathGuard,
    default_protected_paths,
    normalize_path,
)


class TestDefaultProtectedPaths:
    """Tests for the default protected folder list."""

    def test_defaults_not_empty(self) -> None:
        """Default protected folders should contain entries."""
        assert len(DEFAULT_PROTECTED_DIRS) > 0

    def test_defaults_contain_media_folders(self) -> None:
        """Camera, pictures, and movies are protected by default."""
        paths = default_protected_paths()
        assert "/sdcard/DCIM" in paths
        assert "/sdcard/Pictures" in paths
        assert "/sdcard/Movies" in paths
        assert "/sdcard/Download/Telegram" in paths

    def test_defaults_rebase_on_storage_root(self) -> None:
        """Defaults follow a custom storage root."""
        paths = default_protected_paths("/storage/emulated/0/")
        assert "/storage/emulated/0/DCIM" in paths
        assert not any(p.startswith("/sdcard") for p in paths)


class TestNormalizePath:
    """Tests for normalize_path."""

    def test_trailing_slash_removed(self) -> None:
        assert normalize_path("/sdcard/DCIM/") == "/sdcard/DCIM"

    def test_dot_segments_resolved(self) -> None:
        assert normalize_path("/sdcard/Download/../DCIM/./a.jpg") == "/sdcard/DCIM/a.jpg"

    def test_duplicate_separators_collapsed(self) -> None:
        assert normalize_path("//sdcard//DCIM") == "/sdcard/DCIM"

    def test_relative_path_rejected(self) -> None:
        with pytest.raises(ConfigError, match="absolute"):
            normalize_path("sdcard/DCIM")

    def test_empty_path_rejected(self) -> None:
        with pytest.raises(ConfigError, match="empty"):
            normalize_path("")


class TestIsProtected:
    """Tests for PathGuard.is_protected."""

    def test_protected_path_itself(self) -> None:
        """The protected directory itself is protected."""
        assert PathGuard.default().is_protected("/sdcard/DCIM") is True

    def test_nested_path_protected(self) -> None:
        """Anything below a protected directory is protected."""
        guard = PathGuard.default()
        assert guard.is_protected("/sdcard/DCIM/foo") is True
        assert guard.is_protected("/sdcard/DCIM/Camera/IMG_0001.jpg") is True

    def test_string_prefix_sibling_not_protected(self) -> None:
        """/sdcard/DCIM2 shares a string prefix but not a segment prefix."""
        guard = PathGuard.default()
        assert guard.is_protected("/sdcard/DCIM2") is False
        assert guard.is_protected("/sdcard/DCIM2/foo") is False
        assert guard.is_protected("/sdcard/Download/Telegram2/a.tmp") is False

    def test_parent_not_protected(self) -> None:
        """Ancestors of a protected directory are not protected."""
        guard = PathGuard.default()
        assert guard.is_protected("/sdcard") is False
        assert guard.is_protected("/sdcard/Download") is False

    def test_case_insensitive_by_default(self) -> None:
        """Shared storage ignores case, so the guard does too."""
        assert PathGuard.default().is_protected("/sdcard/dcim/camera/x.jpg") is True

    def test_case_sensitive_option(self) -> None:
        guard = PathGuard(["/sdcard/DCIM"], case_sensitive=True)
        assert guard.is_protected("/sdcard/DCIM/a") is True
        assert guard.is_protected("/sdcard/dcim/a") is False

    def test_unnormalized_input(self) -> None:
        """Input paths are normalized before comparison."""
        guard = PathGuard.default()
        assert guard.is_protected("/sdcard/Download/../DCIM/a.tmp") is True
        assert guard.is_protected("/sdcard/DCIM/") is True

    def test_relative_protected_path_rejected(self) -> None:
        with pytest.raises(ConfigError):
            PathGuard(["DCIM"])

    def test_empty_guard_protects_nothing(self) -> None:
        assert PathGuard([]).is_protected("/sdcard/DCIM") is False


class TestEnclosesProtected:
    """Tests for PathGuard.encloses_protected."""

    def test_ancestor_encloses(self) -> None:
        guard = PathGuard.default()
        assert guard.encloses_protected("/sdcard") is True
        assert guard.encloses_protected("/sdcard/Download") is True

    def test_protected_path_does_not_enclose_itself(self) -> None:
        assert PathGuard.default().encloses_protected("/sdcard/DCIM") is False

    def test_unrelated_directory(self) -> None:
        guard = PathGuard.default()
        assert guard.encloses_protected("/sdcard/Android/data/com.app/cache") is False
        assert guard.encloses_protected("/sdcard/DCIM2") is False


class TestExtended:
    """Tests for PathGuard.extended."""

    def test_extended_adds_paths(self) -> None:
        guard = PathGuard.default().extended(["/sdcard/Backup"])
        assert guard.is_protected("/sdcard/Backup/old.bak") is True
        assert guard.is_protected("/sdcard/DCIM/a.jpg") is True

    def test_original_guard_unchanged(self) -> None:
        base = PathGuard.default()
        base.extended(["/sdcard/Backup"])
        assert base.is_protected("/sdcard/Backup/old.bak") is False

    def test_duplicates_collapsed(self) -> None:
        guard = PathGuard(["/sdcard/DCIM", "/sdcard/DCIM/"])
        assert guard.protected_paths == ("/sdcard/DCIM",)
