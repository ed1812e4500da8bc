"""Unit tests for theme module."""

# pyright: reportPrivateUsage=false

from pathlib import Path
from unittest.mock import patch

import pytest
from rich.theme import Theme
from sdclean.core.theme import ThemeColors, _load_toml_colors, get_rich_theme, load_theme


class TestThemeColors:
    """Tests for ThemeColors Pydantic model."""

    def test_default_values(self) -> None:
        colors = ThemeColors()
        assert colors.header == "#69B9A1"
        assert colors.deleted == "#c1ff62"

    def test_short_hex_accepted(self) -> None:
        assert ThemeColors(muted="#abc").muted == "#abc"

    def test_invalid_hex_no_hash(self) -> None:
        with pytest.raises(ValueError, match="must start with '#'"):
            ThemeColors(text="ffffff")

    def test_invalid_hex_chars(self) -> None:
        with pytest.raises(ValueError, match="invalid hex color"):
            ThemeColors(text="#gggggg")


class TestLoadTheme:
    """Tests for theme file loading."""

    def test_missing_file(self, tmp_path: Path) -> None:
        assert _load_toml_colors(tmp_path / "theme.toml") is None

    def test_user_overrides(self, tmp_path: Path) -> None:
        theme_file = tmp_path / "theme.toml"
        theme_file.write_text('[colors]\ndeleted = "#000000"\n')

        with patch("sdclean.core.theme.get_user_theme_path", return_value=theme_file):
            colors = load_theme()

        assert colors.deleted == "#000000"
        assert colors.header == "#69B9A1"

    def test_invalid_override_falls_back(self, tmp_path: Path) -> None:
        theme_file = tmp_path / "theme.toml"
        theme_file.write_text('[colors]\ndeleted = "green"\n')

        with patch("sdclean.core.theme.get_user_theme_path", return_value=theme_file):
            assert load_theme() == ThemeColors()

    def test_rich_theme_has_outcome_styles(self) -> None:
        theme = get_rich_theme(ThemeColors())

        assert isinstance(theme, Theme)
        assert "previewed" in theme.styles
        assert "bold_header" in theme.styles
