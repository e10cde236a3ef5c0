"""Unit tests for theme loading."""

from pathlib import Path

import pytest
from adactl.core.theme import ThemeColors, get_rich_theme, get_user_theme_path, load_theme
from pydantic import ValidationError


class TestThemeColors:
    """Tests for ThemeColors model."""

    def test_accepts_short_hex(self) -> None:
        assert ThemeColors(success="#0f0").success == "#0f0"

    @pytest.mark.parametrize("value", ["00ff00", "#12345", "#gggggg", 5])
    def test_rejects_invalid(self, value: object) -> None:
        with pytest.raises(ValidationError):
            ThemeColors(success=value)

    def test_rejects_unknown_color(self) -> None:
        with pytest.raises(ValidationError):
            ThemeColors(sparkle="#ffffff")


class TestLoadTheme:
    """Tests for load_theme function."""

    def test_bundled_theme(self) -> None:
        assert load_theme() == ThemeColors()

    def test_user_override(self, isolated_home: Path) -> None:
        path = get_user_theme_path()
        path.parent.mkdir(parents=True)
        path.write_text('[colors]\nsuccess = "#00ff00"\n')

        colors = load_theme()

        assert colors.success == "#00ff00"
        assert colors.error == ThemeColors().error

    def test_invalid_override_uses_defaults(self, isolated_home: Path) -> None:
        path = get_user_theme_path()
        path.parent.mkdir(parents=True)
        path.write_text('[colors]\nsuccess = "green"\n')

        assert load_theme() == ThemeColors()


def test_rich_theme_styles() -> None:
    theme = get_rich_theme(ThemeColors())

    for name in ("success", "warning", "error", "info", "running", "stopped", "command"):
        assert name in theme.styles
