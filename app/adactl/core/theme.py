"""Terminal color theme.

The bundled ``data/theme.toml`` defines every color. A user file at
``~/.config/love2automate-ada/theme.toml`` may override any subset of the
``[colors]`` table; a broken override is reported and ignored.
"""

import logging
import re
import tomllib
from functools import cache
from importlib import resources
from pathlib import Path
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, ValidationError
from rich.theme import Theme

from adactl.core.paths import get_config_dir

logger = logging.getLogger(__name__)

HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


def _check_hex(value: str) -> str:
    color = value.strip()
    if HEX_COLOR.match(color) is None:
        msg = f"'{value}' is not a #RGB or #RRGGBB color"
        raise ValueError(msg)
    return color


HexColor = Annotated[str, AfterValidator(_check_hex)]


class ThemeColors(BaseModel):
    """Colors used by the CLI, as hex codes."""

    model_config = ConfigDict(extra="forbid", strict=True)

    text: HexColor = "#ffffff"
    muted: HexColor = "#b2bec3"
    header: HexColor = "#69B9A1"
    border: HexColor = "#29526d"

    success: HexColor = "#03b971"
    warning: HexColor = "#f5b332"
    error: HexColor = "#f53263"
    info: HexColor = "#0ec1c8"

    # Node process state and echoed commands
    running: HexColor = "#c1ff62"
    stopped: HexColor = "#f53263"
    command: HexColor = "#0e8ac8"


# Rich style name -> (color field, extra attributes)
STYLES: dict[str, tuple[str, str]] = {
    "text": ("text", ""),
    "muted": ("muted", ""),
    "header": ("header", ""),
    "bold_header": ("header", "bold"),
    "border": ("border", ""),
    "success": ("success", ""),
    "warning": ("warning", ""),
    "error": ("error", "bold"),
    "info": ("info", ""),
    "running": ("running", "bold"),
    "stopped": ("stopped", "bold"),
    "command": ("command", ""),
}


def get_user_theme_path() -> Path:
    """Path of the optional user override, ~/.config/love2automate-ada/theme.toml."""
    return get_config_dir() / "theme.toml"


def _colors_table(raw: str, origin: str) -> dict[str, str]:
    """Extract the string entries of the ``[colors]`` table.

    Raises:
        ValueError: If the text is not valid TOML or ``colors`` is not a table.
    """
    try:
        data = tomllib.loads(raw)
    except tomllib.TOMLDecodeError as e:
        raise ValueError(f"invalid TOML in {origin}: {e}") from e
    colors = data.get("colors", {})
    if not isinstance(colors, dict):
        raise ValueError(f"'colors' in {origin} must be a table")
    return {key: value for key, value in colors.items() if isinstance(value, str)}


def _user_overrides() -> dict[str, str]:
    path = get_user_theme_path()
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    except OSError as e:
        logger.warning("Cannot read theme file %s: %s", path, e)
        return {}
    try:
        overrides = _colors_table(raw, str(path))
    except ValueError as e:
        logger.warning("Ignoring theme file: %s", e)
        return {}
    logger.debug("Theme overrides from %s: %s", path, ", ".join(overrides) or "none")
    return overrides


def load_theme() -> ThemeColors:
    """Merge the bundled colors with the user's overrides.

    Returns:
        Validated colors. Falls back to the model defaults when the merged
        result does not validate.
    """
    bundled_file = resources.files("adactl.data").joinpath("theme.toml")
    bundled = _colors_table(bundled_file.read_text(encoding="utf-8"), "bundled theme")

    try:
        return ThemeColors.model_validate({**bundled, **_user_overrides()})
    except ValidationError as e:
        logger.warning("Invalid theme colors, using defaults: %s", e)
        return ThemeColors()


def get_rich_theme(colors: ThemeColors | None = None) -> Theme:
    """Build the Rich theme for a set of colors (loaded if not given)."""
    colors = colors or load_theme()
    styles: dict[str, str] = {}
    for name, (field, attributes) in STYLES.items():
        color = getattr(colors, field)
        styles[name] = f"{attributes} {color}".strip()
    return Theme(styles)


@cache
def get_theme() -> Theme:
    """Rich theme shared by the console instances."""
    return get_rich_theme()
