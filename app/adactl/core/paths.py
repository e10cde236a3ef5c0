"""Path management for adactl.

User-level files follow the XDG Base Directory Specification:

- Config: ~/.config/love2automate-ada/ (settings.toml, config.json, theme.toml)

System-level paths (the automation install tree) live in Settings,
not here, so they can be substituted in tests.
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "love2automate-ada"

# Directory the dependency helper script writes its JSON output to
DEPENDENCY_OUTPUT_DIR = Path("/tmp")


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/love2automate-ada/ (or XDG_CONFIG_HOME/love2automate-ada/).
    """
    base = os.environ.get("XDG_CONFIG_HOME")
    if base:
        return Path(base) / APP_NAME
    return Path.home() / ".config" / APP_NAME


def get_node_config_path() -> Path:
    """Get the stored node configuration path.

    Returns:
        Path to ~/.config/love2automate-ada/config.json.
    """
    return get_config_dir() / "config.json"


def get_settings_path() -> Path:
    """Get the optional tool settings path.

    Returns:
        Path to ~/.config/love2automate-ada/settings.toml.
    """
    return get_config_dir() / "settings.toml"


def get_shell_rc_path() -> Path:
    """Get the shell rc file that receives the PATH export."""
    return Path.home() / ".bashrc"


def get_user_bin_dir() -> Path:
    """Get the per-user bin directory used by pipx and pip --user."""
    return Path.home() / ".local" / "bin"


def get_dependency_versions_path(cardano_version: str) -> Path:
    """Get the JSON file the dependency helper script writes for a version.

    Args:
        cardano_version: Cardano node version, e.g. "10.5.1".

    Returns:
        Path to /tmp/cardano_node_<version>_deps_version.json.
    """
    return DEPENDENCY_OUTPUT_DIR / f"cardano_node_{cardano_version}_deps_version.json"

