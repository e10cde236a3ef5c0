"""Stored node configuration I/O.

This module loads and saves the JSON document written after a successful
install and resolves the port the status check should look at.
"""

import logging
import os
from datetime import UTC, datetime
from pathlib import Path
from tempfile import NamedTemporaryFile

from pydantic import ValidationError

from adactl.core.errors import AdactlError
from adactl.core.paths import get_node_config_path
from adactl.models.node_config import NodeConfig

logger = logging.getLogger(__name__)


class ConfigError(AdactlError):
    """Raised when the stored configuration cannot be read or written."""


def load_node_config(path: Path | None = None) -> NodeConfig | None:
    """Load the stored node configuration.

    Args:
        path: Path to the config file. If None, uses the default location.

    Returns:
        The stored NodeConfig, or None if nothing was stored yet.

    Raises:
        ConfigError: If the file exists but cannot be read or is invalid.
    """
    config_path = path or get_node_config_path()

    if not config_path.exists():
        return None

    try:
        raw = config_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Failed to read stored config {config_path}: {e}") from e

    try:
        return NodeConfig.model_validate_json(raw)
    except ValidationError as e:
        raise ConfigError(f"Invalid stored config {config_path}: {e}") from e


def save_node_config(port: int, path: Path | None = None) -> Path:
    """Persist the port of a successful install.

    The file is written atomically by first writing to a temporary file
    in the same directory and then using os.replace() for atomic rename.

    Args:
        port: Port the node was installed with.
        path: Path to save to. If None, uses the default location.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_node_config_path()
    config = NodeConfig(cardano_port=port, last_installation=datetime.now(UTC))

    tmp_path: Path | None = None
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            f.write(config.model_dump_json(indent=2))
            f.write("\n")
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write stored config {config_path}: {e}") from e

    logger.debug("Stored cardano_port=%d in %s", port, config_path)
    return config_path


def delete_node_config(path: Path | None = None) -> bool:
    """Remove the stored configuration.

    Returns:
        True if a file was removed, False if there was none.

    Raises:
        ConfigError: If the file exists but cannot be removed.
    """
    config_path = path or get_node_config_path()
    try:
        config_path.unlink()
    except FileNotFoundError:
        return False
    except OSError as e:
        raise ConfigError(f"Failed to remove stored config {config_path}: {e}") from e
    return True
