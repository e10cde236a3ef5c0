"""Tool settings.

Settings hold the process-wide configuration that every command handler
receives explicitly: where the automation tree lives, where it is
downloaded from, and the names of the files inside it.

Settings are read from ~/.config/love2automate-ada/settings.toml (optional);
ADACTL_INSTALL_DIR and ADACTL_ARCHIVE_URL override the file.
"""

import logging
import os
import tomllib
from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from adactl.core.errors import AdactlError
from adactl.core.paths import get_settings_path

logger = logging.getLogger(__name__)

DEFAULT_INSTALL_DIR = Path("/opt/love2automate-ada")
DEFAULT_ARCHIVE_URL = (
    "https://github.com/love2automate/love2automate-ada/archive/refs/heads/main.zip"
)

# Environment overrides
ENV_INSTALL_DIR = "ADACTL_INSTALL_DIR"
ENV_ARCHIVE_URL = "ADACTL_ARCHIVE_URL"


class SettingsError(AdactlError):
    """Raised when the settings file cannot be read or is invalid."""


class Settings(BaseModel):
    """Configuration for the automation tree and the managed node.

    Attributes:
        install_dir: Root of the extracted automation tree.
        archive_url: Zip archive downloaded by ``--setup``.
        inventory_file: Ansible inventory, relative to install_dir.
        install_playbook: Playbook run by ``--install``.
        install_params: Parameter template patched for ``--install``.
        uninstall_playbook: Playbook run by ``--uninstall``.
        uninstall_params: Fixed parameter file for ``--uninstall``.
        dependency_script: Helper script resolving dependency versions.
        node_process: Process name matched by the status check.
        service_name: systemd unit stopped by ``--remove-all``.
        default_port: Port assumed when nothing else is configured.
        required_collections: Ansible collections the playbooks need.
        excluded_paths: Top-level archive entries not extracted by setup.
        confirmation_phrase: Text that must be typed to confirm ``--remove-all``.
    """

    model_config = ConfigDict(extra="forbid")

    install_dir: Path = DEFAULT_INSTALL_DIR
    archive_url: str = DEFAULT_ARCHIVE_URL
    inventory_file: str = "inventory.ini"
    install_playbook: str = "Build.yml"
    install_params: str = "install_param.yml"
    uninstall_playbook: str = "Uninstall.yml"
    uninstall_params: str = "uninstall-steps/uninstall_param.yml"
    dependency_script: str = "scripts/get-dependency-versions.sh"
    node_process: str = "cardano-node"
    service_name: str = "cardano-node"
    default_port: Annotated[int, Field(ge=1, le=65535)] = 6002
    required_collections: list[str] = Field(
        default_factory=lambda: ["community.general", "ansible.posix"]
    )
    excluded_paths: list[str] = Field(
        default_factory=lambda: [
            "app",
            "tests",
            "love2automate-ada-terminalapp",
            "pyproject.toml",
        ]
    )
    confirmation_phrase: str = "REMOVE ALL"

    @property
    def inventory_path(self) -> Path:
        return self.install_dir / self.inventory_file

    @property
    def install_playbook_path(self) -> Path:
        return self.install_dir / self.install_playbook

    @property
    def install_params_path(self) -> Path:
        return self.install_dir / self.install_params

    @property
    def uninstall_playbook_path(self) -> Path:
        return self.install_dir / self.uninstall_playbook

    @property
    def uninstall_params_path(self) -> Path:
        return self.install_dir / self.uninstall_params

    @property
    def dependency_script_path(self) -> Path:
        return self.install_dir / self.dependency_script


def load_settings(path: Path | None = None) -> Settings:
    """Load settings from TOML with environment overrides.

    A missing settings file is not an error; defaults apply.

    Args:
        path: Path to the settings file. If None, uses the default location.

    Returns:
        Validated Settings object.

    Raises:
        SettingsError: If the file has invalid TOML syntax or content.
    """
    settings_path = path or get_settings_path()
    data: dict[str, object] = {}

    if settings_path.exists():
        try:
            with open(settings_path, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise SettingsError(f"Invalid TOML syntax in {settings_path}: {e}") from e
        except OSError as e:
            raise SettingsError(f"Failed to read settings {settings_path}: {e}") from e
        logger.debug("Loaded settings from %s", settings_path)

    install_dir = os.environ.get(ENV_INSTALL_DIR)
    if install_dir:
        data["install_dir"] = install_dir
    archive_url = os.environ.get(ENV_ARCHIVE_URL)
    if archive_url:
        data["archive_url"] = archive_url

    try:
        return Settings.model_validate(data)
    except ValidationError as e:
        raise SettingsError(f"Invalid settings: {e}") from e
