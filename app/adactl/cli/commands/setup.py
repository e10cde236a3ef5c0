"""Setup command implementation.

Downloads the automation files and installs them into the system
install directory. The new tree is fully staged before an existing
installation is replaced, and the existing inventory file is carried
over into it.
"""

import logging
import shutil
import tempfile
from pathlib import Path

import typer
from rich.markup import escape

from adactl.core.installer import (
    SetupError,
    install_automation,
    remove_tree,
    stage_automation,
)
from adactl.core.paths import get_config_dir
from adactl.core.settings import Settings
from adactl.utils.formatting import (
    print_error,
    print_info,
    print_next_steps,
    print_success,
    print_warning,
)

logger = logging.getLogger(__name__)

INVENTORY_BACKUP_NAME = "inventory.ini.bak"


def _rescue_inventory(staged_inventory: Path) -> Path | None:
    """Copy a carried-over inventory out of staging before it is discarded."""
    backup = get_config_dir() / INVENTORY_BACKUP_NAME
    try:
        backup.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(staged_inventory, backup)
    except OSError as e:
        logger.warning("Could not back up inventory to %s: %s", backup, e)
        return None
    return backup


def run_setup(settings: Settings) -> int:
    """Install or refresh the automation tree.

    Returns:
        Exit code for the process.
    """
    install_dir = settings.install_dir
    inventory = settings.inventory_path
    replacing = install_dir.exists()

    if replacing:
        print_warning(f"An installation already exists at {install_dir}")
        if not typer.confirm("Overwrite it?", default=False):
            print_info("Setup cancelled. Nothing was changed.")
            return 0

    print_info(f"Downloading automation files from {settings.archive_url}")
    with tempfile.TemporaryDirectory(prefix="adactl-setup-") as tmp:
        staging = Path(tmp) / "tree"
        try:
            count = stage_automation(settings.archive_url, staging, settings.excluded_paths)
        except SetupError as e:
            print_error(str(e))
            if replacing:
                print_info(f"The existing installation at {install_dir} was left unchanged.")
            return e.returncode

        staged_inventory = staging / settings.inventory_file
        carried = False
        if replacing and inventory.is_file():
            try:
                staged_inventory.parent.mkdir(parents=True, exist_ok=True)
                shutil.copy2(inventory, staged_inventory)
            except OSError as e:
                print_error(f"Cannot carry over inventory {inventory}: {e}")
                return 1
            carried = True

        try:
            if replacing:
                remove_tree(install_dir)
            install_automation(staging, install_dir)
        except SetupError as e:
            print_error(str(e))
            if carried:
                backup = _rescue_inventory(staged_inventory)
                if backup is not None:
                    print_warning(f"Your previous inventory was saved to {backup}")
            return e.returncode

    if carried:
        print_info(f"Kept existing inventory {inventory}")
    print_success(f"Installed {count} files to {install_dir}")
    print_next_steps(
        [
            "Run: [command]adactl --setup-deps[/command]",
            f"Configure your inventory file: [muted]{escape(str(inventory))}[/muted]",
            "Run: [command]adactl cardano-node --install[/command]",
        ]
    )
    return 0
