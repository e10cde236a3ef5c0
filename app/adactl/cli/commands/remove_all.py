"""Remove-all command implementation.

Tears down everything adactl set up: the node service, the node itself
(via the uninstall playbook), the automation tree, the PATH export and
the stored configuration. Requires a typed confirmation phrase.
"""

import logging

import typer
from rich.markup import escape

from adactl.cli.display import print_command_failure
from adactl.cli.playbook import run_playbook
from adactl.core.installer import SetupError, remove_tree
from adactl.core.node_config import ConfigError, delete_node_config
from adactl.core.node_status import service_installed
from adactl.core.prerequisites import find_ansible_tool
from adactl.core.settings import Settings
from adactl.core.shell_rc import remove_path_export
from adactl.utils.formatting import console, print_error, print_info, print_success, print_warning
from adactl.utils.shell import run_interactive

logger = logging.getLogger(__name__)


def _stop_service(service: str) -> int:
    """Stop and disable the node's systemd unit if it exists."""
    if not service_installed(service):
        print_info(f"Service {service} not installed, skipping")
        return 0
    for action in ("stop", "disable"):
        args = ["sudo", "systemctl", action, service]
        returncode = run_interactive(args)
        if returncode != 0:
            print_command_failure(f"systemctl {action} {service} failed", "")
            return returncode
        print_success(f"Service {service}: {action} done")
    return 0


def _uninstall_node(settings: Settings) -> int:
    """Run the uninstall playbook when the tree and Ansible are present."""
    ansible_playbook = find_ansible_tool("ansible-playbook")
    playbook = settings.uninstall_playbook_path
    param_file = settings.uninstall_params_path
    if (
        ansible_playbook is None
        or not playbook.is_file()
        or not param_file.is_file()
        or not settings.inventory_path.is_file()
    ):
        print_warning("Skipping uninstall playbook: automation files or Ansible not available")
        return 0
    return run_playbook(settings, playbook, param_file, ansible_playbook)


def run_remove_all(settings: Settings) -> int:
    """Remove the node and all automation files after confirmation.

    Returns:
        Exit code for the process. Declining the confirmation is not an error.
    """
    phrase = settings.confirmation_phrase
    print_warning("This removes the Cardano node, its service and all automation files.")
    console.print(f"  Install directory: [muted]{escape(str(settings.install_dir))}[/muted]")
    try:
        answer = typer.prompt(f"Type '{phrase}' to confirm", default="", show_default=False)
    except typer.Abort:
        # stdin closed (Ctrl-D or non-interactive run)
        answer = ""
        console.print()
    if answer != phrase:
        print_info("Aborted. Nothing was removed.")
        return 0

    code = _stop_service(settings.service_name)
    if code != 0:
        return code

    code = _uninstall_node(settings)
    if code != 0:
        return code

    try:
        remove_tree(settings.install_dir)
    except SetupError as e:
        print_error(str(e))
        return e.returncode
    print_success(f"Removed {settings.install_dir}")

    try:
        if remove_path_export():
            print_success("Removed PATH export from shell rc file")
    except OSError as e:
        print_error(f"Failed to update shell rc file: {e}")
        return 1

    try:
        delete_node_config()
    except ConfigError as e:
        print_error(str(e))
        return 1

    print_success("All components removed")
    return 0
