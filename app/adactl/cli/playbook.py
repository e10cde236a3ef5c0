"""Playbook execution with user-facing output.

Shared by install, uninstall and remove-all.
"""

from pathlib import Path

from adactl.cli.display import print_command_failure
from adactl.core.ansible import build_playbook_run, execute_playbook
from adactl.core.settings import Settings
from adactl.utils.formatting import print_command, print_info, print_success


def run_playbook(
    settings: Settings,
    playbook: Path,
    param_file: Path,
    ansible_playbook: str = "ansible-playbook",
) -> int:
    """Run a playbook and report the outcome.

    Args:
        settings: Tool settings.
        playbook: Playbook to run.
        param_file: Parameter file passed as extra vars.
        ansible_playbook: Resolved ansible-playbook executable.

    Returns:
        Exit code of ansible-playbook.
    """
    run = build_playbook_run(settings, playbook, param_file, ansible_playbook)
    if run.needs_password:
        print_info(
            "Note: This playbook requires sudo privileges. You will be prompted for your password."
        )
    print_command(run.args)

    result = execute_playbook(run)
    if result.success:
        print_success("Playbook executed successfully")
    else:
        print_command_failure("Playbook execution failed", result.stderr)
    return result.returncode
