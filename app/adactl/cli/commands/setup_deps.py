"""Setup-deps command implementation.

Installs Ansible, puts ~/.local/bin on PATH and installs the Ansible
collections the playbooks use.
"""

import logging

from rich.markup import escape

from adactl.cli.display import print_command_failure
from adactl.core.bootstrap import OnFailure, Step, collection_steps, run_step, system_steps
from adactl.core.prerequisites import find_ansible_tool
from adactl.core.settings import Settings
from adactl.core.shell_rc import add_path_export
from adactl.utils.formatting import (
    console,
    print_error,
    print_info,
    print_next_steps,
    print_success,
    print_warning,
)

logger = logging.getLogger(__name__)


def _run_steps(steps: list[Step]) -> int:
    """Run steps in order, stopping at the first aborting failure.

    Returns:
        0 if every aborting step succeeded, else the failing exit code.
    """
    for step in steps:
        print_info(f"{step.description}...")
        ran, result = run_step(step)
        if result.success:
            print_success(f"{ran.description}: done")
            continue
        if ran.on_failure is OnFailure.ABORT:
            print_command_failure(f"{ran.description} failed", result.stderr)
            return result.returncode
        if ran.on_failure is OnFailure.WARN:
            print_warning(f"{ran.description} failed, continuing")
        else:
            logger.debug("Ignoring failure of '%s' (exit %d)", ran.description, result.returncode)
    return 0


def run_setup_deps(settings: Settings) -> int:
    """Install the Ansible runtime and collections.

    Returns:
        Exit code for the process.
    """
    print_info("Setting up dependencies: Ansible and required collections.")

    code = _run_steps(system_steps())
    if code != 0:
        return code

    try:
        if add_path_export():
            print_success("PATH updated in shell rc file")
        else:
            print_success("PATH already configured in shell rc file")
    except OSError as e:
        print_error(f"Failed to update shell rc file: {e}")
        return 1

    ansible_galaxy = find_ansible_tool("ansible-galaxy")
    if ansible_galaxy is None:
        print_error("Could not find ansible-galaxy command")
        return 1
    logger.debug("Using ansible-galaxy at %s", ansible_galaxy)

    code = _run_steps(collection_steps(ansible_galaxy, settings.required_collections))
    if code != 0:
        return code

    console.print()
    print_success("Dependencies setup completed successfully!")
    print_warning(
        "Restart your terminal or run 'source ~/.bashrc' for PATH changes to take effect."
    )
    print_next_steps(
        [
            "Run: [command]adactl --setup[/command]",
            "Configure your inventory file: "
            f"[muted]{escape(str(settings.inventory_path))}[/muted]",
            "Run: [command]adactl cardano-node --install[/command]",
        ]
    )
    return 0
