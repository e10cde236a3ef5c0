"""Pre-flight checks for playbook runs.

Before anything is mutated, install and uninstall verify that Ansible is
available, the collections the playbooks use are installed, and the
playbook, parameter and inventory files exist.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from adactl.core.paths import get_user_bin_dir
from adactl.core.settings import Settings
from adactl.utils.shell import command_exists, run_command

logger = logging.getLogger(__name__)


@dataclass
class PrerequisiteReport:
    """Outcome of a prerequisite check.

    Attributes:
        problems: Human-readable description of each unmet prerequisite.
        ansible_playbook: Resolved ansible-playbook executable, if found.
    """

    problems: list[str] = field(default_factory=list)
    ansible_playbook: str | None = None

    @property
    def ok(self) -> bool:
        return not self.problems


def find_ansible_tool(name: str) -> str | None:
    """Locate an Ansible executable on PATH or in ~/.local/bin.

    pipx installs into ~/.local/bin, which is only on PATH after the shell
    rc file has been re-sourced, so it is checked explicitly.

    Args:
        name: Executable name, e.g. "ansible-playbook".

    Returns:
        Command to invoke, or None if not found.
    """
    if command_exists(name):
        return name
    candidate = get_user_bin_dir() / name
    if candidate.is_file():
        return str(candidate)
    return None


def installed_collections(ansible_galaxy: str) -> set[str]:
    """List installed Ansible collections by fully-qualified name.

    Args:
        ansible_galaxy: ansible-galaxy executable.

    Returns:
        Set of names such as "community.general". Empty if listing failed.
    """
    result = run_command([ansible_galaxy, "collection", "list"])
    if not result.success:
        logger.debug("ansible-galaxy collection list failed: %s", result.stderr.strip())
        return set()

    names: set[str] = set()
    for line in result.stdout.splitlines():
        parts = line.split()
        if len(parts) >= 2 and "." in parts[0] and not parts[0].startswith("#"):
            names.add(parts[0])
    return names


def inventory_has_hosts(path: Path) -> bool:
    """Check that an inventory file has at least one non-comment line."""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError:
        return False
    for line in text.splitlines():
        stripped = line.strip()
        if stripped and not stripped.startswith(("#", ";")):
            return True
    return False


def check_prerequisites(
    settings: Settings,
    playbook: Path,
    param_file: Path,
) -> PrerequisiteReport:
    """Run every pre-flight check and collect the problems found.

    Args:
        settings: Tool settings locating the inventory.
        playbook: Playbook about to be run.
        param_file: Parameter file passed to the playbook.

    Returns:
        PrerequisiteReport listing all unmet prerequisites.
    """
    report = PrerequisiteReport()

    report.ansible_playbook = find_ansible_tool("ansible-playbook")
    if report.ansible_playbook is None:
        report.problems.append("ansible-playbook not found (run --setup-deps)")
    else:
        galaxy = find_ansible_tool("ansible-galaxy")
        installed = installed_collections(galaxy) if galaxy else set()
        for collection in settings.required_collections:
            if collection not in installed:
                report.problems.append(
                    f"Ansible collection {collection} not installed (run --setup-deps)"
                )

    if not playbook.is_file():
        report.problems.append(f"Playbook not found: {playbook} (run --setup)")
    if not param_file.is_file():
        report.problems.append(f"Parameter file not found: {param_file}")

    inventory = settings.inventory_path
    if not inventory.is_file():
        report.problems.append(f"Inventory file not found: {inventory}")
    elif not inventory_has_hosts(inventory):
        report.problems.append(f"Inventory file is empty: {inventory}")

    for problem in report.problems:
        logger.debug("Prerequisite not met: %s", problem)
    return report
