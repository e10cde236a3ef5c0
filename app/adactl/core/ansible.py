"""Ansible playbook execution.

Builds the ansible-playbook command line for the automation tree and
runs it, interactively when Ansible has to ask for the sudo password.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from adactl.core.settings import Settings
from adactl.utils.shell import CommandResult, run_command, run_interactive, run_streaming

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PlaybookRun:
    """A prepared ansible-playbook invocation.

    Attributes:
        args: Full command line.
        cwd: Working directory (the automation tree).
        needs_password: True if Ansible will prompt for the become password.
    """

    args: list[str]
    cwd: Path
    needs_password: bool


def passwordless_sudo() -> bool:
    """Check whether sudo works without a password prompt."""
    return run_command(["sudo", "-n", "true"]).success


def build_playbook_run(
    settings: Settings,
    playbook: Path,
    param_file: Path,
    ansible_playbook: str = "ansible-playbook",
) -> PlaybookRun:
    """Assemble the ansible-playbook command line.

    Args:
        settings: Tool settings locating the inventory and install tree.
        playbook: Playbook to run.
        param_file: Parameter file passed as extra vars.
        ansible_playbook: Executable to invoke.

    Returns:
        PlaybookRun ready to execute.
    """
    needs_password = not passwordless_sudo()
    args = [
        ansible_playbook,
        "-i",
        str(settings.inventory_path),
        "-e",
        f"@{param_file}",
    ]
    if needs_password:
        args.append("--ask-become-pass")
    args.append(str(playbook))
    return PlaybookRun(args=args, cwd=settings.install_dir, needs_password=needs_password)


def execute_playbook(run: PlaybookRun) -> CommandResult:
    """Run a prepared playbook invocation.

    Output is streamed to the terminal. When a become password is needed
    the child inherits the terminal instead so Ansible can prompt; in that
    case nothing is captured.

    Returns:
        CommandResult of the ansible-playbook process.
    """
    logger.info("Running playbook: %s", " ".join(run.args))
    if run.needs_password:
        returncode = run_interactive(run.args, cwd=str(run.cwd))
        return CommandResult(stdout="", stderr="", returncode=returncode)
    return run_streaming(run.args, cwd=str(run.cwd))
