"""Runtime dependency bootstrap.

``--setup-deps`` installs Ansible and the collections the playbooks need.
Each step is a single external command; steps run strictly in order.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum

from adactl.utils.shell import CommandResult, run_interactive, run_streaming

logger = logging.getLogger(__name__)

APT_PACKAGES = ["python3-pip", "python3-venv", "pipx"]


class OnFailure(Enum):
    """What a failing step means for the rest of the bootstrap."""

    ABORT = "abort"
    WARN = "warn"
    IGNORE = "ignore"


@dataclass(frozen=True)
class Step:
    """One bootstrap command.

    Attributes:
        description: Text shown while the step runs.
        args: Command line.
        on_failure: How a non-zero exit is handled.
        interactive: Inherit the terminal (sudo may prompt for a password).
        fallback: Step tried when this one fails, before on_failure applies.
    """

    description: str
    args: list[str]
    on_failure: OnFailure = OnFailure.ABORT
    interactive: bool = False
    fallback: "Step | None" = field(default=None)


def system_steps() -> list[Step]:
    """Steps installing the system packages and the Ansible runtime."""
    return [
        Step("Updating package index", ["sudo", "apt-get", "update"], interactive=True),
        Step(
            "Installing required packages",
            ["sudo", "apt-get", "install", "-y", *APT_PACKAGES],
            interactive=True,
        ),
        Step(
            "Installing Ansible Core using pipx",
            ["pipx", "install", "ansible-core"],
            fallback=Step(
                "Installing Ansible Core with pip3 --user",
                ["pip3", "install", "--user", "--break-system-packages", "ansible-core"],
            ),
        ),
        Step(
            "Installing full Ansible package",
            ["pipx", "install", "ansible"],
            on_failure=OnFailure.WARN,
        ),
        Step(
            "Ensuring pipx is properly configured",
            ["pipx", "ensurepath"],
            on_failure=OnFailure.IGNORE,
        ),
    ]


def collection_steps(ansible_galaxy: str, collections: list[str]) -> list[Step]:
    """Steps installing the required Ansible collections."""
    return [
        Step(
            f"Installing {name} collection",
            [ansible_galaxy, "collection", "install", name],
        )
        for name in collections
    ]


def run_step(step: Step) -> tuple[Step, CommandResult]:
    """Run a step, trying its fallback when it fails.

    Returns:
        Tuple of (step that produced the result, result). The first element
        is the fallback step when the fallback ran.
    """
    logger.info("%s: %s", step.description, " ".join(step.args))
    if step.interactive:
        result = CommandResult(stdout="", stderr="", returncode=run_interactive(step.args))
    else:
        result = run_streaming(step.args)

    if not result.success and step.fallback is not None:
        logger.info("%s failed (exit %d), trying fallback", step.description, result.returncode)
        return run_step(step.fallback)
    return step, result
