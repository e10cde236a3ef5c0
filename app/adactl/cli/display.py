"""Shared Rich display functions for command output.

Provides the printers used by several commands: prerequisite reports,
external command failures and the node status summary.
"""

from rich.markup import escape

from adactl.core.prerequisites import PrerequisiteReport
from adactl.models.status import NodeStatus
from adactl.utils.formatting import console, print_error, print_failure, print_success


def print_prerequisite_report(report: PrerequisiteReport) -> None:
    """Print every unmet prerequisite with a hint on how to fix it."""
    print_error("Prerequisites not met:")
    for problem in report.problems:
        console.print(f"  [error]✗[/] {escape(problem)}")
    console.print()
    console.print(
        "[muted]Run [command]adactl --setup-deps[/command] to install Ansible and "
        "[command]adactl --setup[/command] to install the automation files.[/muted]"
    )


def print_command_failure(description: str, stderr: str) -> None:
    """Report a failed external command with its captured stderr."""
    print_failure(description)
    detail = stderr.strip()
    if detail:
        print_error(detail)


def print_node_status(status: NodeStatus) -> None:
    """Print the node status summary.

    The configured port is always shown, whether or not the node runs.
    """
    console.print(
        f"Configured port: [info]{status.port}[/info] [muted]({status.port_source})[/muted]"
    )

    if status.is_running:
        print_success("Cardano node is running")
        pids = ", ".join(str(pid) for pid in status.pids)
        console.print(f"  Process ID: [muted]{pids}[/muted]")
    else:
        console.print("[stopped]✗ Cardano node is not running[/stopped]")

    if status.port_listening:
        print_success(f"Port {status.port} is listening")
    else:
        console.print(f"[stopped]✗ Port {status.port} is not listening[/stopped]")
