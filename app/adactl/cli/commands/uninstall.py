"""Uninstall command implementation.

Runs the uninstall playbook with its fixed parameter file.
"""

from adactl.cli.display import print_prerequisite_report
from adactl.cli.playbook import run_playbook
from adactl.core.prerequisites import check_prerequisites
from adactl.core.settings import Settings
from adactl.utils.formatting import console


def run_uninstall(settings: Settings, target: str) -> int:
    """Uninstall the Cardano node.

    Returns:
        Exit code for the process.
    """
    console.print(f"Uninstalling [bold]{target}[/bold]...")

    playbook = settings.uninstall_playbook_path
    param_file = settings.uninstall_params_path

    report = check_prerequisites(settings, playbook, param_file)
    if not report.ok:
        print_prerequisite_report(report)
        return 1

    return run_playbook(
        settings, playbook, param_file, report.ansible_playbook or "ansible-playbook"
    )
