"""Upgrade command implementation.

Upgrading is not automated; the command only points at the upgrade
playbooks shipped in the automation tree.
"""

from rich.markup import escape

from adactl.core.settings import Settings
from adactl.utils.formatting import console, print_info


def run_upgrade(settings: Settings, target: str) -> int:
    """Print upgrade guidance without changing anything."""
    console.print(f"Upgrading [bold]{target}[/bold]...")
    print_info("Automated upgrades are not available yet; nothing was changed.")
    upgrade_steps = escape(str(settings.install_dir / "upgrade-steps"))
    console.print(f"Upgrade steps are available in [muted]{upgrade_steps}[/muted].")
    console.print(
        "To move to a new cardano-node release, run "
        "[command]adactl cardano-node --install --cardano-version X.Y.Z[/command]."
    )
    return 0
