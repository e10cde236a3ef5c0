"""CLI command handlers for adactl.

Each module implements one operation as a function returning an exit code.
"""

from adactl.cli.commands import (
    install,
    remove_all,
    setup,
    setup_deps,
    status,
    uninstall,
    upgrade,
)

__all__ = ["install", "remove_all", "setup", "setup_deps", "status", "uninstall", "upgrade"]
