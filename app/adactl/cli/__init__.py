"""CLI package for adactl.

This package contains the Typer application and the command handlers.
"""

from adactl.cli.main import app

__all__ = ["app"]
