"""Rich console output helpers.

Normal output goes to ``console`` (stdout); warnings and errors go to
``err_console`` (stderr). Both share the theme from ``adactl.core.theme``.

The print_* message helpers print their text literally; any Rich markup
in the message is escaped.
"""

import sys

from rich.console import Console
from rich.markup import escape

from adactl.core.theme import get_theme


def _make_console(stderr: bool = False) -> Console:
    stream = sys.stderr if stderr else sys.stdout
    # Force truecolor on terminals so hex theme colors render exactly
    color_system = "truecolor" if stream.isatty() else None
    return Console(theme=get_theme(), stderr=stderr, color_system=color_system)


console = _make_console()
err_console = _make_console(stderr=True)


def print_info(message: str) -> None:
    console.print(f"[info]{escape(message)}[/]")


def print_warning(message: str) -> None:
    err_console.print(f"[warning]Warning:[/] {escape(message)}")


def print_error(message: str) -> None:
    err_console.print(f"[error]Error:[/] {escape(message)}")


def print_success(message: str) -> None:
    """Print a completed check or step with a check mark."""
    console.print(f"[success]✓ {escape(message)}[/]")


def print_failure(message: str) -> None:
    """Print a failed check or step with a cross."""
    console.print(f"[error]✗ {escape(message)}[/]")


def print_command(args: list[str]) -> None:
    """Echo an external command line before it runs.

    The arguments are escaped so paths containing brackets are printed
    verbatim rather than read as Rich markup.
    """
    console.print(f"[muted]Executing:[/] [command]{escape(' '.join(args))}[/]", highlight=False)


def print_next_steps(steps: list[str]) -> None:
    """Print a numbered "Next steps" list (items may contain markup)."""
    console.print()
    console.print("[bold]Next steps:[/bold]")
    for number, step in enumerate(steps, start=1):
        console.print(f"  {number}. {step}")
