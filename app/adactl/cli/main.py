"""Main CLI application entry point.

Defines the Typer application: a single root command that takes an
optional target and exactly one operation flag, validates the request
and dispatches it to the matching command handler.
"""

import logging
from typing import Annotated

import typer
from rich.logging import RichHandler

from adactl import __version__
from adactl.cli.commands.install import run_install
from adactl.cli.commands.remove_all import run_remove_all
from adactl.cli.commands.setup import run_setup
from adactl.cli.commands.setup_deps import run_setup_deps
from adactl.cli.commands.status import run_status
from adactl.cli.commands.uninstall import run_uninstall
from adactl.cli.commands.upgrade import run_upgrade
from adactl.core.errors import UsageError
from adactl.core.operations import Operation, Request, validate_request
from adactl.core.settings import Settings, SettingsError, load_settings
from adactl.utils.formatting import err_console, print_error

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="adactl",
    help="Cardano node management: drives the love2automate-ada Ansible playbooks.",
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"adactl version {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Route log records through Rich on stderr."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False, show_time=verbose)],
        force=True,
    )


def dispatch(request: Request, settings: Settings) -> int:
    """Run the handler for a validated request and return its exit code."""
    logger.debug("Dispatching %s (target=%s)", request.operation.value, request.target)
    operation = request.operation
    target = request.target or ""

    if operation == Operation.INSTALL:
        return run_install(
            settings, target, port=request.port, cardano_version=request.cardano_version
        )
    if operation == Operation.UNINSTALL:
        return run_uninstall(settings, target)
    if operation == Operation.UPGRADE:
        return run_upgrade(settings, target)
    if operation == Operation.STATUS:
        return run_status(settings)
    if operation == Operation.SETUP:
        return run_setup(settings)
    if operation == Operation.SETUP_DEPS:
        return run_setup_deps(settings)
    return run_remove_all(settings)


@app.command()
def main(
    target: Annotated[
        str | None,
        typer.Argument(
            help="Target to operate on (cardano-node). Not needed for status or setup.",
            show_default=False,
        ),
    ] = None,
    install: Annotated[
        bool,
        typer.Option("--install", "-i", help="Install the target."),
    ] = False,
    uninstall: Annotated[
        bool,
        typer.Option("--uninstall", "-u", help="Uninstall the target."),
    ] = False,
    upgrade: Annotated[
        bool,
        typer.Option("--upgrade", "-g", help="Show upgrade guidance for the target."),
    ] = False,
    status: Annotated[
        bool,
        typer.Option("--status", "-s", help="Check whether the node is running."),
    ] = False,
    setup: Annotated[
        bool,
        typer.Option("--setup", help="Download and install the automation files."),
    ] = False,
    setup_deps: Annotated[
        bool,
        typer.Option("--setup-deps", help="Install Ansible and required collections."),
    ] = False,
    remove_all: Annotated[
        bool,
        typer.Option("--remove-all", help="Remove the node and all automation files."),
    ] = False,
    port: Annotated[
        str | None,
        typer.Option(
            "--port", "-p", metavar="PORT", help="Node port (1-65535, with --install)."
        ),
    ] = None,
    cardano_version: Annotated[
        str | None,
        typer.Option(
            "--cardano-version",
            "-cv",
            help="cardano-node version X.Y or X.Y.Z (with --install).",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose output."),
    ] = False,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
) -> None:
    """adactl - install, uninstall and monitor a Cardano node.

    Exactly one operation flag must be given.

    Examples:
        adactl cardano-node --install
        adactl cardano-node -i --port 6001 --cardano-version 10.5.1
        adactl cardano-node --uninstall
        adactl --status
        adactl --setup
    """
    configure_logging(verbose)

    flags = {
        Operation.INSTALL: install,
        Operation.UNINSTALL: uninstall,
        Operation.UPGRADE: upgrade,
        Operation.STATUS: status,
        Operation.SETUP: setup,
        Operation.SETUP_DEPS: setup_deps,
        Operation.REMOVE_ALL: remove_all,
    }
    try:
        request = validate_request(flags, target, port=port, cardano_version=cardano_version)
    except UsageError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    try:
        settings = load_settings()
    except SettingsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    code = dispatch(request, settings)
    if code != 0:
        raise typer.Exit(code=code)


if __name__ == "__main__":
    app()
