"""Install command implementation.

Runs the build playbook for the Cardano node, optionally with a custom
port and cardano-node version, and records the installed port.
"""

import logging
from pathlib import Path

from adactl.cli.display import print_prerequisite_report
from adactl.cli.playbook import run_playbook
from adactl.core.dependencies import DependencyVersionError, fetch_dependency_versions
from adactl.core.node_config import ConfigError, save_node_config
from adactl.core.params import (
    PORT_KEY,
    ParameterFileError,
    load_parameters,
    write_patched_parameters,
)
from adactl.core.prerequisites import check_prerequisites
from adactl.core.settings import Settings
from adactl.utils.formatting import console, print_error, print_info, print_success, print_warning

logger = logging.getLogger(__name__)


def _resolve_port(settings: Settings, template: dict[str, object], port: int | None) -> int:
    """Port the node ends up listening on after this install."""
    if port is not None:
        return port
    value = template.get(PORT_KEY)
    if isinstance(value, int) and 1 <= value <= 65535:
        return value
    return settings.default_port


def run_install(
    settings: Settings,
    target: str,
    port: int | None = None,
    cardano_version: str | None = None,
) -> int:
    """Install the Cardano node.

    Args:
        settings: Tool settings.
        target: Validated target name.
        port: Port to configure, or None to keep the template's.
        cardano_version: cardano-node version to build, or None for the
            template's.

    Returns:
        Exit code for the process.
    """
    console.print(f"Installing [bold]{target}[/bold]...")

    playbook = settings.install_playbook_path
    template_path = settings.install_params_path

    report = check_prerequisites(settings, playbook, template_path)
    if not report.ok:
        print_prerequisite_report(report)
        return 1

    try:
        template = load_parameters(template_path)
    except ParameterFileError as e:
        print_error(str(e))
        return 1

    updates: dict[str, object] = {}
    if port is not None:
        updates[PORT_KEY] = port

    if cardano_version is not None:
        print_info(f"Resolving dependency versions for cardano-node {cardano_version}...")
        try:
            versions = fetch_dependency_versions(settings, cardano_version)
        except DependencyVersionError as e:
            print_error(str(e))
            return e.returncode
        updates.update(versions.to_parameters())
        console.print(
            f"  GHC [info]{versions.ghc}[/info], Cabal [info]{versions.cabal}[/info], "
            f"libsodium [muted]{versions.libsodium}[/muted]"
        )

    param_file: Path = template_path
    patched: Path | None = None
    if updates:
        try:
            patched = write_patched_parameters(template_path, updates)
        except ParameterFileError as e:
            print_error(str(e))
            return 1
        param_file = patched

    try:
        code = run_playbook(
            settings, playbook, param_file, report.ansible_playbook or "ansible-playbook"
        )
    finally:
        if patched is not None:
            patched.unlink(missing_ok=True)

    if code != 0:
        return code

    resolved_port = _resolve_port(settings, template, port)
    try:
        saved = save_node_config(resolved_port)
    except ConfigError as e:
        print_warning(f"Node installed but the configuration could not be saved: {e}")
        return 0
    logger.debug("Saved node configuration to %s", saved)
    print_success(f"Cardano node configured on port {resolved_port}")
    return 0
