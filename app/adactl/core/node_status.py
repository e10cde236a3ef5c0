"""Node runtime status checks.

Determines the port the node is configured for, whether a node process
is running and whether the port is listening.
"""

import logging
import os
import re

from adactl.core.node_config import ConfigError, load_node_config
from adactl.core.params import PORT_KEY, ParameterFileError, load_parameters
from adactl.core.settings import Settings
from adactl.models.status import NodeStatus
from adactl.utils.shell import command_exists, run_command

logger = logging.getLogger(__name__)


def resolve_configured_port(settings: Settings) -> tuple[int, str]:
    """Find the port the node is configured for.

    Priority:
    1. Port stored after the last successful install
    2. cardano_port in the install parameter template
    3. Settings default

    Returns:
        Tuple of (port, source) where source is "stored", "template" or "default".
    """
    try:
        stored = load_node_config()
    except ConfigError as e:
        logger.warning("Ignoring stored config: %s", e)
        stored = None
    if stored is not None:
        return stored.cardano_port, "stored"

    template = settings.install_params_path
    if template.is_file():
        try:
            value = load_parameters(template).get(PORT_KEY)
        except ParameterFileError as e:
            logger.warning("Ignoring parameter template: %s", e)
            value = None
        if isinstance(value, int) and 1 <= value <= 65535:
            return value, "template"

    return settings.default_port, "default"


def find_node_pids(process_name: str) -> tuple[int, ...]:
    """Find process IDs whose process name is exactly the node binary name.

    adactl itself and its parent shell are never reported, even when their
    command lines mention the node.
    """
    result = run_command(["pgrep", "-x", process_name])
    if not result.success:
        return ()
    own = {os.getpid(), os.getppid()}
    pids = (int(pid) for pid in result.stdout.split() if pid.isdigit())
    return tuple(pid for pid in pids if pid not in own)


def parse_listening_ports(output: str) -> set[int]:
    """Extract local ports from ``ss -tuln`` or ``netstat -tuln`` output."""
    ports: set[int] = set()
    for line in output.splitlines():
        for column in line.split():
            # Local address column: 0.0.0.0:6002, [::]:6002, *:6002, :::6002
            match = re.fullmatch(r"(?:\[[^\]]*\]|[^\s\[\]]*):(\d{1,5})", column)
            if match is not None:
                ports.add(int(match.group(1)))
                break
    return ports


def is_port_listening(port: int) -> bool:
    """Check whether a TCP/UDP socket listens on a local port.

    Uses ss when available and falls back to netstat.
    """
    tool = "ss" if command_exists("ss") else "netstat"
    result = run_command([tool, "-tuln"])
    if not result.success:
        logger.debug("%s -tuln failed: %s", tool, result.stderr.strip())
        return False
    return port in parse_listening_ports(result.stdout)


def get_node_status(settings: Settings) -> NodeStatus:
    """Collect the node's runtime status."""
    port, source = resolve_configured_port(settings)
    pids = find_node_pids(settings.node_process)
    return NodeStatus(
        port=port,
        pids=pids,
        port_listening=is_port_listening(port),
        port_source=source,
    )


def service_installed(service_name: str) -> bool:
    """Check whether a systemd unit file exists for the service."""
    result = run_command(["systemctl", "list-unit-files", f"{service_name}.service"])
    return result.success and f"{service_name}.service" in result.stdout
