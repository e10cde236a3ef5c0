"""Status command implementation."""

from adactl.cli.display import print_node_status
from adactl.core.node_status import get_node_status
from adactl.core.settings import Settings
from adactl.utils.formatting import console


def run_status(settings: Settings) -> int:
    """Report whether the node runs and listens on its configured port.

    Always succeeds; a stopped node is a status, not an error.
    """
    console.print("Checking Cardano node status...")
    print_node_status(get_node_status(settings))
    return 0
