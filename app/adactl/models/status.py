"""Node status model."""

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class NodeStatus:
    """Snapshot of the node's runtime state.

    Attributes:
        port: Configured port the check was made against.
        pids: Process IDs matching the node binary name.
        port_listening: Whether something listens on the configured port.
        port_source: Where the port came from ("stored", "template", "default").
    """

    port: int
    pids: tuple[int, ...] = field(default=())
    port_listening: bool = False
    port_source: str = "default"

    @property
    def is_running(self) -> bool:
        """Check if at least one node process was found."""
        return bool(self.pids)
