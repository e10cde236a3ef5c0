"""Operation selection and argument validation.

All usage errors are detected here, before any file is touched or any
external command runs.
"""

from dataclasses import dataclass
from enum import Enum

from adactl.core.dependencies import is_valid_version
from adactl.core.errors import UsageError

# Targets that can be installed, uninstalled or upgraded
NODE_TARGET = "cardano-node"
AVAILABLE_TARGETS = (NODE_TARGET,)


class Operation(str, Enum):
    """Operations selectable on the command line."""

    INSTALL = "install"
    UNINSTALL = "uninstall"
    UPGRADE = "upgrade"
    STATUS = "status"
    SETUP = "setup"
    SETUP_DEPS = "setup-deps"
    REMOVE_ALL = "remove-all"


# Operations that act on a named target
TARGETED_OPERATIONS = frozenset({Operation.INSTALL, Operation.UNINSTALL, Operation.UPGRADE})

OPERATION_FLAGS: dict[Operation, str] = {
    Operation.INSTALL: "--install/-i",
    Operation.UNINSTALL: "--uninstall/-u",
    Operation.UPGRADE: "--upgrade/-g",
    Operation.STATUS: "--status/-s",
    Operation.SETUP: "--setup",
    Operation.SETUP_DEPS: "--setup-deps",
    Operation.REMOVE_ALL: "--remove-all",
}


@dataclass(frozen=True, slots=True)
class Request:
    """A validated command-line request.

    Attributes:
        operation: Selected operation.
        target: Normalised target for targeted operations, else None.
        port: Requested node port (install only).
        cardano_version: Requested cardano-node version (install only).
    """

    operation: Operation
    target: str | None = None
    port: int | None = None
    cardano_version: str | None = None


def select_operation(flags: dict[Operation, bool]) -> Operation:
    """Pick the single operation whose flag is set.

    Raises:
        UsageError: If no flag or more than one flag is set.
    """
    selected = [op for op, enabled in flags.items() if enabled]
    if not selected:
        options = ", ".join(OPERATION_FLAGS.values())
        raise UsageError(f"Please specify an operation: {options}")
    if len(selected) > 1:
        chosen = ", ".join(OPERATION_FLAGS[op] for op in selected)
        raise UsageError(f"Please specify only one operation at a time (got {chosen})")
    return selected[0]


def validate_target(operation: Operation, target: str | None) -> str:
    """Check the target of install, uninstall or upgrade.

    Returns:
        The normalised (lower-case) target.

    Raises:
        UsageError: If the target is missing or unknown.
    """
    available = ", ".join(AVAILABLE_TARGETS)
    if target is None or not target.strip():
        raise UsageError(
            f"Target is required for {operation.value} operation. Available targets: {available}"
        )
    normalised = target.strip().lower()
    if normalised not in AVAILABLE_TARGETS:
        raise UsageError(f"Unknown target: {target}. Available targets: {available}")
    return normalised


def parse_port(value: int | str) -> int:
    """Convert a --port value to an int in the range 1-65535.

    Raises:
        UsageError: If the value is not an integer or out of range.
    """
    try:
        port = int(value)
    except ValueError:
        raise UsageError(f"Invalid port {value}: must be a number between 1 and 65535") from None
    if not 1 <= port <= 65535:
        raise UsageError(f"Invalid port {value}: must be between 1 and 65535")
    return port


def validate_request(
    flags: dict[Operation, bool],
    target: str | None = None,
    port: int | str | None = None,
    cardano_version: str | None = None,
) -> Request:
    """Validate the full command line.

    Args:
        flags: Operation flags as given on the command line.
        target: Positional target argument.
        port: --port value, as given on the command line or already parsed.
        cardano_version: --cardano-version value.

    Returns:
        The validated Request.

    Raises:
        UsageError: For any invalid combination or value.
    """
    operation = select_operation(flags)

    if operation != Operation.INSTALL:
        if port is not None:
            raise UsageError("--port can only be used with --install")
        if cardano_version is not None:
            raise UsageError("--cardano-version can only be used with --install")

    parsed_port = parse_port(port) if port is not None else None

    if cardano_version is not None and not is_valid_version(cardano_version):
        raise UsageError(
            f"Invalid cardano-node version '{cardano_version}': expected X.Y or X.Y.Z"
        )

    normalised_target: str | None = None
    if operation in TARGETED_OPERATIONS:
        normalised_target = validate_target(operation, target)

    return Request(
        operation=operation,
        target=normalised_target,
        port=parsed_port,
        cardano_version=cardano_version,
    )
