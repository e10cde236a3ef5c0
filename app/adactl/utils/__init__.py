"""Console output and subprocess helpers shared by the commands."""

from adactl.utils.formatting import (
    console,
    err_console,
    print_command,
    print_error,
    print_failure,
    print_info,
    print_next_steps,
    print_success,
    print_warning,
)
from adactl.utils.shell import (
    CommandResult,
    command_exists,
    run_command,
    run_interactive,
    run_streaming,
)

__all__ = [
    "CommandResult",
    "command_exists",
    "console",
    "err_console",
    "print_command",
    "print_error",
    "print_failure",
    "print_info",
    "print_next_steps",
    "print_success",
    "print_warning",
    "run_command",
    "run_interactive",
    "run_streaming",
]
