"""Shell execution utilities.

Provides subprocess execution for the external tools adactl drives
(ansible-playbook, pgrep, ss, sudo, pipx, ...). A command that cannot be
started is reported as a failed CommandResult instead of raising, so
callers only ever deal with exit codes.
"""

import logging
import os
import shutil
import subprocess
import sys
import threading
from dataclasses import dataclass
from typing import IO, TextIO

logger = logging.getLogger(__name__)

# Exit code used when a process cannot be started at all
START_FAILURE_CODE = 1


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Result of a shell command execution.

    Attributes:
        stdout: Standard output from the command.
        stderr: Standard error from the command.
        returncode: Exit code of the command.
    """

    stdout: str
    stderr: str
    returncode: int

    @property
    def success(self) -> bool:
        """Check if command executed successfully."""
        return self.returncode == 0


def _start_failure(args: list[str], error: OSError) -> CommandResult:
    logger.debug("Failed to start %s: %s", args[0] if args else "<empty>", error)
    return CommandResult(stdout="", stderr=str(error), returncode=START_FAILURE_CODE)


def run_command(
    args: list[str],
    *,
    timeout: float | None = None,
    cwd: str | None = None,
) -> CommandResult:
    """Execute a command silently and return the captured result.

    Used for internal checks whose output must not reach the terminal.

    Args:
        args: Command and arguments to execute.
        timeout: Maximum time in seconds to wait. None waits forever.
        cwd: Working directory for the command. If None, uses current directory.

    Returns:
        CommandResult with stdout, stderr, and returncode. A command that
        cannot be started yields returncode 1 and the error text as stderr.

    Raises:
        subprocess.TimeoutExpired: If command exceeds timeout.
    """
    logger.debug("Running: %s", " ".join(args))
    try:
        result = subprocess.run(
            args,
            capture_output=True,
            text=True,
            check=False,
            timeout=timeout,
            cwd=cwd,
        )
    except OSError as e:
        return _start_failure(args, e)
    return CommandResult(
        stdout=result.stdout,
        stderr=result.stderr,
        returncode=result.returncode,
    )


def _relay(stream: IO[str], sink: TextIO, lines: list[str]) -> None:
    """Copy lines from a child pipe to a terminal stream, keeping a copy."""
    for line in iter(stream.readline, ""):
        lines.append(line)
        sink.write(line)
        sink.flush()
    stream.close()


def run_streaming(
    args: list[str],
    *,
    cwd: str | None = None,
) -> CommandResult:
    """Execute a command, relaying its output line by line while capturing it.

    Stdout lines go to this process' stdout and stderr lines to its stderr
    as soon as the child produces them. Each pipe is drained by its own
    reader thread so a chatty child cannot block on a full pipe.

    Args:
        args: Command and arguments to execute.
        cwd: Working directory for the command.

    Returns:
        CommandResult with the full captured stdout and stderr.
    """
    logger.debug("Running (streamed): %s", " ".join(args))
    try:
        process = subprocess.Popen(
            args,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            bufsize=1,
            cwd=cwd,
        )
    except OSError as e:
        return _start_failure(args, e)

    out_lines: list[str] = []
    err_lines: list[str] = []
    assert process.stdout is not None
    assert process.stderr is not None
    readers = [
        threading.Thread(target=_relay, args=(process.stdout, sys.stdout, out_lines)),
        threading.Thread(target=_relay, args=(process.stderr, sys.stderr, err_lines)),
    ]
    for reader in readers:
        reader.start()
    returncode = process.wait()
    for reader in readers:
        reader.join()

    return CommandResult(
        stdout="".join(out_lines),
        stderr="".join(err_lines),
        returncode=returncode,
    )


def command_exists(name: str) -> bool:
    """Check if a command exists in the system PATH.

    Args:
        name: Command name to check.

    Returns:
        True if command exists, False otherwise.
    """
    return shutil.which(name) is not None


def run_interactive(
    args: list[str],
    *,
    cwd: str | None = None,
    env: dict[str, str] | None = None,
) -> int:
    """Execute a command interactively, inheriting the terminal.

    Unlike run_command(), this does NOT capture stdout/stderr,
    allowing the subprocess to prompt the user directly (sudo
    passwords, ansible --ask-become-pass).

    Args:
        args: Command and arguments to execute.
        cwd: Working directory for the command.
        env: Additional environment variables (merged with current env).

    Returns:
        Exit code of the command, or 1 if it could not be started.
    """
    logger.debug("Running (interactive): %s", " ".join(args))
    full_env = {**os.environ, **(env or {})}
    try:
        result = subprocess.run(
            args,
            check=False,
            cwd=cwd,
            env=full_env,
        )
    except OSError as e:
        logger.warning("Failed to start %s: %s", args[0] if args else "<empty>", e)
        return START_FAILURE_CODE
    return result.returncode
