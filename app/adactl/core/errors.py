"""Exception hierarchy for adactl.

Core modules raise these; CLI handlers catch them, print the message
and turn them into a non-zero exit code.
"""


class AdactlError(Exception):
    """Base exception for all adactl errors."""


class UsageError(AdactlError):
    """Raised for invalid flag combinations, targets, ports or versions."""
