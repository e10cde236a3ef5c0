"""Dependency version resolution.

For a requested cardano-node release, the helper script shipped with the
automation tree downloads the node's flake.lock files and release notes
(with curl and jq) and writes the versions of libsodium, secp256k1, blst,
GHC and Cabal to a JSON file. This module runs the script and loads its
output.
"""

import logging
import re
from pathlib import Path

from pydantic import ValidationError

from adactl.core.errors import AdactlError
from adactl.core.paths import get_dependency_versions_path
from adactl.core.settings import Settings
from adactl.models.dependencies import DependencyVersions
from adactl.utils.shell import run_streaming

logger = logging.getLogger(__name__)

# Two or three numeric components, e.g. 10.5 or 10.5.1
VERSION_PATTERN = re.compile(r"^\d+\.\d+(\.\d+)?$")


class DependencyVersionError(AdactlError):
    """Raised when dependency versions cannot be resolved.

    Attributes:
        returncode: Exit code of the helper script, if it ran and failed.
    """

    def __init__(self, message: str, returncode: int = 1) -> None:
        super().__init__(message)
        self.returncode = returncode


def is_valid_version(version: str) -> bool:
    """Check that a cardano-node version has two or three numeric components."""
    return VERSION_PATTERN.match(version) is not None


def load_dependency_versions(path: Path) -> DependencyVersions:
    """Load the JSON file written by the helper script.

    Raises:
        DependencyVersionError: If the file is missing or incomplete.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise DependencyVersionError(f"Failed to read dependency versions {path}: {e}") from e

    try:
        return DependencyVersions.model_validate_json(raw)
    except ValidationError as e:
        raise DependencyVersionError(f"Incomplete dependency versions in {path}: {e}") from e


def fetch_dependency_versions(settings: Settings, cardano_version: str) -> DependencyVersions:
    """Resolve the dependency versions for a cardano-node release.

    Args:
        settings: Tool settings locating the helper script.
        cardano_version: Validated cardano-node version.

    Returns:
        Resolved DependencyVersions.

    Raises:
        DependencyVersionError: If the script is missing or fails, or its
            output is incomplete.
    """
    script = settings.dependency_script_path
    if not script.is_file():
        raise DependencyVersionError(f"Dependency script not found: {script}")

    logger.info("Resolving dependency versions for cardano-node %s", cardano_version)
    result = run_streaming(["bash", str(script), cardano_version], cwd=str(settings.install_dir))
    if not result.success:
        detail = result.stderr.strip() or result.stdout.strip() or "no output"
        raise DependencyVersionError(
            f"Dependency script failed for cardano-node {cardano_version}: {detail}",
            returncode=result.returncode,
        )

    return load_dependency_versions(get_dependency_versions_path(cardano_version))
