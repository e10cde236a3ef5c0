"""Parameter file patching.

Ansible reads playbook variables from a YAML parameter file. For an
install, adactl copies the bundled template and replaces a few top-level
keys (port, dependency versions). The template is parsed with PyYAML to
make sure it is a mapping; the substitution itself is done line by line
so that comments and every untouched line stay exactly as written.
"""

import logging
import re
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Any

import yaml

from adactl.core.errors import AdactlError

logger = logging.getLogger(__name__)

PORT_KEY = "cardano_port"


class ParameterFileError(AdactlError):
    """Raised when a parameter file cannot be read, parsed or written."""


def load_parameters(path: Path) -> dict[str, Any]:
    """Parse a parameter file into a mapping.

    Args:
        path: YAML parameter file.

    Returns:
        Top-level mapping of the file. An empty file yields an empty dict.

    Raises:
        ParameterFileError: If the file is missing, unreadable, not valid
            YAML, or not a mapping.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ParameterFileError(f"Failed to read parameter file {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ParameterFileError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ParameterFileError(f"Parameter file {path} must contain a mapping")
    return data


def _render_scalar(value: object) -> str:
    """Render a scalar the way it would appear after ``key: `` in YAML."""
    rendered = yaml.safe_dump(value, default_flow_style=True, width=10_000)
    # safe_dump terminates documents with "\n" or "\n...\n" for bare scalars
    return rendered.removesuffix("\n").removesuffix("\n...").strip()


def patch_parameter_text(text: str, updates: dict[str, object]) -> str:
    """Replace top-level ``key: value`` lines in YAML text.

    Only lines starting at column zero with ``<key>:`` are rewritten; a
    trailing comment on such a line is kept. Keys not present in the text
    are appended at the end.

    Args:
        text: Original YAML text.
        updates: Top-level keys to set.

    Returns:
        The patched text.

    Raises:
        ParameterFileError: If the patched text does not parse back to the
            intended values.
    """
    lines = text.splitlines(keepends=True)
    pending = dict(updates)

    for index, line in enumerate(lines):
        for key in list(pending):
            match = re.match(rf"^{re.escape(key)}\s*:(?P<rest>[^\r\n]*)(?P<eol>\r?\n?)$", line)
            if match is None:
                continue
            comment = ""
            comment_match = re.search(r"\s+#.*$", match.group("rest"))
            if comment_match is not None:
                comment = comment_match.group(0)
            value = _render_scalar(pending.pop(key))
            lines[index] = f"{key}: {value}{comment}{match.group('eol')}"
            break

    if pending:
        if lines and not lines[-1].endswith("\n"):
            lines[-1] += "\n"
        for key, value in pending.items():
            lines.append(f"{key}: {_render_scalar(value)}\n")

    patched = "".join(lines)

    try:
        parsed = yaml.safe_load(patched) or {}
    except yaml.YAMLError as e:
        raise ParameterFileError(f"Patched parameters are not valid YAML: {e}") from e
    if not isinstance(parsed, dict):
        raise ParameterFileError("Patched parameters must contain a mapping")
    for key, value in updates.items():
        if parsed.get(key) != value:
            raise ParameterFileError(f"Failed to set '{key}' in parameter file")

    return patched


def write_patched_parameters(template: Path, updates: dict[str, object]) -> Path:
    """Write a patched copy of a parameter template to a fresh temp file.

    The caller owns the returned file and should delete it after use.

    Args:
        template: Parameter template to copy.
        updates: Top-level keys to set.

    Returns:
        Path to the patched temporary file.

    Raises:
        ParameterFileError: If the template is invalid or the copy cannot
            be written.
    """
    load_parameters(template)
    text = template.read_text(encoding="utf-8")
    patched = patch_parameter_text(text, updates)

    try:
        with NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            prefix="install_param_",
            suffix=".yml",
            delete=False,
        ) as f:
            f.write(patched)
    except OSError as e:
        raise ParameterFileError(f"Failed to write patched parameter file: {e}") from e

    logger.debug("Wrote patched parameters %s (keys: %s)", f.name, ", ".join(updates))
    return Path(f.name)
