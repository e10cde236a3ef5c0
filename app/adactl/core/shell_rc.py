"""Shell rc file maintenance.

setup-deps makes ~/.local/bin (where pipx puts ansible) available on PATH
by appending an export to the user's shell rc file under a marker
comment; remove-all strips exactly those lines again.
"""

import logging
from pathlib import Path

from adactl.core.paths import get_shell_rc_path

logger = logging.getLogger(__name__)

RC_MARKER = "# Added by love2automate-ada setup"
PATH_EXPORT = 'export PATH="$HOME/.local/bin:$PATH"'
USER_BIN_REFERENCE = "$HOME/.local/bin"


def add_path_export(rc_path: Path | None = None) -> bool:
    """Append the ~/.local/bin PATH export unless already configured.

    Args:
        rc_path: Shell rc file. If None, uses ~/.bashrc.

    Returns:
        True if the file was modified, False if PATH was already configured.

    Raises:
        OSError: If the file cannot be read or written.
    """
    path = rc_path or get_shell_rc_path()
    content = path.read_text(encoding="utf-8") if path.exists() else ""

    if USER_BIN_REFERENCE in content:
        logger.debug("%s already references %s", path, USER_BIN_REFERENCE)
        return False

    block = f"\n{RC_MARKER}\n{PATH_EXPORT}\n"
    if content and not content.endswith("\n"):
        block = "\n" + block
    with path.open(mode="a", encoding="utf-8") as f:
        f.write(block)
    logger.info("Added PATH export to %s", path)
    return True


def remove_path_export(rc_path: Path | None = None) -> bool:
    """Strip the marker comment and the export line that follows it.

    Args:
        rc_path: Shell rc file. If None, uses ~/.bashrc.

    Returns:
        True if lines were removed, False if nothing was found.

    Raises:
        OSError: If the file cannot be read or written.
    """
    path = rc_path or get_shell_rc_path()
    if not path.exists():
        return False

    lines = path.read_text(encoding="utf-8").splitlines(keepends=True)
    kept: list[str] = []
    removed = False
    skip_export = False

    for line in lines:
        stripped = line.strip()
        if stripped == RC_MARKER:
            # Drop the blank separator written before the marker
            if kept and not kept[-1].strip():
                kept.pop()
            removed = True
            skip_export = True
            continue
        if skip_export and stripped == PATH_EXPORT:
            skip_export = False
            continue
        skip_export = False
        kept.append(line)

    if removed:
        path.write_text("".join(kept), encoding="utf-8")
        logger.info("Removed PATH export from %s", path)
    return removed
