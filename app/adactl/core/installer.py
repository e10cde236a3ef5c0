"""Automation tree installation.

``--setup`` downloads the automation repository as a zip archive, extracts
it (without the CLI's own source tree) into a staging directory and moves
the result into the system install directory, using sudo when the
install directory is not writable by the invoking user.
"""

import logging
import os
import shutil
import stat
import tempfile
import zipfile
from pathlib import Path, PurePosixPath

import httpx

from adactl.core.errors import AdactlError
from adactl.utils.shell import run_interactive

logger = logging.getLogger(__name__)

DOWNLOAD_TIMEOUT = httpx.Timeout(30.0, read=120.0)
CHUNK_SIZE = 64 * 1024


class SetupError(AdactlError):
    """Raised when the automation tree cannot be downloaded or installed.

    Attributes:
        returncode: Exit code to report (a failing sudo child's, or 1).
    """

    def __init__(self, message: str, returncode: int = 1) -> None:
        super().__init__(message)
        self.returncode = returncode


def download_archive(url: str, destination: Path) -> Path:
    """Download the automation archive.

    Args:
        url: Archive URL. Redirects are followed.
        destination: File to write.

    Returns:
        The destination path.

    Raises:
        SetupError: On HTTP or network errors.
    """
    logger.info("Downloading %s", url)
    try:
        with httpx.stream("GET", url, follow_redirects=True, timeout=DOWNLOAD_TIMEOUT) as response:
            response.raise_for_status()
            with destination.open("wb") as f:
                for chunk in response.iter_bytes(CHUNK_SIZE):
                    f.write(chunk)
    except httpx.HTTPStatusError as e:
        raise SetupError(f"Download failed: HTTP {e.response.status_code} for {url}") from e
    except httpx.HTTPError as e:
        raise SetupError(f"Download failed: {e}") from e
    except OSError as e:
        raise SetupError(f"Cannot write archive to {destination}: {e}") from e
    return destination


def _archive_root(names: list[str]) -> str | None:
    """Return the single top-level folder GitHub archives wrap everything in."""
    roots = {PurePosixPath(name).parts[0] for name in names if PurePosixPath(name).parts}
    if len(roots) == 1:
        root = roots.pop()
        if any(name.startswith(f"{root}/") for name in names):
            return root
    return None


def extract_archive(archive: Path, destination: Path, excluded: list[str]) -> int:
    """Extract the archive, dropping its top-level folder and excluded entries.

    Args:
        archive: Zip archive to extract.
        destination: Directory to extract into.
        excluded: Top-level entry names (after stripping the root folder)
            to skip, e.g. the CLI's own source tree.

    Returns:
        Number of files extracted.

    Raises:
        SetupError: If the archive is corrupt or contains unsafe paths.
    """
    excluded_set = set(excluded)
    count = 0
    try:
        with zipfile.ZipFile(archive) as zf:
            root = _archive_root(zf.namelist())
            for info in zf.infolist():
                parts = PurePosixPath(info.filename).parts
                if root is not None:
                    parts = parts[1:]
                if not parts or parts[0] in excluded_set:
                    continue
                if ".." in parts or PurePosixPath(info.filename).is_absolute():
                    raise SetupError(f"Unsafe path in archive: {info.filename}")

                target = destination.joinpath(*parts)
                if info.is_dir():
                    target.mkdir(parents=True, exist_ok=True)
                    continue

                target.parent.mkdir(parents=True, exist_ok=True)
                with zf.open(info) as src, target.open("wb") as dst:
                    shutil.copyfileobj(src, dst)
                mode = (info.external_attr >> 16) & 0o777
                if mode:
                    target.chmod(mode)
                count += 1
    except zipfile.BadZipFile as e:
        raise SetupError(f"Downloaded archive is not a valid zip file: {e}") from e
    except OSError as e:
        raise SetupError(f"Failed to extract archive: {e}") from e

    logger.debug("Extracted %d files into %s", count, destination)
    return count


def make_scripts_executable(tree: Path) -> None:
    """Mark shell scripts in the tree as executable."""
    for script in tree.rglob("*.sh"):
        mode = script.stat().st_mode
        script.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)


def _parent_writable(path: Path) -> bool:
    parent = path.parent
    while not parent.exists() and parent != parent.parent:
        parent = parent.parent
    return os.access(parent, os.W_OK)


def remove_tree(path: Path) -> None:
    """Delete a directory tree, with sudo when needed.

    Raises:
        SetupError: If removal fails.
    """
    if not path.exists():
        return
    if _parent_writable(path):
        try:
            shutil.rmtree(path)
            return
        except PermissionError:
            logger.debug("Permission denied removing %s, retrying with sudo", path)
        except OSError as e:
            raise SetupError(f"Failed to remove {path}: {e}") from e

    returncode = run_interactive(["sudo", "rm", "-rf", str(path)])
    if returncode != 0:
        raise SetupError(f"Failed to remove {path}", returncode=returncode)


def install_tree(staging: Path, install_dir: Path) -> None:
    """Move a staged tree into place, using sudo when not writable.

    Raises:
        SetupError: If copying fails.
    """
    if _parent_writable(install_dir):
        try:
            shutil.copytree(staging, install_dir)
            return
        except OSError as e:
            raise SetupError(f"Failed to copy files to {install_dir}: {e}") from e

    logger.info("%s is not writable, using sudo", install_dir.parent)
    steps = [
        ["sudo", "mkdir", "-p", str(install_dir.parent)],
        ["sudo", "cp", "-a", str(staging), str(install_dir)],
        ["sudo", "chown", "-R", f"{os.getuid()}:{os.getgid()}", str(install_dir)],
    ]
    for args in steps:
        returncode = run_interactive(args)
        if returncode != 0:
            raise SetupError(f"Command failed: {' '.join(args)}", returncode=returncode)


def stage_automation(url: str, staging: Path, excluded: list[str]) -> int:
    """Download and unpack the automation tree into a staging directory.

    Nothing outside ``staging`` is modified, so a failure here leaves any
    existing installation untouched.

    Args:
        url: Archive URL.
        staging: Directory to unpack into. Created if missing.
        excluded: Top-level archive entries to skip.

    Returns:
        Number of files staged.

    Raises:
        SetupError: If the download or extraction fails, or the archive
            holds no automation files.
    """
    staging.mkdir(parents=True, exist_ok=True)
    with tempfile.TemporaryDirectory(prefix="adactl-download-") as tmp:
        archive = download_archive(url, Path(tmp) / "automation.zip")
        count = extract_archive(archive, staging, excluded)
    if count == 0:
        raise SetupError("Downloaded archive contains no automation files")
    make_scripts_executable(staging)
    return count


def install_automation(staging: Path, install_dir: Path) -> None:
    """Move a staged tree into a not yet existing install directory.

    If the copy fails after the directory was created, it is removed again
    on a best-effort basis.

    Raises:
        SetupError: If the copy fails.
    """
    try:
        install_tree(staging, install_dir)
    except SetupError:
        if install_dir.exists():
            logger.warning("Cleaning up partial installation at %s", install_dir)
            try:
                remove_tree(install_dir)
            except SetupError as cleanup_error:
                logger.warning("Cleanup failed: %s", cleanup_error)
        raise
