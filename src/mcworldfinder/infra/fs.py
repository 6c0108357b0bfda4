from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides path normalization, canonical identity computation, and an
error-tolerant directory reader. Acts as the only place where the search
domain touches 'os' directly, so traversal code stays platform neutral.
"""

import logging
import os
from dataclasses import dataclass
from typing import Hashable, List, Optional

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# DATA STRUCTURES
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class DirEntryInfo:
    """
    Snapshot of a single directory entry.

    Attributes:
        name: Entry name inside its parent.
        path: Full (non-canonical) path of the entry.
        is_dir: True if the entry is, or links to, a directory.
        is_file: True if the entry is, or links to, a regular file.
        is_symlink: True if the entry itself is a symbolic link.
    """
    name: str
    path: str
    is_dir: bool
    is_file: bool
    is_symlink: bool

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def normalize_path(path: Optional[str]) -> str:
    """
    Expand a raw user path into an absolute filesystem path.

    Handles environment variable expansion ($VAR/%VAR%) and user home
    shortcuts (~/). Symlinks are not resolved here.

    Args:
        path: Raw input path string.

    Returns:
        str: Absolute path, or an empty string for blank input.
    """
    p = (path or "").strip()
    if not p:
        return ""
    return os.path.abspath(os.path.expandvars(os.path.expanduser(p)))


def canonicalize(path: str) -> str:
    """
    Resolve symlinks and collapse '.'/'..' segments.

    The path is taken literally: '~' and '$VAR' are only expanded for raw
    user input, see 'normalize_path'.

    Args:
        path: Any absolute or relative path.

    Returns:
        str: Canonical absolute path.
    """
    return os.path.realpath(path)


def path_identity(path: str) -> Optional[Hashable]:
    """
    Compute the filesystem-level identity of a path, following symlinks.

    Uses the (device, inode) pair where the platform reports a real inode,
    otherwise falls back to the canonical path string.

    Args:
        path: Path to inspect.

    Returns:
        Optional[Hashable]: Identity key, or None if the path cannot be stat'ed.
    """
    try:
        st = os.stat(path)
    except OSError:
        return None
    return _identity_from_stat(st, path)


# -----------------------------------------------------------------------------
# DIRECTORY READING API
# -----------------------------------------------------------------------------

def read_directory(path: str) -> List[DirEntryInfo]:
    """
    List the immediate entries of a directory, sorted by name.

    Entries whose type cannot be determined (vanished files, broken links)
    are reported with both 'is_dir' and 'is_file' False rather than raising.

    Args:
        path: Directory to list.

    Returns:
        List[DirEntryInfo]: Entries in stable name order.

    Raises:
        OSError: If the directory itself cannot be opened or iterated.
    """
    entries: List[DirEntryInfo] = []
    with os.scandir(path) as it:
        for entry in it:
            entries.append(_describe_entry(entry))
    entries.sort(key=lambda e: e.name)
    return entries


def file_mtime(path: str) -> Optional[float]:
    try:
        return os.stat(path).st_mtime
    except OSError:
        return None


def list_drive_roots() -> List[str]:
    """
    Enumerate existing drive roots on Windows ('C:\\', 'D:\\', ...).

    Returns:
        List[str]: Existing drive roots, 'C:\\' first when present.
    """
    drives: List[str] = []
    for letter in "CDEFGHIJKLMNOPQRSTUVWXYZ":
        drive = f"{letter}:\\"
        if os.path.isdir(drive):
            drives.append(drive)
    return drives

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _identity_from_stat(st: os.stat_result, path: str) -> Hashable:
    if st.st_ino:
        return (st.st_dev, st.st_ino)
    return os.path.normcase(os.path.realpath(path))


def _describe_entry(entry: os.DirEntry) -> DirEntryInfo:
    is_symlink = _safe_flag(entry.is_symlink)
    is_dir = _safe_flag(entry.is_dir)
    is_file = False if is_dir else _safe_flag(entry.is_file)
    return DirEntryInfo(
        name=entry.name,
        path=entry.path,
        is_dir=is_dir,
        is_file=is_file,
        is_symlink=is_symlink,
    )


def _safe_flag(probe) -> bool:
    """Evaluate a DirEntry type probe, treating I/O failures as False."""
    try:
        return bool(probe())
    except OSError as e:
        logger.debug(f"FS: Type probe failed: {e}")
        return False

