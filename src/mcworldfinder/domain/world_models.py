from __future__ import annotations

"""
World Search Domain Data Models.

Defines the immutable value objects exchanged between the root resolver,
the tree walker, and the interface layer, plus the single terminal error
of the search domain.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Hashable, List, Optional

from mcworldfinder.domain.constants import ORIGIN_USER

# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class SearchRoot:
    """
    A canonicalized directory under which a search begins.

    Attributes:
        path: Absolute path with symlinks and relative segments resolved.
        identity: Filesystem identity used for overlap detection.
        origin: Where the root came from ('user', 'default' or 'fallback').
    """
    path: str
    identity: Hashable
    origin: str = ORIGIN_USER


@dataclass(frozen=True)
class WorldDirectory:
    """
    A directory that directly contains a 'level.dat' file.

    Attributes:
        path: Canonical path of the world directory.
        root: Path of the SearchRoot the world was discovered under.
        level_dat_mtime: Modification time of 'level.dat' (epoch seconds), if known.
    """
    path: str
    root: str
    level_dat_mtime: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path": self.path,
            "root": self.root,
            "level_dat_mtime": self.level_dat_mtime,
        }

# -----------------------------------------------------------------------------
# ERROR TRACKING MODELS
# -----------------------------------------------------------------------------

class IssueKind(str, Enum):
    """Taxonomy of recoverable problems met during a search."""
    INVALID_ROOT = "invalid_root"
    UNREADABLE_DIRECTORY = "unreadable_directory"
    SYMLINK_CYCLE = "symlink_cycle"


@dataclass(frozen=True)
class ScanIssue:
    """
    Encapsulates a recoverable failure that degraded search completeness.

    Attributes:
        kind: Category of the issue.
        path: Path the issue relates to.
        message: Human readable description.
    """
    kind: IssueKind
    path: str
    message: str

    @property
    def is_warning(self) -> bool:
        """Symlink cycles are expected and never surfaced as warnings."""
        return self.kind is not IssueKind.SYMLINK_CYCLE

    def to_dict(self) -> Dict[str, str]:
        return {"kind": self.kind.value, "path": self.path, "message": self.message}


@dataclass
class ScanStats:
    """
    Mutable counters describing one search run.

    Attributes:
        roots_scanned: Number of roots handed to the walker.
        directories_visited: Directories claimed in the visited registry.
        worlds_found: Distinct worlds emitted.
        duplicate_worlds: World sightings suppressed by the emitted registry.
        cycles_skipped: Symlinks not followed because they point at an ancestor.
        unreadable_directories: Directories whose entries could not be listed.
    """
    roots_scanned: int = 0
    directories_visited: int = 0
    worlds_found: int = 0
    duplicate_worlds: int = 0
    cycles_skipped: int = 0
    unreadable_directories: int = 0

    def to_dict(self) -> Dict[str, int]:
        return dict(self.__dict__)


@dataclass(frozen=True)
class RootResolution:
    """
    Output of the root resolver.

    Attributes:
        primary: Roots to scan first, in order.
        fallback: Broad roots scanned only according to the fallback policy.
        issues: Warnings raised while resolving user input.
    """
    primary: List[SearchRoot] = field(default_factory=list)
    fallback: List[SearchRoot] = field(default_factory=list)
    issues: List[ScanIssue] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.primary and not self.fallback


class NoRootsAvailableError(Exception):
    """Raised when every supplied or default root is invalid or inaccessible."""

    def __init__(self, candidates: List[str]):
        self.candidates = list(candidates)
        joined = ", ".join(self.candidates) if self.candidates else "<none>"
        super().__init__(f"No usable search root among: {joined}")
