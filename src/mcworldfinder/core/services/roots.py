from __future__ import annotations

"""
Search Root Resolution Service.

Turns user supplied folders, or the platform defaults when none are given,
into an ordered, identity-deduplicated list of SearchRoot objects. Default
locations are produced by a small per-OS strategy selected once at startup.
"""

import logging
import os
import platform
from typing import Dict, Hashable, List, Optional, Sequence, Type

from mcworldfinder.domain import constants as const
from mcworldfinder.domain.world_models import (
    IssueKind,
    RootResolution,
    ScanIssue,
    SearchRoot,
)
from mcworldfinder.infra import fs

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PLATFORM STRATEGIES
# -----------------------------------------------------------------------------

class DefaultRootsStrategy:
    """
    Base strategy producing the default candidate roots for one platform.

    'primary_candidates' are narrow, likely locations (Minecraft data dir,
    then home). 'fallback_candidates' are the broad full-disk roots.
    """

    name = "generic"

    def __init__(self, home: Optional[str] = None, env: Optional[Dict[str, str]] = None) -> None:
        self._env = dict(os.environ if env is None else env)
        self.home = home if home is not None else os.path.expanduser("~")

    def minecraft_dir(self) -> Optional[str]:
        return None

    def primary_candidates(self) -> List[str]:
        candidates = [self.minecraft_dir(), self.home]
        return [c for c in candidates if c]

    def fallback_candidates(self) -> List[str]:
        return [os.path.abspath(os.sep)]


class LinuxRoots(DefaultRootsStrategy):
    name = "linux"

    def minecraft_dir(self) -> Optional[str]:
        return os.path.join(self.home, const.LINUX_MINECRAFT_DIR)


class MacRoots(DefaultRootsStrategy):
    name = "macos"

    def minecraft_dir(self) -> Optional[str]:
        return os.path.join(self.home, *const.MACOS_MINECRAFT_DIR)


class WindowsRoots(DefaultRootsStrategy):
    name = "windows"

    def minecraft_dir(self) -> Optional[str]:
        appdata = self._env.get("APPDATA")
        if not appdata:
            logger.debug("Roots: APPDATA is not set; skipping the .minecraft default.")
            return None
        return os.path.join(appdata, const.WINDOWS_MINECRAFT_DIR)

    def fallback_candidates(self) -> List[str]:
        return fs.list_drive_roots() or ["C:\\"]


_STRATEGIES: Dict[str, Type[DefaultRootsStrategy]] = {
    "Windows": WindowsRoots,
    "Darwin": MacRoots,
    "Linux": LinuxRoots,
}


def select_strategy(system: Optional[str] = None) -> DefaultRootsStrategy:
    """
    Pick the default-roots strategy for the running (or given) platform.

    Unknown Unix-like systems get the Linux layout.

    Args:
        system: Value as returned by platform.system(); detected if omitted.

    Returns:
        DefaultRootsStrategy: Strategy instance.
    """
    system = system or platform.system()
    strategy_cls = _STRATEGIES.get(system, LinuxRoots)
    logger.debug(f"Roots: Using '{strategy_cls.name}' default locations for platform '{system}'.")
    return strategy_cls()

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def resolve_roots(
        paths: Optional[Sequence[str]] = None,
        strategy: Optional[DefaultRootsStrategy] = None,
) -> RootResolution:
    """
    Resolve user input or platform defaults into concrete search roots.

    Explicit paths are canonicalized; missing paths and non-directories are
    reported as INVALID_ROOT issues and skipped. Duplicates by identity are
    removed, keeping the first occurrence. Nested roots are passed through
    untouched since the walker's visited registry makes them harmless.

    Args:
        paths: User supplied folders. Empty or None selects platform defaults.
        strategy: Default-roots strategy; detected from the platform if omitted.

    Returns:
        RootResolution: Primary roots, fallback roots and resolution issues.
    """
    seen: Dict[Hashable, SearchRoot] = {}

    if paths:
        issues: List[ScanIssue] = []
        primary = [
            root for root in (_resolve_user_path(p, issues) for p in paths)
            if root is not None and _is_new(root, seen)
        ]
        return RootResolution(primary=primary, fallback=[], issues=issues)

    strategy = strategy or select_strategy()
    primary = _resolve_defaults(strategy.primary_candidates(), const.ORIGIN_DEFAULT, seen)
    fallback = _resolve_defaults(strategy.fallback_candidates(), const.ORIGIN_FALLBACK, seen)
    return RootResolution(primary=primary, fallback=fallback, issues=[])


def make_root(path: str, origin: str = const.ORIGIN_USER, *, expand: bool = True) -> Optional[SearchRoot]:
    """
    Build a SearchRoot for an existing directory.

    Args:
        path: Raw path.
        origin: Origin tag for the root.
        expand: Expand '~' and environment variables first (user input only).

    Returns:
        Optional[SearchRoot]: The root, or None if 'path' is not an accessible directory.
    """
    if expand:
        expanded = fs.normalize_path(path)
    else:
        expanded = os.path.abspath(path) if path else ""
    if not expanded or not os.path.isdir(expanded):
        return None
    canonical = fs.canonicalize(expanded)
    identity = fs.path_identity(canonical)
    if identity is None:
        return None
    return SearchRoot(path=canonical, identity=identity, origin=origin)

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _resolve_user_path(raw: str, issues: List[ScanIssue]) -> Optional[SearchRoot]:
    root = make_root(raw, const.ORIGIN_USER)
    if root is not None:
        return root

    expanded = fs.normalize_path(raw) or raw
    if not expanded.strip():
        message = "Empty folder argument, skipping."
    elif os.path.exists(expanded):
        message = f"Not a directory, skipping: {expanded}"
    else:
        message = f"Folder does not exist, skipping: {expanded}"
    logger.warning(message)
    issues.append(ScanIssue(kind=IssueKind.INVALID_ROOT, path=expanded, message=message))
    return None


def _resolve_defaults(
        candidates: Sequence[str],
        origin: str,
        seen: Dict[Hashable, SearchRoot],
) -> List[SearchRoot]:
    resolved: List[SearchRoot] = []
    for candidate in candidates:
        root = make_root(candidate, origin, expand=False)
        if root is None:
            logger.debug(f"Roots: Default location not available: {candidate}")
            continue
        if _is_new(root, seen):
            resolved.append(root)
    return resolved


def _is_new(root: SearchRoot, seen: Dict[Hashable, SearchRoot]) -> bool:
    if root.identity in seen:
        logger.debug(f"Roots: '{root.path}' duplicates '{seen[root.identity].path}'; dropped.")
        return False
    seen[root.identity] = root
    return True
