from __future__ import annotations

"""
World Search Orchestrator.

Composes the root resolver and the tree walker into a single search run:
resolves roots, walks the primary roots, then decides whether the broad
full-disk fallback roots are walked as well. All phases share one
ScanSession, so a directory covered by an earlier phase is never rescanned.
"""

import logging
import threading
from typing import Any, Dict, Iterator, List, Optional

from mcworldfinder.core.services.roots import DefaultRootsStrategy, resolve_roots
from mcworldfinder.core.services.walker import ScanSession, WorldWalker
from mcworldfinder.domain.world_models import (
    NoRootsAvailableError,
    RootResolution,
    ScanIssue,
    ScanStats,
    SearchRoot,
    WorldDirectory,
)

logger = logging.getLogger(__name__)


class WorldSearch:
    """
    Iterable handle over one search run.

    Iterating yields WorldDirectory objects as they are discovered. Once the
    iteration is exhausted, 'stats' and 'issues' describe the whole run.
    Like the walker underneath it, a WorldSearch can be iterated only once.

    Raises:
        NoRootsAvailableError: On construction, if no usable root exists.
    """

    def __init__(
            self,
            config: Dict[str, Any],
            *,
            strategy: Optional[DefaultRootsStrategy] = None,
            cancellation_event: Optional[threading.Event] = None,
    ) -> None:
        self._config = config
        self._cancellation_event = cancellation_event
        self.session = ScanSession()

        requested: List[str] = list(config.get("roots") or [])
        self.resolution: RootResolution = resolve_roots(requested, strategy)
        for issue in self.resolution.issues:
            self.session.add_issue(issue)

        if self.resolution.is_empty:
            raise NoRootsAvailableError(requested)

        self._consumed = False

    @property
    def stats(self) -> ScanStats:
        return self.session.stats

    @property
    def issues(self) -> List[ScanIssue]:
        return self.session.issues

    @property
    def warnings(self) -> List[ScanIssue]:
        return self.session.warnings

    def __iter__(self) -> Iterator[WorldDirectory]:
        if self._consumed:
            raise RuntimeError("A WorldSearch can only be iterated once.")
        self._consumed = True
        return self._run()

    # --------------------------------------------------------------------------
    # PHASES
    # --------------------------------------------------------------------------

    def _run(self) -> Iterator[WorldDirectory]:
        found_before = self.stats.worlds_found
        yield from self._walk_phase(self.resolution.primary)

        fallback = self.resolution.fallback
        if not fallback:
            return

        if self._config.get("exhaustive"):
            logger.info("Exhaustive mode: scanning full-disk fallback roots.")
        elif self.stats.worlds_found > found_before:
            logger.debug("Default locations yielded worlds; skipping full-disk fallback.")
            return
        else:
            logger.info("No worlds in default locations; falling back to a full-disk scan.")

        yield from self._walk_phase(fallback)

    def _walk_phase(self, roots: List[SearchRoot]) -> Iterator[WorldDirectory]:
        if not roots:
            return

        walker = WorldWalker(
            self.session,
            follow_symlinks=bool(self._config.get("follow_symlinks", True)),
            cancellation_event=self._cancellation_event,
        )
        workers = int(self._config.get("workers") or 1)
        yield from walker.search_concurrently(roots, max_workers=workers)

        for registry in (self.session.visited, self.session.emitted):
            logger.debug(f"Search: '{registry.name}' registry holds {len(registry)} identities.")


def find_worlds(
        config: Dict[str, Any],
        *,
        strategy: Optional[DefaultRootsStrategy] = None,
        cancellation_event: Optional[threading.Event] = None,
) -> WorldSearch:
    """
    Prepare a world search for the given validated configuration.

    Args:
        config: Validated configuration (see domain.config).
        strategy: Optional default-roots strategy override.
        cancellation_event: Event that stops the walk at the next directory.

    Returns:
        WorldSearch: Lazy, single-use iterable of discovered worlds.

    Raises:
        NoRootsAvailableError: If no supplied or default root is usable.
    """
    return WorldSearch(config, strategy=strategy, cancellation_event=cancellation_event)
