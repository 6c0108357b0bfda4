from __future__ import annotations

"""
Deduplicating Tree Walker.

Traverses search roots depth-first with an explicit stack and yields every
directory that directly contains 'level.dat'. Directories are keyed by
filesystem identity in a shared visited registry, so overlapping roots,
nested roots and symlinks never cause a subtree to be walked twice, and a
second registry guarantees each world is reported at most once per run.
"""

import logging
import os
import queue
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Hashable, Iterable, Iterator, List, Optional, Sequence

from mcworldfinder.core.services.registry import ClaimRegistry
from mcworldfinder.domain.constants import LEVEL_DAT_NAME
from mcworldfinder.domain.world_models import (
    IssueKind,
    ScanIssue,
    ScanStats,
    SearchRoot,
    WorldDirectory,
)
from mcworldfinder.infra import fs

logger = logging.getLogger(__name__)

DirectoryReader = Callable[[str], List[fs.DirEntryInfo]]

_WORKER_DONE = object()


# ==============================================================================
# SHARED RUN STATE
# ==============================================================================

class ScanSession:
    """
    State shared by every walker of one search run.

    Holds the visited and emitted registries together with the run's
    statistics and recoverable issues. Several walkers (or several worker
    threads of one walker) may use the same session concurrently.
    """

    def __init__(self) -> None:
        self.visited = ClaimRegistry("visited")
        self.emitted = ClaimRegistry("emitted")
        self.stats = ScanStats()
        self._issues: List[ScanIssue] = []
        self._lock = threading.Lock()

    @property
    def issues(self) -> List[ScanIssue]:
        with self._lock:
            return list(self._issues)

    @property
    def warnings(self) -> List[ScanIssue]:
        return [i for i in self.issues if i.is_warning]

    def add_issue(self, issue: ScanIssue) -> None:
        with self._lock:
            self._issues.append(issue)
            if issue.kind is IssueKind.UNREADABLE_DIRECTORY:
                self.stats.unreadable_directories += 1
            elif issue.kind is IssueKind.SYMLINK_CYCLE:
                self.stats.cycles_skipped += 1

    def count(self, counter: str, amount: int = 1) -> None:
        with self._lock:
            setattr(self.stats, counter, getattr(self.stats, counter) + amount)


@dataclass(frozen=True)
class _Frame:
    """Pending directory on the traversal stack, linked to its parent frame."""
    path: str
    identity: Optional[Hashable]
    parent: Optional["_Frame"] = None

    def has_ancestor(self, identity: Hashable) -> bool:
        frame: Optional[_Frame] = self
        while frame is not None:
            if frame.identity == identity:
                return True
            frame = frame.parent
        return False


# ==============================================================================
# WALKER
# ==============================================================================

class WorldWalker:
    """
    Single-pass producer of WorldDirectory objects for a set of roots.

    A walker may run exactly one search; create another walker on the same
    ScanSession to continue a run with more roots without rescanning.
    """

    def __init__(
            self,
            session: Optional[ScanSession] = None,
            *,
            follow_symlinks: bool = True,
            cancellation_event: Optional[threading.Event] = None,
            reader: DirectoryReader = fs.read_directory,
    ) -> None:
        self.session = session or ScanSession()
        self.follow_symlinks = follow_symlinks
        self._cancellation_event = cancellation_event
        self._stop = threading.Event()
        self._reader = reader
        self._started = False

    # --------------------------------------------------------------------------
    # PUBLIC API
    # --------------------------------------------------------------------------

    def search(self, roots: Iterable[SearchRoot]) -> Iterator[WorldDirectory]:
        """
        Lazily yield each world under 'roots', one root after another.

        Args:
            roots: Ordered search roots.

        Yields:
            WorldDirectory: Each distinct world, in deterministic order.

        Raises:
            RuntimeError: If this walker has already been used.
        """
        self._mark_started()
        return self._search_sequential(list(roots))

    def search_concurrently(
            self,
            roots: Sequence[SearchRoot],
            max_workers: int,
    ) -> Iterator[WorldDirectory]:
        """
        Yield worlds while walking each root on its own worker thread.

        Results stream as soon as they are found. Only set equality with the
        sequential search is guaranteed, not ordering.

        Args:
            roots: Search roots; one task per root.
            max_workers: Upper bound on concurrent walker threads.

        Yields:
            WorldDirectory: Each distinct world.
        """
        self._mark_started()
        roots = list(roots)
        if max_workers <= 1 or len(roots) <= 1:
            return self._search_sequential(roots)
        return self._search_parallel(roots, max_workers)

    # --------------------------------------------------------------------------
    # TRAVERSAL
    # --------------------------------------------------------------------------

    def _search_sequential(self, roots: List[SearchRoot]) -> Iterator[WorldDirectory]:
        for root in roots:
            if self._is_cancelled():
                break
            yield from self._walk_root(root)

    def _search_parallel(self, roots: List[SearchRoot], max_workers: int) -> Iterator[WorldDirectory]:
        results: queue.Queue = queue.Queue()

        def _worker(root: SearchRoot) -> None:
            try:
                for world in self._walk_root(root):
                    results.put(world)
            finally:
                results.put(_WORKER_DONE)

        with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="WorldWalker") as executor:
            futures = [executor.submit(_worker, root) for root in roots]
            try:
                remaining = len(futures)
                while remaining:
                    item = results.get()
                    if item is _WORKER_DONE:
                        remaining -= 1
                        continue
                    yield item
            finally:
                # Consumer stopped early: let the workers drain quickly
                self._stop.set()

            for future in futures:
                future.result()

    def _walk_root(self, root: SearchRoot) -> Iterator[WorldDirectory]:
        self.session.count("roots_scanned")
        logger.info(f"Walking through {root.path} ...")

        stack: List[_Frame] = [_Frame(path=root.path, identity=root.identity)]
        while stack:
            if self._is_cancelled():
                logger.debug(f"Walker: Cancelled while scanning '{root.path}'.")
                return

            frame = stack.pop()
            frame = self._with_identity(frame)
            if frame is None:
                continue

            if not self.session.visited.claim(frame.identity):
                logger.debug(f"Walker: '{frame.path}' already covered; not descending.")
                continue
            self.session.count("directories_visited")

            entries = self._read(frame.path)
            if entries is None:
                continue

            world = self._detect_world(frame, entries, root)
            if world is not None:
                yield world

            # Reversed push keeps pops in ascending name order
            stack.extend(reversed(self._child_frames(frame, entries)))

    def _with_identity(self, frame: _Frame) -> Optional[_Frame]:
        if frame.identity is not None:
            return frame
        identity = fs.path_identity(frame.path)
        if identity is None:
            logger.debug(f"Walker: '{frame.path}' vanished before it could be visited.")
            return None
        return _Frame(path=frame.path, identity=identity, parent=frame.parent)

    def _read(self, path: str) -> Optional[List[fs.DirEntryInfo]]:
        """Error-tolerant directory listing; failures become warnings."""
        try:
            return self._reader(path)
        except OSError as e:
            reason = e.strerror or str(e)
            message = f"Cannot read directory '{path}': {reason}"
            logger.warning(message)
            self.session.add_issue(
                ScanIssue(kind=IssueKind.UNREADABLE_DIRECTORY, path=path, message=message)
            )
            return None

    def _detect_world(
            self,
            frame: _Frame,
            entries: List[fs.DirEntryInfo],
            root: SearchRoot,
    ) -> Optional[WorldDirectory]:
        if not any(e.name == LEVEL_DAT_NAME and e.is_file for e in entries):
            return None

        if not self.session.emitted.claim(frame.identity):
            self.session.count("duplicate_worlds")
            return None

        self.session.count("worlds_found")
        canonical = fs.canonicalize(frame.path)
        return WorldDirectory(
            path=canonical,
            root=root.path,
            level_dat_mtime=fs.file_mtime(os.path.join(canonical, LEVEL_DAT_NAME)),
        )

    def _child_frames(self, frame: _Frame, entries: List[fs.DirEntryInfo]) -> List[_Frame]:
        children: List[_Frame] = []
        for entry in entries:
            if not entry.is_dir:
                continue

            if not entry.is_symlink:
                children.append(_Frame(path=entry.path, identity=None, parent=frame))
                continue

            if not self.follow_symlinks:
                continue

            target = fs.path_identity(entry.path)
            if target is None:
                continue

            if frame.has_ancestor(target):
                message = f"Symlink '{entry.path}' points back into its own ancestry; not followed."
                logger.debug(f"Walker: {message}")
                self.session.add_issue(
                    ScanIssue(kind=IssueKind.SYMLINK_CYCLE, path=entry.path, message=message)
                )
                continue

            if target in self.session.visited:
                continue

            children.append(_Frame(path=entry.path, identity=target, parent=frame))
        return children

    # --------------------------------------------------------------------------
    # LIFECYCLE HELPERS
    # --------------------------------------------------------------------------

    def _mark_started(self) -> None:
        if self._started:
            raise RuntimeError("WorldWalker.search() may only be called once per walker.")
        self._started = True

    def _is_cancelled(self) -> bool:
        if self._stop.is_set():
            return True
        return bool(self._cancellation_event and self._cancellation_event.is_set())
