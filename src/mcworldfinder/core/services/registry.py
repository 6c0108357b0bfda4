from __future__ import annotations

"""
Identity Claim Registry.

Thread-safe, append-only set of filesystem identities. The walker keeps two
instances per run: one for directories already descended into, and one for
worlds already reported. Both rely on 'claim' performing the membership test
and the insertion under a single lock acquisition.
"""

import threading
from typing import Hashable, Set


class ClaimRegistry:
    """
    Lock-guarded set supporting an atomic check-then-insert.

    Entries are never removed during a run; the registry is discarded with
    the walker that owns it.
    """

    def __init__(self, name: str = "registry") -> None:
        self.name = name
        self._items: Set[Hashable] = set()
        self._lock = threading.Lock()

    def claim(self, key: Hashable) -> bool:
        """
        Insert 'key' if absent.

        Args:
            key: Filesystem identity to claim.

        Returns:
            bool: True if this call inserted the key, False if it was already claimed.
        """
        with self._lock:
            if key in self._items:
                return False
            self._items.add(key)
            return True

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._items

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)
