from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared helpers to build Minecraft-like directory trees under tmp_path.
"""

import os
import sys
from pathlib import Path
from typing import Callable, List

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

# Minimal gzip magic; content is never parsed
LEVEL_DAT_BYTES = b"\x1f\x8b\x08\x00level"


# -----------------------------------------------------------------------------
# Shared Helpers
# -----------------------------------------------------------------------------
def canonical(path: Path) -> str:
    """Canonical string form used by the walker when reporting worlds."""
    return os.path.realpath(str(path))


@pytest.fixture
def make_world() -> Callable[[Path], Path]:
    """Return a factory creating a directory with a 'level.dat' child."""
    def _make(path: Path) -> Path:
        path.mkdir(parents=True, exist_ok=True)
        (path / "level.dat").write_bytes(LEVEL_DAT_BYTES)
        return path
    return _make


@pytest.fixture
def symlink_dir() -> Callable[[Path, Path], Path]:
    """Return a factory creating a directory symlink, skipping if unsupported."""
    def _link(link: Path, target: Path) -> Path:
        try:
            os.symlink(str(target), str(link), target_is_directory=True)
        except (OSError, NotImplementedError) as e:
            pytest.skip(f"Symlinks not supported here: {e}")
        return link
    return _link


@pytest.fixture
def sample_tree(tmp_path: Path, make_world: Callable[[Path], Path]) -> Path:
    """
    Create the reference tree.

    Structure:
    /root
      /world1/level.dat
      /sub/world2/level.dat
      /sub/notes.txt
      /empty
    """
    root = tmp_path / "root"
    make_world(root / "world1")
    make_world(root / "sub" / "world2")
    (root / "sub" / "notes.txt").write_text("not a world", encoding="utf-8")
    (root / "empty").mkdir()
    return root


@pytest.fixture
def sample_worlds(sample_tree: Path) -> List[str]:
    """Expected canonical worlds of 'sample_tree' in deterministic walk order."""
    return [
        canonical(sample_tree / "sub" / "world2"),
        canonical(sample_tree / "world1"),
    ]
