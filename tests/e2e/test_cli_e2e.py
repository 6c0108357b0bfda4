from __future__ import annotations

"""
End-to-End (E2E) CLI Tests.

Verifies the application's external behavior by invoking the entry point
script via subprocess: exit codes and the stdout/stderr split.
"""

import json
import os
import subprocess
import sys
from pathlib import Path
from typing import List

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
SRC_DIR = PROJECT_ROOT / "src"
ENTRY_POINT = SRC_DIR / "mcworldfinder" / "main.py"


def run_cli(args: List[str]) -> subprocess.CompletedProcess[str]:
    """
    Execute the CLI in a separate process.

    Injects the 'src' directory into PYTHONPATH so the package resolves
    without being installed.

    Args:
        args: Command line arguments (excluding 'python' and script path).

    Returns:
        subprocess.CompletedProcess: Result with returncode, stdout and stderr.
    """
    env = os.environ.copy()
    env["PYTHONPATH"] = str(SRC_DIR) + os.pathsep + env.get("PYTHONPATH", "")

    return subprocess.run(
        [sys.executable, str(ENTRY_POINT)] + args,
        env=env,
        capture_output=True,
        text=True,
        encoding="utf-8",
    )


def test_cli_happy_path(sample_tree: Path, sample_worlds: List[str]) -> None:
    result = run_cli([str(sample_tree)])

    assert result.returncode == 0, f"CLI failed with stderr: {result.stderr}"
    assert result.stdout.splitlines() == sample_worlds
    assert "Done. 2 Minecraft worlds were found." in result.stderr


def test_cli_handles_missing_folder(tmp_path: Path) -> None:
    result = run_cli([str(tmp_path / "ghost")])

    assert result.returncode == 2
    assert result.stdout == ""
    assert "does not exist" in result.stderr


def test_cli_json_parallel(sample_tree: Path, sample_worlds: List[str]) -> None:
    result = run_cli([str(sample_tree), str(sample_tree / "sub"), "--json", "-j", "2"])

    assert result.returncode == 0, result.stderr
    report = json.loads(result.stdout)
    assert sorted(w["path"] for w in report["worlds"]) == sorted(sample_worlds)
