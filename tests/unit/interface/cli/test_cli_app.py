from __future__ import annotations

"""
Unit tests for the CLI Application Controller.

Runs the full CLI flow in-process against temporary trees and checks
stream separation, exit codes and the JSON report.
"""

import json
from pathlib import Path
from typing import List

from mcworldfinder.domain import constants as const
from mcworldfinder.interface.cli.app import main


def test_cli_prints_one_world_per_line(sample_tree: Path, sample_worlds: List[str], capsys) -> None:
    code = main([str(sample_tree)])
    captured = capsys.readouterr()

    assert code == const.EXIT_OK
    assert captured.out.splitlines() == sample_worlds
    assert "Done. 2 Minecraft worlds were found." in captured.err


def test_cli_logs_walking_progress(sample_tree: Path, capsys) -> None:
    main([str(sample_tree), "--no-summary"])
    captured = capsys.readouterr()

    assert "Walking through" in captured.err
    assert "Done." not in captured.err


def test_cli_overlapping_folders_report_once(sample_tree: Path, sample_worlds: List[str], capsys) -> None:
    code = main([str(sample_tree / "sub"), str(sample_tree), str(sample_tree)])
    out_lines = capsys.readouterr().out.splitlines()

    assert code == const.EXIT_OK
    assert sorted(out_lines) == sorted(sample_worlds)


def test_cli_invalid_folder_is_warning(sample_tree: Path, sample_worlds: List[str], tmp_path: Path, capsys) -> None:
    missing = tmp_path / "missing"

    code = main([str(missing), str(sample_tree)])
    captured = capsys.readouterr()

    assert code == const.EXIT_OK
    assert captured.out.splitlines() == sample_worlds
    assert "does not exist" in captured.err
    assert "Warnings: 1" in captured.err


def test_cli_no_usable_folder_exit_code(tmp_path: Path, capsys) -> None:
    code = main([str(tmp_path / "a"), str(tmp_path / "b")])
    captured = capsys.readouterr()

    assert code == const.EXIT_NO_ROOTS
    assert captured.out == ""
    assert "No folder could be searched" in captured.err


def test_cli_json_report(sample_tree: Path, sample_worlds: List[str], capsys) -> None:
    code = main([str(sample_tree), "--json"])
    report = json.loads(capsys.readouterr().out)

    assert code == const.EXIT_OK
    assert [w["path"] for w in report["worlds"]] == sample_worlds
    assert report["stats"]["worlds_found"] == 2
    assert report["issues"] == []


def test_cli_dump_config(capsys) -> None:
    code = main(["/srv/games", "-j", "3", "--dump-config"])
    dumped = json.loads(capsys.readouterr().out)

    assert code == const.EXIT_OK
    assert dumped["roots"] == ["/srv/games"]
    assert dumped["workers"] == 3


def test_cli_invalid_workers_is_coerced_with_warning(sample_tree: Path, capsys) -> None:
    code = main([str(sample_tree), "-j", "0"])
    captured = capsys.readouterr()

    assert code == const.EXIT_OK
    assert "Configuration Constraint" in captured.err


def test_cli_empty_folder_prints_nothing(tmp_path: Path, capsys) -> None:
    empty = tmp_path / "empty"
    empty.mkdir()

    code = main([str(empty)])
    captured = capsys.readouterr()

    assert code == const.EXIT_OK
    assert captured.out == ""
    assert "Done. 0 Minecraft worlds were found." in captured.err


def test_cli_blank_folder_exits_without_default_scan(capsys) -> None:
    code = main([""])
    captured = capsys.readouterr()

    assert code == const.EXIT_NO_ROOTS
    assert captured.out == ""
    assert "Empty folder argument" in captured.err
    assert "Walking through" not in captured.err
