from __future__ import annotations

"""
Unit tests for the Configuration Validation Service.

Verifies type coercion, default injection, and strict-mode failures.
"""

import pytest

from mcworldfinder.core.services.validator import validate_config
from mcworldfinder.domain.config import get_default_config


def test_validate_defaults_produce_no_warnings() -> None:
    clean, warnings = validate_config(get_default_config())

    assert clean == get_default_config()
    assert warnings == []


def test_validate_non_dict_returns_defaults() -> None:
    clean, warnings = validate_config(["not", "a", "dict"])

    assert clean == get_default_config()
    assert len(warnings) == 1
    assert "expected dict" in warnings[0]


def test_validate_non_dict_strict_raises() -> None:
    with pytest.raises(TypeError):
        validate_config("nope", strict=True)


def test_validate_bool_coercion() -> None:
    clean, warnings = validate_config({
        "exhaustive": "yes",
        "follow_symlinks": 0,
        "show_summary": "maybe",
    })

    assert clean["exhaustive"] is True
    assert clean["follow_symlinks"] is False
    assert clean["show_summary"] is True
    assert len(warnings) == 3


def test_validate_roots_normalization() -> None:
    clean, _ = validate_config({"roots": "/srv/games"})
    assert clean["roots"] == ["/srv/games"]

    # Blank folders stay so the resolver can report them as invalid roots
    clean, warnings = validate_config({"roots": ["/a", "", 42, "/b"]})
    assert clean["roots"] == ["/a", "", "/b"]
    assert len(warnings) == 1


def test_validate_workers() -> None:
    assert validate_config({"workers": "4"})[0]["workers"] == 4

    clean, warnings = validate_config({"workers": 0})
    assert clean["workers"] == 1
    assert "positive integer" in warnings[0]

    with pytest.raises(ValueError):
        validate_config({"workers": "4"}, strict=True)


def test_validate_choices_are_case_insensitive() -> None:
    clean, warnings = validate_config({"output_format": "JSON", "log_level": "debug"})

    assert clean["output_format"] == "json"
    assert clean["log_level"] == "DEBUG"
    assert warnings == []


def test_validate_unknown_choice_falls_back() -> None:
    clean, warnings = validate_config({"output_format": "xml"})

    assert clean["output_format"] == "plain"
    assert "not one of" in warnings[0]

    with pytest.raises(ValueError):
        validate_config({"output_format": "xml"}, strict=True)


def test_validate_log_file_is_stripped() -> None:
    clean, _ = validate_config({"log_file": "  /tmp/scan.log  "})

    assert clean["log_file"] == "/tmp/scan.log"
