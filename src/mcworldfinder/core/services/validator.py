from __future__ import annotations

"""
Configuration Validation Service.

Gatekeeper between raw configuration (CLI overrides merged over defaults)
and the search orchestrator. Values are coerced to the types the walker
expects; anything unusable is replaced by its default and reported as a
warning, or rejected outright in strict mode.
"""

import logging
from typing import Any, Dict, List, Sequence, Tuple

from mcworldfinder.domain.config import get_default_config
from mcworldfinder.domain.constants import OUTPUT_FORMATS
from mcworldfinder.infra.logging.config import LEVEL_NAMES

logger = logging.getLogger(__name__)

_TRUE_WORDS = frozenset({"true", "1", "yes", "y", "on"})
_FALSE_WORDS = frozenset({"false", "0", "no", "n", "off"})

_BOOL_FIELDS = ("exhaustive", "follow_symlinks", "show_summary")
_CHOICE_FIELDS = {
    "output_format": OUTPUT_FORMATS,
    "log_level": LEVEL_NAMES,
}


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize a search configuration.

    Args:
        config: Raw configuration data (usually a dictionary).
        strict: Raise on the first invalid value instead of falling back.

    Returns:
        Tuple[Dict[str, Any], List[str]]: The normalized configuration and
                                          the warnings produced on the way.

    Raises:
        TypeError: In strict mode, for values of the wrong type.
        ValueError: In strict mode, for values of the right type but out of range.
    """
    defaults = get_default_config()
    coercer = _Coercer(defaults, strict)

    if not isinstance(config, dict):
        coercer.reject(TypeError, f"Invalid config type: expected dict, received {type(config).__name__}.")
        logger.warning(coercer.warnings[-1])
        return defaults, coercer.warnings

    merged: Dict[str, Any] = {**defaults, **config}

    for name in _BOOL_FIELDS:
        merged[name] = coercer.boolean(name, merged.get(name))
    for name, choices in _CHOICE_FIELDS.items():
        merged[name] = coercer.choice(name, merged.get(name), choices)

    merged["roots"] = coercer.paths("roots", merged.get("roots"))
    merged["workers"] = coercer.positive_int("workers", merged.get("workers"))
    merged["log_file"] = coercer.text("log_file", merged.get("log_file"))

    return merged, coercer.warnings


# -----------------------------------------------------------------------------
# TYPE COERCION
# -----------------------------------------------------------------------------

class _Coercer:
    """Per-call coercion state: defaults, strictness and collected warnings."""

    def __init__(self, defaults: Dict[str, Any], strict: bool) -> None:
        self.defaults = defaults
        self.strict = strict
        self.warnings: List[str] = []

    def reject(self, error: type, message: str) -> None:
        if self.strict:
            raise error(message)
        self.warnings.append(f"{message} Using the default.")

    def fallback(self, name: str, error: type, message: str) -> Any:
        self.reject(error, message)
        default = self.defaults[name]
        return list(default) if isinstance(default, list) else default

    def text(self, name: str, value: Any) -> str:
        if value is None:
            return self.defaults[name]
        if isinstance(value, str):
            return value.strip()
        return self.fallback(name, TypeError, f"Field '{name}' must be a string, got {type(value).__name__}.")

    def boolean(self, name: str, value: Any) -> bool:
        if value is None:
            return self.defaults[name]
        if isinstance(value, bool):
            return value

        if not self.strict:
            converted = _loose_bool(value)
            if converted is not None:
                self.warnings.append(f"Field '{name}' converted from {value!r} to {converted}.")
                return converted

        return self.fallback(name, TypeError, f"Field '{name}' must be a boolean, got {value!r}.")

    def positive_int(self, name: str, value: Any) -> int:
        if value is None:
            return self.defaults[name]

        number = value
        if isinstance(value, str) and not self.strict:
            number = int(value.strip()) if value.strip().isdigit() else None

        if isinstance(number, int) and not isinstance(number, bool) and number >= 1:
            return number
        return self.fallback(name, ValueError, f"Field '{name}' must be a positive integer, got {value!r}.")

    def choice(self, name: str, value: Any, choices: Sequence[str]) -> str:
        if value is None:
            return self.defaults[name]
        if isinstance(value, str):
            for candidate in choices:
                if candidate.lower() == value.strip().lower():
                    return candidate
        return self.fallback(name, ValueError, f"Field '{name}': {value!r} is not one of {', '.join(choices)}.")

    def paths(self, name: str, value: Any) -> List[str]:
        """
        A single string is a one-folder list. Blank strings are kept so that
        the root resolver reports them as invalid folders.
        """
        if value is None:
            return list(self.defaults[name])
        if isinstance(value, str):
            return [value] if value.strip() else list(self.defaults[name])
        if not isinstance(value, (list, tuple)):
            return self.fallback(name, TypeError, f"Field '{name}' must be a list of paths, got {type(value).__name__}.")

        kept: List[str] = []
        for item in value:
            if isinstance(item, str):
                kept.append(item)
            elif self.strict:
                raise TypeError(f"Invalid entry in '{name}': {item!r}")
            else:
                self.warnings.append(f"Ignored invalid entry in '{name}': {item!r}")
        return kept


def _loose_bool(value: Any):
    if isinstance(value, (int, float)) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        word = value.strip().lower()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
    return None
