from __future__ import annotations

"""
Logging Configuration Model.

Describes how diagnostics of a search run are emitted: severity threshold,
console output on stderr, and an optional rotating log file.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

LEVEL_NAMES = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Name -> numeric level; 'WARN' is accepted as a user-typed alias
_LEVEL_MAP: Dict[str, int] = {name: getattr(logging, name) for name in LEVEL_NAMES}
_LEVEL_MAP["WARN"] = logging.WARNING


@dataclass(frozen=True)
class LoggingConfig:
    """
    Immutable settings for the logging subsystem.

    Attributes:
        level: Minimum severity captured ('DEBUG' ... 'CRITICAL').
        console: Emit records on stderr.
        log_file: Optional path of a rotating log file.
        max_bytes: Size of one log file segment before it rolls over.
        backup_count: Rolled-over segments kept next to the active file.
        console_fmt: Record layout on stderr.
        debug_console_fmt: Record layout on stderr at DEBUG level, naming the
            walker thread that produced the record.
        file_fmt: Record layout in the log file.
        datefmt: Timestamp layout in the log file.
    """
    level: str = "INFO"
    console: bool = True
    log_file: Optional[str] = None

    max_bytes: int = 1024 * 1024
    backup_count: int = 2

    console_fmt: str = "%(levelname)s | %(message)s"
    debug_console_fmt: str = "%(levelname)s | %(threadName)s | %(message)s"
    file_fmt: str = "%(asctime)s | %(levelname)s | %(name)s | %(threadName)s | %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"

    @classmethod
    def from_settings(cls, settings: Dict[str, Any]) -> "LoggingConfig":
        """
        Build the logging setup from a validated application configuration.

        Args:
            settings: Dict produced by 'validate_config'.

        Returns:
            LoggingConfig: Console logging plus the file named by 'log_file', if any.
        """
        return cls(
            level=settings.get("log_level") or "INFO",
            console=True,
            log_file=settings.get("log_file") or None,
        )

    @property
    def level_number(self) -> int:
        if not self.level:
            return logging.INFO
        return _LEVEL_MAP.get(str(self.level).strip().upper(), logging.INFO)

    def console_format(self) -> str:
        if self.level_number <= logging.DEBUG:
            return self.debug_console_fmt
        return self.console_fmt
