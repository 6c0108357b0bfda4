from __future__ import annotations

"""
Logging Handler Factories.

Builds the sinks the queue listener writes to. Every handler created here
is tagged, so reconfiguration and shutdown detach only mcworldfinder's own
handlers and leave foreign ones (pytest capture, embedding applications)
in place.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import List, Optional

from mcworldfinder.infra.logging.config import LoggingConfig

_HANDLER_TAG_ATTR: str = "_mcworldfinder_handler"


def _tag_handler(handler: logging.Handler) -> logging.Handler:
    setattr(handler, _HANDLER_TAG_ATTR, True)
    return handler


def _is_our_handler(handler: logging.Handler) -> bool:
    return bool(getattr(handler, _HANDLER_TAG_ATTR, False))


def build_sinks(cfg: LoggingConfig) -> List[logging.Handler]:
    """
    Create the terminal handlers described by 'cfg'.

    Args:
        cfg: Logging settings.

    Returns:
        List[logging.Handler]: Console and/or file handlers; may be empty.
    """
    sinks: List[logging.Handler] = []
    level = cfg.level_number

    if cfg.console:
        console = logging.StreamHandler(sys.stderr)
        console.setLevel(level)
        console.setFormatter(logging.Formatter(cfg.console_format()))
        sinks.append(_tag_handler(console))

    if cfg.log_file:
        file_handler = _open_log_file(cfg)
        if file_handler is not None:
            file_handler.setLevel(level)
            file_handler.setFormatter(logging.Formatter(cfg.file_fmt, datefmt=cfg.datefmt))
            sinks.append(_tag_handler(file_handler))

    return sinks


def _open_log_file(cfg: LoggingConfig) -> Optional[RotatingFileHandler]:
    """
    Open the rotating log file, creating its folder if needed.

    A log file that cannot be opened never stops a search: the failure is
    reported on stderr and logging continues on the console only.
    """
    path = os.path.abspath(str(cfg.log_file))
    try:
        os.makedirs(os.path.dirname(path), exist_ok=True)
        return RotatingFileHandler(
            path,
            maxBytes=int(cfg.max_bytes),
            backupCount=int(cfg.backup_count),
            encoding="utf-8",
        )
    except OSError as e:
        sys.stderr.write(f"WARNING: Cannot open log file '{path}': {e}\n")
        return None
