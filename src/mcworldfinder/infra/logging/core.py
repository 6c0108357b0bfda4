from __future__ import annotations

"""
Logging Lifecycle.

Records from every thread are pushed onto a queue by a single QueueHandler
on the root logger. A QueueListener thread forwards them to the console and
file sinks, so walker threads never block on terminal or disk I/O.

The CLI calls 'configure_logging' once at start-up and 'shutdown_logging'
before returning its exit code, which drains the queue.
"""

import atexit
import logging
import queue
from logging.handlers import QueueHandler, QueueListener
from typing import Optional

from mcworldfinder.infra.logging.config import LoggingConfig
from mcworldfinder.infra.logging.handlers import _is_our_handler, _tag_handler, build_sinks

_CONFIGURED_FLAG_ATTR: str = "_mcworldfinder_configured"
_QUEUE_LISTENER_ATTR: str = "_mcworldfinder_queue_listener"


# ==============================================================================
# PUBLIC API
# ==============================================================================

def configure_logging(cfg: LoggingConfig, *, force: bool = False) -> logging.Logger:
    """
    Attach the queue-based handlers to the root logger.

    Repeated calls are no-ops until 'shutdown_logging' runs, unless 'force'
    is set, in which case the previous listener and handlers are replaced.

    Args:
        cfg: Logging settings.
        force: Replace an existing configuration.

    Returns:
        logging.Logger: The root logger.
    """
    root = logging.getLogger()
    if getattr(root, _CONFIGURED_FLAG_ATTR, False) and not force:
        return root

    _detach(root)
    root.setLevel(cfg.level_number)

    sinks = build_sinks(cfg)
    if not sinks:
        return root

    records: "queue.Queue[logging.LogRecord]" = queue.Queue(-1)
    listener = QueueListener(records, *sinks, respect_handler_level=True)
    listener.start()
    atexit.register(_stop_listener, listener)

    root.addHandler(_tag_handler(QueueHandler(records)))
    setattr(root, _QUEUE_LISTENER_ATTR, listener)
    setattr(root, _CONFIGURED_FLAG_ATTR, True)
    return root


def shutdown_logging() -> None:
    """Flush pending records and remove every handler added by 'configure_logging'."""
    _detach(logging.getLogger())


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _detach(root: logging.Logger) -> None:
    """Stop the listener first so queued records still reach the sinks."""
    _stop_listener(getattr(root, _QUEUE_LISTENER_ATTR, None))
    setattr(root, _QUEUE_LISTENER_ATTR, None)

    for handler in list(root.handlers):
        if _is_our_handler(handler):
            root.removeHandler(handler)
            handler.close()

    if hasattr(root, _CONFIGURED_FLAG_ATTR):
        delattr(root, _CONFIGURED_FLAG_ATTR)


def _stop_listener(listener: Optional[QueueListener]) -> None:
    """Stop 'listener' and close its sinks; safe to call twice (atexit)."""
    if listener is None or getattr(listener, "_thread", None) is None:
        return
    listener.stop()
    for sink in listener.handlers:
        sink.close()
