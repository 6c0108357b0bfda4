from __future__ import annotations

"""
Integration tests for Logging Infrastructure.

Verifies the asynchronous QueueListener architecture, idempotency
of configuration, log file rotation, and shutdown draining.
"""

import logging
from pathlib import Path

import pytest

from mcworldfinder.infra.logging import LoggingConfig, configure_logging, shutdown_logging
from mcworldfinder.infra.logging.core import _CONFIGURED_FLAG_ATTR, _QUEUE_LISTENER_ATTR
from mcworldfinder.infra.logging.handlers import _HANDLER_TAG_ATTR


@pytest.fixture(autouse=True)
def reset_logging():
    """Start and finish each test with an unconfigured root logger."""
    shutdown_logging()
    yield
    shutdown_logging()


def _our_handlers():
    return [h for h in logging.getLogger().handlers if getattr(h, _HANDLER_TAG_ATTR, False)]


def test_logging_idempotency() -> None:
    """Multiple config calls do not duplicate handlers."""
    cfg = LoggingConfig(level="INFO", console=True)

    configure_logging(cfg)
    initial = len(_our_handlers())
    configure_logging(cfg)

    assert initial == 1
    assert len(_our_handlers()) == initial


def test_force_reconfigure_replaces_listener() -> None:
    configure_logging(LoggingConfig(level="INFO"))
    first = getattr(logging.getLogger(), _QUEUE_LISTENER_ATTR)

    configure_logging(LoggingConfig(level="DEBUG"), force=True)

    root = logging.getLogger()
    assert getattr(root, _QUEUE_LISTENER_ATTR) is not first
    assert root.level == logging.DEBUG
    assert len(_our_handlers()) == 1


def test_log_rotation(tmp_path: Path) -> None:
    """File rotation happens when the size limit is exceeded."""
    log_file = tmp_path / "logs" / "scan.log"
    cfg = LoggingConfig(
        level="DEBUG",
        console=False,
        log_file=str(log_file),
        max_bytes=100,
        backup_count=1,
    )

    configure_logging(cfg)
    logger = logging.getLogger("test_rotate")
    for _ in range(10):
        logger.debug("Walking through a long directory name to trigger rotation." * 3)

    # Stopping the listener drains the queue
    shutdown_logging()

    assert log_file.exists()
    assert (tmp_path / "logs" / "scan.log.1").exists(), "Rotation backup file was not created."


def test_shutdown_detaches_everything() -> None:
    configure_logging(LoggingConfig(level="INFO"))

    shutdown_logging()

    root = logging.getLogger()
    assert _our_handlers() == []
    assert getattr(root, _QUEUE_LISTENER_ATTR, None) is None
    assert not hasattr(root, _CONFIGURED_FLAG_ATTR)


def test_records_reach_stderr_after_shutdown(capsys) -> None:
    configure_logging(LoggingConfig(level="INFO"))
    logging.getLogger("mcworldfinder.test").warning("Cannot read directory '/x'")
    shutdown_logging()

    assert "WARNING | Cannot read directory '/x'" in capsys.readouterr().err


def test_config_from_settings_and_debug_format() -> None:
    cfg = LoggingConfig.from_settings({"log_level": "debug", "log_file": ""})

    assert cfg.log_file is None
    assert cfg.level_number == logging.DEBUG
    assert "%(threadName)s" in cfg.console_format()
    assert "%(threadName)s" not in LoggingConfig(level="WARN").console_format()
    assert LoggingConfig(level="bogus").level_number == logging.INFO


def test_unwritable_log_file_keeps_console(tmp_path: Path, capsys) -> None:
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("x", encoding="utf-8")

    configure_logging(LoggingConfig(level="INFO", log_file=str(blocker / "scan.log")))
    logging.getLogger("mcworldfinder.test").warning("still visible")
    shutdown_logging()

    err = capsys.readouterr().err
    assert "Cannot open log file" in err
    assert "still visible" in err
