from __future__ import annotations

"""
Integration tests for Logging Infrastructure.

Verifies the QueueListener architecture, idempotency of configuration,
rotation and that records emitted by compile worker threads reach the log
file with their thread name.
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest

from lanoma.infra.logging import (
    _HANDLER_TAG_ATTR,
    _QUEUE_LISTENER_ATTR,
    LoggingConfig,
    configure_logging,
    get_default_log_path,
    shutdown_logging,
)


@pytest.fixture(autouse=True)
def reset_logging() -> None:
    """Clean up root logger handlers before and after each test."""
    shutdown_logging()
    yield
    shutdown_logging()


def test_logging_idempotency() -> None:
    """TC-01: Verify that multiple config calls do not duplicate handlers."""
    cfg = LoggingConfig(level="INFO", console=True)

    configure_logging(cfg)
    root = logging.getLogger()
    initial_handler_count = len(root.handlers)

    configure_logging(cfg)
    assert len(root.handlers) == initial_handler_count, "Handlers were duplicated."


def test_force_reconfiguration_replaces_listener() -> None:
    """TC-02: 'force' tears down our previous listener."""
    configure_logging(LoggingConfig(level="INFO"))
    root = logging.getLogger()
    first = getattr(root, _QUEUE_LISTENER_ATTR)

    configure_logging(LoggingConfig(level="DEBUG"), force=True)
    second = getattr(root, _QUEUE_LISTENER_ATTR)

    assert second is not first
    assert root.level == logging.DEBUG
    assert len([h for h in root.handlers if getattr(h, _HANDLER_TAG_ATTR, False)]) == 1


def test_log_rotation(tmp_path: Path) -> None:
    """TC-03: Verify file rotation when size limit is exceeded."""
    log_file = tmp_path / "test_rotate.log"
    cfg = LoggingConfig(
        level="DEBUG",
        console=False,
        log_file=str(log_file),
        max_bytes=100,
        backup_count=1
    )

    configure_logging(cfg)
    logger = logging.getLogger("test_rotate")

    for _ in range(10):
        logger.debug("This is a long log message to trigger rotation." * 5)

    # Give time for the QueueListener to process
    time.sleep(0.5)

    backup_file = tmp_path / "test_rotate.log.1"
    assert log_file.exists()
    assert backup_file.exists(), "Rotation backup file was not created."


def test_worker_thread_records_reach_file(tmp_path: Path) -> None:
    """TC-04: Records from pool threads are written with their thread name."""
    log_file = tmp_path / "workers.log"
    configure_logging(LoggingConfig(level="INFO", console=False, log_file=str(log_file)))
    logger = logging.getLogger("lanoma.test.workers")

    with ThreadPoolExecutor(max_workers=3, thread_name_prefix="CompileWorker") as executor:
        for i in range(6):
            executor.submit(logger.info, f"unit {i} done")

    # Drains the queue and closes the file
    shutdown_logging()

    content = log_file.read_text(encoding="utf-8")
    assert content.count("done") == 6
    assert "CompileWorker" in content


def test_unwritable_log_file_does_not_break_setup(tmp_path: Path, capsys) -> None:
    """TC-05: A log file that cannot be opened only produces a warning."""
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("", encoding="utf-8")

    root = configure_logging(LoggingConfig(level="INFO", console=True, log_file=str(blocker / "x.log")))

    assert "Cannot open log file" in capsys.readouterr().err
    assert getattr(root, _QUEUE_LISTENER_ATTR) is not None


def test_queue_listener_architecture() -> None:
    """TC-06: Verify that the root logger uses a QueueHandler-based architecture."""
    cfg = LoggingConfig(level="INFO", console=True)
    configure_logging(cfg)

    root = logging.getLogger()
    queue_handlers = [h for h in root.handlers if getattr(h, _HANDLER_TAG_ATTR, False)]

    assert len(queue_handlers) > 0
    assert getattr(root, _QUEUE_LISTENER_ATTR) is not None


def test_default_log_path_under_user_dir() -> None:
    assert get_default_log_path().replace("\\", "/").endswith("logs/lanoma.log")


def test_cli_config_levels_and_formats() -> None:
    """TC-07: Debug mode lowers the level and names the thread on the console."""
    quiet = LoggingConfig.for_cli()
    verbose = LoggingConfig.for_cli(debug=True, log_file="/tmp/lanoma.log")

    assert quiet.level_int == logging.WARNING
    assert "threadName" not in quiet.active_console_fmt
    assert verbose.level_int == logging.DEBUG
    assert "threadName" in verbose.active_console_fmt
    assert verbose.log_file == "/tmp/lanoma.log"
    assert LoggingConfig(level="nonsense").level_int == logging.WARNING
