from __future__ import annotations

"""
Logging Configuration Models.

A single frozen dataclass describes how the CLI wants its diagnostics:
terse WARNING-level console output by default, thread-aware output once
debugging is requested (compile workers run on a pool) and an optional
rotating file.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

# Mapping of string identifiers to native logging constants
_LEVEL_MAP: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


@dataclass(frozen=True)
class LoggingConfig:
    """
    Settings consumed by configure_logging.

    Attributes:
        level: Minimum severity name ('DEBUG', 'INFO', ...). Unknown names
            fall back to WARNING.
        console: Emit records on stderr.
        log_file: Optional path of a rotating log file.
        max_bytes: Rollover threshold of the log file.
        backup_count: Rotated segments kept next to the log file.
        console_fmt: Console format below DEBUG.
        debug_console_fmt: Console format at DEBUG, naming the worker thread.
        file_fmt: Log file format.
        datefmt: Timestamp format of the log file.
    """
    level: str = "WARNING"
    console: bool = True
    log_file: Optional[str] = None

    max_bytes: int = 1024 * 1024
    backup_count: int = 3

    console_fmt: str = "%(levelname)s | %(message)s"
    debug_console_fmt: str = "%(levelname)s | %(threadName)s | %(name)s | %(message)s"
    file_fmt: str = "%(asctime)s | %(levelname)s | %(threadName)s | %(name)s | %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"

    @classmethod
    def for_cli(cls, debug: bool = False, log_file: Optional[str] = None) -> LoggingConfig:
        return cls(level="DEBUG" if debug else "WARNING", console=True, log_file=log_file)

    @property
    def level_int(self) -> int:
        if not self.level:
            return logging.WARNING
        return _LEVEL_MAP.get(str(self.level).strip().upper(), logging.WARNING)

    @property
    def active_console_fmt(self) -> str:
        return self.debug_console_fmt if self.level_int <= logging.DEBUG else self.console_fmt
