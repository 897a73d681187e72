from __future__ import annotations

"""
Logging Handler Factories.

Builds the sink handlers that sit behind the queue listener and tags them,
so a reconfiguration only ever tears down handlers this package installed
and leaves those of test runners or host applications alone.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import List, Optional, TextIO

from lanoma.infra.logging.config import LoggingConfig

# Internal attribute used to tag and identify our own handlers
_HANDLER_TAG_ATTR: str = "_lanoma_handler"


def _tag_handler(handler: logging.Handler) -> None:
    setattr(handler, _HANDLER_TAG_ATTR, True)


def _is_our_handler(handler: logging.Handler) -> bool:
    return bool(getattr(handler, _HANDLER_TAG_ATTR, False))


def build_sink_handlers(cfg: LoggingConfig, stream: Optional[TextIO] = None) -> List[logging.Handler]:
    """
    Create the console and file handlers requested by the configuration.

    Args:
        cfg: Logging settings.
        stream: Console stream; stderr when omitted.

    Returns:
        List[logging.Handler]: Tagged handlers, possibly empty.
    """
    handlers: List[logging.Handler] = []

    if cfg.console:
        handlers.append(_create_console_handler(
            stream if stream is not None else sys.stderr,
            cfg.level_int,
            logging.Formatter(cfg.active_console_fmt),
        ))

    if cfg.log_file:
        fh = _create_rotating_file_handler(
            cfg.log_file,
            cfg.level_int,
            logging.Formatter(cfg.file_fmt, datefmt=cfg.datefmt),
            cfg.max_bytes,
            cfg.backup_count,
        )
        if fh:
            handlers.append(fh)

    return handlers


def _create_console_handler(stream: TextIO, level_int: int, formatter: logging.Formatter) -> logging.Handler:
    sh = logging.StreamHandler(stream)
    sh.setLevel(level_int)
    sh.setFormatter(formatter)
    _tag_handler(sh)
    return sh


def _create_rotating_file_handler(
        log_file: str,
        level_int: int,
        formatter: logging.Formatter,
        max_bytes: int,
        backup_count: int,
) -> Optional[RotatingFileHandler]:
    """
    Open a RotatingFileHandler.

    A log file that cannot be opened must not prevent a compile run, so the
    failure is reported on stderr and None is returned.
    """
    try:
        parent = os.path.dirname(os.path.abspath(log_file))
        if parent and not os.path.exists(parent):
            os.makedirs(parent, exist_ok=True)
        fh = RotatingFileHandler(
            log_file,
            maxBytes=int(max_bytes),
            backupCount=int(backup_count),
            encoding="utf-8",
        )
    except OSError as e:
        sys.stderr.write(f"WARNING: Cannot open log file '{log_file}': {e}\n")
        return None

    fh.setLevel(level_int)
    fh.setFormatter(formatter)
    _tag_handler(fh)
    return fh
