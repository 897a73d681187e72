from __future__ import annotations

"""
Logging Core Orchestrator.

Owns the lifecycle of the logging subsystem. Compile workers log from pool
threads, so every record goes through a QueueHandler on the root logger
and the sinks (console, rotating file) are fed by one QueueListener
thread. The listener and a 'configured' flag are stored on the root
logger, which makes configure_logging idempotent per process.
"""

import atexit
import logging
import os
import queue
from logging.handlers import QueueHandler, QueueListener
from typing import Optional

from lanoma.infra.fs import get_user_data_dir
from lanoma.infra.logging.config import LoggingConfig
from lanoma.infra.logging.handlers import _is_our_handler, _tag_handler, build_sink_handlers

# Attributes set on the root logger
_CONFIGURED_FLAG_ATTR: str = "_lanoma_configured"
_QUEUE_LISTENER_ATTR: str = "_lanoma_queue_listener"


# ==============================================================================
# PUBLIC API
# ==============================================================================

def get_default_log_path(file_name: str = "lanoma.log") -> str:
    """Return '<user data dir>/logs/<file_name>'; nothing is created."""
    return os.path.join(get_user_data_dir(), "logs", file_name)


def configure_logging(cfg: LoggingConfig, *, force: bool = False) -> logging.Logger:
    """
    Install the queue-backed handlers on the root logger.

    Only the first call has an effect unless 'force' is set, in which case
    the handlers and listener installed earlier by this package are torn
    down first. Foreign handlers are never touched.

    Args:
        cfg: Logging settings.
        force: Reconfigure even if already configured.

    Returns:
        logging.Logger: The root logger.
    """
    root = logging.getLogger()

    if getattr(root, _CONFIGURED_FLAG_ATTR, False) and not force:
        return root

    shutdown_logging()
    root.setLevel(cfg.level_int)

    sinks = build_sink_handlers(cfg)
    if not sinks:
        return root

    log_queue: queue.Queue[logging.LogRecord] = queue.Queue(-1)
    queue_handler = QueueHandler(log_queue)
    _tag_handler(queue_handler)

    listener = QueueListener(log_queue, *sinks, respect_handler_level=True)
    listener.start()
    root.addHandler(queue_handler)

    setattr(root, _QUEUE_LISTENER_ATTR, listener)
    setattr(root, _CONFIGURED_FLAG_ATTR, True)

    # Flush pending records on interpreter shutdown
    atexit.register(_safe_stop_listener, listener)

    return root


def shutdown_logging() -> None:
    """
    Flush and remove everything configure_logging installed.

    Safe to call when logging was never configured.
    """
    root = logging.getLogger()

    _safe_stop_listener(getattr(root, _QUEUE_LISTENER_ATTR, None))
    setattr(root, _QUEUE_LISTENER_ATTR, None)

    for h in list(root.handlers):
        if _is_our_handler(h):
            root.removeHandler(h)
            h.close()

    if hasattr(root, _CONFIGURED_FLAG_ATTR):
        delattr(root, _CONFIGURED_FLAG_ATTR)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _safe_stop_listener(listener: Optional[QueueListener]) -> None:
    # QueueListener.stop() fails on an already joined thread, which happens
    # when both a forced reconfiguration and atexit stop the same listener
    if listener and getattr(listener, "_thread", None) is not None:
        listener.stop()
        for h in listener.handlers:
            h.close()
