"""
==========================
Logger Module
==========================

This module provides a logging setup for the package using Python's built-in logging library.
It supports both file and console logging, with a rotating log file fed through a queue so that
slow disks never stall the writer that emits the record.

Features:
- Uses `QueueHandler` to send log records to a queue.
- Uses `QueueListener` to listen for log records and write them to file and console.
- Configurable log folder and level.
- Formats log messages with timestamp, level, thread name, and message.

Usage:
>>> from bulkload.logger import logger, configure_logger, shutdown_logger
>>> configure_logger("/var/log/bulkload")
>>> logger.info("This is an info message.")
>>> shutdown_logger()  # Important to stop the listener when done.

*Created: 2026-10-19*
"""

import logging
import logging.handlers
import os
import queue as std_queue
from typing import Optional

from bulkload.helpers import config as default_config

LOG_FORMAT = "%(asctime)s [%(levelname)s] [%(threadName)s] %(message)s"
LOG_FILE_NAME = "bulkload.log"
LOG_MAX_BYTES = 5 * 1024 * 1024
LOG_BACKUP_COUNT = 5

# Public logger object other modules import
logger = logging.getLogger("bulkload")
logger.setLevel(logging.INFO)

# If nothing configures logging, fall back to console so imports can safely log.
if not logger.handlers:
    console = logging.StreamHandler()
    console.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(console)

# Internal state
_configured = False
_queue: Optional[std_queue.Queue] = None
_listener: Optional[logging.handlers.QueueListener] = None


def is_configured() -> bool:
    return _configured


def configure_logger(log_folder: Optional[str] = None, level: int = logging.INFO):
    """
    Configure the logger with file and console handlers.
    Records go through a QueueHandler; a QueueListener owns the rotating file
    handler and the console handler. Calling it again once configured does nothing.

    Args:
        log_folder (str, optional): Folder for `bulkload.log`. Defaults to the configured LOG_FOLDER.
        level (int, optional): Logging level. Defaults to logging.INFO.
    """
    global _configured, _queue, _listener

    if _configured:
        return

    log_folder = str(log_folder or default_config.LOG_FOLDER)
    os.makedirs(log_folder, exist_ok=True)
    log_file = os.path.join(log_folder, LOG_FILE_NAME)

    logger.setLevel(level)

    # Remove the default console handler added on import so it doesn't duplicate output
    for h in list(logger.handlers):
        logger.removeHandler(h)

    fmt = logging.Formatter(LOG_FORMAT)

    _queue = std_queue.Queue(-1)
    queue_handler = logging.handlers.QueueHandler(_queue)
    logger.addHandler(queue_handler)

    file_handler = logging.handlers.RotatingFileHandler(
        log_file, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUP_COUNT, encoding="utf-8"
    )
    file_handler.setFormatter(fmt)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(fmt)

    _listener = logging.handlers.QueueListener(
        _queue, file_handler, console_handler)
    _listener.start()

    _configured = True


def shutdown_logger():
    """
    Shutdown the logger by stopping the listener and closing all handlers.
    Pending records are flushed to the file before the handlers close.
    """
    global _listener, _queue, _configured

    if _listener:
        _listener.stop()
        for h in _listener.handlers:
            h.flush()
            h.close()
        _listener = None

    for h in list(logger.handlers):
        h.flush()
        h.close()
        logger.removeHandler(h)

    _queue = None
    _configured = False
