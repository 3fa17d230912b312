"""
==========================
Helpers - General Operations
==========================

This module provides general helper functions for the package, including directory checks and time utilities.

Features:
- `now_ms`: Get the current time in milliseconds since the epoch.
- `is_writable_dir`: Check that a path is an existing, writable directory.


Usage:
>>> from bulkload.helpers.general import now_ms, is_writable_dir
>>> started = now_ms()  # Get current time in milliseconds
>>> is_writable_dir("/tmp")

*Created: 2026-10-19*
"""

import os
import time


def now_ms() -> int:
    """
    Get the current time in milliseconds since the epoch.

    Returns:
        int: Current time in milliseconds.
    """
    return int(time.time() * 1000)


def is_writable_dir(path) -> bool:
    return os.path.isdir(path) and os.access(path, os.W_OK)
