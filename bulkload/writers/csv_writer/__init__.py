"""
==========================
CSV Writer Module
==========================

This module provides the buffered writer used to stage records on disk before a bulk import.


Features:
- Implements a `CsvWriter` class opening files in truncate or append mode.
- Writes one delimited, quoted line per record.
- Buffers bytes in memory up to a configurable size before flushing.


Usage:
>>> from bulkload.writers.csv_writer import CsvWriter
>>> with CsvWriter(buffer_size=4096).open("/tmp/orders.csv") as writer:
...     writer.write(["id", "total"])

*Created: 2026-10-19*
"""
from bulkload.writers.csv_writer.writer import (
    CsvWriter,
    FILEMODE_TRUNCATE,
    FILEMODE_APPEND,
    EOL_LINUX,
    EOL_WINDOWS,
)
