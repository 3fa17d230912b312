"""
==========================
bulkload
==========================

Stage tabular records on disk as CSV and import them into a database table with one
LOAD DATA statement, instead of inserting row by row.

Usage:
>>> from bulkload import CollectionManager, DbApiHandle
>>> manager = CollectionManager(tmp_dir="/var/tmp/staging", db=DbApiHandle(connection))
>>> manager.start_collection("orders", ["id", "total"])
>>> manager.append_data(["1", "9.99"])
>>> manager.store_collection("orders").remove_collection()

*Created: 2026-10-19*
"""
from bulkload.collection import CollectionManager
from bulkload.writers.csv_writer import CsvWriter
from bulkload.helpers.db import DbApiHandle, DbHandle
from bulkload.errors import (
    BulkLoadError,
    CollectionStateError,
    CollectionValidationError,
    DatabaseNotConfiguredError,
    WriterClosedError,
)

__version__ = "0.1.0"
