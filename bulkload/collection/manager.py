"""
==========================
Collection Manager Module
==========================

This module provides the manager that stages records in a collection (a CSV file in the
temporary folder) and loads the whole file into a database table with a single LOAD DATA statement.

Features:
- Implements a `CollectionManager` class owning at most one collection at a time.
- Starts new collections (header row written once) or reopens existing ones in append mode.
- Escapes backslashes in every value so the import engine reads them literally.
- Closes, flushes and bulk-loads a collection, recording the row count reported by the database.
- Removes or detaches collections once they are no longer needed.


Usage:
>>> from bulkload.collection import CollectionManager
>>> manager = CollectionManager(tmp_dir="/var/tmp/staging", buffer_size=64 * 1024)
>>> manager.set_db(handle, is_remote=False)
>>> manager.start_collection("orders", ["id", "total"])
>>> manager.append_data(["1", "9.99"])
>>> manager.store_collection("orders")
>>> manager.get_last_result_count()
1
>>> manager.remove_collection()

*Created: 2026-10-19*
"""

import os
import tempfile
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Sequence

import bulkload.helpers.config as cfg
from bulkload.logger import logger
from bulkload.errors import CollectionStateError, CollectionValidationError, DatabaseNotConfiguredError
from bulkload.helpers.db import DbHandle, build_load_data_statement, read_header_fields
from bulkload.helpers.general import is_writable_dir, now_ms
from bulkload.helpers.paths import (
    collection_path_for, is_collection_path, normalize_dir,
    validate_collection_name, validate_field_names, validate_table_name,
)
from bulkload.writers.csv_writer import CsvWriter, EOL_LINUX, FILEMODE_APPEND, FILEMODE_TRUNCATE


@dataclass
class _Collection:
    """The collection currently tracked by a manager."""
    path: str
    is_open: bool = False
    # known only for collections created by start_collection
    fields: Optional[List[str]] = None


class CollectionManager:
    """
    Stages rows in a CSV collection and bulk-loads it into a database table.

    Lifecycle: no collection -> open (start/open) -> closed but attached (close)
    -> stored and/or removed. Closing with `detach=True` forgets the collection
    without touching its file. Not safe for concurrent use: run one manager,
    and one collection name, per producer.
    """

    def __init__(self, tmp_dir: Optional[str] = None, buffer_size: int = 0, db: Optional[DbHandle] = None,
                 is_remote: bool = True, writer: Optional[CsvWriter] = None):
        """
        Args:
            tmp_dir (str, optional): Folder holding the collections. Defaults to the system temp dir.
            buffer_size (int, optional): Writer buffer size in bytes. Defaults to 0 (unbuffered).
            db (DbHandle, optional): Database handle used by `store_collection`.
            is_remote (bool, optional): Whether the database runs on another machine. Defaults to True.
            writer (CsvWriter, optional): Writer to use instead of a new one.
        """
        self._writer = writer if writer is not None else CsvWriter(eol=EOL_LINUX)
        self._writer.set_buffer_size(buffer_size)
        self._tmp_dir: Optional[str] = None
        self._db: Optional[DbHandle] = None
        self._is_remote: Optional[bool] = None
        self._collection: Optional[_Collection] = None
        self._last_results_count: Optional[int] = None

        if tmp_dir is not None:
            self.set_tmp_dir(tmp_dir)
        if db is not None:
            self.set_db(db, is_remote)

    @classmethod
    def from_config(cls, config: Optional[Dict[str, Any]] = None, db: Optional[DbHandle] = None) -> "CollectionManager":
        """
        Build a manager from a configuration mapping as returned by `load_config`,
        or from the module-level configuration when none is given.
        """
        if config is None:
            tmp_dir, buffer_size, eol, is_remote = cfg.TMP_DIR, cfg.BUFFER_SIZE, cfg.EOL, cfg.DB_IS_REMOTE
        else:
            tmp_dir = config["paths"]["tmp_dir"]
            buffer_size = int(config["writer"]["buffer_size"] or 0)
            eol = str(config["writer"]["eol"])
            is_remote = bool(config["db"]["is_remote"])

        writer = CsvWriter(buffer_size=buffer_size, eol=eol)
        return cls(tmp_dir=tmp_dir, buffer_size=buffer_size, db=db, is_remote=is_remote, writer=writer)

    # =========================
    # Configuration
    # =========================

    def set_db(self, db: DbHandle, is_remote: bool = True):
        """
        Set the database handle.
        By default the database is assumed to run on another machine, so the
        statement carries LOCAL and the client streams the file. Pass
        `is_remote=False` when the server can read the staging folder itself.
        """
        self._db = db
        self._is_remote = bool(is_remote)
        return self

    def get_db(self) -> Optional[DbHandle]:
        return self._db

    def is_db_remote(self) -> Optional[bool]:
        return self._is_remote

    def get_buffer_size(self) -> int:
        return self._writer.get_buffer_size()

    def set_buffer_size(self, buffer_size: Optional[int]):
        self._writer.set_buffer_size(buffer_size)
        return self

    def set_tmp_dir(self, path: str):
        """
        Set the folder holding the collections.

        Raises:
            NotADirectoryError: If the path is not an existing directory.
            PermissionError: If the directory is not writable.
        """
        if not os.path.isdir(path):
            raise NotADirectoryError(f"Temporary folder must be an existing directory: {path}")
        if not is_writable_dir(path):
            raise PermissionError(f"Temporary folder must be writable: {path}")

        self._tmp_dir = normalize_dir(path)
        return self

    def get_tmp_dir(self) -> str:
        if self._tmp_dir is None:
            return normalize_dir(tempfile.gettempdir())
        return self._tmp_dir

    # =========================
    # State
    # =========================

    def has_open_collection(self) -> bool:
        return self._collection is not None and self._collection.is_open

    def get_open_collection_path(self) -> Optional[str]:
        """Path of the tracked collection (open or closed but attached), or None."""
        return self._collection.path if self._collection is not None else None

    def get_last_result_count(self) -> Optional[int]:
        return self._last_results_count

    def _require_open(self) -> _Collection:
        if not self.has_open_collection():
            raise CollectionStateError("No collection opened.")
        return self._collection

    def _require_tracked(self) -> _Collection:
        if self._collection is None:
            raise CollectionStateError("No collection attached.")
        return self._collection

    def _attach(self, path: str, mode: str, header: Optional[List[str]] = None) -> None:
        if self.has_open_collection():
            logger.warning("Collection %s was not closed before switching to %s", self._collection.path, path)

        self._writer.open(path, mode)
        if header is not None:
            self._writer.write(header)

        self._collection = _Collection(path=path, is_open=True, fields=header)

    # =========================
    # Lifecycle
    # =========================

    def start_collection(self, name: str, fields: Sequence[str]):
        """
        Create a new collection and write the field names as its first line.
        An existing file of the same name is truncated.

        Args:
            name (str): Collection name (letters, digits, - and _).
            fields (Sequence[str]): Column names, each a letter followed by letters, digits or _.

        Raises:
            CollectionValidationError: If the name or any field is invalid. Nothing is written.
            OSError: If the file cannot be created.
        """
        validate_collection_name(name)
        validate_field_names(fields)

        path = collection_path_for(self.get_tmp_dir(), name)
        self._attach(path, FILEMODE_TRUNCATE, header=list(fields))
        logger.info("Started collection %s with fields %s", path, ",".join(fields))

        return self

    def open_collection(self, name: str):
        """
        Reopen an existing collection in append mode by name (without `.csv`).
        A value ending in `.csv` is taken as a path, see `open_collection_path`.

        Raises:
            CollectionValidationError: If the name is empty or invalid.
            FileNotFoundError: If the collection file does not exist.
            PermissionError: If the collection file is not readable.
        """
        if not name:
            raise CollectionValidationError("Collection name cannot be empty.")

        if is_collection_path(name):
            return self.open_collection_path(name)

        validate_collection_name(name)
        return self.open_collection_path(collection_path_for(self.get_tmp_dir(), name))

    def open_collection_path(self, path: str):
        """
        Reopen an existing collection file in append mode. The header is neither
        rewritten nor checked.
        """
        path = os.fspath(path)
        if not os.path.exists(path):
            raise FileNotFoundError(f"Collection {path} does not exist.")
        if not os.access(path, os.R_OK):
            raise PermissionError(f"Collection {path} is not readable.")

        self._attach(path, FILEMODE_APPEND)
        logger.info("Opened collection %s", path)

        return self

    def append_data(self, data: Iterable[Any]):
        """
        Escape and write one row to the open collection.

        Raises:
            CollectionStateError: If no collection is open.
        """
        self._require_open()
        self._writer.write([self.escape(value) for value in data])
        return self

    def close_collection(self, detach: bool = False):
        """
        Close the open collection and flush the buffer. The collection stays
        attached for `store_collection`/`remove_collection` unless `detach` is set.
        Does nothing when no collection is open.
        """
        if not self.has_open_collection():
            return self

        try:
            self._writer.close()
        finally:
            self._collection.is_open = False
        logger.info("Closed collection %s", self._collection.path)

        if detach:
            self._collection = None

        return self

    def remove_collection(self):
        """
        Close the collection and delete its file.

        Raises:
            CollectionStateError: If no collection is attached.
            OSError: If the file cannot be deleted; the collection stays attached.
        """
        collection = self._require_tracked()

        self.close_collection()
        os.remove(collection.path)
        logger.info("Removed collection %s", collection.path)
        self._collection = None

        return self

    def store_collection(self, table_name: str):
        """
        Close the collection and load it into `table_name` with LOAD DATA.
        On success records the row count reported by the database. The
        collection stays attached, so it can be removed afterwards.

        Raises:
            CollectionStateError: If no collection is attached.
            DatabaseNotConfiguredError: If no database handle was set.
            CollectionValidationError: If the table name is not an identifier.
        """
        collection = self._require_tracked()

        if self._db is None:
            raise DatabaseNotConfiguredError("Missing db connection: assign one using set_db(db).")

        validate_table_name(table_name)

        self.close_collection()
        self._last_results_count = self.save_from_csv_file(collection, table_name)

        return self

    def save_from_csv_file(self, collection: _Collection, table_name: str) -> int:
        fields = collection.fields if collection.fields else read_header_fields(collection.path)
        statement = build_load_data_statement(collection.path, table_name, fields, local=bool(self._is_remote))

        started = now_ms()
        count = self._db.execute(statement)
        logger.info("Loaded %s rows from %s into %s in %d ms",
                    count, collection.path, table_name, now_ms() - started)

        return count

    @staticmethod
    def escape(value: Any) -> str:
        """
        Double every backslash so the import engine does not treat it as an escape.
        None becomes an empty string, which LOAD DATA stores as '' rather than NULL.
        """
        if value is None:
            return ""
        text = value if isinstance(value, str) else str(value)
        return text.replace("\\", "\\\\")
