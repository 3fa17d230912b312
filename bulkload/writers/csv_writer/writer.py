"""
==========================
CSV Writer Module
==========================

This module provides a buffered writer for delimited text records.
Records are serialized into memory and pushed to the file once the configured
number of bytes has accumulated, or after every record when buffering is off.

Features:
- Implements a `CsvWriter` class with truncate and append modes.
- Encloses a field in double quotes whenever it holds a delimiter, quote, backslash or whitespace.
- Configurable buffer size (in bytes) and end-of-line symbol, both adjustable while a file is open.
- Deterministic close: buffered bytes are flushed, double close is a no-op.


Usage:
>>> from bulkload.writers.csv_writer import CsvWriter, FILEMODE_APPEND
>>> writer = CsvWriter(buffer_size=64 * 1024)
>>> writer.open("/tmp/orders.csv").write(["id", "total"])
>>> writer.write(["1", "9.99"])
>>> writer.close()  # Flushes the buffer and releases the file

*Created: 2026-10-19*
"""

from typing import Any, Iterable, Optional

from bulkload.logger import logger
from bulkload.errors import WriterClosedError

FILEMODE_TRUNCATE = "w"
FILEMODE_APPEND = "a"

EOL_LINUX = "\n"
EOL_WINDOWS = "\r\n"

DELIMITER = ","
ENCLOSURE = '"'

# characters that force a field to be enclosed
_SPECIAL_CHARS = frozenset(DELIMITER + ENCLOSURE + "\\\r\n\t ")


class CsvWriter:
    """
    Buffered writer of delimited records.
    The writer never escapes anything but the enclosure character itself: escaping
    rules of the import engine are applied by the caller before `write`.
    """

    def __init__(self, buffer_size: int = 0, eol: str = EOL_LINUX, encoding: str = "utf-8"):
        """
        Initialize a closed writer.

        Args:
            buffer_size (int, optional): Bytes kept in memory before flushing. 0 flushes on every write. Defaults to 0.
            eol (str, optional): Line terminator, EOL_LINUX or EOL_WINDOWS. Defaults to EOL_LINUX.
            encoding (str, optional): Text encoding of the file. Defaults to "utf-8".
        """
        self.encoding = encoding
        self.path: Optional[str] = None
        self._handle = None
        self._buffer = bytearray()
        self._buffer_size = 0
        self._eol = EOL_LINUX
        self.set_buffer_size(buffer_size)
        self.set_eol_symbol(eol)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def is_open(self) -> bool:
        return self._handle is not None

    def get_buffer_size(self) -> int:
        return self._buffer_size

    def set_buffer_size(self, buffer_size: Optional[int]):
        """
        Set the number of bytes buffered before an automatic flush.
        Can be changed while a file is open; if the new size is already
        exceeded by pending bytes, they are flushed right away.

        Args:
            buffer_size (int | None): Size in bytes. None or 0 disables buffering.

        Raises:
            ValueError: If the size is negative or not an integer.
        """
        if buffer_size is None:
            buffer_size = 0

        if isinstance(buffer_size, bool) or not isinstance(buffer_size, int):
            raise ValueError(f"Buffer size must be an integer, got: {buffer_size!r}")
        if buffer_size < 0:
            raise ValueError(f"Buffer size must be non-negative, got: {buffer_size}")

        self._buffer_size = buffer_size
        if self.is_open() and len(self._buffer) >= self._buffer_size:
            self.flush()

        return self

    def get_eol_symbol(self) -> str:
        return self._eol

    def set_eol_symbol(self, eol: str):
        if eol not in (EOL_LINUX, EOL_WINDOWS):
            raise ValueError(f"End of line symbol must be {EOL_LINUX!r} or {EOL_WINDOWS!r}, got: {eol!r}")
        self._eol = eol
        return self

    def open(self, path: str, mode: str = FILEMODE_TRUNCATE):
        """
        Open a file for writing.
        If another file is open it is flushed first, so reopening the same path
        in truncate mode starts empty. The old handle is closed only once the
        new one has been opened successfully.

        Args:
            path (str): File to write.
            mode (str, optional): FILEMODE_TRUNCATE or FILEMODE_APPEND. Defaults to FILEMODE_TRUNCATE.

        Raises:
            ValueError: On an unknown mode.
            OSError: If the file cannot be opened for writing.
        """
        if mode not in (FILEMODE_TRUNCATE, FILEMODE_APPEND):
            raise ValueError(f"Unknown file mode: {mode!r}")

        # pending bytes belong to the old file and must land before a truncate
        self.flush()

        handle = open(path, mode + "b")

        if self.is_open():
            logger.debug("Closing %s before opening %s", self.path, path)
            self.close()

        self._handle = handle
        self.path = str(path)
        logger.debug("Opened %s (mode=%s, buffer=%d)", self.path, mode, self._buffer_size)

        return self

    def format_record(self, fields: Iterable[Any]) -> str:
        return DELIMITER.join(self._format_field(f) for f in fields) + self._eol

    def _format_field(self, value: Any) -> str:
        # None becomes an empty field, which LOAD DATA loads as '' and not NULL
        if value is None:
            return ""
        text = value if isinstance(value, str) else str(value)
        if not any(c in _SPECIAL_CHARS for c in text):
            return text
        return ENCLOSURE + text.replace(ENCLOSURE, ENCLOSURE * 2) + ENCLOSURE

    def write(self, fields: Iterable[Any]):
        """
        Serialize one record into the buffer, flushing when the buffer is full.

        Args:
            fields (Iterable): Field values in column order.

        Raises:
            WriterClosedError: If no file is open.
        """
        if not self.is_open():
            raise WriterClosedError("Cannot write: no file opened.")

        self._buffer += self.format_record(fields).encode(self.encoding)
        if len(self._buffer) >= self._buffer_size:
            self.flush()

        return self

    def flush(self):
        if not self.is_open():
            return self
        if self._buffer:
            logger.debug("Flushing %d bytes to %s", len(self._buffer), self.path)
            self._handle.write(self._buffer)
            self._buffer.clear()
        self._handle.flush()
        return self

    def close(self):
        """
        Flush pending bytes and release the file. Does nothing when already closed.
        """
        if not self.is_open():
            return self

        try:
            self.flush()
        finally:
            self._handle.close()
            self._handle = None
            self._buffer.clear()
            logger.debug("Closed %s", self.path)

        return self
