"""
==========================
Errors
==========================

Exception types raised by the collection manager and the CSV writer.

Validation errors double as `ValueError` and state errors as `RuntimeError`,
so callers that only know the built-in types keep working. Filesystem
failures are not wrapped: they surface as the built-in `OSError` subclasses.

*Created: 2026-10-19*
"""


class BulkLoadError(Exception):
    """Base class for every error raised by bulkload."""


class CollectionValidationError(BulkLoadError, ValueError):
    """A collection, field or table name failed the identifier whitelist."""


class CollectionStateError(BulkLoadError, RuntimeError):
    """The operation needs an open (or tracked) collection and there is none."""


class DatabaseNotConfiguredError(CollectionStateError):
    """A store was requested before a database handle was assigned."""


class WriterClosedError(BulkLoadError, RuntimeError):
    """Data was written to a CsvWriter that has no open file."""
