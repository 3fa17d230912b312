"""
==========================
Helpers - Naming & Paths
==========================

This module holds the naming rules for collections and their fields and turns a
collection name into the path of its staging file.

Functions:
- `validate_collection_name`: Check a collection name against the whitelist.
- `validate_field_names`: Check a header row against the field whitelist.
- `validate_table_name`: Check a target table name before it is put into SQL.
- `is_collection_path`: Tell a pre-resolved `.csv` path from a bare name.
- `normalize_dir`: Absolute directory path with a trailing separator.
- `collection_path_for`: Staging file path of a collection inside a directory.


Usage:
>>> from bulkload.helpers.paths import collection_path_for, validate_field_names
>>> validate_field_names(["aa", "bb"])
>>> collection_path_for("/tmp/", "orders")
'/tmp/orders.csv'

*Created: 2026-10-19*
"""

import os
import re
from typing import Sequence

from bulkload.errors import CollectionValidationError

COLLECTION_EXTENSION = ".csv"

COLLECTION_NAME_RE = re.compile(r"^[0-9a-zA-Z\-_]+$")
# one letter followed by at least one more character: single-letter fields are rejected
FIELD_NAME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9_]+$")
# table or schema.table
TABLE_NAME_RE = re.compile(r"^[0-9A-Za-z_$]+(\.[0-9A-Za-z_$]+)?$")


def validate_collection_name(name: str) -> None:
    """
    Check a collection name against the whitelist.

    Args:
        name (str): Collection name, without the `.csv` extension.

    Raises:
        CollectionValidationError: If the name is empty or contains anything but letters, digits, `-` and `_`.
    """
    if not name or not isinstance(name, str) or not COLLECTION_NAME_RE.fullmatch(name):
        raise CollectionValidationError(
            "Collection name must be a non-empty string consisting only of letters, numbers and - _ symbols.")


def validate_field_names(fields: Sequence[str]) -> None:
    """
    Check the header row of a new collection.

    Args:
        fields (Sequence[str]): Field names in column order.

    Raises:
        CollectionValidationError: If the list is empty or any name is not an identifier of two or more characters.
    """
    if not fields or isinstance(fields, str):
        raise CollectionValidationError("Field names must be a non-empty list of strings.")

    for field in fields:
        if not isinstance(field, str) or not FIELD_NAME_RE.fullmatch(field):
            raise CollectionValidationError(f"Invalid field name: `{field}`.")


def validate_table_name(table_name: str) -> None:
    if not table_name or not isinstance(table_name, str) or not TABLE_NAME_RE.fullmatch(table_name):
        raise CollectionValidationError(f"Invalid table name: `{table_name}`.")


def is_collection_path(value: str) -> bool:
    return value.lower().endswith(COLLECTION_EXTENSION)


def normalize_dir(path) -> str:
    # ensures trailing separator
    path = os.path.abspath(os.fspath(path))
    if not path.endswith(os.sep):
        path += os.sep
    return path


def collection_path_for(directory: str, name: str) -> str:
    return normalize_dir(directory) + name + COLLECTION_EXTENSION
