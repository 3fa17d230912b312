"""
==========================
Database Handle and Statement Module
==========================

This module provides the seam between a collection and the database that imports it.
The manager only needs something that executes a statement and reports how many rows it touched;
`DbApiHandle` turns any DB-API 2.0 connection (pymysql, mysqlclient, mysql-connector, sqlite3, ...)
into such a thing.

Features:
- `DbHandle`: protocol every database handle satisfies.
- `DbApiHandle`: adapter running statements on a DB-API connection with commit/rollback.
- `read_header_fields`: read the field names back from the first line of a staging file.
- `build_load_data_statement`: render the LOAD DATA statement for a staging file.

Usage:
>>> import pymysql
>>> from bulkload.helpers.db import DbApiHandle, build_load_data_statement
>>> handle = DbApiHandle(pymysql.connect(host="db", local_infile=True))
>>> handle.execute(build_load_data_statement("/tmp/orders.csv", "orders", ["id", "total"], local=True))

*Created: 2026-10-19*
"""

import csv
from typing import List, Protocol, Sequence

from bulkload.logger import logger
from bulkload.errors import CollectionStateError
from bulkload.db import load_data_sql_statements as sql


class DbHandle(Protocol):
    def execute(self, statement: str) -> int:
        """Run the statement and return the affected row count."""
        ...


class DbApiHandle:
    """
    Adapter exposing `execute(statement) -> int` over a DB-API 2.0 connection.
    The statement runs on a fresh cursor. On success the connection is committed
    (unless autocommit is disabled) and `cursor.rowcount` is returned; on failure
    the connection is rolled back and the driver's exception propagates unchanged.
    """

    def __init__(self, connection, autocommit: bool = True):
        """
        Args:
            connection: An open DB-API 2.0 connection.
            autocommit (bool, optional): Commit after each successful statement. Defaults to True.
        """
        self.connection = connection
        self.autocommit = autocommit

    def execute(self, statement: str) -> int:
        cur = self.connection.cursor()
        try:
            cur.execute(statement)
            count = cur.rowcount
            if self.autocommit:
                self.connection.commit()
        except Exception:
            logger.error("Statement failed, rolling back:\n%s", statement)
            self.connection.rollback()
            raise
        finally:
            cur.close()

        return count


def read_header_fields(csv_file: str) -> List[str]:
    """
    Retrieve the field names from the first line of a staging file.

    Args:
        csv_file (str): Full path of the staging file.

    Returns:
        list[str]: Field names in column order.

    Raises:
        CollectionStateError: If the file has no header line.
    """
    with open(csv_file, "r", newline="", encoding="utf-8") as f:
        header = next(csv.reader(f), None)

    if not header:
        raise CollectionStateError(f"Collection {csv_file} has no header line.")

    return header


def build_load_data_statement(csv_file: str, table_name: str, fields: Sequence[str], local: bool) -> str:
    """
    Render the LOAD DATA statement importing a staging file.

    Args:
        csv_file (str): Path of the staging file as the database should see it.
        table_name (str): Target table.
        fields (Sequence[str]): Column list, in file order.
        local (bool): Whether the file lives on the client (adds LOCAL).

    Returns:
        str: The statement text.
    """
    field_list = sql.SQL_FIELD_SEPARATOR.join(sql.SQL_FIELD_QUOTE.format(field=f) for f in fields)
    file_position = sql.SQL_FILE_POSITION_LOCAL if local else sql.SQL_FILE_POSITION_SERVER

    return sql.SQL_LOAD_DATA_INFILE.format(
        file_position=file_position,
        path=csv_file,
        table=table_name,
        fields=field_list,
    )
