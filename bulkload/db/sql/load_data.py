"""
==========================
Database - Bulk Load SQL Statements
==========================

This module provides the LOAD DATA statement used to import a staging file in one go.
The options mirror the staging file format written by `CsvWriter`: comma separated fields,
optional double-quote enclosure, `\\n` line endings and one header line.

Features:
- Gives the LOAD DATA template with slots for the file position, path, table and field list.
- Gives the identifier quoting used for the field list.


Usage:
>>> from bulkload.db import load_data_sql_statements
>>> SQL_LOAD_DATA_INFILE  # Access the LOAD DATA template
>>> SQL_FILE_POSITION_LOCAL  # Access the keyword slot used for client-side files

*Created: 2026-10-19*
"""

# File position slot: client-side files need LOCAL so the client streams them to the server
SQL_FILE_POSITION_LOCAL = " LOCAL "
SQL_FILE_POSITION_SERVER = " "

SQL_FIELD_QUOTE = "`{field}`"
SQL_FIELD_SEPARATOR = ","

SQL_LOAD_DATA_INFILE = (
    "LOAD DATA LOW_PRIORITY{file_position}INFILE \"{path}\"\n"
    "INTO TABLE {table}\n"
    "CHARACTER SET utf8\n"
    "FIELDS TERMINATED BY ','\n"
    "OPTIONALLY ENCLOSED BY '\"'\n"
    "LINES TERMINATED BY '\\n'\n"
    "IGNORE 1 LINES\n"
    "({fields})"
)
