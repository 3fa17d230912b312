"""
Pytest configuration file.

Ensures the repo root is on sys.path so that 'import bulkload' works without an install,
and provides a recording database handle.
"""
import sys
from pathlib import Path

import pytest

# Add the repo root to sys.path
repo_root = Path(__file__).parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))


class RecordingDb:
    """Database handle that remembers statements and returns a fixed row count."""

    def __init__(self, rowcount: int = 55, error: Exception = None):
        self.rowcount = rowcount
        self.error = error
        self.statements = []

    @property
    def last_query(self):
        return self.statements[-1] if self.statements else None

    def execute(self, statement: str) -> int:
        self.statements.append(statement)
        if self.error is not None:
            raise self.error
        return self.rowcount


@pytest.fixture
def recording_db() -> RecordingDb:
    return RecordingDb()
