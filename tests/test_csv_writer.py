"""
Tests for the buffered CSV writer: serialization, buffering, modes and close semantics.
"""
from __future__ import annotations

from pathlib import Path

import pytest

from bulkload.errors import WriterClosedError
from bulkload.writers.csv_writer import (
    CsvWriter,
    EOL_WINDOWS,
    FILEMODE_APPEND,
    FILEMODE_TRUNCATE,
)


def _read(path: Path) -> str:
    return path.read_bytes().decode("utf-8")


def test_write_plain_fields_unquoted(tmp_path: Path) -> None:
    p = tmp_path / "out.csv"
    w = CsvWriter().open(str(p))
    w.write(["aa", "bb"])
    w.close()

    assert _read(p) == "aa,bb\n"


def test_write_encloses_special_fields(tmp_path: Path) -> None:
    p = tmp_path / "out.csv"
    with CsvWriter().open(str(p)) as w:
        w.write(["a,b", 'say "hi"', "back\\slash", "two words", "tab\there", "line\nbreak", "plain"])

    assert _read(p) == (
        '"a,b","say ""hi""","back\\slash","two words","tab\there","line\nbreak",plain\n'
    )


def test_write_none_and_numbers(tmp_path: Path) -> None:
    p = tmp_path / "out.csv"
    with CsvWriter().open(str(p)) as w:
        w.write([None, 1, 2.5, ""])

    assert _read(p) == ",1,2.5,\n"


def test_windows_eol(tmp_path: Path) -> None:
    p = tmp_path / "out.csv"
    with CsvWriter(eol=EOL_WINDOWS).open(str(p)) as w:
        w.write(["aa", "bb"])

    assert _read(p) == "aa,bb\r\n"


def test_invalid_eol_rejected() -> None:
    with pytest.raises(ValueError):
        CsvWriter(eol="\r")


def test_write_when_closed_raises() -> None:
    with pytest.raises(WriterClosedError):
        CsvWriter().write(["aa"])


def test_unknown_mode_rejected(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        CsvWriter().open(str(tmp_path / "out.csv"), "r")


def test_open_unwritable_path_raises(tmp_path: Path) -> None:
    with pytest.raises(OSError):
        CsvWriter().open(str(tmp_path / "missing" / "out.csv"))


def test_truncate_then_append(tmp_path: Path) -> None:
    p = tmp_path / "out.csv"
    w = CsvWriter()
    w.open(str(p), FILEMODE_TRUNCATE).write(["aa"]).close()
    w.open(str(p), FILEMODE_APPEND).write(["bb"]).close()
    assert _read(p) == "aa\nbb\n"

    w.open(str(p), FILEMODE_TRUNCATE).write(["cc"]).close()
    assert _read(p) == "cc\n"


def test_unbuffered_flushes_every_write(tmp_path: Path) -> None:
    p = tmp_path / "out.csv"
    w = CsvWriter(buffer_size=0).open(str(p))
    w.write(["aa", "bb"])

    assert _read(p) == "aa,bb\n"
    w.close()


def test_buffer_holds_until_full(tmp_path: Path) -> None:
    p = tmp_path / "out.csv"
    w = CsvWriter(buffer_size=16).open(str(p))

    w.write(["aa", "bb"])  # 6 bytes
    assert _read(p) == ""

    w.write(["cc", "dd"])  # 12 bytes
    assert _read(p) == ""

    w.write(["ee", "ff"])  # 18 bytes >= 16 -> flushed
    assert _read(p) == "aa,bb\ncc,dd\nee,ff\n"
    w.close()


def test_close_flushes_buffer(tmp_path: Path) -> None:
    p = tmp_path / "out.csv"
    w = CsvWriter(buffer_size=1024).open(str(p))
    w.write(["aa", "bb"])
    assert _read(p) == ""

    w.close()
    assert _read(p) == "aa,bb\n"
    assert not w.is_open()


def test_shrinking_buffer_flushes_pending(tmp_path: Path) -> None:
    p = tmp_path / "out.csv"
    w = CsvWriter(buffer_size=1024).open(str(p))
    w.write(["aa", "bb"])
    assert _read(p) == ""

    w.set_buffer_size(0)
    assert _read(p) == "aa,bb\n"
    w.close()


def test_double_close_is_noop(tmp_path: Path) -> None:
    w = CsvWriter().open(str(tmp_path / "out.csv"))
    w.close()
    w.close()
    assert not w.is_open()


@pytest.mark.parametrize("size", [-1, 1.5, "10", True])
def test_invalid_buffer_size(size) -> None:
    with pytest.raises(ValueError):
        CsvWriter().set_buffer_size(size)


def test_buffer_size_none_means_unbuffered() -> None:
    w = CsvWriter(buffer_size=100)
    w.set_buffer_size(None)
    assert w.get_buffer_size() == 0


def test_reopen_closes_previous_file(tmp_path: Path) -> None:
    first = tmp_path / "first.csv"
    second = tmp_path / "second.csv"
    w = CsvWriter(buffer_size=1024).open(str(first))
    w.write(["aa"])

    w.open(str(second))
    assert _read(first) == "aa\n"
    assert w.path == str(second)
    w.close()


def test_failed_reopen_keeps_previous_file(tmp_path: Path) -> None:
    first = tmp_path / "first.csv"
    w = CsvWriter().open(str(first))

    with pytest.raises(OSError):
        w.open(str(tmp_path / "missing" / "second.csv"))

    w.write(["still"])
    w.close()
    assert _read(first) == "still\n"


def test_reopen_same_path_truncate_drops_pending_rows(tmp_path: Path) -> None:
    p = tmp_path / "out.csv"
    w = CsvWriter(buffer_size=1024).open(str(p))
    w.write(["old1", "old2"])

    w.open(str(p), FILEMODE_TRUNCATE)
    w.write(["new"])
    w.close()

    assert _read(p) == "new\n"
