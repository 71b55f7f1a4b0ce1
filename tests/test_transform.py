"""Driver tests: stream loop, file transforms, and in-place rewriting."""

from __future__ import annotations

import io
from pathlib import Path

import pytest

from alignchar.lib.align import line_width
from alignchar.lib.errors import AlignIOError, ArgumentError
from alignchar.lib.settings import AlignConfig
from alignchar.lib.transform import (
    BACKUP_FILENAME,
    transform_file,
    transform_in_place,
    transform_stream,
)


class _RecordingSink(io.BytesIO):
    def __init__(self) -> None:
        super().__init__()
        self.writes: list[bytes] = []

    def write(self, data) -> int:
        self.writes.append(bytes(data))
        return super().write(data)


def _run(data: bytes, config: AlignConfig) -> bytes:
    sink = io.BytesIO()
    transform_stream(io.BytesIO(data), sink, config)
    return sink.getvalue()


def test_mixed_lines() -> None:
    source = (
        b"#define SWAP(a, b) \\\n"
        b"\tdo { \\\n"
        b"\n"
        b"plain line\n"
        b"already far enough to the right of col 24 \\\n"
        b"} while (0)"
    )

    output = _run(source, AlignConfig(target_column=24))

    assert output.split(b"\n") == [
        b"#define SWAP(a, b)" + b" " * 5 + b"\\",
        b"\tdo {" + b" " * 15 + b"\\",
        b"",
        b"plain line",
        b"already far enough to the right of col 24 \\",
        b"} while (0)",
    ]


def test_aligned_lines_reach_target_column() -> None:
    config = AlignConfig(target_column=30, tab_width=8)
    source = b"a \\\n\t\tb\\\nccc\t\\\n"

    for line in _run(source, config).splitlines(keepends=True):
        assert line_width(line, 8) == 30


def test_second_run_is_a_no_op() -> None:
    config = AlignConfig(target_column=16)
    source = b"x \\\nyy\\\nzzz\n\t\\\nlast\\"

    once = _run(source, config)

    assert _run(once, config) == once


def test_empty_input_produces_empty_output() -> None:
    sink = io.BytesIO()

    stats = transform_stream(io.BytesIO(b""), sink, AlignConfig())

    assert sink.getvalue() == b""
    assert stats.lines == 0


def test_long_line_passes_through_in_two_writes() -> None:
    long_line = b"x" * 2999 + b"\\\n"
    sink = _RecordingSink()

    stats = transform_stream(
        io.BytesIO(long_line + b"ab\\\n"),
        sink,
        AlignConfig(target_column=5, buffer_capacity=2048),
    )

    assert sink.getvalue() == long_line + b"ab  \\\n"
    assert sink.writes[0] == b"x" * 2047
    assert b"".join(sink.writes[1:-1]) == long_line[2047:]
    assert stats.overflowed == 1
    assert stats.aligned == 1
    assert stats.lines == 2


def test_long_final_line_without_newline() -> None:
    data = b"short\\\n" + b"y" * 40 + b"\\"

    output = _run(data, AlignConfig(target_column=10, buffer_capacity=16))

    assert output == b"short    \\\n" + b"y" * 40 + b"\\"


def test_line_exactly_filling_buffer_is_not_aligned() -> None:
    # Capacity 8 holds 7 content bytes, so the first line overflows before its
    # newline even though its width (1 with zero-width tabs) is below the column.
    first = b"\t" * 6 + b"\\\n"

    config = AlignConfig(target_column=7, tab_width=0, buffer_capacity=8)
    output = _run(first + b"ab\\\n", config)

    assert output == first + b"ab    \\\n"


def test_transform_file(tmp_path: Path) -> None:
    input_path = tmp_path / "in.h"
    output_path = tmp_path / "out.h"
    input_path.write_bytes(b"#define A \\\n  1\n")

    stats = transform_file(input_path, output_path, AlignConfig(target_column=14))

    assert output_path.read_bytes() == b"#define A    \\\n  1\n"
    assert input_path.read_bytes() == b"#define A \\\n  1\n"
    assert stats.aligned == 1


def test_transform_file_missing_input(tmp_path: Path) -> None:
    with pytest.raises(AlignIOError) as exc_info:
        transform_file(tmp_path / "missing.txt", tmp_path / "out.txt", AlignConfig())

    assert exc_info.value.operation == "open input file"
    assert not (tmp_path / "out.txt").exists()


def test_transform_file_rejects_same_path(tmp_path: Path) -> None:
    path = tmp_path / "same.txt"
    path.write_bytes(b"a\\\n")

    with pytest.raises(ArgumentError, match="--in-place"):
        transform_file(path, path, AlignConfig())

    assert path.read_bytes() == b"a\\\n"


def test_in_place_rewrites_and_removes_backup(tmp_path: Path) -> None:
    path = tmp_path / "macro.h"
    path.write_bytes(b"#define B \\\n\t2\n")

    transform_in_place(path, AlignConfig(target_column=20), backup_dir=tmp_path)

    assert path.read_bytes() == b"#define B" + b" " * 10 + b"\\\n\t2\n"
    assert not (tmp_path / BACKUP_FILENAME).exists()


def test_in_place_uses_working_directory_by_default(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
) -> None:
    monkeypatch.chdir(tmp_path)
    path = tmp_path / "file.txt"
    path.write_bytes(b"x\\\n")

    transform_in_place(path, AlignConfig(target_column=4))

    assert path.read_bytes() == b"x  \\\n"
    assert list(tmp_path.iterdir()) == [path]


def test_in_place_missing_input_leaves_nothing(tmp_path: Path) -> None:
    with pytest.raises(AlignIOError, match="rename input file"):
        transform_in_place(tmp_path / "nope.txt", AlignConfig(), backup_dir=tmp_path)

    assert list(tmp_path.iterdir()) == []


def test_in_place_refuses_existing_backup(tmp_path: Path) -> None:
    path = tmp_path / "file.txt"
    path.write_bytes(b"new\\\n")
    backup = tmp_path / BACKUP_FILENAME
    backup.write_bytes(b"recovered content\n")

    with pytest.raises(AlignIOError, match="File exists"):
        transform_in_place(path, AlignConfig(), backup_dir=tmp_path)

    assert backup.read_bytes() == b"recovered content\n"
    assert path.read_bytes() == b"new\\\n"


def test_in_place_failure_keeps_backup(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
) -> None:
    path = tmp_path / "file.txt"
    path.write_bytes(b"original\\\n")

    def _explode(*args: object, **kwargs: object) -> None:
        raise AlignIOError("write", path, OSError(28, "No space left on device"))

    monkeypatch.setattr("alignchar.lib.transform.transform_stream", _explode)

    with pytest.raises(AlignIOError, match="No space left"):
        transform_in_place(path, AlignConfig(), backup_dir=tmp_path)

    assert (tmp_path / BACKUP_FILENAME).read_bytes() == b"original\\\n"
