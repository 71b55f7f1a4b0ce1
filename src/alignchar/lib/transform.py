"""File-to-file alignment driver, including in-place rewriting."""

from __future__ import annotations

import errno
import os
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, cast

import structlog

from alignchar.lib.align import align_line
from alignchar.lib.errors import AlignIOError, ArgumentError, stream_name
from alignchar.lib.line_io import (
    NEWLINE,
    LineBuffer,
    ReadOutcome,
    read_through_delimiter,
    skip_through_delimiter,
    write_bytes,
)
from alignchar.lib.settings import AlignConfig

logger = structlog.get_logger(__name__)

# The original input is moved here during --in-place runs. It is removed only
# after the rewritten file closes cleanly, so a failed run leaves it behind.
BACKUP_FILENAME = "~alignchar_input_file_backup!!!"


@dataclass(slots=True)
class TransformStats:
    lines: int = 0
    aligned: int = 0
    overflowed: int = 0


def transform_stream(source: BinaryIO, sink: BinaryIO, config: AlignConfig) -> TransformStats:
    """Copy `source` to `sink`, aligning every line that ends in the target character."""

    buffer = LineBuffer(config.buffer_capacity)
    stats = TransformStats()

    while True:
        result = read_through_delimiter(source, buffer, NEWLINE)

        if result.outcome is ReadOutcome.BUFFER_FULL:
            # Too long to inspect; the target character is never checked here.
            stats.lines += 1
            stats.overflowed += 1
            write_bytes(sink, buffer.contents())
            logger.debug(
                "Line exceeds buffer capacity; copied unchanged.",
                line=stats.lines,
                capacity=config.buffer_capacity,
                stream=stream_name(source, "<input>"),
            )
            if not skip_through_delimiter(source, sink, NEWLINE):
                break
            continue

        if result.length > 0:
            stats.lines += 1
            if align_line(buffer.contents(), config, sink):
                stats.aligned += 1

        if result.outcome is ReadOutcome.END_OF_INPUT:
            break

    return stats


def _open(path: Path, mode: str, role: str) -> BinaryIO:
    try:
        return cast("BinaryIO", path.open(mode))
    except OSError as exc:
        raise AlignIOError(f"open {role} file", path, exc) from exc


def _same_file(first: Path, second: Path) -> bool:
    try:
        return os.path.samefile(first, second)
    except OSError:
        return False


def transform_file(input_path: Path, output_path: Path, config: AlignConfig) -> TransformStats:
    """Align `input_path` into `output_path`, which must be a different file."""

    if _same_file(input_path, output_path):
        raise ArgumentError(
            f"Output file '{output_path}' is the input file; use --in-place instead."
        )

    with _open(input_path, "rb", "input") as source, _open(output_path, "wb", "output") as sink:
        stats = transform_stream(source, sink, config)

    logger.info(
        "Aligned file.",
        input=str(input_path),
        output=str(output_path),
        lines=stats.lines,
        aligned=stats.aligned,
        overflowed=stats.overflowed,
    )
    return stats


def transform_in_place(
    path: Path,
    config: AlignConfig,
    *,
    backup_dir: Path | None = None,
) -> TransformStats:
    """Rewrite `path` through a backup copy kept in `backup_dir` (default: cwd)."""

    backup_path = (backup_dir if backup_dir is not None else Path.cwd()) / BACKUP_FILENAME
    if backup_path.exists():
        # Never overwrite the recovery artifact of an earlier failed run.
        raise AlignIOError(
            "create backup file",
            backup_path,
            FileExistsError(errno.EEXIST, "File exists; restore or remove it first"),
        )

    try:
        path.rename(backup_path)
    except OSError as exc:
        raise AlignIOError("rename input file to backup", path, exc) from exc
    logger.debug("Moved input file to backup path.", input=str(path), backup=str(backup_path))

    stats = transform_file(backup_path, path, config)

    try:
        backup_path.unlink()
    except OSError as exc:
        raise AlignIOError("remove backup file", backup_path, exc) from exc
    logger.debug("Removed backup file.", backup=str(backup_path))
    return stats
