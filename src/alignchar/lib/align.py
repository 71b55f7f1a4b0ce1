"""Line width measurement and target-character column alignment."""

from __future__ import annotations

from typing import TYPE_CHECKING, BinaryIO

from alignchar.lib.line_io import NEWLINE, write_bytes

if TYPE_CHECKING:
    from alignchar.lib.settings import AlignConfig

_TAB = ord("\t")
_NEWLINE = ord("\n")


def line_width(line: bytes, tab_width: int) -> int:
    """Return the column width of `line` up to its first newline."""

    width = 0
    for byte in line:
        if byte == _NEWLINE:
            break
        width += tab_width if byte == _TAB else 1
    return width


def align_line(line: bytes, config: AlignConfig, sink: BinaryIO) -> bool:
    """Write `line` to `sink`, padding its trailing target character to the target column.

    Lines whose content does not end in the target character, and lines
    already reaching the target column, are written unchanged. Returns True
    when fill bytes were inserted.
    """

    has_newline = line.endswith(NEWLINE)
    content = line[:-1] if has_newline else line
    if not content or content[-1:] != config.target_char:
        write_bytes(sink, line)
        return False

    width = line_width(content, config.tab_width)
    if width >= config.target_column:
        write_bytes(sink, line)
        return False

    padding = config.fill_char * (config.target_column - width)
    write_bytes(
        sink,
        content[:-1] + padding + config.target_char + (NEWLINE if has_newline else b""),
    )
    return True
