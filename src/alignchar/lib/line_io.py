"""Bounded line reading and overflow copying over binary streams."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import BinaryIO

from alignchar.lib.errors import AlignIOError, stream_name
from alignchar.lib.settings import DEFAULT_BUFFER_CAPACITY

NEWLINE = b"\n"


class ReadOutcome(StrEnum):
    FOUND_DELIMITER = "found_delimiter"
    BUFFER_FULL = "buffer_full"
    END_OF_INPUT = "end_of_input"


@dataclass(frozen=True, slots=True)
class ReadResult:
    outcome: ReadOutcome
    length: int


class LineBuffer:
    """Fixed-capacity byte buffer reused for every line of a run.

    One slot of the capacity stays reserved, so at most `capacity - 1`
    content bytes are ever held.
    """

    __slots__ = ("_data", "capacity", "length")

    def __init__(self, capacity: int = DEFAULT_BUFFER_CAPACITY) -> None:
        if capacity <= 0:
            raise ValueError(f"Zero-capacity buffer was given (capacity={capacity}).")
        self.capacity = capacity
        self.length = 0
        self._data = bytearray(capacity)

    @property
    def is_full(self) -> bool:
        return self.length >= self.capacity - 1

    def clear(self) -> None:
        self.length = 0

    def append(self, byte: int) -> None:
        if self.is_full:
            raise OverflowError(f"Line buffer overflow at capacity {self.capacity}.")
        self._data[self.length] = byte
        self.length += 1

    def contents(self) -> bytes:
        return bytes(self._data[: self.length])


def read_byte(source: BinaryIO) -> bytes:
    """Read one byte; an empty result means end of input."""

    try:
        return source.read(1)
    except OSError as exc:
        raise AlignIOError("read", stream_name(source, "<input>"), exc) from exc


def write_bytes(sink: BinaryIO, data: bytes) -> None:
    try:
        written = sink.write(data)
    except OSError as exc:
        raise AlignIOError("write", stream_name(sink, "<output>"), exc) from exc
    if written is not None and written != len(data):
        raise AlignIOError("write", stream_name(sink, "<output>"))


def read_through_delimiter(
    source: BinaryIO,
    buffer: LineBuffer,
    delimiter: bytes = NEWLINE,
) -> ReadResult:
    """Fill `buffer` from `source` up to and including `delimiter`.

    Returns FOUND_DELIMITER when the delimiter was read (it is kept in the
    buffer), BUFFER_FULL when `capacity - 1` bytes arrived without it, and
    END_OF_INPUT when the source ran dry first.
    """

    buffer.clear()
    if buffer.is_full:
        return ReadResult(ReadOutcome.BUFFER_FULL, 0)

    while True:
        chunk = read_byte(source)
        if not chunk:
            return ReadResult(ReadOutcome.END_OF_INPUT, buffer.length)

        buffer.append(chunk[0])
        if chunk == delimiter:
            return ReadResult(ReadOutcome.FOUND_DELIMITER, buffer.length)
        if buffer.is_full:
            return ReadResult(ReadOutcome.BUFFER_FULL, buffer.length)


def skip_through_delimiter(
    source: BinaryIO,
    sink: BinaryIO,
    delimiter: bytes = NEWLINE,
) -> bool:
    """Copy bytes from `source` to `sink` through `delimiter` without buffering.

    Returns False if input ended before the delimiter was copied.
    """

    while True:
        chunk = read_byte(source)
        if not chunk:
            return False
        write_bytes(sink, chunk)
        if chunk == delimiter:
            return True
