"""Error taxonomy for argument, configuration and I/O failures."""

from __future__ import annotations

import os
from enum import StrEnum
from pathlib import Path


class ErrorCategory(StrEnum):
    ARGUMENT = "argument"
    CONFIGURATION = "configuration"
    IO = "io"


class AlignCharError(Exception):
    """Base class for every failure that ends an alignchar run.

    Only the concrete subclasses below carry a `category`.
    """

    category: ErrorCategory


class ArgumentError(AlignCharError):
    """Bad, missing, or conflicting command-line values."""

    category = ErrorCategory.ARGUMENT


class ConfigurationError(AlignCharError):
    """Configuration that can never be satisfied for a single-pass read."""

    category = ErrorCategory.CONFIGURATION


class AlignIOError(AlignCharError):
    """An open/read/write/rename/remove failure on one named file or stream."""

    category = ErrorCategory.IO

    def __init__(self, operation: str, path: Path | str, cause: OSError | None = None) -> None:
        self.operation = operation
        self.path = str(path)
        self.cause = cause
        detail = f": {cause.strerror or cause}" if cause is not None else ""
        super().__init__(f"Failed to {operation} '{self.path}'{detail}")


def stream_name(stream: object, fallback: str) -> str:
    """Return the file name behind a stream, or `fallback` for in-memory streams."""

    name = getattr(stream, "name", None)
    if isinstance(name, bytes):
        return os.fsdecode(name)
    if isinstance(name, str):
        return name
    return fallback
