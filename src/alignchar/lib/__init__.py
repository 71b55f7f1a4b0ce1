"""Core alignchar library exports."""

from alignchar.lib.align import align_line, line_width
from alignchar.lib.errors import (
    AlignCharError,
    AlignIOError,
    ArgumentError,
    ConfigurationError,
    ErrorCategory,
)
from alignchar.lib.line_io import (
    LineBuffer,
    ReadOutcome,
    ReadResult,
    read_through_delimiter,
    skip_through_delimiter,
)
from alignchar.lib.settings import AlignConfig, resolve_config
from alignchar.lib.transform import (
    TransformStats,
    transform_file,
    transform_in_place,
    transform_stream,
)

__all__ = [
    "AlignCharError",
    "AlignConfig",
    "AlignIOError",
    "ArgumentError",
    "ConfigurationError",
    "ErrorCategory",
    "LineBuffer",
    "ReadOutcome",
    "ReadResult",
    "TransformStats",
    "align_line",
    "line_width",
    "read_through_delimiter",
    "resolve_config",
    "skip_through_delimiter",
    "transform_file",
    "transform_in_place",
    "transform_stream",
]
