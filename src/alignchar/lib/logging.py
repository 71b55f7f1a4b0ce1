"""Structlog configuration for alignchar runs.

Every diagnostic goes to stderr: stdout is reserved for --help/--version text
and the aligned content only ever goes to the output file.
"""

from __future__ import annotations

import logging as std_logging
import sys

import structlog

_VERBOSITY_LEVELS: tuple[int, ...] = (std_logging.WARNING, std_logging.INFO, std_logging.DEBUG)


def level_from_verbosity(verbosity: int) -> int:
    index = min(max(verbosity, 0), len(_VERBOSITY_LEVELS) - 1)
    return _VERBOSITY_LEVELS[index]


def configure_logging(json_mode: bool = False, verbosity: int = 0) -> None:
    """Route stdlib logging and structlog to stderr at the requested verbosity."""

    level = level_from_verbosity(verbosity)
    handler = std_logging.StreamHandler(sys.stderr)
    handler.setFormatter(std_logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    std_logging.basicConfig(level=level, handlers=[handler], force=True)

    processors: list[structlog.typing.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]
    if json_mode:
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        # ConsoleRenderer formats exceptions itself.
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )
