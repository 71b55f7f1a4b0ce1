"""Cyclopts CLI entry point for alignchar."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

from cyclopts import App, CycloptsError, Parameter

from alignchar import __version__
from alignchar.lib.errors import AlignCharError, ArgumentError
from alignchar.lib.settings import DEFAULT_BUFFER_CAPACITY, resolve_config, single_byte
from alignchar.lib.transform import transform_file, transform_in_place

if TYPE_CHECKING:
    from collections.abc import Sequence

_APP_HELP = f"""For the given input file, for each line that ends in the target character
(default: '\\'), align the target character to the target column position
(default: 80, first column is 1) using the fill character (default: ' ').
Non-matching lines, lines that do not fit the line buffer (capacity
{DEFAULT_BUFFER_CAPACITY} bytes unless ALIGNCHAR_BUFFER_CAPACITY says otherwise), and
lines where the target character falls on or after the target column position
are unchanged.

Usage examples:
  alignchar [options] -i <input file> -o <output file>
  alignchar [options] -i <input file> --in-place

Logging: -v/--verbose (repeatable) and --log-json write diagnostics to stderr.
"""

app = App(
    name="alignchar",
    help=_APP_HELP,
    version=__version__,
    help_format="plaintext",
    help_formatter="plain",
    exit_on_error=False,
    print_error=False,
)


@app.default
def align(
    *,
    input_path: Annotated[
        Path,
        Parameter(name=["--input", "-i"], help="Input file (required)."),
    ],
    output_path: Annotated[
        Path | None,
        Parameter(
            name=["--output", "-o"],
            help="Output file; must differ from the input (mutually exclusive with --in-place).",
        ),
    ] = None,
    in_place: Annotated[
        bool,
        Parameter(
            name="--in-place",
            help="Modify the input file (mutually exclusive with -o/--output).",
            negative=(),
        ),
    ] = False,
    char: Annotated[
        str | None,
        Parameter(
            name=["--char", "-c"],
            help="Character to align. [default: '\\']",
            allow_leading_hyphen=True,
        ),
    ] = None,
    position: Annotated[
        int | None,
        Parameter(name=["--position", "-p"], help="Column to align the character to. [default: 80]"),
    ] = None,
    fill: Annotated[
        str | None,
        Parameter(
            name=["--fill", "-f"],
            help="Fill character. [default: ' ']",
            allow_leading_hyphen=True,
        ),
    ] = None,
    tab_width: Annotated[
        int | None,
        Parameter(name=["--tab-width", "-t"], help="Tab width used to measure lines. [default: 4]"),
    ] = None,
) -> None:
    """Align a trailing character to a fixed column."""

    if output_path is not None and in_place:
        raise ArgumentError(
            "Do not specify both --output and --in-place. Instead, specify exactly one of them."
        )
    if output_path is None and not in_place:
        raise ArgumentError(
            "You must either specify an output file (-o or --output) or modify the "
            "input file in place (--in-place)."
        )

    config = resolve_config(
        target_char=single_byte(char, option="--char") if char is not None else None,
        target_column=position,
        fill_char=single_byte(fill, option="--fill") if fill is not None else None,
        tab_width=tab_width,
    )

    if output_path is None:
        transform_in_place(input_path, config)
    else:
        transform_file(input_path, output_path, config)


def _extract_logging_flags(argv: Sequence[str]) -> tuple[list[str], int, bool]:
    verbosity = 0
    json_mode = False
    cleaned: list[str] = []
    for index, arg in enumerate(argv):
        if arg == "--":
            cleaned.extend(argv[index:])
            break
        if arg in {"--verbose", "-v"}:
            verbosity += 1
            continue
        if arg == "-vv":
            verbosity += 2
            continue
        if arg == "--log-json":
            json_mode = True
            continue
        cleaned.append(arg)
    return cleaned, verbosity, json_mode


def _operation_error_message(exc: Exception) -> str:
    # Parser errors can span several lines; stderr gets exactly one.
    message = " ".join(str(exc).split())
    if message:
        return message
    return exc.__class__.__name__


def main(argv: Sequence[str] | None = None) -> None:
    """CLI entry point used by `alignchar` and `python -m alignchar`."""

    from alignchar.lib.logging import configure_logging

    args = list(sys.argv[1:] if argv is None else argv)
    args, verbosity, json_mode = _extract_logging_flags(args)
    configure_logging(json_mode=json_mode, verbosity=verbosity)

    try:
        app(args)
    except (CycloptsError, AlignCharError, ValueError, OSError) as exc:
        print(f"error: {_operation_error_message(exc)}", file=sys.stderr)
        raise SystemExit(1) from None
