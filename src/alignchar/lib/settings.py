"""Alignment configuration: defaults, environment overrides, and validation."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from typing import cast

from alignchar.lib.errors import ArgumentError, ConfigurationError

DEFAULT_BUFFER_CAPACITY = 2048


@dataclass(frozen=True, slots=True)
class AlignConfig:
    """Resolved configuration for one alignment run."""

    target_char: bytes = b"\\"
    # First column is 1.
    target_column: int = 80
    fill_char: bytes = b" "
    tab_width: int = 4
    buffer_capacity: int = DEFAULT_BUFFER_CAPACITY


_ENV_OVERRIDE_MAP: dict[str, str] = {
    "ALIGNCHAR_CHAR": "target_char",
    "ALIGNCHAR_POSITION": "target_column",
    "ALIGNCHAR_FILL": "fill_char",
    "ALIGNCHAR_TAB_WIDTH": "tab_width",
    "ALIGNCHAR_BUFFER_CAPACITY": "buffer_capacity",
}

_BYTE_FIELDS = frozenset({"target_char", "fill_char"})


def single_byte(value: str, *, option: str) -> bytes:
    """Encode one command-line character, rejecting anything but a single byte."""

    encoded = os.fsencode(value)
    if len(encoded) != 1:
        raise ArgumentError(f"Pass exactly one character to {option}, got {value!r}.")
    return encoded


def _coerce_env_value(*, field_name: str, raw_value: str, env_name: str) -> object:
    if field_name in _BYTE_FIELDS:
        encoded = os.fsencode(raw_value)
        if len(encoded) != 1:
            raise ConfigurationError(
                f"Invalid environment override '{env_name}': expected exactly one "
                f"character, got {raw_value!r}."
            )
        return encoded

    try:
        return int(raw_value.strip())
    except ValueError as error:
        raise ConfigurationError(
            f"Invalid environment override '{env_name}': expected int, got {raw_value!r}."
        ) from error


def _apply_env_overrides(values: dict[str, object]) -> None:
    for env_name, field_name in _ENV_OVERRIDE_MAP.items():
        raw_value = os.getenv(env_name)
        if raw_value is None:
            continue
        values[field_name] = _coerce_env_value(
            field_name=field_name,
            raw_value=raw_value,
            env_name=env_name,
        )


def validate_config(config: AlignConfig) -> AlignConfig:
    """Reject configurations that single-pass alignment can never satisfy."""

    for name in _BYTE_FIELDS:
        value = getattr(config, name)
        if not isinstance(value, bytes) or len(value) != 1:
            raise ArgumentError(f"Invalid {name}: expected exactly one byte, got {value!r}.")
    if config.tab_width < 0:
        raise ArgumentError(f"Given tab width ({config.tab_width}) must not be negative.")
    if config.buffer_capacity < 2:
        raise ConfigurationError(
            f"Buffer capacity must be at least 2, got {config.buffer_capacity}."
        )
    if config.target_column <= 0:
        raise ArgumentError(
            f"Column position must be between 0 and {config.buffer_capacity} "
            f"(exclusive), got {config.target_column}."
        )
    if config.target_column >= config.buffer_capacity:
        raise ConfigurationError(
            f"Column position {config.target_column} does not fit a line buffer of "
            f"{config.buffer_capacity} bytes; it must be below {config.buffer_capacity}."
        )
    return config


def resolve_config(
    *,
    target_char: bytes | None = None,
    target_column: int | None = None,
    fill_char: bytes | None = None,
    tab_width: int | None = None,
) -> AlignConfig:
    """Merge defaults, `ALIGNCHAR_*` environment overrides, and explicit values.

    Explicit arguments win over the environment, which wins over defaults.
    The merged configuration is validated before it is returned.
    """

    defaults = AlignConfig()
    values: dict[str, object] = {
        field.name: getattr(defaults, field.name) for field in fields(AlignConfig)
    }
    _apply_env_overrides(values)

    explicit: dict[str, object] = {
        "target_char": target_char,
        "target_column": target_column,
        "fill_char": fill_char,
        "tab_width": tab_width,
    }
    values.update({key: value for key, value in explicit.items() if value is not None})

    config = replace(
        defaults,
        target_char=cast("bytes", values["target_char"]),
        target_column=cast("int", values["target_column"]),
        fill_char=cast("bytes", values["fill_char"]),
        tab_width=cast("int", values["tab_width"]),
        buffer_capacity=cast("int", values["buffer_capacity"]),
    )
    return validate_config(config)
