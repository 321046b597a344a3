"""Validation helpers and a mapping loader for effect configuration records.

Records are plain dataclasses. ``from_mapping`` accepts already-parsed data
(for example the output of a JSON or YAML loader elsewhere) with either
snake_case or camelCase keys.
"""
from __future__ import annotations

import dataclasses
import re
import typing
from typing import Any, Mapping, TypeVar

from tick_ambient.types import ConfigError

T = TypeVar("T")

_CAMEL = re.compile(r"(?<!^)(?=[A-Z])")


def snake_case(key: str) -> str:
    return _CAMEL.sub("_", key).lower()


def require_positive(name: str, value: float) -> None:
    if value <= 0:
        raise ConfigError(f"{name} must be positive, got {value}")


def require_non_negative(name: str, value: float) -> None:
    if value < 0:
        raise ConfigError(f"{name} must be non-negative, got {value}")


def require_range(name: str, lo: float, hi: float) -> None:
    if lo > hi:
        raise ConfigError(f"{name} range is inverted: min {lo} > max {hi}")


def require_unit(name: str, value: float) -> None:
    if not 0.0 <= value <= 1.0:
        raise ConfigError(f"{name} must be within [0, 1], got {value}")


def from_mapping(cls: type[T], data: Mapping[str, Any]) -> T:
    """Build the dataclass ``cls`` from ``data``, converting nested records."""
    if not dataclasses.is_dataclass(cls):
        raise TypeError(f"{cls.__qualname__} is not a dataclass")
    fields = {f.name: f for f in dataclasses.fields(cls) if f.init}
    hints = typing.get_type_hints(cls)
    kwargs: dict[str, Any] = {}
    for key, value in data.items():
        name = snake_case(key)
        if name not in fields:
            raise ConfigError(f"Unknown option {key!r} for {cls.__name__}")
        nested = _record_type(hints.get(name))
        if nested is not None and isinstance(value, Mapping):
            value = from_mapping(nested, value)
        elif isinstance(value, list) and name != "ridge":
            value = tuple(value)
        kwargs[name] = value
    try:
        return cls(**kwargs)
    except TypeError as exc:
        raise ConfigError(f"Incomplete {cls.__name__}: {exc}") from exc


def _record_type(hint: Any) -> type | None:
    """Dataclass named by ``hint``, unwrapping ``X | None``."""
    if hint is None:
        return None
    if dataclasses.is_dataclass(hint):
        return hint
    for arg in typing.get_args(hint):
        if dataclasses.is_dataclass(arg):
            return arg
    return None
