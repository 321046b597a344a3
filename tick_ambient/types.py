"""Shared type aliases, protocols, and errors for the ambient engine."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

Point = tuple[float, float]

# Ridge control point: (x_ratio, y_offset_ratio), both normalized.
RidgePoint = tuple[float, float]


@runtime_checkable
class RandomSource(Protocol):
    """Anything that yields floats in [0, 1). ``random.Random`` qualifies."""

    def random(self) -> float: ...


class ConfigError(ValueError):
    """Raised when a behavior, step, or effect is built with invalid parameters."""


class LifecycleError(RuntimeError):
    """Raised when a drawable is removed twice or mutated after removal."""

    def __init__(self, drawable_id: int, message: str) -> None:
        self.drawable_id = drawable_id
        super().__init__(message)
