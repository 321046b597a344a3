"""Phase signal: one owned scalar sampled modulo 1 by many readers."""
from __future__ import annotations

import math

from tick_ambient.types import LifecycleError


def fract(v: float) -> float:
    return v - math.floor(v)


class PhaseSignal:
    """Monotonically advancing scalar.

    Readers never subscribe; they call ``sample`` from their own projections
    each resolve pass. Exactly one writer may ``claim`` the signal.
    """

    def __init__(self, value: float = 0.0) -> None:
        self.value = value
        self._owner: str | None = None

    @property
    def owner(self) -> str | None:
        return self._owner

    def claim(self, owner: str) -> None:
        if self._owner is not None:
            raise LifecycleError(
                id(self), f"Phase signal already written by {self._owner!r}"
            )
        self._owner = owner

    def release(self) -> None:
        self._owner = None

    def sample(self, offset: float = 0.0, frequency: float = 1.0) -> float:
        """Fractional phase of ``value * frequency + offset``."""
        return fract(self.value * frequency + offset)

    def __repr__(self) -> str:
        return f"PhaseSignal(value={self.value!r}, owner={self._owner!r})"
