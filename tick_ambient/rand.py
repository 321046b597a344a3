"""Random helpers built on an injectable ``RandomSource``."""
from __future__ import annotations

import os
import random as _random
from typing import Iterable

from tick_ambient.types import ConfigError, RandomSource


def uniform(rng: RandomSource, lo: float, hi: float) -> float:
    """Draw from [lo, hi) using only ``rng.random()``."""
    return lo + rng.random() * (hi - lo)


def chance(rng: RandomSource, probability: float) -> bool:
    return rng.random() < probability


def make_random(seed: int | None = None) -> _random.Random:
    if seed is None:
        seed = int.from_bytes(os.urandom(8))
    return _random.Random(seed)


class SequenceRandom:
    """Deterministic source that cycles through a fixed list of values."""

    def __init__(self, values: Iterable[float]) -> None:
        self._values = list(values)
        if not self._values:
            raise ConfigError("SequenceRandom needs at least one value")
        for v in self._values:
            if not 0.0 <= v < 1.0:
                raise ConfigError(f"SequenceRandom values must be in [0, 1), got {v}")
        self._index = 0

    @property
    def draws(self) -> int:
        return self._index

    def random(self) -> float:
        v = self._values[self._index % len(self._values)]
        self._index += 1
        return v
