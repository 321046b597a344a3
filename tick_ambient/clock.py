"""Clock for the fixed-step scene loop."""

from tick_ambient.types import ConfigError


class Clock:
    def __init__(self, fps: int) -> None:
        if fps <= 0:
            raise ConfigError("fps must be positive")
        self._fps = fps
        self._dt = 1.0 / fps
        self._tick_number = 0
        self._elapsed = 0.0

    @property
    def fps(self) -> int:
        return self._fps

    @property
    def dt(self) -> float:
        return self._dt

    @property
    def tick_number(self) -> int:
        return self._tick_number

    @property
    def elapsed(self) -> float:
        return self._elapsed

    def advance(self, dt: float | None = None) -> float:
        """Move the clock forward one tick and return the delta used."""
        if dt is None:
            dt = self._dt
        elif dt < 0:
            raise ConfigError(f"tick delta must be non-negative, got {dt}")
        self._tick_number += 1
        self._elapsed += dt
        return dt

    def reset(self) -> None:
        self._tick_number = 0
        self._elapsed = 0.0
