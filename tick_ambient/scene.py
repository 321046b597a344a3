"""Scene - core loop, pacing, lifecycle hooks, and teardown."""
from __future__ import annotations

import logging
import time
from typing import Callable

from tick_ambient.clock import Clock
from tick_ambient.drawables import Group
from tick_ambient.rand import make_random
from tick_ambient.scheduler import Scheduler
from tick_ambient.types import ConfigError, LifecycleError, RandomSource

logger = logging.getLogger(__name__)

Hook = Callable[["Scene"], None]


class Scene:
    def __init__(
        self,
        fps: int = 60,
        seed: int | None = None,
        random: RandomSource | None = None,
        name: str = "scene",
    ) -> None:
        self.name = name
        self._clock = Clock(fps)
        self._random = random if random is not None else make_random(seed)
        self._scheduler = Scheduler(self._random)
        self._root = Group()
        self._start_hooks: list[Hook] = []
        self._stop_hooks: list[Hook] = []
        self._frame_hooks: list[Hook] = []
        self._stop_requested = False
        self._started = False
        self._torn_down = False

    @property
    def clock(self) -> Clock:
        return self._clock

    @property
    def scheduler(self) -> Scheduler:
        return self._scheduler

    @property
    def root(self) -> Group:
        return self._root

    @property
    def random(self) -> RandomSource:
        return self._random

    @property
    def elapsed(self) -> float:
        return self._clock.elapsed

    def on_start(self, hook: Hook) -> None:
        self._start_hooks.append(hook)

    def on_stop(self, hook: Hook) -> None:
        self._stop_hooks.append(hook)

    def on_frame(self, hook: Hook) -> None:
        """Register a renderer callback, run after each tick's resolve pass."""
        self._frame_hooks.append(hook)

    def request_stop(self) -> None:
        self._stop_requested = True

    def _tick(self, dt: float | None) -> None:
        if self._torn_down:
            raise LifecycleError(self._root.id, f"Scene {self.name!r} has been torn down")
        if not self._started:
            self._started = True
            logger.info("scene %s started with %d behaviors", self.name, len(self._scheduler))
        used = self._clock.advance(dt)
        self._scheduler.tick(used)
        self._root.resolve()
        for hook in self._frame_hooks:
            hook(self)

    def step(self, dt: float | None = None) -> None:
        self._stop_requested = False
        self._tick(dt)

    def run(self, n: int) -> None:
        self._stop_requested = False
        for hook in self._start_hooks:
            hook(self)

        for _ in range(n):
            self._tick(None)
            if self._stop_requested:
                break

        for hook in self._stop_hooks:
            hook(self)

    def run_for(self, seconds: float) -> None:
        """Run as many fixed ticks as fit in ``seconds`` of simulated time."""
        if seconds < 0:
            raise ConfigError(f"seconds must be non-negative, got {seconds}")
        self.run(round(seconds * self._clock.fps))

    def run_forever(self) -> None:
        self._stop_requested = False
        for hook in self._start_hooks:
            hook(self)

        dt = self._clock.dt
        while not self._stop_requested:
            start = time.monotonic()
            self._tick(None)
            if self._stop_requested:
                break
            elapsed = time.monotonic() - start
            sleep_time = dt - elapsed
            if sleep_time > 0:
                time.sleep(sleep_time)

        for hook in self._stop_hooks:
            hook(self)

    def teardown(self) -> None:
        """Cancel all behaviors and release every drawable."""
        if self._torn_down:
            return
        count = len(self._scheduler)
        self._scheduler.clear()
        self._root.clear()
        self._torn_down = True
        logger.info("scene %s torn down (%d behaviors cancelled)", self.name, count)
