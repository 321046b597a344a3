"""Scheduler - single-threaded cooperative run-list of behaviors."""
from __future__ import annotations

import logging
from typing import Callable

from tick_ambient.behavior import Behavior, BehaviorState
from tick_ambient.rand import make_random
from tick_ambient.tween import Step
from tick_ambient.types import ConfigError, RandomSource

logger = logging.getLogger(__name__)

Body = Callable[[], list[Step]]


class Scheduler:
    """Advances every registered behavior once per tick, in spawn order.

    A behavior spawned while another one is running joins the current tick
    with whatever time the spawner had left, so concurrently started
    behaviors stay in lockstep.
    """

    def __init__(self, random: RandomSource | None = None) -> None:
        self._behaviors: list[Behavior] = []
        self._current: Behavior | None = None
        self._ticking = False
        self._cleared = False
        self.random: RandomSource = random if random is not None else make_random()

    @property
    def behaviors(self) -> list[Behavior]:
        return [b for b in self._behaviors if not b.finished]

    def __len__(self) -> int:
        return len(self.behaviors)

    def spawn(self, body: Body, name: str = "behavior") -> Behavior:
        """Register a one-shot behavior. Does not block the caller."""
        return self._register(Behavior(name=name, body=body))

    def loop(self, body: Body, name: str = "loop") -> Behavior:
        """Register a behavior whose body restarts each time it completes."""
        return self._register(Behavior(name=name, body=body, repeat=True))

    def _register(self, behavior: Behavior) -> Behavior:
        if not callable(behavior.body):
            raise ConfigError(f"Behavior body for {behavior.name!r} must be callable")
        if self._current is not None:
            behavior.budget = self._current.budget
        self._behaviors.append(behavior)
        logger.debug("spawned %s (repeat=%s)", behavior.name, behavior.repeat)
        return behavior

    def tick(self, dt: float) -> None:
        if dt < 0:
            raise ConfigError(f"tick delta must be non-negative, got {dt}")
        self._cleared = False
        self._ticking = True
        try:
            for behavior in self._behaviors:
                behavior.budget = dt
            # Index walk: behaviors spawned mid-tick are appended and run this tick.
            i = 0
            while i < len(self._behaviors):
                behavior = self._behaviors[i]
                i += 1
                if behavior.finished:
                    continue
                self._current = behavior
                try:
                    behavior.advance(self)
                finally:
                    self._current = None
                if self._cleared:
                    return
                if behavior.state is BehaviorState.DONE:
                    behavior.release_all()
                    logger.debug("finished %s", behavior.name)
        finally:
            self._ticking = False
            self._behaviors = [b for b in self._behaviors if not b.finished]

    def clear(self) -> None:
        """Cancel every behavior and empty the run-list."""
        pending = self._behaviors
        self._behaviors = []
        for behavior in pending:
            if not behavior.finished:
                behavior.cancel()
        if self._ticking:
            self._cleared = True
        logger.debug("cleared %d behaviors", len(pending))
