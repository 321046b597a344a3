"""Behavior - a cooperative task stored as plain state, advanced by the scheduler."""
from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable

from tick_ambient.tween import Step, Wait

if TYPE_CHECKING:
    from tick_ambient.drawables import Drawable, Group
    from tick_ambient.scheduler import Scheduler

# Absorbs float drift when summing many tick deltas against a duration.
EPSILON = 1e-9


class BehaviorState(enum.Enum):
    RUNNABLE = "runnable"
    WAITING = "waiting"
    TWEENING = "tweening"
    DONE = "done"
    CANCELLED = "cancelled"


@dataclass
class Behavior:
    name: str
    body: Callable[[], list[Step]]
    repeat: bool = False
    steps: list[Step] = field(default_factory=list)
    index: int = 0
    started: bool = False
    elapsed: float = 0.0
    budget: float = 0.0
    iterations: int = 0
    state: BehaviorState = BehaviorState.RUNNABLE
    origin: dict[str, Any] = field(default_factory=dict)
    goal: dict[str, Any] = field(default_factory=dict)
    # Scene-graph memberships this behavior must release on any exit path.
    held: list[tuple[Group, Drawable]] = field(default_factory=list)

    @property
    def finished(self) -> bool:
        return self.state in (BehaviorState.DONE, BehaviorState.CANCELLED)

    def advance(self, scheduler: Scheduler) -> None:
        """Spend ``self.budget`` seconds running steps until parked or done."""
        iteration_spent: float | None = None
        while True:
            if self.index >= len(self.steps):
                if self.iterations > 0 and not self.repeat:
                    self.state = BehaviorState.DONE
                    return
                if iteration_spent is not None and iteration_spent <= 0.0:
                    # Zero-time loop body; try again next tick.
                    self.state = BehaviorState.RUNNABLE
                    return
                self._restart()
                iteration_spent = 0.0
                continue

            step = self.steps[self.index]
            if not self.started:
                self.started = True
                self.elapsed = 0.0
                step.begin(self, scheduler)

            remaining = step.duration - self.elapsed
            if self.budget + EPSILON >= remaining:
                spent = max(remaining, 0.0)
                self.budget = max(self.budget - spent, 0.0)
                if iteration_spent is not None:
                    iteration_spent += spent
                self.index += 1
                self.started = False
                self.elapsed = 0.0
                step.finish(self, scheduler)
                if self.state is BehaviorState.CANCELLED:
                    return
                continue

            self.elapsed += self.budget
            self.budget = 0.0
            step.update(self, self.elapsed / step.duration)
            self.state = (
                BehaviorState.WAITING if isinstance(step, Wait) else BehaviorState.TWEENING
            )
            return

    def cancel(self) -> None:
        """Stop for good and release every held drawable."""
        self.state = BehaviorState.CANCELLED
        self.release_all()

    def release_all(self) -> None:
        while self.held:
            parent, drawable = self.held.pop()
            if parent.contains(drawable):
                parent.remove(drawable)

    def _restart(self) -> None:
        self.steps = list(self.body())
        self.index = 0
        self.started = False
        self.elapsed = 0.0
        self.iterations += 1
        self.state = BehaviorState.RUNNABLE
