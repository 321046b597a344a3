"""Tween engine: easings, interpolation, and the steps behaviors are built from."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Iterable, Union

from tick_ambient.types import ConfigError, LifecycleError

if TYPE_CHECKING:
    from tick_ambient.behavior import Behavior
    from tick_ambient.scheduler import Scheduler


def linear(t: float) -> float:
    return t


def ease_in(t: float) -> float:
    return t * t


def ease_out(t: float) -> float:
    return t * (2 - t)


def ease_in_out_cubic(t: float) -> float:
    if t < 0.5:
        return 4 * t * t * t
    return 1 - (-2 * t + 2) ** 3 / 2


EASINGS: dict[str, Callable[[float], float]] = {
    "linear": linear,
    "ease_in": ease_in,
    "ease_out": ease_out,
    "ease_in_out_cubic": ease_in_out_cubic,
}


def lerp(start: Any, end: Any, t: float) -> Any:
    """Interpolate scalars or equal-length tuples."""
    if isinstance(start, tuple):
        return tuple(s + (e - s) * t for s, e in zip(start, end, strict=True))
    return start + (end - start) * t


def _check_duration(duration: float) -> None:
    if duration < 0:
        raise ConfigError(f"duration must be non-negative, got {duration}")


class Step:
    """One stage of a behavior. Instant steps have zero duration."""

    duration: float = 0.0

    def begin(self, behavior: Behavior, scheduler: Scheduler) -> None:
        pass

    def update(self, behavior: Behavior, t: float) -> None:
        pass

    def finish(self, behavior: Behavior, scheduler: Scheduler) -> None:
        pass


@dataclass
class Wait(Step):
    duration: float

    def __post_init__(self) -> None:
        _check_duration(self.duration)


@dataclass
class Tween(Step):
    """Move one or more attributes of ``target`` to new values.

    Start values are read when the step begins. Callable end values are
    evaluated at that moment too, so relative moves see the current state.
    """

    target: Any
    values: dict[str, Any]
    duration: float
    easing: str = "linear"

    def __post_init__(self) -> None:
        _check_duration(self.duration)
        if self.easing not in EASINGS:
            raise ConfigError(f"Unknown easing {self.easing!r}")
        if not self.values:
            raise ConfigError("Tween needs at least one attribute to animate")

    def begin(self, behavior: Behavior, scheduler: Scheduler) -> None:
        behavior.origin = {name: getattr(self.target, name) for name in self.values}
        behavior.goal = {
            name: value() if callable(value) else value
            for name, value in self.values.items()
        }

    def update(self, behavior: Behavior, t: float) -> None:
        self._check_alive()
        eased = EASINGS[self.easing](t)
        for name, end in behavior.goal.items():
            setattr(self.target, name, lerp(behavior.origin[name], end, eased))

    def finish(self, behavior: Behavior, scheduler: Scheduler) -> None:
        self._check_alive()
        for name, end in behavior.goal.items():
            setattr(self.target, name, end)

    def _check_alive(self) -> None:
        if getattr(self.target, "removed", False):
            raise LifecycleError(
                self.target.id, f"Tween writes to removed drawable {self.target.id}"
            )


@dataclass
class Call(Step):
    fn: Callable[[], None]

    def finish(self, behavior: Behavior, scheduler: Scheduler) -> None:
        self.fn()


@dataclass
class Spawn(Step):
    """Register an independent behavior without blocking this one."""

    body: Callable[[], list[Step]]
    repeat: bool = False
    name: str = "child"

    def finish(self, behavior: Behavior, scheduler: Scheduler) -> None:
        if self.repeat:
            scheduler.loop(self.body, name=self.name)
        else:
            scheduler.spawn(self.body, name=self.name)


StepLike = Union[Step, Iterable["StepLike"]]


def wait(duration: float) -> Wait:
    return Wait(duration)


def tween(target: Any, duration: float, easing: str = "linear", **values: Any) -> Tween:
    return Tween(target=target, values=values, duration=duration, easing=easing)


def call(fn: Callable[[], None]) -> Call:
    return Call(fn)


def spawn(body: Callable[[], list[Step]], repeat: bool = False, name: str = "child") -> Spawn:
    return Spawn(body=body, repeat=repeat, name=name)


def chain(target: Any, attribute: str, stages: Iterable[tuple[Any, float]], easing: str = "linear") -> list[Step]:
    """Tween one attribute through successive ``(value, duration)`` stages."""
    return [tween(target, duration, easing, **{attribute: value}) for value, duration in stages]


def sequence(*parts: StepLike) -> list[Step]:
    """Flatten steps and nested lists of steps into one ordered list."""
    out: list[Step] = []
    for part in parts:
        if isinstance(part, Step):
            out.append(part)
        else:
            out.extend(sequence(*part))
    return out
