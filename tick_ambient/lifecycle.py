"""Ephemeral entities: drawables that are added, animated out, and removed.

The behavior that attaches a drawable holds its scene-graph membership until
a matching ``Detach`` step runs. If the behavior is cancelled first (scene
teardown), the scheduler releases the membership on its behalf, so every exit
path removes the drawable exactly once.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from tick_ambient.tween import Step, tween
from tick_ambient.types import ConfigError

if TYPE_CHECKING:
    from tick_ambient.behavior import Behavior
    from tick_ambient.drawables import Drawable, Group
    from tick_ambient.scheduler import Scheduler

logger = logging.getLogger(__name__)


@dataclass
class Attach(Step):
    parent: Group
    drawable: Drawable

    def finish(self, behavior: Behavior, scheduler: Scheduler) -> None:
        self.parent.add(self.drawable)
        behavior.held.append((self.parent, self.drawable))
        logger.debug("attached drawable %d to group %d", self.drawable.id, self.parent.id)


@dataclass
class Detach(Step):
    parent: Group
    drawable: Drawable

    def finish(self, behavior: Behavior, scheduler: Scheduler) -> None:
        entry = (self.parent, self.drawable)
        if entry in behavior.held:
            behavior.held.remove(entry)
        self.parent.remove(self.drawable)
        logger.debug("released drawable %d from group %d", self.drawable.id, self.parent.id)


def attach(parent: Group, drawable: Drawable) -> Attach:
    return Attach(parent=parent, drawable=drawable)


def detach(parent: Group, drawable: Drawable) -> Detach:
    return Detach(parent=parent, drawable=drawable)


def ephemeral(
    parent: Group, drawable: Drawable, lifetime: float, easing: str = "linear", **values: Any
) -> list[Step]:
    """Steps that add ``drawable``, tween it to ``values`` over ``lifetime``, then remove it.

    Every animated attribute moves in the same step so nothing writes to the
    drawable after the removal.
    """
    if lifetime < 0:
        raise ConfigError(f"lifetime must be non-negative, got {lifetime}")
    if not values:
        raise ConfigError("an ephemeral entity needs a terminal animation")
    return [
        attach(parent, drawable),
        tween(drawable, lifetime, easing, **values),
        detach(parent, drawable),
    ]


def spawn_ephemeral(
    scheduler: Scheduler,
    parent: Group,
    drawable: Drawable,
    lifetime: float,
    name: str = "ephemeral",
    **values: Any,
) -> Behavior:
    """Fire-and-forget variant: one owning behavior per entity."""
    steps = ephemeral(parent, drawable, lifetime, **values)
    return scheduler.spawn(lambda: steps, name=name)
