"""Striped retro sun with an optional scale pulse."""
from __future__ import annotations

from dataclasses import dataclass, field

from tick_ambient.behavior import Behavior
from tick_ambient.config import require_non_negative, require_positive
from tick_ambient.drawables import Circle, Group, Polyline
from tick_ambient.geometry import sun_stripes
from tick_ambient.scheduler import Scheduler
from tick_ambient.tween import chain
from tick_ambient.types import Point


@dataclass
class StripedSunConfig:
    radius: float
    color: str
    center: Point = (0.0, 0.0)
    stripe_gap: float = 16.0
    stripe_thickness: float = 8.0
    animate_pulse: bool = False
    pulse_scale: float = 1.03
    pulse_duration: float = 2.4
    background: str = "#000000"

    def __post_init__(self) -> None:
        require_positive("radius", self.radius)
        require_positive("stripe_gap", self.stripe_gap)
        require_non_negative("stripe_thickness", self.stripe_thickness)
        require_positive("pulse_scale", self.pulse_scale)
        require_positive("pulse_duration", self.pulse_duration)


@dataclass
class StripedSun:
    group: Group
    disc: Circle
    stripes: list[Polyline] = field(default_factory=list)
    behavior: Behavior | None = None


def build_striped_sun(scheduler: Scheduler, cfg: StripedSunConfig) -> StripedSun:
    group = Group(x=cfg.center[0], y=cfg.center[1])
    disc = Circle(size=cfg.radius * 2, fill=cfg.color)
    group.add(disc)
    sun = StripedSun(group=group, disc=disc)
    for y, half in sun_stripes(cfg.radius, cfg.stripe_gap):
        stripe = Polyline(
            points=[(-half, y), (half, y)],
            stroke=cfg.background,
            line_width=cfg.stripe_thickness,
        )
        group.add(stripe)
        sun.stripes.append(stripe)

    if cfg.animate_pulse:
        sun.behavior = scheduler.loop(
            lambda: chain(group, "scale", [(cfg.pulse_scale, cfg.pulse_duration), (1.0, cfg.pulse_duration)]),
            name="sun-pulse",
        )
    return sun
