"""Dead star: pulsing halo, flickering cracks, rotating debris ring, and embers."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field

from tick_ambient.behavior import Behavior
from tick_ambient.config import (
    require_non_negative,
    require_positive,
    require_range,
    require_unit,
)
from tick_ambient.drawables import Circle, Group, Polyline
from tick_ambient.geometry import RING_JITTER, crack_path, ring_layout, ring_point
from tick_ambient.lifecycle import ephemeral
from tick_ambient.rand import uniform
from tick_ambient.scheduler import Scheduler
from tick_ambient.tween import Step, chain, sequence, tween, wait
from tick_ambient.types import Point

logger = logging.getLogger(__name__)


@dataclass
class EmberConfig:
    enabled: bool = False
    min_delay: float = 4.0
    max_delay: float = 10.0
    max_radius_factor: float = 0.18  # relative to star radius
    fade_seconds: float = 0.8

    def __post_init__(self) -> None:
        require_non_negative("min_delay", self.min_delay)
        require_range("ember delay", self.min_delay, self.max_delay)
        require_positive("max_radius_factor", self.max_radius_factor)
        require_non_negative("fade_seconds", self.fade_seconds)


@dataclass
class DeadStarConfig:
    center: Point
    radius: float
    core_color: str = "#1a0f1f"
    halo_color: str = "#ff5a3c"
    crack_color: str = "#ff9d5c"
    ring_color: str = "#ffd2a6"

    halo_layers: int = 3
    halo_scale_min: float = 1.05
    halo_scale_max: float = 1.22
    halo_pulse_duration: float = 3.6
    halo_opacity: float = 0.22

    crack_count: int = 8
    crack_width: float = 3.0
    crack_flicker_min: float = 0.4
    crack_flicker_max: float = 1.2
    crack_jitter: float = 1.5

    ring_radius_factor: float = 1.35
    ring_particle_count: int = 56
    ring_particle_min: float = 1.0
    ring_particle_max: float = 2.0
    ring_rotation_seconds: float = 36.0
    ring_tilt_deg: float = 18.0
    ring_opacity: float = 0.65
    ring_jitter: float = RING_JITTER

    embers: EmberConfig = field(default_factory=EmberConfig)

    def __post_init__(self) -> None:
        require_positive("radius", self.radius)
        require_non_negative("halo_layers", self.halo_layers)
        require_range("halo scale", self.halo_scale_min, self.halo_scale_max)
        require_positive("halo_pulse_duration", self.halo_pulse_duration)
        require_unit("halo_opacity", self.halo_opacity)
        require_non_negative("crack_count", self.crack_count)
        require_non_negative("crack_flicker_min", self.crack_flicker_min)
        require_range("crack flicker", self.crack_flicker_min, self.crack_flicker_max)
        require_positive("ring_radius_factor", self.ring_radius_factor)
        require_positive("ring_particle_count", self.ring_particle_count)
        require_positive("ring_particle_min", self.ring_particle_min)
        require_range("ring particle", self.ring_particle_min, self.ring_particle_max)
        require_positive("ring_rotation_seconds", self.ring_rotation_seconds)
        require_unit("ring_opacity", self.ring_opacity)


@dataclass
class DeadStar:
    group: Group
    core: Circle
    ring: Group
    halos: list[Circle] = field(default_factory=list)
    cracks: list[Polyline] = field(default_factory=list)
    behaviors: list[Behavior] = field(default_factory=list)

    @property
    def embers(self) -> list[Circle]:
        """Embers currently alive in the scene graph."""
        core_parts = {self.core.id, self.ring.id} | {h.id for h in self.halos} | {
            c.id for c in self.cracks
        }
        return [d for i, d in self.group.children.items() if i not in core_parts]


def _halo_pulse(layer: Circle, low: float, high: float, duration: float):
    def body() -> list[Step]:
        return chain(layer, "scale", [(high, duration), (low, duration)])

    return body


def _crack_flicker(scheduler: Scheduler, crack: Polyline, cfg: DeadStarConfig):
    rng = scheduler.random
    lo, hi, jitter = cfg.crack_flicker_min, cfg.crack_flicker_max, cfg.crack_jitter

    def body() -> list[Step]:
        # Fresh durations and targets every cycle keep the flicker irregular.
        down = uniform(rng, lo, hi)
        up = uniform(rng, lo, hi)
        x = crack.x
        return sequence(
            tween(crack, down, opacity=uniform(rng, 0.15, 0.4)),
            tween(crack, up, opacity=uniform(rng, 0.5, 1.0)),
            tween(crack, 0.1, x=x + uniform(rng, -jitter, jitter)),
            tween(crack, 0.1, x=x + uniform(rng, -jitter, jitter)),
        )

    return body


def _ember_cycle(scheduler: Scheduler, star: Group, cfg: DeadStarConfig, ring_radius: float, squash: float):
    rng = scheduler.random
    ember_cfg = cfg.embers
    target_size = max(4.0, cfg.radius * 2 * ember_cfg.max_radius_factor)

    def body() -> list[Step]:
        delay = uniform(rng, ember_cfg.min_delay, ember_cfg.max_delay)
        x, y = ring_point(ring_radius, uniform(rng, 0.0, math.tau), squash)
        ember = Circle(x=x, y=y, size=2.0, fill=cfg.ring_color, opacity=0.9)
        return sequence(
            wait(delay),
            ephemeral(star, ember, ember_cfg.fade_seconds, opacity=0.0, size=target_size),
        )

    return body


def build_dead_star(scheduler: Scheduler, cfg: DeadStarConfig) -> DeadStar:
    rng = scheduler.random
    group = Group(x=cfg.center[0], y=cfg.center[1])
    behaviors: list[Behavior] = []

    halos: list[Circle] = []
    for i in range(cfg.halo_layers):
        layer = Circle(
            size=cfg.radius * 2,
            fill=cfg.halo_color,
            opacity=cfg.halo_opacity * (1 - i / (cfg.halo_layers + 1)),
            scale=1 + (i + 1) * ((cfg.halo_scale_min - 1) / cfg.halo_layers),
        )
        group.add(layer)
        halos.append(layer)
        # Per-layer period and bounds offsets keep the layers out of sync.
        duration = cfg.halo_pulse_duration * (1 + i * 0.15)
        low = cfg.halo_scale_min + i * 0.05
        high = cfg.halo_scale_max + i * 0.05
        behaviors.append(
            scheduler.loop(_halo_pulse(layer, low, high, duration), name=f"halo-{i}")
        )

    core = Circle(size=cfg.radius * 2, fill=cfg.core_color)
    group.add(core)

    cracks: list[Polyline] = []
    for i in range(cfg.crack_count):
        segments = math.floor(uniform(rng, 3, 6))
        crack = Polyline(
            points=crack_path(cfg.radius * 0.95, segments, rng),
            stroke=cfg.crack_color,
            line_width=cfg.crack_width,
            opacity=uniform(rng, 0.25, 0.7),
        )
        group.add(crack)
        cracks.append(crack)
        behaviors.append(scheduler.loop(_crack_flicker(scheduler, crack, cfg), name=f"crack-{i}"))

    ring = Group(opacity=cfg.ring_opacity)
    ring_radius = cfg.radius * cfg.ring_radius_factor
    squash = math.cos(math.radians(cfg.ring_tilt_deg))
    for x, y in ring_layout(ring_radius, squash, cfg.ring_particle_count, rng, cfg.ring_jitter):
        ring.add(
            Circle(
                x=x,
                y=y,
                size=uniform(rng, cfg.ring_particle_min, cfg.ring_particle_max) * 2,
                fill=cfg.ring_color,
                opacity=uniform(rng, 0.6, 0.95),
            )
        )
    group.add(ring)
    behaviors.append(
        scheduler.loop(
            lambda: [tween(ring, cfg.ring_rotation_seconds, rotation=lambda: ring.rotation + 360)],
            name="ring-rotation",
        )
    )

    if cfg.embers.enabled:
        behaviors.append(
            scheduler.loop(_ember_cycle(scheduler, group, cfg, ring_radius, squash), name="embers")
        )

    logger.debug(
        "dead star: %d halos, %d cracks, %d ring particles, embers=%s",
        len(halos), len(cracks), len(ring), cfg.embers.enabled,
    )
    return DeadStar(
        group=group, core=core, ring=ring, halos=halos, cracks=cracks, behaviors=behaviors
    )
