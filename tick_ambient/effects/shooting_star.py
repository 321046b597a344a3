"""Shooting star: a head crossing the sky, shedding short-lived trail dots."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from tick_ambient.behavior import Behavior
from tick_ambient.config import require_non_negative, require_positive, require_range
from tick_ambient.drawables import Circle, Group
from tick_ambient.lifecycle import spawn_ephemeral
from tick_ambient.rand import chance, uniform
from tick_ambient.scheduler import Scheduler
from tick_ambient.tween import Step, call, lerp, sequence, spawn, tween, wait
from tick_ambient.types import Point, RandomSource

logger = logging.getLogger(__name__)


@dataclass
class ShootingStarConfig:
    width: float
    height: float
    color: str = "#cfe9ff"
    head_radius: float = 3.5
    trail_count: int = 6
    trail_spacing: float = 12.0  # px between trail dots
    trail_opacity_decay: float = 0.14
    angle_deg: float = 22.0  # travel angle when not horizontal
    speed: float = 600.0  # px per second along the path
    min_delay: float = 2.5
    max_delay: float = 6.0
    start_x_ratio_min: float = -0.55
    start_x_ratio_max: float = -0.10
    start_y_ratio_min: float = -0.45
    start_y_ratio_max: float = -0.15
    horizontal: bool = True
    trail_drift: float | None = None  # defaults to 1.5 * spacing
    random_directions: bool = True
    sky_bottom_y: float | None = None
    sky_margin: float = 24.0
    drift_y_max: float = 40.0
    fade_lead: float = 0.2  # head starts fading this long before arrival

    def __post_init__(self) -> None:
        require_positive("width", self.width)
        require_positive("height", self.height)
        require_positive("speed", self.speed)
        require_positive("trail_count", self.trail_count)
        require_positive("head_radius", self.head_radius)
        require_non_negative("min_delay", self.min_delay)
        require_range("delay", self.min_delay, self.max_delay)
        require_range("start x ratio", self.start_x_ratio_min, self.start_x_ratio_max)
        require_range("start y ratio", self.start_y_ratio_min, self.start_y_ratio_max)
        require_non_negative("sky_margin", self.sky_margin)
        require_non_negative("drift_y_max", self.drift_y_max)
        require_non_negative("fade_lead", self.fade_lead)

    @property
    def spacing(self) -> float:
        return max(2.0, self.trail_spacing)

    @property
    def emit_interval(self) -> float:
        return max(0.012, self.spacing / self.speed)

    @property
    def trail_life(self) -> float:
        # A dot expires half an interval before the emission that would
        # put trail_count + 1 dots on screen.
        return self.emit_interval * (self.trail_count - 0.5)

    @property
    def drift(self) -> float:
        return self.trail_drift if self.trail_drift is not None else self.spacing * 1.5


@dataclass(frozen=True)
class ProjectilePath:
    start: Point
    end: Point
    duration: float

    @property
    def length(self) -> float:
        return math.hypot(self.end[0] - self.start[0], self.end[1] - self.start[1])

    @property
    def direction(self) -> Point:
        length = self.length
        if length == 0.0:
            return (0.0, 0.0)
        return ((self.end[0] - self.start[0]) / length, (self.end[1] - self.start[1]) / length)

    def head_at(self, t: float) -> Point:
        """Head position ``t`` seconds into the pass, clamped to the path."""
        if self.duration <= 0.0:
            return self.end
        return lerp(self.start, self.end, min(max(t / self.duration, 0.0), 1.0))


def travel_duration(start: Point, end: Point, speed: float) -> float:
    require_positive("speed", speed)
    return math.hypot(end[0] - start[0], end[1] - start[1]) / speed


def sky_band(cfg: ShootingStarConfig) -> tuple[float, float]:
    """``(top, bottom)`` y limits a horizontal pass must stay within."""
    floor = cfg.sky_bottom_y if cfg.sky_bottom_y is not None else cfg.start_y_ratio_max * cfg.height
    return -cfg.height / 2 + cfg.sky_margin, floor - cfg.sky_margin


def plan_pass(cfg: ShootingStarConfig, rng: RandomSource) -> ProjectilePath:
    if cfg.horizontal:
        margin = max(80.0, cfg.width * 0.06)
        top, bottom = sky_band(cfg)
        y = min(bottom, max(top, uniform(rng, cfg.start_y_ratio_min * cfg.height, cfg.start_y_ratio_max * cfg.height)))
        y_end = min(bottom, max(top, y + uniform(rng, -cfg.drift_y_max, cfg.drift_y_max)))
        left = -cfg.width / 2 - margin
        right = cfg.width / 2 + margin
        if cfg.random_directions and chance(rng, 0.5):
            start, end = (right, y), (left, y_end)
        else:
            start, end = (left, y), (right, y_end)
    else:
        start = (
            uniform(rng, cfg.start_x_ratio_min * cfg.width, cfg.start_x_ratio_max * cfg.width),
            uniform(rng, cfg.start_y_ratio_min * cfg.height, cfg.start_y_ratio_max * cfg.height),
        )
        angle = math.radians(cfg.angle_deg)
        travel = math.hypot(cfg.width, cfg.height) * 1.1
        end = (start[0] + math.cos(angle) * travel, start[1] + math.sin(angle) * travel)
    return ProjectilePath(start=start, end=end, duration=travel_duration(start, end, cfg.speed))


@dataclass
class ShootingStar:
    group: Group
    head: Circle
    behavior: Behavior | None = None
    path: ProjectilePath | None = None
    passes: int = 0

    @property
    def trail(self) -> list[Circle]:
        return [d for d in self.group.children.values() if d is not self.head]


def _trail_emitter(scheduler: Scheduler, star: ShootingStar, cfg: ShootingStarConfig, path: ProjectilePath):
    interval = cfg.emit_interval
    life = cfg.trail_life
    dx, dy = path.direction
    drift = cfg.drift

    def emit(k: int) -> None:
        # The head tween has already run to the end of the tick; place the
        # dot where the head was at its emission time.
        x, y = path.head_at(k * interval)
        dot = Circle(
            x=x,
            y=y,
            size=max(1.0, cfg.head_radius * 1.2) * 2,
            fill=cfg.color,
            opacity=max(0.3, 1 - cfg.trail_opacity_decay),
        )
        spawn_ephemeral(
            scheduler,
            star.group,
            dot,
            life,
            name="trail-dot",
            x=x - dx * drift,
            y=y - dy * drift,
            size=max(1.0, cfg.head_radius) * 2,
            opacity=0.0,
        )

    def body() -> list[Step]:
        emissions = math.ceil(path.duration / interval) if path.duration > 0 else 0
        return sequence([call(lambda k=k: emit(k)), wait(interval)] for k in range(emissions))

    return body


def _head_fade(star: ShootingStar, cfg: ShootingStarConfig, path: ProjectilePath):
    def body() -> list[Step]:
        return [
            wait(max(0.0, path.duration - cfg.fade_lead)),
            tween(star.head, cfg.fade_lead, opacity=0.0),
        ]

    return body


def build_shooting_star(scheduler: Scheduler, cfg: ShootingStarConfig) -> ShootingStar:
    rng = scheduler.random
    group = Group(opacity=0.0)  # hidden until the first pass
    head = Circle(size=cfg.head_radius * 2, fill=cfg.color)
    group.add(head)
    star = ShootingStar(group=group, head=head)

    def begin(path: ProjectilePath) -> None:
        star.path = path
        star.passes += 1
        head.position = path.start
        head.opacity = 1.0
        group.opacity = 1.0
        logger.debug("shooting star pass %d: %s -> %s in %.3fs", star.passes, path.start, path.end, path.duration)

    def hide() -> None:
        group.opacity = 0.0

    def body() -> list[Step]:
        delay = uniform(rng, cfg.min_delay, cfg.max_delay)
        path = plan_pass(cfg, rng)
        return sequence(
            wait(delay),
            call(lambda: begin(path)),
            spawn(_trail_emitter(scheduler, star, cfg, path), name="trail-emitter"),
            spawn(_head_fade(star, cfg, path), name="head-fade"),
            tween(head, path.duration, position=path.end),
            call(hide),
        )

    star.behavior = scheduler.loop(body, name="shooting-star")
    return star
