"""Perspective grid floor driven by one shared phase signal."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field

from tick_ambient.behavior import Behavior
from tick_ambient.config import require_non_negative, require_positive
from tick_ambient.drawables import Group, Polyline
from tick_ambient.geometry import depth_line_half_width, depth_line_y, rail_lines
from tick_ambient.scheduler import Scheduler
from tick_ambient.signal import PhaseSignal
from tick_ambient.tween import Step, tween
from tick_ambient.types import Point

logger = logging.getLogger(__name__)


@dataclass
class GridFloorConfig:
    width: float
    bottom_y: float
    horizon_y: float
    vanishing_x: float = 0.0
    stroke: str = "#ff2bd6"
    glow: str = "#7afcff"
    vertical_count: int = 12
    horizontal_count: int = 14
    rail_bottom_width_factor: float = 1.4
    vertical_line_width: float = 2.0
    h_width_min: float = 0.35
    h_width_max_extra: float = 1.1
    line_base_width: float = 1.0
    line_grow_width: float = 3.0
    line_width_growth_power: float = 2.0
    flow_duration: float = 4.0
    glow_alt_frequency: float = 2.0
    perspective_exponent: float = 2.2

    def __post_init__(self) -> None:
        require_positive("width", self.width)
        require_positive("vertical_count", self.vertical_count)
        require_positive("horizontal_count", self.horizontal_count)
        require_positive("flow_duration", self.flow_duration)
        require_positive("perspective_exponent", self.perspective_exponent)
        require_non_negative("vertical_line_width", self.vertical_line_width)
        require_non_negative("line_base_width", self.line_base_width)
        require_non_negative("glow_alt_frequency", self.glow_alt_frequency)


@dataclass
class DepthLine:
    """One horizontal line's projection of the shared phase."""

    cfg: GridFloorConfig
    phase: PhaseSignal
    index: int

    @property
    def offset(self) -> float:
        return self.index / self.cfg.horizontal_count

    def progress(self) -> float:
        return self.phase.sample(self.offset)

    def points(self) -> list[Point]:
        p = self.progress()
        c = self.cfg
        y = depth_line_y(p, c.horizon_y, c.bottom_y, c.perspective_exponent)
        w = depth_line_half_width(p, c.width, c.h_width_min, c.h_width_max_extra)
        return [(-w, y), (w, y)]

    def stroke(self) -> str:
        glow_phase = self.phase.sample(self.offset, self.cfg.glow_alt_frequency)
        return self.cfg.stroke if glow_phase < 0.5 else self.cfg.glow

    def line_width(self) -> float:
        c = self.cfg
        return c.line_base_width + c.line_grow_width * self.progress() ** c.line_width_growth_power


@dataclass
class GridFloor:
    group: Group
    phase: PhaseSignal
    rails: list[Polyline] = field(default_factory=list)
    depth_lines: list[Polyline] = field(default_factory=list)
    flow: Behavior | None = None


def phase_loop(scheduler: Scheduler, phase: PhaseSignal, period: float, name: str) -> Behavior:
    """Advance ``phase`` by +1 every ``period`` seconds, forever. Claims the signal."""
    require_positive("period", period)
    phase.claim(name)

    def body() -> list[Step]:
        return [tween(phase, period, value=lambda: phase.value + 1.0)]

    return scheduler.loop(body, name=name)


def build_grid_floor(scheduler: Scheduler, cfg: GridFloorConfig) -> GridFloor:
    group = Group()
    phase = PhaseSignal()
    floor = GridFloor(group=group, phase=phase)

    vanishing = (cfg.vanishing_x, cfg.horizon_y)
    for pts in rail_lines(
        cfg.width, cfg.bottom_y, vanishing, cfg.vertical_count, cfg.rail_bottom_width_factor
    ):
        rail = Polyline(points=pts, stroke=cfg.stroke, line_width=cfg.vertical_line_width)
        group.add(rail)
        floor.rails.append(rail)

    for i in range(cfg.horizontal_count):
        projection = DepthLine(cfg, phase, i)
        line = Polyline()
        line.bind("points", projection.points)
        line.bind("stroke", projection.stroke)
        line.bind("line_width", projection.line_width)
        group.add(line)
        floor.depth_lines.append(line)

    floor.flow = phase_loop(scheduler, phase, cfg.flow_duration, name="grid-flow")
    logger.debug(
        "grid floor: %d rails, %d depth lines", len(floor.rails), len(floor.depth_lines)
    )
    return floor
