"""Skyline and mountain silhouettes: one static closed polygon."""
from __future__ import annotations

from dataclasses import dataclass

from tick_ambient.config import require_positive, require_range
from tick_ambient.drawables import Polyline
from tick_ambient.geometry import RIDGE_QUANTUM, generate_ridge, ridge_polygon, validate_ridge
from tick_ambient.types import RandomSource, RidgePoint


@dataclass
class SkylineConfig:
    color: str
    width: float
    height: float
    base_y: float
    bottom_y: float
    ridge: list[RidgePoint] | None = None  # explicit profile; generated when absent
    generate_count: int = 20
    min_height_ratio: float = -0.18  # negative values rise above base_y
    max_height_ratio: float = -0.04
    quantum: float = RIDGE_QUANTUM

    def __post_init__(self) -> None:
        require_positive("width", self.width)
        require_positive("height", self.height)
        require_positive("generate_count", self.generate_count)
        require_positive("quantum", self.quantum)
        require_range("height ratio", self.min_height_ratio, self.max_height_ratio)
        if self.ridge is not None:
            self.ridge = validate_ridge(self.ridge)


def build_skyline(cfg: SkylineConfig, rng: RandomSource) -> Polyline:
    """Closed silhouette from the explicit ridge, or a generated blocky one."""
    if cfg.ridge is not None:
        profile = cfg.ridge
    else:
        profile = generate_ridge(
            cfg.generate_count, cfg.min_height_ratio, cfg.max_height_ratio, rng, cfg.quantum
        )
    return Polyline(
        fill=cfg.color,
        closed=True,
        points=ridge_polygon(profile, cfg.width, cfg.height, cfg.base_y, cfg.bottom_y),
    )
