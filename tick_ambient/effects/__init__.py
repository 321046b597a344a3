"""Generative effects built from behaviors, tweens, and procedural geometry."""
from __future__ import annotations

from tick_ambient.effects.dead_star import DeadStar, DeadStarConfig, EmberConfig, build_dead_star
from tick_ambient.effects.grid import GridFloor, GridFloorConfig, build_grid_floor, phase_loop
from tick_ambient.effects.shooting_star import (
    ProjectilePath,
    ShootingStar,
    ShootingStarConfig,
    build_shooting_star,
    plan_pass,
    travel_duration,
)
from tick_ambient.effects.skyline import SkylineConfig, build_skyline
from tick_ambient.effects.starfield import Starfield, StarfieldConfig, StarFlickerConfig, build_starfield
from tick_ambient.effects.sun import StripedSun, StripedSunConfig, build_striped_sun
from tick_ambient.effects.title import (
    FlickerConfig,
    GlowTextConfig,
    MainTextConfig,
    Title,
    TitleConfig,
    build_title,
)

__all__ = [
    "DeadStar",
    "DeadStarConfig",
    "EmberConfig",
    "build_dead_star",
    "GridFloor",
    "GridFloorConfig",
    "build_grid_floor",
    "phase_loop",
    "ProjectilePath",
    "ShootingStar",
    "ShootingStarConfig",
    "build_shooting_star",
    "plan_pass",
    "travel_duration",
    "SkylineConfig",
    "build_skyline",
    "Starfield",
    "StarfieldConfig",
    "StarFlickerConfig",
    "build_starfield",
    "StripedSun",
    "StripedSunConfig",
    "build_striped_sun",
    "FlickerConfig",
    "GlowTextConfig",
    "MainTextConfig",
    "Title",
    "TitleConfig",
    "build_title",
]
