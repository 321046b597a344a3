"""Glow title: a soft glow copy under a crisp copy that flickers and glitches."""
from __future__ import annotations

from dataclasses import dataclass, field

from tick_ambient.behavior import Behavior
from tick_ambient.config import require_non_negative, require_positive, require_unit
from tick_ambient.drawables import Group, Text
from tick_ambient.scheduler import Scheduler
from tick_ambient.tween import Step, chain, sequence


@dataclass
class FlickerConfig:
    opacity_min: float = 0.55
    opacity_down: float = 0.08
    opacity_up: float = 0.2
    glitch_x1: float = 6.0
    glitch_x2: float = -4.0
    glitch_step: float = 0.05
    scale_up: float = 1.03
    scale_up_duration: float = 0.4
    scale_down_duration: float = 1.2

    def __post_init__(self) -> None:
        require_unit("opacity_min", self.opacity_min)
        for name in (
            "opacity_down",
            "opacity_up",
            "glitch_step",
            "scale_up_duration",
            "scale_down_duration",
        ):
            require_non_negative(name, getattr(self, name))
        require_positive("scale_up", self.scale_up)


@dataclass
class MainTextConfig:
    font_size: float = 96.0
    fill: str = "#ffffff"

    def __post_init__(self) -> None:
        require_positive("font_size", self.font_size)


@dataclass
class GlowTextConfig:
    font_size: float = 100.0
    color: str = "#ff2bd6"
    opacity: float = 0.45
    scale: float = 1.04

    def __post_init__(self) -> None:
        require_positive("font_size", self.font_size)
        require_unit("opacity", self.opacity)
        require_positive("scale", self.scale)


@dataclass
class TitleConfig:
    text: str
    y: float = 0.0
    font_family: str = "sans-serif"
    text_align: str = "center"
    main: MainTextConfig = field(default_factory=MainTextConfig)
    glow: GlowTextConfig = field(default_factory=GlowTextConfig)
    flicker: FlickerConfig | None = None


@dataclass
class Title:
    group: Group
    glow: Text
    main: Text
    behavior: Behavior | None = None


def flicker_steps(text: Text, cfg: FlickerConfig) -> list[Step]:
    """Dim and recover, glitch sideways in three hops, then pulse the scale."""
    return sequence(
        chain(text, "opacity", [(cfg.opacity_min, cfg.opacity_down), (1.0, cfg.opacity_up)]),
        chain(
            text,
            "x",
            [(cfg.glitch_x1, cfg.glitch_step), (cfg.glitch_x2, cfg.glitch_step), (0.0, cfg.glitch_step)],
        ),
        chain(text, "scale", [(cfg.scale_up, cfg.scale_up_duration), (1.0, cfg.scale_down_duration)]),
    )


def build_title(scheduler: Scheduler, cfg: TitleConfig) -> Title:
    group = Group(y=cfg.y)
    glow = Text(
        text=cfg.text,
        font_family=cfg.font_family,
        font_size=cfg.glow.font_size,
        fill=cfg.glow.color,
        opacity=cfg.glow.opacity,
        scale=cfg.glow.scale,
        text_align=cfg.text_align,
    )
    main = Text(
        text=cfg.text,
        font_family=cfg.font_family,
        font_size=cfg.main.font_size,
        fill=cfg.main.fill,
        text_align=cfg.text_align,
    )
    # Draw order: glow first, crisp copy on top.
    group.add(glow)
    group.add(main)
    title = Title(group=group, glow=glow, main=main)

    if cfg.flicker is not None:
        flicker = cfg.flicker
        title.behavior = scheduler.loop(lambda: flicker_steps(main, flicker), name="title-flicker")
    return title
