"""Starfield: static stars that twinkle, with occasional short flicker bursts."""
from __future__ import annotations

from dataclasses import dataclass, field

from tick_ambient.behavior import Behavior
from tick_ambient.config import require_non_negative, require_positive, require_range, require_unit
from tick_ambient.drawables import Circle, Group
from tick_ambient.rand import chance, uniform
from tick_ambient.scheduler import Scheduler
from tick_ambient.tween import Step, chain, sequence, spawn


@dataclass
class StarFlickerConfig:
    enabled: bool = False
    probability: float = 0.07  # chance per twinkle cycle
    burst_opacity: float = 1.0
    min_in: float = 0.02
    max_in: float = 0.08
    min_out: float = 0.08
    max_out: float = 0.16
    scale_up: float = 1.35

    def __post_init__(self) -> None:
        require_unit("probability", self.probability)
        require_unit("burst_opacity", self.burst_opacity)
        require_non_negative("min_in", self.min_in)
        require_range("flicker in", self.min_in, self.max_in)
        require_non_negative("min_out", self.min_out)
        require_range("flicker out", self.min_out, self.max_out)
        require_positive("scale_up", self.scale_up)


@dataclass
class StarfieldConfig:
    width: float
    height: float
    count: int = 120
    color: str = "#ffffff"
    min_radius: float = 1.0
    max_radius: float = 2.5
    twinkle: bool = True
    min_opacity: float = 0.35
    max_opacity: float = 0.95
    min_twinkle_duration: float = 0.8
    max_twinkle_duration: float = 1.8
    flicker: StarFlickerConfig = field(default_factory=StarFlickerConfig)

    def __post_init__(self) -> None:
        require_positive("width", self.width)
        require_positive("height", self.height)
        require_positive("count", self.count)
        require_positive("min_radius", self.min_radius)
        require_range("radius", self.min_radius, self.max_radius)
        require_unit("min_opacity", self.min_opacity)
        require_unit("max_opacity", self.max_opacity)
        require_range("opacity", self.min_opacity, self.max_opacity)
        require_non_negative("min_twinkle_duration", self.min_twinkle_duration)
        require_range("twinkle duration", self.min_twinkle_duration, self.max_twinkle_duration)


@dataclass
class Starfield:
    group: Group
    stars: list[Circle] = field(default_factory=list)
    behaviors: list[Behavior] = field(default_factory=list)


def _star_cycle(scheduler: Scheduler, star: Circle, cfg: StarfieldConfig):
    rng = scheduler.random
    fl = cfg.flicker

    def burst() -> list[Step]:
        in_d = uniform(rng, fl.min_in, fl.max_in)
        out_d = uniform(rng, fl.min_out, fl.max_out)
        scale_pulse = chain(star, "scale", [(fl.scale_up, in_d), (1.0, out_d)])
        return sequence(
            # Scale runs beside the opacity burst, not after it.
            spawn(lambda: scale_pulse, name="star-scale"),
            chain(
                star,
                "opacity",
                [(fl.burst_opacity, in_d), (uniform(rng, cfg.min_opacity, cfg.max_opacity), out_d)],
            ),
        )

    def body() -> list[Step]:
        steps: list[Step] = []
        if cfg.twinkle:
            steps += chain(
                star,
                "opacity",
                [
                    (uniform(rng, cfg.min_opacity, cfg.max_opacity),
                     uniform(rng, cfg.min_twinkle_duration, cfg.max_twinkle_duration)),
                    (uniform(rng, cfg.min_opacity, cfg.max_opacity),
                     uniform(rng, cfg.min_twinkle_duration, cfg.max_twinkle_duration)),
                ],
            )
        if fl.enabled and chance(rng, fl.probability):
            steps += burst()
        return steps

    return body


def build_starfield(scheduler: Scheduler, cfg: StarfieldConfig) -> Starfield:
    rng = scheduler.random
    starfield = Starfield(group=Group())
    for i in range(cfg.count):
        radius = uniform(rng, cfg.min_radius, cfg.max_radius)
        star = Circle(
            x=uniform(rng, -cfg.width / 2, cfg.width / 2),
            y=uniform(rng, -cfg.height / 2, cfg.height / 2),
            size=radius * 2,
            fill=cfg.color,
            opacity=uniform(rng, cfg.min_opacity, cfg.max_opacity),
        )
        starfield.group.add(star)
        starfield.stars.append(star)
        if cfg.twinkle or cfg.flicker.enabled:
            starfield.behaviors.append(scheduler.loop(_star_cycle(scheduler, star, cfg), name=f"star-{i}"))
    return starfield
