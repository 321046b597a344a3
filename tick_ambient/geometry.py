"""Procedural geometry generators.

Pure functions: every random draw goes through the ``RandomSource`` passed in.
"""
from __future__ import annotations

import math
from typing import Sequence

from tick_ambient.rand import uniform
from tick_ambient.types import ConfigError, Point, RandomSource, RidgePoint

RIDGE_QUANTUM = 0.02
RING_JITTER = 0.05
CRACK_BIAS = 10.0

_SNAP_TOLERANCE = 1e-9
_SPAN_TOLERANCE = 1e-6


def snap(value: float, quantum: float) -> float:
    return round(value / quantum) * quantum


def _snapped_bounds(lo: float, hi: float, quantum: float) -> tuple[float, float] | None:
    """Multiples of ``quantum`` nearest the inside of [lo, hi], or None if none fit."""
    first = math.ceil(lo / quantum - _SNAP_TOLERANCE) * quantum
    last = math.floor(hi / quantum + _SNAP_TOLERANCE) * quantum
    if first > last + _SNAP_TOLERANCE:
        return None
    return first, last


def generate_ridge(
    count: int,
    min_ratio: float,
    max_ratio: float,
    rng: RandomSource,
    quantum: float = RIDGE_QUANTUM,
) -> list[RidgePoint]:
    """Blocky ridge profile of ``count + 1`` points spanning x ratio [-0.5, 0.5].

    Heights are drawn uniformly from [min_ratio, max_ratio] and snapped to the
    nearest multiple of ``quantum``. A snapped value that falls outside the
    range is pulled back to the nearest in-range multiple when one exists.
    """
    if count <= 0:
        raise ConfigError(f"ridge sample count must be positive, got {count}")
    if min_ratio > max_ratio:
        raise ConfigError(f"ridge range inverted: {min_ratio} > {max_ratio}")
    if quantum <= 0:
        raise ConfigError(f"ridge quantum must be positive, got {quantum}")

    bounds = _snapped_bounds(min_ratio, max_ratio, quantum)
    profile: list[RidgePoint] = []
    for i in range(count + 1):
        x_ratio = -0.5 + i / count
        h = snap(uniform(rng, min_ratio, max_ratio), quantum)
        if bounds is not None:
            h = min(max(h, bounds[0]), bounds[1])
        profile.append((x_ratio, h))
    return profile


def validate_ridge(ridge: Sequence[Sequence[float]]) -> list[RidgePoint]:
    if len(ridge) < 2:
        raise ConfigError("a ridge needs at least two points")
    profile = [(float(p[0]), float(p[1])) for p in ridge]
    for (x0, _), (x1, _) in zip(profile, profile[1:]):
        if x1 < x0:
            raise ConfigError(f"ridge x ratios must be non-decreasing ({x0} then {x1})")
    first, last = profile[0][0], profile[-1][0]
    if abs(first + 0.5) > _SPAN_TOLERANCE or abs(last - 0.5) > _SPAN_TOLERANCE:
        raise ConfigError(f"ridge must span x ratios -0.5 to 0.5, got {first} to {last}")
    return profile


def ridge_polygon(
    profile: Sequence[RidgePoint],
    width: float,
    height: float,
    base_y: float,
    bottom_y: float,
) -> list[Point]:
    """Scale a profile and close it along the baseline and the frame bottom."""
    points: list[Point] = [(xr * width, base_y + yr * height) for xr, yr in profile]
    half = width / 2
    points.append((half, base_y))
    points.append((half, bottom_y))
    points.append((-half, bottom_y))
    return points


def ring_point(radius: float, angle: float, squash: float) -> Point:
    return (math.cos(angle) * radius, math.sin(angle) * radius * squash)


def ring_layout(
    radius: float,
    squash: float,
    count: int,
    rng: RandomSource,
    jitter: float = RING_JITTER,
) -> list[Point]:
    """``count`` points spread evenly around an ellipse, each angle jittered."""
    if count <= 0:
        raise ConfigError(f"ring particle count must be positive, got {count}")
    points = []
    for i in range(count):
        angle = (i / count) * math.tau + uniform(rng, -jitter, jitter)
        points.append(ring_point(radius, angle, squash))
    return points


def disk_point(radius: float, rng: RandomSource) -> Point:
    """Uniform point inside a disk (square-root radius keeps the center sparse)."""
    theta = rng.random() * math.tau
    r = math.sqrt(rng.random()) * radius
    return (math.cos(theta) * r, math.sin(theta) * r)


def crack_path(
    radius: float, segments: int, rng: RandomSource, bias: float = CRACK_BIAS
) -> list[Point]:
    """Jagged polyline inside a disk.

    Each new vertex is averaged with the previous one plus a small random
    offset so a crack stays spatially coherent instead of jumping across.
    """
    if segments <= 0:
        raise ConfigError(f"crack segments must be positive, got {segments}")
    points: list[Point] = []
    for s in range(segments):
        x, y = disk_point(radius, rng)
        if s > 0:
            px, py = points[-1]
            x = (x + px + uniform(rng, -bias, bias)) / 2
            y = (y + py + uniform(rng, -bias, bias)) / 2
        points.append((x, y))
    return points


def rail_lines(
    width: float, bottom_y: float, vanishing: Point, count: int, bottom_width_factor: float
) -> list[list[Point]]:
    """Static rails from the floor edge to the vanishing point, ``2 * count + 1`` of them."""
    rails = []
    for i in range(-count, count + 1):
        x_bottom = (i / count) * width * bottom_width_factor
        rails.append([(x_bottom, bottom_y), vanishing])
    return rails


def depth_line_y(p: float, horizon_y: float, bottom_y: float, exponent: float) -> float:
    return horizon_y + (bottom_y - horizon_y) * p**exponent


def depth_line_half_width(p: float, width: float, min_ratio: float, extra_ratio: float) -> float:
    return width * (min_ratio + extra_ratio * p)


def sun_stripes(radius: float, gap: float) -> list[tuple[float, float]]:
    """``(y, half_width)`` chords cut across a disk every ``gap`` units."""
    if gap <= 0:
        raise ConfigError(f"stripe gap must be positive, got {gap}")
    stripes = []
    y = -radius + gap
    while y < radius:
        half = math.sqrt(max(0.0, radius * radius - y * y))
        if half >= 1:
            stripes.append((y, half))
        y += gap
    return stripes
