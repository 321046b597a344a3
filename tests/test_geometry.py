"""Tests for procedural geometry generators."""

import math
import random

import pytest
from tick_ambient import ConfigError, SequenceRandom
from tick_ambient.geometry import (
    crack_path,
    depth_line_half_width,
    depth_line_y,
    disk_point,
    generate_ridge,
    rail_lines,
    ridge_polygon,
    ring_layout,
    sun_stripes,
    validate_ridge,
)


def _is_multiple(value: float, quantum: float) -> bool:
    ratio = value / quantum
    return abs(ratio - round(ratio)) < 1e-6


class TestRidge:
    """Ridge profiles and their closed polygons."""

    @pytest.mark.parametrize("count", [1, 5, 20, 64])
    def test_point_count_and_span(self, count):
        profile = generate_ridge(count, -0.18, -0.04, random.Random(count))
        assert len(profile) == count + 1
        xs = [x for x, _ in profile]
        assert xs == sorted(xs)
        assert xs[0] == -0.5
        assert xs[-1] == pytest.approx(0.5)

    def test_heights_snapped_and_in_range(self):
        rng = random.Random(11)
        for _ in range(50):
            for _, h in generate_ridge(20, -0.18, -0.04, rng):
                assert -0.18 - 1e-9 <= h <= -0.04 + 1e-9
                assert _is_multiple(h, 0.02)

    def test_snapping_pulled_back_inside_range(self):
        """-0.171 rounds to -0.18, which is outside; nearest inside multiple is -0.16."""
        profile = generate_ridge(2, -0.171, -0.139, SequenceRandom([0.0]))
        assert all(h == pytest.approx(-0.16) for _, h in profile)

    def test_custom_quantum(self):
        profile = generate_ridge(10, 0.0, 1.0, random.Random(2), quantum=0.25)
        assert all(_is_multiple(h, 0.25) for _, h in profile)

    def test_polygon_scaling_and_closure(self):
        profile = generate_ridge(20, -0.18, -0.04, random.Random(4))
        width, height, base_y, bottom_y = 1000.0, 500.0, 100.0, 300.0
        points = ridge_polygon(profile, width, height, base_y, bottom_y)

        assert len(points) == len(profile) + 3
        ridge = points[: len(profile)]
        assert ridge[0][0] == -500.0
        assert ridge[-1][0] == pytest.approx(500.0)
        for _, y in ridge:
            offset = y - base_y
            assert -0.18 * height - 1e-6 <= offset <= -0.04 * height + 1e-6
            assert _is_multiple(offset, 0.02 * height)
        assert points[-3:] == [(500.0, 100.0), (500.0, 300.0), (-500.0, 300.0)]

    def test_invalid_parameters(self):
        rng = random.Random(0)
        with pytest.raises(ConfigError):
            generate_ridge(0, -0.1, 0.0, rng)
        with pytest.raises(ConfigError):
            generate_ridge(10, 0.1, -0.1, rng)
        with pytest.raises(ConfigError):
            generate_ridge(10, -0.1, 0.0, rng, quantum=0.0)

    def test_explicit_ridge_must_be_monotonic(self):
        assert validate_ridge([[-0.5, 0.0], [0.5, -0.1]]) == [(-0.5, 0.0), (0.5, -0.1)]
        with pytest.raises(ConfigError):
            validate_ridge([[0.0, 0.0], [-0.1, 0.0]])
        with pytest.raises(ConfigError):
            validate_ridge([[0.0, 0.0]])

    def test_explicit_ridge_must_span_full_width(self):
        assert validate_ridge([[-0.5, 0.0], [0.1, -0.2], [0.5000001, -0.1]])[-1] == (0.5000001, -0.1)
        with pytest.raises(ConfigError, match="span"):
            validate_ridge([[-0.4, 0.0], [0.5, -0.1]])
        with pytest.raises(ConfigError, match="span"):
            validate_ridge([[-0.5, 0.0], [0.25, -0.1]])


class TestDiskSampler:
    def test_samples_stay_inside(self):
        rng = random.Random(1234)
        radius = 37.5
        for _ in range(100_000):
            x, y = disk_point(radius, rng)
            assert math.hypot(x, y) <= radius + 1e-9

    def test_density_not_concentrated_at_center(self):
        """Innermost 10% of area gets roughly 10% of samples, not ~32%."""
        rng = random.Random(99)
        radius = 10.0
        inner = radius * math.sqrt(0.1)
        n = 100_000
        hits = sum(1 for _ in range(n) if math.hypot(*disk_point(radius, rng)) <= inner)
        assert 0.08 < hits / n < 0.12


class TestRingLayout:
    def test_points_lie_on_ellipse(self):
        squash = math.cos(math.radians(18))
        points = ring_layout(100.0, squash, 56, random.Random(8))
        assert len(points) == 56
        for x, y in points:
            assert (x / 100.0) ** 2 + (y / (100.0 * squash)) ** 2 == pytest.approx(1.0)

    def test_even_spacing_without_jitter(self):
        # 0.5 maps to zero jitter.
        points = ring_layout(10.0, 1.0, 4, SequenceRandom([0.5]))
        expected = [(10.0, 0.0), (0.0, 10.0), (-10.0, 0.0), (0.0, -10.0)]
        for (x, y), (ex, ey) in zip(points, expected):
            assert x == pytest.approx(ex, abs=1e-9)
            assert y == pytest.approx(ey, abs=1e-9)

    def test_jitter_bounded(self):
        points = ring_layout(10.0, 1.0, 8, random.Random(3), jitter=0.05)
        for i, (x, y) in enumerate(points):
            angle = math.atan2(y, x) % math.tau
            nominal = i / 8 * math.tau
            delta = (angle - nominal + math.pi) % math.tau - math.pi
            assert abs(delta) <= 0.05 + 1e-9

    def test_count_must_be_positive(self):
        with pytest.raises(ConfigError):
            ring_layout(10.0, 1.0, 0, random.Random(0))


class TestCracks:
    def test_segment_count(self):
        assert len(crack_path(50.0, 4, random.Random(1))) == 4

    def test_vertices_stay_near_disk(self):
        rng = random.Random(21)
        for _ in range(200):
            for x, y in crack_path(50.0, 5, rng, bias=10.0):
                assert math.hypot(x, y) <= 50.0 + 10.0 * math.sqrt(2)

    def test_rejects_empty_crack(self):
        with pytest.raises(ConfigError):
            crack_path(50.0, 0, random.Random(0))


def test_rail_lines_meet_at_vanishing_point():
    rails = rail_lines(800.0, 300.0, (0.0, 0.0), 4, 1.5)
    assert len(rails) == 9
    assert all(r[1] == (0.0, 0.0) for r in rails)
    assert rails[0][0] == (-1200.0, 300.0)
    assert rails[4][0] == (0.0, 300.0)


def test_depth_line_projection():
    assert depth_line_y(0.0, 10.0, 110.0, 2.0) == 10.0
    assert depth_line_y(0.5, 10.0, 110.0, 2.0) == 35.0
    assert depth_line_y(1.0, 10.0, 110.0, 2.0) == 110.0
    assert depth_line_half_width(0.5, 100.0, 0.2, 0.6) == pytest.approx(50.0)


def test_sun_stripes_are_chords():
    stripes = sun_stripes(50.0, 10.0)
    assert [y for y, _ in stripes] == [-40.0, -30.0, -20.0, -10.0, 0.0, 10.0, 20.0, 30.0, 40.0]
    for y, half in stripes:
        assert half == pytest.approx(math.sqrt(50.0**2 - y**2))
