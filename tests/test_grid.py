"""Tests for the perspective grid floor and its phase loop."""

import pytest
from tick_ambient import ConfigError, LifecycleError, PhaseSignal, Scene, Scheduler, SequenceRandom
from tick_ambient.effects import GridFloorConfig, build_grid_floor, phase_loop
from tick_ambient.effects.grid import DepthLine


def make_cfg(**overrides) -> GridFloorConfig:
    values = dict(
        width=800.0,
        bottom_y=300.0,
        horizon_y=0.0,
        vanishing_x=0.0,
        stroke="#ff00ff",
        glow="#00ffff",
        vertical_count=4,
        horizontal_count=4,
        h_width_min=0.35,
        h_width_max_extra=1.1,
        line_base_width=1.0,
        line_grow_width=3.0,
        line_width_growth_power=2.0,
        flow_duration=2.0,
        glow_alt_frequency=2.0,
        perspective_exponent=2.0,
    )
    values.update(overrides)
    return GridFloorConfig(**values)


class TestPhaseFlow:
    def test_phase_advances_exactly_one_per_flow_duration(self):
        scene = Scene(fps=60, random=SequenceRandom([0.5]))
        floor = build_grid_floor(scene.scheduler, make_cfg(flow_duration=2.0))

        scene.run_for(2.0)
        assert floor.phase.value == pytest.approx(1.0, abs=1e-9)
        scene.run_for(2.0)
        assert floor.phase.value == pytest.approx(2.0, abs=1e-9)

    def test_phase_exact_with_uneven_ticks(self):
        sched = Scheduler(SequenceRandom([0.5]))
        floor = build_grid_floor(sched, make_cfg(flow_duration=1.5))
        for dt in (0.7, 0.1, 0.3, 0.4):
            sched.tick(dt)
        assert floor.phase.value == pytest.approx(1.0)

    def test_phase_halfway(self):
        sched = Scheduler(SequenceRandom([0.5]))
        floor = build_grid_floor(sched, make_cfg(flow_duration=2.0))
        sched.tick(1.0)
        assert floor.phase.value == 0.5

    def test_phase_has_single_writer(self):
        sched = Scheduler(SequenceRandom([0.5]))
        floor = build_grid_floor(sched, make_cfg())
        assert floor.phase.owner == "grid-flow"
        with pytest.raises(LifecycleError):
            phase_loop(sched, floor.phase, 1.0, name="second-writer")


class TestGeometry:
    def test_rails_converge_on_vanishing_point(self):
        floor = build_grid_floor(Scheduler(SequenceRandom([0.5])), make_cfg(vanishing_x=40.0))
        assert len(floor.rails) == 9
        assert all(r.points[1] == (40.0, 0.0) for r in floor.rails)
        assert {r.points[0][1] for r in floor.rails} == {300.0}

    def test_depth_line_projection(self):
        cfg = make_cfg()
        phase = PhaseSignal(0.25)
        line = DepthLine(cfg, phase, 0)
        (x0, y0), (x1, y1) = line.points()
        assert (x0, x1) == (pytest.approx(-500.0), pytest.approx(500.0))
        assert y0 == y1 == 18.75
        assert line.line_width() == pytest.approx(1.0 + 3.0 * 0.0625)
        # Glow phase fract(0.25 * 2) = 0.5 is not below 0.5.
        assert line.stroke() == "#00ffff"

    def test_depth_lines_are_offset_by_index(self):
        cfg = make_cfg()
        phase = PhaseSignal(0.0)
        progress = [DepthLine(cfg, phase, i).progress() for i in range(4)]
        assert progress == [0.0, 0.25, 0.5, 0.75]

    def test_lines_follow_phase_each_tick(self):
        scene = Scene(fps=4, random=SequenceRandom([0.5]))
        floor = build_grid_floor(scene.scheduler, make_cfg(flow_duration=1.0))
        scene.root.add(floor.group)
        first = floor.depth_lines[0]
        assert first.points[0][1] == 0.0  # on the horizon at phase 0

        scene.step()  # phase 0.25
        assert first.points[0][1] == pytest.approx(300.0 * 0.25**2)
        assert first.stroke == "#00ffff"

        scene.step()  # phase 0.5
        assert first.points[0][1] == pytest.approx(300.0 * 0.5**2)
        assert first.stroke == "#ff00ff"

    def test_stroke_alternates_with_glow_frequency(self):
        cfg = make_cfg(glow_alt_frequency=1.0)
        phase = PhaseSignal(0.1)
        line = DepthLine(cfg, phase, 0)
        assert line.stroke() == "#ff00ff"
        phase.value = 0.6
        assert line.stroke() == "#00ffff"


class TestConfig:
    @pytest.mark.parametrize(
        "field,value",
        [
            ("flow_duration", 0.0),
            ("flow_duration", -1.0),
            ("horizontal_count", 0),
            ("vertical_count", -2),
            ("width", 0.0),
        ],
    )
    def test_rejects_out_of_range(self, field, value):
        with pytest.raises(ConfigError):
            make_cfg(**{field: value})
