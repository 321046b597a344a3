"""Tests for ephemeral entities: attach, animate out, remove exactly once."""

import random

import pytest
from tick_ambient import (
    Circle,
    ConfigError,
    Group,
    LifecycleError,
    Scene,
    Scheduler,
    SequenceRandom,
    ephemeral,
    spawn_ephemeral,
    tween,
    wait,
)
from tick_ambient.effects import DeadStarConfig, EmberConfig, build_dead_star


def make_scheduler() -> Scheduler:
    return Scheduler(SequenceRandom([0.5]))


class TestEphemeral:
    def test_attach_animate_remove(self):
        sched = make_scheduler()
        parent = Group()
        dot = Circle(size=2.0, opacity=1.0)
        spawn_ephemeral(sched, parent, dot, 1.0, opacity=0.0, size=6.0)

        sched.tick(0.5)
        assert parent.contains(dot)
        assert dot.opacity == 0.5
        assert dot.size == 4.0

        sched.tick(0.5)
        assert not parent.contains(dot)
        assert dot.removed
        assert dot.opacity == 0.0
        assert dot.size == 6.0

    def test_removed_within_the_tick_its_fade_completes(self):
        sched = make_scheduler()
        parent = Group()
        dot = Circle()
        spawn_ephemeral(sched, parent, dot, 0.3, opacity=0.0)
        sched.tick(1.0)
        assert len(parent) == 0
        assert len(sched) == 0

    def test_requires_terminal_animation(self):
        with pytest.raises(ConfigError):
            ephemeral(Group(), Circle(), 1.0)

    def test_rejects_negative_lifetime(self):
        with pytest.raises(ConfigError):
            ephemeral(Group(), Circle(), -1.0, opacity=0.0)

    def test_teardown_mid_fade_releases_drawable(self):
        scene = Scene(fps=10, random=SequenceRandom([0.5]))
        dot = Circle()
        spawn_ephemeral(scene.scheduler, scene.root, dot, 5.0, opacity=0.0)
        scene.run(3)
        assert scene.root.contains(dot)

        scene.teardown()
        assert dot.removed
        assert not scene.root.contains(dot)
        assert len(scene.scheduler) == 0


class TestRemovalGuards:
    def test_double_removal_raises(self):
        parent = Group()
        dot = Circle()
        parent.add(dot)
        parent.remove(dot)
        with pytest.raises(LifecycleError):
            parent.remove(dot)

    def test_mutation_after_removal_raises(self):
        sched = make_scheduler()
        parent = Group()
        dot = Circle()
        parent.add(dot)
        sched.spawn(lambda: [tween(dot, 1.0, opacity=0.0)])
        sched.tick(0.5)
        parent.remove(dot)
        with pytest.raises(LifecycleError):
            sched.tick(0.1)

    def test_removed_drawable_cannot_be_reused(self):
        parent = Group()
        dot = Circle()
        parent.add(dot)
        parent.remove(dot)
        with pytest.raises(LifecycleError):
            parent.add(dot)


class TestEmbers:
    """Ember cadence: wait, appear on the ring, grow and fade, disappear."""

    def make_star(self, sched):
        cfg = DeadStarConfig(
            center=(0.0, 0.0),
            radius=50.0,
            halo_layers=0,
            crack_count=0,
            embers=EmberConfig(enabled=True, min_delay=1.0, max_delay=1.0, fade_seconds=0.5),
        )
        return build_dead_star(sched, cfg)

    def test_one_ember_per_cycle(self):
        sched = Scheduler(random.Random(7))
        star = self.make_star(sched)

        seen = {}
        alive_counts = []
        for _ in range(18):  # 4.5 simulated seconds
            sched.tick(0.25)
            alive = star.embers
            alive_counts.append(len(alive))
            for ember in alive:
                seen[ember.id] = ember

        assert len(seen) == 3
        assert max(alive_counts) == 1
        assert star.embers == []
        for ember in seen.values():
            assert ember.removed
            assert not star.group.contains(ember)

    def test_ember_grows_while_fading(self):
        sched = Scheduler(random.Random(7))
        star = self.make_star(sched)
        for _ in range(4):
            sched.tick(0.25)
        (ember,) = star.embers
        assert ember.opacity == pytest.approx(0.9)
        assert ember.size == pytest.approx(2.0)

        sched.tick(0.25)
        # Half way through a 0.5s fade toward size max(4, 2 * 50 * 0.18) = 18.
        assert ember.opacity == pytest.approx(0.45)
        assert ember.size == pytest.approx(10.0)

        sched.tick(0.25)
        assert star.embers == []
        assert ember.removed

    def test_disabled_embers_never_spawn(self):
        sched = Scheduler(random.Random(7))
        star = build_dead_star(sched, DeadStarConfig(center=(0.0, 0.0), radius=20.0, crack_count=0))
        for _ in range(100):
            sched.tick(0.5)
        assert star.embers == []

    def test_inverted_delay_range_rejected(self):
        with pytest.raises(ConfigError):
            EmberConfig(enabled=True, min_delay=3.0, max_delay=1.0)


def test_wait_then_ephemeral_in_one_behavior():
    """A loop that owns its entity blocks until the entity is gone."""
    sched = make_scheduler()
    parent = Group()
    created = []

    def body():
        dot = Circle()
        created.append(dot)
        return [wait(1.0), *ephemeral(parent, dot, 1.0, opacity=0.0)]

    sched.loop(body)
    for _ in range(8):
        sched.tick(0.5)
    # Cycles end at t=2 and t=4; the third dot is built but not yet attached.
    assert len(created) == 3
    assert [d.removed for d in created] == [True, True, False]
    assert len(parent) == 0
