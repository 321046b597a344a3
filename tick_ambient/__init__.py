"""tick-ambient - Procedural ambient-scene animation on a cooperative tick scheduler."""

from tick_ambient.behavior import Behavior, BehaviorState
from tick_ambient.clock import Clock
from tick_ambient.drawables import Circle, Drawable, Group, Polyline, Text
from tick_ambient.lifecycle import attach, detach, ephemeral, spawn_ephemeral
from tick_ambient.rand import SequenceRandom
from tick_ambient.scene import Scene
from tick_ambient.scheduler import Scheduler
from tick_ambient.signal import PhaseSignal, fract
from tick_ambient.tween import EASINGS, call, chain, sequence, spawn, tween, wait
from tick_ambient.types import ConfigError, LifecycleError, RandomSource

__all__ = [
    "Scene",
    "Scheduler",
    "Behavior",
    "BehaviorState",
    "Clock",
    "Drawable",
    "Circle",
    "Polyline",
    "Text",
    "Group",
    "PhaseSignal",
    "fract",
    "EASINGS",
    "wait",
    "tween",
    "call",
    "spawn",
    "chain",
    "sequence",
    "attach",
    "detach",
    "ephemeral",
    "spawn_ephemeral",
    "SequenceRandom",
    "RandomSource",
    "ConfigError",
    "LifecycleError",
]
