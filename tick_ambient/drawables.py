"""Drawable primitives consumed by an external renderer.

Drawables carry resolved numeric and color state only. A ``Group`` owns its
children through a mapping from stable drawable id to drawable, so removing an
entity only clears one mapping entry and never invalidates other children.
"""
from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator

from tick_ambient.types import LifecycleError, Point

_ids = itertools.count(1)


@dataclass(eq=False)
class Drawable:
    x: float = 0.0
    y: float = 0.0
    opacity: float = 1.0
    rotation: float = 0.0  # degrees
    scale: float = 1.0
    fill: str | None = None
    stroke: str | None = None
    line_width: float = 0.0
    id: int = field(default_factory=lambda: next(_ids), init=False)
    parent: Group | None = field(default=None, init=False, repr=False)
    removed: bool = field(default=False, init=False, repr=False)
    bindings: dict[str, Callable[[], Any]] = field(
        default_factory=dict, init=False, repr=False
    )

    @property
    def position(self) -> Point:
        return (self.x, self.y)

    @position.setter
    def position(self, value: Point) -> None:
        self.x, self.y = value

    @property
    def attached(self) -> bool:
        return self.parent is not None

    def bind(self, name: str, fn: Callable[[], Any]) -> None:
        """Recompute ``name`` from ``fn()`` on every resolve pass."""
        if not hasattr(self, name):
            raise AttributeError(f"{type(self).__name__} has no field {name!r}")
        self.bindings[name] = fn
        setattr(self, name, fn())

    def resolve(self) -> None:
        for name, fn in self.bindings.items():
            setattr(self, name, fn())


@dataclass(eq=False)
class Circle(Drawable):
    size: float = 0.0  # diameter


@dataclass(eq=False)
class Polyline(Drawable):
    points: list[Point] = field(default_factory=list)
    closed: bool = False


@dataclass(eq=False)
class Text(Drawable):
    text: str = ""
    font_family: str = "sans-serif"
    font_size: float = 16.0
    text_align: str = "center"


@dataclass(eq=False)
class Group(Drawable):
    children: dict[int, Drawable] = field(default_factory=dict, init=False, repr=False)

    def add(self, child: Drawable) -> Drawable:
        if child.removed:
            raise LifecycleError(child.id, f"Drawable {child.id} was already removed")
        if child.parent is not None:
            raise LifecycleError(
                child.id, f"Drawable {child.id} already belongs to group {child.parent.id}"
            )
        self.children[child.id] = child
        child.parent = self
        return child

    def remove(self, child: Drawable) -> None:
        if self.children.pop(child.id, None) is None:
            raise LifecycleError(
                child.id, f"Drawable {child.id} is not a child of group {self.id}"
            )
        child.parent = None
        child.removed = True

    def contains(self, child: Drawable) -> bool:
        return child.id in self.children

    def clear(self) -> None:
        """Detach every descendant."""
        for child in list(self.children.values()):
            if isinstance(child, Group):
                child.clear()
            child.parent = None
            child.removed = True
        self.children.clear()

    def resolve(self) -> None:
        super().resolve()
        for child in list(self.children.values()):
            child.resolve()

    def walk(self, opacity: float = 1.0) -> Iterator[tuple[Drawable, float]]:
        """Yield ``(drawable, effective_opacity)`` depth-first in draw order."""
        for child in list(self.children.values()):
            effective = opacity * child.opacity
            yield child, effective
            if isinstance(child, Group):
                yield from child.walk(effective)

    def __len__(self) -> int:
        return len(self.children)
