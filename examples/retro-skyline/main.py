"""
Retro Skyline
Synthwave ambient scene built from tick-ambient effects, rendered with pygame.
"""

import argparse
import logging
import math
import sys

import pygame

from tick_ambient import Circle, Drawable, Group, Polyline, Scene, Text
from tick_ambient.effects import (
    DeadStarConfig,
    EmberConfig,
    FlickerConfig,
    GridFloorConfig,
    ShootingStarConfig,
    SkylineConfig,
    StarfieldConfig,
    StarFlickerConfig,
    StripedSunConfig,
    TitleConfig,
    build_dead_star,
    build_grid_floor,
    build_shooting_star,
    build_skyline,
    build_starfield,
    build_striped_sun,
    build_title,
)

# --- Configuration ---
WIDTH, HEIGHT = 1280, 720
FPS = 60
TITLE = "tick-ambient Retro Skyline"

HORIZON_Y = 90.0
BG_COLOR = (10, 4, 22)
HUD_COLOR = (200, 200, 220)

# A transform is (x, y, scale, rotation in radians) in screen space.
Transform = tuple[float, float, float, float]


def build_scene(seed: int | None) -> Scene:
    scene = Scene(fps=FPS, seed=seed, name="retro-skyline")
    sched = scene.scheduler
    root = scene.root

    root.add(build_starfield(sched, StarfieldConfig(
        width=WIDTH,
        height=HEIGHT - 2 * HORIZON_Y,
        count=140,
        flicker=StarFlickerConfig(enabled=True),
    )).group)
    root.add(build_striped_sun(sched, StripedSunConfig(
        radius=150.0,
        color="#ff7a18",
        center=(0.0, HORIZON_Y - 90.0),
        background="#0a0416",
        animate_pulse=True,
    )).group)
    root.add(build_dead_star(sched, DeadStarConfig(
        center=(-WIDTH * 0.3, -HEIGHT * 0.22),
        radius=46.0,
        embers=EmberConfig(enabled=True),
    )).group)
    root.add(build_shooting_star(sched, ShootingStarConfig(
        width=WIDTH,
        height=HEIGHT,
        sky_bottom_y=HORIZON_Y - 160.0,
    )).group)
    root.add(build_skyline(SkylineConfig(
        color="#1b0b33",
        width=WIDTH,
        height=HEIGHT,
        base_y=HORIZON_Y,
        bottom_y=HORIZON_Y + 2,
    ), scene.random))
    root.add(build_grid_floor(sched, GridFloorConfig(
        width=WIDTH,
        horizon_y=HORIZON_Y,
        bottom_y=HEIGHT / 2,
    )).group)
    root.add(build_title(sched, TitleConfig(
        text="NEON CITY",
        y=-HEIGHT * 0.36,
        flicker=FlickerConfig(),
    )).group)
    return scene


# --- Rendering ---

def parse_color(value: str | None) -> pygame.Color | None:
    if value is None:
        return None
    return pygame.Color(value)


def fade(color: pygame.Color, opacity: float) -> tuple[int, int, int]:
    """Blend toward the background; cheap stand-in for per-shape alpha."""
    a = min(max(opacity, 0.0), 1.0)
    return tuple(int(c * a + b * (1 - a)) for c, b in zip((color.r, color.g, color.b), BG_COLOR))


def compose(parent: Transform, d: Drawable) -> Transform:
    x, y = apply(parent, (d.x, d.y))
    return (x, y, parent[2] * d.scale, parent[3] + math.radians(d.rotation))


def apply(t: Transform, point: tuple[float, float]) -> tuple[float, float]:
    ox, oy, s, r = t
    x, y = point
    cos_r, sin_r = math.cos(r), math.sin(r)
    return (ox + (x * cos_r - y * sin_r) * s, oy + (x * sin_r + y * cos_r) * s)


class Renderer:
    def __init__(self, screen: pygame.Surface) -> None:
        self.screen = screen
        self.fonts: dict[tuple[str, int], pygame.font.Font] = {}

    def font(self, family: str, size: float) -> pygame.font.Font:
        key = (family, int(size))
        if key not in self.fonts:
            self.fonts[key] = pygame.font.SysFont(family, int(size))
        return self.fonts[key]

    def draw(self, root: Group) -> None:
        origin = (WIDTH / 2, HEIGHT / 2, 1.0, 0.0)
        self._draw_group(root, origin, 1.0)

    def _draw_group(self, group: Group, parent: Transform, opacity: float) -> None:
        for child in group.children.values():
            alpha = opacity * child.opacity
            if alpha <= 0.0:
                continue
            t = compose(parent, child)
            if isinstance(child, Group):
                self._draw_group(child, t, alpha)
            elif isinstance(child, Circle):
                self._draw_circle(child, t, alpha)
            elif isinstance(child, Polyline):
                self._draw_polyline(child, t, alpha)
            elif isinstance(child, Text):
                self._draw_text(child, t, alpha)

    def _draw_circle(self, c: Circle, t: Transform, alpha: float) -> None:
        radius = max(1, int(c.size / 2 * t[2]))
        center = (int(t[0]), int(t[1]))
        fill = parse_color(c.fill)
        if fill is not None:
            pygame.draw.circle(self.screen, fade(fill, alpha), center, radius)
        stroke = parse_color(c.stroke)
        if stroke is not None:
            pygame.draw.circle(self.screen, fade(stroke, alpha), center, radius, max(1, int(c.line_width)))

    def _draw_polyline(self, p: Polyline, t: Transform, alpha: float) -> None:
        if len(p.points) < 2:
            return
        # The drawable's own offset is already in ``t``; points are local to it.
        points = [apply(t, pt) for pt in p.points]
        fill = parse_color(p.fill)
        if fill is not None and p.closed and len(points) >= 3:
            pygame.draw.polygon(self.screen, fade(fill, alpha), points)
        stroke = parse_color(p.stroke)
        if stroke is not None:
            width = max(1, int(p.line_width * t[2]))
            pygame.draw.lines(self.screen, fade(stroke, alpha), p.closed, points, width)

    def _draw_text(self, text: Text, t: Transform, alpha: float) -> None:
        fill = parse_color(text.fill) or pygame.Color(255, 255, 255)
        surf = self.font(text.font_family, text.font_size * t[2]).render(text.text, True, fade(fill, alpha))
        rect = surf.get_rect()
        if text.text_align == "center":
            rect.center = (int(t[0]), int(t[1]))
        elif text.text_align == "right":
            rect.midright = (int(t[0]), int(t[1]))
        else:
            rect.midleft = (int(t[0]), int(t[1]))
        self.screen.blit(surf, rect)


def main():
    parser = argparse.ArgumentParser(description="Retro Skyline - tick-ambient synthwave scene")
    parser.add_argument("--seed", "-s", type=int, default=None,
                        help="RNG seed for a reproducible scene (default: random)")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Log scheduler activity at debug level")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="%(asctime)s %(name)s %(levelname)s: %(message)s")

    pygame.init()
    screen = pygame.display.set_mode((WIDTH, HEIGHT))
    pygame.display.set_caption(TITLE)
    pg_clock = pygame.time.Clock()
    hud_font = pygame.font.SysFont("monospace", 14)

    scene = build_scene(args.seed)
    renderer = Renderer(screen)

    paused = False
    running = True

    while running:
        dt = pg_clock.tick(FPS) / 1000.0

        # --- Events ---
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_SPACE:
                    paused = not paused
                elif event.key == pygame.K_r:
                    scene.teardown()
                    scene = build_scene(args.seed)

        # --- Update ---
        if not paused:
            # Clamp long frames (window drags) so tweens don't jump.
            scene.step(min(dt, 0.1))

        # --- Draw ---
        screen.fill(BG_COLOR)
        renderer.draw(scene.root)

        # --- HUD ---
        pause_str = "  [PAUSED]" if paused else ""
        hud_lines = [
            f"Behaviors: {len(scene.scheduler)}   FPS: {pg_clock.get_fps():.0f}{pause_str}",
            "Space=Pause  R=Rebuild  Esc=Quit",
        ]
        for i, line in enumerate(hud_lines):
            surf = hud_font.render(line, True, HUD_COLOR)
            screen.blit(surf, (10, 8 + i * 20))

        pygame.display.flip()

    scene.teardown()
    pygame.quit()
    sys.exit()


if __name__ == "__main__":
    main()
