"""Home-page backdrop: seeded particles drifting and linking up."""

from __future__ import annotations

import math
from dataclasses import dataclass

from ..core.canvas import Context2D, Surface
from ..core.rng import RandomStream
from ..core.vector import Vector2
from .base import ACCENT, Demo

LINK_RANGE = 110.0
PARTICLE_SPEED = 28.0


@dataclass
class Particle:
    position: Vector2
    velocity: Vector2


class AmbientField(Demo):
    canvas_id = "home-canvas"
    title = "Physics Playground"

    def __init__(self, width: float = 800.0, height: float = 320.0,
                 seed: int = 1337, count: int = 36) -> None:
        self.width = float(width)
        self.height = float(height)
        self.seed = seed
        self.count = count
        self.particles: list[Particle] = []
        self.scatter()
        super().__init__()

    def scatter(self) -> None:
        rng = RandomStream(self.seed)
        self.particles = [
            Particle(
                Vector2(rng.uniform(0, self.width), rng.uniform(0, self.height)),
                Vector2.from_angle(rng.uniform(0, math.tau),
                                   rng.uniform(0.3, 1.0) * PARTICLE_SPEED),
            )
            for _ in range(self.count)
        ]

    def update(self, dt: float) -> None:
        for p in self.particles:
            x, y = p.position + p.velocity * dt
            vx, vy = p.velocity
            if not 0 <= x <= self.width:
                vx = -vx
                x = min(max(x, 0.0), self.width)
            if not 0 <= y <= self.height:
                vy = -vy
                y = min(max(y, 0.0), self.height)
            p.position = Vector2(x, y)
            p.velocity = Vector2(vx, vy)

    def links(self) -> list[tuple[int, int, float]]:
        """Pairs closer than the link range, with their distance."""
        out = []
        for i, a in enumerate(self.particles):
            for j in range(i + 1, len(self.particles)):
                d = a.position.distance_to(self.particles[j].position)
                if d < LINK_RANGE:
                    out.append((i, j, d))
        return out

    def on_resize(self, surface: Surface, ctx: Context2D) -> None:
        super().on_resize(surface, ctx)
        self.scatter()

    def render(self, surface: Surface, ctx: Context2D) -> None:
        ctx.clear()
        for i, j, d in self.links():
            alpha = 0.5 * (1.0 - d / LINK_RANGE)
            ctx.line([self.particles[i].position, self.particles[j].position],
                     color=f"rgba(124,92,252,{alpha:.2f})", width=1)
        for p in self.particles:
            ctx.circle(p.position, 2.5, fill=ACCENT)
