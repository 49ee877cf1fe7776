"""Mirror-Madness: rotate mirrors until the light beam hits every target.

The beam is traced by bounded-depth recursion: intersect the ray with
every mirror segment, keep the nearest hit, reflect about the mirror
normal and continue from the hit point.  A ray that hits nothing is
extended a long way and the trace stops.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from ..core.canvas import Context2D, Surface
from ..core.panel import Panel
from ..core.vector import Vector2
from .base import AMBER, BLUE, Demo, FG, GREEN, MUTED, RED

EPS = 1e-9
MAX_BOUNCES = 8
RAY_FAR = 4000.0


@dataclass
class Mirror:
    center: Vector2
    angle: float
    length: float

    def endpoints(self) -> tuple[Vector2, Vector2]:
        half = Vector2.from_angle(self.angle, self.length / 2)
        return self.center - half, self.center + half

    def normal(self) -> Vector2:
        return Vector2.from_angle(self.angle).perpendicular()


@dataclass
class Target:
    position: Vector2
    radius: float
    hit: bool = False


@dataclass
class LightSource:
    position: Vector2
    direction: Vector2 = field(default_factory=lambda: Vector2(1.0, 0.0))


def intersect_ray_segment(
    origin: Vector2, direction: Vector2, a: Vector2, b: Vector2,
) -> tuple[float, float] | None:
    """Solve ``origin + t·direction = a + u·(b - a)``.

    Returns ``(t, u)`` for ``t >= 0`` and ``0 <= u <= 1``, or ``None`` when
    the ray misses or runs (nearly) parallel to the segment.
    """
    seg = b - a
    det = direction.cross(seg)
    if abs(det) < EPS:
        return None
    rel = a - origin
    t = rel.cross(seg) / det
    u = rel.cross(direction) / det
    if t < 0.0 or u < 0.0 or u > 1.0:
        return None
    return t, u


def reflect(direction: Vector2, normal: Vector2) -> Vector2:
    """``d - 2(d·n)n`` with *normal* normalized first."""
    n = normal.normalized()
    return direction - n * (2.0 * direction.dot(n))


def trace_ray(
    origin: Vector2,
    direction: Vector2,
    mirrors: list[Mirror],
    max_bounces: int = MAX_BOUNCES,
) -> list[Vector2]:
    """Bounce path starting at *origin*, as an ordered list of points."""
    path = [origin]
    _trace(origin, direction.normalized(), mirrors, max_bounces, None, path)
    return path


def _trace(
    origin: Vector2,
    direction: Vector2,
    mirrors: list[Mirror],
    depth_left: int,
    skip: int | None,
    path: list[Vector2],
) -> None:
    best_t = math.inf
    best: int | None = None
    for i, m in enumerate(mirrors):
        if i == skip:
            continue
        a, b = m.endpoints()
        hit = intersect_ray_segment(origin, direction, a, b)
        if hit is not None and hit[0] < best_t:
            best_t, best = hit[0], i

    if best is None:
        path.append(origin + direction * RAY_FAR)
        return

    point = origin + direction * best_t
    path.append(point)
    if depth_left <= 1:
        return
    bounced = reflect(direction, mirrors[best].normal())
    _trace(point, bounced, mirrors, depth_left - 1, best, path)


def point_segment_distance(p: Vector2, a: Vector2, b: Vector2) -> float:
    ab = b - a
    denom = ab.length_sq()
    if denom < EPS:
        return p.distance_to(a)
    t = max(0.0, min(1.0, (p - a).dot(ab) / denom))
    return p.distance_to(a + ab * t)


def path_hits(path: list[Vector2], target: Target) -> bool:
    return any(
        point_segment_distance(target.position, path[i], path[i + 1]) <= target.radius
        for i in range(len(path) - 1)
    )


# Layout as fractions of the canvas: (cx, cy, default angle in degrees)
_MIRROR_LAYOUT = [
    (0.32, 0.50, 30.0),
    (0.32, 0.15, -20.0),
    (0.70, 0.15, 60.0),
    (0.70, 0.80, 10.0),
]
_TARGET_LAYOUT = [(0.88, 0.45), (0.50, 0.92)]


class MirrorMadness(Demo):
    canvas_id = "mirror-canvas"
    title = "Mirror-Madness"

    mirror_length = 90.0
    target_radius = 16.0

    def __init__(self, width: float = 800.0, height: float = 480.0) -> None:
        self.width = float(width)
        self.height = float(height)
        self.default_angles = [math.radians(a) for _, _, a in _MIRROR_LAYOUT]
        self.mirrors: list[Mirror] = []
        self.targets: list[Target] = []
        self.source = LightSource(Vector2(0.0, 0.0))
        self.path: list[Vector2] = []
        self._layout(self.default_angles)
        self.trace()
        super().__init__()

    def _layout(self, angles: list[float]) -> None:
        w, h = self.width, self.height
        self.mirrors = [
            Mirror(Vector2(cx * w, cy * h), angle, self.mirror_length)
            for (cx, cy, _), angle in zip(_MIRROR_LAYOUT, angles)
        ]
        self.targets = [Target(Vector2(tx * w, ty * h), self.target_radius)
                        for tx, ty in _TARGET_LAYOUT]
        self.source = LightSource(Vector2(0.04 * w, 0.5 * h), Vector2(1.0, 0.0))

    # ------------------------------------------------------------------
    # Game state
    # ------------------------------------------------------------------

    def trace(self) -> list[Vector2]:
        """Rebuild the bounce path and the target hit flags."""
        self.path = trace_ray(self.source.position, self.source.direction,
                              self.mirrors)
        for t in self.targets:
            t.hit = path_hits(self.path, t)
        return self.path

    def set_mirror_angle(self, index: int, degrees: float) -> None:
        self.mirrors[index].angle = math.radians(degrees)
        self.trace()

    def reset(self) -> None:
        for m, angle in zip(self.mirrors, self.default_angles):
            m.angle = angle
        for t in self.targets:
            t.hit = False
        self.trace()

    @property
    def hit_count(self) -> int:
        return sum(1 for t in self.targets if t.hit)

    @property
    def solved(self) -> bool:
        return bool(self.targets) and all(t.hit for t in self.targets)

    def update(self, dt: float) -> None:
        self.trace()

    def on_resize(self, surface: Surface, ctx: Context2D) -> None:
        super().on_resize(surface, ctx)
        self._layout([m.angle for m in self.mirrors] or self.default_angles)
        self.trace()

    # ------------------------------------------------------------------
    # Panel & rendering
    # ------------------------------------------------------------------

    def build_panel(self, panel: Panel) -> None:
        for i, (_, _, deg) in enumerate(_MIRROR_LAYOUT):
            panel.slider(f"mirror-{i}", f"Mirror {i + 1}", -90, 90, 1, deg, "°",
                         lambda v, i=i: self.set_mirror_angle(i, v))
        panel.button("reset", "Reset", self.reset, variant="danger")
        panel.badge("targets", "Targets lit")
        panel.badge("status", "Status")

    def publish(self) -> None:
        self.panel.set_badge("targets", f"{self.hit_count}/{len(self.targets)}")
        self.panel.set_badge("status", "All targets lit!" if self.solved else "Aim the beam")

    def render(self, surface: Surface, ctx: Context2D) -> None:
        ctx.clear("#07070d")
        for t in self.targets:
            ctx.circle(t.position, t.radius, fill=GREEN if t.hit else "rgba(0,0,0,0)",
                       stroke=GREEN if t.hit else MUTED, width=2)
        ctx.line(self.path, color=AMBER, width=2.5)
        for m in self.mirrors:
            a, b = m.endpoints()
            ctx.line([a, b], color=BLUE, width=5)
        ctx.circle(self.source.position, 9, fill=RED, stroke=FG)
        if self.solved:
            ctx.text(self.width / 2, 24, "All targets lit!", color=GREEN, size=20,
                     anchor="center")
