"""Projectile motion with optional quadratic drag.

Two views of the same physics:

* a static trajectory integrated with a small fixed step until the shell
  comes back to the ground, recomputed whenever a parameter changes;
* an animated flight, started by *Fire*, integrated at 1/60 s sub-steps,
  as many per frame as the accumulated frame time covers, with the
  remainder carried into the next frame.

Both use :func:`integrate_step`.  The ideal no-drag range is reported as a
reference regardless of the drag setting.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from ..core.canvas import Context2D, Surface
from ..core.panel import Panel
from .base import AMBER, Demo, FG, GREEN, MUTED, RED, BLUE

PATH_DT = 0.01
SUB_DT = 1.0 / 60.0
MAX_PATH_STEPS = 100_000


@dataclass
class BodyState:
    x: float = 0.0
    y: float = 0.0
    vx: float = 0.0
    vy: float = 0.0
    t: float = 0.0


@dataclass
class LaunchParams:
    speed: float = 25.0          # m/s
    angle: float = 45.0          # degrees
    gravity: float = 9.81        # m/s²
    drag: float = 0.0            # 1/m

    def initial_state(self) -> BodyState:
        th = math.radians(self.angle)
        return BodyState(0.0, 0.0, self.speed * math.cos(th), self.speed * math.sin(th))


def ideal_range(speed: float, angle_deg: float, gravity: float) -> float:
    """No-drag range ``v₀²·sin(2θ)/g``."""
    return speed * speed * math.sin(2.0 * math.radians(angle_deg)) / gravity


def integrate_step(s: BodyState, h: float, g: float, k: float) -> BodyState:
    """Advance one step of size *h* under gravity and drag ``-k·|v|·v``.

    Positions use the mean of the old and new velocity, which is exact
    for constant acceleration.
    """
    speed = math.hypot(s.vx, s.vy)
    ax = -k * speed * s.vx
    ay = -g - k * speed * s.vy
    vx = s.vx + ax * h
    vy = s.vy + ay * h
    return BodyState(
        s.x + 0.5 * (s.vx + vx) * h,
        s.y + 0.5 * (s.vy + vy) * h,
        vx, vy, s.t + h,
    )


def compute_trajectory(params: LaunchParams, h: float = PATH_DT) -> list[BodyState]:
    """Sampled path until the body returns to the ground after being airborne.

    The last sample is interpolated onto ``y = 0``.
    """
    s = params.initial_state()
    path = [s]
    airborne = False
    for _ in range(MAX_PATH_STEPS):
        nxt = integrate_step(s, h, params.gravity, params.drag)
        if nxt.y > 0.0:
            airborne = True
        if airborne and nxt.y <= 0.0:
            frac = s.y / (s.y - nxt.y) if s.y != nxt.y else 1.0
            path.append(BodyState(
                s.x + (nxt.x - s.x) * frac, 0.0,
                s.vx + (nxt.vx - s.vx) * frac, s.vy + (nxt.vy - s.vy) * frac,
                s.t + h * frac,
            ))
            return path
        path.append(nxt)
        s = nxt
    return path


@dataclass
class Flight:
    state: BodyState = field(default_factory=BodyState)
    trail: list[tuple[float, float]] = field(default_factory=list)
    active: bool = False
    # frame time not yet consumed by a whole sub-step
    accumulator: float = 0.0


class ProjectileSim(Demo):
    canvas_id = "projectile-canvas"
    title = "Projectile"

    def __init__(self, width: float = 800.0, height: float = 480.0) -> None:
        self.width = float(width)
        self.height = float(height)
        self.params = LaunchParams()
        self.path: list[BodyState] = []
        self.flight = Flight()
        self.recompute()
        super().__init__()

    # ------------------------------------------------------------------
    # Physics
    # ------------------------------------------------------------------

    def recompute(self) -> None:
        self.path = compute_trajectory(self.params)

    def set_param(self, name: str, value: float) -> None:
        setattr(self.params, name, float(value))
        if not self.flight.active:
            self.recompute()

    def fire(self) -> None:
        s = self.params.initial_state()
        self.flight = Flight(state=s, trail=[(s.x, s.y)], active=True)

    @property
    def ideal_range(self) -> float:
        p = self.params
        return ideal_range(p.speed, p.angle, p.gravity)

    @property
    def path_range(self) -> float:
        return self.path[-1].x if self.path else 0.0

    def update(self, dt: float) -> None:
        f = self.flight
        if not f.active:
            return
        f.accumulator += dt
        p = self.params
        while f.accumulator >= SUB_DT - 1e-9:
            f.accumulator -= SUB_DT
            f.state = integrate_step(f.state, SUB_DT, p.gravity, p.drag)
            if f.state.y <= 0.0 and f.state.vy < 0.0:
                f.state.y = 0.0
                f.active = False
                f.trail.append((f.state.x, f.state.y))
                self.recompute()
                break
            f.trail.append((f.state.x, f.state.y))

    # ------------------------------------------------------------------
    # Panel & rendering
    # ------------------------------------------------------------------

    def build_panel(self, panel: Panel) -> None:
        p = self.params
        panel.slider("speed", "Launch speed", 5, 60, 1, p.speed, "m/s",
                     lambda v: self.set_param("speed", v))
        panel.slider("angle", "Launch angle", 5, 85, 1, p.angle, "°",
                     lambda v: self.set_param("angle", v))
        panel.slider("gravity", "Gravity", 1, 25, 0.1, p.gravity, "m/s²",
                     lambda v: self.set_param("gravity", v))
        panel.slider("drag", "Drag", 0, 0.2, 0.005, p.drag, "1/m",
                     lambda v: self.set_param("drag", v))
        panel.button("fire", "Fire", self.fire, variant="primary")
        panel.badge("ideal-range", "Ideal range (no drag)")
        panel.badge("range", "Range")
        panel.badge("flight", "Flight")

    def publish(self) -> None:
        p = self.panel
        p.set_badge("ideal-range", f"{self.ideal_range:.1f} m")
        p.set_badge("range", f"{self.path_range:.1f} m")
        p.set_badge("flight", "in flight" if self.flight.active
                    else f"{self.path[-1].t:.2f} s" if self.path else "")

    def _world_scale(self) -> float:
        max_x = max((s.x for s in self.path), default=1.0)
        max_y = max((s.y for s in self.path), default=1.0)
        max_x = max(max_x, self.ideal_range, 1.0)
        usable_w = self.width - 80
        usable_h = self.height - 80
        return min(usable_w / max_x, usable_h / max(max_y, 1.0))

    def render(self, surface: Surface, ctx: Context2D) -> None:
        ctx.clear()
        ground = self.height - 40
        scale = self._world_scale()

        def to_px(x: float, y: float) -> tuple[float, float]:
            return (40 + x * scale, ground - y * scale)

        ctx.line([(0, ground), (self.width, ground)], color=MUTED, width=2)
        ideal_x = to_px(self.ideal_range, 0)[0]
        ctx.line([(ideal_x, ground - 12), (ideal_x, ground + 12)], color=GREEN, width=2)
        ctx.text(ideal_x, ground + 22, "ideal (no drag)", color=GREEN, size=10,
                 anchor="center")

        ctx.line([to_px(s.x, s.y) for s in self.path], color=BLUE, width=2, dash="dot")

        if self.flight.trail:
            ctx.line([to_px(x, y) for x, y in self.flight.trail], color=AMBER, width=2)
            bx, by = to_px(self.flight.state.x, self.flight.state.y)
            ctx.circle((bx, by), 6, fill=RED if self.flight.active else AMBER, stroke=FG)

        th = math.radians(self.params.angle)
        x0, y0 = to_px(0, 0)
        ctx.line([(x0, y0), (x0 + 36 * math.cos(th), y0 - 36 * math.sin(th))],
                 color=FG, width=5)
