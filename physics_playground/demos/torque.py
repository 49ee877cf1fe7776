"""Torque-Tycoon: balance a lever so it settles at a target tilt.

Masses sit on the lever's own axis, so the torque is simply
``Σ offset·mass·g``.  The displayed angle does not solve the rigid-body
equations; it relaxes exponentially towards ``torque / stiffness`` which
reads as a damped settling lever.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable

from ..core.canvas import Context2D, Surface
from ..core.panel import Panel
from ..core.rng import RandomStream
from ..core.vector import Vector2
from .base import ACCENT, AMBER, BLUE, Demo, FG, GREEN, MUTED, RED

GRAVITY = 9.81
STIFFNESS = 2.0e5
RELAX_RATE = 3.0
MAX_TILT = 0.6
TOLERANCE = 0.02
TARGET_RANGE = 0.25


@dataclass
class LeverMass:
    offset: float
    mass: float
    fixed: bool = False


def compute_torque(masses: Iterable[LeverMass], g: float = GRAVITY) -> float:
    return sum(m.offset * m.mass * g for m in masses)


def relax(angle: float, equilibrium: float, dt: float,
          rate: float = RELAX_RATE) -> float:
    """Exponential smoothing of *angle* towards *equilibrium*."""
    t = 1.0 - math.exp(-dt * rate)
    return angle + (equilibrium - angle) * t


class TorqueTycoon(Demo):
    canvas_id = "torque-canvas"
    title = "Torque-Tycoon"

    def __init__(self, width: float = 800.0, height: float = 480.0,
                 seed: int = 1337) -> None:
        self.width = float(width)
        self.height = float(height)
        self.rng = RandomStream(seed ^ 0x70C0E)
        self.g = GRAVITY
        self.angle = 0.0
        self.target_angle = 0.0
        self.selected_mass = 10.0
        self.masses: list[LeverMass] = []
        self._layout()
        self.new_round()
        super().__init__()

    def _layout(self) -> None:
        self.pivot = Vector2(self.width / 2, self.height * 0.55)
        self.half_length = min(self.width * 0.4, 320.0)

    # ------------------------------------------------------------------
    # Game state
    # ------------------------------------------------------------------

    def new_round(self) -> None:
        """Pick a new target angle and a new fixed handicap mass."""
        self.target_angle = self.rng.uniform(-TARGET_RANGE, TARGET_RANGE)
        side = self.rng.choice((-1.0, 1.0))
        offset = side * self.rng.uniform(0.3, 0.8) * self.half_length
        self.masses = [LeverMass(offset, float(self.rng.randint(10, 25)), fixed=True)]
        self.angle = 0.0

    def add_mass(self, mass: float | None = None) -> LeverMass:
        m = LeverMass(0.0, float(mass if mass is not None else self.selected_mass))
        self.masses.append(m)
        return m

    def clear_masses(self) -> None:
        self.masses = [m for m in self.masses if m.fixed]

    def move_mass(self, index: int, offset: float) -> bool:
        """Slide mass *index* along the lever; fixed masses refuse."""
        if not 0 <= index < len(self.masses):
            return False
        m = self.masses[index]
        if m.fixed:
            return False
        m.offset = max(-self.half_length, min(self.half_length, offset))
        return True

    def lever_offset(self, x: float, y: float) -> float:
        """Project a canvas point onto the lever axis."""
        axis = Vector2.from_angle(self.angle)
        return (Vector2(x, y) - self.pivot).dot(axis)

    def handle_drag(self, name: str, x: float, y: float) -> None:
        if name.startswith("mass-"):
            self.move_mass(int(name.split("-", 1)[1]), self.lever_offset(x, y))

    @property
    def torque(self) -> float:
        return compute_torque(self.masses, self.g)

    @property
    def equilibrium_angle(self) -> float:
        return max(-MAX_TILT, min(MAX_TILT, self.torque / STIFFNESS))

    @property
    def balanced(self) -> bool:
        return abs(self.angle - self.target_angle) < TOLERANCE

    def update(self, dt: float) -> None:
        self.angle = relax(self.angle, self.equilibrium_angle, dt)

    def on_resize(self, surface: Surface, ctx: Context2D) -> None:
        super().on_resize(surface, ctx)
        self._layout()
        for m in self.masses:
            m.offset = max(-self.half_length, min(self.half_length, m.offset))

    # ------------------------------------------------------------------
    # Panel & rendering
    # ------------------------------------------------------------------

    def _set_selected(self, value: float) -> None:
        self.selected_mass = value

    def build_panel(self, panel: Panel) -> None:
        panel.slider("mass", "Mass", 1, 50, 1, self.selected_mass, "kg",
                     self._set_selected)
        panel.button("add", "Add mass", lambda: self.add_mass(), variant="primary")
        panel.button("clear", "Clear masses", self.clear_masses)
        panel.button("new-target", "New target", self.new_round)
        panel.badge("torque", "Torque")
        panel.badge("angle", "Angle")
        panel.badge("target", "Target")
        panel.badge("status", "Status")

    def publish(self) -> None:
        p = self.panel
        p.set_badge("torque", f"{self.torque:.0f}")
        p.set_badge("angle", f"{math.degrees(self.angle):.1f}°")
        p.set_badge("target", f"{math.degrees(self.target_angle):.1f}°")
        p.set_badge("status", "Balanced!" if self.balanced else "Adjust the masses")

    def render(self, surface: Surface, ctx: Context2D) -> None:
        ctx.clear()
        axis = Vector2.from_angle(self.angle)
        normal = axis.perpendicular()
        end_l = self.pivot - axis * self.half_length
        end_r = self.pivot + axis * self.half_length

        target_axis = Vector2.from_angle(self.target_angle)
        ctx.line([self.pivot - target_axis * self.half_length,
                  self.pivot + target_axis * self.half_length],
                 color=GREEN if self.balanced else MUTED, width=1.5, dash="dash")

        ctx.line([end_l, end_r], color=FG, width=6)
        base = self.pivot + Vector2(0, 40)
        ctx.polygon([self.pivot, base + Vector2(-24, 0), base + Vector2(24, 0)],
                    fill=ACCENT)

        for i, m in enumerate(self.masses):
            r = 8.0 + 2.0 * math.sqrt(m.mass)
            c = self.pivot + axis * m.offset - normal * (r + 3)
            ctx.circle(c, r, fill=RED if m.fixed else BLUE, stroke=FG,
                       name=f"mass-{i}", editable=not m.fixed)
            ctx.text(c.x, c.y, f"{m.mass:.0f}", color=FG, size=11, anchor="center")

        ctx.text(12, 20, f"τ = {self.torque:.0f}", color=AMBER, size=13)
        if self.balanced:
            ctx.text(self.width / 2, 40, "Balanced!", color=GREEN, size=22,
                     anchor="center")
