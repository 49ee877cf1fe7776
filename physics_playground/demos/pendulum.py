"""Damped pendulum integrated with explicit Euler per frame."""

from __future__ import annotations

import math

from ..core.canvas import Context2D, Surface
from ..core.panel import Panel
from .base import ACCENT, BLUE, Demo, FG, MUTED

KICK = 1.5            # rad/s added by the kick button
INITIAL_ANGLE = 0.6   # rad


def angular_acceleration(theta: float, omega: float, length: float,
                         gravity: float, damping: float) -> float:
    return -(gravity / length) * math.sin(theta) - damping * omega


class PendulumSim(Demo):
    canvas_id = "pendulum-canvas"
    title = "Pendulum"

    def __init__(self, width: float = 800.0, height: float = 480.0,
                 length: float = 1.5, gravity: float = 9.81,
                 damping: float = 0.1) -> None:
        self.width = float(width)
        self.height = float(height)
        self.length = length
        self.gravity = gravity
        self.damping = damping
        self.theta = INITIAL_ANGLE
        self.omega = 0.0
        super().__init__()

    def update(self, dt: float) -> None:
        alpha = angular_acceleration(self.theta, self.omega, self.length,
                                     self.gravity, self.damping)
        self.omega += alpha * dt
        self.theta += self.omega * dt

    def kick(self) -> None:
        self.omega += KICK

    def reset(self) -> None:
        self.theta = INITIAL_ANGLE
        self.omega = 0.0

    @property
    def small_angle_period(self) -> float:
        return 2.0 * math.pi * math.sqrt(self.length / self.gravity)

    @property
    def energy(self) -> float:
        """Mechanical energy per unit mass, zero at rest at the bottom."""
        v = self.length * self.omega
        return 0.5 * v * v + self.gravity * self.length * (1.0 - math.cos(self.theta))

    def _set(self, name: str, value: float) -> None:
        setattr(self, name, float(value))

    def build_panel(self, panel: Panel) -> None:
        panel.slider("length", "Length", 0.5, 3.0, 0.1, self.length, "m",
                     lambda v: self._set("length", v))
        panel.slider("gravity", "Gravity", 1, 25, 0.1, self.gravity, "m/s²",
                     lambda v: self._set("gravity", v))
        panel.slider("damping", "Damping", 0, 1, 0.01, self.damping, "1/s",
                     lambda v: self._set("damping", v))
        panel.button("kick", "Kick", self.kick, variant="primary")
        panel.button("reset", "Reset", self.reset)
        panel.badge("angle", "Angle")
        panel.badge("period", "Period (small angle)")

    def publish(self) -> None:
        self.panel.set_badge("angle", f"{math.degrees(self.theta):.1f}°")
        self.panel.set_badge("period", f"{self.small_angle_period:.2f} s")

    def render(self, surface: Surface, ctx: Context2D) -> None:
        ctx.clear()
        pivot = (self.width / 2, 40.0)
        px_per_m = (self.height - 100) / 3.0
        r = self.length * px_per_m
        bob = (pivot[0] + r * math.sin(self.theta), pivot[1] + r * math.cos(self.theta))
        ctx.line([(pivot[0] - 60, pivot[1]), (pivot[0] + 60, pivot[1])], color=MUTED, width=4)
        ctx.line([pivot, bob], color=FG, width=2)
        ctx.circle(pivot, 4, fill=FG)
        ctx.circle(bob, 16, fill=ACCENT, stroke=BLUE, width=2)
