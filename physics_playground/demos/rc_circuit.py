"""RC circuit charge/discharge with the analytic exponential law."""

from __future__ import annotations

import math

from ..core.canvas import Context2D, Surface
from ..core.panel import Panel
from .base import AMBER, BLUE, Demo, FG, GREEN, MUTED, RED

SCOPE_TAUS = 5.0


def capacitor_voltage(t: float, resistance: float, capacitance: float,
                      supply: float, charging: bool) -> float:
    """``V·(1 − e^(−t/RC))`` when charging, ``V·e^(−t/RC)`` otherwise."""
    tau = resistance * capacitance
    decay = math.exp(-t / tau) if tau > 0 else 0.0
    return supply * (1.0 - decay) if charging else supply * decay


class RCCircuitSim(Demo):
    canvas_id = "rc-canvas"
    title = "RC Circuit"

    def __init__(self, width: float = 800.0, height: float = 480.0,
                 resistance_kohm: float = 10.0, capacitance_uf: float = 100.0,
                 supply: float = 5.0) -> None:
        self.width = float(width)
        self.height = float(height)
        self.resistance_kohm = resistance_kohm
        self.capacitance_uf = capacitance_uf
        self.supply = supply
        self.elapsed = 0.0
        self.charging = True
        super().__init__()

    @property
    def tau(self) -> float:
        """Time constant in seconds."""
        return self.resistance_kohm * 1e3 * self.capacitance_uf * 1e-6

    def voltage(self, t: float | None = None) -> float:
        return capacitor_voltage(
            self.elapsed if t is None else t,
            self.resistance_kohm * 1e3, self.capacitance_uf * 1e-6,
            self.supply, self.charging,
        )

    def update(self, dt: float) -> None:
        self.elapsed += dt

    def toggle(self) -> None:
        self.charging = not self.charging
        self.elapsed = 0.0
        self.panel.set_label("toggle", "Discharge" if self.charging else "Charge")

    def reset(self) -> None:
        self.elapsed = 0.0

    def _set(self, name: str, value: float) -> None:
        setattr(self, name, float(value))

    def build_panel(self, panel: Panel) -> None:
        panel.slider("resistance", "Resistance", 1, 100, 1, self.resistance_kohm, "kΩ",
                     lambda v: self._set("resistance_kohm", v))
        panel.slider("capacitance", "Capacitance", 10, 1000, 10, self.capacitance_uf, "µF",
                     lambda v: self._set("capacitance_uf", v))
        panel.slider("supply", "Supply", 1, 12, 0.5, self.supply, "V",
                     lambda v: self._set("supply", v))
        panel.button("toggle", "Discharge" if self.charging else "Charge",
                     self.toggle, variant="primary")
        panel.button("reset", "Reset", self.reset)
        panel.badge("vc", "Vc")
        panel.badge("tau", "τ = RC")
        panel.badge("mode", "Mode")

    def publish(self) -> None:
        self.panel.set_badge("vc", f"{self.voltage():.2f} V")
        self.panel.set_badge("tau", f"{self.tau:.2f} s")
        self.panel.set_badge("mode", "charging" if self.charging else "discharging")

    def render(self, surface: Surface, ctx: Context2D) -> None:
        ctx.clear()
        w, h = self.width, self.height

        # Schematic: series loop of battery, resistor and capacitor
        left, right, top, bottom = 40.0, w * 0.38, h * 0.25, h * 0.75
        wire = GREEN if self.charging else MUTED
        ctx.line([(left, bottom), (left, top), (right, top), (right, bottom),
                  (left, bottom)], color=wire, width=2)
        ctx.rect(left - 14, (top + bottom) / 2 - 20, 28, 40, fill="#111118", stroke=FG)
        ctx.text(left + 20, (top + bottom) / 2, f"{self.supply:g} V", color=FG, size=11)
        rx = (left + right) / 2
        ctx.rect(rx - 30, top - 10, 60, 20, fill="#111118", stroke=AMBER)
        ctx.text(rx, top - 22, f"{self.resistance_kohm:g} kΩ", color=AMBER, size=11,
                 anchor="center")
        cy = (top + bottom) / 2
        ctx.rect(right - 20, cy - 8, 40, 4, fill=BLUE)
        ctx.rect(right - 20, cy + 4, 40, 4, fill=BLUE)
        fill = self.voltage() / self.supply if self.supply else 0.0
        ctx.rect(right + 30, cy + 30 - 60 * fill, 10, 60 * fill, fill=BLUE)
        ctx.text(right + 48, cy, f"{self.capacitance_uf:g} µF", color=BLUE, size=11)

        # Scope
        sx, sy, sw, sh = w * 0.48, h * 0.15, w * 0.48, h * 0.7
        ctx.rect(sx, sy, sw, sh, stroke=MUTED)
        window = SCOPE_TAUS * self.tau
        n = 120
        pts = []
        for i in range(n + 1):
            t = window * i / n
            v = self.voltage(t)
            pts.append((sx + sw * i / n, sy + sh - sh * v / max(self.supply, 1e-9)))
        ctx.line(pts, color=BLUE, width=2)
        t_now = min(self.elapsed, window)
        mx = sx + sw * (t_now / window if window > 0 else 0.0)
        my = sy + sh - sh * self.voltage() / max(self.supply, 1e-9)
        ctx.circle((mx, my), 5, fill=RED)
        ctx.text(sx, sy - 10, f"Vc over {SCOPE_TAUS:g}τ", color=FG, size=11)
