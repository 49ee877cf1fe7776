"""Two-source wave interference.

The intensity at each grid cell is ``0.5 + 0.5·cos(k·(r₁ − r₂) − ω·t)``
where ``r₁``, ``r₂`` are the distances to the two sources.  The path
difference is used rather than the sum so that any point equidistant from
the sources is at full brightness when t = 0, whatever the wavelength.  The
price is that ``ω·t`` is a uniform phase: the fringes pulse in place instead
of travelling outward, and the speed slider sets how fast they pulse.

The whole field is recomputed every frame with numpy on a grid whose cell
size is the render step.
"""

from __future__ import annotations

import math

import numpy as np

from ..core.canvas import Context2D, Surface
from ..core.panel import Panel
from .base import Demo, FG

# Colour ramp endpoints (dark → bright)
_LOW = np.array([10, 10, 30], dtype=float)
_HIGH = np.array([124, 200, 252], dtype=float)


def wave_numbers(wavelength: float, speed: float) -> tuple[float, float]:
    """``(k, ω)`` for the given wavelength and propagation speed."""
    k = 2.0 * math.pi / wavelength
    return k, k * speed


def intensity_field(
    xs: np.ndarray,
    ys: np.ndarray,
    sources: tuple[tuple[float, float], tuple[float, float]],
    wavelength: float,
    speed: float,
    t: float,
) -> np.ndarray:
    """Intensity in ``[0, 1]`` on the grid spanned by *xs* × *ys*.

    Returns an array of shape ``(len(ys), len(xs))``.
    """
    k, omega = wave_numbers(wavelength, speed)
    gx, gy = np.meshgrid(xs, ys)
    (x1, y1), (x2, y2) = sources
    r1 = np.hypot(gx - x1, gy - y1)
    r2 = np.hypot(gx - x2, gy - y2)
    return 0.5 + 0.5 * np.cos(k * (r1 - r2) - omega * t)


def intensity_at(x: float, y: float, sources, wavelength: float,
                 speed: float, t: float) -> float:
    return float(intensity_field(np.array([x]), np.array([y]), sources,
                                 wavelength, speed, t)[0, 0])


def colorize(intensity: np.ndarray) -> np.ndarray:
    """Map intensities to an ``(rows, cols, 3)`` uint8 image."""
    rgb = _LOW + intensity[..., None] * (_HIGH - _LOW)
    return rgb.astype(np.uint8)


class WaveInterferenceSim(Demo):
    canvas_id = "wave-canvas"
    title = "Wave Interference"

    def __init__(self, width: float = 800.0, height: float = 480.0,
                 wavelength: float = 30.0, spacing: float = 80.0,
                 speed: float = 60.0, step: int = 4) -> None:
        self.width = float(width)
        self.height = float(height)
        self.wavelength = wavelength
        self.spacing = spacing
        self.speed = speed
        self.step = max(1, int(step))
        self.elapsed = 0.0
        self.field = np.zeros((1, 1))
        super().__init__()

    @property
    def sources(self) -> tuple[tuple[float, float], tuple[float, float]]:
        cx, cy = self.width / 2, self.height / 2
        half = self.spacing / 2
        return (cx - half, cy), (cx + half, cy)

    def grid(self) -> tuple[np.ndarray, np.ndarray]:
        """Cell-centre coordinates of the render grid."""
        xs = np.arange(0.0, self.width, self.step) + self.step / 2
        ys = np.arange(0.0, self.height, self.step) + self.step / 2
        return xs, ys

    def update(self, dt: float) -> None:
        self.elapsed += dt
        xs, ys = self.grid()
        self.field = intensity_field(xs, ys, self.sources, self.wavelength,
                                     self.speed, self.elapsed)

    def _set(self, name: str, value: float) -> None:
        setattr(self, name, float(value))

    def build_panel(self, panel: Panel) -> None:
        panel.slider("wavelength", "Wavelength", 10, 80, 1, self.wavelength, "px",
                     lambda v: self._set("wavelength", v))
        panel.slider("spacing", "Source spacing", 20, 200, 2, self.spacing, "px",
                     lambda v: self._set("spacing", v))
        panel.slider("speed", "Speed", 10, 200, 5, self.speed, "px/s",
                     lambda v: self._set("speed", v))

    def render(self, surface: Surface, ctx: Context2D) -> None:
        ctx.clear("#000000")
        ctx.image(colorize(self.field), 0.0, 0.0, cell=self.step)
        for sx, sy in self.sources:
            ctx.circle((sx, sy), 5, fill="#ffffff", stroke=FG)
