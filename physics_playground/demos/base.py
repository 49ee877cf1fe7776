"""Common shape of every canvas demo."""

from __future__ import annotations

from ..core.canvas import Context2D, Surface
from ..core.panel import Panel

# Shared palette
BG = "#0a0a0f"
FG = "#e8eaed"
MUTED = "#5f6368"
ACCENT = "#7c5cfc"
GREEN = "#34d399"
RED = "#f87171"
BLUE = "#60a5fa"
AMBER = "#fbbf24"


class Demo:
    """Base class for games and simulations.

    Subclasses own their state and implement :meth:`update` and
    :meth:`render`.  :meth:`draw` is the runner's per-frame callback and
    :meth:`on_resize` its resize callback.

    Subclasses set up their state first and call ``super().__init__()``
    last, since building the panel reads the initial parameter values.
    """

    canvas_id = ""
    title = ""
    width = 800.0
    height = 480.0

    def __init__(self) -> None:
        self.panel = Panel(self.canvas_id)
        self.build_panel(self.panel)

    # ── Runner callbacks ────────────────────────────────────────────

    def draw(self, surface: Surface, ctx: Context2D, dt: float) -> None:
        self.update(dt)
        self.render(surface, ctx)
        self.publish()

    def on_resize(self, surface: Surface, ctx: Context2D) -> None:
        self.width = surface.width
        self.height = surface.height

    # ── Hooks ───────────────────────────────────────────────────────

    def build_panel(self, panel: Panel) -> None:
        """Populate *panel* with this demo's controls."""

    def update(self, dt: float) -> None:
        raise NotImplementedError

    def render(self, surface: Surface, ctx: Context2D) -> None:
        raise NotImplementedError

    def publish(self) -> None:
        """Push status text into badges."""

    def handle_keys(self, keys: frozenset[str]) -> None:
        """Receive the set of currently held keys."""

    def handle_drag(self, name: str, x: float, y: float) -> None:
        """A named shape was dragged to logical point ``(x, y)``."""
