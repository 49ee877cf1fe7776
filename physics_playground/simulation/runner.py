"""Frame scheduler: one :class:`CanvasRunner` per canvas.

The runner owns a :class:`~physics_playground.core.canvas.Surface`, keeps a
running/stopped flag and its own last-frame timestamp, and calls a draw
callback once per display refresh while running.  The display refresh is
whatever calls :meth:`CanvasRunner.tick`: a ``dcc.Interval`` in the Dash
shell, a ``FuncAnimation`` in the matplotlib previews, or a test.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Any, Callable

from ..core.canvas import Context2D, Surface

logger = logging.getLogger(__name__)

MAX_FRAME_DT = 0.05

DrawFn = Callable[[Surface, Context2D, float], Any]
ResizeFn = Callable[[Surface, Context2D], Any]


class CanvasRunner:
    """Starts/stops per-frame draw callbacks and computes a clamped dt.

    ``dt`` passed to the draw callback is ``min(MAX_FRAME_DT, now - last)``
    seconds and never negative.  Skipped frames are not replayed.
    """

    def __init__(
        self,
        surface: Surface,
        draw: DrawFn,
        on_resize: ResizeFn | None = None,
        clock: Callable[[], float] = time.perf_counter,
        name: str = "",
    ) -> None:
        self.surface = surface
        self.draw = draw
        self.on_resize = on_resize or (lambda surface, ctx: None)
        self.clock = clock
        self.name = name
        self.running = False
        self.last_frame_time = 0.0
        self.frame_count = 0
        self.last_figure: Any = None
        self._frame_pending = False
        # Guards the runner and the demo it drives.
        self.lock = threading.RLock()
        self.resize()

    @property
    def context(self) -> Context2D:
        return self.surface.context

    def resize(
        self,
        width: float | None = None,
        height: float | None = None,
        pixel_ratio: float | None = None,
    ) -> None:
        """Re-derive the backing size and notify the resize callback."""
        with self.lock:
            self.surface.apply_size(width, height, pixel_ratio)
            ctx = self.surface.context
            ctx.reset_transform()
            if self.surface.pixel_ratio != 1.0:
                ctx.scale(self.surface.pixel_ratio)
            logger.debug("%s resized to %r", self.name or "runner", self.surface)
            self.on_resize(self.surface, ctx)

    def set_running(self, run: bool) -> None:
        with self.lock:
            if run and not self.running:
                self.running = True
                self.last_frame_time = self.clock()
                self._frame_pending = True
                logger.debug("%s started", self.name or "runner")
            elif not run and self.running:
                self.running = False
                self._frame_pending = False
                logger.debug("%s stopped", self.name or "runner")

    @property
    def frame_pending(self) -> bool:
        return self._frame_pending

    def tick(self, now: float | None = None) -> Any:
        """Run one frame if one is pending; returns the rendered figure.

        Returns ``None`` without calling the draw callback when stopped.
        """
        with self.lock:
            if not self.running or not self._frame_pending:
                return None
            self._frame_pending = False
            if now is None:
                now = self.clock()
            dt = min(MAX_FRAME_DT, max(0.0, now - self.last_frame_time))
            self.last_frame_time = now

            ctx = self.surface.context
            ctx.begin_frame()
            self.draw(self.surface, ctx, dt)
            self.frame_count += 1
            self.last_figure = ctx.to_figure()

            if self.running:
                self._frame_pending = True
            return self.last_figure
