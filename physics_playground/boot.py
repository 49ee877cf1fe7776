"""Boot entry point: build every demo, its runner and the visibility controller.

:func:`boot` is called once when the page structure is known.  Demos whose
canvas is not part of the page are skipped.  Only the initially visible
canvas is started.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable

from .config import Settings
from .core.canvas import Surface
from .core.panel import Panel
from .demos.ambient import AmbientField
from .demos.base import Demo
from .demos.glider import SpaceGlider
from .demos.mirror import MirrorMadness
from .demos.pendulum import PendulumSim
from .demos.projectile import ProjectileSim
from .demos.rc_circuit import RCCircuitSim
from .demos.torque import TorqueTycoon
from .demos.wave import WaveInterferenceSim
from .simulation.runner import CanvasRunner
from .simulation.visibility import (
    ALL_CANVASES, AMBIENT, GLIDER, MIRROR, PENDULUM, PROJECTILE, RC_CIRCUIT,
    TORQUE, WAVE, VisibilityController,
)

logger = logging.getLogger(__name__)

INITIAL_TAB = "home"
AMBIENT_HEIGHT = 320.0

DEMO_FACTORIES: dict[str, Callable[[Settings], Demo]] = {
    AMBIENT: lambda s: AmbientField(s.canvas_width, AMBIENT_HEIGHT, seed=s.seed),
    GLIDER: lambda s: SpaceGlider(s.canvas_width, s.canvas_height, seed=s.seed),
    TORQUE: lambda s: TorqueTycoon(s.canvas_width, s.canvas_height, seed=s.seed),
    MIRROR: lambda s: MirrorMadness(s.canvas_width, s.canvas_height),
    PROJECTILE: lambda s: ProjectileSim(s.canvas_width, s.canvas_height),
    PENDULUM: lambda s: PendulumSim(s.canvas_width, s.canvas_height),
    RC_CIRCUIT: lambda s: RCCircuitSim(s.canvas_width, s.canvas_height),
    WAVE: lambda s: WaveInterferenceSim(s.canvas_width, s.canvas_height,
                                        step=s.wave_step),
}


@dataclass
class Site:
    """Everything :func:`boot` wired together."""

    settings: Settings
    controller: VisibilityController
    demos: dict[str, Demo] = field(default_factory=dict)

    def runner(self, canvas_id: str) -> CanvasRunner:
        return self.controller.runner(canvas_id)

    def panel(self, canvas_id: str) -> Panel:
        return self.demos[canvas_id].panel

    def activate(self, tab: str | None, subtab: str | None = None) -> None:
        self.controller.activate(tab, subtab)

    def tick(self, canvas_id: str, now: float | None = None,
             keys: Iterable[str] | None = None) -> Any:
        """Advance one frame of *canvas_id*; ``None`` when it is stopped."""
        runner = self.runner(canvas_id)
        with runner.lock:
            if keys is not None:
                self.demos[canvas_id].handle_keys(frozenset(keys))
            return runner.tick(now)

    def resize(self, width: float, height: float | None = None) -> None:
        for cid in self.controller.canvas_ids():
            self.runner(cid).resize(width, height)

    def set_value(self, canvas_id: str, key: str, value: float) -> float:
        with self.runner(canvas_id).lock:
            return self.panel(canvas_id).set_value(key, value)

    def click(self, canvas_id: str, key: str) -> None:
        with self.runner(canvas_id).lock:
            self.panel(canvas_id).click(key)

    def drag(self, canvas_id: str, name: str, x: float, y: float) -> None:
        with self.runner(canvas_id).lock:
            self.demos[canvas_id].handle_drag(name, x, y)


def boot(
    settings: Settings | None = None,
    available: Iterable[str] | None = None,
    clock: Callable[[], float] = time.perf_counter,
) -> Site:
    """Wire all demos present in *available* (default: all of them)."""
    settings = settings or Settings()
    present = set(ALL_CANVASES if available is None else available)
    site = Site(settings=settings, controller=VisibilityController())

    for cid in ALL_CANVASES:
        if cid not in present:
            logger.debug("canvas %s not on the page, skipping", cid)
            continue
        demo = DEMO_FACTORIES[cid](settings)
        surface = Surface(demo.width, demo.height, settings.pixel_ratio)
        runner = CanvasRunner(surface, demo.draw, demo.on_resize,
                              clock=clock, name=cid)
        site.demos[cid] = demo
        site.controller.register(cid, runner)

    site.activate(INITIAL_TAB)
    logger.info("booted %d demos, running %s", len(site.demos),
                sorted(site.controller.running_ids()))
    return site
