"""Tab → canvas mapping and the controller that starts/stops runners.

The mapping is a single static table.  Each top-level tab maps to either a
fixed set of canvases (home, about) or to a group whose secondary tabs each
select exactly one canvas (games, simulations).
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Union

from .runner import CanvasRunner

logger = logging.getLogger(__name__)


# ── Canvas identifiers ─────────────────────────────────────────────────

AMBIENT = "home-canvas"
GLIDER = "glider-canvas"
TORQUE = "torque-canvas"
MIRROR = "mirror-canvas"
PROJECTILE = "projectile-canvas"
PENDULUM = "pendulum-canvas"
RC_CIRCUIT = "rc-canvas"
WAVE = "wave-canvas"

ALL_CANVASES = (AMBIENT, GLIDER, TORQUE, MIRROR, PROJECTILE, PENDULUM,
                RC_CIRCUIT, WAVE)


@dataclass(frozen=True)
class FixedCanvases:
    """Tab that always runs the same canvases."""

    canvases: tuple[str, ...] = ()


@dataclass(frozen=True)
class SelectableCanvas:
    """Tab whose secondary tab picks one canvas out of *options*."""

    options: dict[str, str] = field(default_factory=dict)
    default: str = ""


TabCanvases = Union[FixedCanvases, SelectableCanvas]

TAB_CANVASES: dict[str, TabCanvases] = {
    "home": FixedCanvases((AMBIENT,)),
    "games": SelectableCanvas(
        options={"glider": GLIDER, "torque": TORQUE, "mirror": MIRROR},
        default="glider",
    ),
    "simulations": SelectableCanvas(
        options={
            "projectile": PROJECTILE,
            "pendulum": PENDULUM,
            "rc": RC_CIRCUIT,
            "wave": WAVE,
        },
        default="projectile",
    ),
    "about": FixedCanvases(()),
}


def running_set(tab: str | None, subtab: str | None = None) -> frozenset[str]:
    """Canvas ids that should run while *tab* / *subtab* is active.

    Unknown names yield the empty set.  ``subtab=None`` on a selectable tab
    picks the group's default.
    """
    entry = TAB_CANVASES.get(tab or "")
    if entry is None:
        return frozenset()
    if isinstance(entry, FixedCanvases):
        return frozenset(entry.canvases)
    key = entry.default if subtab is None else subtab
    canvas = entry.options.get(key)
    return frozenset((canvas,)) if canvas else frozenset()


class VisibilityController:
    """Keeps exactly the visible canvases running."""

    def __init__(self) -> None:
        self._runners: dict[str, CanvasRunner] = {}
        self._lock = threading.Lock()
        self.active_tab: str | None = None
        self.active_subtab: str | None = None

    def register(self, canvas_id: str, runner: CanvasRunner) -> None:
        with self._lock:
            self._runners[canvas_id] = runner

    def runner(self, canvas_id: str) -> CanvasRunner:
        with self._lock:
            return self._runners[canvas_id]

    def canvas_ids(self) -> list[str]:
        with self._lock:
            return list(self._runners)

    def activate(self, tab: str | None, subtab: str | None = None) -> None:
        wanted = running_set(tab, subtab)
        with self._lock:
            self.active_tab = tab
            self.active_subtab = subtab
            # Stop first so two canvases of a group never run together.
            for cid, runner in self._runners.items():
                if cid not in wanted:
                    runner.set_running(False)
            for cid, runner in self._runners.items():
                if cid in wanted:
                    runner.set_running(True)
        logger.debug("activated tab=%s subtab=%s running=%s",
                     tab, subtab, sorted(wanted))

    def running_ids(self) -> frozenset[str]:
        with self._lock:
            return frozenset(cid for cid, r in self._runners.items() if r.running)
