"""Matplotlib-based offline plots and previews of the simulations."""

from __future__ import annotations

import math
from typing import Any, Sequence

import matplotlib.pyplot as plt
from matplotlib.animation import FuncAnimation

from ..demos.pendulum import PendulumSim
from ..demos.projectile import LaunchParams, ideal_range
from ..demos.rc_circuit import RCCircuitSim
from ..demos.wave import WaveInterferenceSim, intensity_field
from ..core.canvas import Surface
from ..simulation.runner import CanvasRunner
from .series import rc_curve_frame, trajectory_frame


class SimulationRenderer:
    """Static plots and animations for the simulation demos."""

    def plot_trajectories(
        self,
        launches: Sequence[LaunchParams],
        *,
        title: str = "Projectile trajectories",
        ax: Any = None,
    ) -> Any:
        """Overlay the trajectories of several launches."""
        if ax is None:
            _fig, ax = plt.subplots(1, 1, figsize=(9, 5))

        for p in launches:
            df = trajectory_frame(p)
            ax.plot(df["x"], df["y"], label=f"v={p.speed:g} θ={p.angle:g}° k={p.drag:g}")
            ideal = ideal_range(p.speed, p.angle, p.gravity)
            ax.axvline(ideal, color="gray", linestyle=":", linewidth=0.8)

        ax.set_xlabel("x (m)")
        ax.set_ylabel("y (m)")
        ax.set_ylim(bottom=0)
        ax.legend(loc="upper right", fontsize=8)
        ax.set_title(title)
        return ax

    def plot_rc_curve(self, rc: RCCircuitSim, *, ax: Any = None) -> Any:
        if ax is None:
            _fig, ax = plt.subplots(1, 1, figsize=(8, 4))

        df = rc_curve_frame(rc)
        ax.plot(df["t"], df["charging"], label="charging")
        ax.plot(df["t"], df["discharging"], label="discharging")
        for n in range(1, 5):
            ax.axvline(n * rc.tau, color="lightgray", linewidth=0.5)
        ax.set_xlabel("t (s)")
        ax.set_ylabel("Vc (V)")
        ax.set_title(f"RC circuit, τ = {rc.tau:.2f} s")
        ax.legend(loc="right")
        return ax

    def plot_wave_field(self, wave: WaveInterferenceSim, t: float = 0.0, *,
                        cmap: str = "magma", ax: Any = None) -> Any:
        """Snapshot of the interference field at time *t*.

        The simulation itself is left untouched.
        """
        if ax is None:
            _fig, ax = plt.subplots(1, 1, figsize=(8, 5))

        xs, ys = wave.grid()
        field = intensity_field(xs, ys, wave.sources, wave.wavelength, wave.speed, t)
        ax.imshow(field, cmap=cmap, vmin=0.0, vmax=1.0,
                  extent=(0, wave.width, wave.height, 0))
        sx, sy = zip(*wave.sources)
        ax.scatter(sx, sy, c="white", s=20)
        ax.set_title(f"Interference, λ={wave.wavelength:g}px, d={wave.spacing:g}px")
        ax.set_aspect("equal")
        return ax

    def animate_pendulum(
        self,
        pendulum: PendulumSim,
        num_frames: int = 300,
        *,
        interval_ms: int = 33,
    ) -> FuncAnimation:
        """Animate *pendulum* by driving it through a :class:`CanvasRunner`.

        The runner is clocked by the animation's frame counter, so the
        preview shows the same clamped-dt stepping as the site.
        """
        fig, ax = plt.subplots(1, 1, figsize=(5, 5))
        reach = pendulum.length * 1.15
        ax.set_xlim(-reach, reach)
        ax.set_ylim(-reach, reach * 0.3)
        ax.set_aspect("equal")
        rod, = ax.plot([], [], color="black", linewidth=2)
        bob, = ax.plot([], [], "o", color="#7c5cfc", markersize=14)
        title_obj = ax.set_title("Pendulum")

        frame_clock = {"t": 0.0}
        runner = CanvasRunner(
            Surface(1, 1),
            lambda surface, ctx, dt: pendulum.update(dt),
            clock=lambda: frame_clock["t"],
            name="pendulum-preview",
        )
        runner.set_running(True)

        def update(frame: int) -> Any:
            frame_clock["t"] += interval_ms / 1000.0
            runner.tick()
            x = pendulum.length * math.sin(pendulum.theta)
            y = -pendulum.length * math.cos(pendulum.theta)
            rod.set_data([0.0, x], [0.0, y])
            bob.set_data([x], [y])
            title_obj.set_text(f"Pendulum: θ = {math.degrees(pendulum.theta):.1f}°")
            return (rod, bob, title_obj)

        return FuncAnimation(fig, update, frames=num_frames,
                             interval=interval_ms, blit=False)
