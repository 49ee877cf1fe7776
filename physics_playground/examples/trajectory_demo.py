"""Projectile trajectory demo.

Launches the same shell at three angles, with and without air drag, and
plots the paths against the drag-free range formula.
"""

from __future__ import annotations

import matplotlib.pyplot as plt

from ..demos.projectile import LaunchParams, compute_trajectory, ideal_range
from ..visualization.renderer import SimulationRenderer


def main() -> None:
    launches = [
        LaunchParams(speed=25.0, angle=angle, drag=drag)
        for drag in (0.0, 0.05)
        for angle in (30.0, 45.0, 60.0)
    ]

    for p in launches:
        path = compute_trajectory(p)
        print(f"angle={p.angle:4.0f}°  drag={p.drag:.2f}  "
              f"range={path[-1].x:6.2f} m  "
              f"ideal={ideal_range(p.speed, p.angle, p.gravity):6.2f} m  "
              f"flight={path[-1].t:5.2f} s")

    renderer = SimulationRenderer()
    fig, axes = plt.subplots(1, 2, figsize=(16, 5))
    renderer.plot_trajectories(launches[:3], title="No drag", ax=axes[0])
    renderer.plot_trajectories(launches[3:], title="Drag k = 0.05", ax=axes[1])
    plt.tight_layout()
    plt.savefig("trajectory_demo.png", dpi=150)
    plt.show()


if __name__ == "__main__":
    main()
