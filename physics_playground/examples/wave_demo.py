"""Wave interference and pendulum preview demo.

Plots the two-source interference field at three moments of one period,
then opens an animated preview of a lightly damped pendulum.
"""

from __future__ import annotations

import math

import matplotlib.pyplot as plt

from ..demos.pendulum import PendulumSim
from ..demos.wave import WaveInterferenceSim, wave_numbers
from ..visualization.renderer import SimulationRenderer


def main() -> None:
    renderer = SimulationRenderer()
    wave = WaveInterferenceSim(wavelength=30.0, spacing=90.0, speed=60.0)
    _k, omega = wave_numbers(wave.wavelength, wave.speed)
    period = 2.0 * math.pi / omega

    fig, axes = plt.subplots(1, 3, figsize=(18, 4))
    for ax, frac in zip(axes, (0.0, 0.25, 0.5)):
        renderer.plot_wave_field(wave, frac * period, ax=ax)
        ax.set_xlabel(f"t = {frac:g} T")
    plt.tight_layout()
    plt.savefig("wave_demo.png", dpi=150)

    anim = renderer.animate_pendulum(PendulumSim(damping=0.05), num_frames=300)
    # the animation stops if its object is garbage collected
    plt.show()
    del anim


if __name__ == "__main__":
    main()
