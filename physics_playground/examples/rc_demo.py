"""RC circuit and pendulum demo.

Plots the capacitor charge/discharge curves for two time constants and
the energy decay of a damped pendulum stepped at 60 fps.
"""

from __future__ import annotations

import matplotlib.pyplot as plt

from ..demos.pendulum import PendulumSim
from ..demos.rc_circuit import RCCircuitSim
from ..visualization.renderer import SimulationRenderer
from ..visualization.series import pendulum_trace_frame


def main() -> None:
    renderer = SimulationRenderer()
    fig, axes = plt.subplots(1, 3, figsize=(18, 5))

    renderer.plot_rc_curve(RCCircuitSim(resistance_kohm=10, capacitance_uf=100), ax=axes[0])
    renderer.plot_rc_curve(RCCircuitSim(resistance_kohm=47, capacitance_uf=100), ax=axes[1])

    trace = pendulum_trace_frame(PendulumSim(damping=0.2), duration=15.0)
    axes[2].plot(trace["t"], trace["energy"])
    axes[2].set_xlabel("t (s)")
    axes[2].set_ylabel("E / m (J/kg)")
    axes[2].set_title("Damped pendulum energy")

    plt.tight_layout()
    plt.savefig("rc_demo.png", dpi=150)
    plt.show()


if __name__ == "__main__":
    main()
