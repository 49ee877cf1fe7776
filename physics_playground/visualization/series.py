"""Sampled time series of the simulations as pandas DataFrames.

Shared by the matplotlib renderer and the Dash scope charts.
"""

from __future__ import annotations

import numpy as np
import pandas as pd

from ..demos.pendulum import PendulumSim
from ..demos.projectile import LaunchParams, compute_trajectory
from ..demos.rc_circuit import RCCircuitSim, capacitor_voltage


def rc_curve_frame(rc: RCCircuitSim, taus: float = 5.0, samples: int = 200) -> pd.DataFrame:
    """Charge and discharge curves of *rc* over ``taus`` time constants."""
    t = np.linspace(0.0, taus * rc.tau, samples)
    r = rc.resistance_kohm * 1e3
    c = rc.capacitance_uf * 1e-6
    return pd.DataFrame({
        "t": t,
        "charging": [capacitor_voltage(x, r, c, rc.supply, True) for x in t],
        "discharging": [capacitor_voltage(x, r, c, rc.supply, False) for x in t],
    })


def pendulum_trace_frame(pendulum: PendulumSim, duration: float = 10.0,
                         dt: float = 1.0 / 60.0) -> pd.DataFrame:
    """Angle, angular velocity and energy sampled by stepping *pendulum*.

    The pendulum is advanced in place.
    """
    rows = []
    t = 0.0
    for _ in range(int(duration / dt)):
        rows.append((t, pendulum.theta, pendulum.omega, pendulum.energy))
        pendulum.update(dt)
        t += dt
    return pd.DataFrame(rows, columns=["t", "theta", "omega", "energy"])


def trajectory_frame(params: LaunchParams) -> pd.DataFrame:
    path = compute_trajectory(params)
    return pd.DataFrame({
        "t": [s.t for s in path],
        "x": [s.x for s in path],
        "y": [s.y for s in path],
    })
