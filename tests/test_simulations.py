"""Tests for the pendulum, RC circuit, wave and home backdrop demos."""

from __future__ import annotations

import math

import numpy as np
import pytest

from physics_playground.core.canvas import Surface
from physics_playground.demos.ambient import LINK_RANGE, AmbientField
from physics_playground.demos.pendulum import (
    INITIAL_ANGLE, KICK, PendulumSim, angular_acceleration,
)
from physics_playground.demos.rc_circuit import RCCircuitSim, capacitor_voltage
from physics_playground.demos.wave import (
    WaveInterferenceSim, colorize, intensity_at, intensity_field,
)
from physics_playground.demos.projectile import LaunchParams
from physics_playground.visualization.series import (
    pendulum_trace_frame, rc_curve_frame, trajectory_frame,
)


def _surface(demo):
    surface = Surface(demo.width, demo.height)
    surface.apply_size()
    return surface


class TestPendulum:
    def test_acceleration(self):
        assert angular_acceleration(0.0, 0.0, 1.0, 9.81, 0.1) == 0.0
        assert angular_acceleration(0.5, 0.0, 2.0, 9.81, 0.0) == pytest.approx(
            -(9.81 / 2.0) * math.sin(0.5))
        assert angular_acceleration(0.0, 2.0, 1.0, 9.81, 0.3) == pytest.approx(-0.6)

    def test_rest_stays_at_rest(self):
        p = PendulumSim()
        p.theta = 0.0
        for _ in range(100):
            p.update(1 / 60)
        assert p.theta == 0.0
        assert p.omega == 0.0

    def test_damping_drains_energy(self):
        p = PendulumSim(damping=0.3)
        e0 = p.energy
        for _ in range(600):
            p.update(1 / 60)
        assert p.energy < 0.5 * e0

    def test_undamped_energy_is_roughly_conserved(self):
        p = PendulumSim(damping=0.0)
        e0 = p.energy
        for _ in range(600):
            p.update(1 / 60)
        assert p.energy == pytest.approx(e0, rel=0.05)

    def test_small_angle_period(self):
        p = PendulumSim(length=2.0, gravity=9.81)
        assert p.small_angle_period == pytest.approx(2 * math.pi * math.sqrt(2.0 / 9.81))

    def test_kick_and_reset(self):
        p = PendulumSim()
        p.panel.click("kick")
        assert p.omega == pytest.approx(KICK)
        p.update(0.05)
        p.panel.click("reset")
        assert (p.theta, p.omega) == (INITIAL_ANGLE, 0.0)

    def test_sliders(self):
        p = PendulumSim()
        p.panel.set_value("length", 2.5)
        p.panel.set_value("damping", 5.0)
        assert p.length == 2.5
        assert p.damping == 1.0

    def test_badges(self):
        p = PendulumSim()
        surface = _surface(p)
        p.draw(surface, surface.context, 0.0)
        texts = p.panel.badge_texts()
        assert texts["angle"] == f"{math.degrees(INITIAL_ANGLE):.1f}°"


class TestRCCircuit:
    def test_initial_values(self):
        assert capacitor_voltage(0.0, 1e3, 1e-3, 5.0, True) == 0.0
        assert capacitor_voltage(0.0, 1e3, 1e-3, 5.0, False) == 5.0

    def test_one_time_constant(self):
        v = capacitor_voltage(1.0, 1e3, 1e-3, 5.0, True)
        assert v == pytest.approx(5.0 * (1 - math.exp(-1)))

    def test_limits(self):
        assert capacitor_voltage(100.0, 1e3, 1e-3, 5.0, True) == pytest.approx(5.0)
        assert capacitor_voltage(100.0, 1e3, 1e-3, 5.0, False) == pytest.approx(0.0)

    def test_tau(self):
        rc = RCCircuitSim(resistance_kohm=10, capacitance_uf=100)
        assert rc.tau == pytest.approx(1.0)

    def test_charging_over_time(self):
        rc = RCCircuitSim()
        for _ in range(20):
            rc.update(0.05)
        assert rc.elapsed == pytest.approx(1.0)
        assert rc.voltage() == pytest.approx(5.0 * (1 - math.exp(-1)))

    def test_toggle(self):
        rc = RCCircuitSim()
        rc.update(0.5)
        assert rc.panel.buttons["toggle"].label == "Discharge"
        rc.panel.click("toggle")
        assert not rc.charging
        assert rc.elapsed == 0.0
        assert rc.voltage() == pytest.approx(rc.supply)
        assert rc.panel.buttons["toggle"].label == "Charge"

    def test_reset(self):
        rc = RCCircuitSim()
        rc.update(0.5)
        rc.panel.click("reset")
        assert rc.elapsed == 0.0
        assert rc.charging

    def test_sliders_change_tau(self):
        rc = RCCircuitSim()
        rc.panel.set_value("resistance", 20)
        assert rc.tau == pytest.approx(2.0)

    def test_draw(self):
        rc = RCCircuitSim()
        surface = _surface(rc)
        rc.draw(surface, surface.context, 0.02)
        assert rc.panel.badge_texts()["mode"] == "charging"
        assert rc.panel.badge_texts()["tau"] == "1.00 s"


class TestWaveInterference:
    SOURCES = ((100.0, 100.0), (200.0, 100.0))

    def test_equidistant_point_is_maximal(self):
        assert intensity_at(150.0, 300.0, self.SOURCES, 30.0, 60.0, 0.0) == pytest.approx(1.0)

    def test_half_wavelength_difference_is_dark(self):
        # On the source axis, r1 - r2 = 2 * offset
        x = 150.0 + 30.0 / 4
        assert intensity_at(x, 100.0, self.SOURCES, 30.0, 60.0, 0.0) == pytest.approx(0.0, abs=1e-12)

    def test_field_shape_and_range(self):
        xs = np.linspace(0, 300, 31)
        ys = np.linspace(0, 200, 21)
        field = intensity_field(xs, ys, self.SOURCES, 30.0, 60.0, 0.7)
        assert field.shape == (21, 31)
        assert field.min() >= 0.0
        assert field.max() <= 1.0

    def test_colorize(self):
        img = colorize(np.array([[0.0, 1.0]]))
        assert img.dtype == np.uint8
        assert img.shape == (1, 2, 3)
        assert tuple(img[0, 0]) == (10, 10, 30)
        assert tuple(img[0, 1]) == (124, 200, 252)

    def test_grid_follows_step(self):
        sim = WaveInterferenceSim(800.0, 480.0, step=4)
        xs, ys = sim.grid()
        assert (len(xs), len(ys)) == (200, 120)
        sim.update(0.02)
        assert sim.field.shape == (120, 200)

    def test_sources_are_centred(self):
        sim = WaveInterferenceSim(800.0, 480.0, spacing=80.0)
        assert sim.sources == ((360.0, 240.0), (440.0, 240.0))
        sim.panel.set_value("spacing", 100)
        assert sim.sources == ((350.0, 240.0), (450.0, 240.0))

    def test_draw_blits_image(self):
        sim = WaveInterferenceSim(200.0, 100.0, step=5)
        surface = _surface(sim)
        sim.draw(surface, surface.context, 0.02)
        fig = surface.context.to_figure()
        assert len(fig.data) == 1
        assert fig.data[0].type == "image"


class TestAmbientField:
    def test_particles_are_seeded(self):
        a = AmbientField(seed=5)
        b = AmbientField(seed=5)
        assert [p.position for p in a.particles] == [p.position for p in b.particles]
        assert len(a.particles) == 36

    def test_particles_stay_inside(self):
        field = AmbientField(400.0, 200.0, seed=2, count=20)
        for _ in range(500):
            field.update(0.05)
        for p in field.particles:
            assert 0.0 <= p.position.x <= 400.0
            assert 0.0 <= p.position.y <= 200.0

    def test_links_are_short(self):
        field = AmbientField(seed=3)
        links = field.links()
        assert all(d < LINK_RANGE for _, _, d in links)
        assert all(i < j for i, j, _ in links)

    def test_resize_rescatters(self):
        field = AmbientField(seed=3)
        surface = Surface(300.0, 120.0)
        surface.apply_size()
        field.on_resize(surface, surface.context)
        for p in field.particles:
            assert p.position.x <= 300.0
            assert p.position.y <= 120.0


class TestSeries:
    def test_rc_curve_frame(self):
        df = rc_curve_frame(RCCircuitSim(), samples=50)
        assert list(df.columns) == ["t", "charging", "discharging"]
        assert len(df) == 50
        assert df["charging"].iloc[0] == 0.0
        assert df["discharging"].iloc[0] == pytest.approx(5.0)
        assert df["t"].iloc[-1] == pytest.approx(5.0)

    def test_pendulum_trace_frame(self):
        df = pendulum_trace_frame(PendulumSim(), duration=1.0, dt=0.1)
        assert list(df.columns) == ["t", "theta", "omega", "energy"]
        assert len(df) == 10
        assert df["theta"].iloc[0] == INITIAL_ANGLE

    def test_trajectory_frame(self):
        df = trajectory_frame(LaunchParams())
        assert df["y"].iloc[-1] == 0.0
        assert df["x"].is_monotonic_increasing
